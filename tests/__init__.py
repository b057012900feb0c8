"""
Test suite for shamir-verify

Contains:
- tests/unit/          : Unit tests for arithmetic, domain models, contracts, search and CLI
"""
