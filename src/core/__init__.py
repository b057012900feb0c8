"""
Core domain models, mathematical primitives, and contracts.

This module contains the foundational building blocks that are independent
of input/output concerns (documents, command line, formatting).
"""
