"""shamir-verify — командная строка для восстановления секретов.

Читает документ с запросами из файла (или stdin), печатает по строке на запрос.
Код возврата 0, если найден хотя бы один секрет, иначе 1.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from src.reconstruction.batch import process_batch
from src.reconstruction.config import DEFAULT_COEFFICIENT_POLICY, CoefficientPolicy, SearchConfig
from src.reconstruction.formatting import OutputFormat, format_results
from src.reconstruction.search import SubsetSearchEngine

app = typer.Typer(add_completion=False, help="Reconstruct threshold secrets from possibly forged shares.")

PACKAGE_LOGGER = "src"

_console_handler: Optional[logging.Handler] = None


def configure_logging(verbosity: int) -> None:
    """Handler на stderr для логгеров пакета: 0 → ERROR, 1 → INFO, 2+ → DEBUG.

    Повторный вызов заменяет ранее установленный handler.
    """
    global _console_handler

    level = logging.ERROR
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _console_handler is not None:
        package_logger.removeHandler(_console_handler)

    _console_handler = logging.StreamHandler(sys.stderr)
    _console_handler.setLevel(level)
    _console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(_console_handler)
    package_logger.setLevel(level)


@app.command()
def verify(
    input_path: Optional[Path] = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Request document (JSON). Reads stdin when omitted.",
    ),
    policy: CoefficientPolicy = typer.Option(
        DEFAULT_COEFFICIENT_POLICY,
        "--policy",
        case_sensitive=False,
        help="Which integer coefficients mark an authentic subset.",
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", min=1, help="Worker processes for subset evaluation."
    ),
    max_combinations: Optional[int] = typer.Option(
        None, "--max-combinations", min=1, help="Refuse requests with more subsets than this."
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT, "--format", case_sensitive=False, help="Output format."
    ),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase log verbosity."),
) -> None:
    """Reconstruct the secret of every request in the document."""
    configure_logging(verbose)

    try:
        if input_path is None:
            text = sys.stdin.read()
        else:
            text = input_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        typer.echo(f"Input is not valid UTF-8: {e}", err=True)
        raise typer.Exit(code=1)

    if not text.strip():
        typer.echo("No input provided", err=True)
        raise typer.Exit(code=1)

    config = SearchConfig(
        coefficient_policy=policy,
        max_workers=workers,
        max_combinations=max_combinations,
    )
    results = process_batch(text, SubsetSearchEngine(config))
    if not results:
        typer.echo("No JSON objects found in input", err=True)
        raise typer.Exit(code=1)

    for line in format_results(results, output_format):
        typer.echo(line)

    raise typer.Exit(code=0 if any(r.found for r in results) else 1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
