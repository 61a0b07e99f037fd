from __future__ import annotations

"""
Perimeter CLI: validate JSON documents against YAML contracts.

Thin layer: parse args → load contracts → call engine → print via reporters.
"""

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

import typer

from perimeter.config.loader import ContractLoader
from perimeter.config.settings import ENV_LOG_LEVEL
from perimeter.engine.validator import validate as validate_value
from perimeter.errors import ContractFileError
from perimeter.logging import configure_logging, get_logger, log_exception
from perimeter.reporters.rich_reporter import render_violations, report_failure, report_success
from perimeter.version import VERSION

app = typer.Typer(help="Perimeter CLI: runtime contract validation")

_logger = get_logger(__name__)

# Exit codes (stable for CI/CD)
EXIT_SUCCESS = 0
EXIT_VALIDATION_FAILED = 1
EXIT_CONFIG_ERROR = 2
EXIT_RUNTIME_ERROR = 3


class OutputFormat(str, Enum):
    RICH = "rich"
    JSON = "json"


def _print_version(value: Optional[bool]) -> None:
    # Runs while options are parsed, so it works without a subcommand
    if value:
        typer.echo(f"perimeter {VERSION}")
        raise typer.Exit(code=0)


@app.callback()
def _main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show the Perimeter version and exit.",
        is_eager=True,
        callback=_print_version,
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (defaults to PERIMETER_LOG_LEVEL or WARNING)."
    ),
) -> None:
    if log_level or os.getenv(ENV_LOG_LEVEL):
        configure_logging(log_level)


def _read_data(data: str) -> Any:
    if data == "-":
        return json.load(sys.stdin)
    with open(data, "r", encoding="utf-8") as fh:
        return json.load(fh)


@app.command("validate")
def validate(
    contracts: str = typer.Argument(..., help="Path to the contracts YAML file."),
    data: str = typer.Argument(..., help="Path to a JSON document, or '-' for stdin."),
    contract: str = typer.Option(..., "--contract", "-c", help="Name of the contract to check."),
    output_format: OutputFormat = typer.Option(
        OutputFormat.RICH, "--output-format", "-o", help="Output format."
    ),
) -> None:
    """
    Validate a JSON document against one contract.

    Exit codes: 0 passed, 1 violations, 2 contract/config error, 3 unreadable data.
    """
    try:
        registry = ContractLoader.from_path(contracts)
    except ContractFileError as e:
        report_failure(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    if contract not in registry:
        report_failure(f"Contract '{contract}' not found in {contracts}")
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    try:
        value = _read_data(data)
    except (OSError, ValueError) as e:
        log_exception(_logger, f"Failed to read data from {data}", e)
        report_failure(f"Cannot read data: {e}")
        raise typer.Exit(code=EXIT_RUNTIME_ERROR)

    result = validate_value(registry, contract, value)

    if output_format == OutputFormat.JSON:
        typer.echo(result.to_json(indent=2))
    elif result.passed:
        report_success(f"{contract}: passed")
    else:
        render_violations(result.violations)

    raise typer.Exit(code=EXIT_SUCCESS if result.passed else EXIT_VALIDATION_FAILED)


@app.command("contracts")
def list_contracts(
    contracts: str = typer.Argument(..., help="Path to the contracts YAML file."),
) -> None:
    """List the contracts declared in a YAML file."""
    try:
        registry = ContractLoader.from_path(contracts)
    except ContractFileError as e:
        report_failure(str(e))
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    for c in registry:
        required = sum(1 for f in c.fields if f.required)
        typer.echo(f"{c.name}: {len(c.fields)} fields ({required} required)")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
