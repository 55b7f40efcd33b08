"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from rest_filter_codegen.configuration import (
    DEFAULT_CONFIG_FILENAME,
    write_placeholder_configuration,
)
from rest_filter_codegen.run_execution import (
    GenerationRequest,
    GenerationRunError,
    NormalizationRequest,
    execute_generation_run,
    execute_normalization_run,
)

PACKAGE_LOGGER = "rest_filter_codegen"


class CliError(Exception):
    """Custom CLI error."""


class ClickEchoHandler(logging.Handler):
    """Route log records through click so they follow the active stderr stream."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except (OSError, ValueError):
            self.handleError(record)


def configure_logging(verbose: bool) -> None:
    """Attach one stderr handler to the package logger.

    Warnings are echoed from the run outcome, so the handler only shows them when verbose.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if verbose:
        package_logger.setLevel(logging.DEBUG)
    for handler in list(package_logger.handlers):
        if isinstance(handler, ClickEchoHandler):
            package_logger.removeHandler(handler)
    handler = ClickEchoHandler()
    handler.setLevel(logging.DEBUG if verbose else logging.ERROR)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="rest-filter-codegen")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Log debug diagnostics to stderr.",
)
def cli(verbose: bool) -> None:
    """Schema-driven REST filter handler generator."""
    configure_logging(verbose)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML generator configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML generator configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="generate")
@click.option(
    "--openapi",
    "openapi_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the REST description (OpenAPI YAML/JSON)",
)
@click.option(
    "--proto-path",
    "proto_path",
    required=True,
    type=click.Path(path_type=str),
    help="Descriptor set file, or directory holding *.pb descriptor sets",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the generated Python module",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=f"Path to the YAML generator configuration (default: {DEFAULT_CONFIG_FILENAME})",
)
@click.option(
    "--base-path",
    "base_path",
    required=False,
    help="Path prefix stripped from REST paths when deriving resource names",
)
def generate(
    openapi_path: str,
    proto_path: str,
    output_path: str,
    config_path: str | None,
    base_path: str | None,
) -> None:
    """Generate filter builders and endpoint handlers."""
    try:
        outcome = execute_generation_run(
            GenerationRequest(
                openapi_path=openapi_path,
                proto_path=proto_path,
                output_path=output_path,
                config_path=config_path,
                base_path=base_path,
            )
        )
    except GenerationRunError as exc:
        raise CliError(str(exc)) from exc
    for warning in outcome.warnings:
        click.echo(f"warning: {warning}", err=True)
    click.echo(str(outcome.output_path))
    click.echo(
        f"generated {outcome.line_count} lines "
        f"({outcome.endpoint_count} endpoints, {outcome.filter_type_count} filter types)"
    )


@cli.command(name="normalize")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the REST description to normalize",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the normalized REST description to write",
)
@click.option(
    "--proto-path",
    "proto_path",
    required=False,
    type=click.Path(path_type=str),
    help="Descriptor set supplying wrapper kinds, descriptions and annotations",
)
def normalize(input_path: str, output_path: str, proto_path: str | None) -> None:
    """Flatten filter parameters and align the REST description with the schema."""
    try:
        outcome = execute_normalization_run(
            NormalizationRequest(
                input_path=input_path,
                output_path=output_path,
                proto_path=proto_path,
            )
        )
    except GenerationRunError as exc:
        raise CliError(str(exc)) from exc
    stats = outcome.stats
    click.echo(str(outcome.output_path))
    click.echo(f"flattened {stats.parameters_flattened} parameters")
    click.echo(f"renamed {stats.schemas_renamed} schemas")
    click.echo(f"fixed {stats.types_fixed} wrapper types")
    click.echo(f"added {stats.annotations_added} annotation extensions")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="rest-filter-codegen", standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
