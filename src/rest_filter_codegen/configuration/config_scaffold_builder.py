"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Generator configuration for rest-filter-codegen.
# Every key is optional; remove a line to fall back to its default.

api:
  # Prefix stripped from REST paths before the resource name is read.
  # The --base-path flag of the generate command takes precedence.
  base_path: "/api/v1"

generation:
  # Import path of the compiled schema message classes (bound as `pb`).
  schema_module: "clickhouse_pb2"
  # Import path of the data-access query builders (bound as `queries`).
  query_module: "queries"
  # Import path of the REST params and response models (bound as `handlers`).
  handlers_module: "handlers"
  # Page size applied by List handlers when the request leaves it unset.
  default_page_size: 100
"""


def build_placeholder_configuration() -> str:
    """Build a YAML generator configuration with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
