"""Tests for generation and normalization use-case services."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest
import yaml
from google.protobuf import descriptor_pb2
from rest_filter_codegen.run_execution import (
    GenerationRequest,
    GenerationRunError,
    NormalizationRequest,
    execute_generation_run,
    execute_normalization_run,
)

FieldProto = descriptor_pb2.FieldDescriptorProto

OPENAPI = """
openapi: 3.0.3
paths:
  /{prefix}/fct_block:
    get:
      operationId: FctBlockService_List
      parameters:
        - {{name: slot.gte, in: query, schema: {{type: integer}}}}
        - {{name: slot.lte, in: query, schema: {{type: integer}}}}
        - {{name: block_root_eq, in: query, schema: {{type: string}}}}
        - {{name: page_size, in: query, schema: {{type: integer}}}}
        - {{name: unknown_flag, in: query, schema: {{type: boolean}}}}
  /{prefix}/fct_block/{{slot}}:
    get:
      operationId: FctBlockService_Get
      parameters:
        - {{name: slot, in: path, required: true, schema: {{type: integer}}}}
components:
  schemas:
    FctBlock:
      properties:
        slot: {{type: integer}}
        block_root: {{type: string}}
"""


def _write_descriptor_set(path: Path) -> Path:
    file_proto = descriptor_pb2.FileDescriptorProto(name="fct_block.proto", package="cbt")
    request = file_proto.message_type.add(name="ListFctBlockRequest")
    for number, (name, type_name) in enumerate(
        (("slot", ".cbt.UInt32Filter"), ("block_root", ".cbt.StringFilter")), start=1
    ):
        request.field.add(
            name=name, number=number, type=FieldProto.TYPE_MESSAGE, type_name=type_name
        )
    request.field.add(name="page_size", number=3, type=FieldProto.TYPE_UINT32)
    get_request = file_proto.message_type.add(name="GetFctBlockRequest")
    get_request.field.add(name="slot", number=1, type=FieldProto.TYPE_UINT32)
    service = file_proto.service.add(name="FctBlockService")
    service.method.add(
        name="List", input_type=".cbt.ListFctBlockRequest", output_type=".cbt.ListFctBlockResponse"
    )
    service.method.add(
        name="Get", input_type=".cbt.GetFctBlockRequest", output_type=".cbt.GetFctBlockResponse"
    )
    path.write_bytes(descriptor_pb2.FileDescriptorSet(file=[file_proto]).SerializeToString())
    return path


def _write_inputs(tmp_path: Path, prefix: str = "api/v1") -> tuple[Path, Path]:
    openapi_path = tmp_path / "openapi.yaml"
    openapi_path.write_text(OPENAPI.format(prefix=prefix), encoding="utf-8")
    return openapi_path, _write_descriptor_set(tmp_path / "schema.pb")


@pytest.fixture(autouse=True)
def _isolated_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def test_generation_run_writes_module_and_reports_counts(tmp_path: Path) -> None:
    openapi_path, proto_path = _write_inputs(tmp_path)
    output_path = tmp_path / "out" / "generated.py"

    outcome = execute_generation_run(
        GenerationRequest(
            openapi_path=str(openapi_path),
            proto_path=str(proto_path),
            output_path=str(output_path),
        )
    )

    source = output_path.read_text(encoding="utf-8")
    assert outcome.output_path == output_path.resolve()
    assert outcome.line_count == len(source.splitlines())
    assert outcome.endpoint_count == 2
    assert outcome.filter_type_count == 2
    assert len(outcome.warnings) == 1
    assert "unknown_flag" in outcome.warnings[0]
    ast.parse(source)
    assert (
        "def fct_block_service_list(db, params: handlers.FctBlockServiceListParams, "
        "*query_options):"
    ) in source
    assert "def fct_block_service_get(db, slot: int, *query_options):" in source


def test_generation_run_uses_configuration_modules(tmp_path: Path) -> None:
    openapi_path, proto_path = _write_inputs(tmp_path, prefix="v2")
    config_path = tmp_path / "generator.yaml"
    config_path.write_text(
        "api:\n  base_path: /v2\ngeneration:\n  schema_module: xatu.pb\n"
        "  default_page_size: 10\n",
        encoding="utf-8",
    )
    output_path = tmp_path / "generated.py"

    outcome = execute_generation_run(
        GenerationRequest(
            openapi_path=str(openapi_path),
            proto_path=str(proto_path),
            output_path=str(output_path),
            config_path=str(config_path),
        )
    )

    source = output_path.read_text(encoding="utf-8")
    assert outcome.endpoint_count == 2
    assert "import xatu.pb as pb" in source
    assert "pb.ListFctBlockRequest(page_size=10)" in source
    assert "queries.build_list_fct_block_query" in source


def test_explicit_base_path_overrides_configuration(tmp_path: Path) -> None:
    openapi_path, proto_path = _write_inputs(tmp_path, prefix="internal")
    config_path = tmp_path / "generator.yaml"
    config_path.write_text("api:\n  base_path: /v2\n", encoding="utf-8")

    outcome = execute_generation_run(
        GenerationRequest(
            openapi_path=str(openapi_path),
            proto_path=str(proto_path),
            output_path=str(tmp_path / "generated.py"),
            config_path=str(config_path),
            base_path="/internal",
        )
    )

    assert not any("no List method" in warning for warning in outcome.warnings)


@pytest.mark.parametrize("broken", ["openapi", "proto", "config"])
def test_generation_run_fails_without_writing_output(tmp_path: Path, broken: str) -> None:
    openapi_path, proto_path = _write_inputs(tmp_path)
    config_path = None
    if broken == "openapi":
        openapi_path = tmp_path / "missing.yaml"
    elif broken == "proto":
        proto_path.write_bytes(b"invalid protobuf data")
    else:
        config_path = str(tmp_path / "missing-config.yaml")
    output_path = tmp_path / "generated.py"

    with pytest.raises(GenerationRunError):
        execute_generation_run(
            GenerationRequest(
                openapi_path=str(openapi_path),
                proto_path=str(proto_path),
                output_path=str(output_path),
                config_path=config_path,
            )
        )

    assert not output_path.exists()


def test_normalization_run_writes_yaml(tmp_path: Path) -> None:
    openapi_path, proto_path = _write_inputs(tmp_path)
    output_path = tmp_path / "normalized" / "openapi.yaml"

    outcome = execute_normalization_run(
        NormalizationRequest(
            input_path=str(openapi_path),
            output_path=str(output_path),
            proto_path=str(proto_path),
        )
    )

    assert outcome.output_path == output_path.resolve()
    assert outcome.stats.parameters_flattened == 2
    normalized = yaml.safe_load(output_path.read_text(encoding="utf-8"))
    names = [
        parameter["name"]
        for parameter in normalized["paths"]["/api/v1/fct_block"]["get"]["parameters"]
    ]
    assert names[:2] == ["slot_gte", "slot_lte"]
    assert list(normalized) == ["openapi", "paths", "components"]


def test_normalization_run_without_schema(tmp_path: Path) -> None:
    openapi_path, _ = _write_inputs(tmp_path)

    outcome = execute_normalization_run(
        NormalizationRequest(input_path=str(openapi_path), output_path=str(tmp_path / "o.yaml"))
    )

    assert outcome.stats.parameters_flattened == 2
    assert outcome.stats.annotations_added == 0


def test_normalization_run_reports_unreadable_input(tmp_path: Path) -> None:
    with pytest.raises(GenerationRunError, match="Failed to read REST description"):
        execute_normalization_run(
            NormalizationRequest(
                input_path=str(tmp_path / "missing.yaml"),
                output_path=str(tmp_path / "o.yaml"),
            )
        )
