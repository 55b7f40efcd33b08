"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from google.protobuf import descriptor_pb2
from rest_filter_codegen.cli import main

UNRESOLVED_REF_OPENAPI = """
openapi: 3.0.3
paths:
  /api/v1/fct_block:
    get:
      operationId: FctBlockService_List
      parameters:
        - $ref: "#/components/parameters/Missing"
"""


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["generate", "--openapi", "openapi.yaml", "--output", "/tmp/out.py"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--proto-path" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["generate", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "--bogus" in captured.err
    assert "Traceback" not in captured.err


def test_unreadable_input_returns_exit_status_one(tmp_path: Path, capsys) -> None:
    exit_code = main(
        [
            "generate",
            "--openapi",
            str(tmp_path / "missing.yaml"),
            "--proto-path",
            str(tmp_path),
            "--output",
            str(tmp_path / "generated.py"),
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "missing.yaml" in captured.err
    assert "Traceback" not in captured.err
    assert not (tmp_path / "generated.py").exists()


def test_unresolved_parameter_reference_returns_exit_status_one(
    tmp_path: Path, capsys, monkeypatch
) -> None:
    monkeypatch.chdir(tmp_path)
    openapi_path = tmp_path / "openapi.yaml"
    openapi_path.write_text(UNRESOLVED_REF_OPENAPI, encoding="utf-8")
    descriptor_path = tmp_path / "schema.pb"
    descriptor_path.write_bytes(descriptor_pb2.FileDescriptorSet().SerializeToString())
    output_path = tmp_path / "generated.py"

    exit_code = main(
        [
            "generate",
            "--openapi",
            str(openapi_path),
            "--proto-path",
            str(descriptor_path),
            "--output",
            str(output_path),
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "#/components/parameters/Missing" in captured.err
    assert "Traceback" not in captured.err
    assert not output_path.exists()


def test_generate_config_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "config.yaml"
    output_path.write_text("existing", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(output_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err


def test_version_option_exits_cleanly(capsys) -> None:
    exit_code = main(["--version"])
    captured = capsys.readouterr()

    assert exit_code == 0
    assert "version" in captured.out
