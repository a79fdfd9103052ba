"""Options scaffold builder tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from proto_openapi.configuration import (
    KNOWN_OPTION_KEYS,
    GenerationOptions,
    build_options,
    build_options_scaffold,
    write_options_scaffold,
)


def test_scaffold_lists_every_option() -> None:
    scaffold = build_options_scaffold()

    assert "Generation options for proto-openapi" in scaffold
    for key in KNOWN_OPTION_KEYS:
        assert f"{key}:" in scaffold


def test_scaffold_values_are_the_defaults() -> None:
    parsed = yaml.safe_load(build_options_scaffold())

    assert build_options(parsed) == GenerationOptions()


def test_write_options_scaffold_writes_file(tmp_path: Path) -> None:
    output_path = tmp_path / "openapi-options.yaml"

    written_path = write_options_scaffold(output_path)

    assert written_path == output_path.resolve()
    assert "wildcard_body_dedup: false" in output_path.read_text(encoding="utf-8")


def test_write_options_scaffold_fails_when_file_exists(tmp_path: Path) -> None:
    output_path = tmp_path / "openapi-options.yaml"
    output_path.write_text("existing", encoding="utf-8")

    with pytest.raises(FileExistsError):
        write_options_scaffold(output_path)
