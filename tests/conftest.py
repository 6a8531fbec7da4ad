"""Shared pytest fixtures for mockserver-refutil tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from mockserver_refutil import ChainResolver, DocumentLoader


@pytest.fixture
def specpath_a(shared_datadir: Path) -> Path:
    return shared_datadir / "a.json"


@pytest.fixture
def specpath_b(shared_datadir: Path) -> Path:
    return shared_datadir / "b" / "b.json"


@pytest.fixture
def resolver() -> ChainResolver:
    return ChainResolver(DocumentLoader())


@pytest.fixture
def create_json_files(tmp_path: Path):
    """Factory fixture for creating multiple temporary JSON files at once.

    Usage:
        def test_example(create_json_files):
            files = create_json_files({
                "main.json": {"definitions": {"A": {"$ref": "other.json#/B"}}},
                "other.json": {"B": {"type": "string"}}
            })
    """

    def _create(files: dict[str, Any]) -> dict[str, Path]:
        result = {}
        for name, content in files.items():
            file = tmp_path / name
            file.parent.mkdir(parents=True, exist_ok=True)
            file.write_text(json.dumps(content))
            result[name] = file
        return result

    return _create
