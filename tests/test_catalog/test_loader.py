"""Tests for catalog loading and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml
from pydantic import ValidationError

from adocli.catalog import Catalog, build_catalog, load_catalog
from adocli.exceptions import CatalogError, UnsupportedVerbError
from adocli.models import HTTPMethod


def _operation(**overrides: Any) -> dict[str, Any]:
    entry = {
        "urlTemplate": "/{organization}/_apis/projects",
        "verb": "get",
        "apiVersion": "7.1",
        "host": "dev.azure.com",
        "parameters": {"path": [{"name": "organization", "required": True}]},
    }
    entry.update(overrides)
    return entry


class TestBundledCatalog:
    def test_loads(self) -> None:
        catalog = load_catalog()
        assert len(catalog) > 0
        assert "git" in catalog.areas()

    def test_contains_list_pull_requests(self) -> None:
        matches = load_catalog().get_exact("list-pull-requests")
        assert len(matches) == 1
        area, operation = matches[0]
        assert area == "git"
        assert operation.verb is HTTPMethod.GET


class TestLoadFromFile:
    def test_json_file(self, catalog_path: Path) -> None:
        catalog = load_catalog(catalog_path)
        assert catalog.areas() == ["build", "git", "pipelines", "wit"]

    def test_yaml_file(self, tmp_path: Path, catalog_raw: dict[str, Any], catalog: Catalog) -> None:
        path = tmp_path / "catalog.yaml"
        path.write_text(yaml.safe_dump(catalog_raw))
        assert len(load_catalog(path)) == len(catalog)

    def test_unknown_suffix_falls_back_to_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.txt"
        path.write_text(yaml.safe_dump({"core": {"list-projects": [_operation()]}}))
        assert load_catalog(str(path)).areas() == ["core"]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path / "nope.json")

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.json"
        path.write_text("  \n")
        with pytest.raises(CatalogError, match="empty"):
            load_catalog(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(CatalogError, match="Invalid JSON"):
            load_catalog(path)


class TestBuildCatalog:
    def test_name_comes_from_key(self) -> None:
        catalog = build_catalog({"core": {"list-projects": [_operation()]}})
        (_, operation), = catalog.get_exact("list-projects")
        assert operation.name == "list-projects"
        assert operation.url_template == "/{organization}/_apis/projects"
        assert operation.api_version == "7.1"

    def test_verb_is_normalised(self) -> None:
        catalog = build_catalog({"core": {"list-projects": [_operation(verb="GET")]}})
        (_, operation), = catalog.get_exact("list-projects")
        assert operation.verb is HTTPMethod.GET

    def test_unknown_keys_ignored(self) -> None:
        entry = _operation(responses={"200": {"description": "ok"}})
        catalog = build_catalog({"core": {"list-projects": [entry]}})
        assert len(catalog) == 1

    def test_enum_metadata(self) -> None:
        entry = _operation(
            parameters={
                "query": [
                    {
                        "name": "stateFilter",
                        "enum": {"name": "ProjectState", "values": [{"value": "all"}]},
                    }
                ]
            }
        )
        catalog = build_catalog({"core": {"list-projects": [entry]}})
        (_, operation), = catalog.get_exact("list-projects")
        spec = operation.parameters.query[0]
        assert spec.enum is not None
        assert spec.enum.values[0].value == "all"
        assert spec.required is False

    def test_unsupported_verb(self) -> None:
        with pytest.raises(UnsupportedVerbError, match="'head'") as exc_info:
            build_catalog({"core": {"ping": [_operation(verb="head")]}})
        assert "ping" in str(exc_info.value)
        assert "core" in str(exc_info.value)

    def test_unsupported_verb_is_catalog_error(self) -> None:
        with pytest.raises(CatalogError):
            build_catalog({"core": {"ping": [_operation(verb="options")]}})

    @pytest.mark.parametrize(
        "raw",
        [
            [],
            {"core": []},
            {"core": {"list-projects": {}}},
            {"core": {"list-projects": ["nope"]}},
        ],
    )
    def test_bad_shapes(self, raw: Any) -> None:
        with pytest.raises(CatalogError):
            build_catalog(raw)

    def test_missing_required_field(self) -> None:
        entry = _operation()
        del entry["host"]
        with pytest.raises(CatalogError, match="Invalid operation 'list-projects'"):
            build_catalog({"core": {"list-projects": [entry]}})

    def test_operations_are_frozen(self) -> None:
        catalog = build_catalog({"core": {"list-projects": [_operation()]}})
        (_, operation), = catalog.get_exact("list-projects")
        with pytest.raises(ValidationError):
            operation.host = "example.com"  # type: ignore[misc]


def test_fixture_round_trips_through_json(tmp_path: Path, catalog_raw: dict[str, Any]) -> None:
    path = tmp_path / "copy.json"
    path.write_text(json.dumps(catalog_raw))
    assert load_catalog(path).areas() == ["build", "git", "pipelines", "wit"]
