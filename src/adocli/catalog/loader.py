"""Load the operation catalog from the bundled resource or a file.

The catalog document is shaped ``area -> operation name -> [operation, ...]``
and is produced by an offline build from the upstream REST specs. A copy
ships inside the package (``adocli/data/operations.json``); a different
document of the same shape can be used by passing its path (or setting
``catalog`` in the config / ``ADOCLI_CATALOG``).

Files ending in ``.yaml``/``.yml`` are parsed as YAML, everything else is
tried as JSON first and YAML second.

Every verb is checked against :class:`~adocli.models.HTTPMethod` before the
operations are validated, so a corrupt catalog fails here, at startup,
rather than halfway through building a request.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from adocli.catalog.catalog import Catalog
from adocli.exceptions import CatalogError, UnsupportedVerbError
from adocli.models import HTTPMethod, Operation

_BUNDLED_PACKAGE = "adocli"
_BUNDLED_NAME = "data/operations.json"
_VERBS = frozenset(m.value for m in HTTPMethod)


def load_catalog(source: Optional[str | Path] = None) -> Catalog:
    """Load and validate a catalog.

    Args:
        source: Path to a catalog file. ``None`` loads the bundled catalog.

    Returns:
        The immutable :class:`~adocli.catalog.catalog.Catalog`.

    Raises:
        CatalogError: If the document cannot be read, parsed or validated.
        UnsupportedVerbError: If an operation declares an unknown verb.
    """
    if source is None:
        text = _read_bundled()
        hint = "json"
        origin = "bundled catalog"
    else:
        path = Path(source).expanduser()
        text = _read_file(path)
        hint = _hint_from_suffix(path)
        origin = str(path)

    raw = _parse_content(text, hint=hint, origin=origin)
    return build_catalog(raw, origin=origin)


def build_catalog(raw: Any, origin: str = "catalog") -> Catalog:
    """Validate a decoded catalog document and wrap it in a :class:`Catalog`.

    The catalog key of each operation list becomes the operation's ``name``.

    Args:
        raw: The decoded document (``area -> name -> [operation dicts]``).
        origin: Where the document came from, for error messages.

    Raises:
        CatalogError: On any shape or validation problem.
        UnsupportedVerbError: If an operation declares an unknown verb.
    """
    if not isinstance(raw, dict):
        raise CatalogError(
            f"Catalog {origin} must map areas to operations "
            f"(got {type(raw).__name__})"
        )

    areas: dict[str, dict[str, tuple[Operation, ...]]] = {}
    for area, by_name in raw.items():
        if not isinstance(by_name, dict):
            raise CatalogError(f"Area '{area}' in {origin} is not an object")

        operations: dict[str, tuple[Operation, ...]] = {}
        for name, entries in by_name.items():
            if not isinstance(entries, list):
                raise CatalogError(
                    f"Operation '{name}' in area '{area}' of {origin} is not a list"
                )
            operations[name] = tuple(
                _build_operation(area, name, entry, origin) for entry in entries
            )
        areas[area] = operations

    return Catalog(areas)


def _build_operation(area: str, name: str, entry: Any, origin: str) -> Operation:
    """Validate a single operation entry."""
    if not isinstance(entry, dict):
        raise CatalogError(f"Entry for '{area}/{name}' in {origin} is not an object")

    verb = str(entry.get("verb", "")).lower()
    if verb not in _VERBS:
        raise UnsupportedVerbError(
            f"Operation '{name}' in area '{area}' declares unsupported verb "
            f"'{entry.get('verb')}'"
        )

    try:
        return Operation.model_validate({**entry, "name": name, "verb": verb})
    except ValidationError as exc:
        raise CatalogError(
            f"Invalid operation '{name}' in area '{area}' of {origin}: {exc}"
        ) from exc


def _read_bundled() -> str:
    try:
        return (
            resources.files(_BUNDLED_PACKAGE)
            .joinpath(_BUNDLED_NAME)
            .read_text(encoding="utf-8")
        )
    except (OSError, ModuleNotFoundError) as exc:
        raise CatalogError(f"Cannot read bundled catalog: {exc}") from exc


def _read_file(path: Path) -> str:
    if not path.is_file():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Failed to read catalog file {path}: {exc}") from exc
    if not content.strip():
        raise CatalogError(f"Catalog file is empty: {path}")
    return content


def _hint_from_suffix(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    return ""


def _parse_content(content: str, hint: str, origin: str) -> Any:
    """Parse *content* as JSON or YAML.

    JSON is tried first unless *hint* says YAML; a JSON hint disables the
    YAML fallback.
    """
    json_error: Exception | None = None

    if hint != "yaml":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            if hint == "json":
                raise CatalogError(f"Invalid JSON in {origin}: {exc}") from exc
            json_error = exc

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as exc:
        msg = f"Failed to parse {origin} as JSON or YAML"
        if json_error:
            msg += f"\n  JSON error: {json_error}"
        msg += f"\n  YAML error: {exc}"
        raise CatalogError(msg) from exc
