"""The read-only operation catalog.

A :class:`Catalog` is built once at startup by
:func:`~adocli.catalog.loader.load_catalog` and handed to whoever needs it.
Nothing mutates it afterwards, so it can be shared freely.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from adocli.models import Operation


class Catalog:
    """Operations grouped by area, then by name.

    Several operations may share a name, within one area (different verbs)
    or across areas.

    Args:
        areas: ``area -> name -> operations``. The mapping is copied and
            frozen.
    """

    def __init__(self, areas: Mapping[str, Mapping[str, tuple[Operation, ...]]]) -> None:
        self._areas: Mapping[str, Mapping[str, tuple[Operation, ...]]] = MappingProxyType(
            {
                area: MappingProxyType({name: tuple(ops) for name, ops in by_name.items()})
                for area, by_name in areas.items()
            }
        )

    def __len__(self) -> int:
        """Number of operations across all areas."""
        return sum(len(ops) for by_name in self._areas.values() for ops in by_name.values())

    def areas(self) -> list[str]:
        """Return the area names, sorted."""
        return sorted(self._areas)

    def has_area(self, area: str) -> bool:
        return self._match_area(area) is not None

    def operations(self, area: Optional[str] = None) -> Iterator[tuple[str, Operation]]:
        """Yield ``(area, operation)`` for every operation, or those of one area."""
        for area_name, by_name in self._select(area):
            for ops in by_name.values():
                for operation in ops:
                    yield area_name, operation

    def find(self, fragment: str, area: Optional[str] = None) -> list[tuple[str, Operation]]:
        """Return operations whose name contains *fragment*, ignoring case."""
        needle = fragment.casefold()
        return [
            (area_name, operation)
            for area_name, operation in self.operations(area)
            if needle in operation.name.casefold()
        ]

    def get_exact(self, name: str, area: Optional[str] = None) -> list[tuple[str, Operation]]:
        """Return operations whose name equals *name*, ignoring case."""
        wanted = name.casefold()
        return [
            (area_name, operation)
            for area_name, operation in self.operations(area)
            if operation.name.casefold() == wanted
        ]

    def _match_area(self, area: str) -> Optional[str]:
        if area in self._areas:
            return area
        wanted = area.casefold()
        for candidate in self._areas:
            if candidate.casefold() == wanted:
                return candidate
        return None

    def _select(self, area: Optional[str]) -> Iterator[tuple[str, Mapping[str, tuple[Operation, ...]]]]:
        if area is None:
            yield from self._areas.items()
            return
        matched = self._match_area(area)
        if matched is not None:
            yield matched, self._areas[matched]
