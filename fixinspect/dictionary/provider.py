"""Indexed FIX protocol dictionary.

The decoder only needs a handful of lookups from the protocol dictionary, so
they are captured by the ``DictionaryProvider`` protocol. ``FixDictionary`` is
the standard implementation: every index is built once at construction and is
never modified afterwards, which makes a single instance safe to share between
threads decoding different messages.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from fixinspect.parsers.models import FieldDefinition


@runtime_checkable
class DictionaryProvider(Protocol):
    """Lookups the decoder performs against a protocol dictionary."""

    def field_by_number(self, number: int) -> FieldDefinition | None: ...

    def field_by_name(self, name: str) -> FieldDefinition | None: ...

    def is_header_field_name(self, name: str) -> bool: ...

    def is_trailer_field_name(self, name: str) -> bool: ...

    def enum_description(self, number: int, value: str) -> str | None: ...


class FixDictionary:
    """Read-only dictionary indexed by tag number and field name.

    Attributes:
        version: Protocol version string, e.g. ``FIX.4.4`` (may be empty).
        header_names: Names of the fields declared in the message header.
        trailer_names: Names of the fields declared in the message trailer.
    """

    def __init__(
        self,
        fields: Iterable[FieldDefinition],
        header_names: Iterable[str] = (),
        trailer_names: Iterable[str] = (),
        version: str = "",
    ) -> None:
        """Build the lookup indexes.

        Args:
            fields: Field definitions. On a repeated number or name the first
                definition is kept.
            header_names: Names of header fields.
            trailer_names: Names of trailer fields.
            version: Protocol version string.
        """
        by_number: dict[int, FieldDefinition] = {}
        by_name: dict[str, FieldDefinition] = {}
        for definition in fields:
            by_number.setdefault(definition.number, definition)
            by_name.setdefault(definition.name, definition)

        self._by_number = MappingProxyType(by_number)
        self._by_name = MappingProxyType(by_name)
        self.header_names = frozenset(header_names)
        self.trailer_names = frozenset(trailer_names)
        self.version = version

    @classmethod
    def from_definitions(
        cls,
        definitions: Iterable[tuple[int, str, str] | tuple[int, str, str, dict[str, str]]],
        header_names: Iterable[str] = (),
        trailer_names: Iterable[str] = (),
        version: str = "",
    ) -> FixDictionary:
        """Build a dictionary from plain tuples.

        Args:
            definitions: ``(number, name, type)`` or
                ``(number, name, type, enum_values)`` tuples.
            header_names: Names of header fields.
            trailer_names: Names of trailer fields.
            version: Protocol version string.

        Returns:
            A new FixDictionary.

        Example:
            >>> d = FixDictionary.from_definitions(
            ...     [(8, "BeginString", "STRING"), (54, "Side", "CHAR", {"1": "BUY"})],
            ...     header_names=["BeginString"],
            ... )
            >>> d.enum_description(54, "1")
            'BUY'
        """
        fields = []
        for definition in definitions:
            number, name, field_type, *rest = definition
            enum_values = rest[0] if rest else {}
            fields.append(
                FieldDefinition(
                    number=number,
                    name=name,
                    type=field_type,
                    enum_values=enum_values,
                )
            )
        return cls(fields, header_names, trailer_names, version)

    def __len__(self) -> int:
        return len(self._by_number)

    def __contains__(self, number: object) -> bool:
        return number in self._by_number

    def __repr__(self) -> str:
        return (
            f"FixDictionary(version={self.version!r}, fields={len(self)}, "
            f"header={len(self.header_names)}, trailer={len(self.trailer_names)})"
        )

    def field_by_number(self, number: int) -> FieldDefinition | None:
        """Return the definition for a tag number."""
        return self._by_number.get(number)

    def field_by_name(self, name: str) -> FieldDefinition | None:
        """Return the definition for a field name."""
        return self._by_name.get(name)

    def is_header_field_name(self, name: str) -> bool:
        return name in self.header_names

    def is_trailer_field_name(self, name: str) -> bool:
        return name in self.trailer_names

    def enum_description(self, number: int, value: str) -> str | None:
        """Return the description of an enumerated value, if declared."""
        definition = self._by_number.get(number)
        if definition is None:
            return None
        return definition.describe(value)
