"""
Per-class extension bookkeeping.

Bookkeeping lives in side tables keyed weakly by class, never in class
attributes, so it disappears together with the classes it describes.

- :data:`_records` maps a class produced by :func:`~classextension.extend` to
  the :class:`ExtensionRecord` of everything applied in its lineage. A class
  owns a record only if it was itself the result of an ``extend`` call; plain
  subclasses see the record of their nearest extended ancestor in MRO order.
- :data:`_caches` maps an input class to the subclasses already produced from
  it, keyed by extension identity. Subclasses are referenced weakly.
"""

from __future__ import annotations

import weakref
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, final


@final
@dataclass(frozen=True, slots=True, eq=False)
class _IdentityKey:
    """Hashes and compares the wrapped object by identity."""

    target: object

    def __hash__(self) -> int:
        return id(self.target)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _IdentityKey) and other.target is self.target


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True)
class ExtensionRecord:
    """Extensions applied anywhere in a class's lineage."""

    extensions: tuple[object, ...] = ()
    """Applied extensions in order of application."""

    named: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))
    """The extension actually applied for each extension name."""

    def __contains__(self, extension: object) -> bool:
        return any(applied is extension for applied in self.extensions)

    def with_extension(self, extension: object) -> ExtensionRecord:
        """A new record with ``extension`` appended. ``self`` is left untouched."""
        name = getattr(extension, "name", None)
        named = self.named
        if name:
            named = MappingProxyType({**named, name: extension})
        return ExtensionRecord(extensions=(*self.extensions, extension), named=named)


EMPTY_RECORD: Final = ExtensionRecord()

_records: Final[weakref.WeakKeyDictionary[type, ExtensionRecord]] = (
    weakref.WeakKeyDictionary()
)
_caches: Final[
    weakref.WeakKeyDictionary[type, weakref.WeakValueDictionary[_IdentityKey, type]]
] = weakref.WeakKeyDictionary()


def own_record(cls: type) -> ExtensionRecord | None:
    """The record ``cls`` itself owns, ignoring its ancestors."""
    return _records.get(cls)


def inherited_record(cls: type) -> ExtensionRecord | None:
    """The record of ``cls`` or of its nearest extended ancestor."""
    for klass in cls.__mro__:
        record = _records.get(klass)
        if record is not None:
            return record
    return None


def stamp_record(cls: type, record: ExtensionRecord) -> None:
    _records[cls] = record


def cached_subclass(cls: type, extension: object) -> type | None:
    cache = _caches.get(cls)
    if cache is None:
        return None
    return cache.get(_IdentityKey(extension))


def store_subclass(cls: type, extension: object, subclass: type) -> None:
    cache = _caches.get(cls)
    if cache is None:
        cache = _caches[cls] = weakref.WeakValueDictionary()
    cache[_IdentityKey(extension)] = subclass
