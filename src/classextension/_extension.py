from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from types import MappingProxyType
from typing import Any, Self, final

from classextension._validate import (
    validate_dependencies,
    validate_extend,
    validate_extensions,
    validate_name,
    validate_version,
)
from classextension.manifest import load_manifest, parse_manifest


@final
@dataclass(frozen=True, kw_only=True, slots=True, weakref_slot=True, eq=False)
class Extension:
    """
    A named, versioned unit of behavior applied to a class by subclassing.

    Only ``extend`` is required. ``version`` is required when ``name`` is given.
    Extensions compare and hash by identity, so two separately built extensions
    with equal fields are still distinct. Extensions sharing a ``name`` are
    reconciled by ``version`` when applied to the same lineage.

    Example::

        >>> Timestamped = Extension(
        ...     name="timestamped",
        ...     version="1.0.0",
        ...     extend=lambda cls: type("Timestamped", (cls,), {"created": 0}),
        ... )
    """

    extend: Callable[[type], type]
    """Returns the input class itself or a direct subclass of it."""

    name: str | None = None
    version: str | None = None

    extends: Sequence[Extension] = ()
    """Extensions applied, in order, before this one."""

    dependencies: Mapping[str, str] = field(default_factory=dict)
    """Acceptable version ranges of the named extensions in ``extends``."""

    def __post_init__(self) -> None:
        if self.name is not None:
            validate_name(self.name)
            validate_version(self.version)
        elif self.version is not None:
            validate_version(self.version)

        validate_extend(self.extend)
        validate_extensions(self.extends)
        validate_dependencies(self.dependencies)

        object.__setattr__(self, "extends", tuple(self.extends or ()))
        object.__setattr__(
            self, "dependencies", MappingProxyType(dict(self.dependencies or {}))
        )

    def __repr__(self) -> str:
        if self.name is None:
            return f"<{type(self).__name__} {getattr(self.extend, '__qualname__', self.extend)!r}>"
        return f"<{type(self).__name__} {self.name}@{self.version}>"

    @classmethod
    def named(
        cls,
        name: str,
        version: str,
        extend: Callable[[type], type],
        *,
        extends: Sequence[Extension] = (),
        dependencies: Mapping[str, str] | None = None,
    ) -> Self:
        return cls(
            name=name,
            version=version,
            extend=extend,
            extends=extends,
            dependencies=dependencies or {},
        )

    @classmethod
    def from_manifest(
        cls,
        manifest: Mapping[str, Any],
        extend: Callable[[type], type],
        *,
        extends: Sequence[Extension] = (),
    ) -> Self:
        """
        Build an extension whose ``name``, ``version`` and ``dependencies`` come
        from a package-style manifest mapping.

        :param manifest: Mapping with optional ``name``, ``version`` and ``dependencies`` keys.
        :param extend: The transformation the extension performs.
        :param extends: Extensions to apply first.
        """
        metadata = parse_manifest(manifest)
        return cls(
            name=metadata.get("name"),
            version=metadata.get("version"),
            extend=extend,
            extends=extends,
            dependencies=metadata.get("dependencies", {}),
        )

    @classmethod
    def from_file(
        cls,
        path: str | PathLike[str],
        extend: Callable[[type], type],
        *,
        extends: Sequence[Extension] = (),
    ) -> Self:
        """
        Build an extension from a YAML, JSON or TOML manifest file.

        :raises ValueError: If the file cannot be parsed as a manifest.
        """
        return cls.from_manifest(load_manifest(Path(path)), extend, extends=extends)
