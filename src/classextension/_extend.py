"""
Applying extensions to classes.

:func:`extend` is idempotent: applying an extension to a class returns the same
subclass object every time, and applying it to a class whose lineage already
carries it returns that class unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from classextension._state import (
    EMPTY_RECORD,
    cached_subclass,
    inherited_record,
    stamp_record,
    store_subclass,
)
from classextension._validate import validate_class, validate_extension
from classextension._versions import satisfies
from classextension.config import ExtendOptions
from classextension.errors import (
    ExtensionContractError,
    VersionMismatchError,
    VersionRangeError,
)

logger = logging.getLogger(__name__)

TClass = TypeVar("TClass", bound=type)


def extend(cls: TClass, extension: Any, *, version: str | None = None) -> TClass:
    """
    Extend a class with an extension and, first, with everything it extends.

    :param cls: The class to extend.
    :param extension: An :class:`~classextension.Extension` or any object with
        the same attributes.
    :param version: Range of versions accepted for an extension with the same
        name that the class already carries. Without it, the versions must be
        identical.
    :return: ``cls`` itself, a cached subclass, or a new direct subclass of ``cls``.
    :raises InvalidExtensionError: If ``cls``, ``extension`` or ``version`` is malformed.
    :raises ExtensionContractError: If ``extension.extend`` breaks its contract.
    :raises VersionConflictError: If the lineage carries an incompatible version.
    """
    validate_class(cls)
    validate_extension(extension)
    return _apply(cls, extension, ExtendOptions(version=version))


def _apply(cls: TClass, extension: Any, options: ExtendOptions) -> TClass:
    # Dependencies first, threading the class through in declaration order
    dependencies: Mapping[str, str] = getattr(extension, "dependencies", None) or {}
    for dependency in getattr(extension, "extends", None) or ():
        dependency_name = getattr(dependency, "name", None)
        dependency_range = dependencies.get(dependency_name) if dependency_name else None
        cls = _apply(cls, dependency, ExtendOptions(version=dependency_range))

    name = getattr(extension, "name", None)
    record = inherited_record(cls)
    if record is not None:
        if extension in record:
            logger.debug("%s already extended with %r", cls.__name__, extension)
            return cls

        if name:
            existing = record.named.get(name)
            if existing is not None:
                _check_version(name, existing, extension, options.version)
                logger.debug(
                    "%s already extended with compatible %r, skipping %r",
                    cls.__name__,
                    existing,
                    extension,
                )
                return cls

    cached = cached_subclass(cls, extension)
    if cached is not None:
        return cached  # type: ignore[return-value]

    subclass = extension.extend(cls)
    if not _is_same_or_direct_subclass(subclass, cls):
        raise ExtensionContractError("Extension did not return a subclass of original class")

    stamp_record(subclass, (record or EMPTY_RECORD).with_extension(extension))
    store_subclass(cls, extension, subclass)
    logger.debug("Extended %s with %r", cls.__name__, extension)
    return subclass


def _check_version(
    name: str, existing: Any, extension: Any, version_range: str | None
) -> None:
    existing_version = existing.version
    if version_range:
        if not satisfies(existing_version, version_range):
            raise VersionRangeError(
                name=name,
                existing_version=existing_version,
                version_range=version_range,
            )
    else:
        requested_version = extension.version
        if existing_version != requested_version:
            raise VersionMismatchError(
                name=name,
                existing_version=existing_version,
                requested_version=requested_version,
            )


def _is_same_or_direct_subclass(candidate: object, cls: type) -> bool:
    if candidate is cls:
        return True
    return isinstance(candidate, type) and cls in candidate.__bases__
