"""
Read-only queries over extension bookkeeping, and attaching the extension
capabilities to classes.
"""

from __future__ import annotations

from typing import Any, Final, TypeVar

from classextension._extend import extend
from classextension._extension import Extension
from classextension._state import inherited_record, own_record
from classextension._validate import validate_class, validate_extension, validate_instance

TClass = TypeVar("TClass", bound=type)


def is_extended_with(cls: type, extension: Any) -> bool:
    """
    Check if a class has been extended with an extension.

    Also ``True`` when the class carries *any* version of a named extension with
    the same name. Only bookkeeping the class owns is consulted, so a plain
    subclass of an extended class reports ``False``.
    """
    validate_class(cls)
    validate_extension(extension)

    record = own_record(cls)
    if record is None:
        return False
    if extension in record:
        return True

    name = getattr(extension, "name", None)
    return bool(name) and name in record.named


def get_extensions(cls: type) -> list[Any]:
    """Extensions applied anywhere in the class's lineage, in order of application."""
    validate_class(cls)
    record = inherited_record(cls)
    if record is None:
        return []
    return list(record.extensions)


def is_directly_extended(cls: type) -> bool:
    """Whether the class itself, not only an ancestor, was produced by :func:`extend`."""
    validate_class(cls)
    return own_record(cls) is not None


def instance_is_extended_with(instance: object, extension: Any) -> bool:
    validate_instance(instance)
    return is_extended_with(type(instance), extension)


def instance_get_extensions(instance: object) -> list[Any]:
    validate_instance(instance)
    return get_extensions(type(instance))


def instance_is_directly_extended(instance: object) -> bool:
    validate_instance(instance)
    return is_directly_extended(type(instance))


_CLASS_METHODS: Final = {
    "extend": extend,
    "is_extended_with": is_extended_with,
    "get_extensions": get_extensions,
    "is_directly_extended": is_directly_extended,
}


class Extensible:
    """
    Base class exposing the extension capabilities as class methods.

    The methods are also reachable from instances, where they act on the
    instance's class::

        >>> class Model(Extensible):
        ...     pass
        >>> Tagged = Extension(extend=lambda cls: type("Tagged", (cls,), {}))
        >>> TaggedModel = Model.extend(Tagged)
        >>> TaggedModel().is_extended_with(Tagged)
        True
    """

    Extension = Extension

    extend = classmethod(extend)
    is_extended_with = classmethod(is_extended_with)
    get_extensions = classmethod(get_extensions)
    is_directly_extended = classmethod(is_directly_extended)


def add_methods_to_class(cls: TClass) -> TClass:
    """
    Attach the extension capabilities to an existing class.

    Usable as a class decorator. Returns ``cls``.
    """
    validate_class(cls)
    cls.Extension = Extension  # type: ignore[attr-defined]
    for method_name, function in _CLASS_METHODS.items():
        setattr(cls, method_name, classmethod(function))
    return cls
