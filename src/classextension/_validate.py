"""
Structural validation of classes and extensions.

Every check raises :class:`~classextension.errors.InvalidExtensionError` whose
message is prefixed with the dotted path of the offending value, e.g.
``extension.extends[1].version must be a valid semver version string``.
"""

from collections.abc import Mapping, Sequence
from numbers import Number

from classextension._versions import is_valid_range, is_valid_version
from classextension.errors import InvalidExtensionError


def _add_prefix(prefix: str | None, message: str) -> str:
    if not prefix:
        return message
    return f"{prefix}.{message}"


def _fail(message: str, prefix: str | None = None) -> None:
    raise InvalidExtensionError(_add_prefix(prefix, message))


def is_extension_like(value: object) -> bool:
    """
    Whether ``value`` can stand for an extension record.

    Any object with attributes qualifies, except scalars, mappings and classes.
    Mappings are rejected because records are keyed by identity.
    """
    return value is not None and not isinstance(value, str | bytes | Number | Mapping | type)


def validate_class(cls: object) -> None:
    if not isinstance(cls, type):
        _fail("Class is not a class")


def validate_instance(instance: object) -> None:
    if instance is None:
        _fail("Not a class instance")


def validate_name(name: object, prefix: str | None = None) -> None:
    if not isinstance(name, str) or not name:
        _fail("name must be a non-empty string", prefix)


def validate_version(version: object, prefix: str | None = None) -> None:
    if not is_valid_version(version):
        _fail("version must be a valid semver version string", prefix)


def validate_version_range(version_range: object, prefix: str | None = None) -> None:
    if not is_valid_range(version_range):
        _fail("version must be a valid semver range version string", prefix)


def validate_extend(extend: object, prefix: str | None = None) -> None:
    if not callable(extend):
        _fail("extend must be a function", prefix)


def validate_extensions(extensions: object, prefix: str | None = None) -> None:
    if extensions is None:
        return
    if not isinstance(extensions, Sequence) or isinstance(extensions, str | bytes):
        _fail("extends must be a list", prefix)
    assert isinstance(extensions, Sequence)
    for index, extension in enumerate(extensions):
        validate_extension(extension, _add_prefix(prefix, f"extends[{index}]"))


def validate_dependencies(dependencies: object, prefix: str | None = None) -> None:
    if dependencies is None:
        return
    if not isinstance(dependencies, Mapping):
        _fail("dependencies must be a mapping", prefix)
    assert isinstance(dependencies, Mapping)
    for key, version_range in dependencies.items():
        validate_version_range(version_range, _add_prefix(prefix, f"dependencies.{key}"))


def validate_extension(extension: object, prefix: str = "extension") -> None:
    """
    Validate an extension record and, recursively, the records it extends.

    Missing ``name``, ``version``, ``extends`` and ``dependencies`` attributes
    are treated as absent.
    """
    if not is_extension_like(extension):
        _fail(f"{prefix} must be an extension object")

    name = getattr(extension, "name", None)
    version = getattr(extension, "version", None)
    if name is not None:
        validate_name(name, prefix)
        validate_version(version, prefix)
    elif version is not None:
        validate_version(version, prefix)

    validate_extend(getattr(extension, "extend", None), prefix)
    validate_extensions(getattr(extension, "extends", None), prefix)
    validate_dependencies(getattr(extension, "dependencies", None), prefix)
