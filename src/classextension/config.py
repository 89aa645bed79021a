from dataclasses import dataclass

from classextension._versions import is_valid_range
from classextension.errors import InvalidExtensionError


@dataclass(kw_only=True, frozen=True, slots=True, weakref_slot=True)
class ExtendOptions:
    version: str | None = None
    """
    Range of versions the caller accepts for a named extension that the class
    already carries.

    When ``None``, an already applied extension with the same name must have
    exactly the same version as the one being applied.
    """

    def __post_init__(self) -> None:
        if self.version is None:
            return
        if not isinstance(self.version, str):
            raise InvalidExtensionError("options.version must be a string if provided")
        if not is_valid_range(self.version):
            raise InvalidExtensionError(
                "options.version must be a valid semver range version string"
            )
