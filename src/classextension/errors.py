"""Exceptions raised by :mod:`classextension`."""


class ExtensionError(Exception):
    """
    Base exception class for errors raised while defining or applying extensions.
    """


class InvalidExtensionError(ExtensionError, TypeError):
    """
    Raised when a class, an extension or an option fails validation.

    Raised before any class is touched.
    """


class ExtensionContractError(ExtensionError, TypeError):
    """
    Raised when an extension's ``extend`` function returns something other than
    the input class or a direct subclass of it.
    """


class VersionConflictError(ExtensionError):
    """
    Raised when a class already carries a different version of a named extension.
    """

    def __init__(self, message: str, *, name: str, existing_version: str) -> None:
        super().__init__(message)
        self.name = name
        self.existing_version = existing_version


class VersionMismatchError(VersionConflictError):
    """
    Raised when no version range was given and the version already applied is not
    exactly the version now being applied.
    """

    def __init__(self, *, name: str, existing_version: str, requested_version: str) -> None:
        super().__init__(
            f"Class is already extended with version {existing_version} of extension "
            f"'{name}', which differs from version {requested_version} now being applied",
            name=name,
            existing_version=existing_version,
        )
        self.requested_version = requested_version


class VersionRangeError(VersionConflictError):
    """
    Raised when the version already applied does not satisfy the version range
    requested by the caller.
    """

    def __init__(self, *, name: str, existing_version: str, version_range: str) -> None:
        super().__init__(
            f"Class is already extended with version {existing_version} of extension "
            f"'{name}', which does not satisfy specified version range '{version_range}'",
            name=name,
            existing_version=existing_version,
        )
        self.version_range = version_range
