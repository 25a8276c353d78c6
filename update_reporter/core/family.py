"""Mapping from OS identity to package manager family."""

from enum import Enum

from .errors import UnsupportedPlatformError
from .osrelease import OsIdentity


class PackageFamily(str, Enum):
    """Package manager family enumeration."""

    SUSE = "suse"
    DEBIAN = "debian"
    UNKNOWN = "unknown"


# Closed table: add entries deliberately, one distribution id at a time.
FAMILY_BY_OS_ID = {
    "opensuse-leap": PackageFamily.SUSE,
    "ubuntu": PackageFamily.DEBIAN,
}


def classify_family(identity: OsIdentity) -> PackageFamily:
    """Return the package family for an OS identity (UNKNOWN if unmapped)."""
    return FAMILY_BY_OS_ID.get(identity.id, PackageFamily.UNKNOWN)


def require_supported_family(identity: OsIdentity) -> PackageFamily:
    """
    Classify an OS identity and reject unsupported platforms.

    Args:
        identity: OS identity from the release descriptor

    Returns:
        A PackageFamily other than UNKNOWN

    Raises:
        UnsupportedPlatformError: If the OS id has no known family
    """
    family = classify_family(identity)
    if family is PackageFamily.UNKNOWN:
        if not identity.id:
            raise UnsupportedPlatformError(
                "OS release descriptor has no ID= entry; cannot select a package manager"
            )
        supported = ", ".join(sorted(FAMILY_BY_OS_ID))
        raise UnsupportedPlatformError(
            f"OS id '{identity.id}' is not supported (supported: {supported})"
        )
    return family
