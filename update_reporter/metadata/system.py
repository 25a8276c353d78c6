"""System metadata collection."""

import platform
import socket
from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.errors import BuildError


class HostInfo(BaseModel):
    """Host descriptors taken from the execution environment."""

    model_config = ConfigDict(frozen=True)

    fqdn: str = Field(..., description="Fully-qualified host name")
    os_family: str = Field(..., description="Kernel/OS family (e.g., linux)")
    platform: str = Field(..., description="Machine architecture (e.g., x86_64)")


class SystemInfo(Protocol):
    """Source of host descriptors. Tests substitute their own implementation."""

    def fqdn(self) -> str:
        """Return the fully-qualified host name."""
        ...

    def os_family(self) -> str:
        """Return the lowercase OS family, e.g. ``linux``."""
        ...

    def platform(self) -> str:
        """Return the machine architecture, e.g. ``x86_64`` or ``aarch64``."""
        ...


class LocalSystemInfo:
    """SystemInfo backed by the running interpreter's host."""

    def fqdn(self) -> str:
        return socket.getfqdn()

    def os_family(self) -> str:
        return platform.system().lower()

    def platform(self) -> str:
        return platform.machine()


def collect_system_metadata(system_info: Optional[SystemInfo] = None) -> HostInfo:
    """
    Collect host descriptors (FQDN, OS family, architecture).

    Args:
        system_info: Descriptor source (default: LocalSystemInfo)

    Returns:
        HostInfo with the three descriptors

    Raises:
        BuildError: If a descriptor is missing or not a string
    """
    source = system_info if system_info is not None else LocalSystemInfo()
    try:
        return HostInfo(
            fqdn=source.fqdn(),
            os_family=source.os_family(),
            platform=source.platform(),
        )
    except ValidationError as e:
        raise BuildError(f"Invalid host metadata: {e}") from e
