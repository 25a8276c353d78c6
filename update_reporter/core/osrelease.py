"""OS identity detection from the os-release descriptor."""

import logging
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_OS_RELEASE = Path("/etc/os-release")


class OsIdentity(BaseModel):
    """Distribution identity read from os-release."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Distribution id (ID=)")
    version: str = Field(..., description="Distribution version (VERSION_ID=)")


def _value_of(line: str) -> str:
    """Return the value of a KEY=VALUE line with surrounding quotes removed."""
    return line.split("=", 1)[1].strip('"')


def parse_os_release(content: str) -> OsIdentity:
    """
    Parse os-release text into an OsIdentity.

    Only ``ID=`` and ``VERSION_ID=`` lines are considered. When a key
    appears more than once the last line wins. A missing key yields an
    empty string; whether that is acceptable is decided by the caller.

    Args:
        content: Raw os-release text

    Returns:
        OsIdentity with id and version
    """
    os_id = ""
    os_version = ""

    for line in content.splitlines():
        if line.startswith("ID="):
            os_id = _value_of(line)
        elif line.startswith("VERSION_ID="):
            os_version = _value_of(line)

    return OsIdentity(id=os_id, version=os_version)


def read_os_release(path: Union[str, Path] = DEFAULT_OS_RELEASE) -> OsIdentity:
    """
    Read and parse an os-release file.

    Args:
        path: Path to the descriptor (default: /etc/os-release)

    Returns:
        OsIdentity parsed from the file

    Raises:
        ConfigurationError: If the file cannot be read
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read OS release file {path}: {e}") from e

    identity = parse_os_release(content)
    logger.debug(
        "Read %s: id=%r version=%r", path, identity.id, identity.version
    )
    return identity
