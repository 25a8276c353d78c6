"""Package manager backends that list and normalize pending updates."""

import logging
import subprocess
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Optional
from xml.etree import ElementTree

from .errors import CollectionError, UnsupportedPlatformError
from .family import PackageFamily
from .report import UpdateRecord

logger = logging.getLogger(__name__)

# Package manager metadata refresh can hang on network I/O
DEFAULT_TIMEOUT_S = 300

ZYPPER_LIST_UPDATES = ("zypper", "--no-color", "--no-refresh", "-x", "lu")
APT_LIST_UPGRADEABLE = ("apt", "list", "--upgradeable")
APT_BANNER = "Listing..."

Runner = Callable[[Sequence[str], float], str]


def run_command(argv: Sequence[str], timeout_s: float = DEFAULT_TIMEOUT_S) -> str:
    """
    Run a command to completion and return its standard output.

    Args:
        argv: Command and arguments
        timeout_s: Seconds before the child is killed

    Returns:
        Captured standard output

    Raises:
        CollectionError: If the command cannot start, times out, exits non-zero
            or writes output that is not valid UTF-8
    """
    cmd = list(argv)
    cmd_str = " ".join(cmd)
    logger.info("Running: %s", cmd_str)

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            timeout=timeout_s,
            check=False,
        )
    except FileNotFoundError as e:
        raise CollectionError(f"Command not found: {cmd[0]}") from e
    except subprocess.TimeoutExpired as e:
        raise CollectionError(f"Timed out after {timeout_s}s running: {cmd_str}") from e
    except UnicodeDecodeError as e:
        raise CollectionError(f"{cmd_str} produced output that is not valid UTF-8: {e}") from e
    except OSError as e:
        raise CollectionError(f"Cannot execute {cmd[0]}: {e}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        message = f"{cmd_str} exited with status {result.returncode}"
        if stderr:
            message += f": {stderr}"
        raise CollectionError(message)

    return result.stdout


def parse_zypper_output(text: str) -> list[UpdateRecord]:
    """
    Parse ``zypper -x lu`` XML into update records.

    zypper wraps its answer in a ``<stream>`` element alongside progress
    messages; a bare ``<update-status>`` document is accepted as well.

    Args:
        text: XML document produced by zypper

    Returns:
        One UpdateRecord per ``<update>`` element, in document order

    Raises:
        CollectionError: If the XML is malformed or has no update-status
    """
    try:
        root = ElementTree.fromstring(text)
    except ElementTree.ParseError as e:
        raise CollectionError(f"Malformed zypper XML output: {e}") from e

    for message in root.iter("message"):
        if message.get("type") == "error":
            logger.warning("zypper: %s", (message.text or "").strip())

    status = root if root.tag == "update-status" else root.find("update-status")
    if status is None:
        raise CollectionError("zypper XML output has no <update-status> element")

    return [
        UpdateRecord(
            kind=update.get("kind", ""),
            name=update.get("name", ""),
            new_version=update.get("edition", ""),
            architecture=update.get("arch", ""),
            old_version=update.get("edition-old", ""),
            summary=update.findtext("summary", default=""),
        )
        for update in status.iterfind("update-list/update")
    ]


def parse_apt_output(text: str) -> list[UpdateRecord]:
    """
    Parse ``apt list --upgradeable`` output.

    The banner is discarded, but the per-package line format is not
    parsed yet, so this always raises.

    Raises:
        CollectionError: Always; apt output parsing is not yet supported
    """
    lines = [
        line
        for line in text.splitlines()
        if line.strip() and not line.startswith(APT_BANNER)
    ]
    raise CollectionError(
        "Parsing 'apt list --upgradeable' output is not yet supported "
        f"({len(lines)} line(s) left unparsed)"
    )


class PackageBackend(ABC):
    """
    Family-specific way to list pending upgrades.

    Subclasses provide the command line and a parser; running and
    logging are shared.
    """

    family: PackageFamily
    command: tuple[str, ...]

    def __init__(
        self,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        runner: Optional[Runner] = None,
    ):
        """
        Initialize backend.

        Args:
            timeout_s: Seconds allowed for the package manager (default: 300)
            runner: Callable running argv and returning stdout (default: run_command)
        """
        self.timeout_s = timeout_s
        self.runner = runner if runner is not None else run_command

    @abstractmethod
    def parse(self, output: str) -> list[UpdateRecord]:
        """Normalize raw package manager output into update records."""

    def collect(self) -> list[UpdateRecord]:
        """
        Run the package manager and return the normalized update list.

        Raises:
            CollectionError: If the command fails or its output cannot be parsed
        """
        output = self.runner(self.command, self.timeout_s)
        updates = self.parse(output)
        logger.info("%s reported %d pending update(s)", self.command[0], len(updates))
        return updates


class ZypperBackend(PackageBackend):
    """SUSE family backend (zypper XML output)."""

    family = PackageFamily.SUSE
    command = ZYPPER_LIST_UPDATES

    def parse(self, output: str) -> list[UpdateRecord]:
        return parse_zypper_output(output)


class AptBackend(PackageBackend):
    """Debian family backend (apt line output)."""

    family = PackageFamily.DEBIAN
    command = APT_LIST_UPGRADEABLE

    def parse(self, output: str) -> list[UpdateRecord]:
        return parse_apt_output(output)


BACKENDS = {
    PackageFamily.SUSE: ZypperBackend,
    PackageFamily.DEBIAN: AptBackend,
}


def get_backend(
    family: PackageFamily,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    runner: Optional[Runner] = None,
) -> PackageBackend:
    """
    Return the backend for a package family.

    Raises:
        UnsupportedPlatformError: If the family has no backend
    """
    backend_cls = BACKENDS.get(family)
    if backend_cls is None:
        raise UnsupportedPlatformError(f"No package backend for family '{family.value}'")
    return backend_cls(timeout_s=timeout_s, runner=runner)
