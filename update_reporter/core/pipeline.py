"""Linear update collection pipeline.

ReadIdentity -> ClassifyFamily -> Collect -> Build -> Emit. Any step that
raises ends the run; nothing is retried and no partial report is produced.
"""

import logging
from pathlib import Path
from typing import Optional, TextIO, Union

from ..metadata.system import SystemInfo, collect_system_metadata
from .backends import DEFAULT_TIMEOUT_S, Runner, get_backend
from .emitter import emit_report
from .family import require_supported_family
from .osrelease import DEFAULT_OS_RELEASE, read_os_release
from .report import UpdateReport, build_report

logger = logging.getLogger(__name__)


def collect_report(
    os_release_path: Union[str, Path] = DEFAULT_OS_RELEASE,
    system_info: Optional[SystemInfo] = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    runner: Optional[Runner] = None,
) -> UpdateReport:
    """
    Run every step up to and including report assembly.

    Args:
        os_release_path: Release descriptor to read
        system_info: Host descriptor source (default: local host)
        timeout_s: Seconds allowed for the package manager
        runner: Command runner override for the backend

    Returns:
        Assembled UpdateReport

    Raises:
        ReporterError: Subclass for whichever step failed
    """
    identity = read_os_release(os_release_path)
    family = require_supported_family(identity)
    logger.info("Detected %s %s (%s family)", identity.id, identity.version, family.value)

    backend = get_backend(family, timeout_s=timeout_s, runner=runner)
    updates = backend.collect()

    host = collect_system_metadata(system_info)
    logger.debug("Host: fqdn=%s os=%s arch=%s", host.fqdn, host.os_family, host.platform)

    return build_report(updates, identity, host)


def run(
    os_release_path: Union[str, Path] = DEFAULT_OS_RELEASE,
    system_info: Optional[SystemInfo] = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    runner: Optional[Runner] = None,
    stream: Optional[TextIO] = None,
    output_format: str = "json",
) -> UpdateReport:
    """Collect a report and emit it to stream (default: stdout)."""
    report = collect_report(
        os_release_path=os_release_path,
        system_info=system_info,
        timeout_s=timeout_s,
        runner=runner,
    )
    emit_report(report, stream=stream, output_format=output_format)
    logger.info("Report emitted (%d update(s))", report.update_count)
    return report
