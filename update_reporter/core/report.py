"""Report schema and assembly for update-reporter."""

from collections.abc import Sequence
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..metadata.system import HostInfo
from .errors import BuildError
from .osrelease import OsIdentity


class UpdateRecord(BaseModel):
    """One pending package upgrade, fields passed through from the backend."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: str = Field(..., description="Update kind (e.g., package, patch)")
    name: str = Field(..., description="Package name")
    new_version: str = Field(..., alias="version", description="Candidate version")
    architecture: str = Field(..., alias="arch", description="Package architecture")
    old_version: str = Field(
        ..., alias="oldVersion", description="Currently installed version"
    )
    summary: str = Field(..., description="One-line package summary")


class UpdateReport(BaseModel):
    """Complete update report for one host and one run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    updates: list[UpdateRecord] = Field(..., description="Pending updates")
    update_count: int = Field(
        ..., alias="updateCount", description="Number of pending updates (derived)"
    )
    fqdn: str = Field(..., description="Fully-qualified host name")
    os_family: str = Field(..., alias="osFamily", description="Host OS family")
    os_id: str = Field(..., alias="osId", description="Distribution id")
    os_version: str = Field(..., alias="osVersion", description="Distribution version")
    host_architecture: str = Field(
        ..., alias="hostArchitecture", description="Host platform/architecture"
    )

    @model_validator(mode="before")
    @classmethod
    def derive_update_count(cls, data: Any) -> Any:
        """Derive updateCount from the update list; reject a conflicting value."""
        if not isinstance(data, dict) or data.get("updates") is None:
            return data

        expected = len(data["updates"])
        for key in ("update_count", "updateCount"):
            if key in data and data[key] != expected:
                raise ValueError(
                    f"{key}={data[key]} does not match {expected} updates"
                )

        data = {k: v for k, v in data.items() if k != "update_count"}
        data["updateCount"] = expected
        return data

    def to_json(self, indent: Optional[int] = 2) -> str:
        """
        Serialize report to JSON string.

        Args:
            indent: JSON indentation level (None for compact output)

        Returns:
            JSON string using the wire field names
        """
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_yaml(self) -> str:
        """
        Serialize report to YAML string.

        Returns:
            YAML string using the wire field names
        """
        data = self.model_dump(by_alias=True, mode="json")
        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_json(cls, json_str: str) -> "UpdateReport":
        """Deserialize report from JSON string."""
        return cls.model_validate_json(json_str)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "UpdateReport":
        """Deserialize report from YAML string."""
        data = yaml.safe_load(yaml_str)
        return cls(**data)


def build_report(
    updates: Optional[Sequence[UpdateRecord]],
    identity: Optional[OsIdentity],
    host: Optional[HostInfo],
) -> UpdateReport:
    """
    Assemble the final report from the outputs of the earlier steps.

    No field is defaulted: every value comes from the update list, the
    OS identity or the host descriptors. ``os_version`` may be empty when
    the descriptor has no VERSION_ID; every other string must be set.

    Args:
        updates: Normalized update list from the active backend
        identity: OS identity from the release descriptor
        host: Host descriptors (FQDN, OS family, platform)

    Returns:
        UpdateReport with a derived update count

    Raises:
        BuildError: If any input or required field is missing
    """
    missing = [
        label
        for label, value in (
            ("updates", updates),
            ("OS identity", identity),
            ("host metadata", host),
        )
        if value is None
    ]
    if missing:
        raise BuildError(f"Missing report input(s): {', '.join(missing)}")

    required = {
        "fqdn": host.fqdn,
        "osFamily": host.os_family,
        "osId": identity.id,
        "hostArchitecture": host.platform,
    }
    empty = [name for name, value in required.items() if not value]
    if empty:
        raise BuildError(f"Missing required report field(s): {', '.join(empty)}")

    try:
        return UpdateReport(
            updates=list(updates),
            fqdn=host.fqdn,
            os_family=host.os_family,
            os_id=identity.id,
            os_version=identity.version,
            host_architecture=host.platform,
        )
    except ValidationError as e:
        raise BuildError(f"Invalid report: {e}") from e
