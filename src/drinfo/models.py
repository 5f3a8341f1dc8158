"""Data models for drinfo."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from drinfo.formatting import calculate_usage_percent, format_bytes, format_percent


class DriveKind(str, Enum):
    """Kind of storage behind a mount."""

    LOCAL = "local"  # Physical block device
    NETWORK = "network"  # NFS, SMB or FUSE-backed remote
    CLOUD = "cloud"  # Cloud provider exposed through GVFS
    OTHER = "other"  # Anything else, only listed with --all


class SortKey(str, Enum):
    """Presentation order for the drive list."""

    SIZE = "size"  # Total capacity, largest first
    USAGE = "usage"  # Usage percent, fullest first
    MOUNT = "mount"  # Mount point, A-Z
    NAME = "name"  # Device path, A-Z


class DriveCategory(BaseModel):
    """Classification of a drive; the service name exists only for cloud drives."""

    model_config = ConfigDict(frozen=True)

    kind: DriveKind
    service_name: Optional[str] = None

    @model_validator(mode="after")
    def _service_only_for_cloud(self) -> "DriveCategory":
        if (self.kind == DriveKind.CLOUD) != (self.service_name is not None):
            raise ValueError("service_name is required for cloud drives and only for them")
        return self

    @classmethod
    def local(cls) -> "DriveCategory":
        return cls(kind=DriveKind.LOCAL)

    @classmethod
    def network(cls) -> "DriveCategory":
        return cls(kind=DriveKind.NETWORK)

    @classmethod
    def cloud(cls, service_name: str) -> "DriveCategory":
        return cls(kind=DriveKind.CLOUD, service_name=service_name)

    @classmethod
    def other(cls) -> "DriveCategory":
        return cls(kind=DriveKind.OTHER)

    @property
    def is_cloud(self) -> bool:
        return self.kind == DriveKind.CLOUD

    @property
    def drive_type(self) -> str:
        """Display name of the drive type. Cloud drives count as network."""
        if self.kind in (DriveKind.NETWORK, DriveKind.CLOUD):
            return "Network"
        if self.kind == DriveKind.LOCAL:
            return "Local"
        return "Other"


class MountEntry(BaseModel):
    """One line of the mount table."""

    device_path: str = Field(..., description="Mounted device or remote source")
    mount_point: str = Field(..., description="Directory the filesystem is mounted on")
    filesystem_type: str = Field(..., description="Filesystem type, e.g. ext4 or nfs4")
    mount_options: str = Field("", description="Comma separated mount options")


class FsStats(BaseModel):
    """Filesystem statistics for a mount point."""

    total_bytes: int = Field(..., ge=0)
    available_bytes: int = Field(..., ge=0, description="Space available to unprivileged users")
    total_inodes: int = Field(0, ge=0)
    free_inodes: int = Field(0, ge=0)


class DriveRecord(BaseModel):
    """A mounted drive accepted for the report."""

    model_config = ConfigDict(frozen=True)

    # Identification
    mount_point: str = Field(..., description="Mount point")
    filesystem_type: str = Field(..., description="Filesystem type")
    device_path: str = Field(..., description="Device path or remote source")

    # Optional metadata, empty when unresolvable
    uuid: str = Field("", description="Filesystem UUID")
    label: str = Field("", description="Filesystem label")
    mount_options: str = Field("", description="Mount options")
    health: str = Field("", description="SMART health status (local drives only)")
    mount_time: Optional[datetime] = Field(None, description="When the mount point last changed")

    # Capacity
    total_bytes: int = Field(..., ge=0, description="Total size in bytes")
    used_bytes: int = Field(..., ge=0, description="Used space in bytes")
    available_bytes: int = Field(..., ge=0, description="Available space in bytes")
    total_inodes: int = Field(0, ge=0, description="Total inodes")
    used_inodes: int = Field(0, ge=0, description="Used inodes")

    category: DriveCategory = Field(..., exclude=True)
    rendered_bar: str = Field("", exclude=True, description="Colored usage bar")

    @model_validator(mode="after")
    def _check_capacity(self) -> "DriveRecord":
        if self.used_bytes + self.available_bytes > self.total_bytes:
            raise ValueError("used + available bytes exceed total")
        if self.used_inodes > self.total_inodes:
            raise ValueError("used inodes exceed total")
        return self

    @computed_field
    @property
    def usage_percent(self) -> float:
        """Percentage of the drive in use."""
        return calculate_usage_percent(self.total_bytes, self.available_bytes)

    @computed_field
    @property
    def inode_usage_percent(self) -> float:
        """Percentage of inodes in use."""
        return calculate_usage_percent(self.total_inodes, self.total_inodes - self.used_inodes)

    @computed_field
    @property
    def drive_type(self) -> str:
        return self.category.drive_type

    @computed_field
    @property
    def is_cloud(self) -> bool:
        return self.category.is_cloud

    @computed_field
    @property
    def cloud_service_name(self) -> Optional[str]:
        return self.category.service_name

    @property
    def total_human(self) -> str:
        return format_bytes(self.total_bytes)

    @property
    def used_human(self) -> str:
        return format_bytes(self.used_bytes)

    @property
    def available_human(self) -> str:
        return format_bytes(self.available_bytes)

    @property
    def percent_human(self) -> str:
        return format_percent(self.usage_percent)
