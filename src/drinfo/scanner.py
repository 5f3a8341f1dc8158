"""Drive discovery: mount table, filesystem statistics and per-drive metadata."""

import logging
import os
import re
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from drinfo.bar import render_usage_bar
from drinfo.classifier import classify_mount, match_cloud_service
from drinfo.formatting import calculate_usage_percent
from drinfo.models import DriveCategory, DriveKind, DriveRecord, FsStats, MountEntry

logger = logging.getLogger(__name__)

MOUNTS_PATH = "/proc/mounts"
DISK_BY_DIR = "/dev/disk"
GVFS_FILESYSTEM = "fuse.gvfsd-fuse"
SMART_TIMEOUT = 5.0


class MountTableError(Exception):
    """The mount table could not be read."""


# =============================================================================
# Mount table
# =============================================================================


def _unescape_octal(value: str) -> str:
    """Decode the \\040 style escapes the kernel uses for spaces and tabs."""
    return re.sub(r"\\([0-7]{3})", lambda m: chr(int(m.group(1), 8)), value)


def read_mounts(path: str = MOUNTS_PATH) -> list[MountEntry]:
    """
    Read the mount table in order.

    Args:
        path: Mount table file in fstab format

    Returns:
        One MountEntry per line

    Raises:
        MountTableError: If the file cannot be read
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
    except OSError as e:
        raise MountTableError(f"Error opening mount table {path}: {e.strerror or e}") from e

    entries = []
    for line in lines:
        fields = line.split()
        if len(fields) < 3:
            continue
        entries.append(
            MountEntry(
                device_path=_unescape_octal(fields[0]),
                mount_point=_unescape_octal(fields[1]),
                filesystem_type=fields[2],
                mount_options=fields[3] if len(fields) > 3 else "",
            )
        )
    return entries


# =============================================================================
# Filesystem statistics and metadata
# =============================================================================


def get_fs_stats(mount_point: str) -> FsStats:
    """Filesystem statistics for a mount point. Raises OSError when unavailable."""
    st = os.statvfs(mount_point)
    return FsStats(
        total_bytes=st.f_blocks * st.f_frsize,
        available_bytes=st.f_bavail * st.f_frsize,
        total_inodes=st.f_files,
        free_inodes=st.f_ffree,
    )


def get_mount_time(mount_point: str) -> Optional[datetime]:
    """Inode change time of the mount point, a close proxy for when it was mounted."""
    try:
        return datetime.fromtimestamp(os.stat(mount_point).st_ctime)
    except OSError:
        return None


def _unescape_udev(name: str) -> str:
    """Decode the \\x20 style escapes udev uses in by-label link names."""
    return re.sub(r"\\x([0-9a-fA-F]{2})", lambda m: chr(int(m.group(1), 16)), name)


def _find_link_name(directory: Path, target: str) -> str:
    try:
        with os.scandir(directory) as entries:
            names = sorted(entry.name for entry in entries)
    except OSError:
        return ""

    for name in names:
        if os.path.realpath(directory / name) == target:
            return _unescape_udev(name)
    return ""


def resolve_uuid_label(device_path: str, disk_dir: str = DISK_BY_DIR) -> tuple[str, str]:
    """
    Look up the UUID and label of a block device.

    Scans the udev by-uuid and by-label symlink directories for a link that
    resolves to the device.

    Returns:
        Tuple of (uuid, label); empty strings when unresolvable
    """
    if not device_path.startswith("/dev/"):
        return "", ""

    target = os.path.realpath(device_path)
    base = Path(disk_dir)
    return _find_link_name(base / "by-uuid", target), _find_link_name(base / "by-label", target)


# =============================================================================
# SMART health
# =============================================================================


class HealthChecker(Protocol):
    """Anything that can report a short health status for a block device."""

    def query(self, device_path: str) -> Optional[str]:
        ...


_PARTITION_PATTERN = re.compile(
    r"^(?P<disk>/dev/(?:nvme\d+n\d+|mmcblk\d+))p\d+$"
    r"|^(?P<legacy>/dev/(?:sd|hd|vd|xvd)[a-z]+)\d+$"
)

_SMART_STATUS_MARKERS = (
    "SMART overall-health self-assessment test result:",  # ATA
    "SMART Health Status:",  # SCSI
)


def parent_device(device_path: str) -> str:
    """Whole-disk device for a partition (/dev/sda1 -> /dev/sda, /dev/nvme0n1p2 -> /dev/nvme0n1)."""
    match = _PARTITION_PATTERN.match(device_path)
    if not match:
        return device_path
    return match.group("disk") or match.group("legacy")


def parse_smart_health(output: str) -> Optional[str]:
    """Extract the overall status from `smartctl -H` output."""
    for line in output.splitlines():
        for marker in _SMART_STATUS_MARKERS:
            if marker in line:
                status = line.split(marker, 1)[1].strip()
                return status or None
    return None


class SmartctlHealthChecker:
    """Health status from smartctl, bounded by a timeout and cached per disk."""

    def __init__(self, timeout: float = SMART_TIMEOUT, binary: str = "smartctl"):
        self.timeout = timeout
        self.binary = binary
        self._cache: dict[str, Optional[str]] = {}

    def query(self, device_path: str) -> Optional[str]:
        disk = parent_device(device_path)
        if disk not in self._cache:
            self._cache[disk] = self._run(disk)
        return self._cache[disk]

    def _run(self, disk: str) -> Optional[str]:
        try:
            result = subprocess.run(
                [self.binary, "-H", disk],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.debug("%s -H %s timed out after %ss", self.binary, disk, self.timeout)
            return None
        except OSError as e:
            logger.debug("Cannot run %s, skipping health check: %s", self.binary, e)
            return None

        # smartctl exit codes are a bitmask, so the output is the only reliable signal
        status = parse_smart_health(result.stdout)
        if status is None:
            logger.debug("No SMART status for %s (exit %d)", disk, result.returncode)
        return status


# =============================================================================
# Records
# =============================================================================


def build_record(
    entry: MountEntry,
    category: DriveCategory,
    stats: FsStats,
    bar_length: int,
    uuid: str = "",
    label: str = "",
    health: str = "",
    mount_time: Optional[datetime] = None,
) -> DriveRecord:
    """Populate a complete drive record, usage bar included."""
    available_bytes = min(stats.available_bytes, stats.total_bytes)
    total_inodes = stats.total_inodes
    used_inodes = max(total_inodes - stats.free_inodes, 0)
    usage_percent = calculate_usage_percent(stats.total_bytes, available_bytes)

    return DriveRecord(
        mount_point=entry.mount_point,
        filesystem_type=entry.filesystem_type,
        device_path=entry.device_path,
        uuid=uuid,
        label=label,
        mount_options=entry.mount_options,
        health=health,
        mount_time=mount_time,
        total_bytes=stats.total_bytes,
        used_bytes=stats.total_bytes - available_bytes,
        available_bytes=available_bytes,
        total_inodes=total_inodes,
        used_inodes=used_inodes,
        category=category,
        rendered_bar=render_usage_bar(usage_percent, bar_length),
    )


def gvfs_directory() -> Path:
    """Per-user GVFS mount directory."""
    return Path(f"/run/user/{os.getuid()}/gvfs")


def scan_cloud_drives(gvfs_dir: Path, bar_length: int) -> list[DriveRecord]:
    """
    Find cloud storage exposed through GVFS.

    Each subdirectory whose name mentions a known provider becomes a cloud
    drive. These are not matched against mount table entries, so a backend
    that also appears in the mount table is reported twice.

    Args:
        gvfs_dir: GVFS directory, usually /run/user/<uid>/gvfs
        bar_length: Usage bar length

    Returns:
        Cloud drive records in directory name order
    """
    try:
        names = sorted(os.listdir(gvfs_dir))
    except OSError as e:
        logger.debug("No GVFS directory at %s: %s", gvfs_dir, e)
        return []

    records = []
    for name in names:
        service_name = match_cloud_service(name)
        if service_name is None:
            continue

        path = str(Path(gvfs_dir) / name)
        try:
            stats = get_fs_stats(path)
        except OSError as e:
            logger.debug("Skipping %s cloud drive at %s: %s", service_name, path, e)
            continue

        entry = MountEntry(device_path=name, mount_point=path, filesystem_type=GVFS_FILESYSTEM)
        records.append(
            build_record(
                entry,
                DriveCategory.cloud(service_name),
                stats,
                bar_length,
                mount_time=get_mount_time(path),
            )
        )
    return records


def scan_drives(
    bar_length: int,
    mounts_path: str = MOUNTS_PATH,
    gvfs_dir: Optional[Path] = None,
    health_checker: Optional[HealthChecker] = None,
    include_other: bool = False,
    disk_dir: str = DISK_BY_DIR,
) -> list[DriveRecord]:
    """
    Collect every reportable drive in one sequential pass.

    Mount table entries come first, in table order, followed by GVFS cloud
    drives. Entries whose statistics cannot be read are skipped.

    Args:
        bar_length: Usage bar length for every record
        mounts_path: Mount table to read
        gvfs_dir: GVFS directory to scan for cloud drives (None to skip)
        health_checker: Health status source for local drives (None to skip)
        include_other: Also report mounts that are neither local nor network
        disk_dir: udev /dev/disk directory for UUID and label lookup

    Returns:
        Drive records in discovery order

    Raises:
        MountTableError: If the mount table cannot be read
    """
    records = []

    for entry in read_mounts(mounts_path):
        category = classify_mount(entry, include_other=include_other)
        if category is None:
            continue

        try:
            stats = get_fs_stats(entry.mount_point)
        except OSError as e:
            logger.debug("Skipping %s: %s", entry.mount_point, e)
            continue

        uuid, label = resolve_uuid_label(entry.device_path, disk_dir)

        health = ""
        if health_checker is not None and category.kind == DriveKind.LOCAL:
            health = health_checker.query(entry.device_path) or ""

        records.append(
            build_record(
                entry,
                category,
                stats,
                bar_length,
                uuid=uuid,
                label=label,
                health=health,
                mount_time=get_mount_time(entry.mount_point),
            )
        )
        logger.debug("Found %s drive %s on %s", category.drive_type, entry.device_path, entry.mount_point)

    if gvfs_dir is not None:
        records.extend(scan_cloud_drives(gvfs_dir, bar_length))

    return records
