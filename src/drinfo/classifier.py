"""Mount classification: which mount table entries are drives worth reporting."""

from typing import Optional

from drinfo.models import DriveCategory, MountEntry

# =============================================================================
# Device and filesystem tables
# =============================================================================

PHYSICAL_DEVICE_PREFIXES = (
    "/dev/sd",
    "/dev/nvme",
    "/dev/hd",
    "/dev/vd",
    "/dev/xvd",
    "/dev/mmcblk",
)

NETWORK_DEVICE_PREFIXES = (
    "//",  # SMB share as written by mount.cifs
    "\\\\",  # UNC path
    "smb://",
)

NETWORK_FILESYSTEMS = frozenset({
    "nfs",
    "nfs4",
    "cifs",
    "smb",
    "smb3",
    "smbfs",
    "sshfs",
    "davfs",
    "fuse.sshfs",
    "fuse.rclone",
    "fuse.s3fs",
})

FUSE_PREFIX = "fuse."

# Virtual and pseudo filesystems that never hold user data
SKIPPED_FILESYSTEMS = frozenset({
    "proc",
    "sysfs",
    "devpts",
    "tmpfs",
    "devtmpfs",
    "securityfs",
    "cgroup",
    "cgroup2",
    "pstore",
    "efivarfs",
    "autofs",
    "debugfs",
    "tracefs",
    "configfs",
    "fusectl",
    "fuse.gvfsd-fuse",
    "fuse.portal",
    "binfmt_misc",
    "mqueue",
    "hugetlbfs",
    "bpf",
    "rpc_pipefs",
    "nsfs",
    "ramfs",
    "squashfs",
})

# AppImage runtimes mount themselves at /tmp/.mount_XXXXXX
TRANSIENT_MARKERS = ("AppImage", "/.mount_")

# Substring of a GVFS directory name -> provider display name
CLOUD_PROVIDERS = {
    "google-drive": "Google Drive",
    "dropbox": "Dropbox",
    "onedrive": "OneDrive",
    "mega": "MEGA",
}


# =============================================================================
# Predicates
# =============================================================================


def is_physical_device(device_path: str) -> bool:
    """Check for a local block device (/dev/sd*, /dev/nvme*, ...)."""
    return device_path.startswith(PHYSICAL_DEVICE_PREFIXES)


def is_network_device(device_path: str) -> bool:
    """Check for an SMB/UNC share or NFS-style host:path source."""
    return device_path.startswith(NETWORK_DEVICE_PREFIXES) or ":" in device_path


def is_network_filesystem(filesystem_type: str) -> bool:
    """Check for a network or FUSE-backed filesystem type."""
    return filesystem_type in NETWORK_FILESYSTEMS or filesystem_type.startswith(FUSE_PREFIX)


def is_skipped_filesystem(filesystem_type: str) -> bool:
    return filesystem_type in SKIPPED_FILESYSTEMS


def is_transient_mount(device_path: str, mount_point: str) -> bool:
    """Check for AppImage runtimes and other self-mounting temporary images."""
    return any(marker in device_path or marker in mount_point for marker in TRANSIENT_MARKERS)


def classify_mount(entry: MountEntry, include_other: bool = False) -> Optional[DriveCategory]:
    """
    Decide whether a mount table entry is a reportable drive.

    Args:
        entry: Mount table entry
        include_other: Accept entries that are neither local nor network

    Returns:
        The drive category, or None when the entry should be skipped
    """
    if is_skipped_filesystem(entry.filesystem_type):
        return None
    if is_transient_mount(entry.device_path, entry.mount_point):
        return None

    if is_physical_device(entry.device_path):
        return DriveCategory.local()
    if is_network_device(entry.device_path) or is_network_filesystem(entry.filesystem_type):
        return DriveCategory.network()
    if include_other:
        return DriveCategory.other()
    return None


def match_cloud_service(directory_name: str) -> Optional[str]:
    """Provider name for a GVFS directory such as 'google-drive:host=gmail.com,user=me'."""
    lowered = directory_name.lower()
    for marker, service_name in CLOUD_PROVIDERS.items():
        if marker in lowered:
            return service_name
    return None
