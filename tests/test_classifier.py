"""Tests for mount classification."""

import pytest

from drinfo.classifier import (
    SKIPPED_FILESYSTEMS,
    classify_mount,
    is_network_device,
    is_network_filesystem,
    is_physical_device,
    is_skipped_filesystem,
    is_transient_mount,
    match_cloud_service,
)
from drinfo.models import DriveCategory, DriveKind, MountEntry


def mount(device: str, mount_point: str = "/mnt/x", fstype: str = "ext4") -> MountEntry:
    return MountEntry(device_path=device, mount_point=mount_point, filesystem_type=fstype)


class TestIsPhysicalDevice:
    @pytest.mark.parametrize("device", ["/dev/sda1", "/dev/nvme0n1p2", "/dev/hdb", "/dev/vda1", "/dev/mmcblk0p1"])
    def test_block_devices(self, device):
        assert is_physical_device(device)

    @pytest.mark.parametrize("device", ["/dev/loop0", "tmpfs", "server:/export", "/dev/mapper/root"])
    def test_not_block_devices(self, device):
        assert not is_physical_device(device)


class TestIsNetworkDevice:
    def test_nfs_host_path(self):
        assert is_network_device("10.0.0.1:/export")

    def test_smb_share(self):
        assert is_network_device("//nas/share")

    def test_unc_path(self):
        assert is_network_device("\\\\nas\\share")

    def test_local_device(self):
        assert not is_network_device("/dev/sda1")


class TestIsNetworkFilesystem:
    @pytest.mark.parametrize("fstype", ["nfs", "nfs4", "cifs", "smb3", "fuse.sshfs", "fuse.rclone"])
    def test_known_types(self, fstype):
        assert is_network_filesystem(fstype)

    def test_generic_fuse_prefix(self):
        assert is_network_filesystem("fuse.somethingnew")

    def test_bare_fuse_is_not_network(self):
        assert not is_network_filesystem("fuse")

    def test_local_type(self):
        assert not is_network_filesystem("ext4")


class TestSkippedFilesystems:
    @pytest.mark.parametrize("fstype", ["proc", "sysfs", "tmpfs", "cgroup2", "fuse.gvfsd-fuse", "binfmt_misc"])
    def test_pseudo_filesystems(self, fstype):
        assert is_skipped_filesystem(fstype)

    def test_real_filesystem(self):
        assert not is_skipped_filesystem("ext4")

    def test_no_overlap_with_network_types(self):
        assert not any(fs in SKIPPED_FILESYSTEMS for fs in ["nfs", "cifs", "fuse.sshfs"])


class TestIsTransientMount:
    def test_appimage_mount_point(self):
        assert is_transient_mount("MyApp.AppImage", "/tmp/.mount_MyAppXyz")

    def test_mount_pattern_only(self):
        assert is_transient_mount("/dev/loop3", "/tmp/.mount_AppImage123")

    def test_regular_mount(self):
        assert not is_transient_mount("/dev/sdb1", "/media/usb")


class TestClassifyMount:
    def test_local_disk(self):
        assert classify_mount(mount("/dev/sda1", "/", "ext4")) == DriveCategory.local()

    def test_nfs_export(self):
        category = classify_mount(mount("10.0.0.1:/export", "/mnt/nfs", "nfs4"))
        assert category.kind == DriveKind.NETWORK

    def test_network_by_device_alone(self):
        category = classify_mount(mount("10.0.0.1:/export", "/mnt/nfs", "unknownfs"))
        assert category.kind == DriveKind.NETWORK

    def test_sshfs_by_type_alone(self):
        category = classify_mount(mount("user@host", "/mnt/ssh", "fuse.sshfs"))
        assert category.kind == DriveKind.NETWORK

    def test_appimage_rejected(self):
        assert classify_mount(mount("/dev/sda1", "/tmp/.mount_AppImage123", "ext4")) is None

    def test_pseudo_filesystem_rejected(self):
        assert classify_mount(mount("proc", "/proc", "proc")) is None

    def test_skip_wins_over_network_type(self):
        assert classify_mount(mount("gvfsd-fuse", "/run/user/1000/gvfs", "fuse.gvfsd-fuse")) is None

    def test_unmatched_rejected_by_default(self):
        assert classify_mount(mount("/dev/mapper/vg-home", "/home", "xfs")) is None

    def test_unmatched_kept_as_other(self):
        category = classify_mount(mount("/dev/mapper/vg-home", "/home", "xfs"), include_other=True)
        assert category == DriveCategory.other()

    def test_include_other_still_skips_pseudo(self):
        assert classify_mount(mount("tmpfs", "/run", "tmpfs"), include_other=True) is None


class TestMatchCloudService:
    @pytest.mark.parametrize(
        "name,service",
        [
            ("google-drive:host=gmail.com,user=alex", "Google Drive"),
            ("dav:host=dropbox.example", "Dropbox"),
            ("onedrive:host=live.com", "OneDrive"),
            ("mega:user=alex", "MEGA"),
        ],
    )
    def test_providers(self, name, service):
        assert match_cloud_service(name) == service

    def test_case_insensitive(self):
        assert match_cloud_service("Google-Drive:host=x") == "Google Drive"

    def test_unknown(self):
        assert match_cloud_service("smb-share:server=nas,share=media") is None
