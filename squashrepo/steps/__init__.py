from .step_10_fetch_archive import FetchArchiveStep
from .step_20_mount_archive import MountArchiveStep
from .step_30_install_packages import InstallPackagesStep
from .step_40_unmount_archive import UnmountArchiveStep
from .step_50_cleanup_archive import CleanupArchiveStep

__all__ = [
    "FetchArchiveStep",
    "MountArchiveStep",
    "InstallPackagesStep",
    "UnmountArchiveStep",
    "CleanupArchiveStep",
]
