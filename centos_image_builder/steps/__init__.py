from .step_10_prepare_root import PrepareRootStep
from .step_20_install_release import InstallReleaseStep
from .step_30_install_packages import InstallPackagesStep
from .step_40_configure_system import ConfigureSystemStep
from .step_50_systemd_overrides import SystemdOverridesStep
from .step_60_install_guest_tools import InstallGuestToolsStep
from .step_70_create_archive import CreateArchiveStep
from .step_80_write_checksums import WriteChecksumsStep

__all__ = [
    "PrepareRootStep",
    "InstallReleaseStep",
    "InstallPackagesStep",
    "ConfigureSystemStep",
    "SystemdOverridesStep",
    "InstallGuestToolsStep",
    "CreateArchiveStep",
    "WriteChecksumsStep",
]
