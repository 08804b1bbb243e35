from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List
from unittest import mock

from centos_image_builder.build_config import BuildConfig, ImageConfig
from centos_image_builder.context import BuildCtx

SSHD_CONFIG_EL7 = """\
#Port 22
PermitRootLogin yes
#PasswordAuthentication yes
PasswordAuthentication yes
ChallengeResponseAuthentication no
#UsePrivilegeSeparation sandbox
UseDNS no
"""

OS_RELEASE_EL7 = """\
NAME="CentOS Linux"
VERSION="7 (Core)"
ID="centos"
ID_LIKE="rhel fedora"
VERSION_ID="7"
PRETTY_NAME="CentOS Linux 7 (Core)"
"""


def make_root(root: Path, *, os_release: str | None = OS_RELEASE_EL7) -> Path:
    """Lay down the handful of files the customization steps touch."""
    (root / "etc/ssh").mkdir(parents=True, exist_ok=True)
    (root / "etc/ssh/sshd_config").write_text(SSHD_CONFIG_EL7, encoding="utf-8")
    if os_release is not None:
        (root / "etc/os-release").write_text(os_release, encoding="utf-8")
    return root


def make_image(install_dir: str, **overrides) -> ImageConfig:
    values = dict(
        install_dir=install_dir,
        mirror="http://mirror.example.org/centos/7/os/x86_64/Packages/",
        release_package="centos-release-7-2.1511.el7.centos.2.10.x86_64.rpm",
        image_name="lx-centos-7",
        proper_name="CentOS 7 LX Brand",
        description="CentOS 7 64-bit lx-brand image.",
    )
    values.update(overrides)
    return ImageConfig(**values)


def make_ctx(install_dir: str, *, raw=None, dry_run: bool = False, **image_overrides) -> BuildCtx:
    return BuildCtx(
        image=make_image(install_dir, **image_overrides),
        cfg=BuildConfig(raw=raw or {}),
        build_date="20160412",
        dry_run=dry_run,
    )


class FakeSubprocess:
    """Records argv lists passed to subprocess.run and returns success.

    tar invocations create their -f output so later steps can hash it.
    """

    def __init__(self, fail_on: str | None = None, returncode: int = 1) -> None:
        self.calls: List[List[str]] = []
        self.cwds: List[str | None] = []
        self.fail_on = fail_on
        self.returncode = returncode

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.cwds.append(kwargs.get("cwd"))
        if self.fail_on and argv and argv[0] == self.fail_on:
            return subprocess.CompletedProcess(argv, self.returncode, "", "boom")
        if argv and argv[0] == "tar":
            out = Path(argv[argv.index("-czf") + 1])
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_bytes(b"fake archive")
        return subprocess.CompletedProcess(argv, 0, "", "")

    def patch(self):
        return mock.patch("centos_image_builder.lib.command.subprocess.run", side_effect=self)

    def programs(self) -> List[str]:
        return [c[0] for c in self.calls]
