from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def rpm_initdb(target_root: str, *, dry_run: bool = False) -> None:
    run_cmd(["rpm", f"--root={target_root}", "--initdb"], dry_run=dry_run)


def rpm_checksig(package_path: str, *, dry_run: bool = False) -> None:
    """Verify digests and signature of a downloaded package file."""

    run_cmd(["rpm", "--checksig", package_path], dry_run=dry_run)


def rpm_install_nodeps(target_root: str, package_path: str, *, dry_run: bool = False) -> None:
    # The release package declares dependencies that only exist once the
    # repositories it ships are usable, so they cannot be satisfied yet.
    run_cmd(
        ["rpm", f"--root={target_root}", "-ivh", "--nodeps", package_path],
        dry_run=dry_run,
    )


def _yum(target_root: str, *args: str) -> list[str]:
    return ["yum", f"--installroot={target_root}", *args]


def yum_groupinstall(target_root: str, groups: Sequence[str], *, dry_run: bool = False) -> None:
    if not groups:
        return
    run_cmd(_yum(target_root, "-y", "groupinstall", *groups), dry_run=dry_run)


def yum_install(target_root: str, packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(_yum(target_root, "-y", "install", *packages), dry_run=dry_run)


def yum_update(target_root: str, *, dry_run: bool = False) -> None:
    run_cmd(_yum(target_root, "-y", "update"), dry_run=dry_run)


def yum_clean_all(target_root: str, *, dry_run: bool = False) -> None:
    run_cmd(_yum(target_root, "clean", "all"), dry_run=dry_run)
    logger.info("Cleaned yum caches in %s", target_root)
