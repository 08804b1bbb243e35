from __future__ import annotations

import logging
from pathlib import Path

from .command import run_cmd

logger = logging.getLogger(__name__)

INSTALLER = "install.sh"


def update_submodule(tools_dir: str, *, dry_run: bool = False) -> None:
    run_cmd(["git", "submodule", "update", "--init", "--", tools_dir], dry_run=dry_run)


def install_guest_tools(tools_dir: str, target_root: str, *, dry_run: bool = False) -> None:
    """Run the guest tools installer against target_root.

    The installer resolves its payload relative to its own directory, so it
    runs with tools_dir as the working directory and target_root is passed
    as an absolute path.
    """

    installer = Path(tools_dir) / INSTALLER
    if not dry_run and not installer.exists():
        raise RuntimeError(f"Guest tools installer not found: {installer}")

    target = str(Path(target_root).resolve())
    run_cmd([f"./{INSTALLER}", "-i", target], cwd=tools_dir, dry_run=dry_run)
    logger.info("Guest tools installed into %s", target)
