from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import BuildCtx
from ..lib.pkg import yum_clean_all, yum_groupinstall, yum_install, yum_update

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "30_install_packages"

    def run(self, ctx: BuildCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        root = ctx.target_root
        groups = ctx.cfg.package_groups
        extra = ctx.cfg.extra_packages

        logger.info("Installing package groups: %s", ", ".join(groups))
        yum_groupinstall(root, groups, dry_run=ctx.dry_run)
        yum_install(root, extra, dry_run=ctx.dry_run)
        yum_update(root, dry_run=ctx.dry_run)
        yum_clean_all(root, dry_run=ctx.dry_run)

        state["packages"] = {"groups": groups, "extra": extra}
        return state
