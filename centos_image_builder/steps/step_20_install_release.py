from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import BuildCtx
from ..lib.net import fetch_url, join_url
from ..lib.pkg import rpm_checksig, rpm_install_nodeps

logger = logging.getLogger(__name__)


class InstallReleaseStep:
    step_id = "20_install_release"

    def run(self, ctx: BuildCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        url = join_url(ctx.image.mirror, ctx.image.release_package)
        pkg_path = fetch_url(url, ctx.release_download_path, dry_run=ctx.dry_run)

        rpm_checksig(pkg_path, dry_run=ctx.dry_run)
        rpm_install_nodeps(ctx.target_root, pkg_path, dry_run=ctx.dry_run)

        state["release_package"] = {"url": url, "path": pkg_path}
        logger.info("Release package %s installed", ctx.image.release_package)
        return state
