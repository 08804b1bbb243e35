from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from ..context import BuildCtx
from ..lib.command import run_cmd
from ..lib.pkg import rpm_initdb

logger = logging.getLogger(__name__)


class PrepareRootStep:
    step_id = "10_prepare_root"

    def run(self, ctx: BuildCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        root = ctx.target_root
        logger.info("Installing CentOS into %s", root)

        # Always starts from an empty tree; earlier customizations are lost.
        if Path(root).is_dir():
            logger.info("Found previous install root; deleting and creating a new one")
            run_cmd(["rm", "-rf", root], dry_run=ctx.dry_run)
        if not ctx.dry_run:
            Path(root).mkdir(parents=True, exist_ok=True)

        rpm_initdb(root, dry_run=ctx.dry_run)
        return state
