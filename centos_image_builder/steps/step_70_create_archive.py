from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import BuildCtx
from ..lib.archive import create_tarball

logger = logging.getLogger(__name__)


class CreateArchiveStep:
    step_id = "70_create_archive"

    def run(self, ctx: BuildCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        out = ctx.archive_path
        logger.info("Saving installation as %s. This may take a few minutes.", out)
        create_tarball(
            ctx.target_root,
            out,
            exclude_file=ctx.cfg.exclude_file,
            dry_run=ctx.dry_run,
        )
        state["archive"] = out
        return state
