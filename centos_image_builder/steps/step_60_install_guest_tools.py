from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import BuildCtx
from ..lib.guest_tools import install_guest_tools, update_submodule

logger = logging.getLogger(__name__)


class InstallGuestToolsStep:
    step_id = "60_install_guest_tools"

    def run(self, ctx: BuildCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        tools_dir = ctx.cfg.guest_tools_dir
        logger.info("Installing guest tools from %s into %s", tools_dir, ctx.target_root)

        if ctx.cfg.update_submodule:
            update_submodule(tools_dir, dry_run=ctx.dry_run)

        install_guest_tools(tools_dir, ctx.target_root, dry_run=ctx.dry_run)
        return state
