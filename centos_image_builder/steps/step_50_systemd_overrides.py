from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import BuildCtx
from ..lib.osrelease import detect_os_major_version, is_systemd_release
from ..lib.systemd import write_sandbox_overrides

logger = logging.getLogger(__name__)


class SystemdOverridesStep:
    step_id = "50_systemd_overrides"

    def run(self, ctx: BuildCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        if "os_major_version" in state:
            version = state["os_major_version"]
        else:
            version = detect_os_major_version(ctx.target_root)

        if not is_systemd_release(version):
            logger.info("Skipping systemd overrides (os version=%s)", version)
            state["systemd_overrides"] = []
            return state

        services = ctx.cfg.systemd_override_services
        write_sandbox_overrides(ctx.target_root, services, dry_run=ctx.dry_run)
        state["systemd_overrides"] = list(services)
        return state
