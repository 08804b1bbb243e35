from __future__ import annotations

from typing import Any, Dict

from ..context import BuildCtx
from ..lib.archive import write_sha256sums


class WriteChecksumsStep:
    step_id = "80_write_checksums"

    def run(self, ctx: BuildCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        archive = state.get("archive") or ctx.archive_path
        state["checksums"] = str(write_sha256sums(archive, dry_run=ctx.dry_run))
        return state
