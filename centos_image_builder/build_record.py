from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict


def new_record() -> Dict[str, Any]:
    return {
        "current_step": None,
        "completed_steps": [],
        "errors": [],
    }


def save_build_record(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")
