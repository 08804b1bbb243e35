from __future__ import annotations

import shlex
from pathlib import Path
from typing import Dict, Optional

OS_RELEASE = "etc/os-release"


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse os-release(5) KEY=value lines, unquoting values."""

    out: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value]
        out[key.strip()] = parts[0] if parts else ""
    return out


def detect_os_major_version(target_root: str) -> Optional[int]:
    """Return the major VERSION_ID of the tree at target_root.

    None means /etc/os-release is absent (CentOS 6 and older ship none) or
    carries no usable VERSION_ID.
    """

    p = Path(target_root) / OS_RELEASE
    if not p.exists():
        return None

    version_id = parse_os_release(p.read_text(encoding="utf-8")).get("VERSION_ID", "")
    major = version_id.split(".", 1)[0]
    if not major.isdigit():
        return None
    return int(major)


def is_systemd_release(version: Optional[int]) -> bool:
    return version is not None and version >= 7
