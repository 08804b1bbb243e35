from __future__ import annotations

import logging
import os
import re
from pathlib import Path

logger = logging.getLogger(__name__)


def target_path(root: str, rel: str) -> Path:
    return Path(root) / rel.lstrip("/")


def write_file(root: str, rel: str, contents: str, *, dry_run: bool = False) -> Path:
    p = target_path(root, rel)
    if dry_run:
        logger.info("Would write %s", str(p))
        return p
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")
    logger.info("Wrote %s", str(p))
    return p


def replace_symlink(root: str, rel: str, link_target: str, *, dry_run: bool = False) -> Path:
    """Point root/rel at link_target, replacing whatever is there.

    link_target is kept verbatim, so absolute targets resolve inside the image.
    """

    p = target_path(root, rel)
    if dry_run:
        logger.info("Would link %s -> %s", str(p), link_target)
        return p
    if p.is_symlink() or p.exists():
        p.unlink()
    p.parent.mkdir(parents=True, exist_ok=True)
    os.symlink(link_target, p)
    logger.info("Linked %s -> %s", str(p), link_target)
    return p


def substitute_lines(
    root: str,
    rel: str,
    pattern: str,
    replacement: str,
    *,
    append_if_missing: bool = False,
    dry_run: bool = False,
) -> int:
    """Replace every line matching pattern (anchored at line start).

    Returns the number of lines replaced. With append_if_missing the
    replacement is added at the end when nothing matched.
    """

    p = target_path(root, rel)
    if dry_run:
        logger.info("Would edit %s: %s -> %s", str(p), pattern, replacement)
        return 0
    if not p.exists():
        raise RuntimeError(f"Cannot edit missing file: {p}")

    rx = re.compile(pattern)
    lines = p.read_text(encoding="utf-8").splitlines()
    count = 0
    for i, line in enumerate(lines):
        if rx.match(line):
            lines[i] = replacement
            count += 1

    if count == 0 and append_if_missing:
        lines.append(replacement)

    p.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("Edited %s (%d line(s) matched %s)", str(p), count, pattern)
    return count
