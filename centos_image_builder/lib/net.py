from __future__ import annotations

import logging
from pathlib import Path

from .command import run_cmd

logger = logging.getLogger(__name__)


def join_url(base: str, name: str) -> str:
    return f"{base.rstrip('/')}/{name}"


def fetch_url(url: str, dest: str, *, dry_run: bool = False) -> str:
    """Download url to dest with wget and return dest."""

    if not dry_run:
        Path(dest).parent.mkdir(parents=True, exist_ok=True)
    run_cmd(["wget", "-q", "-O", dest, url], dry_run=dry_run)
    logger.info("Fetched %s -> %s", url, dest)
    return dest
