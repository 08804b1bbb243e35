from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from .command import run_cmd

logger = logging.getLogger(__name__)


def archive_name(image_name: str, build_date: str) -> str:
    return f"{image_name}-{build_date}.tar.gz"


def create_tarball(
    source_dir: str,
    out_path: str,
    *,
    exclude_file: str,
    dry_run: bool = False,
) -> str:
    """gzip-compressed tar of source_dir's contents, paths relative to it."""

    if not Path(exclude_file).exists():
        raise RuntimeError(f"Exclusion list missing: {exclude_file}")

    if not dry_run:
        Path(out_path).parent.mkdir(parents=True, exist_ok=True)

    run_cmd(
        [
            "tar",
            "-czf",
            out_path,
            f"--exclude-from={exclude_file}",
            "-C",
            source_dir,
            ".",
        ],
        dry_run=dry_run,
    )
    return out_path


def sha256_file(path: str, chunk_size: int = 1024 * 1024) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()


def write_sha256sums(artifact: str, *, dry_run: bool = False) -> Path:
    """Record artifact's digest in SHA256SUMS beside it, replacing a stale entry."""

    a = Path(artifact)
    sums_path = a.parent / "SHA256SUMS"
    if dry_run:
        logger.info("Would record sha256 of %s in %s", str(a), str(sums_path))
        return sums_path

    lines = []
    if sums_path.exists():
        lines = [
            ln
            for ln in sums_path.read_text(encoding="utf-8").splitlines()
            if ln.strip() and not ln.endswith(f"  {a.name}")
        ]
    lines.append(f"{sha256_file(str(a))}  {a.name}")
    sums_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("Recorded checksum for %s in %s", a.name, str(sums_path))
    return sums_path
