"""Log setup for image builds.

The log file always records DEBUG, which carries the captured stdout and
stderr of every external command. The console shows INFO unless verbose is
requested, and dry runs tag console lines so they are not mistaken for a
real build.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

DEFAULT_LOG_PATH = "logs/centos-image-builder.log"
FALLBACK_LOG_NAME = "centos-image-builder.log"

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(message)s"

# Marks handlers installed here so a second call replaces them.
_HANDLER_TAG = "_centos_image_builder"


def _open_log_file(log_path: str) -> Tuple[logging.FileHandler, str]:
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return logging.FileHandler(fallback), fallback


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    *,
    verbose: bool = False,
    dry_run: bool = False,
) -> str:
    """Install file and console handlers on the root logger.

    Returns the log file actually in use, which is a file in the working
    directory when log_path cannot be created.
    """

    root = logging.getLogger()
    for h in list(root.handlers):
        if getattr(h, _HANDLER_TAG, False):
            root.removeHandler(h)
            h.close()
    root.setLevel(logging.DEBUG)

    file_handler, chosen_path = _open_log_file(log_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z"))

    console = logging.StreamHandler()
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    prefix = "[dry-run] " if dry_run else ""
    console.setFormatter(logging.Formatter(prefix + CONSOLE_FORMAT))

    for h in (file_handler, console):
        setattr(h, _HANDLER_TAG, True)
        root.addHandler(h)

    log = logging.getLogger(__name__)
    if chosen_path != log_path:
        log.warning("Cannot write %s; logging to %s", log_path, chosen_path)
    else:
        log.info("Logging to %s", chosen_path)
    return chosen_path
