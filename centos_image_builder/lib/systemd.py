from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from .files import write_file

logger = logging.getLogger(__name__)

DEFAULT_OVERRIDE_SERVICES = (
    "systemd-hostnamed",
    "systemd-localed",
    "systemd-timedated",
    "httpd",
)

# Namespace and mount sandboxing that container runtimes without full
# kernel namespace support refuse at unit start.
SANDBOX_OVERRIDE = """\
[Service]
PrivateTmp=no
PrivateDevices=no
PrivateNetwork=no
ProtectSystem=no
ProtectHome=no
ProtectControlGroups=no
ProtectKernelTunables=no
"""


def override_path(service: str) -> str:
    unit = service if service.endswith(".service") else f"{service}.service"
    return f"/etc/systemd/system/{unit}.d/override.conf"


def write_sandbox_overrides(
    target_root: str,
    services: Sequence[str] = DEFAULT_OVERRIDE_SERVICES,
    *,
    dry_run: bool = False,
) -> List[Path]:
    written = []
    for svc in services:
        written.append(write_file(target_root, override_path(svc), SANDBOX_OVERRIDE, dry_run=dry_run))
    logger.info("Wrote systemd overrides for %s", ", ".join(services))
    return written
