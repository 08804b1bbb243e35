from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..context import BuildCtx
from ..lib.branding import render_motd, render_product
from ..lib.files import replace_symlink, substitute_lines, write_file
from ..lib.osrelease import detect_os_major_version, is_systemd_release

logger = logging.getLogger(__name__)

SSHD_CONFIG = "/etc/ssh/sshd_config"


def locale_conf_path(version: Optional[int]) -> str:
    if is_systemd_release(version):
        return "/etc/locale.conf"
    return "/etc/sysconfig/i18n"


def harden_sshd(target_root: str, *, dry_run: bool = False) -> None:
    substitute_lines(
        target_root,
        SSHD_CONFIG,
        r"PasswordAuthentication\s+yes\b",
        "PasswordAuthentication no",
        dry_run=dry_run,
    )
    # The "sandbox" privilege separation mode relies on seccomp filters that
    # container runtimes may not provide.
    substitute_lines(
        target_root,
        SSHD_CONFIG,
        r"#?\s*UsePrivilegeSeparation\b",
        "UsePrivilegeSeparation yes",
        append_if_missing=True,
        dry_run=dry_run,
    )


class ConfigureSystemStep:
    step_id = "40_configure_system"

    def run(self, ctx: BuildCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        root = ctx.target_root
        dry_run = ctx.dry_run

        tz = ctx.cfg.timezone
        logger.info("Setting timezone to %s", tz)
        replace_symlink(root, "/etc/localtime", f"/usr/share/zoneinfo/{tz}", dry_run=dry_run)

        version = detect_os_major_version(root)
        state["os_major_version"] = version

        locale_path = locale_conf_path(version)
        logger.info("Setting locale to %s in %s (os version=%s)", ctx.cfg.locale, locale_path, version)
        write_file(root, locale_path, f'LANG="{ctx.cfg.locale}"\n', dry_run=dry_run)

        logger.info("Disabling PasswordAuthentication and forcing UsePrivilegeSeparation")
        harden_sshd(root, dry_run=dry_run)

        image = ctx.image
        write_file(
            root,
            "/etc/motd",
            render_motd(name=image.proper_name, build_date=ctx.build_date, docs_url=image.docs_url),
            dry_run=dry_run,
        )
        write_file(
            root,
            "/etc/product",
            render_product(
                vendor=ctx.cfg.vendor,
                name=image.proper_name,
                build_date=ctx.build_date,
                docs_url=image.docs_url,
                description=image.description,
            ),
            dry_run=dry_run,
        )
        return state
