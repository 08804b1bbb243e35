from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, NoReturn, Optional

from .build_config import (
    DEFAULT_DOCS_URL,
    BuildConfig,
    ImageConfig,
    UsageError,
    load_build_config,
    validate_image_config,
)
from .build_record import new_record, save_build_record
from .context import BuildCtx, today_stamp
from .lib.command import CommandError
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .steps import (
    ConfigureSystemStep,
    CreateArchiveStep,
    InstallGuestToolsStep,
    InstallPackagesStep,
    InstallReleaseStep,
    PrepareRootStep,
    SystemdOverridesStep,
    WriteChecksumsStep,
)

logger = logging.getLogger(__name__)

PROG = "centos-image-builder"

DESCRIPTION = "Install and modify CentOS in a given directory using a given mirror."

EXAMPLE = f"""\
example:
  {PROG} -d /data/chroot \\
    -m http://mirror.centos.org/centos/7/os/x86_64/Packages/ \\
    -r centos-release-7-2.1511.el7.centos.2.10.x86_64.rpm \\
    -i lx-centos-7 -p "CentOS 7 LX Brand" \\
    -D "CentOS 7 64-bit lx-brand image." \\
    -u {DEFAULT_DOCS_URL}
"""

# argparse dest -> ImageConfig field
FLAG_FIELDS = {
    "install_dir": "install_dir",
    "mirror": "mirror",
    "release": "release_package",
    "image_name": "image_name",
    "name": "proper_name",
    "desc": "description",
    "docs": "docs_url",
}


class UsageArgumentParser(argparse.ArgumentParser):
    """Reports parse errors with the full help text and exit status 1."""

    def error(self, message: str) -> NoReturn:
        self.print_help(sys.stderr)
        self.exit(1, f"\nError: {message}\n")


def build_steps():
    return [
        PrepareRootStep(),
        InstallReleaseStep(),
        InstallPackagesStep(),
        ConfigureSystemStep(),
        SystemdOverridesStep(),
        InstallGuestToolsStep(),
        CreateArchiveStep(),
        WriteChecksumsStep(),
    ]


def build_parser() -> argparse.ArgumentParser:
    p = UsageArgumentParser(
        prog=PROG,
        description=DESCRIPTION,
        epilog=EXAMPLE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-d", dest="install_dir", metavar="INSTALL_DIR", help="A path to the install directory")
    p.add_argument("-m", dest="mirror", metavar="MIRROR", help="A URL for the desired archive mirror")
    p.add_argument(
        "-r",
        dest="release",
        metavar="RELEASE_PACKAGE",
        help="The release package to use. The name of the package should be found in the mirror",
    )
    p.add_argument(
        "-i",
        dest="image_name",
        metavar="IMAGE_NAME",
        help="The name of the image. This is used for naming the tarball",
    )
    p.add_argument(
        "-p",
        dest="name",
        metavar="NAME",
        help="The proper name of the image. Use quotes. This is used in the MOTD and /etc/product file",
    )
    p.add_argument(
        "-D",
        dest="desc",
        metavar="DESC",
        help="A brief description of the image. This is used in the /etc/product file",
    )
    p.add_argument(
        "-u",
        dest="docs",
        metavar="DOCS",
        help=f"A URL to the image docs [optional] (default: {DEFAULT_DOCS_URL})",
    )
    p.add_argument("--config", default=None, help="YAML build settings")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to build log")
    p.add_argument("--record", default=None, help="Path to JSON build record")
    p.add_argument("--stop-after", default=None, help="Stop after step_id (e.g. 40_configure_system)")
    p.add_argument("--dry-run", action="store_true", help="Log commands and file writes without running them")
    p.add_argument("-v", "--verbose", action="store_true", help="Show command output on the console")
    return p


def resolve_image_config(args: argparse.Namespace, cfg: BuildConfig) -> ImageConfig:
    """Merge config file image values with flags; flags win."""

    values: Dict[str, Any] = cfg.image_values
    for dest, field in FLAG_FIELDS.items():
        v = getattr(args, dest, None)
        if v:
            values[field] = v
    return validate_image_config(values)


def run_build(
    *,
    image: ImageConfig,
    cfg: BuildConfig,
    log_path: str = DEFAULT_LOG_PATH,
    record_path: Optional[str] = None,
    stop_after: Optional[str] = None,
    dry_run: bool = False,
    verbose: bool = False,
    build_date: Optional[str] = None,
) -> Dict[str, Any]:
    """Run every build step, persisting a build record even on failure."""

    actual_log_path = configure_logging(log_path=log_path, verbose=verbose, dry_run=dry_run)

    ctx = BuildCtx(image=image, cfg=cfg, build_date=build_date or today_stamp(), dry_run=dry_run)
    record_path = record_path or ctx.record_path

    state = new_record()
    state["image"] = {
        "name": image.image_name,
        "proper_name": image.proper_name,
        "install_dir": image.install_dir,
        "build_date": ctx.build_date,
    }
    state["log_path"] = actual_log_path
    state["dry_run"] = dry_run

    try:
        result = run_pipeline(ctx=ctx, state=state, steps=build_steps(), stop_after=stop_after)
        state = result.state
        state["ran_steps"] = result.ran_steps
        logger.info("Installation complete: %s", state.get("archive") or "(no archive)")
        return state
    except Exception as e:
        logger.exception("Build failed")
        state.setdefault("errors", []).append({"step": state.get("current_step"), "error": str(e)})
        raise
    finally:
        save_build_record(record_path, state)


def main(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_help(sys.stderr)
        return 1

    args = parser.parse_args(argv)

    try:
        cfg = load_build_config(args.config)
        image = resolve_image_config(args, cfg)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if isinstance(e, UsageError):
            parser.print_help(sys.stderr)
        return 1

    try:
        run_build(
            image=image,
            cfg=cfg,
            log_path=args.log,
            record_path=args.record,
            stop_after=args.stop_after,
            dry_run=bool(args.dry_run),
            verbose=bool(args.verbose),
        )
    except CommandError as e:
        return e.exit_status
    except (RuntimeError, OSError, ValueError):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
