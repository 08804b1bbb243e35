from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .build_config import BuildConfig, ImageConfig
from .lib.archive import archive_name


def today_stamp() -> str:
    return datetime.now().strftime("%Y%m%d")


@dataclass(frozen=True)
class BuildCtx:
    image: ImageConfig
    cfg: BuildConfig
    build_date: str
    dry_run: bool = False

    @property
    def target_root(self) -> str:
        return self.image.install_dir

    @property
    def release_download_path(self) -> str:
        return str(Path(self.cfg.download_dir) / self.image.release_package)

    @property
    def archive_path(self) -> str:
        return str(Path(self.cfg.output_dir) / archive_name(self.image.image_name, self.build_date))

    @property
    def record_path(self) -> str:
        return str(Path(self.cfg.output_dir) / f"{self.image.image_name}-{self.build_date}.build.json")
