from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .lib.systemd import DEFAULT_OVERRIDE_SERVICES

DEFAULT_DOCS_URL = "https://docs.joyent.com/images/container-native-linux"


class UsageError(ValueError):
    """Raised when command line or config values fail validation."""


@dataclass(frozen=True)
class ImageConfig:
    install_dir: str
    mirror: str
    release_package: str
    image_name: str
    proper_name: str
    description: str
    docs_url: str = DEFAULT_DOCS_URL


# (field, flag, label) in the order values are checked.
REQUIRED_FIELDS = [
    ("mirror", "-m", "mirror"),
    ("release_package", "-r", "release package"),
    ("image_name", "-i", "image name"),
    ("proper_name", "-p", "proper name"),
    ("description", "-D", "description"),
]


def validate_image_config(values: Dict[str, Any]) -> ImageConfig:
    """Build an ImageConfig, failing on the first missing required value.

    The install directory must already exist and is made absolute, since
    later steps run commands from other working directories. Nothing else is
    checked semantically; mirror and docs URLs are taken as given.
    """

    install_dir = values.get("install_dir")
    if not install_dir:
        raise UsageError("missing install directory (-d) value")
    if not Path(install_dir).exists():
        raise UsageError(f"Directory {install_dir} not found")

    for field, flag, label in REQUIRED_FIELDS:
        if not values.get(field):
            raise UsageError(f"missing {label} ({flag}) value")

    return ImageConfig(
        install_dir=str(Path(install_dir).resolve()),
        mirror=str(values["mirror"]),
        release_package=str(values["release_package"]),
        image_name=str(values["image_name"]),
        proper_name=str(values["proper_name"]),
        description=str(values["description"]),
        docs_url=str(values.get("docs_url") or DEFAULT_DOCS_URL),
    )


SECTIONS = ("image", "build", "paths", "guest_tools")


@dataclass(frozen=True)
class BuildConfig:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def image_values(self) -> Dict[str, Any]:
        return dict(self._section("image"))

    @property
    def timezone(self) -> str:
        return str(self._section("build").get("timezone") or "UTC")

    @property
    def locale(self) -> str:
        return str(self._section("build").get("locale") or "en_US.UTF-8")

    @property
    def vendor(self) -> str:
        return str(self._section("build").get("vendor") or "Joyent")

    @property
    def package_groups(self) -> List[str]:
        return list(self._section("build").get("package_groups") or ["Core", "Base"])

    @property
    def extra_packages(self) -> List[str]:
        pkgs = self._section("build").get("extra_packages")
        if pkgs is None:
            return ["vim-enhanced"]
        return list(pkgs)

    @property
    def systemd_override_services(self) -> List[str]:
        svcs = self._section("build").get("systemd_override_services")
        if svcs is None:
            return list(DEFAULT_OVERRIDE_SERVICES)
        return list(svcs)

    @property
    def guest_tools_dir(self) -> str:
        return str(self._section("paths").get("guest_tools_dir") or "guesttools")

    @property
    def exclude_file(self) -> str:
        return str(self._section("paths").get("exclude_file") or "exclude.txt")

    @property
    def output_dir(self) -> str:
        return str(self._section("paths").get("output_dir") or ".")

    @property
    def download_dir(self) -> str:
        return str(self._section("paths").get("download_dir") or "/var/tmp")

    @property
    def update_submodule(self) -> bool:
        value = self._section("guest_tools").get("update_submodule")
        return True if value is None else bool(value)


def load_build_config(path: str | None) -> BuildConfig:
    """Load YAML build settings; no path means all defaults."""

    if not path:
        return BuildConfig(raw={})

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("build config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse build config '{path}': {e}") from e
    if not isinstance(raw, dict):
        raise ValueError("build config must contain a mapping/object")

    for name in SECTIONS:
        section = raw.get(name)
        if section is not None and not isinstance(section, dict):
            raise ValueError(f"build config section '{name}' in '{path}' must be a mapping")

    return BuildConfig(raw=raw)
