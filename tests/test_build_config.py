from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from centos_image_builder.build_config import (
    BuildConfig,
    UsageError,
    load_build_config,
    validate_image_config,
)


class BuildConfigTests(unittest.TestCase):
    def test_defaults_without_file(self) -> None:
        cfg = load_build_config(None)
        self.assertEqual(cfg.timezone, "UTC")
        self.assertEqual(cfg.locale, "en_US.UTF-8")
        self.assertEqual(cfg.package_groups, ["Core", "Base"])
        self.assertEqual(len(cfg.extra_packages), 1)
        self.assertEqual(
            cfg.systemd_override_services,
            ["systemd-hostnamed", "systemd-localed", "systemd-timedated", "httpd"],
        )
        self.assertEqual(cfg.exclude_file, "exclude.txt")
        self.assertTrue(cfg.update_submodule)

    def test_yaml_values_are_used(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "build.yaml"
            p.write_text(
                "build:\n"
                "  timezone: Europe/Berlin\n"
                "  extra_packages: []\n"
                "paths:\n"
                "  output_dir: out\n"
                "guest_tools:\n"
                "  update_submodule: false\n",
                encoding="utf-8",
            )
            cfg = load_build_config(str(p))
        self.assertEqual(cfg.timezone, "Europe/Berlin")
        self.assertEqual(cfg.extra_packages, [])
        self.assertEqual(cfg.output_dir, "out")
        self.assertFalse(cfg.update_submodule)

    def test_non_yaml_suffix_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "build.json"
            p.write_text("{}", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_build_config(str(p))

    def test_non_mapping_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "build.yml"
            p.write_text("- a\n- b\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_build_config(str(p))

    def test_malformed_yaml_is_reported_as_value_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "build.yaml"
            p.write_text("build: [unclosed\n", encoding="utf-8")
            with self.assertRaises(ValueError) as cm:
                load_build_config(str(p))
        self.assertIn("Failed to parse build config", str(cm.exception))
        self.assertIn("build.yaml", str(cm.exception))

    def test_non_mapping_section_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            p = Path(tmp) / "build.yaml"
            p.write_text("build: [a]\n", encoding="utf-8")
            with self.assertRaises(ValueError) as cm:
                load_build_config(str(p))
        self.assertIn("'build'", str(cm.exception))

    def test_image_values_section(self) -> None:
        cfg = BuildConfig(raw={"image": {"mirror": "http://m/"}})
        self.assertEqual(cfg.image_values, {"mirror": "http://m/"})


class ValidateImageConfigTests(unittest.TestCase):
    def test_urls_are_not_checked(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            image = validate_image_config(
                {
                    "install_dir": tmp,
                    "mirror": "not a url",
                    "release_package": "r.rpm",
                    "image_name": "img",
                    "proper_name": "Img",
                    "description": "d",
                    "docs_url": "also not a url",
                }
            )
        self.assertEqual(image.mirror, "not a url")
        self.assertEqual(image.docs_url, "also not a url")

    def test_relative_install_dir_is_made_absolute(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            base = Path(tmp).resolve()
            (base / "chroot").mkdir()
            old_cwd = os.getcwd()
            os.chdir(base)
            try:
                image = validate_image_config(
                    {
                        "install_dir": "chroot",
                        "mirror": "http://m/",
                        "release_package": "r.rpm",
                        "image_name": "img",
                        "proper_name": "Img",
                        "description": "d",
                    }
                )
            finally:
                os.chdir(old_cwd)
        self.assertEqual(image.install_dir, str(base / "chroot"))

    def test_install_dir_checked_before_other_values(self) -> None:
        with self.assertRaises(UsageError) as cm:
            validate_image_config({"install_dir": "/definitely/not/here"})
        self.assertIn("not found", str(cm.exception))


if __name__ == "__main__":
    unittest.main()
