import os
import sys
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest.mock import patch

from app_config import (
    AppConfigurationError,
    load_app_config,
    resolve_config_path,
)


def _write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class AppConfigLoadingTests(unittest.TestCase):
    def test_load_app_config_uses_defaults_for_missing_sections(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "")

            app_config = load_app_config(str(config_path))

            self.assertEqual(str(config_path), app_config.source_file)
            self.assertEqual(25, app_config.timer.work_minutes)
            self.assertEqual(5, app_config.timer.break_minutes)
            self.assertEqual(1.0, app_config.timer.tick_interval_seconds)
            self.assertFalse(app_config.timer.auto_start)
            self.assertFalse(app_config.alarm.enabled)
            self.assertIsNone(app_config.alarm.output_device)
            self.assertEqual(3, app_config.alarm.work_repeats)
            self.assertEqual(1, app_config.alarm.break_repeats)
            self.assertTrue(app_config.ui_server.enabled)
            self.assertEqual(8765, app_config.ui_server.port)
            self.assertEqual("", app_config.ui_server.index_file)

    def test_load_app_config_parses_sections_and_resolves_paths(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            config_path = root / "config.toml"
            _write_text(
                config_path,
                textwrap.dedent(
                    """
                    [timer]
                    work_minutes = 50
                    break_minutes = "10"
                    tick_interval_seconds = 0.5
                    auto_start = "yes"

                    [alarm]
                    enabled = true
                    output_device = 2
                    volume = 0.8

                    [ui_server]
                    port = 9000
                    index_file = "web/index.html"
                    """
                ).strip(),
            )

            app_config = load_app_config(str(config_path))

            self.assertEqual(50, app_config.timer.work_minutes)
            self.assertEqual(10, app_config.timer.break_minutes)
            self.assertEqual(0.5, app_config.timer.tick_interval_seconds)
            self.assertTrue(app_config.timer.auto_start)
            self.assertTrue(app_config.alarm.enabled)
            self.assertEqual(2, app_config.alarm.output_device)
            self.assertEqual(0.8, app_config.alarm.volume)
            self.assertEqual(9000, app_config.ui_server.port)
            self.assertEqual(
                str((root / "web/index.html").resolve()),
                app_config.ui_server.index_file,
            )

    def test_load_app_config_rejects_out_of_range_minutes(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[timer]\nbreak_minutes = 45\n")

            with self.assertRaises(AppConfigurationError) as context:
                load_app_config(str(config_path))

            self.assertIn("timer.break_minutes", str(context.exception))

    def test_load_app_config_rejects_wrong_types(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "[alarm]\nenabled = \"maybe\"\n")

            with self.assertRaises(AppConfigurationError) as context:
                load_app_config(str(config_path))

            self.assertIn("alarm.enabled", str(context.exception))

    def test_load_app_config_rejects_non_table_section(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            _write_text(config_path, "timer = 5\n")

            with self.assertRaises(AppConfigurationError):
                load_app_config(str(config_path))

    def test_load_app_config_reports_missing_and_invalid_files(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "missing.toml"
            with self.assertRaises(AppConfigurationError):
                load_app_config(str(missing))

            broken = Path(temp_dir) / "broken.toml"
            _write_text(broken, "[timer\n")
            with self.assertRaises(AppConfigurationError) as context:
                load_app_config(str(broken))
            self.assertIn("Failed to parse config TOML", str(context.exception))

    def test_resolve_config_path_prefers_env_override(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "custom.toml"
            _write_text(config_path, "")

            with patch.dict(os.environ, {"APP_CONFIG_FILE": str(config_path)}):
                resolved = resolve_config_path()

            self.assertEqual(config_path, resolved)

    def test_resolve_config_path_uses_bundle_fallback(self) -> None:
        with tempfile.TemporaryDirectory() as cwd_dir, tempfile.TemporaryDirectory() as bundle_dir:
            bundled_config = Path(bundle_dir) / "config.toml"
            _write_text(bundled_config, "")

            with patch.dict(os.environ, {}, clear=True):
                with patch("app_config.Path.cwd", return_value=Path(cwd_dir)):
                    with patch.object(sys, "_MEIPASS", bundle_dir, create=True):
                        resolved = resolve_config_path()

            self.assertEqual(bundled_config, resolved)


if __name__ == "__main__":
    unittest.main()
