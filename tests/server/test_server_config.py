import tempfile
import unittest
from pathlib import Path

from app_config_schema import UIServerSettings
from server.config import ServerConfigurationError, UIServerConfig, bundled_index_file


class UIServerConfigTests(unittest.TestCase):
    def test_from_settings_uses_bundled_index_page(self) -> None:
        settings = UIServerSettings(enabled=True, host="127.0.0.1", port=8765, index_file="")

        config = UIServerConfig.from_settings(settings)

        self.assertEqual(("web_ui", "index.html"), Path(config.index_file).parts[-2:])
        self.assertTrue(Path(config.index_file).is_file())
        self.assertEqual("/ws", config.websocket_path)

    def test_from_settings_prefers_explicit_index_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            custom = Path(temp_dir) / "index.html"
            custom.write_text("<html></html>", encoding="utf-8")

            settings = UIServerSettings(index_file=str(custom))

            config = UIServerConfig.from_settings(settings)
            self.assertEqual(str(custom), config.index_file)

    def test_rejects_port_out_of_range(self) -> None:
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(enabled=False, port=70000)

    def test_rejects_blank_host(self) -> None:
        with self.assertRaises(ServerConfigurationError):
            UIServerConfig(enabled=False, host="  ")

    def test_rejects_missing_index_file_when_enabled(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "nope.html"
            with self.assertRaises(ServerConfigurationError):
                UIServerConfig(enabled=True, index_file=str(missing))

    def test_disabled_server_skips_index_validation(self) -> None:
        config = UIServerConfig(enabled=False, index_file="")
        self.assertFalse(config.enabled)

    def test_bundled_page_rings_on_session_completed(self) -> None:
        page = bundled_index_file().read_text(encoding="utf-8")

        self.assertIn('message.type === "session_completed"', page)
        self.assertIn('message.completed_session_type === "work" ? 3 : 1', page)
        self.assertIn("new AudioContext()", page)


if __name__ == "__main__":
    unittest.main()
