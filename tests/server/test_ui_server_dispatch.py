import json
import tempfile
import unittest
from pathlib import Path

from server.config import UIServerConfig
from server.service import UIServer


class UIServerDispatchTests(unittest.TestCase):
    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        index_file = Path(self._temp_dir.name) / "index.html"
        index_file.write_text("<html></html>", encoding="utf-8")
        self.server = UIServer(UIServerConfig(enabled=True, index_file=str(index_file)))

    def tearDown(self) -> None:
        self._temp_dir.cleanup()

    def test_dispatch_wraps_handler_result_as_command_result(self) -> None:
        received = []

        def handler(message):
            received.append(message)
            return {"command": message["command"], "accepted": True, "reason": "ok"}

        self.server.set_command_handler(handler)
        reply = json.loads(self.server._dispatch('{"command": "toggle"}'))

        self.assertEqual([{"command": "toggle"}], received)
        self.assertEqual("command_result", reply["type"])
        self.assertTrue(reply["accepted"])

    def test_dispatch_reports_malformed_messages(self) -> None:
        reply = json.loads(self.server._dispatch("{oops"))
        self.assertEqual("error", reply["type"])

    def test_dispatch_without_handler_sends_nothing(self) -> None:
        self.assertIsNone(self.server._dispatch('{"command": "sync"}'))

    def test_dispatch_turns_handler_errors_into_error_events(self) -> None:
        def handler(message):
            raise RuntimeError("listener failed")

        self.server.set_command_handler(handler)
        with self.assertLogs("ui_server", level="ERROR"):
            reply = json.loads(self.server._dispatch('{"command": "start"}'))

        self.assertEqual("error", reply["type"])
        self.assertIn("listener failed", reply["message"])

    def test_publish_while_stopped_still_remembers_sticky_events(self) -> None:
        self.server.publish("clock", time_text="24:59")
        self.server.publish("hello", message="ignored")

        snapshot = self.server._sticky_events.snapshot()
        self.assertEqual(1, len(snapshot))
        self.assertEqual("24:59", json.loads(snapshot[0])["time_text"])


if __name__ == "__main__":
    unittest.main()
