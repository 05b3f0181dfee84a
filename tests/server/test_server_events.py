import datetime as dt
import json
import unittest

from server.events import StickyEventStore, make_event, parse_client_message


class ServerEventsTests(unittest.TestCase):
    def test_make_event_serializes_timestamp_and_payload(self) -> None:
        now = dt.datetime(2026, 2, 21, 10, 0, tzinfo=dt.timezone.utc)
        raw = make_event("clock", now_fn=lambda: now, time_text="25:00", is_running=False)
        payload = json.loads(raw)

        self.assertEqual("clock", payload["type"])
        self.assertEqual(now.isoformat(), payload["timestamp"])
        self.assertEqual("25:00", payload["time_text"])
        self.assertFalse(payload["is_running"])

    def test_sticky_store_ignores_non_sticky_events(self) -> None:
        store = StickyEventStore()
        store.remember("hello", '{"type":"hello"}')
        store.remember("command_result", '{"type":"command_result"}')
        self.assertEqual([], store.snapshot())

    def test_sticky_store_snapshot_replays_clock_last(self) -> None:
        store = StickyEventStore()
        store.remember("clock", '{"type":"clock","n":1}')
        store.remember("error", '{"type":"error","n":2}')
        store.remember("session_completed", '{"type":"session_completed","n":3}')

        snapshot = store.snapshot()
        decoded_types = [json.loads(item)["type"] for item in snapshot]
        self.assertEqual(["session_completed", "error", "clock"], decoded_types)

    def test_sticky_store_overwrites_latest_event_by_type(self) -> None:
        store = StickyEventStore()
        store.remember("clock", '{"type":"clock","time_remaining":10}')
        store.remember("clock", '{"type":"clock","time_remaining":9}')
        snapshot = store.snapshot()

        self.assertEqual(1, len(snapshot))
        self.assertEqual(9, json.loads(snapshot[0])["time_remaining"])

    def test_parse_client_message_accepts_json_objects(self) -> None:
        self.assertEqual({"command": "toggle"}, parse_client_message('{"command": "toggle"}'))
        self.assertEqual({"command": "reset"}, parse_client_message(b'{"command": "reset"}'))

    def test_parse_client_message_rejects_malformed_frames(self) -> None:
        self.assertIsNone(parse_client_message("not json"))
        self.assertIsNone(parse_client_message("[1, 2]"))
        self.assertIsNone(parse_client_message(b"\xff\xfe"))


if __name__ == "__main__":
    unittest.main()
