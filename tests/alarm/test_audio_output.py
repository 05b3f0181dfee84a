import unittest
from unittest import mock

import numpy as np

from alarm import AlarmError

try:
    from alarm import output as alarm_output
except (ImportError, OSError):  # PortAudio missing on the host
    alarm_output = None


@unittest.skipIf(alarm_output is None, "sounddevice is not importable on this host")
class SoundDeviceAudioOutputTests(unittest.TestCase):
    def test_plays_whole_buffer_on_selected_device_and_waits(self) -> None:
        wav = np.zeros(441, dtype=np.float32)
        output = alarm_output.SoundDeviceAudioOutput(output_device_index=3)

        with mock.patch.object(alarm_output, "sd") as sd:
            output.play(wav, 44100)

        sd.play.assert_called_once_with(wav, samplerate=44100, device=3)
        sd.wait.assert_called_once_with()

    def test_non_blocking_play_does_not_wait(self) -> None:
        output = alarm_output.SoundDeviceAudioOutput()

        with mock.patch.object(alarm_output, "sd") as sd:
            output.play(np.ones(10, dtype=np.float32), 8000, blocking=False)

        self.assertIsNone(sd.play.call_args.kwargs["device"])
        sd.wait.assert_not_called()

    def test_device_failures_are_wrapped_in_alarm_error(self) -> None:
        output = alarm_output.SoundDeviceAudioOutput(output_device_index=7)

        with mock.patch.object(alarm_output, "sd") as sd:
            sd.play.side_effect = RuntimeError("Invalid device")
            with self.assertRaises(AlarmError) as raised:
                output.play(np.ones(10, dtype=np.float32), 8000)

        self.assertIn("Invalid device", str(raised.exception))
        self.assertIsInstance(raised.exception.__cause__, RuntimeError)

    def test_rejects_empty_and_multichannel_buffers(self) -> None:
        output = alarm_output.SoundDeviceAudioOutput()

        with mock.patch.object(alarm_output, "sd") as sd:
            for wav in (np.zeros(0, dtype=np.float32), np.zeros((4, 2), dtype=np.float32)):
                with self.subTest(shape=wav.shape):
                    with self.assertRaises(AlarmError):
                        output.play(wav, 8000)

        sd.play.assert_not_called()


if __name__ == "__main__":
    unittest.main()
