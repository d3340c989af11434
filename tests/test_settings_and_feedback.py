import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from match_core.Interface import FeedbackCue
from match_ui import settings_store
from match_ui.feedback import FeedbackRouter

from match_helpers import FakeClock


class SettingsStoreTestCase(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                data = settings_store.load_settings()
        self.assertEqual(settings_store.DEFAULT_SETTINGS, data)

    def test_load_sanitizes_unknown_values(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            ini_path.write_text(
                "[ui]\n"
                "onboarding_completed = yes\n"
                "theme_name = Neon\n"
                "sound_enabled = maybe\n"
                "haptic_enabled = 0\n",
                encoding="utf-8",
            )
            data = settings_store.load_settings(ini_path)
        self.assertEqual("true", data["onboarding_completed"])
        self.assertEqual("Golden Glow", data["theme_name"])
        self.assertEqual("true", data["sound_enabled"])
        self.assertEqual("false", data["haptic_enabled"])

    def test_save_writes_ui_section(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "nested" / "settings.ini"
            settings_store.save_settings(
                {"theme_name": "Day", "sound_enabled": False, "legacy_key": "x"},
                ini_path,
            )
            text = ini_path.read_text(encoding="utf-8")
        self.assertIn("[ui]", text)
        self.assertIn("theme_name = Day", text)
        self.assertIn("sound_enabled = false", text)
        self.assertNotIn("legacy_key", text)

    def test_garbage_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            ini_path.write_text("this is not an ini file", encoding="utf-8")
            data = settings_store.load_settings(ini_path)
        self.assertEqual(settings_store.DEFAULT_SETTINGS, data)


class FakeSettings:
    def __init__(self, sound=True, haptic=True):
        self.sound_enabled = sound
        self.haptic_enabled = haptic


class FeedbackRouterTestCase(unittest.TestCase):
    def make_router(self, sound=True, haptic=True):
        self.sounds = []
        self.haptics = []
        self.clock = FakeClock(0.0)
        return FeedbackRouter(
            FakeSettings(sound, haptic),
            sound_player=self.sounds.append,
            haptic_player=self.haptics.append,
            clock=self.clock,
        )

    def test_match_plays_sound_and_haptic(self):
        router = self.make_router()
        self.assertTrue(router.play(FeedbackCue.MATCH))
        self.assertEqual(["match"], self.sounds)
        self.assertEqual(["medium"], self.haptics)

    def test_card_flip_has_no_haptic(self):
        router = self.make_router()
        router.play(FeedbackCue.CARD_FLIP)
        self.assertEqual(["cardFlip"], self.sounds)
        self.assertEqual([], self.haptics)

    def test_toggles_are_honored(self):
        router = self.make_router(sound=False, haptic=True)
        router.play(FeedbackCue.MISTAKE)
        self.assertEqual([], self.sounds)
        self.assertEqual(["error"], self.haptics)

        router = self.make_router(sound=False, haptic=False)
        self.assertFalse(router.play(FeedbackCue.BIG_COMBO))

    def test_repeat_is_throttled(self):
        router = self.make_router()
        router.play("levelComplete")
        router.play("levelComplete")
        self.clock.advance(1.0)
        router.play("levelComplete")
        self.assertEqual(["levelComplete", "levelComplete"], self.sounds)

    def test_player_failure_never_propagates(self):
        def broken(_):
            raise OSError("no audio device")

        router = FeedbackRouter(FakeSettings(), sound_player=broken, haptic_player=None, clock=FakeClock(0.0))
        with self.assertLogs("match_ui.feedback", level="WARNING"):
            self.assertFalse(router.play(FeedbackCue.ACHIEVEMENT_UNLOCKED))

    def test_unknown_cue_is_ignored(self):
        router = self.make_router()
        self.assertFalse(router.play("fanfare"))
        self.assertEqual([], self.sounds)

    def test_refresh_settings(self):
        settings = FakeSettings()
        router = FeedbackRouter(settings)
        settings.sound_enabled = False
        router.refresh_settings()
        self.assertFalse(router.sound_enabled)
        self.assertFalse(router.play_button_tap())


if __name__ == "__main__":
    unittest.main()
