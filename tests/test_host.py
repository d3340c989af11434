import random
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from match_core.Cards import GameLevel
from match_core.Core import GameState
from match_core.Scheduler import ManualScheduler, TkScheduler
from match_ui import cli
from match_ui.feedback import FeedbackRouter
from match_ui.kv_store import JsonFileStore, MemoryStore
from match_ui.storage import Storage
from match_ui.ui_config import GAME, MENU, STATS

from match_helpers import FakeClock, pairs_of


class GameHostTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.clock = FakeClock()
        self.storage = Storage(MemoryStore(), settings_path=Path(self.tmp.name) / "settings.ini")
        self.sounds = []
        self.host = cli.GameHost(
            storage=self.storage,
            scheduler=ManualScheduler(clock=self.clock),
            feedback=FeedbackRouter(self.storage, sound_player=self.sounds.append, clock=self.clock),
            clock=self.clock,
            rng=random.Random(42),
        )

    def test_easy_perfect_game_end_to_end(self):
        host = self.host
        self.assertTrue(host.start_new_game(GameLevel.EASY))
        self.assertEqual(GAME, host.stage)
        self.assertEqual(10, len(host.vm.cards))

        pairs = pairs_of(host.core.cards)
        first, second = pairs[0]
        host.flip(first.id)
        host.flip(second.id)
        self.assertEqual(10, host.vm.score)
        self.assertEqual(1, host.core.session.matches)

        for a, b in pairs[1:]:
            self.clock.advance(1.0)
            host.flip(a.id)
            host.flip(b.id)
        self.assertEqual(GameState.PLAYING, host.core.gameState)

        self.clock.advance(1.0)
        host.tick()
        session = host.core.session
        self.assertEqual(GameState.COMPLETED, host.core.gameState)
        self.assertEqual("completed", host.vm.state)
        self.assertEqual(0, session.mistakes)
        # 100 from five chained matches, 300 - 5 seconds of bonus, doubled
        self.assertEqual((100 + 295) * 2, session.score)

        stats = self.storage.game_statistics
        self.assertEqual(1, stats.perfect_games)
        self.assertEqual(session.score, stats.best_score)
        self.assertTrue(self.storage.get_achievement("tiger_eye").is_unlocked)
        self.assertTrue(self.storage.get_achievement("speed_demon").is_unlocked)
        self.assertIn("medium", self.storage.unlocked_levels)
        self.assertIn("Achievement unlocked: 👁️ Tiger Eye", host.message)
        self.assertIn("New level unlocked: Medium (4×4)", host.message)
        self.assertEqual("medium", host.victory_summary["unlocked_level"])
        self.assertIn("levelComplete", self.sounds)
        self.assertIn("achievementUnlocked", self.sounds)
        self.assertEqual("VICTORY", host.anim_queue[-1].type)

    def test_locked_level_is_refused(self):
        self.assertFalse(self.host.start_new_game(GameLevel.EXPERT))
        self.assertIn("locked", self.host.message)
        self.assertEqual(GameState.MENU, self.host.core.gameState)

    def test_mismatch_flips_back_on_tick(self):
        host = self.host
        host.start_new_game(GameLevel.EASY)
        cards = host.core.cards
        a = cards[0]
        b = next(c for c in cards if c.symbol != a.symbol)
        host.flip(a.id)
        host.flip(b.id)
        self.assertEqual(2, sum(1 for c in host.vm.cards if c.face_up))
        self.clock.advance(0.5)
        host.tick()
        self.assertEqual(2, sum(1 for c in host.vm.cards if c.face_up))
        self.clock.advance(0.5)
        host.tick()
        self.assertEqual(0, sum(1 for c in host.vm.cards if c.face_up))
        self.assertEqual("HIDE", host.anim_queue[-1].type)

    def test_toggle_pause_and_menu(self):
        host = self.host
        host.start_new_game(GameLevel.EASY)
        self.assertTrue(host.toggle_pause())
        self.assertEqual(GameState.PAUSED, host.core.gameState)
        self.assertTrue(host.toggle_pause())
        self.assertEqual(GameState.PLAYING, host.core.gameState)
        host.open_menu()
        self.assertEqual(MENU, host.stage)
        self.assertEqual(GameState.MENU, host.core.gameState)
        self.assertFalse(host.toggle_pause())

    def test_stats_and_reset_progress(self):
        host = self.host
        host.open_stats()
        self.assertEqual(STATS, host.stage)
        self.assertIn("Played 0", host.message)
        self.storage.unlocked_levels = {"easy", "medium"}
        host.reset_progress()
        self.assertEqual([GameLevel.EASY], host.available_levels())
        lines = host.format_achievement_lines()
        self.assertEqual(6, len(lines))
        self.assertTrue(lines[0].startswith("[ ]"))
        self.assertIn("(locked)", host.format_level_lines()[1])


class TkHostTestCase(unittest.TestCase):
    def test_tick_with_tk_scheduler_leaves_timers_to_the_event_loop(self):
        root = MagicMock()
        root.after.return_value = "after#1"
        with tempfile.TemporaryDirectory() as td:
            storage = Storage(MemoryStore(), settings_path=Path(td) / "settings.ini")
            host = cli.GameHost(storage=storage, scheduler=TkScheduler(root), rng=random.Random(3))
            host.start_new_game(GameLevel.EASY)
            cards = host.core.cards
            a = cards[0]
            b = next(c for c in cards if c.symbol != a.symbol)
            host.flip(a.id)
            host.flip(b.id)
            host.tick()
            self.assertEqual(2, sum(1 for c in host.vm.cards if c.face_up))

            delay, fire = root.after.call_args[0]
            self.assertEqual(1000, delay)
            fire()
            host.tick()
            self.assertEqual(0, sum(1 for c in host.vm.cards if c.face_up))


class CommandLineTestCase(unittest.TestCase):
    def test_build_host_uses_data_dir(self):
        with tempfile.TemporaryDirectory() as td:
            args = cli.parse_args(["--data-dir", td, "--seed", "5", "--level", "easy"])
            host = cli.build_host(args)
            self.assertIsInstance(host.storage.store, JsonFileStore)
            self.assertEqual(Path(td) / "progress.json", host.storage.store.path)
            self.assertEqual(Path(td) / "settings.ini", host.storage.settings_path)
            self.assertEqual("easy", args.level)


if __name__ == "__main__":
    unittest.main()
