import logging
import time

from match_core.Cards import LEVEL_ORDER, GameLevel
from match_core.Core import Core, GameState
from match_core.Interface import Interface
from match_core.Scheduler import ManualScheduler
from match_ui.achievement_store import get_achievement
from match_ui.adapter import CoreAdapter
from match_ui.feedback import FeedbackRouter
from match_ui.level_store import playable_levels
from match_ui.stats_store import format_stats_lines
from match_ui.storage import Storage
from match_ui.ui_config import ACHIEVEMENTS, GAME, MENU, SETTINGS, STATS

logger = logging.getLogger(__name__)


class GameHost(Interface):
    """
    Presentation-side owner of the engine. A renderer drives it by calling
    tick() on its frame timer and reading ``vm`` / ``message``; it never talks to
    the engine's internals directly.
    """

    def __init__(self, storage: Storage | None = None, scheduler=None, feedback=None, clock=time.time, rng=None):
        super().__init__()
        self.storage = storage if storage is not None else Storage()
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.feedback = feedback if feedback is not None else FeedbackRouter(self.storage)
        self.stage = MENU
        self.vm = None
        self.message = ""
        self.anim_queue = []
        self.victory_summary = {}
        self.needs_redraw = True

        core = Core(scheduler=self.scheduler, progress=self.storage, clock=clock, rng=rng)
        core.registerInterface(self)
        self.vm = CoreAdapter.snapshot(core)

    # region navigation

    def open_menu(self):
        if self.core.gameState in (GameState.PLAYING, GameState.PAUSED, GameState.COMPLETED, GameState.GAME_OVER):
            self.core.resetGame()
        self.stage = MENU
        self.message = "Pick a level: " + ", ".join(level.displayName for level in self.available_levels())
        self.request_redraw()

    def open_stats(self):
        self.stage = STATS
        self.message = "\n".join(self.format_stats_lines())
        self.request_redraw()

    def open_achievements(self):
        self.stage = ACHIEVEMENTS
        self.message = "\n".join(self.format_achievement_lines())
        self.request_redraw()

    def open_settings(self):
        self.stage = SETTINGS
        self.feedback.refresh_settings()
        self.request_redraw()

    # endregion

    def available_levels(self) -> list[GameLevel]:
        return playable_levels(self.storage.unlocked_levels)

    def start_new_game(self, level: GameLevel) -> bool:
        if not self.core.canPlayLevel(level):
            logger.info("Refused to start locked level %s", level.value)
            self.message = f"{level.displayName} is locked."
            self.request_redraw()
            return False
        self.feedback.refresh_settings()
        self.anim_queue.clear()
        self.victory_summary = {}
        self.core.startGame(level)
        self.stage = GAME
        self.message = f"{level.displayName} started. Find all the pairs."
        self.request_redraw()
        return True

    def flip(self, card_id) -> bool:
        return self.core.flipCard(card_id)

    def toggle_pause(self) -> bool:
        if self.core.gameState == GameState.PLAYING:
            self.message = "Paused."
            return self.core.pauseGame()
        if self.core.gameState == GameState.PAUSED:
            self.message = ""
            return self.core.resumeGame()
        return False

    def reset_progress(self):
        self.storage.reset_all_progress()
        self.message = "All progress has been reset."
        self.request_redraw()

    def tick(self):
        self.scheduler.runDue()
        if self.stage == GAME and self.core.gameState == GameState.PLAYING:
            # Elapsed-time label.
            self.vm = CoreAdapter.snapshot(self.core)
            self.needs_redraw = True

    def request_redraw(self):
        self.needs_redraw = True

    # region Interface

    def onStart(self):
        self.vm = CoreAdapter.snapshot(self.core)
        self.request_redraw()

    def onEvent(self, event):
        self.vm = CoreAdapter.snapshot(self.core)
        self.anim_queue.append(CoreAdapter.event_to_animation(event))
        super().onEvent(event)

    def onFeedback(self, cue):
        self.feedback.play(cue)

    def onComplete(self, session, record):
        self.vm = CoreAdapter.snapshot(self.core)
        self.victory_summary = session.summary()
        lines = [f"Level complete! Score {session.score}, mistakes {session.mistakes}, time {self.vm.formatted_time}."]
        if record is not None:
            achievements = self.storage.achievements
            for achievement_id in record.unlocked_achievements:
                achievement = get_achievement(achievements, achievement_id)
                if achievement is not None:
                    lines.append(f"Achievement unlocked: {achievement.icon} {achievement.title}")
            if record.unlocked_level is not None:
                lines.append(f"New level unlocked: {record.unlocked_level.displayName}")
            self.victory_summary["unlocked_achievements"] = list(record.unlocked_achievements)
            self.victory_summary["unlocked_level"] = (
                record.unlocked_level.value if record.unlocked_level is not None else None
            )
        self.message = "\n".join(lines)
        self.request_redraw()

    def notifyRedraw(self):
        self.request_redraw()

    # endregion

    def format_stats_lines(self) -> list[str]:
        return format_stats_lines(self.storage.game_statistics)

    def format_achievement_lines(self) -> list[str]:
        lines = []
        for a in self.storage.achievements:
            mark = "x" if a.is_unlocked else " "
            lines.append(f"[{mark}] {a.icon} {a.title}: {a.description} ({min(a.progress, a.target)}/{a.target})")
        lines.append(f"Completed {self.storage.completion_percentage():.0f}%")
        return lines

    def format_level_lines(self) -> list[str]:
        unlocked = self.storage.unlocked_levels
        return [
            f"{level.value:<7} {level.displayName}{'' if level.value in unlocked else '  (locked)'}"
            for level in LEVEL_ORDER
        ]
