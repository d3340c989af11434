"""
Persistence service for everything that outlives a single game: lifetime
statistics, achievements, unlocked levels and the player settings.

One ``Storage`` is created by the host and handed to the engine; nothing here is
a module-level singleton. Progress goes through an injectable key-value store,
settings through the INI file handled by ``settings_store``.
"""

import logging
import threading
from dataclasses import dataclass, field

from match_core.Cards import GameLevel
from match_ui import achievement_store, level_store, settings_store, stats_store
from match_ui.kv_store import JsonFileStore
from match_ui.stats_store import GameStatistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameRecord:
    statistics: GameStatistics
    unlocked_achievements: tuple[str, ...] = field(default_factory=tuple)
    unlocked_level: GameLevel | None = None


class Storage:
    PROGRESS_KEYS = (
        stats_store.STATS_KEY,
        achievement_store.ACHIEVEMENTS_KEY,
        level_store.UNLOCKED_LEVELS_KEY,
    )

    def __init__(self, store=None, settings_path=None):
        self.store = store if store is not None else JsonFileStore()
        self.settings_path = settings_path
        self._lock = threading.Lock()

    def _read(self, key, expected_type):
        raw = self.store.get(key)
        if raw is not None and not isinstance(raw, expected_type):
            logger.warning("Stored %s is malformed (%s), using defaults", key, type(raw).__name__)
        return raw

    # region progress

    @property
    def game_statistics(self) -> GameStatistics:
        return stats_store._sanitize(self._read(stats_store.STATS_KEY, dict))

    @game_statistics.setter
    def game_statistics(self, stats):
        stats_store.save_stats(self.store, stats)

    @property
    def achievements(self) -> list:
        return achievement_store._sanitize(self._read(achievement_store.ACHIEVEMENTS_KEY, list))

    @achievements.setter
    def achievements(self, achievements):
        achievement_store.save_achievements(self.store, achievements)

    @property
    def unlocked_levels(self) -> set[str]:
        return level_store._sanitize(self._read(level_store.UNLOCKED_LEVELS_KEY, list))

    @unlocked_levels.setter
    def unlocked_levels(self, unlocked):
        level_store.save_unlocked_levels(self.store, unlocked)

    def record_game_session(self, session) -> GameRecord:
        """
        Folds a finished session into statistics, then achievements, then the
        unlocked levels. Only one recording runs at a time.
        """
        duration = session.duration(session.endTime if session.endTime is not None else session.startTime)
        with self._lock:
            stats = stats_store.record_game(
                self.game_statistics,
                score=session.score,
                elapsed=duration,
                mistakes=session.mistakes,
                matches=session.matches,
            )
            self.game_statistics = stats

            achievements, newly_unlocked = achievement_store.evaluate_achievements(self.achievements, session, stats)
            self.achievements = achievements

            unlocked, new_level = level_store.unlock_after(self.unlocked_levels, session.level, session.mistakes)
            self.unlocked_levels = unlocked

        logger.info(
            "Recorded %s game: score=%s mistakes=%s time=%.1fs",
            session.level.value,
            session.score,
            session.mistakes,
            duration,
        )
        return GameRecord(statistics=stats, unlocked_achievements=tuple(newly_unlocked), unlocked_level=new_level)

    def reset_all_progress(self):
        with self._lock:
            for key in self.PROGRESS_KEYS:
                self.store.delete(key)
        logger.info("All progress reset")

    def is_level_unlocked(self, level) -> bool:
        return level_store.is_level_unlocked(self.unlocked_levels, level)

    def get_achievement(self, achievement_id):
        return achievement_store.get_achievement(self.achievements, achievement_id)

    def unlocked_achievements(self):
        return achievement_store.unlocked_achievements(self.achievements)

    def completion_percentage(self) -> float:
        return achievement_store.completion_percentage(self.achievements)

    # endregion

    # region settings

    def settings(self) -> dict:
        return settings_store.load_settings(self.settings_path)

    def _set(self, key, value):
        settings_store.update_setting(key, value, self.settings_path)

    @property
    def has_completed_onboarding(self) -> bool:
        return settings_store.as_bool(self.settings(), "onboarding_completed")

    @has_completed_onboarding.setter
    def has_completed_onboarding(self, value):
        self._set("onboarding_completed", bool(value))

    @property
    def selected_theme(self) -> str:
        return self.settings()["theme_name"]

    @selected_theme.setter
    def selected_theme(self, theme):
        self._set("theme_name", theme)

    @property
    def sound_enabled(self) -> bool:
        return settings_store.as_bool(self.settings(), "sound_enabled")

    @sound_enabled.setter
    def sound_enabled(self, value):
        self._set("sound_enabled", bool(value))

    @property
    def haptic_enabled(self) -> bool:
        return settings_store.as_bool(self.settings(), "haptic_enabled")

    @haptic_enabled.setter
    def haptic_enabled(self, value):
        self._set("haptic_enabled", bool(value))

    def reset_onboarding(self):
        self.has_completed_onboarding = False

    # endregion
