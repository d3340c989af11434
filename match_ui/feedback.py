import logging
import time

from match_core.Interface import FeedbackCue
from match_ui.ui_config import CUE_HAPTICS, CUE_MIN_INTERVAL

logger = logging.getLogger(__name__)


class FeedbackRouter:
    """
    Turns engine cues into sound / haptic requests.

    ``sound_player(cue_name)`` and ``haptic_player(pattern)`` are supplied by the
    platform layer; either may be None. Each cue is throttled by its minimum
    repeat interval and the toggles are read from the storage settings.
    """

    def __init__(self, storage=None, sound_player=None, haptic_player=None, clock=time.monotonic):
        self.storage = storage
        self.sound_player = sound_player
        self.haptic_player = haptic_player
        self.clock = clock
        self.sound_enabled = True
        self.haptic_enabled = True
        self.last_play = {}
        self.refresh_settings()

    def refresh_settings(self):
        if self.storage is None:
            return
        self.sound_enabled = self.storage.sound_enabled
        self.haptic_enabled = self.storage.haptic_enabled

    def play(self, cue) -> bool:
        name = cue.value if isinstance(cue, FeedbackCue) else str(cue)
        if name not in CUE_MIN_INTERVAL:
            logger.debug("Unknown feedback cue %s", name)
            return False
        now = self.clock()
        last = self.last_play.get(name)
        if last is not None and now - last < CUE_MIN_INTERVAL[name]:
            return False
        self.last_play[name] = now

        played = False
        if self.sound_enabled and self.sound_player is not None:
            played = self._call(self.sound_player, name) or played
        pattern = CUE_HAPTICS.get(name)
        if self.haptic_enabled and pattern is not None and self.haptic_player is not None:
            played = self._call(self.haptic_player, pattern) or played
        return played

    @staticmethod
    def _call(player, arg) -> bool:
        try:
            player(arg)
            return True
        except Exception:
            # Never break gameplay for audio / haptic failures.
            logger.warning("Feedback player failed for %s", arg, exc_info=True)
            return False

    def play_button_tap(self):
        return self.play(FeedbackCue.BUTTON_TAP)
