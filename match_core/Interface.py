from enum import Enum


class FeedbackCue(Enum):
    CARD_FLIP = "cardFlip"
    MATCH = "match"
    COMBO = "combo"
    BIG_COMBO = "bigCombo"
    MISTAKE = "mistake"
    LEVEL_COMPLETE = "levelComplete"
    ACHIEVEMENT_UNLOCKED = "achievementUnlocked"
    BUTTON_TAP = "buttonTap"


class Interface:

    def __init__(self):
        self.core = None

    def onStart(self):
        pass

    def onEvent(self, event):
        """
        Invoked after the engine applied an event.
        :param event: a match_core.Core.GameEvent
        :return:
        """
        self.notifyRedraw()
        pass

    def onFeedback(self, cue: FeedbackCue):
        """
        Fire-and-forget request for an audio cue / haptic pulse.
        :param cue:
        :return:
        """
        pass

    def onComplete(self, session, record):
        """
        Invoked once per finished game, after the session was recorded.
        :param session: the finalized GameSession
        :param record: whatever the persistence service returned, or None
        :return:
        """
        pass

    def notifyRedraw(self):
        pass
