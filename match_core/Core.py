import logging
import time
from enum import Enum

from match_core.Cards import Card, GameLevel, createDeck
from match_core.Interface import FeedbackCue
from match_core.Scheduler import ManualScheduler
from match_core.Session import GameSession

logger = logging.getLogger(__name__)

FLIP_BACK_DELAY = 1.0
COMPLETE_DELAY = 1.0
BIG_COMBO = 5

TASK_FLIP_BACK = "flipBack"
TASK_COMPLETE = "complete"


class GameState(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETED = "completed"
    GAME_OVER = "gameOver"


class GameContractError(RuntimeError):
    pass


class GameEvent:
    pass


class GameStarted(GameEvent):
    def __init__(self, level: GameLevel, cardCount: int):
        self.level = level
        self.cardCount = cardCount


class CardFlipped(GameEvent):
    def __init__(self, cardId: int):
        self.cardId = cardId


class PairMatched(GameEvent):
    def __init__(self, cardIds: tuple, combo: int, score: int):
        self.cardIds = cardIds
        self.combo = combo
        self.score = score


class PairMismatched(GameEvent):
    def __init__(self, cardIds: tuple, score: int):
        self.cardIds = cardIds
        self.score = score


class CardsHidden(GameEvent):
    def __init__(self, cardIds: tuple):
        self.cardIds = cardIds


class GameCompleted(GameEvent):
    def __init__(self, score: int, mistakes: int, duration: float):
        self.score = score
        self.mistakes = mistakes
        self.duration = duration


class StateChanged(GameEvent):
    def __init__(self, old: GameState, new: GameState):
        self.old = old
        self.new = new


class Core:
    """
    ask-style entry points (startGame, flipCard, pauseGame, ...) are called by the
    presentation layer and return False when the request is ignored.
    _handle*** : the actual state mutation, no checks.

    Delayed work (flipping a mismatched pair back, finishing the game after the
    last match) goes through the scheduler and is tagged with the round id, so a
    callback from a superseded round never touches the current one.
    """

    def __init__(self, scheduler=None, progress=None, clock=time.time, rng=None):
        self.interface = None
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.progress = progress  # persistence service, see match_ui.storage.Storage
        self.clock = clock
        self.rng = rng

        self.cards: list[Card] = []
        self.gameState = GameState.MENU
        self.currentLevel = GameLevel.EASY
        self.session: GameSession | None = None
        self.flippedCards: list[Card] = []
        self.comboCount = 0
        self.lastRecord = None

        self.roundId = 0
        self.pendingTasks = {}
        self.suspendedTasks = []

    def registerInterface(self, interface):
        self.interface = interface
        interface.core = self

    # region lifecycle

    def startGame(self, level: GameLevel = GameLevel.EASY):
        if self.interface is None:
            raise GameContractError("interface is null")
        self._cancelPending()
        self.suspendedTasks = []
        self.roundId += 1

        self.currentLevel = level
        self.session = GameSession(level, self.clock())
        self.cards = createDeck(level, self.rng)
        self.flippedCards = []
        self.comboCount = 0
        self.lastRecord = None
        for card in self.cards:
            card.isFlipped = False
            card.isMatched = False

        self.interface.onStart()
        self._setState(GameState.PLAYING)
        self._emit(GameStarted(level, len(self.cards)))

    def pauseGame(self) -> bool:
        if self.gameState != GameState.PLAYING:
            return False
        self.suspendedTasks = [name for name, task in self.pendingTasks.items() if task.pending]
        self._cancelPending()
        self._setState(GameState.PAUSED)
        return True

    def resumeGame(self) -> bool:
        if self.gameState != GameState.PAUSED:
            return False
        self._setState(GameState.PLAYING)
        suspended = self.suspendedTasks
        self.suspendedTasks = []
        for name in suspended:
            self._scheduleTask(name)
        return True

    def endGame(self) -> bool:
        if self.session is None or self.session.isComplete:
            return False
        if self.gameState not in (GameState.PLAYING, GameState.PAUSED):
            return False
        self._cancelPending()
        self.suspendedTasks = []

        session = self.session
        session.complete(self.clock())
        self._feedback(FeedbackCue.LEVEL_COMPLETE)

        record = None
        if self.progress is not None:
            record = self.progress.record_game_session(session)
        self.lastRecord = record
        if record is not None and record.unlocked_achievements:
            self._feedback(FeedbackCue.ACHIEVEMENT_UNLOCKED)

        self._setState(GameState.COMPLETED)
        self._emit(GameCompleted(session.score, session.mistakes, session.duration(session.endTime)))
        self.interface.onComplete(session, record)
        return True

    def triggerGameOver(self) -> bool:
        if self.gameState not in (GameState.PLAYING, GameState.PAUSED):
            return False
        self._cancelPending()
        self.suspendedTasks = []
        self._setState(GameState.GAME_OVER)
        return True

    def resetGame(self):
        self._cancelPending()
        self.suspendedTasks = []
        self.roundId += 1
        self.cards = []
        self.flippedCards = []
        self.session = None
        self.comboCount = 0
        self._setState(GameState.MENU)

    # endregion

    # region flipping

    def flipCard(self, card) -> bool:
        if self.gameState != GameState.PLAYING:
            return False
        target = self._findCard(card)
        if target is None or target.isMatched or target.isFlipped:
            return False
        if len(self.flippedCards) >= 2:
            return False

        target.isFlipped = True
        self.flippedCards.append(target)
        self._feedback(FeedbackCue.CARD_FLIP)
        self._emit(CardFlipped(target.id))
        if len(self.flippedCards) == 2:
            self._resolvePair()
        return True

    def _findCard(self, card):
        if isinstance(card, Card):
            for c in self.cards:
                if c is card:
                    return c
            return None
        for c in self.cards:
            if c.id == card:
                return c
        return None

    def _resolvePair(self):
        if len(self.flippedCards) != 2:
            raise GameContractError(f"pair resolution needs 2 face-up cards, got {len(self.flippedCards)}")
        first, second = self.flippedCards
        if first.matches(second):
            self._handleMatch(first, second)
        else:
            self._handleMismatch(first, second)

    def _handleMatch(self, first: Card, second: Card):
        first.isMatched = True
        second.isMatched = True
        self.session.recordMatch(isCombo=self.comboCount > 0)
        self.comboCount += 1

        if self.comboCount >= BIG_COMBO:
            self._feedback(FeedbackCue.BIG_COMBO)
        elif self.comboCount > 1:
            self._feedback(FeedbackCue.COMBO)
        else:
            self._feedback(FeedbackCue.MATCH)

        self.flippedCards = []
        self._emit(PairMatched((first.id, second.id), self.comboCount, self.session.score))
        if all(c.isMatched for c in self.cards):
            self._scheduleTask(TASK_COMPLETE)

    def _handleMismatch(self, first: Card, second: Card):
        self.session.recordMistake()
        self.comboCount = 0
        self._feedback(FeedbackCue.MISTAKE)
        self._emit(PairMismatched((first.id, second.id), self.session.score))
        self._scheduleTask(TASK_FLIP_BACK)

    def _handleFlipBack(self):
        ids = []
        for card in self.flippedCards:
            card.isFlipped = False
            ids.append(card.id)
        self.flippedCards = []
        self._emit(CardsHidden(tuple(ids)))

    # endregion

    # region scheduling

    def _scheduleTask(self, name):
        if name == TASK_FLIP_BACK:
            delay, action = FLIP_BACK_DELAY, self._handleFlipBack
        elif name == TASK_COMPLETE:
            delay, action = COMPLETE_DELAY, self.endGame
        else:
            raise GameContractError(f"unknown task {name}")
        roundId = self.roundId

        def fire():
            if self.roundId != roundId:
                logger.debug("dropping stale %s from round %s", name, roundId)
                return
            self.pendingTasks.pop(name, None)
            action()

        self.pendingTasks[name] = self.scheduler.schedule(delay, fire, name)

    def _cancelPending(self):
        for task in self.pendingTasks.values():
            self.scheduler.cancel(task)
        self.pendingTasks = {}

    def hasPendingTask(self, name) -> bool:
        task = self.pendingTasks.get(name)
        return task is not None and task.pending

    # endregion

    # region read model

    @property
    def currentScore(self) -> int:
        return self.session.score if self.session is not None else 0

    @property
    def currentTime(self) -> float:
        if self.session is None:
            return 0.0
        return self.session.duration(self.clock())

    @property
    def formattedTime(self) -> str:
        total = int(self.currentTime)
        return f"{total // 60:02d}:{total % 60:02d}"

    @property
    def totalPairs(self) -> int:
        return len(self.cards) // 2

    @property
    def matchedPairs(self) -> int:
        return sum(1 for c in self.cards if c.isMatched) // 2

    @property
    def gameProgress(self) -> float:
        if self.totalPairs == 0:
            return 0.0
        return self.matchedPairs / self.totalPairs

    def canPlayLevel(self, level: GameLevel) -> bool:
        if self.progress is None:
            return True
        return self.progress.is_level_unlocked(level)

    # endregion

    def _setState(self, state: GameState):
        old = self.gameState
        if old == state:
            return
        self.gameState = state
        logger.debug("state %s -> %s", old.value, state.value)
        self._emit(StateChanged(old, state))

    def _emit(self, event: GameEvent):
        if self.interface is not None:
            self.interface.onEvent(event)

    def _feedback(self, cue: FeedbackCue):
        if self.interface is not None:
            self.interface.onFeedback(cue)
