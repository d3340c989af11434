from match_core.Core import (
    CardFlipped,
    CardsHidden,
    Core,
    GameCompleted,
    GameEvent,
    GameStarted,
    PairMatched,
    PairMismatched,
    StateChanged,
)
from match_ui.view_model import AnimationEvent, CardView, GameViewModel


class CoreAdapter:
    """Bridges the engine state/events to a renderer-friendly model."""

    @staticmethod
    def snapshot(core: Core) -> GameViewModel:
        cards = tuple(
            CardView(id=card.id, symbol=card.symbol, flipped=card.isFlipped, matched=card.isMatched)
            for card in core.cards
        )
        return GameViewModel(
            level=core.currentLevel.value,
            grid_size=core.currentLevel.gridSize,
            state=core.gameState.value,
            score=core.currentScore,
            formatted_time=core.formattedTime,
            combo=core.comboCount,
            progress=core.gameProgress,
            cards=cards,
        )

    @staticmethod
    def event_to_animation(event: GameEvent) -> AnimationEvent:
        if isinstance(event, CardFlipped):
            return AnimationEvent(type="FLIP", payload={"card": event.cardId})
        if isinstance(event, PairMatched):
            return AnimationEvent(
                type="MATCH",
                payload={"cards": event.cardIds, "combo": event.combo, "score": event.score},
            )
        if isinstance(event, PairMismatched):
            return AnimationEvent(type="MISMATCH", payload={"cards": event.cardIds, "score": event.score})
        if isinstance(event, CardsHidden):
            return AnimationEvent(type="HIDE", payload={"cards": event.cardIds})
        if isinstance(event, GameStarted):
            return AnimationEvent(
                type="DEAL",
                payload={"level": event.level.value, "card_count": event.cardCount},
            )
        if isinstance(event, GameCompleted):
            return AnimationEvent(
                type="VICTORY",
                payload={"score": event.score, "mistakes": event.mistakes, "duration_sec": event.duration},
            )
        if isinstance(event, StateChanged):
            return AnimationEvent(type="STATE", payload={"old": event.old.value, "new": event.new.value})
        return AnimationEvent(type="UNKNOWN", payload={"event": type(event).__name__})
