from dataclasses import dataclass


@dataclass(frozen=True)
class CardView:
    id: int
    symbol: str
    flipped: bool
    matched: bool

    @property
    def face_up(self):
        return self.flipped or self.matched


@dataclass(frozen=True)
class GameViewModel:
    level: str
    grid_size: int
    state: str
    score: int
    formatted_time: str
    combo: int
    progress: float
    cards: tuple[CardView, ...]


@dataclass(frozen=True)
class AnimationEvent:
    type: str
    payload: dict
