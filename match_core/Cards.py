import random
from enum import Enum


class GameLevel(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def gridSize(self) -> int:
        return _GRID_SIZES[self]

    @property
    def baseScore(self) -> int:
        return _BASE_SCORES[self]

    @property
    def gridLabel(self) -> str:
        return f"{self.gridSize}x{self.gridSize}"

    @property
    def displayName(self) -> str:
        return f"{self.value.capitalize()} ({self.gridSize}×{self.gridSize})"

    @property
    def pairCount(self) -> int:
        # Odd grids get one extra pair so that every card has a partner.
        return (self.gridSize * self.gridSize + 1) // 2

    @property
    def cardCount(self) -> int:
        return self.pairCount * 2

    def nextLevel(self):
        idx = LEVEL_ORDER.index(self)
        if idx + 1 >= len(LEVEL_ORDER):
            return None
        return LEVEL_ORDER[idx + 1]

    @staticmethod
    def fromId(levelId):
        try:
            return GameLevel(str(levelId).strip().lower())
        except ValueError:
            return None


_GRID_SIZES = {
    GameLevel.EASY: 3,
    GameLevel.MEDIUM: 4,
    GameLevel.HARD: 5,
    GameLevel.EXPERT: 6,
}

_BASE_SCORES = {
    GameLevel.EASY: 10,
    GameLevel.MEDIUM: 20,
    GameLevel.HARD: 30,
    GameLevel.EXPERT: 50,
}

LEVEL_ORDER = (GameLevel.EASY, GameLevel.MEDIUM, GameLevel.HARD, GameLevel.EXPERT)


class Card:
    SYMBOLS = ("🐅", "🪙", "🏮", "🥇", "🧿", "🐉")

    def __init__(self, id, symbol):
        self.id = id
        self.symbol = symbol
        self.isFlipped = False
        self.isMatched = False

    @property
    def faceUp(self):
        return self.isFlipped or self.isMatched

    def matches(self, other):
        return self.symbol == other.symbol

    def __str__(self):
        if self.isMatched:
            return f"{self.id}M"
        if self.isFlipped:
            return f"{self.id}F"
        return str(self.id)

    def __repr__(self):
        return self.__str__()

    def gameStr(self):
        if self.faceUp:
            return self.symbol
        return "??"


def createDeck(level: GameLevel, rng: random.Random | None = None) -> list[Card]:
    """
    Builds a shuffled deck with ``level.pairCount`` pairs.

    The first pairs use distinct symbols from ``Card.SYMBOLS``; once the pool is
    exhausted the remaining pairs repeat a randomly drawn symbol.
    """
    pick_rng = rng if rng is not None else random
    pairCount = level.pairCount
    symbols = list(Card.SYMBOLS[:min(pairCount, len(Card.SYMBOLS))])
    while len(symbols) < pairCount:
        symbols.append(pick_rng.choice(Card.SYMBOLS))

    cards = []
    for symbol in symbols:
        cards.append(Card(len(cards), symbol))
        cards.append(Card(len(cards), symbol))
    pick_rng.shuffle(cards)
    return cards
