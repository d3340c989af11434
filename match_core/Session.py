from match_core.Cards import GameLevel

MISTAKE_PENALTY = 5
COMBO_BONUS = 5
TIME_BONUS_WINDOW = 300


class GameSession:
    """
    Score record of one play-through. Times are seconds from the engine clock.
    """

    def __init__(self, level: GameLevel, startTime: float):
        self.level = level
        self.startTime = startTime
        self.endTime = None
        self.score = 0
        self.mistakes = 0
        self.matches = 0
        self.comboCount = 0
        self.maxCombo = 0

    @property
    def isComplete(self):
        return self.endTime is not None

    def duration(self, now: float) -> float:
        end = self.endTime if self.endTime is not None else now
        return max(0.0, end - self.startTime)

    def recordMatch(self, isCombo=False):
        self.matches += 1
        self.score += self.level.baseScore
        if isCombo:
            self.comboCount += 1
            self.score += self.comboCount * COMBO_BONUS
            if self.comboCount > self.maxCombo:
                self.maxCombo = self.comboCount
        else:
            self.comboCount = 0

    def recordMistake(self):
        self.mistakes += 1
        self.score = max(0, self.score - MISTAKE_PENALTY)
        self.comboCount = 0

    def timeBonus(self, now: float) -> int:
        return max(0, TIME_BONUS_WINDOW - int(self.duration(now)))

    def complete(self, now: float):
        if self.isComplete:
            return
        self.endTime = now
        self.score += self.timeBonus(now)
        if self.mistakes == 0:
            self.score *= 2

    def summary(self) -> dict:
        return {
            "level": self.level.value,
            "score": self.score,
            "mistakes": self.mistakes,
            "matches": self.matches,
            "max_combo": self.maxCombo,
            "duration_sec": self.duration(self.endTime if self.endTime is not None else self.startTime),
        }
