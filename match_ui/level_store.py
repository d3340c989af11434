import logging

from match_core.Cards import LEVEL_ORDER, GameLevel
from match_ui.ui_config import DEFAULT_UNLOCKED_LEVEL, LEVEL_IDS, UNLOCK_MISTAKE_LIMIT

logger = logging.getLogger(__name__)

UNLOCKED_LEVELS_KEY = "unlocked_levels"


def _level_id(level) -> str:
    if isinstance(level, GameLevel):
        return level.value
    parsed = GameLevel.fromId(level)
    return parsed.value if parsed is not None else ""


def _sanitize(data) -> set[str]:
    out = {DEFAULT_UNLOCKED_LEVEL}
    if not isinstance(data, (list, tuple, set)):
        return out
    for raw in data:
        level_id = _level_id(raw)
        if level_id in LEVEL_IDS:
            out.add(level_id)
    return out


def ordered(unlocked) -> list[str]:
    return [level_id for level_id in LEVEL_IDS if level_id in unlocked]


def load_unlocked_levels(store) -> set[str]:
    return _sanitize(store.get(UNLOCKED_LEVELS_KEY))


def save_unlocked_levels(store, unlocked):
    store.set(UNLOCKED_LEVELS_KEY, ordered(_sanitize(unlocked)))


def is_level_unlocked(unlocked, level) -> bool:
    return _level_id(level) in _sanitize(unlocked)


def unlock_after(unlocked, level: GameLevel, mistakes: int) -> tuple[set[str], GameLevel | None]:
    """
    Returns the unlocked set after finishing ``level`` with ``mistakes`` and the
    level this newly opened, if any. The set only ever grows.
    """
    unlocked = _sanitize(unlocked)
    if mistakes > UNLOCK_MISTAKE_LIMIT:
        return unlocked, None
    successor = level.nextLevel()
    if successor is None or successor.value in unlocked:
        return unlocked, None
    unlocked.add(successor.value)
    logger.info("Level unlocked: %s", successor.value)
    return unlocked, successor


def playable_levels(unlocked) -> list[GameLevel]:
    unlocked = _sanitize(unlocked)
    return [level for level in LEVEL_ORDER if level.value in unlocked]
