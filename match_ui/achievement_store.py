import logging
from dataclasses import asdict, dataclass, replace

from match_core.Cards import GameLevel
from match_ui.ui_config import FORTUNE_MASTER_STREAK, GOLDEN_PAW_COMBO, SPEED_DEMON_SECONDS

logger = logging.getLogger(__name__)

ACHIEVEMENTS_KEY = "achievements"


@dataclass(frozen=True)
class Achievement:
    id: str
    title: str
    description: str
    icon: str
    target: int
    is_unlocked: bool = False
    progress: int = 0


ACHIEVEMENT_CATALOG = (
    Achievement("tiger_eye", "Tiger Eye", "Complete a level without mistakes", "👁️", 1),
    Achievement("golden_paw", "Golden Paw", f"Get {GOLDEN_PAW_COMBO} matches in a row", "🐾", GOLDEN_PAW_COMBO),
    Achievement(
        "fortune_master", "Fortune Master", f"Complete {FORTUNE_MASTER_STREAK} levels in a row", "👑", FORTUNE_MASTER_STREAK
    ),
    Achievement("speed_demon", "Speed Demon", f"Complete a level in under {SPEED_DEMON_SECONDS} seconds", "⚡", 1),
    Achievement("memory_master", "Memory Master", "Complete expert level without mistakes", "🧠", 1),
)

CATALOG_IDS = tuple(a.id for a in ACHIEVEMENT_CATALOG)


def default_achievements() -> list[Achievement]:
    return list(ACHIEVEMENT_CATALOG)


def _as_int(value, default=0):
    try:
        return int(value)
    except Exception:
        return int(default)


def _as_bool(value, default=False):
    return value if isinstance(value, bool) else default


def _sanitize(data) -> list[Achievement]:
    """
    Rebuilds the list in catalog order. Titles, icons and targets always come from
    the catalog; only unlock state and progress are taken from stored records.
    Unknown ids are dropped and missing ones come back locked.
    """
    if not isinstance(data, list):
        return default_achievements()
    stored = {}
    for raw in data:
        if isinstance(raw, Achievement):
            stored[raw.id] = {"is_unlocked": raw.is_unlocked, "progress": raw.progress}
        elif isinstance(raw, dict) and isinstance(raw.get("id"), str):
            stored[raw["id"]] = raw
    out = []
    for base in ACHIEVEMENT_CATALOG:
        src = stored.get(base.id)
        if src is None:
            out.append(base)
            continue
        out.append(
            replace(
                base,
                is_unlocked=_as_bool(src.get("is_unlocked"), base.is_unlocked),
                progress=max(0, _as_int(src.get("progress"), 0)),
            )
        )
    return out


def achievements_to_list(achievements) -> list[dict]:
    return [asdict(a) for a in _sanitize(list(achievements))]


def load_achievements(store) -> list[Achievement]:
    return _sanitize(store.get(ACHIEVEMENTS_KEY))


def save_achievements(store, achievements):
    store.set(ACHIEVEMENTS_KEY, achievements_to_list(achievements))


def _unlock(achievement: Achievement) -> Achievement:
    return replace(achievement, is_unlocked=True, progress=achievement.target)


def evaluate_achievements(achievements, session, stats) -> tuple[list[Achievement], list[str]]:
    """
    Applies the unlock rules for one finished session against the statistics
    already updated with that session. Returns the new list and the ids that
    became unlocked by this call; unlocked achievements are left untouched.
    """
    duration = session.duration(session.endTime if session.endTime is not None else session.startTime)
    updated = []
    newly_unlocked = []
    for a in _sanitize(list(achievements)):
        if a.id == "fortune_master":
            a = replace(a, progress=stats.longest_streak)
            if stats.longest_streak >= a.target and not a.is_unlocked:
                a = replace(a, is_unlocked=True)
                newly_unlocked.append(a.id)
        elif not a.is_unlocked:
            if a.id == "tiger_eye" and session.mistakes == 0:
                a = _unlock(a)
            elif a.id == "golden_paw" and session.maxCombo >= GOLDEN_PAW_COMBO:
                a = _unlock(a)
            elif a.id == "speed_demon" and duration < SPEED_DEMON_SECONDS:
                a = _unlock(a)
            elif a.id == "memory_master" and session.level == GameLevel.EXPERT and session.mistakes == 0:
                a = _unlock(a)
            if a.is_unlocked:
                newly_unlocked.append(a.id)
        updated.append(a)
    for achievement_id in newly_unlocked:
        logger.info("Achievement unlocked: %s", achievement_id)
    return updated, newly_unlocked


def get_achievement(achievements, achievement_id: str) -> Achievement | None:
    for a in achievements:
        if a.id == achievement_id:
            return a
    return None


def unlocked_achievements(achievements) -> list[Achievement]:
    return [a for a in achievements if a.is_unlocked]


def completion_percentage(achievements) -> float:
    achievements = list(achievements)
    if not achievements:
        return 0.0
    return len(unlocked_achievements(achievements)) / len(achievements) * 100.0
