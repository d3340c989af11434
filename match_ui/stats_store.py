from dataclasses import asdict, dataclass, fields, replace

STATS_KEY = "game_statistics"


@dataclass(frozen=True)
class GameStatistics:
    games_played: int = 0
    games_won: int = 0
    total_score: int = 0
    best_score: int = 0
    best_time: float = 0.0
    average_time: float = 0.0
    perfect_games: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    total_matches: int = 0
    total_mistakes: int = 0

    @property
    def win_rate(self) -> float:
        if self.games_played <= 0:
            return 0.0
        return self.games_won / self.games_played * 100.0

    @property
    def average_score(self) -> float:
        if self.games_played <= 0:
            return 0.0
        return self.total_score / self.games_played

    @property
    def error_rate(self) -> float:
        if self.total_matches <= 0:
            return 0.0
        return self.total_mistakes / (self.total_matches + self.total_mistakes) * 100.0


_FLOAT_FIELDS = {"best_time", "average_time"}


def _as_int(value, default=0):
    try:
        return int(value)
    except Exception:
        return int(default)


def _as_float(value, default=0.0):
    try:
        return float(value)
    except Exception:
        return float(default)


def _sanitize(data) -> GameStatistics:
    if isinstance(data, GameStatistics):
        return data
    out = GameStatistics()
    if not isinstance(data, dict):
        return out
    values = {}
    for f in fields(GameStatistics):
        current = getattr(out, f.name)
        if f.name in _FLOAT_FIELDS:
            values[f.name] = max(0.0, _as_float(data.get(f.name), current))
        else:
            values[f.name] = max(0, _as_int(data.get(f.name), current))
    values["longest_streak"] = max(values["longest_streak"], values["current_streak"])
    return GameStatistics(**values)


def stats_to_dict(stats: GameStatistics) -> dict:
    return asdict(stats)


def load_stats(store) -> GameStatistics:
    return _sanitize(store.get(STATS_KEY))


def save_stats(store, stats):
    store.set(STATS_KEY, stats_to_dict(_sanitize(stats)))


def record_game(stats, score, elapsed, mistakes, matches) -> GameStatistics:
    stats = _sanitize(stats)
    score = max(0, int(score))
    elapsed = float(elapsed)
    mistakes = max(0, int(mistakes))
    matches = max(0, int(matches))

    games_played = stats.games_played + 1
    perfect_games = stats.perfect_games
    current_streak = stats.current_streak
    longest_streak = stats.longest_streak
    if mistakes == 0:
        perfect_games += 1
        current_streak += 1
        longest_streak = max(longest_streak, current_streak)
    else:
        current_streak = 0

    best_time = stats.best_time
    average_time = stats.average_time
    if elapsed > 0:
        if best_time == 0 or elapsed < best_time:
            best_time = elapsed
        # Untimed games still count in the divisor.
        average_time = (stats.average_time * (games_played - 1) + elapsed) / games_played

    return replace(
        stats,
        games_played=games_played,
        games_won=stats.games_won + (1 if score > 0 else 0),
        total_score=stats.total_score + score,
        best_score=max(stats.best_score, score),
        best_time=best_time,
        average_time=average_time,
        perfect_games=perfect_games,
        current_streak=current_streak,
        longest_streak=longest_streak,
        total_matches=stats.total_matches + matches,
        total_mistakes=stats.total_mistakes + mistakes,
    )


def format_stats_lines(stats) -> list[str]:
    stats = _sanitize(stats)
    best_time = f"{stats.best_time:.1f}s" if stats.best_time > 0 else "-"
    return [
        f"Played {stats.games_played}, won {stats.games_won}, win rate {stats.win_rate:.1f}%",
        f"Best score {stats.best_score}, average score {stats.average_score:.1f}, total {stats.total_score}",
        f"Best time {best_time}, average time {stats.average_time:.1f}s",
        f"Perfect games {stats.perfect_games}, streak {stats.current_streak} (longest {stats.longest_streak})",
        f"Matches {stats.total_matches}, mistakes {stats.total_mistakes}, error rate {stats.error_rate:.1f}%",
    ]
