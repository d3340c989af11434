import argparse
import logging
import random
from pathlib import Path

from match_core.Cards import GameLevel
from match_core.Core import GameState
from match_ui.host import GameHost
from match_ui.kv_store import JsonFileStore
from match_ui.storage import Storage

HELP = "Commands: flip N | pause | resume | new LEVEL | levels | stats | achievements | reset | wipe | quit"


class CommandLineInterface(GameHost):

    def printBoard(self):
        core = self.core
        print(
            f"{core.currentLevel.displayName}  Score: {core.currentScore}  Time: {core.formattedTime}  "
            f"Combo: {core.comboCount}  Progress: {core.gameProgress * 100:.0f}%"
        )
        size = core.currentLevel.gridSize
        cells = [f"{c.id:>2}:{c.gameStr()}" for c in core.cards]
        for i in range(0, len(cells), size):
            print("  ".join(cells[i:i + size]))
        print()

    def onStart(self):
        super().onStart()
        print("Game started!")

    def onComplete(self, session, record):
        super().onComplete(session, record)
        print(self.message)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Roar Match in the terminal.")
    parser.add_argument("--data-dir", type=str, default="", help="Where progress.json and settings.ini live.")
    parser.add_argument(
        "--level", type=str, default="", choices=("",) + tuple(level.value for level in GameLevel), help="Start right away."
    )
    parser.add_argument("--seed", type=int, default=None, help="Deck shuffle seed.")
    parser.add_argument("--log-level", type=str, default="WARNING", help="Logging level.")
    return parser.parse_args(argv)


def build_host(args) -> CommandLineInterface:
    if args.data_dir:
        data_dir = Path(args.data_dir).expanduser()
        storage = Storage(JsonFileStore(data_dir / "progress.json"), settings_path=data_dir / "settings.ini")
    else:
        storage = Storage()
    rng = random.Random(args.seed) if args.seed is not None else None
    return CommandLineInterface(storage=storage, rng=rng)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))
    ui = build_host(args)
    ui.open_menu()
    if args.level:
        ui.start_new_game(GameLevel(args.level))
    print(ui.message)
    print(HELP)

    while True:
        if ui.core.gameState in (GameState.PLAYING, GameState.PAUSED):
            ui.printBoard()
        try:
            command = input("> ").strip()
        except EOFError:
            break
        parts = command.split()
        if not parts:
            continue
        verb = parts[0].lower()
        if verb == "quit":
            break
        if verb == "flip" and len(parts) == 2:
            try:
                card_id = int(parts[1])
            except ValueError:
                print("Invalid card number!")
                continue
            if not ui.flip(card_id):
                print("Cannot flip that card now!")
            elif ui.core.pendingTasks:
                # No frame timer in a terminal: show the pair, then fire the flip-back or completion now.
                ui.printBoard()
                ui.scheduler.runAll()
        elif verb == "pause":
            if not ui.core.pauseGame():
                print("Nothing to pause!")
        elif verb == "resume":
            if not ui.core.resumeGame():
                print("Nothing to resume!")
        elif verb == "new" and len(parts) == 2:
            level = GameLevel.fromId(parts[1])
            if level is None:
                print("Unknown level!")
            elif not ui.start_new_game(level):
                print(ui.message)
        elif verb == "levels":
            print("\n".join(ui.format_level_lines()))
        elif verb == "stats":
            print("\n".join(ui.format_stats_lines()))
        elif verb == "achievements":
            print("\n".join(ui.format_achievement_lines()))
        elif verb == "reset":
            ui.open_menu()
            print(ui.message)
        elif verb == "wipe":
            ui.reset_progress()
            print(ui.message)
        else:
            print(HELP)


if __name__ == "__main__":
    main()
