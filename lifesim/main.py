from __future__ import annotations

import argparse
import logging

from .constants import SPEED_PRESETS
from .game import Game


def main(argv: list[str] | None = None) -> None:
    """Entry point parsed from command line."""
    parser = argparse.ArgumentParser(description="Run the life simulation")
    parser.add_argument("--seed", type=int, default=None, help="World seed")
    parser.add_argument(
        "--speed",
        type=float,
        choices=SPEED_PRESETS,
        default=SPEED_PRESETS[0],
        help="Initial simulation speed",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a terminal UI and print a summary",
    )
    parser.add_argument(
        "--ticks", type=int, default=1000, help="Ticks to run in headless mode"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    game = Game(seed=args.seed)
    game.set_speed(args.speed)
    if args.headless:
        game.run_headless(args.ticks)
        state = game.state
        print(
            f"Year {state.calendar.year:.1f}: population {game.population} "
            f"{game.population_label}, houses {len(state.houses)}, "
            f"wood {state.inventory['wood']} stone {state.inventory['stone']} "
            f"iron {state.inventory['iron']}"
        )
        return
    game.playing = True
    game.run()


if __name__ == "__main__":
    main()
