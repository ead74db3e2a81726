from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

from tictactoe.ai.config import Difficulty
from tictactoe.app.controller_game import GameController, SessionConfig
from tictactoe.core.board import Cell


def build_config(vs: Optional[str], difficulty: Optional[str]) -> Optional[SessionConfig]:
    """Turn --vs / --difficulty into a pre-answered SessionConfig (None = ask)."""
    if vs is None:
        return None
    vs_computer = vs == "computer"
    level = Difficulty(difficulty) if (vs_computer and difficulty) else None
    return SessionConfig(vs_computer=vs_computer, difficulty=level)


def run_game(
    config: Optional[SessionConfig],
    first: Optional[str],
    seed: Optional[int],
) -> None:
    ctrl = GameController(
        config=config,
        first_player=Cell.from_symbol(first) if first else None,
        rng=random.Random(seed),
    )
    ctrl.run()


def main(argv: Optional[list] = None) -> None:
    ap = argparse.ArgumentParser(description="Console tic-tac-toe")
    ap.add_argument(
        "--vs",
        choices=["human", "computer"],
        default=None,
        help="Opponent (default: ask)",
    )
    ap.add_argument(
        "--difficulty",
        choices=[d.value for d in Difficulty],
        default=None,
        help="Computer difficulty when --vs computer (default: ask)",
    )
    ap.add_argument(
        "--first",
        choices=["X", "O"],
        default=None,
        help="Mark that moves first (default: random)",
    )
    ap.add_argument("--seed", type=int, default=None, help="Random seed")
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.difficulty and args.vs != "computer":
        ap.error("--difficulty requires --vs computer")

    try:
        run_game(build_config(args.vs, args.difficulty), args.first, args.seed)
    except KeyboardInterrupt:
        print("\nGame interrupted.")


if __name__ == "__main__":
    main()
