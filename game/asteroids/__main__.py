"""
Play Asteroid Destroyer.

Usage:
    python -m game.asteroids [--seed N] [--curve linear|ease_out] [--mute]
"""

import argparse

from . import config as C
from .difficulty import CURVES
from .highscore import HighScoreStore
from .session import Session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Asteroid Destroyer - Journey Home")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for asteroid spawns (default: random)",
    )
    parser.add_argument(
        "--curve",
        type=str,
        default=C.DEFAULT_CURVE,
        choices=sorted(CURVES),
        help=f"Difficulty curve (default: {C.DEFAULT_CURVE})",
    )
    parser.add_argument(
        "--highscore-file",
        type=str,
        default=C.HIGH_SCORE_FILE,
        help=f"Where the high score is kept (default: {C.HIGH_SCORE_FILE})",
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Disable sound effects",
    )
    parser.add_argument(
        "--verbose",
        type=int,
        default=0,
        help="Console logging level: 0 quiet, 1 sessions, 2 pauses (default: 0)",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    # window and audio pull in arcade; keep --help working without a display
    from .audio import AudioPlayer
    from .window import run_game

    store = HighScoreStore(args.highscore_file, verbose=args.verbose)
    session = Session(seed=args.seed, curve=args.curve, high_score_store=store, verbose=args.verbose)
    if args.verbose > 0:
        print(f"[Session] High score {session.high_score} loaded from {store.path}")

    run_game(session, audio=AudioPlayer(muted=args.mute), seed=args.seed)


if __name__ == "__main__":
    main()
