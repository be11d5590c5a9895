"""
Command-line entry point: play the game or run a headless random episode
"""

import argparse
import logging
from typing import Optional, Sequence

from .config import SurvivorConfig, MOVEMENT_MODES, MOVEMENT_DIRECT
from .world import init_session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Space Survivor")
    parser.add_argument(
        "--movement",
        type=str,
        default=MOVEMENT_DIRECT,
        choices=list(MOVEMENT_MODES),
        help="Player movement policy (default: direct)",
    )
    parser.add_argument(
        "--edge-exit-ends-game",
        action="store_true",
        help="End the round when an enemy crosses the bottom edge",
    )
    parser.add_argument(
        "--spawn-probability",
        type=float,
        default=None,
        help="Per-tick enemy spawn probability (default: 0.02)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed",
    )
    parser.add_argument(
        "--random-episode",
        action="store_true",
        help="Run one headless episode with a random policy instead of opening a window",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None):
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    overrides = {
        "movement": args.movement,
        "edge_exit_ends_game": args.edge_exit_ends_game,
    }
    if args.spawn_probability is not None:
        overrides["spawn_probability"] = args.spawn_probability

    if args.random_episode:
        from .survivor_env import run_random_episode
        print(f"\n{'='*60}")
        print(f"Random episode ({args.movement} movement, seed={args.seed})")
        print(f"{'='*60}\n")
        run_random_episode(render=False, seed=args.seed, game_config=overrides)
        return

    config = SurvivorConfig.from_dict(overrides)
    world = init_session(config.width, config.height, config=config, seed=args.seed)

    from .window import play
    play(world)


if __name__ == "__main__":
    main()
