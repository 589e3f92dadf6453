"""
2D Steering Behaviors
=====================

Boids driven by kinematic steering: velocity matching, arrive + align,
wander and flocking.

Usage:
    python main.py                          # Flocking demo
    python main.py --scene arrive           # Click to send the boid somewhere
    python main.py --scene velocity         # Boid matches the mouse velocity
    python main.py --scene wander --seed 7  # Reproducible wandering
    python main.py --headless --ticks 600   # Run without a window

Controls:
    - Left click: Set the arrive target
    - Space: Pause
    - ESC: Quit
"""

import argparse
import logging
import sys

from config import steering as config
from demos import SCENES, create_scene, run_headless
from steering import DomainError

logger = logging.getLogger("main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="2D steering behaviors demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Usage:")[1],
    )
    parser.add_argument("--scene", choices=sorted(SCENES), default="flock",
                        help="Scene to run (default: flock)")
    parser.add_argument("--seed", type=int, default=config.SIMULATION["seed"],
                        help="Random seed for spawning and wandering")
    parser.add_argument("--boids", type=int, help="Flock size (flock scene only)")
    parser.add_argument("--headless", action="store_true", help="Run without opening a window")
    parser.add_argument("--ticks", type=int, default=600, help="Ticks to run in headless mode")
    parser.add_argument("--dt", type=float, default=config.SIMULATION["headless_dt"],
                        help="Fixed time step in headless mode (seconds)")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    settings = None
    if args.boids is not None:
        if args.scene != "flock":
            logger.warning("[main] --boids only applies to the flock scene")
        else:
            settings = {"count": args.boids}

    try:
        scene = create_scene(args.scene, settings=settings, seed=args.seed)

        if args.headless:
            run_headless(scene, args.ticks, args.dt)
            for line in scene.hud_lines():
                print(line)
            return 0

        from core import Application
        Application(scene).run()
    except DomainError as e:
        logger.error("[main] %s", e)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
