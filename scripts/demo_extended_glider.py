#!/usr/bin/env python3
"""
Extended Glider Demonstration Script

Seeds a glider on an otherwise dead board, gives the glider cells a mood
and a type, and evolves the game while logging population, centre of mass
and total life points. Optionally writes the final game state as JSON.
"""

import sys
import os
import logging
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from extgol import Game, Mood, CellType
from extgol.config import LOG_FORMAT
from extgol.patterns import get_seed, pattern_coords
from extgol.storage import dumps

logger = logging.getLogger(__name__)


def run_demo(width=20, height=20, steps=20, seed="glider", start_x=2, start_y=2,
             mood=Mood.NAIVE, cell_type=CellType.BASIC, vampire=None):
    """Run the demonstration and return the game plus per-step metrics."""
    logger.info("=== EXTENDED GAME OF LIFE DEMONSTRATION ===")
    logger.info(f"Board: {width}x{height}, steps: {steps}, seed: {seed} at ({start_x}, {start_y})")

    game = Game.create(width, height)
    pattern = get_seed(seed)
    game.board.load_pattern(pattern, start_x, start_y)

    for coord in pattern_coords(pattern, start_x, start_y):
        cell = game.board.cell_at(coord)
        cell.mood = mood
        cell.cell_type = cell_type

    if vampire is not None:
        cell = game.board.cell_at(vampire)
        cell.alive = True
        cell.mood = Mood.VAMPIRE
        logger.info(f"Vampire placed at {cell.coord}")

    metrics = []
    for _ in range(steps):
        generation = game.step()
        com = game.board.center_of_mass()
        life_points = game.board.total_life_points()
        vampires = sum(1 for c in game.board.cells() if c.mood is Mood.VAMPIRE)
        metrics.append({
            "generation": generation.index,
            "alive": generation.alive_count,
            "center_of_mass": com,
            "life_points": life_points,
            "vampires": vampires,
        })
        logger.info(f"Generation {generation.index}: alive={generation.alive_count}, "
                    f"COM=({com[0]:.1f}, {com[1]:.1f}), life_points={life_points}, vampires={vampires}")

    logger.info(f"Final board:\n{game.board}")
    return game, metrics


def parse_coord(text):
    x, y = text.split(",")
    return (int(x), int(y))


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Extended Game of Life demonstration")
    parser.add_argument("--width", type=int, default=20, help="Board width")
    parser.add_argument("--height", type=int, default=20, help="Board height")
    parser.add_argument("--steps", type=int, default=20, help="Evolution steps")
    parser.add_argument("--seed", default="glider", help="Seed pattern (glider, blinker, block)")
    parser.add_argument("--start-x", type=int, default=2, help="Seed start X position")
    parser.add_argument("--start-y", type=int, default=2, help="Seed start Y position")
    parser.add_argument("--mood", default="NAIVE", choices=[m.name for m in Mood], help="Mood of seed cells")
    parser.add_argument("--type", dest="cell_type", default="BASIC", choices=[t.name for t in CellType],
                        help="Type of seed cells")
    parser.add_argument("--vampire", type=parse_coord, default=None, help="Extra live vampire at X,Y")
    parser.add_argument("--output", type=Path, default=None, help="Write final game state as JSON")
    parser.add_argument("--log-level", default="INFO", help="Logging level")

    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format=LOG_FORMAT)

    try:
        game, metrics = run_demo(
            width=args.width,
            height=args.height,
            steps=args.steps,
            seed=args.seed,
            start_x=args.start_x,
            start_y=args.start_y,
            mood=Mood[args.mood],
            cell_type=CellType[args.cell_type],
            vampire=args.vampire,
        )

        if args.output is not None:
            args.output.parent.mkdir(parents=True, exist_ok=True)
            args.output.write_text(dumps(game, indent=2))
            logger.info(f"Game state saved to: {args.output}")

    except Exception as e:
        logger.error(f"Demonstration failed: {e}")
        sys.exit(1)
