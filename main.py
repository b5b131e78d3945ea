import argparse
import logging
import random

from config import GameConfig
from domain.constants import UP, DOWN, LEFT, RIGHT
from engine import GameEngine, TickResult

logger = logging.getLogger(__name__)

# Letters accepted by --moves in headless mode
MOVE_LETTERS = {"U": UP, "D": DOWN, "L": LEFT, "R": RIGHT}


def parse_moves(moves: str):
    """
    Turn a string like "RRDD.L" into per-tick directions.

    '.' keeps the current heading (None).
    """
    directions = []
    for letter in moves.upper():
        if letter == ".":
            directions.append(None)
        elif letter in MOVE_LETTERS:
            directions.append(MOVE_LETTERS[letter])
        else:
            raise ValueError(f"Unknown move '{letter}' (use U, D, L, R or '.')")
    return directions


def run_headless(engine: GameEngine, ticks: int, moves: str = "", show_board: bool = True) -> TickResult:
    """
    Drive the engine without a display, printing the board after each tick.

    Stops early on game over. Returns the last TickResult.
    """
    directions = parse_moves(moves)
    result = TickResult(engine.state, not engine.running, engine.last_death_reason)
    for i in range(ticks):
        if i < len(directions) and directions[i] is not None:
            engine.set_pending_direction(directions[i])
        result = engine.tick()
        if show_board:
            print(f"\nTick {i + 1} | score {result.state.score} | level {result.state.level}")
            print(result.state.print_board())
        if result.collided:
            break
    return result


def main():
    parser = argparse.ArgumentParser(description="Play Snake on a grid.")
    parser.add_argument("--width", type=int, required=False, default=None,
                        help="Grid width in cells (default: SNAKE_GRID_WIDTH or 40)")
    parser.add_argument("--height", type=int, required=False, default=None,
                        help="Grid height in cells (default: SNAKE_GRID_HEIGHT or 50)")
    parser.add_argument("--interval", type=float, required=False, default=None,
                        help="Initial delay between ticks in ms")
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Seed for apple placement")
    parser.add_argument("--headless-ticks", type=int, required=False, default=None,
                        help="Run N ticks without a window and print the board")
    parser.add_argument("--moves", type=str, required=False, default="",
                        help="Headless only: one letter per tick (U/D/L/R, '.' to keep heading)")

    args = parser.parse_args()

    config = GameConfig.from_env().with_overrides(
        grid_width=args.width,
        grid_height=args.height,
        initial_interval_ms=args.interval
    )

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    rng = random.Random(args.seed)

    if args.headless_ticks is not None:
        engine = GameEngine(config, rng)
        logger.info(f"Running {args.headless_ticks} headless ticks")
        result = run_headless(engine, args.headless_ticks, args.moves)
        print(f"\nFinal score: {result.state.score} (running={result.state.running})")
        return

    # Imported here so headless runs work without pygame installed
    from app import run_app
    run_app(config, rng)


if __name__ == "__main__":
    main()
