"""
Demo: Scripted Maze Run
=======================

WHAT THIS SHOWS:
- Loading the built-in catalogue (or a directory of JSON levels)
- Feeding directional intents into a GameSession
- Pursuers reacting after every move (and on a timer with --realtime)
- GameFlow moving between level-complete / game-over / game-won screens
- ASCII rendering of the session snapshot

RUN:
    python examples/demo/run.py --moves RRDDRDRRD
    python examples/demo/run.py --level 2 --moves RRDD --realtime --interval 0.5
    python examples/demo/run.py --levels-dir examples/levels --moves RRR
"""

import argparse
import asyncio
from pathlib import Path
from typing import List

from mazechase import (
    Direction,
    FlowState,
    GameFlow,
    GameSession,
    LevelCatalogue,
    load_catalogue,
    render_ascii,
)
from mazechase.config import Config


def parse_moves(moves: str) -> List[Direction]:
    """'RRDL' or 'right,right,down' -> directions."""
    tokens = moves.split(",") if "," in moves else list(moves)
    return [Direction.from_key(token) for token in tokens if token.strip()]


def print_frame(session: GameSession, title: str) -> None:
    snapshot = session.snapshot()
    if snapshot is None:
        return
    print(f"\n--- {title} | moves: {snapshot.move_count} | {snapshot.outcome.value} ---")
    print(render_ascii(snapshot.grid))


def run_scripted(flow: GameFlow, directions: List[Direction]) -> None:
    """Apply moves synchronously; each move is followed by its pursuit tick."""
    session = flow.session
    print_frame(session, f"Level {flow.current_level} start")
    for direction in directions:
        if flow.state is not FlowState.PLAYING:
            break
        session.submit_direction(direction)
        session.process_pending()
        print_frame(session, direction.name)


async def run_realtime(flow: GameFlow, directions: List[Direction], step_seconds: float) -> None:
    """Apply moves on a wall clock while the periodic pursuit timer runs."""
    session = flow.session
    async with session:
        print_frame(session, f"Level {flow.current_level} start")
        for direction in directions:
            if flow.state is not FlowState.PLAYING:
                break
            session.submit_direction(direction)
            await session.join()
            print_frame(session, direction.name)
            await asyncio.sleep(step_seconds)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scripted maze chase run")
    parser.add_argument("--level", type=int, default=1, help="1-based level to start on")
    parser.add_argument(
        "--moves",
        default="RRDDRDRRD",
        help="Move script: letters U/D/L/R or comma-separated names",
    )
    parser.add_argument("--levels-dir", type=Path, default=None, help="Directory of *.json levels")
    parser.add_argument("--realtime", action="store_true", help="Run timers on the wall clock")
    parser.add_argument("--interval", type=float, default=None, help="Periodic tick interval (s)")
    parser.add_argument("--delay", type=float, default=None, help="Reactive tick delay (s)")
    parser.add_argument("--step", type=float, default=0.4, help="Seconds between scripted moves")
    parser.add_argument("--static", action="store_true", help="Pursuers do not move")
    return parser.parse_args()


def main(args: argparse.Namespace) -> None:
    Config.validate()
    print(Config.display())

    catalogue: LevelCatalogue = load_catalogue(args.levels_dir)
    session = GameSession(
        catalogue,
        tick_interval=args.interval,
        reactive_delay=args.delay,
        pursuers_move=False if args.static else None,
    )
    flow = GameFlow(session)
    flow.start_game(args.level)

    directions = parse_moves(args.moves)
    if args.realtime:
        asyncio.run(run_realtime(flow, directions, args.step))
    else:
        run_scripted(flow, directions)

    print(f"\nFinal screen: {flow.state.value}")


if __name__ == "__main__":
    main(parse_args())
