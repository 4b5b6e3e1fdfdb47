"""CLI entrypoint for the puzzle engine."""

from __future__ import annotations

import argparse
import json

from .engine import RubikEngine
from .scramble import DEFAULT_SCRAMBLE_COUNT
from .sequences import DEFAULT_DEMO, DEFAULT_TRIAL_LENGTH, DEFAULT_TRIALS, DEMOS
from .server import RubikHTTPServer
from .state_codec import state_to_text


def _load_state(state_json: str | None, state_file: str | None):
    if state_json and state_file:
        raise ValueError("Use only one of --state-json or --state-file")
    if state_json:
        return json.loads(state_json)
    if state_file:
        with open(state_file, "r", encoding="utf-8") as f:
            return json.load(f)
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="3x3 puzzle engine")
    sub = parser.add_subparsers(dest="mode", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--seed", type=int, default=None)
    common.add_argument("--state-json", type=str, default=None)
    common.add_argument("--state-file", type=str, default=None)

    headless = sub.add_parser("headless", parents=[common], help="Run headless HTTP server")
    headless.add_argument("--host", default="127.0.0.1")
    headless.add_argument("--port", type=int, default=8000)
    headless.add_argument("--scramble-count", type=int, default=0)

    scramble = sub.add_parser("scramble", parents=[common], help="Print a scramble and the resulting state")
    scramble.add_argument("--count", type=int, default=DEFAULT_SCRAMBLE_COUNT)

    solve = sub.add_parser("solve", parents=[common], help="Scramble, then replay the stage sequences")
    solve.add_argument("--count", type=int, default=DEFAULT_SCRAMBLE_COUNT)

    demo = sub.add_parser("demo", parents=[common], help="Play a named algorithm from solved")
    demo.add_argument("name", nargs="?", default=DEFAULT_DEMO, choices=sorted(DEMOS))

    selftest = sub.add_parser("test", parents=[common], help="Replay the verification sequence on scratch cubes")
    selftest.add_argument("--trials", type=int, default=DEFAULT_TRIALS)
    selftest.add_argument("--length", type=int, default=DEFAULT_TRIAL_LENGTH)

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    initial_state = _load_state(args.state_json, args.state_file)
    engine = RubikEngine(initial_state=initial_state, seed=args.seed)

    if args.mode == "headless":
        server = RubikHTTPServer(engine=engine, host=args.host, port=args.port)
        if args.scramble_count > 0 and initial_state is None:
            engine.scramble(args.scramble_count)
        print(f"Rubik server listening on http://{server.host}:{server.port}")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
        finally:
            server.shutdown()
        return

    if args.mode == "scramble":
        moves = engine.scramble(args.count)
        print(json.dumps({"moves": moves, "solved": engine.is_solved()}))
        print(state_to_text(engine.get_state()), end="")
        return

    if args.mode == "solve":
        if initial_state is None:
            scramble = engine.scramble(args.count)
            print(f"Scramble: {' '.join(scramble)}")
        result = engine.solve()
        print(json.dumps(result.as_dict()))
        print(result.message)
        return

    if args.mode == "demo":
        moves = engine.demonstrate(args.name)
        print(f"{DEMOS[args.name].title}: {' '.join(moves)}")
        print(state_to_text(engine.get_state()), end="")
        return

    if args.mode == "test":
        report = engine.test_solver(trials=args.trials, length=args.length, seed=args.seed)
        for trial in report.trials:
            status = "SOLVED" if trial.solved else "NOT SOLVED"
            print(f"Test {trial.trial}: scrambled={trial.scrambled} {status} ({trial.move_count} moves, {trial.time_ms:.2f}ms)")
        print(f"Successful solves: {report.successes}/{len(report.trials)} ({report.success_rate * 100:.1f}%)")
        print(f"Average moves: {report.average_moves:.1f}")
        return

    parser.error(f"Unsupported mode: {args.mode}")


if __name__ == "__main__":
    main()
