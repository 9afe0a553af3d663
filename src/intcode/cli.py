"""Command-line driver: ``intcode run | amplify | arcade``."""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from . import debug
from .arcade import run_cabinet
from .config import VMConfig
from .errors import IntcodeError
from .executor import run_program
from .loader import load_program
from .pipeline import best_phase_setting, run_amplifiers
from .ports import ConsolePort


def _phases(text: str) -> List[int]:
    try:
        return [int(p) for p in text.split(",") if p.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid phase list {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="intcode", description="Intcode virtual machine")
    ap.add_argument("--trace", action="store_true", help="Log every executed instruction to stderr")
    sub = ap.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run a program against the console")
    run.add_argument("program", help="Program file ('-' for stdin)")

    amp = sub.add_parser("amplify", help="Run an amplifier chain")
    amp.add_argument("program", help="Program file ('-' for stdin)")
    amp.add_argument("--phases", type=_phases, default=[0, 1, 2, 3, 4], help="Comma-separated phase settings")
    amp.add_argument("--feedback", action="store_true", help="Loop the last stage back into the first")
    amp.add_argument("--stimulus", type=int, default=0, help="Initial input to the first stage")
    amp.add_argument("--search", action="store_true", help="Try every ordering of --phases")

    arc = sub.add_parser("arcade", help="Run an arcade cabinet program")
    arc.add_argument("program", help="Program file ('-' for stdin)")
    arc.add_argument("--play", action="store_true", help="Insert quarters and let the paddle play")
    arc.add_argument("--render", action="store_true", help="Print the final screen")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = VMConfig.from_env()
    if args.trace:
        config = config.with_trace()
        debug.enable(True)

    try:
        program = load_program(args.program)
        if args.command == "run":
            run_program(program, ConsolePort(), config=config)
        elif args.command == "amplify":
            if args.search:
                order, signal = best_phase_setting(
                    program, args.phases, feedback=args.feedback, stimulus=args.stimulus, config=config
                )
                print(f"{','.join(map(str, order))} => {signal}")
            else:
                print(run_amplifiers(program, args.phases, feedback=args.feedback, stimulus=args.stimulus, config=config))
        elif args.command == "arcade":
            port = run_cabinet(program, free_play=args.play, config=config)
            if args.render:
                print(port.render())
            print(port.score if args.play else port.count_blocks())
    except (IntcodeError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
