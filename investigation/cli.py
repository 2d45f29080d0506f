from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from investigation.case_file import CaseFile
from investigation.console import play
from investigation.game_data import reference_case
from investigation.locations import count_locations, depth, teardown
from investigation.session import ExplorationSession, SessionState

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Detective Quest: explore the mansion, collect clues, accuse a suspect")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")

    sub = parser.add_subparsers(dest="command", required=True)

    play_cmd = sub.add_parser("play", help="Play interactively on the console")
    play_cmd.add_argument("--case", default=None, help="Path to a case JSON file (default: built-in mansion)")

    describe = sub.add_parser("describe", help="Print the case as JSON")
    describe.add_argument("--case", default=None, help="Path to a case JSON file (default: built-in mansion)")

    replay = sub.add_parser("replay", help="Run a scripted session and print a JSON summary")
    replay.add_argument("--case", default=None, help="Path to a case JSON file (default: built-in mansion)")
    replay.add_argument("--move", action="append", default=[], help="Command to send (repeatable): e, d, s, left, right, exit")
    replay.add_argument("--accuse", default=None, help="Suspect to accuse after exploring")

    return parser


def _load_case(case_path: Optional[str]) -> CaseFile:
    if case_path is None:
        return reference_case()
    return CaseFile.load(Path(case_path))


def _new_session(case: CaseFile) -> ExplorationSession:
    return ExplorationSession(root=case.build_map(), index=case.build_index())


def run_replay(case: CaseFile, moves: List[str], accused: Optional[str]) -> dict:
    session = _new_session(case)
    rejected = []
    for line in moves:
        if session.state is SessionState.EXITED:
            break
        result = session.handle(line)
        if not result.accepted:
            rejected.append({"command": line, "signal": result.signal})
    if session.state is SessionState.EXPLORING:
        session.handle(None)
    if accused is not None and accused.strip():
        session.accuse(accused)
    summary = session.summary()
    summary["rejected"] = rejected
    teardown(session.root)
    return summary


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        case = _load_case(args.case)
    except (OSError, ValueError) as exc:
        raise SystemExit(f"Failed to load case: {exc}")

    try:
        if args.command == "describe":
            data = case.to_dict()
            root = case.build_map()
            data["map"] = {"rooms": count_locations(root), "depth": depth(root)}
            teardown(root)
            print(json.dumps(data, indent=2))
            return

        if args.command == "replay":
            print(json.dumps(run_replay(case, args.move, args.accuse), indent=2))
            return

        if args.command == "play":
            session = _new_session(case)
            try:
                play(session, title=case.name, intro=case.intro)
            finally:
                session.ledger.clear()
                teardown(session.root)
            return
    except MemoryError:
        logger.critical("Out of memory while growing game structures; aborting")
        print("Fatal: out of memory. The session was aborted.", file=sys.stderr)
        raise SystemExit(1)

    raise SystemExit(f"Unknown command: {args.command}")


if __name__ == "__main__":
    main()
