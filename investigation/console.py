from __future__ import annotations

from typing import Callable, Optional

from investigation.session import (
    SIGNAL_EXITED,
    SIGNAL_MOVED,
    ExplorationSession,
    RoomReport,
)
from investigation.verdict import GUILTY_THRESHOLD, Judgment, Verdict, parse_accusation

ReadLine = Callable[[str], Optional[str]]
Write = Callable[[str], None]


def read_stdin(prompt: str = "") -> Optional[str]:
    try:
        return input(prompt)
    except EOFError:
        return None


def describe_room(room: RoomReport, write: Write) -> None:
    write("")
    write(f"You are in: {room.name}")
    if room.clue:
        write(f'Clue found: "{room.clue}"')
        if room.suspect:
            write(f"  (This clue points to: {room.suspect})")
        else:
            write("  (No known suspect for this clue)")
    else:
        write("No clue in this room.")


def describe_options(session: ExplorationSession, write: Write) -> None:
    if session.cursor.is_leaf():
        write("Dead end: there are no more rooms beyond this one.")
    write("Choose an option:")
    if session.cursor.has_left():
        write("  (e) Go left")
    if session.cursor.has_right():
        write("  (d) Go right")
    write("  (s) Leave the exploration")


def explore(session: ExplorationSession, read_line: ReadLine, write: Write) -> None:
    """Drive the session from player input until the player leaves."""
    describe_room(session.current_room, write)
    while True:
        describe_options(session, write)
        result = session.handle(read_line("Option: "))
        if result.signal == SIGNAL_EXITED:
            write(result.message)
            break
        if result.signal == SIGNAL_MOVED and result.room is not None:
            describe_room(result.room, write)
            continue
        write(result.message)

    if session.visits:
        write("")
        write("Rooms visited:")
        for number, name in session.numbered_visits():
            write(f"  {number}. {name}")
    else:
        write("")
        write("No rooms visited.")


def describe_judgment(judgment: Judgment, write: Write) -> None:
    if judgment.verdict is Verdict.NO_EVIDENCE_COLLECTED:
        write("You did not collect enough clues to accuse anyone.")
        return
    if judgment.verdict is Verdict.UNSUPPORTED:
        write(f"The name '{judgment.accused}' matches no suspect among the collected clues.")
        write("Result: accusation dismissed.")
        return
    write(f"You accused: {judgment.accused}")
    write(f"Clues pointing to this suspect: {judgment.count}")
    if judgment.verdict is Verdict.GUILTY:
        write("Verdict: the evidence is sufficient. The suspect is found GUILTY.")
    else:
        write(
            f"Verdict: insufficient evidence (at least {GUILTY_THRESHOLD} clues are needed). "
            "The suspect is cleared."
        )


def accuse(session: ExplorationSession, read_line: ReadLine, write: Write) -> Optional[Judgment]:
    if not session.ledger:
        write("")
        write("You did not collect enough clues to accuse anyone.")
        return None

    write("")
    write("Collected clues (in order):")
    for clue in session.ledger:
        write(f" - {clue}")

    write("")
    write("Known suspects:")
    if not session.index.has_suspects():
        write("  (no suspects on file)")
    for name in sorted(session.index.distinct_suspects()):
        write(f"  - {name}")

    write("")
    accused = parse_accusation(read_line("Whom do you accuse? Enter the suspect's name: "))
    if accused is None:
        session.cancel_accusation()
        write("No name given. Accusation cancelled.")
        return None

    judgment = session.accuse(accused)
    write("")
    describe_judgment(judgment, write)
    return judgment


def play(
    session: ExplorationSession,
    read_line: ReadLine = read_stdin,
    write: Write = print,
    title: str = "",
    intro: str = "",
) -> Optional[Judgment]:
    if title:
        write(f"=== {title} ===")
    if intro:
        write(intro)
    write("Commands: 'e' (left), 'd' (right), 's' (leave)")
    explore(session, read_line, write)
    judgment = accuse(session, read_line, write)
    write("")
    write("The end. Thanks for playing.")
    return judgment
