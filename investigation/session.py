from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from investigation.journal import SessionJournal
from investigation.ledger import ClueLedger
from investigation.locations import Location
from investigation.suspects import SuspectIndex
from investigation.verdict import Judgment, render_verdict, tally

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    EXPLORING = "exploring"
    EXITED = "exited"


class Command(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    EXIT = "exit"


COMMAND_WORDS = {"left": Command.LEFT, "right": Command.RIGHT, "exit": Command.EXIT}
COMMAND_KEYS = {"e": Command.LEFT, "d": Command.RIGHT, "s": Command.EXIT}

SIGNAL_MOVED = "moved"
SIGNAL_INVALID_MOVE = "invalid_move"
SIGNAL_INVALID_COMMAND = "invalid_command"
SIGNAL_EXITED = "exited"


def parse_command(line: Optional[str]) -> Optional[Command]:
    """Map a line of player input to a command.

    End of input (``None``) counts as exit. Whole words win over the
    single-key shortcuts, so ``exit`` is not read as ``e`` (left).
    """
    if line is None:
        return Command.EXIT
    text = line.lstrip().lower()
    if not text:
        return None
    word = text.split()[0]
    if word in COMMAND_WORDS:
        return COMMAND_WORDS[word]
    return COMMAND_KEYS.get(text[0])


@dataclass(frozen=True)
class RoomReport:
    name: str
    clue: Optional[str]
    suspect: Optional[str]
    new_clue: bool
    can_go_left: bool
    can_go_right: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "clue": self.clue,
            "suspect": self.suspect,
            "new_clue": self.new_clue,
            "can_go_left": self.can_go_left,
            "can_go_right": self.can_go_right,
        }


@dataclass(frozen=True)
class StepResult:
    signal: str
    state: SessionState
    room: Optional[RoomReport] = None
    visits: Tuple[Tuple[int, str], ...] = ()
    message: str = ""

    @property
    def accepted(self) -> bool:
        return self.signal in (SIGNAL_MOVED, SIGNAL_EXITED)


@dataclass
class ExplorationSession:
    root: Optional[Location]
    index: SuspectIndex
    ledger: ClueLedger = field(default_factory=ClueLedger)
    journal: SessionJournal = field(default_factory=SessionJournal)

    def __post_init__(self) -> None:
        if self.root is None:
            raise ValueError("empty_map: there is no room to start from")
        self.state = SessionState.EXPLORING
        self.visits: List[str] = []
        self.judgment: Optional[Judgment] = None
        self.cursor: Location = self.root
        self.journal.emit("session.started", {"start": self.root.name})
        logger.info("Exploration started at %s", self.root.name)
        self.current_room = self._enter(self.root)

    def _enter(self, location: Location) -> RoomReport:
        self.cursor = location
        self.visits.append(location.name)
        self.journal.emit("location.entered", {"name": location.name, "visit": len(self.visits)})
        suspect = None
        new_clue = False
        if location.clue:
            new_clue = self.ledger.add(location.clue)
            suspect = self.index.get(location.clue)
            self.journal.emit(
                "clue.found",
                {"clue": location.clue, "suspect": suspect, "new": new_clue, "room": location.name},
            )
            if new_clue:
                logger.info("Collected clue %r in %s", location.clue, location.name)
        return RoomReport(
            name=location.name,
            clue=location.clue,
            suspect=suspect,
            new_clue=new_clue,
            can_go_left=location.has_left(),
            can_go_right=location.has_right(),
        )

    def available_moves(self) -> List[Command]:
        if self.state is SessionState.EXITED:
            return []
        moves = []
        if self.cursor.has_left():
            moves.append(Command.LEFT)
        if self.cursor.has_right():
            moves.append(Command.RIGHT)
        moves.append(Command.EXIT)
        return moves

    def numbered_visits(self) -> Tuple[Tuple[int, str], ...]:
        return tuple(enumerate(self.visits, start=1))

    def step(self, command: Optional[Command]) -> StepResult:
        if self.state is SessionState.EXITED:
            raise ValueError("session_exited: exploration is already over")

        if command is Command.EXIT:
            self.state = SessionState.EXITED
            self.journal.emit("session.exited", {"visits": len(self.visits), "clues": len(self.ledger)})
            logger.info("Exploration ended after %d visits", len(self.visits))
            return StepResult(
                signal=SIGNAL_EXITED,
                state=self.state,
                visits=self.numbered_visits(),
                message="Leaving the exploration.",
            )

        if command is Command.LEFT or command is Command.RIGHT:
            target = self.cursor.left if command is Command.LEFT else self.cursor.right
            if target is None:
                self.journal.emit("move.invalid", {"from": self.cursor.name, "direction": command.value})
                logger.debug("No %s path from %s", command.value, self.cursor.name)
                return StepResult(
                    signal=SIGNAL_INVALID_MOVE,
                    state=self.state,
                    room=self.current_room,
                    message=f"There is no path to the {command.value} from {self.cursor.name}.",
                )
            self.current_room = self._enter(target)
            return StepResult(signal=SIGNAL_MOVED, state=self.state, room=self.current_room)

        self.journal.emit("command.invalid", {"at": self.cursor.name})
        logger.debug("Rejected command at %s", self.cursor.name)
        return StepResult(
            signal=SIGNAL_INVALID_COMMAND,
            state=self.state,
            room=self.current_room,
            message="Invalid option. Use 'e' (left), 'd' (right) or 's' (exit).",
        )

    def handle(self, line: Optional[str]) -> StepResult:
        return self.step(parse_command(line))

    def accuse(self, accused: str) -> Judgment:
        if self.state is not SessionState.EXITED:
            raise ValueError("still_exploring: finish exploring before accusing anyone")
        if self.judgment is not None:
            raise ValueError("already_judged: an accusation has already been made")
        accused = accused.strip()
        if not accused:
            raise ValueError("accused name must be a non-empty string")
        self.judgment = render_verdict(self.ledger, self.index, accused)
        self.journal.emit("accusation.judged", self.judgment.to_dict())
        logger.info("Accused %s: %s", accused, self.judgment.verdict.value)
        return self.judgment

    def cancel_accusation(self) -> None:
        self.journal.emit("accusation.cancelled", {})
        logger.info("Accusation cancelled")

    def summary(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "visits": [name for _, name in self.numbered_visits()],
            "clues": self.ledger.enumerate_in_order(),
            "tally": tally(self.ledger, self.index),
            "judgment": self.judgment.to_dict() if self.judgment else None,
        }
