from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from investigation.ledger import ClueLedger
from investigation.suspects import SuspectIndex

# Distinct clues needed to convict.
GUILTY_THRESHOLD = 2


class Verdict(str, Enum):
    GUILTY = "guilty"
    INSUFFICIENT_EVIDENCE = "insufficient_evidence"
    UNSUPPORTED = "unsupported"
    NO_EVIDENCE_COLLECTED = "no_evidence_collected"


@dataclass(frozen=True)
class Judgment:
    verdict: Verdict
    accused: Optional[str] = None
    suspect: Optional[str] = None
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "accused": self.accused,
            "suspect": self.suspect,
            "matching_clues": self.count,
            "threshold": GUILTY_THRESHOLD,
        }


def tally(ledger: ClueLedger, index: SuspectIndex) -> Dict[str, int]:
    """Count, per suspect, how many ledgered clues point at them."""
    counts: Counter = Counter()
    for clue in ledger:
        suspect = index.get(clue)
        if suspect is not None:
            counts[suspect] += 1
    return dict(counts)


def judge(counts: Dict[str, int], accused: str) -> Judgment:
    wanted = accused.casefold()
    for suspect, count in counts.items():
        if suspect.casefold() == wanted:
            verdict = Verdict.GUILTY if count >= GUILTY_THRESHOLD else Verdict.INSUFFICIENT_EVIDENCE
            return Judgment(verdict=verdict, accused=accused, suspect=suspect, count=count)
    return Judgment(verdict=Verdict.UNSUPPORTED, accused=accused)


def render_verdict(ledger: ClueLedger, index: SuspectIndex, accused: str) -> Judgment:
    if not ledger:
        return Judgment(verdict=Verdict.NO_EVIDENCE_COLLECTED, accused=accused)
    return judge(tally(ledger, index), accused)


def parse_accusation(line: Optional[str]) -> Optional[str]:
    """Return the accused name, or None when the player entered nothing."""
    if line is None:
        return None
    name = line.strip()
    return name or None
