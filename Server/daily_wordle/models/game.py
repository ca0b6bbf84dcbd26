"""
Game Data Models

Contains all gameplay data structures and enums exchanged over the
guess stream.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List


class LetterStatus(Enum):
    """Per-letter evaluation status of a guess."""
    CORRECT_POSITION = "CORRECT_POSITION"
    WRONG_POSITION = "WRONG_POSITION"
    NOT_IN_WORD = "NOT_IN_WORD"
    UNRESOLVED = "UNRESOLVED"  # Evaluator-internal, never sent to clients


@dataclass
class LetterResult:
    """Evaluation of one position in a guess."""
    letter: str
    status: LetterStatus

    def to_dict(self) -> Dict[str, str]:
        return {'letter': self.letter, 'status': self.status.value}


@dataclass
class GuessRequest:
    """A single guess submitted by the player."""
    word: str

    @classmethod
    def from_payload(cls, data: Any) -> 'GuessRequest':
        """Build a request from a raw event payload; missing words become ''."""
        if isinstance(data, str):
            return cls(word=data)
        if isinstance(data, dict):
            word = data.get('word')
            return cls(word=word if isinstance(word, str) else '')
        return cls(word='')


@dataclass
class GuessResponse:
    """Server reply to one guess, accepted or rejected."""
    results: List[LetterResult]
    included_letters: List[str]
    excluded_letters: List[str]
    unused_letters: List[str]
    is_correct: bool = False
    is_game_over: bool = False

    @classmethod
    def build(cls,
              results: List[LetterResult],
              included: Iterable[str],
              excluded: Iterable[str],
              available: Iterable[str],
              is_correct: bool = False,
              is_game_over: bool = False) -> 'GuessResponse':
        """Snapshot the session's letter sets into sorted lists."""
        return cls(
            results=list(results),
            included_letters=sorted(included),
            excluded_letters=sorted(excluded),
            unused_letters=sorted(available),
            is_correct=is_correct,
            is_game_over=is_game_over,
        )

    @property
    def is_rejected(self) -> bool:
        return not self.results

    def to_dict(self) -> Dict[str, Any]:
        return {
            'results': [result.to_dict() for result in self.results],
            'included_letters': list(self.included_letters),
            'excluded_letters': list(self.excluded_letters),
            'unused_letters': list(self.unused_letters),
            'is_correct': self.is_correct,
            'is_game_over': self.is_game_over,
        }


@dataclass
class SessionSummary:
    """Outcome of a finished session, submitted once to the stats store."""
    session_id: str
    won: bool
    turns_used: int
    abandoned: bool = False
    guesses: List[str] = field(default_factory=list)
