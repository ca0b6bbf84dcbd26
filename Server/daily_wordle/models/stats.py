"""
Statistics Data Models

Contains the durable daily statistics record and the computed statistics
returned to clients.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict

from ..config.game_settings import GUESS_LIMIT


@dataclass
class GameStats:
    """Cumulative results of every player who attempted the day's word."""
    date: date
    total_players: int = 0
    total_winners: int = 0
    total_guesses_by_winners: int = 0
    guess_distribution: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the JSON stats file (distribution keys become strings)."""
        return {
            'date': self.date.isoformat(),
            'total_players': self.total_players,
            'total_winners': self.total_winners,
            'total_guesses_by_winners': self.total_guesses_by_winners,
            'guess_distribution': {
                str(guesses): count
                for guesses, count in sorted(self.guess_distribution.items())
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameStats':
        """
        Rebuild a record from the JSON stats file.

        Raises:
            KeyError, TypeError, ValueError: If the record is malformed or
                its counters are inconsistent with each other
        """
        # Full timestamps are accepted; only the calendar day matters.
        stored_date = date.fromisoformat(str(data['date'])[:10])
        distribution = {
            int(guesses): int(count)
            for guesses, count in (data.get('guess_distribution') or {}).items()
        }
        stats = cls(
            date=stored_date,
            total_players=int(data.get('total_players', 0)),
            total_winners=int(data.get('total_winners', 0)),
            total_guesses_by_winners=int(data.get('total_guesses_by_winners', 0)),
            guess_distribution=distribution,
        )
        stats.validate()
        return stats

    def validate(self) -> None:
        """
        Checks the counters against each other.

        Raises:
            ValueError: If any counter is negative or the counters disagree
        """
        if min(self.total_players, self.total_winners, self.total_guesses_by_winners) < 0:
            raise ValueError("Statistics counters cannot be negative")

        if self.total_winners > self.total_players:
            raise ValueError(
                f"More winners ({self.total_winners}) than players ({self.total_players})"
            )

        for guesses, count in self.guess_distribution.items():
            if not 1 <= guesses <= GUESS_LIMIT:
                raise ValueError(f"Guess count {guesses} outside 1..{GUESS_LIMIT}")
            if count < 0:
                raise ValueError(f"Negative player count {count} for {guesses} guesses")

        if sum(self.guess_distribution.values()) != self.total_winners:
            raise ValueError(
                f"Guess distribution sums to {sum(self.guess_distribution.values())}, "
                f"expected {self.total_winners} winners"
            )

        weighted = sum(guesses * count for guesses, count in self.guess_distribution.items())
        if weighted != self.total_guesses_by_winners:
            raise ValueError(
                f"Guess distribution implies {weighted} winning guesses, "
                f"record says {self.total_guesses_by_winners}"
            )


@dataclass
class StatisticsResponse:
    """Point-in-time statistics for the current day."""
    num_players: int = 0
    winners_percentage: float = 0.0
    average_guesses: float = 0.0
    guess_distribution: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def from_stats(cls, stats: GameStats) -> 'StatisticsResponse':
        winners_percentage = (
            stats.total_winners / stats.total_players * 100
            if stats.total_players > 0 else 0.0
        )
        average_guesses = (
            stats.total_guesses_by_winners / stats.total_winners
            if stats.total_winners > 0 else 0.0
        )
        return cls(
            num_players=stats.total_players,
            winners_percentage=float(winners_percentage),
            average_guesses=float(average_guesses),
            guess_distribution=dict(stats.guess_distribution),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'num_players': self.num_players,
            'winners_percentage': self.winners_percentage,
            'average_guesses': self.average_guesses,
            'guess_distribution': {
                str(guesses): count
                for guesses, count in sorted(self.guess_distribution.items())
            },
        }
