"""Service tracking per-session answer statistics."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RoundStatsSnapshot:
    """Immutable snapshot returned to consumers."""

    correct: int
    wrong: int
    streak: int

    @property
    def accuracy(self) -> float:
        total = self.correct + self.wrong
        if not total:
            return 0.0
        return (self.correct / total) * 100


class RoundStats:
    """Tracks correct/wrong answers and the current streak for this play session."""

    def __init__(self) -> None:
        self._correct: int = 0
        self._wrong: int = 0
        self._streak: int = 0

    def record_correct(self) -> None:
        self._correct += 1
        self._streak += 1

    def record_wrong(self) -> None:
        """Count a wrong answer or a timeout; either one breaks the streak."""
        self._wrong += 1
        self._streak = 0

    def snapshot(self) -> RoundStatsSnapshot:
        return RoundStatsSnapshot(correct=self._correct, wrong=self._wrong, streak=self._streak)

    def clear(self) -> None:
        """Reset all counters."""
        self._correct = 0
        self._wrong = 0
        self._streak = 0
