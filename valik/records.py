"""Query records handed to the search, owning or sharing their sequence."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["QueryRecord", "SharedQueryRecord", "to_dna4"]

_DNA4 = {"A": "A", "C": "C", "G": "G", "T": "T", "U": "T"}


def to_dna4(sequence: str) -> str:
    """Convert to the four-letter nucleotide alphabet; unknown characters become A."""
    return "".join(_DNA4.get(c, "A") for c in sequence.upper())


@dataclass
class QueryRecord:
    """A query that owns its sequence."""

    sequence_id: str
    sequence: str


@dataclass
class SharedQueryRecord:
    """A query segment that shares the underlying sequence with other records."""

    sequence_id: str
    sequence: str
    underlying: str
    start: int
    end: int

    @property
    def segment(self) -> str:
        """The segment of the underlying sequence, in its original letters."""
        return self.underlying[self.start:self.end]

    @classmethod
    def from_sequence(cls, sequence: str, sequence_id: str) -> SharedQueryRecord:
        """A record covering the whole of ``sequence``."""
        return cls(sequence_id, to_dna4(sequence), sequence, 0, len(sequence))

    @classmethod
    def from_segment(
        cls, sequence_id: str, start: int, length: int, underlying: str
    ) -> SharedQueryRecord:
        """A record for ``length`` letters of ``underlying`` from ``start``."""
        if start < 0 or length < 0 or start + length > len(underlying):
            raise ValueError("segment lies outside the query sequence")
        end = start + length
        return cls(sequence_id, to_dna4(underlying[start:end]), underlying, start, end)