"""Statistics containers and local alignment matches with their orderings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Sequence

__all__ = [
    "StellarComputeStatistics",
    "StellarOutputStatistics",
    "StellarComputeStatisticsCollection",
    "StellarMatch",
    "compare_by_position",
    "compare_by_length",
    "is_upstream",
    "sort_by_position",
    "sort_by_length",
]


@dataclass
class StellarComputeStatistics:
    """Counters gathered while searching one database sequence."""

    num_swift_hits: int = 0
    max_length: int = 0
    total_length: int = 0

    def merge_in(self, other: StellarComputeStatistics) -> None:
        """Add the counters of ``other`` to these."""
        self.num_swift_hits += other.num_swift_hits
        self.total_length += other.total_length
        self.max_length = max(self.max_length, other.max_length)


@dataclass
class StellarOutputStatistics:
    """Counters describing the matches that were written out."""

    max_length: int = 0
    total_length: int = 0
    num_matches: int = 0
    num_disabled: int = 0

    def merge_in(self, other: StellarOutputStatistics) -> None:
        """Add the counters of ``other`` to these."""
        self.max_length = max(self.max_length, other.max_length)
        self.total_length += other.total_length
        self.num_matches += other.num_matches
        self.num_disabled += other.num_disabled


class StellarComputeStatisticsCollection:
    """Compute statistics, one entry per database record."""

    def __init__(self) -> None:
        self._statistics: list[StellarComputeStatistics] = []

    def add(self, statistics: StellarComputeStatistics) -> None:
        """Append the statistics of the next database record."""
        self._statistics.append(statistics)

    def __getitem__(self, index: int) -> StellarComputeStatistics:
        return self._statistics[index]

    def __len__(self) -> int:
        return len(self._statistics)


@dataclass
class StellarMatch:
    """A local alignment between a database (row 1) and a query (row 2)."""

    INVALID_ID: ClassVar[str] = "###########"

    id: str = ""
    orientation: bool = False
    begin1: int = 0
    end1: int = 0
    row1: Sequence = field(default="")
    begin2: int = 0
    end2: int = 0
    row2: Sequence = field(default="")

    def length(self) -> int:
        """Length of the longer of the two gapped rows."""
        return max(len(self.row1), len(self.row2))


def _position_key(match: StellarMatch) -> tuple:
    return (
        match.id,
        min(match.begin1, match.end1),
        max(match.begin1, match.end1),
        min(match.begin2, match.end2),
        max(match.begin2, match.end2),
        not match.orientation,
    )


def _length_key(match: StellarMatch) -> tuple[int, int]:
    if match.id == StellarMatch.INVALID_ID:
        return (1, 0)
    return (0, -abs(match.end1 - match.begin1))


def _compare(a: tuple, b: tuple) -> int:
    return (a > b) - (a < b)


def compare_by_position(a: StellarMatch, b: StellarMatch) -> int:
    """Order by id, database range, query range, then forward strand first.

    Returns -1, 0 or 1.
    """
    return _compare(_position_key(a), _position_key(b))


def compare_by_length(a: StellarMatch, b: StellarMatch) -> int:
    """Order longer database ranges first; invalid ids go last.

    Returns -1, 0 or 1.
    """
    if a.id == StellarMatch.INVALID_ID:
        return 1
    if b.id == StellarMatch.INVALID_ID:
        return -1
    return _compare(_length_key(a), _length_key(b))


def is_upstream(match1: StellarMatch, match2: StellarMatch, row: int, min_length: int) -> bool:
    """Whether ``match1`` lies upstream of ``match2`` in ``row`` (0: database, else query).

    Overlapping matches count as upstream only if both non-overlapping parts
    are at least ``min_length`` long.
    """
    if row == 0:
        b1, e1, b2, e2 = match1.begin1, match1.end1, match2.begin1, match2.end1
    else:
        b1, e1, b2, e2 = match1.begin2, match1.end2, match2.begin2, match2.end2

    if e1 <= b2:
        return True
    return b1 < b2 and b2 - b1 >= min_length and e1 < e2 and e2 - e1 >= min_length


def sort_by_position(matches: Iterable[StellarMatch]) -> list[StellarMatch]:
    """Stable sort by :func:`compare_by_position`."""
    return sorted(matches, key=_position_key)


def sort_by_length(matches: Iterable[StellarMatch]) -> list[StellarMatch]:
    """Stable sort by :func:`compare_by_length`: longest first, invalid ids last."""
    return sorted(matches, key=_length_key)