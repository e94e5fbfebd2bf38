"""Splitting local alignments at X-drops, and the scoring used to verify SWIFT hits.

The splitting follows Zhang et al., "Post-processing long pairwise alignments"
(Bioinformatics, 1999): the alignment is cut into alternating runs of matching
and non-matching columns, which are merged until every remaining piece is free
of an X-drop.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import NamedTuple

__all__ = [
    "Score",
    "Merger",
    "GappedAlignment",
    "VerificationScoring",
    "negative_merge",
    "positive_merge",
    "split_at_x_drops",
    "verification_scoring",
    "band_diagonals",
]

GAP = "-"

# Smallest representable 32-bit score plus one; marks unbounded negative runs.
_MIN_SCORE = -(2**31) + 1

# Scores are never allowed below this, so that seed extension stays bounded.
_SCORING_LOWER_BOUND = -1000


@dataclass(frozen=True)
class Score:
    """Linear scoring scheme."""

    match: int = 1
    mismatch: int = -1
    gap: int = -1


class Merger(NamedTuple):
    """A run of alignment columns ``[begin, end)`` and its summed score."""

    begin: int
    end: int
    score: int


@dataclass(frozen=True)
class GappedAlignment:
    """Two gapped rows of equal length, viewed through the columns ``[begin, end)``."""

    row0: str
    row1: str
    begin: int = 0
    end: int | None = None

    def __post_init__(self) -> None:
        if len(self.row0) != len(self.row1):
            raise ValueError("alignment rows must have the same length")
        if self.end is None:
            object.__setattr__(self, "end", len(self.row0))
        if not 0 <= self.begin <= self.end <= len(self.row0):
            raise ValueError("alignment view lies outside the rows")

    @property
    def rows(self) -> tuple[str, str]:
        """The two rows restricted to the current view."""
        return self.row0[self.begin:self.end], self.row1[self.begin:self.end]

    def __len__(self) -> int:
        return self.end - self.begin

    def clip(self, begin: int, end: int) -> GappedAlignment:
        """A new alignment viewing columns ``[begin, end)`` of the current view."""
        if not 0 <= begin <= end <= len(self):
            raise ValueError("clip range lies outside the alignment view")
        return replace(self, begin=self.begin + begin, end=self.begin + end)


@dataclass(frozen=True)
class VerificationScoring:
    """Scoring scheme, X-drop and minimal seed score for verifying a SWIFT hit."""

    score: Score
    score_drop_off: int
    min_score: int


def _is_match(view0: str, view1: str, pos: int) -> bool:
    a, b = view0[pos], view1[pos]
    return a != GAP and b != GAP and a == b


def _append_negative_segment(
    view0: str, view1: str, pos: int, length: int, score: Score, queue: list[Merger]
) -> int:
    begin = pos
    total = 0
    while pos < length:
        if view0[pos] == GAP or view1[pos] == GAP:
            total += score.gap
        elif view0[pos] != view1[pos]:
            total += score.mismatch
        else:
            break
        pos += 1
    queue.append(Merger(begin, pos, _MIN_SCORE if pos == length else total))
    return pos


def _append_positive_segment(
    view0: str, view1: str, pos: int, length: int, score: Score, queue: list[Merger]
) -> int:
    if pos == length:
        return pos
    begin = pos
    total = 0
    while pos < length and _is_match(view0, view1, pos):
        total += score.match
        pos += 1
    queue.append(Merger(begin, pos, total))
    return pos


def negative_merge(queue: list[Merger]) -> bool:
    """Merge the last three runs if Lemma 5 of Zhang et al. allows it.

    Modifies ``queue`` in place and returns whether a merge took place.
    """
    if len(queue) < 3:
        return False
    ab, bc, cd = queue[-3], queue[-2], queue[-1]
    if bc.score < 0 or bc.score >= abs(max(ab.score, cd.score)):
        return False
    queue[-3:] = [Merger(ab.begin, cd.end, ab.score + bc.score + cd.score)]
    return True


def positive_merge(queue: list[Merger]) -> bool:
    """Merge the second to fourth last runs if Lemma 6 of Zhang et al. allows it.

    Modifies ``queue`` in place and returns whether a merge took place.
    """
    if len(queue) < 5:
        return False
    ab, bc, cd, de, ef = queue[-5:]
    if cd.score >= 0 or cd.score < max(ab.score, ef.score):
        return False
    queue[-4:-1] = [Merger(bc.begin, de.end, bc.score + cd.score + de.score)]
    return True


def split_at_x_drops(
    alignment: GappedAlignment, score: Score, score_drop_off: int, min_score: int
) -> list[GappedAlignment]:
    """Split ``alignment`` into sub-alignments that contain no X-drop.

    Only sub-alignments scoring at least ``min_score`` are returned, in order.
    """
    view0, view1 = alignment.rows
    pos = min(len(view0) - len(view0.lstrip(GAP)), len(view1) - len(view1.lstrip(GAP)))
    length = max(len(view0.rstrip(GAP)), len(view1.rstrip(GAP)))

    queue = [Merger(pos, pos, _MIN_SCORE)]
    pieces: list[GappedAlignment] = []

    while pos < length or len(queue) > 1:
        if not negative_merge(queue) and not positive_merge(queue):
            pos = _append_positive_segment(view0, view1, pos, length, score, queue)
            pos = _append_negative_segment(view0, view1, pos, length, score, queue)

        if len(queue) == 3 and queue[2].score < -score_drop_off:
            if queue[1].score >= min_score:
                pieces.append(alignment.clip(queue[1].begin, queue[1].end))
            del queue[0:2]

    return pieces


def verification_scoring(
    epsilon: float, min_length: int, x_drop: float, host_length: int
) -> VerificationScoring:
    """Derive the scoring used to verify SWIFT hits at error rate ``epsilon``.

    Matches score 1; mismatches and indels score so that an epsilon match keeps
    a positive score, but never below ``-host_length`` (the database length).
    """
    if epsilon < 0:
        raise ValueError("epsilon must not be negative")

    mismatch_indel = _SCORING_LOWER_BOUND
    if epsilon > 0:
        mismatch_indel = max(math.ceil(-1 / epsilon) + 1, -host_length)
    score = Score(match=1, mismatch=mismatch_indel, gap=mismatch_indel)
    score_drop_off = max(int(x_drop) * -mismatch_indel, _MIN_SCORE)

    errors = math.floor(epsilon * min_length)
    min_score = math.ceil((min_length - errors) / (errors + 1))
    if epsilon > 0:
        # the next length that allows one more error
        min_length1 = max(0, math.ceil((errors + 1) / epsilon))
        errors1 = math.floor(epsilon * min_length1)
        min_score = min(min_score, math.ceil((min_length1 - errors1) / (errors1 + 1)))

    return VerificationScoring(score, score_drop_off, min_score)


def band_diagonals(
    h_begin: int, h_end: int, v_begin: int, v_end: int, v_host_end: int, delta: int
) -> tuple[int, int] | None:
    """Lower and upper diagonal for the banded local alignment of a SWIFT hit.

    ``h_*`` delimit the database infix, ``v_*`` the query infix and
    ``v_host_end`` the end of the query. Returns None when the database infix
    is longer than the query infix, in which case the hit is not verified.
    """
    upper = 0
    lower = h_end - v_end - h_begin + v_begin
    if v_begin == 0:
        if v_end == v_host_end:
            upper, lower = delta, -delta
        else:
            upper = lower + delta
    elif v_end == v_host_end:
        lower = -delta
    elif lower > upper:
        return None
    return lower, upper