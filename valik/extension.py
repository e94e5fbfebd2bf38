"""Banded dynamic programming used to extend epsilon cores into epsilon matches."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Sequence

__all__ = [
    "Trace",
    "ExtensionEndPosition",
    "ExtensionBandedTraceMatrix",
    "align_banded_nw_best_ends",
    "longest_eps_match",
]

# Guards the error-rate comparison against floating point rounding.
_DELTA = 0.000001


class Trace(IntEnum):
    """Traceback direction stored for one cell of the banded matrix."""

    DIAGONAL = 0
    HORIZONTAL = 1
    VERTICAL = 2


@dataclass(frozen=True)
class ExtensionEndPosition:
    """A possible end of an extension: its alignment length and matrix cell."""

    length: int = 0
    row: int = 0
    col: int = 0

    @property
    def coord(self) -> tuple[int, int]:
        """The (row, column) cell of this end position in the banded matrix."""
        return (self.row, self.col)


class ExtensionBandedTraceMatrix:
    """Trace matrix restricted to the diagonals ``lower..upper``.

    Cells are stored row by row; each stored row holds one slot per diagonal.
    """

    def __init__(self, row_count: int, column_count: int, lower_diagonal: int, upper_diagonal: int):
        if lower_diagonal > upper_diagonal:
            raise ValueError("lower diagonal must not exceed upper diagonal")
        if column_count < lower_diagonal:
            raise ValueError("lower diagonal lies beyond the last column")
        self.rows = row_count
        self.columns = column_count
        self.lower_diagonal = lower_diagonal
        self.upper_diagonal = upper_diagonal
        self.data = bytearray(self.data_size())

    def diagonal_width(self) -> int:
        """Number of diagonals in the band."""
        return self.upper_diagonal - self.lower_diagonal + 1

    def data_size(self) -> int:
        """Number of stored trace cells."""
        begin, end = self.row_interval()
        return max(0, end - begin) * self.diagonal_width()

    def row_interval(self) -> tuple[int, int]:
        """Half-open range of matrix rows that intersect the band."""
        begin = -self.upper_diagonal if self.upper_diagonal <= 0 else 0
        end = min(self.columns - self.lower_diagonal, self.rows)
        return begin, end

    def diagonal_interval_in_row(self, row: int) -> tuple[int, int]:
        """Half-open range of band slots that are active in ``row``."""
        row_offset = row - self.row_interval()[0]
        end = self.diagonal_width()
        begin = 0
        if self.lower_diagonal <= 0:
            begin = end if self.upper_diagonal < 0 else 1 - self.lower_diagonal
        begin -= min(row_offset + 1, begin)
        if row >= self.columns - self.upper_diagonal:
            end -= row - self.columns + self.upper_diagonal
        return begin, end

    def column_interval_in_row(self, row: int) -> tuple[int, int]:
        """Half-open range of matrix columns that are active in ``row``."""
        first, last = self.diagonal_interval_in_row(row)
        offset = self.lower_diagonal + row
        return min(first + offset, self.columns), min(last + offset, self.columns)

    def row_span(self, row: int) -> memoryview:
        """Writable view of the active trace cells of ``row``."""
        begin, end = self.row_interval()
        if not begin <= row <= end:
            return memoryview(bytearray())
        first, _ = self.diagonal_interval_in_row(row)
        column_begin, column_end = self.column_interval_in_row(row)
        start = (row - begin) * self.diagonal_width() + first
        size = max(0, column_end - column_begin)
        return memoryview(self.data)[start:start + size]


def align_banded_nw_best_ends(
    seq1: Sequence,
    seq2: Sequence,
    match_score: int,
    gap_score: int,
    lower_diagonal: int,
    upper_diagonal: int,
) -> tuple[ExtensionBandedTraceMatrix, list[ExtensionEndPosition]]:
    """Fill a banded global alignment matrix and collect the best end per error count.

    Mismatches cost as much as gaps. ``seq1`` runs along the columns and ``seq2``
    along the rows. Returns the trace matrix and, indexed by number of errors,
    the longest alignment end reachable with that many errors; the list is cut
    where a further error no longer buys a longer alignment.
    """
    if upper_diagonal < lower_diagonal:
        raise ValueError("upper diagonal must not be below lower diagonal")
    if match_score != 1:
        raise ValueError("match score must be 1")
    if gap_score >= match_score:
        raise ValueError("gap score must be smaller than match score")

    len1 = len(seq1) + 1
    len2 = len(seq2) + 1
    if len1 < lower_diagonal:
        raise ValueError("lower diagonal lies beyond the last column")

    matrix = ExtensionBandedTraceMatrix(len2, len1, lower_diagonal, upper_diagonal)
    trace = matrix.data
    width = matrix.diagonal_width()

    hi_diag = width
    if lower_diagonal > 0:
        lo_diag = 0
    else:
        lo_diag = hi_diag if upper_diagonal < 0 else 1 - lower_diagonal
    lo_row, hi_row = matrix.row_interval()
    height = hi_row - lo_row

    scores = [0] * width
    lengths = [0] * width
    best_ends: list[ExtensionEndPosition] = []
    minus_inf = float("-inf")

    for row in range(max(0, height)):
        actual_row = row + lo_row
        if lo_diag > 0:
            lo_diag -= 1
        if actual_row >= len1 - upper_diagonal:
            hi_diag -= 1

        score_left = minus_inf
        length_left = len1 + len2 + 1

        for col in range(lo_diag, hi_diag):
            actual_col = col + lower_diagonal + actual_row
            if actual_col >= len1:
                break

            cell = row * width + col
            if actual_row != 0 and actual_col != 0:
                same = seq1[actual_col - 1] == seq2[actual_row - 1]
                scores[col] += match_score if same else gap_score
                trace[cell] = Trace.DIAGONAL
                lengths[col] += 1

                score_up = scores[col + 1] + gap_score if col < width - 1 else minus_inf
                if score_up > scores[col]:
                    scores[col] = score_up
                    trace[cell] = Trace.VERTICAL
                    lengths[col] = lengths[col + 1] + 1

                score_left = score_left + gap_score if col > 0 else minus_inf
                if score_left > scores[col]:
                    scores[col] = score_left
                    trace[cell] = Trace.HORIZONTAL
                    lengths[col] = length_left + 1

                score_left = scores[col]
                length_left = lengths[col]
            elif actual_row == 0:
                scores[col] = actual_col * gap_score
                lengths[col] = actual_col
            else:
                scores[col] = actual_row * gap_score
                lengths[col] = actual_row
                score_left = scores[col]
                length_left = actual_row

            # score - length * match == errors * (gap - match)
            errors = (scores[col] - lengths[col] * match_score) // (gap_score - match_score)
            if errors == len(best_ends):
                best_ends.append(ExtensionEndPosition(lengths[col], row, col))
            elif lengths[col] > best_ends[errors].length:
                best_ends[errors] = ExtensionEndPosition(lengths[col], row, col)

    if best_ends:
        keep = len(best_ends) - 1
        while keep > 0 and best_ends[keep].length <= best_ends[keep - 1].length:
            keep -= 1
        del best_ends[keep + 1:]

    return matrix, best_ends


def longest_eps_match(
    left_ends: Sequence[ExtensionEndPosition],
    right_ends: Sequence[ExtensionEndPosition],
    align_length: int,
    align_errors: int,
    min_length: int,
    epsilon: float,
) -> tuple[int, int] | None:
    """Choose the left and right extension ends giving the longest epsilon match.

    The index of an end position equals its number of errors. Returns the pair
    of indices ``(left, right)``, or None when no combination reaches
    ``min_length`` within the error rate ``epsilon``.
    """
    if not left_ends or not right_ends:
        return None

    best: tuple[int, int] | None = None
    required = min_length
    last_right = len(right_ends) - 1

    for left_index in range(len(left_ends) - 1, -1, -1):
        left_length = left_ends[left_index].length
        if left_length + align_length + right_ends[last_right].length < required:
            break
        for right_index in range(last_right, -1, -1):
            total_length = left_length + align_length + right_ends[right_index].length
            if total_length < required:
                break
            total_errors = left_index + align_errors + right_index
            if total_errors / total_length < epsilon + _DELTA:
                best = (left_index, right_index)
                required = total_length
                break

    return best