import pytest

from valik.xdrop import (
    GappedAlignment,
    Merger,
    Score,
    band_diagonals,
    negative_merge,
    positive_merge,
    split_at_x_drops,
    verification_scoring,
)


def test_alignment_rows_must_match_in_length():
    with pytest.raises(ValueError):
        GappedAlignment("ACGT", "ACG")


def test_alignment_length_and_clip():
    ali = GappedAlignment("AC-GT", "ACTGT")
    assert len(ali) == 5
    clipped = ali.clip(1, 4)
    assert clipped.rows == ("C-G", "CTG")
    assert clipped.clip(1, 2).rows == ("-", "T")


def test_clip_outside_view_raises():
    ali = GappedAlignment("ACGT", "ACGT")
    with pytest.raises(ValueError):
        ali.clip(2, 5)


def test_negative_merge_merges_three_runs():
    queue = [Merger(0, 1, -5), Merger(1, 3, 2), Merger(3, 4, -4)]
    original = list(queue)
    assert negative_merge(queue) is True
    assert len(queue) == 1
    merged = queue[0]
    assert merged.begin == original[0].begin
    assert merged.end == original[2].end
    assert merged.score == sum(m.score for m in original)


def test_negative_merge_rejects_large_middle():
    queue = [Merger(0, 1, -5), Merger(1, 3, 5), Merger(3, 4, -4)]
    before = list(queue)
    assert negative_merge(queue) is False
    assert queue == before


def test_negative_merge_needs_three_runs():
    queue = [Merger(0, 1, -5), Merger(1, 3, 2)]
    assert negative_merge(queue) is False
    assert len(queue) == 2


def test_positive_merge_keeps_outer_runs():
    ab, bc, cd, de, ef = (
        Merger(0, 1, -10),
        Merger(1, 3, 3),
        Merger(3, 4, -1),
        Merger(4, 6, 2),
        Merger(6, 7, -10),
    )
    queue = [ab, bc, cd, de, ef]
    assert positive_merge(queue) is True
    assert queue[0] == ab
    assert queue[-1] == ef
    assert queue[1] == Merger(bc.begin, de.end, bc.score + cd.score + de.score)
    assert len(queue) == 3


def test_positive_merge_rejects_positive_middle():
    queue = [Merger(0, 1, -10), Merger(1, 3, 3), Merger(3, 4, 1), Merger(4, 6, 2), Merger(6, 7, -10)]
    before = list(queue)
    assert positive_merge(queue) is False
    assert queue == before


def test_split_perfect_alignment_is_whole():
    ali = GappedAlignment("ACGT", "ACGT")
    pieces = split_at_x_drops(ali, Score(1, -1, -1), 1, 1)
    assert pieces == [ali]


def test_split_at_mismatch_block():
    ali = GappedAlignment("AAAACCCCAAAA", "AAAAGGGGAAAA")
    pieces = split_at_x_drops(ali, Score(1, -1, -1), 2, 3)
    assert [p.rows for p in pieces] == [("AAAA", "AAAA"), ("AAAA", "AAAA")]
    assert [(p.begin, p.end) for p in pieces] == [(0, 4), (8, 12)]


def test_split_drops_low_scoring_pieces():
    ali = GappedAlignment("AAAACCCCAAAA", "AAAAGGGGAAAA")
    assert split_at_x_drops(ali, Score(1, -1, -1), 2, 5) == []


def test_split_pieces_contain_only_matches_at_ends():
    ali = GappedAlignment("ACGTTTACGTAA--ACGT", "ACGTTAACCCCATTACGT")
    pieces = split_at_x_drops(ali, Score(1, -1, -1), 1, 1)
    assert pieces
    for piece in pieces:
        row0, row1 = piece.rows
        assert row0[0] == row1[0] != "-"
        assert row0[-1] == row1[-1] != "-"


def test_scoring_zero_epsilon_uses_lower_bound():
    scoring = verification_scoring(0.0, 20, 5, 1000)
    assert scoring.score.mismatch == -1000
    assert scoring.score.gap == -1000
    assert scoring.score_drop_off == 5 * 1000
    assert scoring.min_score == 20


def test_scoring_clamped_by_host_length():
    scoring = verification_scoring(0.001, 100, 5, 10)
    assert scoring.score.mismatch == -10
    assert scoring.score_drop_off == 50


def test_scoring_invariants():
    scoring = verification_scoring(0.05, 100, 5.0, 10_000)
    assert scoring.score.match == 1
    assert scoring.score.mismatch == scoring.score.gap < 0
    assert scoring.score_drop_off == 5 * -scoring.score.mismatch
    assert 1 <= scoring.min_score <= 100


def test_scoring_half_epsilon():
    scoring = verification_scoring(0.5, 10, 1, 100)
    assert scoring.score.mismatch == -1
    assert scoring.min_score == 1


def test_scoring_negative_epsilon_raises():
    with pytest.raises(ValueError):
        verification_scoring(-0.1, 10, 1, 100)


def test_band_whole_query():
    assert band_diagonals(3, 40, 0, 50, 50, 16) == (-16, 16)


def test_band_query_prefix():
    lower, upper = band_diagonals(0, 10, 0, 8, 20, 16)
    assert upper - lower == 16


def test_band_query_suffix():
    lower, upper = band_diagonals(0, 10, 5, 20, 20, 16)
    assert (lower, upper) == (-16, 0)


def test_band_database_longer_than_query():
    assert band_diagonals(0, 20, 5, 10, 30, 16) is None