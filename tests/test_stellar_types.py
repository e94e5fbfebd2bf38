import pytest

from valik.stellar_types import (
    StellarComputeStatistics,
    StellarComputeStatisticsCollection,
    StellarMatch,
    StellarOutputStatistics,
    compare_by_length,
    compare_by_position,
    is_upstream,
    sort_by_length,
    sort_by_position,
)


def test_compute_statistics_merge():
    a = StellarComputeStatistics(num_swift_hits=3, max_length=40, total_length=100)
    b = StellarComputeStatistics(num_swift_hits=2, max_length=70, total_length=50)
    a.merge_in(b)
    assert a.num_swift_hits == 3 + 2
    assert a.total_length == 100 + 50
    assert a.max_length == 70


def test_output_statistics_merge():
    a = StellarOutputStatistics(max_length=90, total_length=10, num_matches=4, num_disabled=1)
    b = StellarOutputStatistics(max_length=20, total_length=30, num_matches=5, num_disabled=2)
    a.merge_in(b)
    assert a.max_length == 90
    assert a.total_length == 10 + 30
    assert a.num_matches == 4 + 5
    assert a.num_disabled == 1 + 2


def test_collection_indexing():
    collection = StellarComputeStatisticsCollection()
    first = StellarComputeStatistics(num_swift_hits=1)
    second = StellarComputeStatistics(num_swift_hits=2)
    collection.add(first)
    collection.add(second)
    assert len(collection) == 2
    assert collection[0] is first
    assert collection[1] is second
    with pytest.raises(IndexError):
        collection[2]


def test_match_length_is_longer_row():
    match = StellarMatch(id="chr1", row1="ACG-T", row2="ACGTTA")
    assert match.length() == len("ACGTTA")


def test_compare_by_position_id_first():
    a = StellarMatch(id="a", begin1=50, end1=60)
    b = StellarMatch(id="b", begin1=0, end1=10)
    assert compare_by_position(a, b) == -1
    assert compare_by_position(b, a) == 1
    assert compare_by_position(a, a) == 0


def test_compare_by_position_uses_min_of_begin_end():
    reversed_match = StellarMatch(id="a", begin1=30, end1=5)
    forward = StellarMatch(id="a", begin1=10, end1=30)
    assert compare_by_position(reversed_match, forward) == -1


def test_compare_by_position_forward_orientation_first():
    fwd = StellarMatch(id="a", orientation=True, begin1=1, end1=9)
    rev = StellarMatch(id="a", orientation=False, begin1=1, end1=9)
    assert sort_by_position([rev, fwd]) == [fwd, rev]


def test_sort_by_position_is_stable():
    a = StellarMatch(id="x", begin1=1, end1=5, row1="AAAA")
    b = StellarMatch(id="x", begin1=1, end1=5, row1="CCCC")
    c = StellarMatch(id="w", begin1=7, end1=9)
    result = sort_by_position([a, b, c])
    assert result[0] is c
    assert result[1] is a
    assert result[2] is b


def test_compare_by_length_invalid_last():
    invalid = StellarMatch(id=StellarMatch.INVALID_ID, begin1=0, end1=1000)
    short = StellarMatch(id="q", begin1=0, end1=3)
    assert compare_by_length(invalid, short) == 1
    assert compare_by_length(short, invalid) == -1
    assert sort_by_length([invalid, short]) == [short, invalid]


def test_sort_by_length_longest_first():
    short = StellarMatch(id="q", begin1=0, end1=10)
    long_ = StellarMatch(id="q", begin1=100, end1=20)
    mid = StellarMatch(id="q", begin1=5, end1=40)
    result = sort_by_length([short, long_, mid])
    assert result == [long_, mid, short]
    lengths = [abs(m.end1 - m.begin1) for m in result]
    assert lengths == sorted(lengths, reverse=True)


def test_is_upstream_disjoint():
    m1 = StellarMatch(begin1=0, end1=10, begin2=50, end2=60)
    m2 = StellarMatch(begin1=10, end1=20, begin2=0, end2=10)
    assert is_upstream(m1, m2, 0, 5)
    assert not is_upstream(m1, m2, 1, 5)


def test_is_upstream_overlap_depends_on_min_length():
    m1 = StellarMatch(begin1=0, end1=20)
    m2 = StellarMatch(begin1=10, end1=30)
    assert is_upstream(m1, m2, 0, 10)
    assert not is_upstream(m1, m2, 0, 11)