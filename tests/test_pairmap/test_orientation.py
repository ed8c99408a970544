import pytest
from pairmap.constants import READ_PAIR_TYPE, STRAND
from pairmap.orientation import (
    classify,
    clipped_end,
    clipped_start,
    left_right_key,
    sort_left_right,
    strand,
    unclipped_end,
    unclipped_start,
)

from .mock import mock_interval


class TestUnclippedPositions:
    def test_forward(self):
        intervals = [mock_interval(101, '10S50M5S')]
        assert unclipped_start(intervals) == 91
        assert unclipped_end(intervals) == 155
        assert clipped_start(intervals) == 101
        assert clipped_end(intervals) == 150

    def test_reverse(self):
        # sam cigar 10S50M5S, along the read 5S50M10S
        intervals = [mock_interval(101, '5S50M10S', forward_strand=False)]
        assert unclipped_start(intervals) == 91
        assert unclipped_end(intervals) == 155

    def test_hard_clipping(self):
        intervals = [mock_interval(101, '20H30M')]
        assert unclipped_start(intervals) == 81
        assert unclipped_end(intervals) == 130

    def test_multiple_intervals(self):
        intervals = [mock_interval(1001, '60M40S'), mock_interval(501, '60S40M')]
        assert unclipped_start(intervals) == 441
        assert unclipped_end(intervals) == 1100
        assert clipped_start(intervals) == 501
        assert clipped_end(intervals) == 1060

    def test_left_right_key(self):
        assert left_right_key([mock_interval(101, '10S50M5S')]) == (91, 155, 101, 150)


class TestStrand:
    def test_forward(self):
        assert strand([mock_interval(101, '100M')]) == STRAND.POS

    def test_reverse(self):
        assert strand([mock_interval(101, '100M', forward_strand=False)]) == STRAND.NEG

    def test_majority_of_aligned_bases(self):
        intervals = [
            mock_interval(101, '60M40S', forward_strand=False),
            mock_interval(1001, '60S30M10S'),
        ]
        assert strand(intervals) == STRAND.NEG

    def test_tie_smallest_aligned_bases(self):
        intervals = [
            mock_interval(101, '30M70S'),
            mock_interval(501, '30S20M50S'),
            mock_interval(1001, '50S50M', forward_strand=False),
        ]
        assert strand(intervals) == STRAND.POS

    @pytest.mark.parametrize('inserted_forward,expected', [[True, STRAND.NEG], [False, STRAND.POS]])
    def test_tie_fewest_inserted_bases(self, inserted_forward, expected):
        intervals = [
            mock_interval(101, '25M5I25M45S', forward_strand=inserted_forward),
            mock_interval(1001, '50S50M', forward_strand=not inserted_forward),
        ]
        assert strand(intervals) == expected

    @pytest.mark.parametrize('forward_is_last,expected', [[True, STRAND.POS], [False, STRAND.NEG]])
    def test_tie_latest_read_start(self, forward_is_last, expected):
        first = mock_interval(101, '50M50S', forward_strand=not forward_is_last)
        last = mock_interval(1001, '50S50M', forward_strand=forward_is_last)
        assert strand([first, last]) == expected
        assert strand([last, first]) == expected


class TestSortLeftRight:
    def test_by_unclipped_start(self):
        first = [mock_interval(1001, '100M')]
        second = [mock_interval(101, '100M', forward_strand=False)]
        assert sort_left_right(first, second) == (second, first)
        assert sort_left_right(second, first) == (second, first)

    def test_unclipped_start_before_clipped_start(self):
        first = [mock_interval(110, '50M')]
        second = [mock_interval(120, '20S40M')]
        assert sort_left_right(first, second) == (second, first)

    def test_by_unclipped_end(self):
        first = [mock_interval(101, '50M')]
        second = [mock_interval(101, '40M')]
        assert sort_left_right(first, second) == (second, first)
        assert sort_left_right(second, first) == (second, first)

    def test_by_clipped_start(self):
        first = [mock_interval(111, '10S40M')]
        second = [mock_interval(101, '50M')]
        assert sort_left_right(first, second) == (second, first)
        assert sort_left_right(second, first) == (second, first)

    def test_by_clipped_end(self):
        first = [mock_interval(101, '50M')]
        second = [mock_interval(101, '40M10S')]
        # same unclipped and clipped start, unclipped ends 150 and 150, clipped ends 150 and 140
        assert left_right_key(first)[1] == left_right_key(second)[1]
        assert sort_left_right(first, second) == (second, first)

    def test_identical_positions_prefers_forward_left(self):
        forward = [mock_interval(101, '100M')]
        reverse = [mock_interval(101, '100M', forward_strand=False)]
        assert sort_left_right(reverse, forward) == (forward, reverse)
        assert sort_left_right(forward, reverse) == (forward, reverse)


class TestClassify:
    @pytest.mark.parametrize(
        'left_forward,right_forward,expected',
        [
            [True, False, READ_PAIR_TYPE.LR],
            [False, True, READ_PAIR_TYPE.RL],
            [True, True, READ_PAIR_TYPE.LL],
            [False, False, READ_PAIR_TYPE.RR],
        ],
    )
    def test_orientation(self, left_forward, right_forward, expected):
        left = [mock_interval(101, '100M', forward_strand=left_forward)]
        right = [mock_interval(401, '100M', forward_strand=right_forward)]
        assert classify(left, right) == (left, right, expected)
        assert classify(right, left) == (left, right, expected)

    def test_identical_positions(self):
        forward = [mock_interval(101, '100M')]
        reverse = [mock_interval(101, '100M', forward_strand=False)]
        assert classify(reverse, forward)[2] == READ_PAIR_TYPE.LR
        assert classify(forward, reverse)[2] == READ_PAIR_TYPE.LR
