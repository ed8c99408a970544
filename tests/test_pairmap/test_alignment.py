import pickle

import pytest
from pairmap.alignment import AlignmentInterval
from pairmap.bam.cigar import convert_string_to_cigar
from pairmap.constants import CIGAR, NA_MAPPING_QUALITY
from pairmap.error import InvalidArgument
from pairmap.interval import Interval

from .mock import MockRead, mock_interval


class TestAlignmentInterval:
    def test_defaults_from_cigar(self):
        interval = AlignmentInterval('1', 101, 180, True, convert_string_to_cigar('5H10S80M5S'))
        assert interval.reference_span == Interval(101, 180)
        assert interval.start_in_read == 16
        assert interval.end_in_read == 95
        assert interval.left_clipped == 15
        assert interval.right_clipped == 5
        assert interval.aligned_bases == 80
        assert interval.mapping_quality == NA_MAPPING_QUALITY
        assert interval.mismatches is None

    def test_explicit_read_positions(self):
        interval = mock_interval(101, '50M', start_in_read=31, end_in_read=80)
        assert interval.start_in_read == 31
        assert interval.end_in_read == 80

    def test_error_on_empty_cigar(self):
        with pytest.raises(InvalidArgument):
            AlignmentInterval('1', 101, 150, True, [])

    def test_error_on_no_aligned_bases(self):
        with pytest.raises(InvalidArgument):
            AlignmentInterval('1', 101, 110, True, [(CIGAR.S, 10), (CIGAR.D, 10)])

    def test_error_on_span_mismatch(self):
        with pytest.raises(InvalidArgument):
            AlignmentInterval('1', 101, 160, True, convert_string_to_cigar('50M'))

    def test_error_on_bad_read_positions(self):
        with pytest.raises(InvalidArgument):
            mock_interval(101, '50M', start_in_read=40, end_in_read=20)

    def test_equality_and_hash(self):
        assert mock_interval(101, '50M') == mock_interval(101, '50M', mapping_quality=10)
        assert mock_interval(101, '50M') != mock_interval(101, '50M', forward_strand=False)
        assert len({mock_interval(101, '50M'), mock_interval(101, '50M')}) == 1

    def test_pickle(self):
        interval = mock_interval(101, '10S50M')
        assert pickle.loads(pickle.dumps(interval)) == interval


class TestFromRead:
    def test_forward(self):
        read = MockRead(cigarstring='10S90M', reference_start=99, mapping_quality=60)
        interval = AlignmentInterval.from_read(read)
        assert interval.reference_name == '1'
        assert interval.start == 100
        assert interval.end == 189
        assert interval.forward_strand
        assert interval.cigar == [(CIGAR.S, 10), (CIGAR.M, 90)]
        assert interval.start_in_read == 11
        assert interval.mapping_quality == 60

    def test_reverse_cigar_is_along_the_read(self):
        read = MockRead(cigarstring='10S90M', reference_start=99, is_reverse=True)
        interval = AlignmentInterval.from_read(read)
        assert not interval.forward_strand
        assert interval.cigar == [(CIGAR.M, 90), (CIGAR.S, 10)]
        assert interval.left_clipped == 0
        assert interval.right_clipped == 10
        assert interval.start_in_read == 1
        assert interval.end_in_read == 90

    def test_mismatches_from_edit_distance(self):
        read = MockRead(cigarstring='40M2I20M3D38M', reference_start=0, tags={'NM': 8})
        assert AlignmentInterval.from_read(read).mismatches == 3

    def test_unmapped(self):
        with pytest.raises(InvalidArgument):
            AlignmentInterval.from_read(MockRead(is_unmapped=True))


class TestFromSaTag:
    def test_forward(self):
        interval = AlignmentInterval.from_sa_tag('chr2,1001,+,30S70M,60,2')
        assert interval.reference_name == 'chr2'
        assert interval.reference_span == Interval(1001, 1070)
        assert interval.forward_strand
        assert interval.start_in_read == 31
        assert interval.end_in_read == 100
        assert interval.mapping_quality == 60
        assert interval.mismatches == 2

    def test_reverse(self):
        interval = AlignmentInterval.from_sa_tag('1,1001,-,30S70M,60,2')
        assert not interval.forward_strand
        assert interval.cigar == [(CIGAR.M, 70), (CIGAR.S, 30)]
        assert interval.start_in_read == 1
        assert interval.end_in_read == 70

    def test_indels_removed_from_mismatches(self):
        interval = AlignmentInterval.from_sa_tag('1,1001,+,50M5D50M,60,7')
        assert interval.end == 1105
        assert interval.mismatches == 2

    @pytest.mark.parametrize('record', ['', '1,1001,+,50M,60', '1,abc,+,50M,60,0', '1,1001,*,50M,60,0'])
    def test_bad_record(self, record):
        with pytest.raises(InvalidArgument):
            AlignmentInterval.from_sa_tag(record)
