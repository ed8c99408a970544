"""
scoring of the alignment of a single mate of a read pair, given all the alignment intervals
(split/supplementary alignments) reported for that mate
"""
from typing import List

from .alignment import AlignmentInterval
from .bam import cigar as _cigar
from .constants import CIGAR
from .error import InvalidArgument
from .interval import Interval
from .util import WeakPairmapNamespace, positive_int

DEFAULTS = WeakPairmapNamespace()
"""
- match: score for each aligned base that matches the reference
- mismatch: score for each aligned base that does not match the reference
- gap: score for opening an insertion or deletion
- gap_extend: score for each additional base of an insertion or deletion
- split: score for each alignment interval beyond the first (a jump between reference positions in a split read)
- unaligned: score for each base of the read not covered by any alignment interval
"""
DEFAULTS.add('match', 2, cast_type=int)
DEFAULTS.add('mismatch', -1, cast_type=int)
DEFAULTS.add('gap', -4, cast_type=int)
DEFAULTS.add('gap_extend', -1, cast_type=int)
DEFAULTS.add('split', -10, cast_type=int)
DEFAULTS.add('unaligned', -1, cast_type=int)


class AlignmentScorer:
    """
    scores the alignment of a single mate using an affine gap penalty, a penalty for splitting the read into
    multiple alignments and a penalty for the bases of the read that are not aligned

    Any parameter not given is taken from :attr:`DEFAULTS` (or its ``PAIRMAP_`` environment variable)

    Example:
        >>> AlignmentScorer(match=1).score(10, [AlignmentInterval('1', 1, 10, True, [(CIGAR.M, 10)])])
        10.0
    """

    def __init__(self, **kwargs):
        for attr in DEFAULTS.keys():
            value = kwargs.pop(attr, DEFAULTS[attr])
            try:
                setattr(self, attr, DEFAULTS.type(attr)(value))
            except (TypeError, ValueError):
                raise InvalidArgument('scoring parameter {} must be an integer'.format(attr), value)
        if kwargs:
            raise InvalidArgument('unexpected scoring parameters', sorted(kwargs.keys()))

    def __repr__(self):
        return '{}({})'.format(
            self.__class__.__name__, ', '.join(['{}={}'.format(k, getattr(self, k)) for k in DEFAULTS.keys()])
        )

    def interval_score(self, interval: AlignmentInterval) -> int:
        """
        score a single alignment interval from its cigar. Where the cigar does not distinguish matches from
        mismatches (M) the known number of mismatches of the interval is applied to those bases
        """
        score = _cigar.score(
            interval.cigar, MATCH=self.match, MISMATCH=self.mismatch, GAP=self.gap, GAP_EXTEND=self.gap_extend
        )
        if interval.mismatches:
            nonspecific = sum([f for v, f in interval.cigar if v == CIGAR.M] + [0])
            explicit = sum([f for v, f in interval.cigar if v == CIGAR.X] + [0])
            unresolved = min(max(interval.mismatches - explicit, 0), nonspecific)
            score += unresolved * (self.mismatch - self.match)
        return score

    def score(self, length: int, intervals: List[AlignmentInterval]) -> float:
        """
        Args:
            length: the length of the read
            intervals: all alignment intervals of the read

        Returns:
            float: the alignment score

        Raises:
            InvalidArgument: the length is less than 1 or there are no intervals to score
        """
        positive_int(length, 'the read length')
        if not intervals:
            raise InvalidArgument('cannot score a read without any alignment intervals')
        score = sum([self.interval_score(interval) for interval in intervals])
        score += self.split * (len(intervals) - 1)

        covered = Interval.min_nonoverlapping(*[(i.start_in_read, i.end_in_read) for i in intervals])
        aligned = sum([len(itvl) for itvl in covered])
        score += self.unaligned * max(length - aligned, 0)
        return float(score)


def score(length: int, intervals: List[AlignmentInterval]) -> float:
    """
    score the alignment intervals of a read using the default scoring parameters
    """
    return AlignmentScorer().score(length, intervals)
