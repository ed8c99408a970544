"""
Determines the position, strand and relative orientation of the mates of a read pair from the
alignment intervals of each mate

All functions expect a non-empty list of alignment intervals for each mate. Positions are 1-based
reference coordinates. The unclipped coordinates extend the aligned positions by the clipping on
the side of the read facing away from the reference start/end
"""
from typing import List, Tuple

from .alignment import AlignmentInterval
from .constants import READ_PAIR_TYPE, STRAND


def unclipped_start(intervals: List[AlignmentInterval]) -> int:
    """
    the lowest reference position of the mate including the clipped bases

    Example:
        >>> unclipped_start([AlignmentInterval('1', 101, 150, True, [(4, 10), (0, 50)])])
        91
    """
    return min([
        interval.start - (interval.left_clipped if interval.forward_strand else interval.right_clipped)
        for interval in intervals
    ])


def unclipped_end(intervals: List[AlignmentInterval]) -> int:
    """
    the highest reference position of the mate including the clipped bases
    """
    return max([
        interval.end + (interval.right_clipped if interval.forward_strand else interval.left_clipped)
        for interval in intervals
    ])


def clipped_start(intervals: List[AlignmentInterval]) -> int:
    return min([interval.start for interval in intervals])


def clipped_end(intervals: List[AlignmentInterval]) -> int:
    return max([interval.end for interval in intervals])


def left_right_key(intervals: List[AlignmentInterval]) -> Tuple[int, int, int, int]:
    """
    sort key used in deciding which mate of the pair is the left (upstream) mate
    """
    return (
        unclipped_start(intervals),
        unclipped_end(intervals),
        clipped_start(intervals),
        clipped_end(intervals),
    )


def strand(intervals: List[AlignmentInterval]) -> str:
    """
    the strand of a mate, decided by the strand with the most aligned bases

    When both strands have the same number of aligned bases, the strand of the alignment interval
    with the fewest aligned bases is used. Further ties prefer the interval with the fewest inserted
    bases and then the interval starting furthest into the read

    Returns:
        STRAND: the strand (POS or NEG) of the mate
    """
    orientation = sum([
        interval.aligned_bases if interval.forward_strand else -1 * interval.aligned_bases
        for interval in intervals
    ])
    if orientation > 0:
        return STRAND.POS
    elif orientation < 0:
        return STRAND.NEG
    tie_breaker = min(
        intervals,
        key=lambda interval: (interval.aligned_bases, interval.inserted_bases, -1 * interval.start_in_read)
    )
    return STRAND.POS if tie_breaker.forward_strand else STRAND.NEG


def sort_left_right(
    first: List[AlignmentInterval], second: List[AlignmentInterval]
) -> Tuple[List[AlignmentInterval], List[AlignmentInterval]]:
    """
    order the alignment intervals of the two mates so that the left (upstream) mate is first

    The mates are compared by unclipped start, unclipped end, clipped start and then clipped end. When all four
    positions are equal the forward strand mate is considered to be the left mate so that the result does not
    depend on the order of the input

    Returns:
        tuple: the left and the right mate intervals
    """
    first_key = left_right_key(first)
    second_key = left_right_key(second)
    if first_key < second_key:
        return first, second
    elif second_key < first_key:
        return second, first
    elif strand(first) == STRAND.NEG and strand(second) == STRAND.POS:
        return second, first
    return first, second


def classify(
    first: List[AlignmentInterval], second: List[AlignmentInterval]
) -> Tuple[List[AlignmentInterval], List[AlignmentInterval], str]:
    """
    classify the orientation of a read pair where both mates are mapped

    Returns:
        tuple: the left mate intervals, the right mate intervals and the READ_PAIR_TYPE of the pair
    """
    left, right = sort_left_right(first, second)
    return left, right, READ_PAIR_TYPE.from_strands(strand(left), strand(right))
