"""
holds methods related to processing cigar tuples. Cigar tuples are generally
an iterable list of tuples where the first element in each tuple is the
CIGAR value (i.e. 1 for an insertion), and the second value is the frequency
"""
import re
from typing import List, Tuple

from ..constants import CIGAR
from ..error import InvalidArgument

CigarTuples = List[Tuple[int, int]]

EVENT_STATES = {CIGAR.D, CIGAR.I, CIGAR.X}
ALIGNED_STATES = {CIGAR.M, CIGAR.X, CIGAR.EQ}
REFERENCE_ALIGNED_STATES = ALIGNED_STATES | {CIGAR.D, CIGAR.N}
QUERY_ALIGNED_STATES = ALIGNED_STATES | {CIGAR.I, CIGAR.S}
CLIPPING_STATE = {CIGAR.S, CIGAR.H}

CIGAR_STRING_PATTERN = re.compile(r'^(\d+[MIDNSHP=X])+$')


def score(cigar: CigarTuples, **kwargs) -> int:
    """scoring based on sw alignment properties with gap extension penalties

    Args:
        cigar: list of cigar tuple values
        MISMATCH (int): mismatch penalty
        MATCH (int): match penalty
        GAP (int): initial gap penalty
        GAP_EXTEND (int): gap extension penalty

    Returns:
        int: the score value

    Note:
        non-specific alignment (M) operations are scored as matches
    """
    mismatch = kwargs.pop('MISMATCH', -1)
    match = kwargs.pop('MATCH', 2)
    gap = kwargs.pop('GAP', -4)
    gap_extend = kwargs.pop('GAP_EXTEND', -1)

    score = 0
    for v, freq in cigar:
        if v in {CIGAR.EQ, CIGAR.M}:
            score += match * freq
        elif v == CIGAR.X:
            score += mismatch * freq
        elif v in [CIGAR.I, CIGAR.D]:
            score += gap + gap_extend * (freq - 1)
        elif v in [CIGAR.S, CIGAR.H, CIGAR.N, CIGAR.P]:
            pass
        else:
            raise AssertionError('unexpected cigar value', v)
    return score


def alignment_matches(cigar: CigarTuples) -> int:
    """
    counts the number of aligned bases irrespective of match/mismatch
    this is equivalent to counting all CIGAR.M
    """
    result = 0
    for v, f in cigar:
        if v in ALIGNED_STATES:
            result += f
    return result


def left_clipped(cigar: CigarTuples) -> int:
    """
    counts the soft and hard clipped bases at the start of the cigar

    Example:
        >>> left_clipped(convert_string_to_cigar('5H10S20M3S'))
        15
    """
    result = 0
    for v, f in cigar:
        if v not in CLIPPING_STATE:
            break
        result += f
    return result


def right_clipped(cigar: CigarTuples) -> int:
    """
    counts the soft and hard clipped bases at the end of the cigar

    Example:
        >>> right_clipped(convert_string_to_cigar('5H10S20M3S'))
        3
    """
    return left_clipped(cigar[::-1])


def inserted_bases(cigar: CigarTuples) -> int:
    """
    total length of all insertions in the cigar
    """
    return sum([f for v, f in cigar if v == CIGAR.I] + [0])


def reference_length(cigar: CigarTuples) -> int:
    """
    number of reference bases spanned by the alignment
    """
    return sum([f for v, f in cigar if v in REFERENCE_ALIGNED_STATES] + [0])


def query_length(cigar: CigarTuples, hard_clipped: bool = True) -> int:
    """
    length of the read the cigar describes

    Args:
        hard_clipped: count the hard clipped bases (not present in the read sequence)
    """
    states = QUERY_ALIGNED_STATES | {CIGAR.H} if hard_clipped else QUERY_ALIGNED_STATES
    return sum([f for v, f in cigar if v in states] + [0])


def convert_string_to_cigar(string: str) -> CigarTuples:
    """
    Given a cigar string, converts it to the appropriate cigar tuple

    Raises:
        InvalidArgument: the input is not a valid cigar string

    Example:
        >>> convert_string_to_cigar('8M2I1D9X')
        [(CIGAR.M, 8), (CIGAR.I, 2), (CIGAR.D, 1), (CIGAR.X, 9)]
    """
    if not CIGAR_STRING_PATTERN.match(string):
        raise InvalidArgument('invalid cigar string', string)
    patt = r'(\d+(\D))'
    cigar = [m[0] for m in re.findall(patt, string)]
    cigar = [(CIGAR[match[-1]] if match[-1] != '=' else CIGAR.EQ, int(match[:-1])) for match in cigar]
    return cigar


def convert_cigar_to_string(cigar: CigarTuples) -> str:
    return ''.join(['{}{}'.format(f, CIGAR.reverse(s) if s != CIGAR.EQ else '=') for s, f in cigar])
