from typing import List

import pysam

from ..alignment import AlignmentInterval
from ..constants import SA_TAG
from ..error import InvalidArgument
from ..util import logger
from . import cigar as _cigar


def read_length(read: pysam.AlignedSegment) -> int:
    """
    the full length of the read, including hard clipped bases

    Args:
        read: the read

    Raises:
        InvalidArgument: the length of the read cannot be determined
    """
    length = None
    if not read.is_unmapped and read.cigartuples:
        length = _cigar.query_length(read.cigartuples, hard_clipped=True)
    elif read.query_sequence:
        length = len(read.query_sequence)
    if not length:
        raise InvalidArgument('unable to determine the length of the read', read.query_name)
    return length


def supplementary_alignments(read: pysam.AlignedSegment) -> List[AlignmentInterval]:
    """
    parse the alignments listed in the SA tag of a read

    Returns:
        the alignment intervals for each SA record, in the order given by the tag
    """
    if not read.has_tag(SA_TAG):
        return []
    result = []
    for record in read.get_tag(SA_TAG).split(';'):
        if not record.strip():
            continue
        result.append(AlignmentInterval.from_sa_tag(record))
    return result


def split_read_intervals(read: pysam.AlignedSegment) -> List[AlignmentInterval]:
    """
    collect all alignment intervals for a single mate: the read alignment itself followed
    by any supplementary alignments given in its SA tag

    Args:
        read: the primary (or supplementary) alignment of the mate

    Returns:
        an empty list when the read is unmapped

    Raises:
        InvalidArgument: the read is a secondary alignment
    """
    if read.is_secondary:
        raise InvalidArgument('secondary alignments do not describe the mapping of a mate', read.query_name)
    if read.is_unmapped:
        logger.debug(f'{read.query_name}: unmapped mate, no alignment intervals')
        return []
    intervals = [AlignmentInterval.from_read(read)]
    for interval in supplementary_alignments(read):
        if interval not in intervals:
            intervals.append(interval)
    logger.debug(f'{read.query_name}: {len(intervals)} alignment interval(s)')
    return intervals
