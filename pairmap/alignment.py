from typing import Optional

from .bam import cigar as _cigar
from .bam.cigar import CigarTuples, convert_cigar_to_string, convert_string_to_cigar
from .constants import NA_MAPPING_QUALITY, SA_RECORD_PATTERN
from .error import InvalidArgument
from .interval import Interval


class AlignmentInterval:
    """
    a single contiguous alignment of part of a read (or assembled contig) to the reference

    The cigar is stored along the 5' to 3' direction of the read. For reverse strand alignments this
    is the reverse of the cigar as it appears in the sam record. Positions on the reference are 1-based
    and inclusive. Positions on the read are 1-based, inclusive and counted from the 5' end of the read
    including any hard clipped bases
    """

    reference_name: str
    reference_span: Interval
    forward_strand: bool
    cigar: CigarTuples
    start_in_read: int
    end_in_read: int
    mapping_quality: int
    mismatches: Optional[int]

    def __init__(
        self,
        reference_name: str,
        start: int,
        end: int,
        forward_strand: bool,
        cigar: CigarTuples,
        start_in_read: Optional[int] = None,
        end_in_read: Optional[int] = None,
        mapping_quality: int = NA_MAPPING_QUALITY,
        mismatches: Optional[int] = None,
    ):
        """
        Args:
            reference_name: the name of the reference sequence (chromosome) aligned to
            start: first aligned reference position
            end: last aligned reference position
            forward_strand: True if the read aligns to the forward strand
            cigar: cigar tuples along the 5' to 3' direction of the read
            start_in_read: first aligned read position (defaults to the position following the 5' clipping)
            end_in_read: last aligned read position (defaults to the position preceding the 3' clipping)
            mapping_quality: the mapping quality of the alignment
            mismatches: the number of mismatched aligned bases, if known

        Raises:
            InvalidArgument: the cigar is empty, has no aligned bases or does not agree with the reference span
        """
        if not cigar:
            raise InvalidArgument('an alignment interval requires a cigar')
        self.cigar = [(state, freq) for state, freq in cigar]
        if _cigar.alignment_matches(self.cigar) < 1:
            raise InvalidArgument(
                'an alignment interval must have at least one aligned base', convert_cigar_to_string(self.cigar)
            )
        self.reference_name = reference_name
        self.reference_span = Interval(start, end)
        if len(self.reference_span) != _cigar.reference_length(self.cigar):
            raise InvalidArgument(
                'reference span does not match the reference length of the cigar',
                self.reference_span,
                convert_cigar_to_string(self.cigar),
            )
        self.forward_strand = bool(forward_strand)

        if start_in_read is None:
            start_in_read = _cigar.left_clipped(self.cigar) + 1
        if end_in_read is None:
            end_in_read = _cigar.query_length(self.cigar) - _cigar.right_clipped(self.cigar)
        if start_in_read < 1 or end_in_read < start_in_read:
            raise InvalidArgument('invalid aligned read positions', start_in_read, end_in_read)
        self.start_in_read = start_in_read
        self.end_in_read = end_in_read
        self.mapping_quality = mapping_quality
        self.mismatches = mismatches

    @property
    def start(self) -> int:
        return self.reference_span.start

    @property
    def end(self) -> int:
        return self.reference_span.end

    @property
    def aligned_bases(self) -> int:
        """number of bases aligned to the reference (matches and mismatches)"""
        return _cigar.alignment_matches(self.cigar)

    @property
    def left_clipped(self) -> int:
        """number of clipped bases at the 5' end of the read"""
        return _cigar.left_clipped(self.cigar)

    @property
    def right_clipped(self) -> int:
        """number of clipped bases at the 3' end of the read"""
        return _cigar.right_clipped(self.cigar)

    @property
    def inserted_bases(self) -> int:
        return _cigar.inserted_bases(self.cigar)

    @property
    def key(self):
        return (
            self.reference_name,
            self.start,
            self.end,
            self.forward_strand,
            tuple(self.cigar),
            self.start_in_read,
            self.end_in_read,
        )

    def __eq__(self, other):
        if not hasattr(other, 'key'):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return '{}({}:{}-{}{} {} read={}-{})'.format(
            self.__class__.__name__,
            self.reference_name,
            self.start,
            self.end,
            '+' if self.forward_strand else '-',
            convert_cigar_to_string(self.cigar),
            self.start_in_read,
            self.end_in_read,
        )

    @classmethod
    def from_read(cls, read) -> 'AlignmentInterval':
        """
        create an alignment interval from a mapped read

        Args:
            read (pysam.AlignedSegment): the read

        Raises:
            InvalidArgument: the read is not mapped
        """
        if read.is_unmapped:
            raise InvalidArgument('cannot create an alignment interval from an unmapped read', read.query_name)
        reference_cigar = list(read.cigartuples)
        forward_strand = not read.is_reverse
        mismatches = None
        if read.has_tag('NM'):
            indels = sum([f for v, f in reference_cigar if v in _cigar.EVENT_STATES - _cigar.ALIGNED_STATES])
            mismatches = max(read.get_tag('NM') - indels, 0)
        return cls(
            read.reference_name,
            read.reference_start + 1,
            read.reference_end,
            forward_strand,
            reference_cigar if forward_strand else reference_cigar[::-1],
            mapping_quality=read.mapping_quality,
            mismatches=mismatches,
        )

    @classmethod
    def from_sa_tag(cls, record: str) -> 'AlignmentInterval':
        """
        create an alignment interval from a single record of the SA (supplementary alignment) tag

        Args:
            record: the ``rname,pos,strand,CIGAR,mapQ,NM`` text of a single alignment

        Raises:
            InvalidArgument: the record is not in the expected format

        Example:
            >>> AlignmentInterval.from_sa_tag('1,1001,-,30S70M,60,2')
            AlignmentInterval(1:1001-1070- 70M30S read=1-70)
        """
        match = SA_RECORD_PATTERN.match(record.strip())
        if not match:
            raise InvalidArgument('unable to parse the supplementary alignment record', record)
        reference_name, pos, strand, cigar_string, mapq, nm = match.groups()
        reference_cigar = convert_string_to_cigar(cigar_string)
        forward_strand = strand == '+'
        start = int(pos)
        indels = sum([f for v, f in reference_cigar if v in _cigar.EVENT_STATES - _cigar.ALIGNED_STATES])
        return cls(
            reference_name,
            start,
            start + _cigar.reference_length(reference_cigar) - 1,
            forward_strand,
            reference_cigar if forward_strand else reference_cigar[::-1],
            mapping_quality=int(mapq),
            mismatches=max(int(nm) - indels, 0),
        )
