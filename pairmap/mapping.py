from typing import Dict, List, Optional

from . import orientation as _orientation
from .alignment import AlignmentInterval
from .bam.read import read_length, split_read_intervals
from .constants import READ_PAIR_TYPE
from .error import InvalidArgument, InvariantViolation
from .score import AlignmentScorer
from .util import finite_score, logger, positive_int


class TemplateMappingInformation:
    """
    summary of how a read pair (template) maps to the reference: the alignment score of each mate,
    the orientation of the pair and, for proper pairs, the insert size

    Absent scores (the mate had no alignments) and absent insert sizes (the pair is not proper) are None.
    Instances are not modified after they are created
    """

    def __init__(
        self,
        pair_orientation: str = READ_PAIR_TYPE.XX,
        first_alignment_score: Optional[float] = None,
        second_alignment_score: Optional[float] = None,
        insert_size: Optional[int] = None,
        name: Optional[str] = None,
    ):
        """
        Args:
            pair_orientation (READ_PAIR_TYPE): the orientation of the pair
            first_alignment_score: score of the first mate, None if it is not mapped
            second_alignment_score: score of the second mate, None if it is not mapped
            insert_size: the insert size, given only for proper (LR) pairs
            name: optional identifier (ex. the read name)

        Raises:
            InvalidArgument: the orientation is not a READ_PAIR_TYPE value, a score is not a finite number or the
                insert size is less than 1
            InvariantViolation: the insert size is given for a pair that is not proper (or missing for one that is)
                a known orientation is given without a score for both mates or the unknown orientation (XX) is given
                with a score for both mates
        """
        if pair_orientation not in READ_PAIR_TYPE:
            raise InvalidArgument('invalid read pair orientation', pair_orientation, READ_PAIR_TYPE.values())
        if first_alignment_score is not None:
            first_alignment_score = finite_score(first_alignment_score, 'first alignment score')
        if second_alignment_score is not None:
            second_alignment_score = finite_score(second_alignment_score, 'second alignment score')
        if insert_size is not None:
            positive_int(insert_size, 'the insert size')

        if READ_PAIR_TYPE.is_proper(pair_orientation):
            if insert_size is None:
                raise InvariantViolation('a proper read pair orientation requires the insert size')
        elif insert_size is not None:
            raise InvariantViolation(
                'an insert size can only be given for a proper read pair orientation', pair_orientation, insert_size
            )
        both_mapped = first_alignment_score is not None and second_alignment_score is not None
        if pair_orientation == READ_PAIR_TYPE.XX:
            if both_mapped:
                raise InvariantViolation('the orientation of a pair with both mates mapped cannot be unknown (XX)')
        elif not both_mapped:
            raise InvariantViolation(
                'both mates must have an alignment score to have a known orientation', pair_orientation
            )
        self._name = name
        self._pair_orientation = pair_orientation
        self._first_alignment_score = first_alignment_score
        self._second_alignment_score = second_alignment_score
        self._insert_size = insert_size

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def pair_orientation(self) -> str:
        return self._pair_orientation

    @property
    def first_alignment_score(self) -> Optional[float]:
        return self._first_alignment_score

    @property
    def second_alignment_score(self) -> Optional[float]:
        return self._second_alignment_score

    @property
    def insert_size(self) -> Optional[int]:
        return self._insert_size

    def is_proper(self) -> bool:
        return READ_PAIR_TYPE.is_proper(self._pair_orientation)

    @property
    def key(self):
        return (
            self._name,
            self._pair_orientation,
            self._first_alignment_score,
            self._second_alignment_score,
            self._insert_size,
        )

    def __eq__(self, other):
        if not isinstance(other, TemplateMappingInformation):
            return False
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return '{}({}, first={}, second={}, insert_size={}{})'.format(
            self.__class__.__name__,
            self._pair_orientation,
            self._first_alignment_score,
            self._second_alignment_score,
            self._insert_size,
            '' if self._name is None else ', name={}'.format(repr(self._name)),
        )

    def to_dict(self) -> Dict:
        return {
            'name': self._name,
            'pair_orientation': self._pair_orientation,
            'first_alignment_score': self._first_alignment_score,
            'second_alignment_score': self._second_alignment_score,
            'insert_size': self._insert_size,
        }

    @classmethod
    def unmapped(cls) -> 'TemplateMappingInformation':
        """neither mate is mapped"""
        return cls()

    @classmethod
    def single(cls, score: float, is_first: bool) -> 'TemplateMappingInformation':
        """
        only one of the mates is mapped

        Args:
            score: the alignment score of the mapped mate
            is_first: True if the mapped mate is the first mate
        """
        if is_first:
            return cls(READ_PAIR_TYPE.XX, first_alignment_score=score)
        return cls(READ_PAIR_TYPE.XX, second_alignment_score=score)

    @classmethod
    def proper(
        cls, first_alignment_score: float, second_alignment_score: float, insert_size: int
    ) -> 'TemplateMappingInformation':
        """
        both mates are mapped in the proper (LR) orientation

        Raises:
            InvalidArgument: the insert size is less than 1
        """
        return cls(READ_PAIR_TYPE.LR, first_alignment_score, second_alignment_score, insert_size)

    @classmethod
    def aberrant(
        cls, first_alignment_score: float, second_alignment_score: float, pair_orientation: str
    ) -> 'TemplateMappingInformation':
        """
        both mates are mapped but not in the proper orientation (RL, LL or RR)

        Raises:
            InvariantViolation: the orientation given is the proper orientation, which requires an insert size, or
                the unknown orientation, which requires an unmapped mate
        """
        if pair_orientation in READ_PAIR_TYPE:
            if READ_PAIR_TYPE.is_proper(pair_orientation):
                raise InvariantViolation(
                    'cannot create a mapping with proper orientation without indicating the insert size'
                )
            elif pair_orientation == READ_PAIR_TYPE.XX:
                raise InvariantViolation('an aberrant mapping requires a known orientation (RL, LL or RR)')
        return cls(pair_orientation, first_alignment_score, second_alignment_score)

    @classmethod
    def from_alignments(
        cls,
        first_intervals: List[AlignmentInterval],
        first_length: int,
        second_intervals: List[AlignmentInterval],
        second_length: int,
        scorer: Optional[AlignmentScorer] = None,
    ) -> 'TemplateMappingInformation':
        """
        classify a read pair from the alignment intervals of each mate

        Args:
            first_intervals: all alignment intervals of the first mate (empty if it is unmapped)
            first_length: the length of the first mate
            second_intervals: all alignment intervals of the second mate (empty if it is unmapped)
            second_length: the length of the second mate
            scorer: scores each mate, uses the default scoring parameters if not given

        Raises:
            InvalidArgument: either list of intervals is None or either length is less than 1
        """
        if first_intervals is None or second_intervals is None:
            raise InvalidArgument('the alignment intervals of both mates are required')
        positive_int(first_length, 'the first length')
        positive_int(second_length, 'the second length')

        if not first_intervals and not second_intervals:
            return cls.unmapped()
        if scorer is None:
            scorer = AlignmentScorer()

        if not second_intervals:
            return cls.single(scorer.score(first_length, first_intervals), True)
        elif not first_intervals:
            return cls.single(scorer.score(second_length, second_intervals), False)

        left, right, pair_orientation = _orientation.classify(first_intervals, second_intervals)
        first_score = scorer.score(first_length, first_intervals)
        second_score = scorer.score(second_length, second_intervals)
        if READ_PAIR_TYPE.is_proper(pair_orientation):
            insert_size = _orientation.unclipped_end(right) - _orientation.unclipped_start(left)
            logger.debug(f'proper pair with insert size {insert_size}')
            return cls.proper(first_score, second_score, insert_size)
        logger.debug(f'aberrant pair with orientation {pair_orientation}')
        return cls.aberrant(first_score, second_score, pair_orientation)

    @classmethod
    def from_read_pair(
        cls, first_read, second_read, scorer: Optional[AlignmentScorer] = None
    ) -> 'TemplateMappingInformation':
        """
        classify a read pair from the reads of each mate. The alignment intervals of each mate are the read
        alignment and the alignments listed in its SA tag

        Args:
            first_read (pysam.AlignedSegment): primary alignment (or unmapped record) of the first mate
            second_read (pysam.AlignedSegment): primary alignment (or unmapped record) of the second mate
            scorer: scores each mate, uses the default scoring parameters if not given
        """
        return cls.from_alignments(
            split_read_intervals(first_read),
            read_length(first_read),
            split_read_intervals(second_read),
            read_length(second_read),
            scorer=scorer,
        )
