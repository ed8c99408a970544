from typing import List, Tuple, Union

from .error import InvalidArgument

IntervalLike = Union['Interval', Tuple[int, int]]


class Interval:
    """
    an integer range with inclusive start and end positions (1-based when used for reference positions)
    """

    def __init__(self, start: int, end: int = None):
        self.start = int(start)
        self.end = int(end) if end is not None else self.start
        if self.start > self.end:
            raise InvalidArgument('interval start > end is not allowed', self.start, self.end)

    def __getitem__(self, index: int) -> int:
        if index == 0:
            return self.start
        elif index == 1:
            return self.end
        raise IndexError('index input accessor is out of bounds: 0 or 1 only', index)

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __repr__(self):
        return '{}({}, {})'.format(self.__class__.__name__, self.start, self.end)

    def __eq__(self, other):
        if not isinstance(other, Interval):
            return False
        return (self.start, self.end) == (other.start, other.end)

    def __hash__(self):
        return hash((self.start, self.end))

    @classmethod
    def overlaps(cls, first: IntervalLike, other: IntervalLike) -> bool:
        """
        Example:
            >>> Interval.overlaps(Interval(1, 4), Interval(5, 7))
            False
            >>> Interval.overlaps((1, 10), (10, 11))
            True
        """
        return first[0] <= other[1] and other[0] <= first[1]

    @classmethod
    def union(cls, *intervals: IntervalLike) -> 'Interval':
        """
        the smallest interval spanning all of the input intervals

        Raises:
            InvalidArgument: no intervals were given
        """
        if not intervals:
            raise InvalidArgument('cannot compute the union of an empty set of intervals')
        return Interval(min([i[0] for i in intervals]), max([i[1] for i in intervals]))

    @classmethod
    def min_nonoverlapping(cls, *intervals: IntervalLike) -> List['Interval']:
        """
        merge the input intervals into the smallest list of sorted, non-overlapping intervals
        covering the same positions

        Example:
            >>> Interval.min_nonoverlapping((1, 10), (7, 8), (6, 14), (17, 20))
            [Interval(1, 14), Interval(17, 20)]
        """
        merged: List[Interval] = []
        for current in sorted(intervals, key=lambda x: (x[0], x[1])):
            if merged and Interval.overlaps(merged[-1], current):
                merged[-1] = Interval.union(merged[-1], current)
            else:
                merged.append(Interval(current[0], current[1]))
        return merged
