"""
module responsible for the controlled vocabularies and constants used throughout the pairmap package
"""
import os
import re

from .error import InvalidArgument


class PairmapNamespace:
    """
    Namespace to hold a controlled vocabulary or a set of named defaults

    Example:
        >>> nspace = PairmapNamespace(thing=1, otherthing=2)
        >>> nspace.thing
        1
        >>> 2 in nspace
        True
    """

    _env_prefix = 'PAIRMAP'

    def __init__(self, **kwargs):
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_env_overwritable', set())
        for attr, value in kwargs.items():
            self.add(attr, value)

    def get_env_name(self, attr: str) -> str:
        """
        Example:
            >>> PairmapNamespace(match=1).get_env_name('match')
            'PAIRMAP_MATCH'
        """
        return '{}_{}'.format(self._env_prefix, attr).upper()

    def get_env_var(self, attr: str):
        """
        the value of the environment variable for a given attribute, cast to the type of the attribute

        Raises:
            KeyError: the environment variable is not set
            InvalidArgument: the environment variable cannot be cast to the type of the attribute
        """
        env_name = self.get_env_name(attr)
        env = os.environ[env_name].strip()
        try:
            return self._types[attr](env)
        except ValueError:
            raise InvalidArgument(
                'environment variable {} must be of type {}'.format(env_name, self._types[attr].__name__), env
            )

    def is_env_overwritable(self, attr: str) -> bool:
        return attr in self._env_overwritable

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            members = object.__getattribute__(self, '_members')
            if attr not in members:
                raise err
            if self.is_env_overwritable(attr):
                try:
                    return self.get_env_var(attr)
                except KeyError:
                    pass
            return members[attr]

    def __getitem__(self, key):
        return getattr(self, key)

    def __setattr__(self, attr, val):
        raise AttributeError('namespace members can only be defined with add', attr)

    def __contains__(self, value):
        return value in self.values()

    def keys(self) -> list:
        return list(self._members)

    def values(self) -> list:
        """
        Example:
            >>> PairmapNamespace(thing=1, otherthing=2).values()
            [1, 2]
        """
        return [self[k] for k in self._members]

    def enforce(self, value):
        """
        check that a value is a member of the namespace

        Returns:
            the input value

        Raises:
            KeyError: the value is not a member
        """
        if value not in self.values():
            raise KeyError('value {} is not a valid member'.format(repr(value)), self.values())
        return value

    def reverse(self, value) -> str:
        """
        the name of the attribute with a given value

        Raises:
            KeyError: the value is not assigned or is assigned to more than one attribute

        Example:
            >>> PairmapNamespace(thing=1, otherthing=2).reverse(1)
            'thing'
        """
        names = [key for key in self._members if self._members[key] == value]
        if len(names) != 1:
            raise KeyError('cannot find a unique attribute for the value', value, names)
        return names[0]

    def type(self, attr: str):
        return self._types[attr]

    def add(self, attr: str, value, cast_type=None, env_overwritable: bool = False):
        """
        Add an attribute to the namespace

        Args:
            attr: name of the attribute being added
            value: the value of the attribute
            cast_type (callable): casts the environment variable value (defaults to the type of the value)
            env_overwritable: True if the attribute is overridden by its environment variable equivalent

        Raises:
            AttributeError: the attribute already exists or is private
        """
        if attr.startswith('_') or attr in self._members:
            raise AttributeError('cannot add a private or existing attribute', attr)
        self._types[attr] = cast_type if cast_type else type(value)
        if env_overwritable:
            self._env_overwritable.add(attr)
        self._members[attr] = value


STRAND = PairmapNamespace(POS='+', NEG='-', NS='?')
""":class:`PairmapNamespace`: holds controlled vocabulary for allowed strand values

- ``POS``: the positive/forward strand
- ``NEG``: the negative/reverse strand
- ``NS``: strand is not specified
"""


class ReadPairTypeNamespace(PairmapNamespace):
    """
    vocabulary of read pair orientations. Pairs are described left to right wrt the
    positive/forward strand, where ``L`` is a mate read in the forward direction and
    ``R`` is a mate read in the reverse direction

    ::

        ++++> <---- is LR proper (inward facing)
        <---- ++++> is RL outward facing
        ++++> ++++> is LL same strand
        <---- <---- is RR same strand
                    is XX unknown, at least one mate is unmapped
    """

    def is_proper(self, value):
        """
        Returns:
            bool: True if the value is the concordant orientation of a normally sequenced fragment

        Example:
            >>> READ_PAIR_TYPE.is_proper(READ_PAIR_TYPE.LR)
            True
            >>> READ_PAIR_TYPE.is_proper(READ_PAIR_TYPE.RL)
            False
        """
        return self.enforce(value) == self.LR

    def from_strands(self, left_strand, right_strand):
        """
        classify a pair from the strands of the left and right mates

        Args:
            left_strand (STRAND): strand of the mate with the lower position
            right_strand (STRAND): strand of the mate with the higher position

        Raises:
            InvalidArgument: either strand is not specified (or not a strand value)

        Example:
            >>> READ_PAIR_TYPE.from_strands(STRAND.POS, STRAND.NEG)
            'LR'
        """
        for strand in [left_strand, right_strand]:
            if strand not in {STRAND.POS, STRAND.NEG}:
                raise InvalidArgument(
                    'cannot classify a read pair from an unspecified strand', left_strand, right_strand
                )
        left = 'L' if left_strand == STRAND.POS else 'R'
        right = 'L' if right_strand == STRAND.POS else 'R'
        return self.enforce(left + right)


READ_PAIR_TYPE = ReadPairTypeNamespace(LR='LR', RL='RL', LL='LL', RR='RR', XX='XX')
""":class:`ReadPairTypeNamespace`: holds controlled vocabulary for read pair orientations

- ``LR``: proper/concordant, the left mate is forward and the right mate is reverse
- ``RL``: the left mate is reverse and the right mate is forward (outward facing)
- ``LL``: both mates are forward
- ``RR``: both mates are reverse
- ``XX``: unknown, at least one of the mates is not mapped
"""

CIGAR = PairmapNamespace(M=0, I=1, D=2, N=3, S=4, H=5, P=6, X=8, EQ=7)  # noqa
""":class:`PairmapNamespace`: Enum-like. For readable cigar values

- ``M``: alignment match (can be a sequence match or mismatch)
- ``I``: insertion to the reference
- ``D``: deletion from the reference
- ``N``: skipped region from the reference
- ``S``: soft clipping (clipped sequences present in SEQ)
- ``H``: hard clipping (clipped sequences NOT present in SEQ)
- ``P``: padding (silent deletion from padded reference)
- ``EQ``: sequence match (=)
- ``X``: sequence mismatch

note: descriptions are taken from the `samfile documentation <https://samtools.github.io/hts-specs/SAMv1.pdf>`_
"""

NA_MAPPING_QUALITY = 255
""":class:`int`: mapping quality value to indicate mapping was not performed/calculated"""

SA_TAG = 'SA'
""":class:`str`: the sam tag listing the supplementary (chimeric) alignments of a read"""

SA_RECORD_PATTERN = re.compile(r'^([^,]+),(\d+),([+-]),((?:\d+[MIDNSHP=X])+),(\d+),(\d+)$')
""":class:`re.Pattern`: a single ``rname,pos,strand,CIGAR,mapQ,NM`` record from the SA tag"""
