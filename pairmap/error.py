class InvalidArgument(ValueError):
    """
    raised when a function is called with an argument it cannot accept, for example a read
    length less than 1 or a missing list of alignments. These are errors in the calling code
    and are never retried
    """
    pass


class InvariantViolation(Exception):
    """
    raised when a template mapping would be built in an inconsistent state

    for example if the orientation was proper (LR) but no insert size was given
    """
    pass
