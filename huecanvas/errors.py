"""
Invariant violations raised by the painting engine. Inputs are fixed constants,
so any of these means a defect in the palette, partition or traversal code.
"""


class InvariantError(RuntimeError):
    """Engine bookkeeping went wrong. Not meant to be caught and recovered from."""
    def __init__(self, message: str, **context: object):
        super().__init__(message)
        self.context = context


class PartitionMismatch(InvariantError):
    """Family and rest pool sizes do not add up to the palette size."""


class QueueExhaustion(InvariantError):
    """A colour queue was dequeued past its end."""


class CoverageGap(InvariantError):
    """A pixel was left unpainted, painted twice, or lies outside the canvas."""
