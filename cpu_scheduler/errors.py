"""
Exceptions raised for invalid scheduler input.

Everything derives from ValueError so callers that only know about bad
arguments can keep catching that.
"""


class SchedulerError(ValueError):
    """Base class for all caller-input errors."""


class InvalidQuantumError(SchedulerError):
    """Round-robin was given a missing, non-integer or non-positive quantum."""


class EmptyProcessSetError(SchedulerError):
    """A policy or the metrics aggregator was given no processes."""


class DuplicateProcessIdError(SchedulerError):
    """Two processes in the same workload share a pid."""


class InvalidProcessError(SchedulerError):
    """A process record (or a scheduling parameter) is out of range."""
