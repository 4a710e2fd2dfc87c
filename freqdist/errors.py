# freqdist: frequency distributions of integer events
#
# Copyright (c) 2021 Dave Jones <dave@waveform.org.uk>
#
# SPDX-License-Identifier: GPL-2.0-or-later

class FrequencyError(Exception):
    """
    Base class for all errors raised by
    :class:`~freqdist.collections.FrequencyDistribution`.
    """


class InvalidOperation(FrequencyError, ValueError):
    """
    Raised when a mutation is not valid for the current state of the
    distribution, e.g. decrementing an event that was never observed, or
    decrementing an event past zero. The distribution is left unchanged.
    """


class InvariantViolation(FrequencyError, AssertionError):
    """
    Raised when the distribution finds itself in an impossible state, such as
    the same event appearing twice while sorting. This always indicates a bug
    (or corrupted storage) rather than bad input.
    """


class OutOfRange(FrequencyError, IndexError):
    """
    Raised when more events are requested from a sorted view than the
    distribution holds.
    """


class CountWarning(Warning):
    """
    Warning raised when an event is incremented or decremented by a count
    that is zero or negative. The operation still goes ahead.
    """


class ValidationWarning(Warning):
    """
    Warning raised when input data is readable but suspect, e.g. when the
    character set of a source could only be guessed with low confidence.
    """
