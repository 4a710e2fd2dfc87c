# freqdist: frequency distributions of integer events
#
# Copyright (c) 2020-2021 Dave Jones <dave@waveform.org.uk>
#
# SPDX-License-Identifier: GPL-2.0-or-later

import warnings
from operator import index, attrgetter
from collections import namedtuple
from collections.abc import Mapping

from .errors import InvalidOperation, InvariantViolation, OutOfRange, CountWarning
from .format import pairwise


EventFrequency = namedtuple('EventFrequency', ('event', 'frequency'))
EventFrequency.__doc__ = """
An immutable (*event*, *frequency*) pair, as returned by the sorted views of
:class:`FrequencyDistribution`. Compares equal to a plain :class:`tuple` of
the same values.
"""


def _check_count(count):
    count = index(count)
    if count <= 0:
        # stacklevel points at the caller of increment / decrement
        warnings.warn(CountWarning(
            'count {count} is not positive'.format(count=count)),
            stacklevel=3)
    return count


def _truncate(events, n):
    if n is None:
        return events
    n = index(n)
    if not 0 <= n <= len(events):
        raise OutOfRange(
            'cannot take {n} events from a distribution of {size}'.format(
                n=n, size=len(events)))
    return events[:n]


class FrequencyDistribution(Mapping):
    """
    A frequency distribution of integer events, e.g. the terms of a vocabulary
    which have been mapped to integer identifiers.

    This behaves as a read-only :class:`~collections.abc.Mapping` of events to
    their frequencies, with the addition of the mutating methods
    :meth:`increment`, :meth:`decrement`, :meth:`set`, and :meth:`remove`.
    The sum of all frequencies is maintained as each of these is called so
    :attr:`sum_of_frequencies` is always immediately available.

    Events which have never been observed (or whose frequency has dropped to
    zero) are not stored; reading them returns 0, as with
    :class:`collections.Counter`.

    If *events* is given, it is an iterable of events each of which is counted
    once::

        >>> d = FrequencyDistribution([5, 2, 9, 2])
        >>> d[2]
        2
        >>> d.sum_of_frequencies
        4

    Instances are not thread-safe; callers sharing one between threads must
    provide their own locking.
    """
    def __init__(self, events=()):
        self._counts = {}
        self._sum = 0
        self.update(events)

    @classmethod
    def from_counts(cls, counts):
        """
        Construct a distribution from *counts*, which is either a mapping of
        events to frequencies, or an iterable of (event, frequency) pairs.
        Repeated events in the latter are summed.
        """
        self = cls()
        if isinstance(counts, Mapping):
            counts = counts.items()
        for event, count in counts:
            self.increment(event, count)
        return self

    def _store(self, key, value):
        # All writes go through here; this is the only place _sum changes
        previous = self._counts.get(key, 0)
        if value:
            self._counts[key] = value
        else:
            self._counts.pop(key, None)
        self._sum += value - previous
        return previous

    def _entries(self):
        return self._counts.items()

    def increment(self, key, count=1):
        """
        Increment the frequency of the event *key* by *count* (which defaults
        to 1). If *key* has not been observed before, it is added with a
        frequency of *count*.

        Any integer *count* is accepted, but zero or negative values emit a
        :exc:`~freqdist.errors.CountWarning`.
        """
        key = index(key)
        count = _check_count(count)
        self._store(key, self._counts.get(key, 0) + count)

    def decrement(self, key, count=1):
        """
        Decrement the frequency of the event *key* by *count* (which defaults
        to 1). If the frequency reaches zero, the event is removed entirely.

        Raises :exc:`~freqdist.errors.InvalidOperation` if *key* does not
        exist, or if *count* is greater than its current frequency; in either
        case the distribution is left unchanged.
        """
        key = index(key)
        count = _check_count(count)
        try:
            current = self._counts[key]
        except KeyError:
            raise InvalidOperation(
                'event {key} does not exist'.format(key=key)) from None
        if count > current:
            raise InvalidOperation(
                'cannot decrement event {key} past zero (frequency {current}, '
                'count {count})'.format(key=key, current=current, count=count))
        self._store(key, current - count)

    def get(self, key, default=0):
        """
        Return the frequency of the event *key*, or *default* (0) if it has
        not been observed. Raises :exc:`TypeError` if *key* is not an
        integer.
        """
        return self._counts.get(index(key), default)

    def set(self, key, value):
        """
        Set the frequency of the event *key* to *value*, returning its prior
        frequency (or 0 if it was absent). Setting a frequency of 0 removes
        the event.
        """
        return self._store(index(key), index(value))

    def remove(self, key):
        """
        Remove the event *key*, returning its frequency prior to removal, or 0
        if it was not present.
        """
        return self._store(index(key), 0)

    def update(self, events=()):
        """
        Count each of *events*. If *events* is a mapping, each event is
        incremented by its associated count (like
        :meth:`collections.Counter.update`); otherwise each item is counted
        once.
        """
        if isinstance(events, Mapping):
            for event, count in events.items():
                self.increment(event, count)
        else:
            for event in events:
                self.increment(event)

    def clear(self):
        """
        Remove all events.
        """
        for key in list(self._counts):
            self._store(key, 0)

    def copy(self):
        """
        Return an independent copy of the distribution.
        """
        result = self.__class__()
        result._counts = self._counts.copy()
        result._sum = self._sum
        return result

    def freeze(self):
        """
        Return a :class:`FrozenFrequencyDistribution` snapshot of the current
        state.
        """
        return FrozenFrequencyDistribution.from_distribution(self)

    @property
    def number_of_events(self):
        """
        The number of distinct events currently held. Events which were
        observed but subsequently removed (or decremented to zero) are not
        included.
        """
        return len(self._counts)

    @property
    def sum_of_frequencies(self):
        """
        The sum of the frequencies of all events.
        """
        return self._sum

    def frequency_sorted_events(self, n=None):
        """
        Return a :class:`list` of :class:`EventFrequency` pairs in descending
        order of frequency. Events with equal frequency are ordered by
        ascending event.

        If *n* is specified, only the first *n* pairs are returned. Raises
        :exc:`~freqdist.errors.OutOfRange` if *n* exceeds
        :attr:`number_of_events`.
        """
        events = sorted(
            (EventFrequency(event, frequency)
             for event, frequency in self._entries()),
            key=lambda e: (-e.frequency, e.event))
        for a, b in pairwise(events):
            if a == b:
                raise InvariantViolation(
                    'event {a.event} observed twice'.format(a=a))
        return _truncate(events, n)

    def sorted_events(self, n=None):
        """
        Return a :class:`list` of :class:`EventFrequency` pairs in ascending
        order of event.

        If *n* is specified, only the first *n* pairs are returned. Raises
        :exc:`~freqdist.errors.OutOfRange` if *n* exceeds
        :attr:`number_of_events`.
        """
        events = sorted(
            (EventFrequency(event, frequency)
             for event, frequency in self._entries()),
            key=attrgetter('event'))
        for a, b in pairwise(events):
            if a.event == b.event:
                raise InvariantViolation(
                    'event {a.event} observed twice'.format(a=a))
        return _truncate(events, n)

    def __iter__(self):
        return iter(self._counts)

    def __len__(self):
        return len(self._counts)

    def __contains__(self, key):
        return key in self._counts

    def __getitem__(self, key):
        return self._counts.get(index(key), 0)

    def __setitem__(self, key, value):
        self.set(key, value)

    def __delitem__(self, key):
        if key not in self._counts:
            raise KeyError(key)
        self.remove(key)

    def __repr__(self):
        return '{self.__class__.__name__}({counts!r})'.format(
            self=self, counts=dict(self.sorted_events()))


class FrozenFrequencyDistribution(Mapping):
    """
    An immutable variant of :class:`FrequencyDistribution`.

    This implements all readable properties and behaviours of
    :class:`FrequencyDistribution`, but excludes all methods which permit
    modification. The resulting instances are hashable and can be used as
    keys in mappings.
    """
    def __init__(self, events=()):
        self._dist = FrequencyDistribution(events)
        self._hash = None

    @classmethod
    def from_distribution(cls, dist):
        """
        Construct a :class:`FrozenFrequencyDistribution` from a
        :class:`FrequencyDistribution` instance. The *dist* is copied, so
        later changes to it are not reflected in the result.

        If *dist* is already a :class:`FrozenFrequencyDistribution` it is
        returned verbatim.
        """
        if isinstance(dist, FrequencyDistribution):
            self = cls()
            self._dist = dist.copy()
            return self
        elif isinstance(dist, FrozenFrequencyDistribution):
            # It's frozen; no need to copy anything
            return dist
        else:
            raise TypeError(
                'expected a FrequencyDistribution, not {dist!r}'.format(
                    dist=dist))

    def thaw(self):
        """
        Return a mutable :class:`FrequencyDistribution` copy.
        """
        return self._dist.copy()

    @property
    def number_of_events(self):
        """
        See :attr:`FrequencyDistribution.number_of_events`.
        """
        return self._dist.number_of_events

    @property
    def sum_of_frequencies(self):
        """
        See :attr:`FrequencyDistribution.sum_of_frequencies`.
        """
        return self._dist.sum_of_frequencies

    def get(self, key, default=0):
        return self._dist.get(key, default)

    def frequency_sorted_events(self, n=None):
        """
        See :meth:`FrequencyDistribution.frequency_sorted_events`.
        """
        return self._dist.frequency_sorted_events(n)

    def sorted_events(self, n=None):
        """
        See :meth:`FrequencyDistribution.sorted_events`.
        """
        return self._dist.sorted_events(n)

    def __iter__(self):
        return iter(self._dist)

    def __len__(self):
        return len(self._dist)

    def __contains__(self, key):
        return key in self._dist

    def __getitem__(self, key):
        return self._dist[key]

    def __repr__(self):
        return '{self.__class__.__name__}({counts!r})'.format(
            self=self, counts=dict(self.sorted_events()))

    def __hash__(self):
        if self._hash is None:
            self._hash = hash(frozenset(self.items()))
        return self._hash

    def __eq__(self, other):
        if isinstance(other, FrozenFrequencyDistribution):
            return self._dist == other._dist
        return self._dist == other

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result
