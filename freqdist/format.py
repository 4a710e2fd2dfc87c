# freqdist: frequency distributions of integer events
#
# Copyright (c) 2020-2021 Dave Jones <dave@waveform.org.uk>
#
# SPDX-License-Identifier: GPL-2.0-or-later

from math import log
from itertools import tee

import humanize


def pairwise(iterable):
    """
    Taken from the recipe in the documentation for :mod:`itertools`.
    """
    a, b = tee(iterable)
    next(b, None)
    return zip(a, b)


def format_int(i):
    """
    Reduce *i* by some appropriate power of 1000 and suffix it with an
    appropriate Greek qualifier (K for kilo, M for mega, etc). For example::

        >>> format_int(0)
        '0'
        >>> format_int(10)
        '10'
        >>> format_int(1000)
        '1.0K'
        >>> format_int(1600)
        '1.6K'
        >>> format_int(2**32)
        '4.3G'
    """
    suffixes = ('', 'K', 'M', 'G', 'T', 'P')
    try:
        index = min(len(suffixes) - 1, int(log(abs(i), 1000)))
    except ValueError:
        return '0'
    if not index:
        return str(i)
    else:
        return '{value:.1f}{suffix}'.format(
            value=(i / 1000 ** index),
            suffix=suffixes[index])


def format_count(i, compact=False):
    """
    Format the count *i* for display; with *compact* this is
    :func:`format_int`, otherwise the full value with thousands separators::

        >>> format_count(1234567)
        '1,234,567'
        >>> format_count(1234567, compact=True)
        '1.2M'
    """
    if compact:
        return format_int(i)
    else:
        return humanize.intcomma(i)


def format_share(part, total):
    """
    Format *part* as a percentage of *total* to one decimal place. A *total*
    of zero is reported as "-" rather than raising :exc:`ZeroDivisionError`::

        >>> format_share(1, 3)
        '33.3%'
        >>> format_share(0, 0)
        '-'
    """
    if not total:
        return '-'
    return '{share:.1f}%'.format(share=100 * part / total)
