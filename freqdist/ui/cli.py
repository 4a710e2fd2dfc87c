# freqdist: frequency distributions of integer events
#
# Copyright (c) 2020-2021 Dave Jones <dave@waveform.org.uk>
#
# SPDX-License-Identifier: GPL-2.0-or-later

import os
import sys
import argparse
import warnings

from blessings import Terminal
from tqdm import tqdm

from .. import __version__
from ..collections import FrequencyDistribution
from ..errors import ValidationWarning
from ..format import format_count, format_share
from ..source import Source


def main(args=None):
    warnings.simplefilter('ignore', category=ValidationWarning)
    try:
        config = get_config(args)
        dist = get_distribution(config)
        print_distribution(config, dist)
    except KeyboardInterrupt as e:
        print("Interrupted", file=sys.stderr)
        return 2
    except Exception as e:
        debug = int(os.environ.get('DEBUG', '0'))
        if not debug:
            print(str(e), file=sys.stderr)
            return 1
        elif debug == 1:
            raise
        else:
            import pdb
            pdb.post_mortem()
    else:
        return 0


def get_config(args):
    parser = argparse.ArgumentParser(
        description="Count the integer events in the specified file(s) and "
        "report their frequency distribution")
    parser.add_argument(
        '--version', action='version', version=__version__)
    parser.add_argument(
        'file', nargs='*', type=file, default=[sys.stdin.buffer],
        help="The data-file(s) to count; if this is - or unspecified then "
        "stdin will be read for the data; if multiple files are specified "
        "their events will be counted in a single distribution")
    parser.add_argument(
        '-f', '--format', choices=('auto', 'text', 'csv', 'json', 'yaml'),
        default='auto',
        help="The format of the data file; if this is unspecified, it will "
        "be guessed based on the first bytes of the file; valid choices are "
        "auto (the default), text, csv, json, or yaml")
    parser.add_argument(
        '-e', '--encoding', type=str, default='auto',
        help="The string encoding of the file, e.g. utf-8 (default: "
        '%(default)s). If "auto" then the file will be sampled to determine '
        "the encoding (see --sample-bytes)")
    parser.add_argument(
        '--encoding-strict', action='store_true', default=True)
    parser.add_argument(
        '--no-encoding-strict', action='store_false', dest='encoding_strict',
        help="Controls whether character encoding is strictly enforced and "
        "will result in an error if invalid characters are found. If "
        "disabled, a replacement character will be inserted for invalid "
        "sequences. The default is strict decoding")
    parser.add_argument(
        '--csv-delimiter', type=str, metavar='CHAR', default='auto',
        help="The character used to delimit fields in a CSV file, or "
        '"auto" (the default) to detect it. Bear in mind that some '
        "characters may require quoting for the shell, e.g. ';'")
    parser.add_argument(
        '--json-strict', action='store_true', default=True)
    parser.add_argument(
        '--no-json-strict', action='store_false', dest='json_strict',
        help="Controls whether the JSON decoder permits control characters "
        "within strings, which isn't technically valid JSON. The default is "
        "to be strict and disallow such characters")
    parser.add_argument(
        '--sample-bytes', type=size, metavar='SIZE', default='1m',
        help="The number of bytes to sample from the file for the purposes of "
        "encoding and format detection. Defaults to %(default)s. Typical "
        "suffixes of k, m, g, etc. may be specified")
    parser.add_argument(
        '-s', '--sort', choices=('frequency', 'event'), default='frequency',
        help="The order in which to report events; 'frequency' (the default) "
        "lists the most frequent first, with ties in ascending order of "
        "event; 'event' lists events in ascending order")
    parser.add_argument(
        '-n', '--top', type=int, metavar='N', default=None,
        help="Only report the first N events of the chosen order. It is an "
        "error for N to exceed the number of distinct events")
    parser.add_argument(
        '--hide-share', action='store_false', dest='show_share',
        default=False)
    parser.add_argument(
        '--show-share', action='store_true',
        help="If set, show the share of all observations each event "
        "represents as a percentage. If disabled, shares will be hidden")
    parser.add_argument(
        '--compact', action='store_true', default=False,
        help="If set, abbreviate large counts with K, M, G, etc. suffixes")
    return parser.parse_args(args)


def get_distribution(config):
    bar_format='{desc} {percentage:4.1f}%  {elapsed} [{bar}] {remaining}'
    dist = FrequencyDistribution()
    with tqdm(config.file, leave=False, bar_format=bar_format, maxinterval=1) as progress:
        for file in progress:
            progress.set_description(
                'Reading file {name}'.format(name=getattr(file, 'name', '-')))
            try:
                source = MySource.from_config(config, file)
                if config.encoding == 'auto':
                    progress.set_description(
                        'Guessed encoding {source.encoding}'.format(
                            source=source))
                if config.format == 'auto':
                    progress.set_description(
                        'Guessed format {source.format}'.format(source=source))
                progress.set_description('Counting events')
                for event, count in source.events:
                    dist.increment(event, count)
            finally:
                if file is not sys.stdin.buffer:
                    file.close()
    return dist


def print_distribution(config, dist):
    term = Terminal(stream=sys.stdout)
    if config.sort == 'frequency':
        events = dist.frequency_sorted_events(config.top)
    else:
        events = dist.sorted_events(config.top)
    total = dist.sum_of_frequencies
    header = ('event', 'frequency')
    if config.show_share:
        header += ('share',)
    rows = [
        (str(event), format_count(frequency, config.compact)) +
        ((format_share(frequency, total),) if config.show_share else ())
        for event, frequency in events
    ]
    widths = [max(len(cell) for cell in column) for column in zip(header, *rows)]
    print(term.bold(format_row(header, widths)))
    for row in rows:
        print(format_row(row, widths))
    print('{events} events, {total} observations'.format(
        events=format_count(dist.number_of_events, config.compact),
        total=format_count(total, config.compact)))


def format_row(row, widths):
    return '  '.join(
        '{cell:>{width}}'.format(cell=cell, width=width)
        for cell, width in zip(row, widths))


class MySource(Source):
    @classmethod
    def from_config(cls, config, file):
        return cls(
            source=file,
            encoding=config.encoding,
            encoding_strict=config.encoding_strict,
            format=config.format,
            csv_delimiter=config.csv_delimiter,
            json_strict=config.json_strict,
            sample_limit=config.sample_bytes)


def size(s):
    s = s.lower().strip()
    suffixes = ('', 'k', 'm', 'g', 't', 'e')
    if not s[-1:].isdigit():
        return int(s[:-1]) * (2 ** 10) ** suffixes.index(s[-1:])
    else:
        return int(s)


def file(s):
    if s == '-':
        return sys.stdin.buffer
    else:
        return open(s, 'rb')
