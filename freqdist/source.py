# freqdist: frequency distributions of integer events
#
# Copyright (c) 2020-2021 Dave Jones <dave@waveform.org.uk>
#
# SPDX-License-Identifier: GPL-2.0-or-later

import csv
import json
import warnings

from chardet import UniversalDetector
from ruamel.yaml import YAML

from .errors import ValidationWarning


class Source:
    """
    A source of integer events capable of automatically recognizing certain
    popular data formats, and guessing character encodings. Constructed with a
    mandatory file-like object as the *source*, and several keyword-only
    options, the decoded (event, count) pairs can be accessed from
    :attr:`events`.

    The *source* must have a :meth:`~io.RawIOBase.read` method which, given a
    number of bytes to return, returns a :class:`bytes` string up to that
    length, but has no requirements beyond this. Note that this means files
    over sockets or pipes are acceptable inputs.

    The formats understood are:

    text
        Integers separated by whitespace; each one is a single observation of
        that event.

    json, yaml
        Either a list of integers (each a single observation), or a mapping of
        events to counts.

    csv
        Rows of either a single event (one observation), or an event and a
        count. A first row which does not start with an integer is assumed to
        be a header and is ignored.

    :param file source:
        The file-like object to decode (must have a ``read`` method).
    :param str encoding:
        The character encoding used in the source, or "auto" (the default) if
        it should be guessed from a sample of the data.
    :param bool encoding_strict:
        If :data:`True` (the default), raise an exception if character decoding
        errors occur. Otherwise, replace invalid characters silently.
    :param str format:
        If "auto" (the default), guess the format of the data source. Otherwise
        can be explicitly set to "text", "csv", "yaml", or "json" to force
        parsing of that format.
    :param str csv_delimiter:
        If "auto" (the default), attempt to guess the field delimiter when the
        "csv" format is being decoded using the :class:`csv.Sniffer` class.
        Otherwise must be set to the single character :class:`str` used as the
        field delimiter (e.g. ",").
    :param bool json_strict:
        If :data:`True` (the default), control characters will not be permitted
        inside decoded strings.
    :param int sample_limit:
        The number of bytes to sample from the beginning of the stream when
        attempting to determine character encoding and format. Defaults to
        1MB.
    """
    def __init__(self, source, *, encoding='auto', encoding_strict=True,
                 format='auto', csv_delimiter='auto', json_strict=True,
                 sample_limit=1048576):
        self._source = source
        self._encoding = encoding
        self._encoding_strict = encoding_strict
        self._format = format
        self._csv_delimiter = csv_delimiter
        self._csv_dialect = None
        self._json_strict = json_strict
        self._sample_limit = sample_limit
        self._sample = b''
        self._events = None

    @property
    def encoding(self):
        """
        The character encoding detected or specified for the source, e.g.
        "utf-8".
        """
        if self._encoding == 'auto':
            self._detect_encoding()
        return self._encoding

    @property
    def format(self):
        """
        The data format detected or specified for the source, e.g. "text",
        "csv", "yaml", or "json".
        """
        if self._format == 'auto':
            self._detect_format()
        return self._format

    @property
    def csv_dialect(self):
        """
        The :class:`csv.Dialect` used when :attr:`format` is "csv", or
        :data:`None` otherwise.
        """
        if self.format == 'csv':
            if self._csv_dialect is None:
                self._detect_csv_dialect()
            return self._csv_dialect
        else:
            return None

    @property
    def events(self):
        """
        The decoded data as a :class:`list` of (event, count) tuples, in the
        order they were read.
        """
        if self._events is None:
            self._load_events()
        return self._events

    def _sample_bytes(self):
        if len(self._sample) < self._sample_limit:
            self._sample += self._source.read(
                self._sample_limit - len(self._sample))
        return self._sample

    def _sample_str(self):
        return self._sample_bytes().decode(self.encoding, errors='replace')

    def _detect_encoding(self):
        detector = UniversalDetector()
        detector.feed(self._sample_bytes())
        result = detector.close()
        if result['confidence'] < 0.9:
            warnings.warn(ValidationWarning(
                'Low confidence ({confidence}) in detected character set'.
                format_map(result)))
        # An empty sample yields no guess at all
        self._encoding = result['encoding'] or 'utf-8'

    def _detect_format(self):
        sample = self._sample_str().lstrip()
        if sample[:1] in ('[', '{'):
            self._format = 'json'
        else:
            self._detect_yaml_csv_or_text()

    def _detect_yaml_csv_or_text(self):
        sample = self._sample_str().splitlines()
        if len(self._sample) >= self._sample_limit:
            # Strip potentially partial last line off
            sample = sample[:-1]
        csv_score = yaml_score = 0
        for line in sample:
            if (
                line.startswith(('#', '- ', '---')) or
                line.strip() == '-' or
                line.endswith(':')
            ):
                # YAML comments, "-" prefixed items, document markers and
                # colon suffixes never occur in lists of integers
                yaml_score += 2
            elif line.count(':') == 1:
                # A single colon; weaker indicator of a YAML mapping
                yaml_score += 1
            elif set(line) & set(',;'):
                csv_score += 1
        if yaml_score > csv_score:
            self._format = 'yaml'
        elif csv_score > 0:
            self._format = 'csv'
        else:
            self._format = 'text'

    def _detect_csv_dialect(self):
        if self._csv_delimiter == 'auto':
            # First line is possible header; only need a few Kb for
            # analysis
            lines = self._sample_str().splitlines(keepends=True)
            # A single line file has nothing but the possible header
            sample = (''.join(lines[1:]) or ''.join(lines))[:8192]
            try:
                self._csv_dialect = csv.Sniffer().sniff(
                    sample, delimiters=',;\t')
            except csv.Error:
                # Typically a single column; the delimiter is irrelevant
                self._csv_dialect = csv.excel
        else:
            class dialect(csv.Dialect):
                delimiter = self._csv_delimiter
                quotechar = '"'
                escapechar = None
                doublequote = True
                lineterminator = '\r\n'
                quoting = csv.QUOTE_MINIMAL
            self._csv_dialect = dialect

    def _load_events(self):
        # The apparently pointless _sample_bytes call below isn't actually
        # pointless; it's required to set the _sample cache in case it's
        # queried by a later query of encoding, csv_dialect, etc.
        data = self._sample_bytes() + self._source.read()
        data = data.decode(
            self.encoding,
            errors='strict' if self._encoding_strict else 'replace')

        if self.format == 'text':
            self._events = [(parse_event(token), 1) for token in data.split()]
        elif self.format == 'json':
            self._events = events_from_structure(
                json.loads(data, strict=self._json_strict))
        elif self.format == 'yaml':
            self._events = events_from_structure(YAML(typ='safe').load(data))
        elif self.format == 'csv':
            self._events = events_from_rows(
                csv.reader(data.splitlines(keepends=True), self.csv_dialect))
        else:
            raise ValueError('unknown data format {}'.format(self.format))


def parse_event(value):
    """
    Convert *value*, an :class:`int` or a :class:`str` representation of one,
    to an :class:`int`. Raises :exc:`ValueError` for anything else.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    elif isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError('invalid event {!r}'.format(value))


def events_from_structure(data):
    """
    Given the decoded *data* of a JSON or YAML document, return a list of
    (event, count) tuples. A list is taken to be a sequence of observations,
    and a mapping to be events and their counts. An empty document yields no
    events.
    """
    if data is None:
        return []
    elif isinstance(data, dict):
        return [
            (parse_event(event), parse_event(count))
            for event, count in data.items()
        ]
    elif isinstance(data, list):
        return [(parse_event(event), 1) for event in data]
    else:
        raise ValueError(
            'expected a list or mapping of events, not {!r}'.format(data))


def events_from_rows(rows):
    """
    Given an iterable of CSV *rows*, return a list of (event, count) tuples.
    Blank rows are skipped, as is a first row that looks like a header.
    """
    result = []
    first = True
    for row in rows:
        row = [cell for cell in row if cell.strip()]
        if not row:
            continue
        if first:
            first = False
            try:
                parse_event(row[0])
            except ValueError:
                continue
        if len(row) == 1:
            result.append((parse_event(row[0]), 1))
        else:
            result.append((parse_event(row[0]), parse_event(row[1])))
    return result
