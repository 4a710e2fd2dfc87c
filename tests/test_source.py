# freqdist: frequency distributions of integer events
#
# Copyright (c) 2020-2021 Dave Jones <dave@waveform.org.uk>
#
# SPDX-License-Identifier: GPL-2.0-or-later

import io
import csv
import json

import pytest

from freqdist.errors import ValidationWarning
from freqdist.source import *


@pytest.fixture
def events(request):
    return [5, 2, 9, 2, 2, 9, 5, 9, 2, 9, 5, 2, 9, 2, 9, 2, 9]


def test_source_sample_limit(tmpdir):
    filename = str(tmpdir.join('data.file'))
    with open(filename, 'wb') as f:
        f.write(b'\xff' * 2000)
    with open(filename, 'rb') as f:
        s = Source(f, sample_limit=1000)
        assert s._sample_bytes() == b'\xff' * 1000
        assert f.tell() == 1000
        # Check query idempotency
        assert s._sample_bytes() == b'\xff' * 1000
        assert f.tell() == 1000


def test_source_encoding(tmpdir):
    filename = str(tmpdir.join('utf-8.txt'))
    with open(filename, 'w', encoding='utf-8') as f:
        f.write('# Événements observés: données brutes en français\n' * 20)
        f.write('1 2 3\n')
    with open(filename, 'rb') as f:
        assert Source(f).encoding.lower() == 'utf-8'
    with open(filename, 'rb') as f:
        with pytest.raises(UnicodeError):
            Source(f, encoding='ascii', format='text').events


def test_source_encoding_empty():
    with pytest.warns(ValidationWarning):
        s = Source(io.BytesIO(b''))
        assert s.encoding == 'utf-8'
    assert s.events == []


def test_source_encoding_manual():
    s = Source(io.BytesIO(b'1 2 3\n'), encoding='ascii')
    assert s.encoding == 'ascii'
    assert s.events == [(1, 1), (2, 1), (3, 1)]


def test_source_encoding_not_strict():
    s = Source(
        io.BytesIO(b'1 2 \xff\n'), encoding='ascii', encoding_strict=False,
        format='text')
    with pytest.raises(ValueError):
        s.events


def test_source_encoding_not_strict_header():
    data = b'ev\xffent,count\n5,3\n2,7\n'
    s = Source(
        io.BytesIO(data), encoding='ascii', encoding_strict=False,
        format='csv')
    assert s.events == [(5, 3), (2, 7)]
    s = Source(io.BytesIO(data), encoding='ascii', format='csv')
    with pytest.raises(UnicodeError):
        s.events


def test_source_format_single_line():
    s = Source(io.BytesIO(b'5,3\n'), encoding='ascii')
    assert s.format == 'csv'
    assert s.events == [(5, 3)]
    s = Source(io.BytesIO(b'5: 3\n'), encoding='ascii')
    assert s.format == 'yaml'
    assert s.events == [(5, 3)]
    s = Source(io.BytesIO(b'5 3\n'), encoding='ascii')
    assert s.format == 'text'
    assert s.events == [(5, 1), (3, 1)]


def test_source_format_no_trailing_newline():
    s = Source(io.BytesIO(b'5,3\n2,7'), encoding='ascii')
    assert s.format == 'csv'
    assert s.events == [(5, 3), (2, 7)]
    s = Source(io.BytesIO(b'5: 3'), encoding='ascii')
    assert s.format == 'yaml'
    assert s.events == [(5, 3)]


def test_source_format_truncated_sample():
    # The last (partial) line of a full sample is not scored
    s = Source(
        io.BytesIO(b'1 2 3\n4 5 6\n7,8'), encoding='ascii', sample_limit=15)
    assert s.format == 'text'


def test_source_format_text(tmpdir, events):
    filename = str(tmpdir.join('data.txt'))
    with open(filename, 'w', encoding='ascii') as f:
        for i in range(0, len(events), 5):
            f.write(' '.join(str(e) for e in events[i:i + 5]))
            f.write('\n')
    with open(filename, 'rb') as f:
        s = Source(f)
        assert s.format == 'text'
        assert s.csv_dialect is None
        assert s.events == [(e, 1) for e in events]


def test_source_format_text_negative():
    s = Source(io.BytesIO(b'-5 3\n-5 -1\n2\n'))
    assert s.format == 'text'
    assert s.events == [(-5, 1), (3, 1), (-5, 1), (-1, 1), (2, 1)]


def test_source_format_json(tmpdir, events):
    filename = str(tmpdir.join('data.json'))
    with open(filename, 'w') as f:
        json.dump(events, f)
    with open(filename, 'rb') as f:
        s = Source(f)
        assert s.format == 'json'
        assert s.events == [(e, 1) for e in events]

    with open(filename, 'w') as f:
        json.dump({5: 3, 2: 7, 9: 7}, f)
    with open(filename, 'rb') as f:
        s = Source(f)
        assert s.format == 'json'
        assert s.events == [(5, 3), (2, 7), (9, 7)]


def test_source_format_json_invalid():
    s = Source(io.BytesIO(b'[1, 2, "foo"]'))
    with pytest.raises(ValueError):
        s.events
    s = Source(io.BytesIO(b'[1, 2, 3.5]'))
    with pytest.raises(ValueError):
        s.events
    s = Source(io.BytesIO(b'{"1": true}'))
    with pytest.raises(ValueError):
        s.events
    s = Source(io.BytesIO(b'1'), format='json')
    with pytest.raises(ValueError):
        s.events


def test_source_format_yaml(tmpdir):
    filename = str(tmpdir.join('data.yaml'))
    with open(filename, 'w') as f:
        f.write('# counts\n5: 3\n2: 7\n9: 7\n')
    with open(filename, 'rb') as f:
        s = Source(f)
        assert s.format == 'yaml'
        assert s.events == [(5, 3), (2, 7), (9, 7)]

    with open(filename, 'w') as f:
        f.write('- 5\n- 2\n- 2\n- 9\n')
    with open(filename, 'rb') as f:
        s = Source(f)
        assert s.format == 'yaml'
        assert s.events == [(5, 1), (2, 1), (2, 1), (9, 1)]


def test_source_format_yaml_empty():
    s = Source(io.BytesIO(b'# nothing here\n'), encoding='ascii', format='yaml')
    assert s.events == []


def test_source_format_csv(tmpdir):
    filename = str(tmpdir.join('data.csv'))
    with open(filename, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['event', 'count'])
        writer.writerow([5, 3])
        writer.writerow([2, 7])
        writer.writerow([9, 7])
    with open(filename, 'rb') as f:
        s = Source(f)
        assert s.format == 'csv'
        assert s.csv_dialect.delimiter == ','
        assert s.events == [(5, 3), (2, 7), (9, 7)]


def test_source_format_csv_manual_delimiter():
    s = Source(
        io.BytesIO(b'5;3\n2;7\n\n9;7\n'), encoding='ascii', format='csv',
        csv_delimiter=';')
    assert s.csv_dialect.delimiter == ';'
    assert s.events == [(5, 3), (2, 7), (9, 7)]


def test_source_format_csv_single_column():
    s = Source(
        io.BytesIO(b'event\n5\n2\n2\n'), encoding='ascii', format='csv')
    assert s.events == [(5, 1), (2, 1), (2, 1)]


def test_source_format_unknown():
    s = Source(io.BytesIO(b'1 2 3'), encoding='ascii', format='xml')
    with pytest.raises(ValueError):
        s.events


def test_parse_event():
    assert parse_event(1) == 1
    assert parse_event(-1) == -1
    assert parse_event(' 42 ') == 42
    with pytest.raises(ValueError):
        parse_event('foo')
    with pytest.raises(ValueError):
        parse_event(1.0)
    with pytest.raises(ValueError):
        parse_event(True)
    with pytest.raises(ValueError):
        parse_event(None)


def test_events_from_structure():
    assert events_from_structure(None) == []
    assert events_from_structure([]) == []
    assert events_from_structure([1, '2']) == [(1, 1), (2, 1)]
    assert events_from_structure({'1': 3, 2: '4'}) == [(1, 3), (2, 4)]
    with pytest.raises(ValueError):
        events_from_structure('foo')


def test_events_from_rows():
    assert events_from_rows([]) == []
    assert events_from_rows([['1'], ['2', '3']]) == [(1, 1), (2, 3)]
    assert events_from_rows([[], ['id'], ['2', '3']]) == [(2, 3)]
    with pytest.raises(ValueError):
        events_from_rows([['1'], ['foo']])


def test_source_detector_import():
    import chardet
    from freqdist import source
    assert source.UniversalDetector is chardet.UniversalDetector
