"""
Tests for report output (console table and CSV file).
"""

import csv
import logging

from version_report.models import REPORT_FIELDS, ReportRow
from version_report.sink import emit, print_table, write_csv

ANN = ReportRow('acme.com', 'o1', 'u1', 'Ann', 'a@acme.com', 'd1', '1.2.3.4', '5.5.09.04')
BOB = ReportRow('example.org', 'o2', 'u2', 'Smith, Bob', 'N/A', 'd2', 'N/A', '5.5.09.04 "beta"')


def test_field_order():
    """Columns follow the fixed report order."""
    assert REPORT_FIELDS == [
        'orgDomain', 'orgId', 'userId', 'userName',
        'userEmail', 'deviceId', 'deviceIp', 'appVersion',
    ]


def test_print_table(capsys):
    """The table has a header, a rule, and one line per row."""
    print_table([ANN, BOB])

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert lines[0].split() == REPORT_FIELDS
    assert set(lines[1].replace(' ', '')) == {'-'}
    assert lines[2].split() == ANN.values()
    assert 'Smith, Bob' in lines[3]


def test_print_table_columns_align(capsys):
    """Each value starts at the same offset as its header."""
    print_table([ANN, BOB])

    header, _, first, second = capsys.readouterr().out.splitlines()
    offset = header.index('userEmail')
    assert first[offset:].startswith('a@acme.com')
    assert second[offset:].startswith('N/A')


def test_write_csv(tmp_path):
    """CSV output has a header row and one row per record."""
    path = tmp_path / 'report.csv'

    write_csv([ANN], str(path))

    assert path.read_text(encoding='utf-8').splitlines() == [
        ','.join(REPORT_FIELDS),
        'acme.com,o1,u1,Ann,a@acme.com,d1,1.2.3.4,5.5.09.04',
    ]


def test_write_csv_quotes_embedded_delimiters(tmp_path):
    """Commas and quotes inside values survive a round trip through a CSV reader."""
    path = tmp_path / 'report.csv'

    write_csv([BOB], str(path))

    with open(path, newline='', encoding='utf-8') as f:
        records = list(csv.reader(f))
    assert records == [REPORT_FIELDS, BOB.values()]


def test_write_csv_overwrites_existing_file(tmp_path):
    """An existing report file is replaced, not appended to."""
    path = tmp_path / 'report.csv'
    path.write_text('stale,data\n' * 5, encoding='utf-8')

    write_csv([ANN], str(path))

    assert 'stale' not in path.read_text(encoding='utf-8')


def test_emit_table(capsys, caplog):
    """Without a CSV path the rows are printed as a table."""
    with caplog.at_level(logging.INFO):
        emit([ANN], '5.5.09.04')

    assert 'Users with app version 5.5.09.04:' in caplog.text
    assert 'a@acme.com' in capsys.readouterr().out


def test_emit_csv(tmp_path, capsys):
    """With a CSV path the rows go to the file and nothing is printed."""
    path = tmp_path / 'users_with_app_version.csv'

    emit([ANN, BOB], '5.5.09.04', csv_path=str(path))

    assert capsys.readouterr().out == ''
    assert len(path.read_text(encoding='utf-8').splitlines()) == 3


def test_emit_no_rows(tmp_path, capsys, caplog):
    """An empty report logs a message and produces neither table nor file."""
    path = tmp_path / 'users_with_app_version.csv'

    with caplog.at_level(logging.INFO):
        emit([], '9.9.9.9', csv_path=str(path))
        emit([], '9.9.9.9')

    assert 'No users found with app version 9.9.9.9.' in caplog.text
    assert not path.exists()
    assert capsys.readouterr().out == ''
