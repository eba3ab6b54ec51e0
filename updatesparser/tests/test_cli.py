# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

import io
import json
import re
import textwrap

import pytest

import updatesparser
import updatesparser.cli
from updatesparser.exceptions import DecodeError
from updatesparser.main import main, run_updatesparser
from updatesparser.tests import fixture_path


def _strip_file_and_lineno(s):
    s = re.sub(
        re.escape(__file__) + r':\d+',
        '__file__:00',
        s,
    )
    s = re.sub(
        r'"' + re.escape(__file__) + r'", line \d+',
        '"__file__", line 00',
        s,
    )
    return s


def _test_excepthook(exception, output, *, verbose):
    buf = io.StringIO()

    assert exception.__traceback__
    actual_exitcode = updatesparser.cli.format_exception(
        exception,
        output=buf, verbose=verbose, base_module=updatesparser,
    )

    assert actual_exitcode == 1
    assert _strip_file_and_lineno(buf.getvalue()) == output


def _test_exception():
    try:
        raise ValueError('some error')
    except ValueError as e:
        return e


def _test_decode_error():
    try:
        raise DecodeError('decoding token: mismatched tag')
    except DecodeError as e:
        return e


def test_excepthook():
    _test_excepthook(
        _test_exception(),
        '__file__:00: ValueError: some error\n',
        verbose=False,
    )


def test_excepthook_verbose():
    _test_excepthook(
        _test_exception(),
        textwrap.dedent("""
        Traceback (most recent call last):
          File "__file__", line 00, in _test_exception
            raise ValueError('some error')
        ValueError: some error
        """).lstrip(),
        verbose=True,
    )


def test_excepthook_parser_error():
    _test_excepthook(
        _test_decode_error(),
        'Whoops. There was an error: decoding token: mismatched tag\n',
        verbose=False,
    )


def _ids_from_json(capsys, *args):
    run_updatesparser(['--json', *args, fixture_path('updateinfo-simple.xml')])
    return [u['id'] for u in json.loads(capsys.readouterr().out)]


def test_security_json(capsys):
    assert _ids_from_json(capsys, '--security') == ['SUSE-SLE-Micro-5.5-2023-4432']


def test_date_bounds(capsys):
    assert _ids_from_json(capsys, '--afterDate', '1700000050') == [
        'SUSE-SLE-Micro-5.5-2023-4440',
        'SUSE-SLE-Micro-5.5-2024-12',
    ]
    assert _ids_from_json(capsys, '-b', '1700000100') == ['SUSE-SLE-Micro-5.5-2023-4432']


def test_date_format(capsys):
    assert _ids_from_json(capsys, '-f', '%Y-%m-%d', '-a', '2024-01-01') == [
        'SUSE-SLE-Micro-5.5-2024-12',
    ]


def test_packages(capsys):
    assert _ids_from_json(capsys, '-p', fixture_path('micro.packages')) == [
        'SUSE-SLE-Micro-5.5-2023-4432',
        'SUSE-SLE-Micro-5.5-2024-12',
    ]


def test_output_file(tmp_path):
    output = tmp_path / 'changelog.txt'
    run_updatesparser([
        '-o', output,
        '-t', fixture_path('marker.mako'),
        '-s',
        fixture_path('updateinfo-simple.xml'),
    ])

    assert output.read_text() == (
        'HEADER\n'
        'BODY SUSE-SLE-Micro-5.5-2023-4432 2023\n'
        '  cve https://www.suse.com/security/cve/CVE-2023-5678/\n'
        '  bugzilla https://bugzilla.suse.com/show_bug.cgi?id=1216163\n'
        'FOOTER\n'
    )


def test_missing_updateinfo(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['updatesparser', str(tmp_path / 'missing.xml')])

    assert excinfo.value.code == 2
    assert 'could not find updateinfo file' in capsys.readouterr().err


def test_json_and_template_are_exclusive(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['updatesparser', '--json', '--template', str(fixture_path('marker.mako')),
              str(fixture_path('updateinfo-simple.xml'))])

    assert excinfo.value.code == 2
    assert 'not allowed with argument' in capsys.readouterr().err


def test_decode_error_exit(tmp_path, capsys):
    broken = tmp_path / 'updateinfo.xml'
    broken.write_text('<updates><update type="security"><issued date="soon"/></update></updates>')

    with pytest.raises(SystemExit) as excinfo:
        main(['updatesparser', str(broken)])

    assert excinfo.value.code == 1
    assert 'Whoops. There was an error: decoding element "update"' in capsys.readouterr().err


def test_invalid_date_option(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['updatesparser', '-b', 'tomorrow', str(fixture_path('updateinfo-simple.xml'))])

    assert excinfo.value.code == 1
    assert "failed parsing date 'tomorrow'" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['updatesparser', '--version'])

    assert excinfo.value.code == 0
    assert re.match(r'updatesparser v\d+\.\d+', capsys.readouterr().out)
