# -*- coding: utf-8 -*-

import io

from logzen.cli import main, create_parser


def _run(argv, input_bytes=b'', environ=None):
    stdin, stdout, stderr = io.BytesIO(input_bytes), io.BytesIO(), io.BytesIO()
    if environ is None:
        environ = {}
    code = main(argv, environ=environ, stdin=stdin, stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


def test_parser():
    args = create_parser().parse_args(['-f', '%H:%M', '--format', '%c',
                                       '--tz=-04:00', '--no-defaults', 'app.log'])
    assert args.formats == ['%H:%M', '%c']
    assert args.tz == '-04:00'
    assert args.use_defaults is False
    assert args.input == 'app.log'

    args = create_parser().parse_args([])
    assert args.formats == []
    assert args.input is None
    assert args.use_defaults is True


def test_stdin_to_stdout():
    data = b'INFO 2023-06-01T12:00:00Z started\nno timestamp\n'
    code, out, err = _run(['--tz=-04:00'], data)
    assert code == 0
    assert out == b'INFO 2023-06-01T08:00:00-04:00 started\nno timestamp\n'
    assert err == b''


def test_user_format():
    data = b'01/02/2023 08:30 request served\n'
    code, out, err = _run(['-f', '%d/%m/%Y %H:%M', '--tz', '+02:00'], data)
    assert code == 0
    assert out == b'01/02/2023 10:30+02:00 request served\n'


def test_no_defaults():
    data = b'INFO 2023-06-01T12:00:00Z started\n'
    code, out, err = _run(['--no-defaults', '--tz', 'UTC'], data)
    assert code == 0
    assert out == data


def test_invalid_format():
    code, out, err = _run(['-f', '%H %Z', '--tz', 'UTC'], b'12 UTC\n')
    assert code == 2
    assert out == b''
    assert b"invalid format '%H %Z'" in err

    code, out, err = _run(['-f', '%H:%', '--tz', 'UTC'], b'12:00\n')
    assert code == 2
    assert b'invalid format' in err


def test_invalid_tz():
    code, out, err = _run(['--tz', 'Nowhere/Special'], b'x\n')
    assert code == 2
    assert b'logzen: error: unknown time zone' in err


def test_invalid_encoding():
    code, out, err = _run(['--tz', 'UTC', '--encoding', 'not-a-codec'], b'x\n')
    assert code == 2
    assert b'invalid encoding' in err


def test_file_input_and_output(tmp_path):
    in_path = tmp_path / 'app.log'
    in_path.write_bytes(b'[22/Jun/2013:06:41:43 -0700] "GET / HTTP/1.1" 200\n')
    out_path = tmp_path / 'app.utc.log'

    code, out, err = _run(['--tz', 'UTC', str(in_path)])
    assert code == 0
    assert out == b'[22/Jun/2013:13:41:43 +0000] "GET / HTTP/1.1" 200\n'

    code, out, err = _run(['--tz', 'UTC', '-o', str(out_path), str(in_path)])
    assert code == 0
    assert out == b''
    assert out_path.read_bytes() == b'[22/Jun/2013:13:41:43 +0000] "GET / HTTP/1.1" 200\n'


def test_missing_input(tmp_path):
    code, out, err = _run(['--tz', 'UTC', str(tmp_path / 'missing.log')])
    assert code == 1
    assert b'could not open input' in err


def test_missing_format_file(tmp_path):
    code, out, err = _run(['--format-file', str(tmp_path / 'missing.txt')])
    assert code == 1
    assert b'could not read format file' in err


def test_format_file(tmp_path):
    fmt_path = tmp_path / 'formats.txt'
    fmt_path.write_text(u'# ours\n%d.%m.%Y %H:%M\n', encoding='utf-8')
    code, out, err = _run(['--format-file', str(fmt_path), '--tz', '+01:00'],
                          b'at 31.12.2022 23:30\n')
    assert code == 0
    assert out == b'at 01.01.2023 00:30+01:00\n'


def test_env_settings():
    environ = {'LOGZEN_FORMATS': '%d/%m/%Y %H:%M', 'LOGZEN_TZ': '+02:00'}
    code, out, err = _run([], b'01/02/2023 08:30\n', environ=environ)
    assert code == 0
    assert out == b'01/02/2023 10:30+02:00\n'

    # the command line wins over the environment
    code, out, err = _run(['--tz', 'UTC'], b'01/02/2023 08:30\n', environ=environ)
    assert out == b'01/02/2023 08:30+00:00\n'


def test_parse_error_reported():
    data = b'at 2023-13-45 10:00 oops\n'
    code, out, err = _run(['-f', '%Y-%m-%d %H:%M', '--tz', 'UTC'], data)
    assert code == 0
    assert out == data
    assert err.startswith(b'logzen: rewrite: ')


def test_verbose_compile_notes():
    fmt = '%Y|%m|%d %H.%M.%S'
    code, out, err = _run(['-v', '-f', fmt, '--tz', 'UTC'], b'2023|06|01 12.00.00\n')
    assert code == 0
    assert out == b'2023|06|01 12.00.00+00:00\n'
    assert b'logzen: compile: ' in err

    # quiet by default
    code, out, err = _run(['-f', '%Y~%m~%d', '--tz', 'UTC'], b'x\n')
    assert err == b''


def test_undecodable_bytes_pass_through():
    data = b'\xff\xfe 2023-06-01T12:00:00Z \xc3\n'
    code, out, err = _run(['--tz', '+01:00'], data)
    assert code == 0
    assert out == b'\xff\xfe 2023-06-01T13:00:00+01:00 \xc3\n'


def test_crlf_input():
    data = b'a 2023-06-01T12:00:00Z\r\nb\r\nlast'
    code, out, err = _run(['--tz', '+01:00'], data)
    assert code == 0
    assert out == b'a 2023-06-01T13:00:00+01:00\nb\nlast\n'


def test_missing_input_keeps_output(tmp_path):
    out_path = tmp_path / 'out.log'
    out_path.write_bytes(b'precious\n')
    code, out, err = _run(['--tz', 'UTC', '-o', str(out_path),
                           str(tmp_path / 'missing.log')])
    assert code == 1
    assert b'could not open input' in err
    assert out_path.read_bytes() == b'precious\n'


def test_unwritable_output(tmp_path):
    in_path = tmp_path / 'app.log'
    in_path.write_bytes(b'INFO 2023-06-01T12:00:00Z\n')
    out_path = tmp_path / 'no_such_dir' / 'out.log'
    code, out, err = _run(['--tz', 'UTC', '-o', str(out_path), str(in_path)])
    assert code == 1
    assert b'could not open output' in err
