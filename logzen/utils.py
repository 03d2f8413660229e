# -*- coding: utf-8 -*-

import io
import sys


class EncodingLookupError(LookupError):
    pass


class ErrorBehaviorLookupError(LookupError):
    pass


def check_encoding_settings(encoding, errors):
    "Raise a :exc:`LookupError` subtype if *encoding* or *errors* is unknown."
    try:
        # first test the encoding
        ''.encode(encoding)
    except LookupError as le:
        raise EncodingLookupError(le.args[0])
    try:
        # then test error-handler
        '\xdd'.encode('ascii', errors)
    except LookupError as le:
        raise ErrorBehaviorLookupError(le.args[0])
    except UnicodeEncodeError:
        # strict handlers refuse the non-ascii character
        pass


def iter_lines(stream):
    "Yield the lines of text *stream* without their line terminators."
    for line in stream:
        if line.endswith('\n'):
            line = line[:-1]
            if line.endswith('\r'):
                line = line[:-1]
        yield line


def open_input(path=None, encoding='utf-8', errors='surrogateescape',
               stdin=None):
    """Open *path* for reading as text, or wrap *stdin* (a binary stream,
    ``sys.stdin.buffer`` by default) when *path* is ``None`` or ``'-'``.
    """
    if path is None or path == '-':
        if stdin is None:
            stdin = sys.stdin.buffer
        return io.TextIOWrapper(stdin, encoding=encoding, errors=errors,
                                newline='')
    return io.open(path, 'r', encoding=encoding, errors=errors, newline='')
