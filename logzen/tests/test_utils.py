# -*- coding: utf-8 -*-

import io

import pytest

from logzen.utils import (check_encoding_settings, iter_lines, open_input,
                          EncodingLookupError, ErrorBehaviorLookupError)


def test_check_encoding_settings():
    assert check_encoding_settings('utf-8', 'strict') is None
    assert check_encoding_settings('ascii', 'surrogateescape') is None
    with pytest.raises(EncodingLookupError):
        check_encoding_settings('not-a-codec', 'strict')
    with pytest.raises(ErrorBehaviorLookupError):
        check_encoding_settings('utf-8', 'not-a-handler')


def test_iter_lines():
    stream = io.StringIO(u'one\r\ntwo\n\nthree', newline='')
    assert list(iter_lines(stream)) == ['one', 'two', '', 'three']


def test_open_input_stdin():
    stdin = io.BytesIO(b'caf\xc3\xa9 \xff\r\n')
    infile = open_input(stdin=stdin)
    assert list(iter_lines(infile)) == [u'caf\xe9 \udcff']
    infile.detach()
