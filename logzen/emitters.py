# -*- coding: utf-8 -*-
"""Emitters are callable objects which take an entry in *text-form*,
a rewritten line or a diagnostic, and output it to a stream, such as
stdout/stderr or a file.
"""

import io
import os
import sys
from collections import deque

from logzen.context import note
from logzen.utils import check_encoding_settings


stream_types = (io.BytesIO, io.BufferedWriter, io.BufferedRandom,
                io.RawIOBase)

NOTE_PREFIX = 'logzen: '


class AggregateEmitter(object):
    def __init__(self, limit=None):
        self._limit = limit
        self.items = deque(maxlen=limit)

    def get_entries(self):
        return list(self.items)

    def get_entry(self, idx):
        return self.items[idx]

    def clear(self):
        self.items.clear()

    def emit_entry(self, entry):
        self.items.append(entry)

    def emit_note(self, name, message):
        self.emit_entry('%s: %s' % (name, message))

    __call__ = emit_note

    def __repr__(self):
        cn = self.__class__.__name__
        args = (cn, self._limit, len(self.items))
        msg = '<%s limit=%r entry_count=%r>' % args
        return msg


def _get_sys_stream(name):
    return getattr(sys, name).buffer


class StreamEmitter(object):
    '''Writes text entries to binary streams, be they BytesIO or
    console (stdout/stderr). Each entry is encoded, followed by *sep*
    (``os.linesep`` by default), and flushed.

    Avoid using StreamEmitter directly when you have a file path. Use
    FileEmitter instead.
    '''
    def __init__(self, stream, encoding=None, **kwargs):
        if encoding is None:
            encoding = getattr(stream, 'encoding', None) or 'UTF-8'
        errors = kwargs.pop('errors', 'backslashreplace')

        check_encoding_settings(encoding, errors)  # raises on error

        if stream in ('stdout', 'stderr'):
            stream = _get_sys_stream(stream)

        if not isinstance(stream, stream_types):
            st_names = ', '.join([st.__name__.lstrip('_') for st in stream_types])
            raise TypeError('%s expected instance of %s, or shortcut'
                            ' values "stderr" or "stdout", not: %r'
                            % (self.__class__.__name__, st_names, stream))
        _mode = getattr(stream, 'mode', None)
        if _mode and 'b' not in _mode:
            raise ValueError('expected stream opened in binary mode, not: %r (mode %s)'
                             % (stream, _mode))
        self.stream = stream

        self.sep = kwargs.pop('sep', None)
        if self.sep is None:
            self.sep = os.linesep
        if isinstance(self.sep, str):
            self.sep = self.sep.encode(encoding)
        self.note_prefix = kwargs.pop('note_prefix', NOTE_PREFIX)
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r'
                            % list(kwargs.keys()))
        self.errors = errors
        self.encoding = encoding

    def emit_entry(self, entry):
        entry = entry.encode(self.encoding, self.errors)
        try:
            self.stream.write(entry + self.sep if self.sep else entry)
            self.flush()
        except Exception as e:
            note('stream_emit', 'got %r on %r.emit_entry()', e, self)
            raise
        return

    def emit_note(self, name, message):
        "Write a diagnostic, as delivered to note handlers."
        return self.emit_entry('%s%s: %s' % (self.note_prefix, name, message))

    def flush(self):
        stream_flush = getattr(self.stream, 'flush', None)
        if not callable(stream_flush):
            return
        try:
            stream_flush()
        except Exception as e:
            note('stream_flush', 'got %r on %r.flush()', e, self)

    def __repr__(self):
        return '<%s stream=%r>' % (self.__class__.__name__, self.stream)


class FileEmitter(StreamEmitter):
    """
    The convenient and correct way to write rewritten lines to a file
    when you have a path available.
    """
    def __init__(self, filepath, encoding='utf-8', **kwargs):
        self.filepath = os.path.abspath(filepath)
        mode = 'ab' if not kwargs.pop('overwrite', False) else 'wb'
        stream = io.open(self.filepath, mode)
        super(FileEmitter, self).__init__(stream, encoding=encoding, **kwargs)

    def close(self):
        if self.stream is None:
            return
        try:
            self.flush()
            if self.stream:
                self.stream.close()
                self.stream = None
        except Exception as e:
            note('file_close', 'got %r on %r.close()', e, self)
