# -*- coding: utf-8 -*-
"""Built-in formats, collected from existing implementations and
standards, and the :class:`PatternSet` which puts user formats ahead
of them.

Internet time format (RFC3339, ISO8601 compatible), ``%+``:

  1985-04-12T23:20:50.520Z
  1996-12-19T16:39:57-08:00

RFC 2822 date format (i.e., email and HTTP headers), ``%#c``:

  Sun, 06 Nov 1994 08:49:37 +0000

Output of the ``date`` command (aka asctime(), but without the zone
name), ``%c``:

  Sat Jun 22 15:25:38 2013

Apache access log and Nginx default access log:

  1.202.218.21 - - [22/Jun/2013:06:41:43 -0700] "GET /robots.txt HTTP/1.1" 200 26

  Time format: [day/month/year:hour:minute:second zone]
"""

from boltons.iterutils import unique

from logzen.common import CompileError
from logzen.compiler import compile_format


DEFAULT_FORMATS = ('%+',
                   '%#c',
                   '%c',
                   '%Y-%m-%dT%H:%M:%SZ',
                   '%Y-%m-%dT%H:%M:%S%z',
                   '%d/%b/%Y:%H:%M:%S %z')


class PatternSet(object):
    """An ordered collection of compiled
    :class:`~logzen.compiler.Pattern` objects. Earlier patterns take
    priority. Build one with :func:`build_pattern_set`.
    """
    def __init__(self, patterns):
        self._patterns = tuple(patterns)

    @property
    def formats(self):
        return [p.source_format for p in self._patterns]

    def __iter__(self):
        return iter(self._patterns)

    def __len__(self):
        return len(self._patterns)

    def __getitem__(self, idx):
        return self._patterns[idx]

    def __repr__(self):
        return '<%s formats=%r>' % (self.__class__.__name__, self.formats)


def build_pattern_set(user_formats=None, default_formats=DEFAULT_FORMATS):
    """Compile *user_formats* followed by *default_formats* into a
    :class:`PatternSet`. Repeated formats are only kept at their first
    position.

    A user format which fails to compile raises its
    :exc:`~logzen.common.CompileError`, which names the format. A
    default format failing to compile is a bug, and raises
    :exc:`RuntimeError`.
    """
    user_formats = list(user_formats or [])
    default_formats = list(default_formats or [])
    patterns = []
    for fmt in unique(user_formats + default_formats):
        try:
            patterns.append(compile_format(fmt))
        except CompileError as ce:
            if fmt in user_formats:
                raise
            raise RuntimeError('built-in format %r failed to compile: %s'
                               % (fmt, ce))
    return PatternSet(patterns)
