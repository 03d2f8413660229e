# -*- coding: utf-8 -*-
"""Runtime settings for the ``logzen`` command. A :class:`Config` is
built from keyword arguments, typically command-line options, with
the ``LOGZEN_*`` environment variables filling in what's left:

  * ``LOGZEN_FORMATS`` - extra formats, one per line, tried after
    those passed in directly
  * ``LOGZEN_TZ`` - the target time zone (see :func:`parse_tz`)
  * ``LOGZEN_ENCODING`` - the input and output encoding
"""

import io
import os
import re
import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from boltons.timeutils import UTC, LocalTZ, ConstantTZInfo


ENV_FORMATS = 'LOGZEN_FORMATS'
ENV_TZ = 'LOGZEN_TZ'
ENV_ENCODING = 'LOGZEN_ENCODING'

DEFAULT_TZ = 'local'
DEFAULT_ENCODING = 'utf-8'

_offset_re = re.compile(r'^(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})$')


def parse_tz(text):
    """Get a :class:`~datetime.tzinfo` for *text*, which is one of:

      * ``local`` (or empty) for the system's local time zone
      * ``UTC``, ``GMT`` or ``Z``
      * a fixed offset, like ``+05:30`` or ``-0400``
      * an IANA time zone name, like ``Europe/Paris``

    Raises :exc:`ValueError` for anything else.
    """
    text = (text or '').strip()
    if not text or text.lower() == 'local':
        return LocalTZ
    if text.upper() in ('UTC', 'GMT', 'Z'):
        return UTC
    match = _offset_re.match(text)
    if match:
        hours, minutes = int(match.group('hours')), int(match.group('minutes'))
        if hours > 23 or minutes > 59:
            raise ValueError('UTC offset out of range: %r' % text)
        offset = datetime.timedelta(hours=hours, minutes=minutes)
        if match.group('sign') == '-':
            offset = -offset
        return ConstantTZInfo(text, offset)
    try:
        return ZoneInfo(text)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError('unknown time zone: %r' % text)


def split_formats(text):
    "Formats from text with one format per line, skipping blanks and comments."
    ret = []
    for line in (text or '').splitlines():
        if not line.strip() or line.lstrip().startswith('#'):
            continue
        ret.append(line)
    return ret


def read_format_file(path, encoding=DEFAULT_ENCODING):
    with io.open(path, 'r', encoding=encoding) as f:
        return split_formats(f.read())


class Config(object):
    """Settings for a logzen run.

    Args:
        formats (list): User-supplied formats, highest priority first.
        tz (str): Target time zone, as accepted by :func:`parse_tz`.
        encoding (str): Encoding for reading input and writing output.
        use_defaults (bool): Whether the built-in formats are tried
            after *formats*. Defaults to ``True``.
        verbose (bool): Whether to report compiled patterns.
    """
    def __init__(self, **kwargs):
        self.formats = list(kwargs.pop('formats', None) or [])
        self.tz = kwargs.pop('tz', None) or DEFAULT_TZ
        self.encoding = kwargs.pop('encoding', None) or DEFAULT_ENCODING
        self.use_defaults = kwargs.pop('use_defaults', True)
        self.verbose = kwargs.pop('verbose', False)
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r'
                            % list(kwargs.keys()))

    @classmethod
    def from_env(cls, environ=None, **kwargs):
        """Create a Config from *kwargs*, using the ``LOGZEN_*`` variables
        in *environ* (``os.environ`` by default) for settings not given.
        Formats from the environment are added after those in *kwargs*.
        """
        if environ is None:
            environ = os.environ
        formats = list(kwargs.pop('formats', None) or [])
        formats.extend(split_formats(environ.get(ENV_FORMATS)))
        kwargs['formats'] = formats
        if not kwargs.get('tz'):
            kwargs['tz'] = environ.get(ENV_TZ)
        if not kwargs.get('encoding'):
            kwargs['encoding'] = environ.get(ENV_ENCODING)
        return cls(**kwargs)

    def get_tzinfo(self):
        return parse_tz(self.tz)

    def __repr__(self):
        cn = self.__class__.__name__
        return ('<%s formats=%r tz=%r encoding=%r use_defaults=%r>'
                % (cn, self.formats, self.tz, self.encoding, self.use_defaults))
