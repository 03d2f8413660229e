# -*- coding: utf-8 -*-
"""The rewrite engine. Each line is searched with the patterns of a
:class:`~logzen.patterns.PatternSet`, in order, and the first
timestamp found is converted to the target time zone and put back in
place of the original text.

Replacement is textual: every occurrence of the matched text in the
line is replaced, not only the one at the matched position, so a line
repeating the same timestamp has all copies rewritten at once.
"""

from boltons.timeutils import UTC, LocalTZ, ConstantTZInfo

from logzen.common import ParseError
from logzen.context import note
from logzen.compiler import format_datetime


__all__ = ['rewrite', 'rewrite_lines', 'convert_match']

NAIVE_OFFSET_DIRECTIVE = '%:z'


def _offset_name(offset):
    total = int(offset.total_seconds())
    sign = '-' if total < 0 else '+'
    hours, rem = divmod(abs(total), 3600)
    return '%s%02d:%02d' % (sign, hours, rem // 60)


def convert_match(pattern, match, tz):
    """Parse the text of *match*, found with *pattern*, and render it
    in the time zone *tz*.

    Naive timestamps are taken to be UTC and rendered with an explicit
    offset appended to the format, after dropping a trailing ``Z`` if
    the format has one. Timestamps with an offset are rendered with the
    original format, keeping the fraction width and, when the offset is
    unchanged, its ``Z`` or numeric form.
    """
    parsed = pattern.parse_match(match)
    fmt = pattern.source_format
    if pattern.is_naive:
        if pattern.accepts_zulu:
            fmt = fmt[:-1]
        fmt += NAIVE_OFFSET_DIRECTIVE
        aware = parsed.dt.replace(tzinfo=UTC)
    else:
        if parsed.offset is None:
            raise ParseError('format %r matched %r without a UTC offset'
                             % (fmt, match.group()))
        src_tz = ConstantTZInfo(_offset_name(parsed.offset), parsed.offset)
        aware = parsed.dt.replace(tzinfo=src_tz)
    try:
        converted = aware.astimezone(tz)
    except (OverflowError, ValueError) as e:
        raise ParseError('could not convert %r to %r: %s'
                         % (match.group(), tz, e))
    return format_datetime(fmt, converted, parsed=parsed)


def rewrite(line, patterns, tz=None):
    """Return *line* with its first recognized timestamp converted to
    *tz* (the local time zone by default). Lines without a timestamp,
    or whose timestamp fails to parse, come back unchanged; parse
    failures are reported with :func:`~logzen.context.note`.
    """
    if tz is None:
        tz = LocalTZ
    for pattern in patterns:
        match = pattern.search(line)
        # a zero-length match, as from an empty format, holds no timestamp
        # and does not stop the search; the next pattern is tried
        if match is None or not match.group():
            continue
        matched = match.group()
        try:
            converted = convert_match(pattern, match, tz)
        except ParseError as pe:
            note('rewrite', 'format %r matched %r but it could not be'
                 ' converted: %s', pattern.source_format, matched, pe)
            return line
        return line.replace(matched, converted)
    return line


def rewrite_lines(lines, patterns, tz=None):
    "Lazily :func:`rewrite` each of *lines*, in order."
    if tz is None:
        tz = LocalTZ
    for line in lines:
        yield rewrite(line, patterns, tz)
