# -*- coding: utf-8 -*-
"""Turns the fields captured from a matched timestamp into a
:class:`ParsedTime`. Fields are collected into a plain dict keyed by
name (``year``, ``month``, ``hour12``, ``offset``, etc.) and resolved
here, all at once, so that missing or contradictory fields can be
reported together with the format that produced them.
"""

import datetime
from collections import namedtuple

from logzen.common import ParseError

EPOCH_NAIVE = datetime.datetime(1970, 1, 1)

ParsedTime = namedtuple('ParsedTime',
                        'dt nanosecond offset zulu fraction_digits')
ParsedTime.__doc__ = """\
A parsed timestamp. *dt* is the naive wall-clock time as written,
*nanosecond* the fraction of the second in nanoseconds (of which *dt*
only carries the microseconds), and *offset* the
:class:`~datetime.timedelta` UTC offset found in the text, or ``None``.

The last two record how the text was written, so that rendering can
reproduce it: *zulu* is ``True`` if the offset was a ``Z``, ``False``
if it was numeric, and *fraction_digits* the number of digits after
the dot (``0`` for an omitted optional fraction). Both are ``None``
when the format has no such directive.
"""


def set_field(fields, name, value):
    cur = fields.get(name)
    if cur is not None and cur != value:
        raise ParseError('conflicting values for %s: %r and %r'
                         % (name, cur, value))
    fields[name] = value


def _resolve_year(fields, full, div, mod):
    year = fields.get(full)
    year_div, year_mod = fields.get(div), fields.get(mod)
    if year is not None:
        if year_div is not None and year_div != year // 100:
            raise ParseError('century %r does not match year %r'
                             % (year_div, year))
        if year_mod is not None and year_mod != year % 100:
            raise ParseError('two-digit year %r does not match year %r'
                             % (year_mod, year))
        return year
    if year_mod is None:
        return None
    if year_div is not None:
        return year_div * 100 + year_mod
    return year_mod + (1900 if year_mod >= 70 else 2000)


def _from_week(year, week, weekday, first_weekday):
    """Date for *weekday* (Monday is 0) of *week* of *year*, where week
    1 starts on the first *first_weekday* of the year and earlier days
    are in week 0, as with the ``%U`` and ``%W`` directives.
    """
    jan1 = datetime.date(year, 1, 1)
    first = jan1 + datetime.timedelta((first_weekday - jan1.weekday()) % 7)
    days_in = (weekday - first_weekday) % 7
    ret = first + datetime.timedelta(weeks=week - 1, days=days_in)
    if ret.year != year:
        raise ParseError('week %r, weekday %r is outside of year %r'
                         % (week, weekday, year))
    return ret


def _resolve_date(fields):
    year = _resolve_year(fields, 'year', 'year_div_100', 'year_mod_100')
    isoyear = _resolve_year(fields, 'isoyear', None, 'isoyear_mod_100')
    month, day = fields.get('month'), fields.get('day')
    ordinal, weekday = fields.get('ordinal'), fields.get('weekday')
    if year is not None and month is not None and day is not None:
        ret = datetime.date(year, month, day)
    elif year is not None and ordinal is not None:
        ret = datetime.date(year, 1, 1) + datetime.timedelta(ordinal - 1)
        if ret.year != year:
            raise ParseError('day of year out of range: %r' % ordinal)
    elif (isoyear is not None and weekday is not None
          and fields.get('isoweek') is not None):
        ret = datetime.date.fromisocalendar(isoyear, fields['isoweek'],
                                            weekday + 1)
    elif year is not None and weekday is not None and \
            fields.get('week_from_sun') is not None:
        ret = _from_week(year, fields['week_from_sun'], weekday, 6)
    elif year is not None and weekday is not None and \
            fields.get('week_from_mon') is not None:
        ret = _from_week(year, fields['week_from_mon'], weekday, 0)
    else:
        raise ParseError('not enough fields to determine a date: %r'
                         % sorted(fields.keys()))
    if weekday is not None and ret.weekday() != weekday:
        raise ParseError('weekday does not match date %s' % ret.isoformat())
    if ordinal is not None and ret.timetuple().tm_yday != ordinal:
        raise ParseError('day of year %r does not match date %s'
                         % (ordinal, ret.isoformat()))
    return ret


def _resolve_hour(fields):
    hour, hour12 = fields.get('hour'), fields.get('hour12')
    ampm = fields.get('ampm')
    if hour12 is not None:
        if not 1 <= hour12 <= 12:
            raise ParseError('12-hour clock hour out of range: %r' % hour12)
        if ampm is None:
            if hour is None:
                raise ParseError('12-hour clock hour without AM/PM marker')
            if hour % 12 != hour12 % 12:
                raise ParseError('hour %r does not match 12-hour clock hour %r'
                                 % (hour, hour12))
            return hour
        resolved = hour12 % 12 + 12 * ampm
        if hour is not None and hour != resolved:
            raise ParseError('hour %r does not match %r with AM/PM marker'
                             % (hour, hour12))
        return resolved
    if hour is None:
        raise ParseError('not enough fields to determine a time: %r'
                         % sorted(fields.keys()))
    if ampm is not None and hour // 12 != ampm:
        raise ParseError('hour %r does not match AM/PM marker' % hour)
    return hour


def resolve_fields(fields):
    """Build a :class:`ParsedTime` from a dict of captured *fields*,
    raising :exc:`~logzen.common.ParseError` when the fields are
    incomplete, contradictory or out of range.
    """
    nanosecond = fields.get('nanosecond', 0)
    offset = fields.get('offset')
    if offset is not None:
        offset = datetime.timedelta(seconds=offset)
    timestamp = fields.get('timestamp')
    try:
        if timestamp is not None:
            dt = EPOCH_NAIVE + datetime.timedelta(seconds=timestamp)
            if offset is not None:
                dt += offset
        else:
            date = _resolve_date(fields)
            hour = _resolve_hour(fields)
            minute = fields.get('minute')
            if minute is None:
                raise ParseError('not enough fields to determine a time:'
                                 ' minute missing')
            second = fields.get('second', 0)
            if second == 60:
                raise ParseError('leap seconds are not supported')
            dt = datetime.datetime(date.year, date.month, date.day,
                                   hour, minute, second)
        dt = dt.replace(microsecond=nanosecond // 1000)
    except (ValueError, OverflowError) as e:
        raise ParseError('invalid timestamp fields: %s' % e)
    return ParsedTime(dt, nanosecond, offset,
                      fields.get('zulu'), fields.get('fraction_digits'))
