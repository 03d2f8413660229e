# -*- coding: utf-8 -*-
"""The directive table. Every ``%``-directive logzen understands maps
to a :class:`Directive` which knows three things:

  * the regex fragment that recognizes its text, with exactly one
    capturing group per parsed value,
  * which field of the timestamp that text sets, and
  * how to render that field back from a :class:`~datetime.datetime`.

Directives which carry an explicit UTC offset set ``is_offset``, and
those which also accept a literal ``Z`` set ``zulu``. Adding a
directive means registering one more entry below.
"""

import re
import calendar

from boltons.cacheutils import LRI, cached

from logzen.common import (SHORT_MONTHS, LONG_MONTHS,
                           SHORT_WEEKDAYS, LONG_WEEKDAYS,
                           LOWER_AM_PM, UPPER_AM_PM,
                           ParseError, UnsupportedDirective,
                           MalformedSpecification)
from logzen.formatutils import (Literal, Space, DirectiveToken,
                                tokenize_strftime)
from logzen.parsing import set_field


DIRECTIVE_MAP = {}
ALIAS_MAP = {}
UNSUPPORTED_MAP = {}


def register_directive(directive):
    DIRECTIVE_MAP[directive.key] = directive


def register_alias(key, expansion):
    ALIAS_MAP[key] = expansion


def _alternation(names):
    return '(%s)' % '|'.join([re.escape(n) for n in names])


class Directive(object):
    group_count = 1
    is_offset = False
    zulu = False
    padded = False

    def __init__(self, key):
        self.key = key

    def get_fragment(self):
        raise NotImplementedError()

    def get_leaves(self):
        "The items of this directive which own a capturing group."
        return [self]

    def absorb(self, text, fields):
        raise NotImplementedError()

    def render(self, dt, nanosecond, parsed=None):
        raise NotImplementedError()

    def __repr__(self):
        return '<%s %%%s>' % (self.__class__.__name__, self.key)


class NumericDirective(Directive):
    """A field rendered as a decimal number of a fixed width. *width*
    of ``None`` means any number of digits (the Unix timestamp).

    The *pad* mode controls the fragment: ``'zero'`` matches exactly
    *width* digits, ``'space'`` allows up to ``width - 1`` leading
    spaces followed by 1 to *width* digits, and ``'none'`` matches 1 to
    *width* digits.
    """
    padded = True

    def __init__(self, key, field, width, getter, pad='zero', convert=None):
        super(NumericDirective, self).__init__(key)
        self.field = field
        self.width = width
        self.getter = getter
        self.pad = pad
        self.convert = convert

    def with_pad(self, pad):
        if pad is None or pad == self.pad:
            return self
        return self.__class__(self.key, self.field, self.width, self.getter,
                              pad=pad, convert=self.convert)

    def get_fragment(self):
        width = self.width
        if width is None:
            return r'(\d+)'
        if self.pad == 'space':
            return r'\s{0,%d}(\d{1,%d})' % (width - 1, width)
        elif self.pad == 'none':
            return r'(\d{1,%d})' % width
        return r'(\d{%d})' % width

    def absorb(self, text, fields):
        value = int(text)
        if self.convert:
            value = self.convert(value)
        set_field(fields, self.field, value)

    def render(self, dt, nanosecond, parsed=None):
        value = self.getter(dt, nanosecond)
        if self.width is None or self.pad == 'none':
            return '%d' % value
        elif self.pad == 'space':
            return '%*d' % (self.width, value)
        return '%0*d' % (self.width, value)


class NameDirective(Directive):
    "One of a fixed list of names, e.g., month or weekday names."
    def __init__(self, key, field, names, getter, start=0):
        super(NameDirective, self).__init__(key)
        self.field = field
        self.names = tuple(names)
        self.getter = getter
        self.start = start

    def get_fragment(self):
        return _alternation(self.names)

    def absorb(self, text, fields):
        set_field(fields, self.field, self.names.index(text) + self.start)

    def render(self, dt, nanosecond, parsed=None):
        return self.names[self.getter(dt) - self.start]


class FractionDirective(Directive):
    """Fractional seconds introduced by a dot. With *digits* set, exactly
    that many digits; otherwise 3, 6 or 9 digits. An *optional* fraction
    may be absent from the text altogether.

    Without *digits*, a fraction is rendered as wide as it was parsed,
    if that's known, and otherwise in the fewest of 3, 6 or 9 digits
    which hold it exactly.
    """
    def __init__(self, key, digits=None, optional=False):
        super(FractionDirective, self).__init__(key)
        self.digits = digits
        self.optional = optional

    def get_fragment(self):
        if self.digits:
            ret = r'\.(\d{%d})' % self.digits
        else:
            ret = r'\.(\d{9}|\d{6}|\d{3})'
        if self.optional:
            ret = '(?:%s)?' % ret
        return ret

    def absorb(self, text, fields):
        if text is None:
            fields['fraction_digits'] = 0
            return
        fields['fraction_digits'] = len(text)
        set_field(fields, 'nanosecond', int(text.ljust(9, '0')))

    def render(self, dt, nanosecond, parsed=None):
        nine = '%09d' % nanosecond
        if self.digits:
            return '.' + nine[:self.digits]
        written = getattr(parsed, 'fraction_digits', None)
        if written and not nine[written:].strip('0'):
            return '.' + nine[:written]
        if not nanosecond:
            return '' if self.optional else '.000'
        elif nanosecond % 1000000 == 0:
            return '.' + nine[:3]
        elif nanosecond % 1000 == 0:
            return '.' + nine[:6]
        return '.' + nine


_offset_re = re.compile(r'^(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})$')


class OffsetDirective(Directive):
    """A numeric UTC offset, ``+hhmm`` or, with *colon*, ``+hh:mm``. With
    *allow_z* a literal ``Z`` is accepted for UTC, and with *render_z* a
    zero offset is written back as ``Z``.
    When rendering a parsed timestamp whose offset is unchanged, the
    offset is written the way it was read, ``Z`` or numeric.
    """
    is_offset = True

    def __init__(self, key, colon=False, allow_z=False, render_z=None):
        super(OffsetDirective, self).__init__(key)
        self.colon = colon
        self.allow_z = allow_z
        self.zulu = allow_z
        self.render_z = allow_z if render_z is None else render_z

    def get_fragment(self):
        sep = ':' if self.colon else ''
        numeric = r'[+-]\d{2}%s\d{2}' % sep
        if self.allow_z:
            return '(Z|%s)' % numeric
        return '(%s)' % numeric

    def absorb(self, text, fields):
        fields['zulu'] = text == 'Z'
        if text == 'Z':
            set_field(fields, 'offset', 0)
            return
        match = _offset_re.match(text)
        hours, minutes = int(match.group('hours')), int(match.group('minutes'))
        if hours > 23 or minutes > 59:
            raise ParseError('UTC offset out of range: %r' % text)
        offset = hours * 3600 + minutes * 60
        if match.group('sign') == '-':
            offset = -offset
        set_field(fields, 'offset', offset)

    def render(self, dt, nanosecond, parsed=None):
        utcoffset = dt.utcoffset()
        if utcoffset is None:
            raise ValueError('cannot render UTC offset of naive datetime: %r'
                             % dt)
        total = int(utcoffset.total_seconds())
        zulu = self.render_z and total == 0
        if parsed is not None and parsed.offset == utcoffset \
                and parsed.zulu is not None:
            # an unchanged offset is written back the way it was read
            zulu = parsed.zulu and self.allow_z
        if zulu:
            return 'Z'
        sign = '-' if total < 0 else '+'
        hours, rem = divmod(abs(total), 3600)
        sep = ':' if self.colon else ''
        return '%s%02d%s%02d' % (sign, hours, sep, rem // 60)


class Gap(Space):
    "Whitespace which must be present, as in RFC 2822 dates."
    def get_fragment(self):
        return r'\s+'


class CompositeDirective(Directive):
    """A whole standard date-time representation behind a single
    directive. Its parts parse and render as usual, but only the
    composite's own *is_offset* counts toward a pattern's flags.
    """
    is_offset = True

    def __init__(self, key, items):
        super(CompositeDirective, self).__init__(key)
        self.items = list(items)
        self.group_count = sum([i.group_count for i in self.items])

    def get_fragment(self):
        return ''.join([i.get_fragment() for i in self.items])

    def get_leaves(self):
        ret = []
        for item in self.items:
            if item.group_count:
                ret.extend(item.get_leaves())
        return ret

    def render(self, dt, nanosecond, parsed=None):
        return ''.join([i.render(dt, nanosecond, parsed) for i in self.items])


def _weekday_from_sun(value):
    if value > 6:
        raise ParseError('weekday number out of range: %r' % value)
    return (value + 6) % 7


def _iso_weekday(value):
    if not 1 <= value <= 7:
        raise ParseError('ISO weekday number out of range: %r' % value)
    return value - 1


def _ordinal(dt):
    return dt.timetuple().tm_yday


_ND = NumericDirective
NUMERIC_DIRECTIVES = [
    _ND('Y', 'year', 4, lambda dt, ns: dt.year),
    _ND('C', 'year_div_100', 2, lambda dt, ns: dt.year // 100),
    _ND('y', 'year_mod_100', 2, lambda dt, ns: dt.year % 100),
    _ND('G', 'isoyear', 4, lambda dt, ns: dt.isocalendar()[0]),
    _ND('g', 'isoyear_mod_100', 2, lambda dt, ns: dt.isocalendar()[0] % 100),
    _ND('m', 'month', 2, lambda dt, ns: dt.month),
    _ND('d', 'day', 2, lambda dt, ns: dt.day),
    _ND('e', 'day', 2, lambda dt, ns: dt.day, pad='space'),
    _ND('U', 'week_from_sun', 2,
        lambda dt, ns: (_ordinal(dt) - (dt.weekday() + 1) % 7 + 6) // 7),
    _ND('W', 'week_from_mon', 2,
        lambda dt, ns: (_ordinal(dt) - dt.weekday() + 6) // 7),
    _ND('V', 'isoweek', 2, lambda dt, ns: dt.isocalendar()[1]),
    _ND('w', 'weekday', 1, lambda dt, ns: (dt.weekday() + 1) % 7,
        convert=_weekday_from_sun),
    _ND('u', 'weekday', 1, lambda dt, ns: dt.isoweekday(),
        convert=_iso_weekday),
    _ND('j', 'ordinal', 3, lambda dt, ns: _ordinal(dt)),
    _ND('H', 'hour', 2, lambda dt, ns: dt.hour),
    _ND('k', 'hour', 2, lambda dt, ns: dt.hour, pad='space'),
    _ND('I', 'hour12', 2, lambda dt, ns: dt.hour % 12 or 12),
    _ND('l', 'hour12', 2, lambda dt, ns: dt.hour % 12 or 12, pad='space'),
    _ND('M', 'minute', 2, lambda dt, ns: dt.minute),
    _ND('S', 'second', 2, lambda dt, ns: dt.second),
    _ND('f', 'nanosecond', 9, lambda dt, ns: ns),
    _ND('s', 'timestamp', None,
        lambda dt, ns: calendar.timegm(dt.utctimetuple()))]

_SHORT_MONTH = NameDirective('b', 'month', SHORT_MONTHS,
                             lambda dt: dt.month, start=1)
_SHORT_WEEKDAY = NameDirective('a', 'weekday', SHORT_WEEKDAYS,
                               lambda dt: dt.weekday())
FIXED_DIRECTIVES = [
    _SHORT_MONTH,
    NameDirective('h', 'month', SHORT_MONTHS, lambda dt: dt.month, start=1),
    NameDirective('B', 'month', LONG_MONTHS, lambda dt: dt.month, start=1),
    _SHORT_WEEKDAY,
    NameDirective('A', 'weekday', LONG_WEEKDAYS, lambda dt: dt.weekday()),
    NameDirective('P', 'ampm', LOWER_AM_PM, lambda dt: dt.hour // 12),
    NameDirective('p', 'ampm', UPPER_AM_PM, lambda dt: dt.hour // 12),
    FractionDirective('.f'),
    FractionDirective('.3f', digits=3),
    FractionDirective('.6f', digits=6),
    FractionDirective('.9f', digits=9),
    OffsetDirective('z'),
    OffsetDirective(':z', colon=True),
    OffsetDirective('#z', allow_z=True),
    OffsetDirective('#:z', colon=True, allow_z=True)]


def _num(key):
    for nd in NUMERIC_DIRECTIVES:
        if nd.key == key:
            return nd
    raise LookupError(key)


_TWO_DIGIT_DAY = _num('d')
RFC2822 = CompositeDirective('#c', [_SHORT_WEEKDAY, Literal(','), Gap(' '),
                                    _TWO_DIGIT_DAY, Gap(' '),
                                    _SHORT_MONTH, Gap(' '),
                                    _num('Y'), Gap(' '),
                                    _num('H'), Literal(':'), _num('M'),
                                    Literal(':'), _num('S'), Literal(' '),
                                    OffsetDirective('z')])
RFC3339 = CompositeDirective('+', [_num('Y'), Literal('-'), _num('m'),
                                   Literal('-'), _TWO_DIGIT_DAY, Literal('T'),
                                   _num('H'), Literal(':'), _num('M'),
                                   Literal(':'), _num('S'),
                                   FractionDirective('.f', optional=True),
                                   OffsetDirective('#:z', colon=True,
                                                   allow_z=True,
                                                   render_z=False)])

for _d in NUMERIC_DIRECTIVES + FIXED_DIRECTIVES + [RFC2822, RFC3339]:
    register_directive(_d)
del _d

register_alias('D', '%m/%d/%y')
register_alias('x', '%m/%d/%y')
register_alias('F', '%Y-%m-%d')
register_alias('v', '%e-%b-%Y')
register_alias('R', '%H:%M')
register_alias('T', '%H:%M:%S')
register_alias('X', '%H:%M:%S')
register_alias('r', '%I:%M:%S %p')
register_alias('c', '%a %b %e %H:%M:%S %Y')

UNSUPPORTED_MAP.update({
    'Z': 'time zone names are ambiguous and cannot be parsed',
    '3f': 'fractional seconds without a dot are not supported',
    '6f': 'fractional seconds without a dot are not supported',
    '9f': 'fractional seconds without a dot are not supported'})

_SPECIAL_TOKENS = {'%': Literal('%'), 't': Space('\t'), 'n': Space('\n')}


def _resolve_token(fstr, token):
    key = token.key
    directive = DIRECTIVE_MAP.get(key)
    if directive is not None:
        if token.pad and not directive.padded:
            raise MalformedSpecification(fstr, 'padding flag not allowed on'
                                         ' directive %r' % token.text)
        if token.pad:
            directive = directive.with_pad(token.pad)
        return [directive]
    if key in UNSUPPORTED_MAP:
        raise UnsupportedDirective(fstr, 'unsupported directive %r: %s'
                                   % (token.text, UNSUPPORTED_MAP[key]))
    if token.flag or token.mod:
        raise UnsupportedDirective(fstr, 'unrecognized directive %r'
                                   % token.text)
    if key in ALIAS_MAP:
        return _resolve(fstr, ALIAS_MAP[key])
    if key in _SPECIAL_TOKENS:
        return [_SPECIAL_TOKENS[key]]
    raise UnsupportedDirective(fstr, 'unrecognized directive %r' % token.text)


def _resolve(fstr, sub_fstr):
    ret = []
    for token in tokenize_strftime(sub_fstr):
        if isinstance(token, DirectiveToken):
            ret.extend(_resolve_token(fstr, token))
        else:
            ret.append(token)
    return ret


@cached(LRI(256))
def resolve_format(fstr):
    """Decompose *fstr* into a tuple of :class:`Literal`, :class:`Space`
    and :class:`Directive` items, expanding aliases such as ``%T``.

    Raises :exc:`~logzen.common.MalformedSpecification` for text that
    isn't a well-formed format and
    :exc:`~logzen.common.UnsupportedDirective` for directives without a
    mapping.
    """
    return tuple(_resolve(fstr, fstr))


def render_items(items, dt, nanosecond, parsed=None):
    return ''.join([item.render(dt, nanosecond, parsed) for item in items])
