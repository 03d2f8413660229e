# -*- coding: utf-8 -*-
"""Decomposes strftime-style format strings into literal text,
whitespace runs and directive tokens. Looking the directives up is
left to :mod:`logzen.directives`.
"""

import re
from collections import namedtuple

from logzen.common import MalformedSpecification


_directive_re = re.compile(r'%(?P<flag>[-_0#]?)'       # padding or alternate form
                           r'(?P<mod>:|\.[369]?|[369])?'
                           r'(?P<char>.?)', re.DOTALL)
_space_re = re.compile(r'(\s+)')

_PAD_FLAGS = {'-': 'none', '_': 'space', '0': 'zero'}


class Literal(str):
    "Verbatim text from a format string."
    group_count = 0

    def get_fragment(self):
        return re.escape(self)

    def render(self, dt, nanosecond, parsed=None):
        return str(self)

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, str.__repr__(self))


class Space(Literal):
    "A run of whitespace, which matches any amount of whitespace."
    def get_fragment(self):
        return r'\s*'


class DirectiveToken(namedtuple('DirectiveToken', 'text flag mod char')):
    """One ``%``-directive as written, e.g., ``%_d`` or ``%.3f``. The
    *key* is what gets looked up in the directive table; padding flags
    are not part of it, but the alternate-form ``#`` flag is.
    """
    @property
    def key(self):
        prefix = '#' if self.flag == '#' else ''
        return prefix + (self.mod or '') + self.char

    @property
    def pad(self):
        return _PAD_FLAGS.get(self.flag)


def split_literal(text):
    ret = []
    for seg in _space_re.split(text):
        if not seg:
            continue
        if seg.isspace():
            ret.append(Space(seg))
        else:
            ret.append(Literal(seg))
    return ret


def tokenize_strftime(fstr):
    """Split *fstr* into a list of :class:`Literal`, :class:`Space` and
    :class:`DirectiveToken` items, in order.

    >>> tokenize_strftime('%H:%M')
    [DirectiveToken(text='%H', flag='', mod=None, char='H'), Literal(':'), DirectiveToken(text='%M', flag='', mod=None, char='M')]

    A ``%`` with nothing after it raises
    :exc:`~logzen.common.MalformedSpecification`.
    """
    ret, prev_end = [], 0
    for match in _directive_re.finditer(fstr):
        start, end = match.start(), match.end()
        if prev_end < start:
            ret.extend(split_literal(fstr[prev_end:start]))
        prev_end = end
        flag, mod, char = match.group('flag', 'mod', 'char')
        if not char:
            raise MalformedSpecification(fstr, 'incomplete directive %r at'
                                         ' position %d' % (match.group(), start))
        ret.append(DirectiveToken(match.group(), flag, mod, char))
    ret.extend(split_literal(fstr[prev_end:]))
    return ret
