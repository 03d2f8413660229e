# -*- coding: utf-8 -*-
"""Compiles strftime-style format strings into :class:`Pattern`
objects, which can find a matching timestamp anywhere in a line of
text, and parse it back out.

>>> pattern = compile_format('%Y-%m-%dT%H:%M:%SZ')
>>> pattern.is_naive, pattern.accepts_zulu
(True, True)
>>> pattern.search('INFO 2023-06-01T12:00:00Z hi').group()
'2023-06-01T12:00:00Z'
"""

import re

from boltons.cacheutils import LRI, cached

from logzen.common import ParseError
from logzen.context import note
from logzen.directives import resolve_format, render_items
from logzen.parsing import resolve_fields


__all__ = ['Pattern', 'compile_format', 'format_datetime']


class Pattern(object):
    """The compiled form of a format string. Patterns are built by
    :func:`compile_format` and are not modified afterward.

    Args:
        source_format (str): The format string the pattern came from.
        matcher: Compiled, unanchored regular expression, with one
            capturing group per item in *leaves*.
        leaves (list): The directives which own the capturing groups, in
            group order.
        is_naive (bool): ``True`` when no directive conveys a UTC
            offset, in which case the text is taken to be UTC.
        accepts_zulu (bool): ``True`` when the format ends in a literal
            ``Z`` or has a directive which accepts ``Z`` for UTC.
    """
    def __init__(self, source_format, matcher, leaves, is_naive, accepts_zulu):
        self.source_format = source_format
        self.matcher = matcher
        self.leaves = tuple(leaves)
        self.is_naive = is_naive
        self.accepts_zulu = accepts_zulu

    def search(self, text):
        return self.matcher.search(text)

    def parse_match(self, match):
        "Returns a :class:`~logzen.parsing.ParsedTime` for *match*."
        fields = {}
        for leaf, text in zip(self.leaves, match.groups()):
            leaf.absorb(text, fields)
        return resolve_fields(fields)

    def parse(self, text):
        match = self.matcher.fullmatch(text)
        if match is None:
            raise ParseError('%r does not match format %r'
                             % (text, self.source_format))
        return self.parse_match(match)

    def __repr__(self):
        cn = self.__class__.__name__
        return ('<%s %r naive=%r zulu=%r>'
                % (cn, self.source_format, self.is_naive, self.accepts_zulu))


@cached(LRI(256))
def compile_format(fmt):
    """Compile *fmt* into a :class:`Pattern`. The result is cached, so
    compiling the same format twice returns the same Pattern.

    Raises :exc:`~logzen.common.UnsupportedDirective` or
    :exc:`~logzen.common.MalformedSpecification`, both subtypes of
    :exc:`~logzen.common.CompileError`.
    """
    is_naive = True
    accepts_zulu = fmt.endswith('Z') and not fmt.endswith('%Z')
    fragments, leaves = [], []
    for item in resolve_format(fmt):
        fragments.append(item.get_fragment())
        if item.group_count:
            leaves.extend(item.get_leaves())
        if getattr(item, 'is_offset', False):
            is_naive = False
        if getattr(item, 'zulu', False):
            accepts_zulu = True
    regex = ''.join(fragments)
    note('compile', 'format %r compiled to regex %r', fmt, regex)
    return Pattern(fmt, re.compile(regex), leaves, is_naive, accepts_zulu)


def format_datetime(fmt, dt, nanosecond=None, parsed=None):
    """Render the aware :class:`~datetime.datetime` *dt* according to
    *fmt*. *nanosecond* overrides the fraction of the second, which
    otherwise comes from *parsed* or ``dt.microsecond``.

    Passing the :class:`~logzen.parsing.ParsedTime` that *dt* was
    converted from keeps the fraction width and, if the offset is the
    same, the ``Z`` or numeric offset of the original text.
    """
    if nanosecond is None:
        if parsed is not None:
            nanosecond = parsed.nanosecond
        else:
            nanosecond = dt.microsecond * 1000
    return render_items(resolve_format(fmt), dt, nanosecond, parsed)
