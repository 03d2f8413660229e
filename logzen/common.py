# -*- coding: utf-8 -*-
"""Name tables and exception types shared across logzen. Month and
weekday names are the fixed English set; no locale is consulted.
"""

SHORT_MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
                'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')
LONG_MONTHS = ('January', 'February', 'March', 'April', 'May', 'June',
               'July', 'August', 'September', 'October', 'November',
               'December')
SHORT_WEEKDAYS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')
LONG_WEEKDAYS = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday',
                 'Saturday', 'Sunday')
LOWER_AM_PM = ('am', 'pm')
UPPER_AM_PM = ('AM', 'PM')


class LogzenError(Exception):
    pass


class CompileError(LogzenError):
    """Raised when a format string cannot be turned into a
    :class:`~logzen.compiler.Pattern`. *fmt* is the offending format
    and *reason* says what went wrong with it.
    """
    def __init__(self, fmt, reason):
        self.fmt = fmt
        self.reason = reason
        super(CompileError, self).__init__('%s (in format %r)' % (reason, fmt))


class UnsupportedDirective(CompileError):
    pass


class MalformedSpecification(CompileError):
    pass


class ParseError(LogzenError):
    pass
