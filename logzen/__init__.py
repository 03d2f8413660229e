# -*- coding: utf-8 -*-

__version__ = '0.1.0'

from logzen.common import (LogzenError,
                           CompileError,
                           UnsupportedDirective,
                           MalformedSpecification,
                           ParseError)
from logzen.context import get_context, set_context, note

from logzen.compiler import Pattern, compile_format, format_datetime
from logzen.patterns import PatternSet, build_pattern_set, DEFAULT_FORMATS
from logzen.rewriter import rewrite, rewrite_lines
from logzen.config import Config, parse_tz
