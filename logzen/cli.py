# -*- coding: utf-8 -*-
"""The ``logzen`` command: rewrites the timestamps in a log file, or
stdin, to the local time zone.

  $ echo 'INFO 2023-06-01T12:00:00Z started' | logzen --tz=-04:00
  INFO 2023-06-01T08:00:00-04:00 started
"""

import sys
import argparse

from logzen import __version__
from logzen.common import CompileError
from logzen.config import Config, read_format_file
from logzen.context import get_context
from logzen.emitters import StreamEmitter, FileEmitter
from logzen.patterns import build_pattern_set
from logzen.rewriter import rewrite_lines
from logzen.utils import (open_input, iter_lines, check_encoding_settings,
                          EncodingLookupError, ErrorBehaviorLookupError)


IO_ERRORS = 'surrogateescape'
VERBOSE_NOTES = ('compile',)


def create_parser():
    prs = argparse.ArgumentParser(
        prog='logzen',
        description='Rewrite timestamps embedded in log lines to the local'
        ' time zone.')
    prs.add_argument('input', nargs='?', default=None,
                     help='log file to read (defaults to stdin)')
    prs.add_argument('-f', '--format', dest='formats', action='append',
                     default=[], metavar='FORMAT',
                     help='strftime-style timestamp format, tried before the'
                     ' built-in formats; may be repeated')
    prs.add_argument('--format-file', dest='format_files', action='append',
                     default=[], metavar='PATH',
                     help='file with one format per line')
    prs.add_argument('--tz', default=None,
                     help='target time zone: local (default), UTC, an offset'
                     ' like +05:30, or an IANA name')
    prs.add_argument('--no-defaults', dest='use_defaults',
                     action='store_false',
                     help='only try the formats given on the command line')
    prs.add_argument('--encoding', default=None,
                     help='input and output encoding (default: utf-8)')
    prs.add_argument('-o', '--output', default=None, metavar='PATH',
                     help='write to PATH instead of stdout')
    prs.add_argument('-v', '--verbose', action='store_true',
                     help='report the regex compiled for each format')
    prs.add_argument('--version', action='version',
                     version='%(prog)s ' + __version__)
    return prs


def _make_note_handler(emitter, verbose):
    def handle_note(name, message):
        if name in VERBOSE_NOTES and not verbose:
            return
        emitter.emit_note(name, message)
    return handle_note


def main(argv=None, environ=None, stdin=None, stdout=None, stderr=None):
    """Run logzen with *argv* (``sys.argv[1:]`` by default). The stream
    arguments are binary streams, defaulting to those of :mod:`sys`.
    Returns the process exit code.
    """
    prs = create_parser()
    args = prs.parse_args(argv)
    stdout = stdout if stdout is not None else 'stdout'
    stderr = stderr if stderr is not None else 'stderr'

    err_emtr = StreamEmitter(stderr, encoding='utf-8', errors='backslashreplace')
    formats = list(args.formats)
    try:
        for path in args.format_files:
            formats.extend(read_format_file(path))
    except (IOError, OSError) as e:
        err_emtr.emit_note('error', 'could not read format file: %s' % e)
        return 1
    config = Config.from_env(environ, formats=formats, tz=args.tz,
                             encoding=args.encoding,
                             use_defaults=args.use_defaults,
                             verbose=args.verbose)

    context = get_context()
    note_handler = _make_note_handler(err_emtr, config.verbose)
    context.add_note_handler(note_handler)
    try:
        return _run(args, config, err_emtr, stdin, stdout)
    finally:
        context.remove_note_handler(note_handler)


def _run(args, config, err_emtr, stdin, stdout):
    try:
        tz = config.get_tzinfo()
    except ValueError as ve:
        err_emtr.emit_note('error', str(ve))
        return 2
    try:
        if config.use_defaults:
            patterns = build_pattern_set(config.formats)
        else:
            patterns = build_pattern_set(config.formats, default_formats=())
    except CompileError as ce:
        err_emtr.emit_note('error', 'invalid format %r: %s' % (ce.fmt, ce.reason))
        return 2
    try:
        check_encoding_settings(config.encoding, IO_ERRORS)
    except (EncodingLookupError, ErrorBehaviorLookupError) as le:
        err_emtr.emit_note('error', 'invalid encoding: %s' % le)
        return 2

    # -o is only truncated once the input is open
    try:
        infile = open_input(args.input, encoding=config.encoding,
                            errors=IO_ERRORS, stdin=stdin)
    except (IOError, OSError) as e:
        err_emtr.emit_note('error', 'could not open input: %s' % e)
        return 1

    out_emtr = None
    try:
        try:
            if args.output:
                out_emtr = FileEmitter(args.output, encoding=config.encoding,
                                       errors=IO_ERRORS, overwrite=True,
                                       sep='\n')
            else:
                out_emtr = StreamEmitter(stdout, encoding=config.encoding,
                                         errors=IO_ERRORS, sep='\n')
        except (IOError, OSError) as e:
            err_emtr.emit_note('error', 'could not open output: %s' % e)
            return 1
        for line in rewrite_lines(iter_lines(infile), patterns, tz):
            out_emtr.emit_entry(line)
    finally:
        if args.input is None or args.input == '-':
            infile.detach()
        else:
            infile.close()
        if isinstance(out_emtr, FileEmitter):
            out_emtr.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
