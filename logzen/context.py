# -*- coding: utf-8 -*-
"""The diagnostic channel. Conditions that logzen recovers from, such
as a timestamp which matched a pattern but failed to parse, are
reported with :func:`note` instead of being raised. Notes go to every
registered note handler, and are dropped when there are none.
"""

LOGZEN_CONTEXT = None


def get_context():
    if not LOGZEN_CONTEXT:
        set_context(LogzenContext())

    return LOGZEN_CONTEXT


def set_context(context):
    global LOGZEN_CONTEXT

    LOGZEN_CONTEXT = context

    return context


def note(name, message, *a, **kw):
    return get_context().note(name, message, *a, **kw)


class LogzenContext(object):
    def __init__(self, **kwargs):
        self.note_handlers = list(kwargs.pop('note_handlers', None) or [])
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r'
                            % list(kwargs.keys()))

    def note(self, name, message, *a, **kw):
        """A hook for recording the error conditions that need to be
        robustly skipped over. *message* is %-formatted with *a* only
        if there are handlers to see it.
        """
        if not self.note_handlers:
            return
        if a:
            try:
                message = message % a
            except Exception:
                pass
        for nh in self.note_handlers:
            nh(name, message)
        return

    def add_note_handler(self, handler):
        if not callable(handler):
            raise TypeError('expected callable note handler, not %r'
                            % handler)
        if handler not in self.note_handlers:
            self.note_handlers.append(handler)

    def remove_note_handler(self, handler):
        try:
            self.note_handlers.remove(handler)
        except ValueError:
            pass
