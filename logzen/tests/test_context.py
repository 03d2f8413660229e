# -*- coding: utf-8 -*-

import pytest

from logzen import context
from logzen.context import get_context, set_context, note, LogzenContext


def test_note_without_handlers():
    ctx = LogzenContext()
    assert ctx.note('anything', 'goes %s', 'nowhere') is None


def test_note_formatting():
    ctx = LogzenContext()
    notes = []
    ctx.add_note_handler(lambda name, message: notes.append((name, message)))

    ctx.note('first', 'plain message')
    ctx.note('second', 'matched %r at %d', 'text', 3)
    # a bad format leaves the message as-is rather than raising
    ctx.note('third', 'only %s %s', 'one')

    assert notes == [('first', 'plain message'),
                     ('second', "matched 'text' at 3"),
                     ('third', 'only %s %s')]


def test_handler_registration():
    ctx = LogzenContext()
    notes = []
    handler = lambda name, message: notes.append(name)

    with pytest.raises(TypeError):
        ctx.add_note_handler('not callable')

    ctx.add_note_handler(handler)
    ctx.add_note_handler(handler)
    assert ctx.note_handlers == [handler]

    ctx.note('once', 'hi')
    ctx.remove_note_handler(handler)
    ctx.remove_note_handler(handler)
    ctx.note('twice', 'hi')
    assert notes == ['once']

    with pytest.raises(TypeError):
        LogzenContext(handlers=[handler])


def test_set_context():
    orig = get_context()
    notes = []
    ctx = LogzenContext(note_handlers=[lambda n, m: notes.append(m)])
    try:
        assert set_context(ctx) is ctx
        assert get_context() is ctx
        note('module_level', 'routed to %s', 'ctx')
    finally:
        set_context(orig)
    assert context.LOGZEN_CONTEXT is orig
    assert notes == ['routed to ctx']
