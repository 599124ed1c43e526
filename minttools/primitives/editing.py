"""
Editing primitives. These are the only code that touches the EditorHandle.

Positions and counts are decimal numbers. Where a count may be negative, it reaches
backwards from the point instead of forwards. Everything is clamped to the buffer,
so a macro can never address a position that isn't there.
"""

from .arithmetic import int_value
from .registry import STANDARD

def _editor(ctx):
	return ctx.host.editor

def _span(editor, count:str):
	""" The (start, stop) between point and count characters away from it. """
	point, offset = editor.get_point(), int_value(count)
	other = min(max(0, point + offset), editor.size())
	return (point, other) if other >= point else (other, point)

@STANDARD.register('is')
def insert_string(ctx, text, result):
	""" Insert text at the point, which moves past it. The result is the second argument. """
	editor = _editor(ctx)
	editor.insert(editor.get_point(), text)
	return result

@STANDARD.register('pt')
def point(ctx):
	return str(_editor(ctx).get_point())

@STANDARD.register('sp')
def set_point(ctx, position):
	editor = _editor(ctx)
	editor.set_point(min(max(0, int_value(position)), editor.size()))

@STANDARD.register('mv')
def move_point(ctx, count):
	editor = _editor(ctx)
	editor.set_point(min(max(0, editor.get_point() + int_value(count)), editor.size()))

@STANDARD.register('dm')
def delete_count(ctx, count):
	editor = _editor(ctx)
	editor.delete(*_span(editor, count))

@STANDARD.register('rm')
def read_count(ctx, count):
	editor = _editor(ctx)
	return editor.read(*_span(editor, count))

@STANDARD.register('bs')
def buffer_size(ctx):
	return str(_editor(ctx).size())

@STANDARD.register('ow')
def output_write(ctx, text):
	_editor(ctx).write_output(text)

@STANDARD.register('an')
def announce(ctx, text):
	_editor(ctx).write_status(text)

@STANDARD.register('it')
def input_token(ctx):
	""" The next input event, or nothing if none is waiting. """
	return _editor(ctx).read_input()
