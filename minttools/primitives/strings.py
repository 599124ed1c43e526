"""
String comparisons and small conveniences.

The comparisons are lazy: they yield their two comparands for the engine to evaluate,
and hand back whichever branch was chosen to be evaluated in the caller's frame. The
other branch is never evaluated at all, which is what makes recursion through a
conditional terminate.
"""

from .registry import STANDARD

@STANDARD.register('==', lazy=True)
def equal(ctx, x, y, then, otherwise):
	return then if (yield x) == (yield y) else otherwise

@STANDARD.register('!=', lazy=True)
def not_equal(ctx, x, y, then, otherwise):
	return then if (yield x) != (yield y) else otherwise

@STANDARD.register('a?', lazy=True)
def alphabetic(ctx, x, y, then, otherwise):
	""" Alphabetically ordered: <a?,X,Y,A,B> is A when X sorts no later than Y. """
	return then if (yield x) <= (yield y) else otherwise

@STANDARD.register('nc')
def number_of_characters(ctx, text):
	return str(len(text))

@STANDARD.register('sa')
def sort_ascending(ctx, *items):
	return ','.join(sorted(items))

@STANDARD.register('si')
def string_index(ctx, form, text):
	"""
	Translate each character of the text through the named form, using the character's
	code as an index. Characters beyond the form's end, or all of them if there's no
	such form, come through unchanged.
	"""
	macro = ctx.engine.dictionary.macro(form)
	if macro is None: return text
	table = macro.content
	return ''.join(table[ord(c)] if ord(c) < len(table) else c for c in text)

@STANDARD.register('nl')
def newline(ctx):
	return '\n'
