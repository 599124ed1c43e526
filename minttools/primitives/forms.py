"""
Primitives which define, inspect, and consume forms.

A note on rescanning: in this implementation, text is never re-read as source just
because a primitive returned it. Defining with `ds` compiles its value, and `ex` compiles
and evaluates a string explicitly. To store text exactly as given, use `dt`.

The form pointer primitives (go, gn, rs, fm) work on a form's content: its literal
text, or its canonical source if it contains invocations or argument references.
"""

from ..compiling.body import literal, parameterize
from ..compiling.compiler import compile_body
from ..runtime.dictionary import Macro
from ..runtime.engine import Redirect, Rescan
from ..support.interfaces import CompileError, PrimitiveError
from .arithmetic import int_value
from .registry import STANDARD

def _compile(ctx, text):
	try: return compile_body(text)
	except CompileError as ex:
		raise PrimitiveError(ctx.name, ex.complaint()) from ex

@STANDARD.register('ds')
def define_string(ctx, name, text):
	""" Compile the text and define it under the name, discarding any previous definition. """
	ctx.engine.dictionary.define(name, Macro(name, _compile(ctx, text)))

@STANDARD.register('dt')
def define_text(ctx, name, text):
	""" Define the name as exactly this text, with no compiling. """
	ctx.engine.dictionary.define(name, Macro(name, literal(text)))

@STANDARD.register('gs')
def get_string(ctx, name, *args):
	return Redirect(name, args)

@STANDARD.register('es')
def erase_strings(ctx, *names):
	dictionary = ctx.engine.dictionary
	for name in names: dictionary.undefine(name)

@STANDARD.register('n?', lazy=True)
def name_exists(ctx, name, then, otherwise):
	return then if ctx.engine.dictionary.macro((yield name)) is not None else otherwise

@STANDARD.register('ls')
def list_strings(ctx, separator, prefix):
	return separator.join(ctx.engine.dictionary.names(prefix))

@STANDARD.register('hk')
def hook(ctx, *names):
	"""
	<hk,X1,X2,...> finds the first of the names that is a defined form, and invokes it
	with the remaining arguments. If none is defined, the result is empty.
	"""
	dictionary = ctx.engine.dictionary
	for i, name in enumerate(names):
		if dictionary.macro(name) is not None: return Redirect(name, names[i+1:])

@STANDARD.register('mp')
def make_parameters(ctx, name, *needles):
	""" Replace each occurrence of the Nth needle in the form's text with a reference to argument N. """
	dictionary = ctx.engine.dictionary
	macro = dictionary.macro(name)
	if macro is not None: dictionary.define(name, Macro(name, parameterize(macro.body, needles)))

def _read_form(ctx, name, count, at_end):
	dictionary = ctx.engine.dictionary
	macro = dictionary.macro(name)
	if macro is None: return ''
	content = macro.content
	position = min(dictionary.cursor(name), len(content))
	if position >= len(content): return at_end
	dictionary.set_cursor(name, position + count)
	return content[position:position+count]

@STANDARD.register('go')
def get_one(ctx, name, at_end):
	""" The next character of the form, or the second argument if the pointer is at the end. """
	return _read_form(ctx, name, 1, at_end)

@STANDARD.register('gn')
def get_n(ctx, name, count, at_end):
	return _read_form(ctx, name, max(0, int_value(count)), at_end)

@STANDARD.register('rs')
def reset_string(ctx, name):
	ctx.engine.dictionary.set_cursor(name, 0)

@STANDARD.register('fm')
def first_match(ctx, name, needle, not_found):
	"""
	Search the form, from its pointer, for the needle. If found, return the text
	before it and move the pointer past it. If the needle is empty or absent,
	return the third argument. If there's no such form, return nothing.
	"""
	dictionary = ctx.engine.dictionary
	macro = dictionary.macro(name)
	if macro is None: return ''
	if not needle: return not_found
	content = macro.content
	position = min(dictionary.cursor(name), len(content))
	found = content.find(needle, position)
	if found < 0: return not_found
	dictionary.set_cursor(name, found + len(needle))
	return content[position:found]

@STANDARD.register('ex')
def execute(ctx, text, *args):
	""" Compile the text and evaluate it as if it were the body of a macro given these arguments. """
	return Rescan(_compile(ctx, text), args)

@STANDARD.register('qt', lazy=True)
def quote(ctx, thunk):
	""" The argument's source text, not evaluated. """
	return thunk.text
