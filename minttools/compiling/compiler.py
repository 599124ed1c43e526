"""
The macro compiler turns source text into compiled bodies.

Compile time and evaluation time are strictly separate: nothing in this module ever
evaluates anything, so defining a macro can never cause its side effects. Argument
references are resolved to positions but not checked against any arity, because a
macro may be invoked with fewer or more arguments than its references assume.

A library file holds any number of definitions:

	; comments start in column zero
	:GREET
	Hello, [0]!

Each `:NAME` header line begins a definition, whose body runs to the next header.
Within a library body, raw tabs and line-breaks are layout and comment lines vanish,
so long macros can be laid out readably. Escape a character to keep it literally.
"""

import logging, re
from typing import NamedTuple, Optional, Iterator, Iterable

from .body import Body, Literal, ArgRef, Invocation, merge_literals, unparse
from ..scanning import interface
from ..scanning.engine import IterableScanner
from ..support.failureprone import SourceText
from ..support.interfaces import CompileError

logger = logging.getLogger(__name__)

_NAME = re.compile('[^\\s%s]{1,%d}'%(re.escape(interface.ACTIVE), interface.MAX_NAME_LENGTH))

class Definition(NamedTuple):
	name: str
	body: Body
	position: int # of the header, for error messages

class _Pending(NamedTuple):
	""" An invocation whose closing bracket has not been seen yet. """
	outer: list
	parts: list
	position: int

def compile_body(text:str, *, start:int=0, stop:Optional[int]=None, layout:bool=False, filename:str=None, source:Optional[SourceText]=None) -> Body:
	"""
	Compile (a range of) text as a single body.
	Nesting is handled with an explicit stack, so deeply nested text is no problem.
	"""
	if source is None: source = SourceText(text, filename=filename)
	yy = IterableScanner(text, start=start, stop=stop, layout=layout, source=source)
	stack = []
	current = []
	for kind, semantic in yy:
		if kind == interface.TEXT or kind == interface.ESCAPED:
			current.append(Literal(semantic))
		elif kind == interface.REF:
			current.append(ArgRef(semantic))
		elif kind == interface.COMMA:
			if stack:
				stack[-1].parts.append(Body(merge_literals(current)))
				current = []
			else: current.append(Literal(interface.SEPARATOR))
		elif kind == interface.OPEN_TOKEN:
			stack.append(_Pending(current, [], yy.left))
			current = []
		elif kind == interface.CLOSE_TOKEN:
			pending = stack.pop()
			pending.parts.append(Body(merge_literals(current)))
			name, *args = pending.parts
			if not name.segments:
				raise CompileError("Invocation without a macro name", pending.position, yy.right - pending.position, source)
			current = pending.outer
			current.append(Invocation(name, tuple(args)))
		else: assert False, kind
	return Body(merge_literals(current))

def valid_name(name:str) -> bool:
	return _NAME.fullmatch(name) is not None

def each_definition(text:str, filename:str=None) -> Iterator[Definition]:
	"""
	Lazily compile the definitions in a library file, in order.
	The laziness matters: a loader that installs each definition as it comes
	keeps everything before a broken definition, and nothing from it onward.
	"""
	source = SourceText(text, filename=filename)
	pending = None
	for start, stop, line in source.each_line():
		if line.startswith(interface.HEADER):
			if pending is not None: yield _finish(text, source, pending, start)
			name = line[1:].strip()
			if not valid_name(name):
				raise CompileError("Malformed definition header", start, len(line.rstrip('\r\n')), source)
			pending = name, start, stop
		elif pending is None and line.strip() and not line.startswith(interface.COMMENT):
			raise CompileError("Text outside of any definition", start, len(line.rstrip('\r\n')), source)
	if pending is not None: yield _finish(text, source, pending, len(text))

def _finish(text, source, pending, stop) -> Definition:
	name, position, body_start = pending
	body = compile_body(text, start=body_start, stop=stop, layout=True, source=source)
	logger.debug("Compiled %r from %s", name, source.filename or 'text')
	return Definition(name, body, position)

def compile_source(text:str, filename:str=None) -> list[Definition]:
	""" Compile a whole library at once. Unlike loading, any error means no result at all. """
	return list(each_definition(text, filename))

def render_source(definitions:Iterable[tuple[str, Body]]) -> str:
	"""
	The inverse of compile_source: library text for (name, body) pairs.
	Each body comes out on a single line, with its own line-breaks escaped.
	"""
	return ''.join(interface.HEADER + name + '\n' + unparse(body, layout=True) + '\n' for name, body in definitions)
