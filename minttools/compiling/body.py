"""
Compiled bodies.

A body is an immutable sequence of segments. Each segment is literal text, a positional
reference to one of the invoking frame's arguments, or a nested invocation. An invocation
holds a body for its name (names may be computed) and a body for each argument.

Because everything here is a tuple, a body can never be changed in place. Redefining a
macro means building a new body and swapping the dictionary entry, so anybody still
holding the old body (such as a frame in the middle of evaluating it) is unaffected.
"""

from typing import NamedTuple, Iterable

from ..scanning.interface import ACTIVE, LAYOUT, OPEN, CLOSE, SEPARATOR, ESCAPE, COMMENT, HEADER

class Literal(NamedTuple):
	text: str

class ArgRef(NamedTuple):
	index: int # zero-based

class Invocation(NamedTuple):
	name: "Body"
	args: tuple # of Body

class Body(NamedTuple):
	segments: tuple

	def is_literal(self) -> bool:
		return all(type(s) is Literal for s in self.segments)

	def literal_text(self) -> str:
		assert self.is_literal()
		return ''.join(s.text for s in self.segments)

EMPTY = Body(())

def literal(text:str) -> Body:
	return Body((Literal(text),)) if text else EMPTY

def merge_literals(segments:Iterable) -> tuple:
	""" Adjacent literal runs coalesce; empty ones vanish. """
	result = []
	for s in segments:
		if type(s) is Literal:
			if not s.text: continue
			if result and type(result[-1]) is Literal:
				result[-1] = Literal(result[-1].text + s.text)
				continue
		result.append(s)
	return tuple(result)

def _escape(text:str, specials:str) -> str:
	return ''.join(ESCAPE+c if c in specials else c for c in text)

def _unparse(body:Body, nested:bool, layout:bool) -> str:
	specials = ACTIVE if nested else ACTIVE.replace(SEPARATOR, '')
	# Any escaped line-break starts a new line of the file, so headers and comments can lurk anywhere.
	if layout: specials += LAYOUT + COMMENT + HEADER
	out = []
	for s in body.segments:
		if type(s) is Literal: out.append(_escape(s.text, specials))
		elif type(s) is ArgRef: out.append('[%d]'%s.index)
		else: out.append(OPEN + SEPARATOR.join(_unparse(b, True, layout) for b in (s.name,)+s.args) + CLOSE)
	return ''.join(out)

def unparse(body:Body, layout:bool=False) -> str:
	"""
	Render a body as source text which compiles back to an equal body.
	In layout mode (for library files) tabs, line-breaks, and the comment
	and header characters are escaped too.
	"""
	return _unparse(body, False, layout)

def parameterize(body:Body, needles:Iterable[str]) -> Body:
	"""
	For each needle, in order, replace its occurrences in the literal text of the body
	(including inside nested invocations) with a reference to the argument at the
	needle's position. Empty needles are skipped but still use up their position.
	"""
	segments = body.segments
	for index, needle in enumerate(needles):
		if needle: segments = _replace(segments, needle, ArgRef(index))
	return Body(segments)

def _replace(segments, needle:str, ref:ArgRef) -> tuple:
	result = []
	for s in segments:
		if type(s) is Literal:
			pieces = s.text.split(needle)
			result.append(Literal(pieces[0]))
			for p in pieces[1:]:
				result.append(ref)
				result.append(Literal(p))
		elif type(s) is Invocation:
			result.append(Invocation(
				Body(_replace(s.name.segments, needle, ref)),
				tuple(Body(_replace(a.segments, needle, ref)) for a in s.args),
			))
		else: result.append(s)
	return merge_literals(result)
