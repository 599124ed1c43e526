"""
The scanner for macro source text.

There is no finite automaton to speak of here: the roles of characters are fixed,
so a short dispatch on the character under the cursor does the job. The scanner
tracks the nesting of invocation brackets, but only so that it can complain about
mismatched ones. What the nesting *means* is up to the compiler.

A scanner works over any sub-range of a text, so the same text can be scanned
piecemeal (once per definition, say) while error positions stay absolute.
"""

import re
from typing import Optional

from . import interface
from .interface import OPEN, CLOSE, SEPARATOR, ESCAPE, REFERENCE, LAYOUT, COMMENT
from ..support.failureprone import SourceText
from ..support.interfaces import ScanError

_NEUTRAL = re.compile('[^%s]+'%re.escape(interface.ACTIVE))
_NEUTRAL_LAYOUT = re.compile('[^%s]+'%re.escape(interface.ACTIVE + LAYOUT))
_REFERENCE = re.compile(r'\[([0-9]+)\]')
_REST_OF_LINE = re.compile(r'[^\r\n]*')

class Scanner:
	"""
	Scans one item per call to scan_one_item(). Each item is either a single token
	or some layout (in layout mode) which produces no token at all.
	"""

	def __init__(self, text:str, *, start:int=0, stop:Optional[int]=None, layout:bool=False, source:Optional[SourceText]=None):
		self.__text = text
		self.__stop = len(text) if stop is None else stop
		self.__layout = layout
		self.__neutral = _NEUTRAL_LAYOUT if layout else _NEUTRAL
		self.__opens = []
		self.source = source
		self.left = self.right = start

	def scan_one_item(self):
		text = self.__text
		cursor = self.left = self.right
		char = text[cursor]
		if self.__layout:
			if char in LAYOUT:
				self.right = cursor + 1
				return
			if char == COMMENT and self.at_start_of_line():
				self.right = _REST_OF_LINE.match(text, cursor, self.__stop).end()
				return
		if char == ESCAPE:
			if cursor + 1 >= self.__stop:
				self.right = self.__stop
				return self.on_blocked("Dangling escape at end of text")
			self.right = cursor + 2
			self.token(interface.ESCAPED, text[cursor+1])
		elif char == OPEN:
			self.right = cursor + 1
			self.__opens.append(cursor)
			self.token(interface.OPEN_TOKEN)
		elif char == CLOSE:
			self.right = cursor + 1
			if not self.__opens: return self.on_blocked("'%s' without matching '%s'"%(CLOSE, OPEN))
			self.__opens.pop()
			self.token(interface.CLOSE_TOKEN)
		elif char == SEPARATOR:
			self.right = cursor + 1
			self.token(interface.COMMA)
		elif char == REFERENCE:
			match = _REFERENCE.match(text, cursor, self.__stop)
			if match is None:
				self.right = cursor + 1
				return self.on_blocked("Malformed argument reference")
			self.right = match.end()
			self.token(interface.REF, int(match.group(1)))
		else:
			self.right = self.__neutral.match(text, cursor, self.__stop).end()
			self.token(interface.TEXT, text[cursor:self.right])

	def has_more(self):
		return self.right < self.__stop

	def depth(self) -> int:
		""" How many invocations are open at the current position. """
		return len(self.__opens)

	def check_balance(self):
		""" Call at the end of the range. Any invocation still open is an error. """
		if self.__opens:
			self.left, self.right = self.__opens[-1], self.__opens[-1] + 1
			self.on_blocked("'%s' without matching '%s'"%(OPEN, CLOSE))

	def at_start_of_line(self) -> bool:
		return self.left == 0 or self.__text[self.left - 1] in '\r\n'

	def slice(self):
		""" Return a slice-object corresponding to the extent of matched text. """
		return slice(self.left, self.right)
	def match(self):
		""" Return the actual matched text """
		return self.__text[self.left:self.right]

	def token(self, kind:str, semantic=None):
		""" Subclasses decide what becomes of tokens. """

	def on_blocked(self, message:str):
		""" If you override this to return normally, scanning will continue after the offending text. """
		raise ScanError(message, self.left, self.right - self.left, self.source)

class IterableScanner(Scanner):
	"""
	It may be convenient that iterating over a scanner would cause it to yield tokens.
	Tokens are 2-tuples of (kind, semantic). While the consumer holds a token,
	yy.slice() tells where in the text it came from.
	"""

	def __init__(self, text:str, **kwargs):
		super().__init__(text, **kwargs)
		self.__buffer = []

	def __iter__(self):
		while self.has_more():
			self.scan_one_item()
			yield from self.__buffer
			self.__buffer.clear()
		self.check_balance()

	def token(self, kind:str, semantic=None):
		assert kind is not None
		self.__buffer.append((kind, semantic))

def scan(text:str, **kwargs) -> IterableScanner:
	""" Convenience: return an iterable scanner over (a range of) the text. """
	return IterableScanner(text, **kwargs)
