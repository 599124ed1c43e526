"""
This file aggregates the exception types and abstract classes which minttools deals in.

The exception hierarchy follows the life of a macro: first it is scanned and compiled
(CompileError and friends), then it lands in the dictionary (DictionaryError), and at
last it is expanded (ExpansionError). All of those are LanguageError, so a host that
only wants to keep its command loop alive can catch the one base class.

Halt is the odd one out. It is what the `hl` primitive raises to abandon the current
top-level command, and it must travel through every frame, including primitives that
handle ordinary errors on their own. So it does NOT descend from LanguageError.

The EditorHandle is the whole of what the interpreter knows about the editor hosting it.
Primitives are the only code that touches it; the core never assumes any particular
buffer representation.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .failureprone import SourceText

class LanguageError(ValueError):
	""" Base class of all exceptions arising from the macro-language machinery. """

class CompileError(LanguageError):
	"""
	Raised for unmatched delimiters, dangling escapes, malformed argument references,
	and malformed definition headers. The position is an offset into the source text.
	If the compiler knew the source text, then complaint() gives line and column.
	"""
	def __init__(self, message:str, position:int, width:int=1, source:Optional[SourceText]=None):
		super().__init__(message, position)
		self.message, self.position, self.width, self.source = message, position, width, source

	@property
	def filename(self):
		return None if self.source is None else self.source.filename

	def line_and_column(self):
		""" One-based line, zero-based column; None if no source text is attached. """
		if self.source is None: return None
		return self.source.find_row_col(self.position)

	def complaint(self) -> str:
		if self.source is None: return "At offset %d: %s"%(self.position, self.message)
		return self.source.complaint(slice(self.position, self.position+self.width), self.message)

	def __str__(self): return self.complaint()

class ScanError(CompileError):
	""" The scanner could not make sense of the delimiter structure. """

class DictionaryError(LanguageError): pass

class ProtectedName(DictionaryError):
	""" Attempt to redefine or erase a primitive that the host marked as protected. """

class InvalidName(DictionaryError):
	""" Names are non-empty and of bounded length. """

class ExpansionError(LanguageError):
	""" Base class for everything that can go wrong while expanding. Aborts the current top-level call only. """

class UnknownMacro(ExpansionError):
	def __init__(self, name:str):
		super().__init__("Unknown macro %r"%name)
		self.name = name

class StackOverflow(ExpansionError):
	def __init__(self, depth:int, trace:tuple=()):
		super().__init__("Macro stack depth exceeded %d (innermost: %s)"%(depth, ' < '.join(trace) or '?'))
		self.depth, self.trace = depth, trace

class StepBudgetExceeded(ExpansionError):
	def __init__(self, steps:int):
		super().__init__("Step budget of %d invocations exceeded"%steps)
		self.steps = steps

class PrimitiveError(ExpansionError):
	""" Something specific to one primitive, such as a bad file name or a read-only variable. """
	def __init__(self, name:str, message:str):
		super().__init__("In primitive %r: %s"%(name, message))
		self.name = name

class ArityError(PrimitiveError):
	""" Only primitives registered with strict=True complain about their argument count. """

class Halt(Exception):
	""" Raised by the `hl` primitive. Distinct from any error: it means "stop, on purpose". """
	def __init__(self, code:int=0):
		super().__init__(code)
		self.code = code


class ExpansionErrorListener:
	"""
	Implement this interface to report/respond to trouble inside primitives.
	The engine consults it whenever a primitive raises something which is not
	already part of the language's own exception hierarchy.
	"""

	def exception_in_primitive(self, name:str, ex:Exception):
		"""
		Q: If a primitive's native code raises an exception, what should happen?
		A: It depends.

		Maybe it is a genuine bug, and you'd like the original traceback.
		Maybe it is an expected condition, like a file that isn't there, and
		you'd rather return some text to the macro code. If this method returns
		normally, the return value becomes the primitive's result.

		Default behavior is to convert the exception into a PrimitiveError,
		which aborts the current top-level call.
		"""
		raise PrimitiveError(name, str(ex) or type(ex).__name__) from ex


class EditorHandle(ABC):
	"""
	The capability surface offered by a hosting editor.
	Positions are character offsets into the current buffer, 0 <= position <= size().
	"""

	@abstractmethod
	def size(self) -> int:
		""" Number of characters in the current buffer. """

	@abstractmethod
	def read(self, start:int, stop:int) -> str:
		""" Return the text between two positions. """

	@abstractmethod
	def insert(self, position:int, text:str):
		""" Insert text at a position. Point moves along if it is at or after the position. """

	@abstractmethod
	def delete(self, start:int, stop:int):
		""" Remove the text between two positions. """

	@abstractmethod
	def get_point(self) -> int:
		""" Where the cursor is. """

	@abstractmethod
	def set_point(self, position:int):
		""" Move the cursor. """

	@abstractmethod
	def read_input(self) -> str:
		""" Return the name of the next input event (keystroke), or '' if none is available. """

	@abstractmethod
	def write_output(self, text:str):
		""" Put text on the screen at the current screen cursor. """

	@abstractmethod
	def write_status(self, text:str):
		""" Announce something on the status line. """
