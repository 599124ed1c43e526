"""
The dictionary is the one flat namespace of the macro language: a mapping from name
to either a compiled macro or a native primitive.

Entries are only ever replaced wholesale. A macro in the middle of evaluating its own
redefinition keeps running the body it started with, because the frame holds its own
reference to that body and bodies are immutable.

A miss is not an error here. `lookup` simply returns None, and the expansion engine
decides what an unknown name means.

Each macro also carries a "form pointer" as in MINT: a read position used by the
primitives that consume a form a bit at a time. It lives beside the entries rather
than in them, so entries stay immutable, and it resets whenever the name is defined.
"""

from typing import NamedTuple, Callable, Optional, Union

from ..compiling.body import Body, unparse
from ..scanning.interface import MAX_NAME_LENGTH
from ..support.interfaces import ProtectedName, InvalidName

class Macro(NamedTuple):
	name: str
	body: Body

	@property
	def content(self) -> str:
		""" A form's characters: its literal text if it has nothing else, otherwise its canonical source. """
		return self.body.literal_text() if self.body.is_literal() else unparse(self.body)

class Primitive(NamedTuple):
	name: str
	function: Callable
	minimum: int # required arguments, after the context
	maximum: Optional[int] # None means variadic
	lazy: bool = False # receives unevaluated Thunks rather than strings
	strict: bool = False # complain, rather than pad and truncate, on the wrong number of arguments
	protected: bool = False # refuses redefinition and erasure

Entry = Union[Macro, Primitive]

class Dictionary:
	"""
	There's only the one scope, so this is much simpler than a general symbol table.
	Names are exact-match and case-sensitive.
	"""
	def __init__(self):
		self.__entries : dict[str, Entry] = {}
		self.__cursor : dict[str, int] = {}

	def define(self, name:str, entry:Entry):
		if not name: raise InvalidName("Macro names cannot be empty")
		if len(name) > MAX_NAME_LENGTH: raise InvalidName("Macro name longer than %d characters: %r..."%(MAX_NAME_LENGTH, name[:20]))
		self.__check_unprotected(name)
		self.__entries[name] = entry
		self.__cursor.pop(name, None)

	def lookup(self, name:str) -> Optional[Entry]:
		return self.__entries.get(name)

	def undefine(self, name:str) -> bool:
		""" Returns whether there was anything to remove. """
		self.__check_unprotected(name)
		self.__cursor.pop(name, None)
		return self.__entries.pop(name, None) is not None

	def __check_unprotected(self, name):
		existing = self.__entries.get(name)
		if type(existing) is Primitive and existing.protected:
			raise ProtectedName("Primitive %r is protected"%name)

	def __contains__(self, name): return name in self.__entries
	def __len__(self): return len(self.__entries)
	def __iter__(self): return iter(self.__entries)

	def names(self, prefix:str='', *, macros_only:bool=True) -> list[str]:
		""" Sorted names having the given prefix. By default, only compiled macros count. """
		return sorted(
			name for name, entry in self.__entries.items()
			if name.startswith(prefix) and not (macros_only and type(entry) is Primitive)
		)

	def macro(self, name:str) -> Optional[Macro]:
		""" Like lookup, but primitives don't count. """
		entry = self.__entries.get(name)
		return entry if type(entry) is Macro else None

	def cursor(self, name:str) -> int:
		return self.__cursor.get(name, 0)

	def set_cursor(self, name:str, position:int):
		if name in self.__entries: self.__cursor[name] = max(0, position)
