"""
The Interpreter is the face which the macro machinery presents to a host application.

	interp = Interpreter(editor)
	interp.load_file('editor.min')
	interp.invoke('key', ['C-f'])

It owns one dictionary and one engine, installs the standard primitives, and keeps the
table of host variables. Each call to invoke() or execute() is a "top-level call".
If expansion fails, the error aborts that call only: whatever the call had done to the
dictionary or the buffer before then stays done, and the interpreter remains usable.
"""

import logging
from typing import Callable, Iterable, NamedTuple, Optional

from ..compiling.compiler import compile_body, each_definition, render_source, valid_name
from ..primitives import STANDARD, PrimitiveTable, make_primitive
from ..support.interfaces import EditorHandle, ExpansionErrorListener
from .dictionary import Dictionary, Macro
from .editor import StringEditor
from .engine import Engine, DEFAULT_MAX_DEPTH, DEFAULT_MAX_STEPS, DEFAULT_UNKNOWN

logger = logging.getLogger(__name__)

class Variable(NamedTuple):
	getter: Callable[[], str]
	setter: Optional[Callable[[str], None]] = None # None means read-only

def _optional_int(text:str) -> Optional[int]:
	""" Blank, zero, or negative means no limit. """
	if not text.strip(): return None
	value = int(text)
	return value if value > 0 else None

class Interpreter:
	def __init__(
			self, editor:EditorHandle=None, *,
			max_depth:Optional[int]=DEFAULT_MAX_DEPTH, max_steps:Optional[int]=DEFAULT_MAX_STEPS,
			unknown:str=DEFAULT_UNKNOWN, primitives:PrimitiveTable=STANDARD, on_error:ExpansionErrorListener=None,
	):
		self.editor = editor if editor is not None else StringEditor()
		self.dictionary = Dictionary()
		self.engine = Engine(self.dictionary, host=self, max_depth=max_depth, max_steps=max_steps, unknown=unknown, on_error=on_error)
		self.variables : dict[str, Variable] = {}
		primitives.install(self.dictionary)
		self.__define_settings()

	def __define_settings(self):
		engine = self.engine
		def setter(attribute, convert):
			return lambda text: setattr(engine, attribute, convert(text))
		self.define_variable('max.depth', lambda: str(engine.max_depth or ''), setter('max_depth', _optional_int))
		self.define_variable('max.steps', lambda: str(engine.max_steps or ''), setter('max_steps', _optional_int))
		self.define_variable('unknown', lambda: engine.unknown, setter('unknown', str.strip))
		self.define_variable('steps', lambda: str(engine.steps))

	# Definitions

	def load(self, source:str, filename:str=None) -> list[str]:
		"""
		Install the definitions from library text, in order, and return their names.
		A CompileError stops the load, but whatever came before it stays installed.
		"""
		names = []
		for definition in each_definition(source, filename):
			self.dictionary.define(definition.name, Macro(definition.name, definition.body))
			names.append(definition.name)
		logger.info("Loaded %d definitions from %s", len(names), filename or 'text')
		return names

	def load_file(self, path) -> list[str]:
		with open(path, encoding='utf-8') as fh: source = fh.read()
		return self.load(source, filename=str(path))

	def save_file(self, path, names:Iterable[str]) -> list[str]:
		""" Write the named macros to a library file. Returns the names actually written. """
		definitions = []
		for name in names:
			macro = self.dictionary.macro(name)
			if macro is None or not valid_name(name): logger.warning("Not saving %r: not a form that a library can hold", name)
			else: definitions.append((name, macro.body))
		with open(path, 'w', encoding='utf-8') as fh: fh.write(render_source(definitions))
		logger.info("Saved %d definitions to %s", len(definitions), path)
		return [name for name, body in definitions]

	def define(self, name:str, text:str):
		""" Compile text exactly as given (no layout rule) and define it under the name. """
		self.dictionary.define(name, Macro(name, compile_body(text)))

	def undefine(self, name:str) -> bool:
		return self.dictionary.undefine(name)

	def define_primitive(self, name:str, function:Callable, *, lazy=False, strict=False, protected=False):
		self.dictionary.define(name, make_primitive(name, function, lazy=lazy, strict=strict, protected=protected))

	def define_variable(self, name:str, getter:Callable[[], str], setter:Callable[[str], None]=None):
		self.variables[name] = Variable(getter, setter)

	def __contains__(self, name): return name in self.dictionary

	# Top-level calls

	def invoke(self, name:str, args:Iterable[str]=()) -> str:
		""" Invoke a name with literal argument values, which are not compiled or evaluated. """
		return self.engine.call(name, tuple(args))

	def execute(self, text:str) -> str:
		""" Compile and evaluate some text, as if it were the body of an anonymous macro given no arguments. """
		return self.engine.evaluate(compile_body(text))
