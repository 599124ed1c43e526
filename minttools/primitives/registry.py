"""
A primitive is just a Python function whose first parameter is the invocation Context.
The remaining positional parameters receive the argument values, and the function's
signature says how many it wants:

	@STANDARD.register('nc')
	def number_of_characters(ctx, text): return str(len(text))

Parameters with default values are optional; a `*args` parameter makes the primitive
variadic. The engine pads short argument lists with empty strings and drops extras,
unless the primitive was registered as strict, in which case it complains instead.
"""

import inspect, logging, warnings
from typing import Callable, Optional

from ..runtime.dictionary import Dictionary, Primitive

logger = logging.getLogger(__name__)

def arity(function:Callable) -> tuple[int, Optional[int]]:
	"""
	Read (minimum, maximum) argument counts off a function's signature, not counting
	the context parameter. A maximum of None means there is no upper limit.
	"""
	minimum, maximum = 0, 0
	parameters = list(inspect.signature(function).parameters.values())
	if not parameters or parameters[0].kind not in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
		raise TypeError("Primitive %r must accept the invocation context as its first positional parameter"%getattr(function, '__name__', function))
	for p in parameters[1:]:
		if p.kind == inspect.Parameter.VAR_POSITIONAL: return minimum, None
		if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
			maximum += 1
			if p.default is inspect.Parameter.empty: minimum = maximum
	return minimum, maximum

def make_primitive(name:str, function:Callable, *, lazy=False, strict=False, protected=False) -> Primitive:
	minimum, maximum = arity(function)
	return Primitive(name, function, minimum, maximum, lazy, strict, protected)


class PrimitiveTable:
	""" A named collection of primitives, ready to install into a dictionary. """

	def __init__(self):
		self.__primitives : dict[str, Primitive] = {}

	def register(self, name:str, *, lazy=False, strict=False, protected=False):
		""" Decorator. Returns the function unchanged, so primitives stay easy to test directly. """
		def decorator(function:Callable) -> Callable:
			if name in self.__primitives:
				warnings.warn("Primitive %r registered twice; the later one wins."%name)
			self.__primitives[name] = make_primitive(name, function, lazy=lazy, strict=strict, protected=protected)
			logger.debug("Registered primitive: %s (lazy=%s)", name, lazy)
			return function
		return decorator

	def __contains__(self, name): return name in self.__primitives
	def __getitem__(self, name) -> Primitive: return self.__primitives[name]
	def __len__(self): return len(self.__primitives)

	def names(self) -> list[str]:
		return sorted(self.__primitives)

	def install(self, dictionary:Dictionary):
		for name, primitive in self.__primitives.items():
			dictionary.define(name, primitive)


# The standard MINT repertoire. Each module in this package adds to it on import.
STANDARD = PrimitiveTable()
