"""
The expansion engine.

Expansion is depth-first and left-to-right. To invoke a macro, the engine evaluates the
name, then each argument in order, then looks the name up and evaluates the body in a
new frame which binds the argument values positionally. Arguments are evaluated exactly
once, before the callee starts, which is what makes side effects come out in the order
they are written.

The exception is the lazy primitive. Conditionals and the like must not evaluate the
branch they don't take, so a lazy primitive gets each argument as a Thunk: the argument's
compiled body, bound to the caller's frame, ready to be forced or ignored. A lazy primitive
written as a generator yields each Thunk it needs, and the engine evaluates it on its own
stack and sends the text back in.

Macro languages recurse for everything, including loops, so the engine does not lean on
Python's call stack. It keeps its own stack of records, each of which knows how to take
one more step. A record's step either produces its final text or asks for a sub-record
to be run first. That keeps failure deterministic: a runaway macro meets the configured
depth (or step) budget, not the host's recursion limit.

A primitive's return value may also be a request to carry on evaluating in its place:

	* a Thunk (typically a branch of a conditional) is evaluated in its own frame;
	* a Redirect invokes some other name with given argument values;
	* a Rescan evaluates a freshly compiled body in a new frame.

Between the two, macros that recurse through conditionals (the usual way of writing a loop),
whether in the chosen branch or in a comparand, never recurse natively.
"""

import inspect, logging, sys
from typing import NamedTuple, Optional

from ..compiling.body import Body, Literal, ArgRef, Invocation, EMPTY, literal, unparse
from ..support.interfaces import (
	LanguageError, Halt, ExpansionErrorListener, UnknownMacro, StackOverflow, StepBudgetExceeded, ArityError,
)
from .dictionary import Dictionary, Primitive

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 1000
DEFAULT_MAX_STEPS = None
UNKNOWN_POLICIES = ('error', 'empty', 'literal')
DEFAULT_UNKNOWN = 'error'

class Frame(NamedTuple):
	""" The bound-argument context of one macro evaluation. """
	name: str
	args: tuple
	parent: Optional["Frame"]
	depth: int

	def argument(self, index:int) -> str:
		""" References past the end of the arguments are simply empty. """
		return self.args[index] if index < len(self.args) else ''

	def trace(self, limit:int=5) -> tuple:
		""" Names of the innermost few frames, for diagnostics. """
		names, frame = [], self
		while frame.parent is not None and len(names) < limit:
			names.append(frame.name)
			frame = frame.parent
		return tuple(names)

ROOT = Frame('', (), None, 0)

class Context(NamedTuple):
	""" What a primitive gets as its first parameter. """
	engine: "Engine"
	name: str # as invoked
	frame: Frame # of the invocation site

	@property
	def host(self):
		return self.engine.host

class Thunk:
	""" An argument handed over unevaluated, for a lazy primitive to force (or not) as it sees fit. """
	__slots__ = ('engine', 'body', 'frame', '_value')

	def __init__(self, engine:"Engine", body:Body, frame:Frame, value:Optional[str]=None):
		self.engine, self.body, self.frame, self._value = engine, body, frame, value

	@classmethod
	def ready(cls, engine, text:str, frame:Frame):
		""" A thunk for text which is already a value. """
		return cls(engine, literal(text), frame, text)

	def force(self) -> str:
		"""
		Evaluate (at most once) and return the text. This runs a nested evaluation on the
		host stack; the standard primitives yield their thunks to the engine instead.
		"""
		if self._value is None: self._value = self.engine.evaluate(self.body, self.frame)
		return self._value

	def settle(self, value:str):
		self._value = value

	@property
	def forced(self) -> bool:
		return self._value is not None

	@property
	def text(self) -> str:
		""" The argument as source text, unevaluated. """
		return unparse(self.body)

	def __repr__(self):
		return "<Thunk %r>"%self.text

class Redirect(NamedTuple):
	""" Return this from a primitive to have another name invoked in its place. """
	name: str
	values: tuple

class Rescan(NamedTuple):
	""" Return this from a primitive to have a body evaluated, in a new frame, in its place. """
	body: Body
	values: tuple
	name: str = ''


class _Evaluation:
	""" Works through the segments of one body within one frame. """
	__slots__ = ('segments', 'frame', 'pc', 'parts')

	def __init__(self, body:Body, frame:Frame):
		self.segments, self.frame, self.pc, self.parts = body.segments, frame, 0, []

	def advance(self, engine):
		segments, frame, parts = self.segments, self.frame, self.parts
		while self.pc < len(segments):
			segment = segments[self.pc]
			self.pc += 1
			kind = type(segment)
			if kind is Literal: parts.append(segment.text)
			elif kind is ArgRef: parts.append(frame.argument(segment.index))
			else: return _Invocation(segment, frame)
		return ''.join(parts)

	def accept(self, value:str):
		self.parts.append(value)

_NAME, _LOOKUP, _ARGS, _DONE = range(4)

class _Invocation:
	"""
	Works through one invocation site in stages: evaluate the name; look it up;
	evaluate the arguments (unless the primitive is lazy); dispatch. Whatever the
	dispatch produces, directly or by way of a sub-record, becomes the result.
	"""
	__slots__ = ('node', 'frame', 'stage', 'name', 'values', 'result')

	def __init__(self, node, frame:Frame):
		self.node, self.frame, self.stage = node, frame, _NAME
		self.name, self.values, self.result = None, [], None

	def advance(self, engine):
		if self.stage == _NAME:
			self.stage = _LOOKUP
			return _Evaluation(self.node.name, self.frame)
		if self.stage == _LOOKUP:
			entry = engine.dictionary.lookup(self.name)
			if type(entry) is Primitive and entry.lazy:
				self.stage = _DONE
				thunks = tuple(Thunk(engine, arg, self.frame) for arg in self.node.args)
				return engine.apply(self.name, entry, thunks, self.frame)
			self.stage = _ARGS
		if self.stage == _ARGS:
			if len(self.values) < len(self.node.args):
				return _Evaluation(self.node.args[len(self.values)], self.frame)
			self.stage = _DONE
			# Arguments may have redefined the name, so it gets looked up afresh.
			return engine.dispatch(self.name, tuple(self.values), self.frame)
		return self.result

	def accept(self, value:str):
		if self.stage == _LOOKUP: self.name = value
		elif self.stage == _ARGS: self.values.append(value)
		else: self.result = value

class _Dispatch:
	""" An invocation whose name and argument values are already known. """
	__slots__ = ('name', 'values', 'frame', 'started', 'result')

	def __init__(self, name:str, values:tuple, frame:Frame):
		self.name, self.values, self.frame, self.started, self.result = name, values, frame, False, None

	def advance(self, engine):
		if self.started: return self.result
		self.started = True
		return engine.dispatch(self.name, self.values, self.frame)

	def accept(self, value:str):
		self.result = value


class _Forcing:
	"""
	Drives a lazy primitive written as a generator. Each Thunk it yields is evaluated
	here on the engine's stack, and the text is sent back in. Whatever the generator
	finally returns is followed like any other primitive's outcome.
	"""
	__slots__ = ('name', 'generator', 'frame', 'pending', 'value', 'done', 'result')

	def __init__(self, name:str, generator, frame:Frame):
		self.name, self.generator, self.frame = name, generator, frame
		self.pending, self.value, self.done, self.result = None, None, False, None

	def advance(self, engine):
		if self.done: return self.result
		while True:
			try: thunk = self.generator.send(self.value)
			except StopIteration as stop: return self.__finish(engine, stop.value)
			except (LanguageError, Halt, RecursionError): raise
			except Exception as ex: return self.__finish(engine, engine.on_error.exception_in_primitive(self.name, ex))
			if not isinstance(thunk, Thunk):
				self.generator.close()
				return self.__finish(engine, engine.on_error.exception_in_primitive(self.name, TypeError("Primitive yielded %r"%type(thunk).__name__)))
			if thunk.forced: self.value = thunk.force()
			else:
				self.pending = thunk
				return _Evaluation(thunk.body, thunk.frame)

	def __finish(self, engine, outcome):
		self.done = True
		return engine.follow(self.name, outcome, self.frame)

	def accept(self, value:str):
		if self.done: self.result = value
		else:
			self.pending.settle(value)
			self.pending, self.value = None, value


class Engine:
	"""
	Drives expansion against a dictionary. The host (normally the Interpreter)
	is made available to primitives as ctx.host.
	"""

	def __init__(self, dictionary:Dictionary, *, host=None, max_depth:Optional[int]=DEFAULT_MAX_DEPTH, max_steps:Optional[int]=DEFAULT_MAX_STEPS, unknown:str=DEFAULT_UNKNOWN, on_error:ExpansionErrorListener=None):
		self.dictionary = dictionary
		self.host = host
		self.max_depth = max_depth
		self.max_steps = max_steps
		self.unknown = unknown
		self.on_error = on_error or ExpansionErrorListener()
		self.steps = 0
		self.__nesting = 0

	@property
	def unknown(self) -> str:
		""" What to make of an invocation of an undefined name: 'error', 'empty', or 'literal'. """
		return self.__unknown

	@unknown.setter
	def unknown(self, policy:str):
		if policy not in UNKNOWN_POLICIES:
			raise ValueError("Unknown-macro policy must be one of %s, not %r"%(', '.join(UNKNOWN_POLICIES), policy))
		self.__unknown = policy

	def call(self, name:str, values=(), frame:Frame=ROOT) -> str:
		""" Invoke a name with argument values that are already text. """
		return self.__run(_Dispatch(name, tuple(values), frame))

	def evaluate(self, body:Body, frame:Frame=ROOT) -> str:
		""" Evaluate a compiled body within a frame. Forcing a Thunk comes through here. """
		return self.__run(_Evaluation(body, frame))

	def __run(self, record) -> str:
		if self.__nesting == 0: self.steps = 0
		self.__nesting += 1
		try:
			stack = [record]
			while True:
				outcome = stack[-1].advance(self)
				if type(outcome) is str:
					stack.pop()
					if not stack: return outcome
					stack[-1].accept(outcome)
				else: stack.append(outcome)
		except RecursionError:
			# Thunk.force nests evaluations on the host stack; the outermost run reports it.
			if self.__nesting > 1: raise
			raise StackOverflow(sys.getrecursionlimit(), ('host recursion limit',)) from None
		finally:
			self.__nesting -= 1

	def depth(self) -> int:
		""" How many evaluations are in progress on the host stack; zero when idle. """
		return self.__nesting

	def dispatch(self, name:str, values:tuple, frame:Frame):
		""" Returns either the finished text or a record to run for it. """
		entry = self.dictionary.lookup(name)
		if entry is None: return self.unknown_macro(name, values)
		if type(entry) is Primitive:
			if entry.lazy: values = tuple(Thunk.ready(self, v, frame) for v in values)
			return self.apply(name, entry, values, frame)
		self.__tick(name)
		logger.debug("Expand %s with %d arguments at depth %d", name, len(values), frame.depth + 1)
		return self.enter(name, entry.body, values, frame)

	def enter(self, name:str, body:Body, values:tuple, frame:Frame) -> _Evaluation:
		""" Make a new frame for a body. This is where the depth budget applies. """
		depth = frame.depth + 1
		if self.max_depth is not None and depth > self.max_depth:
			raise StackOverflow(self.max_depth, (name,) + frame.trace())
		return _Evaluation(body, Frame(name, values, frame, depth))

	def apply(self, name:str, primitive:Primitive, args:tuple, frame:Frame):
		self.__tick(name)
		logger.debug("Execute %s with %d arguments", name, len(args))
		filler = Thunk(self, EMPTY, frame, '') if primitive.lazy else ''
		args = bind_arguments(primitive, args, filler)
		try: outcome = primitive.function(Context(self, name, frame), *args)
		except (LanguageError, Halt, RecursionError): raise
		except Exception as ex: outcome = self.on_error.exception_in_primitive(name, ex)
		if inspect.isgenerator(outcome): return _Forcing(name, outcome, frame)
		return self.follow(name, outcome, frame)

	def follow(self, name:str, outcome, frame:Frame):
		""" Turn what a primitive produced into text, or into a record to run for it. """
		if outcome is None: return ''
		if isinstance(outcome, str): return outcome
		if isinstance(outcome, Thunk):
			return outcome.force() if outcome.forced else _Evaluation(outcome.body, outcome.frame)
		if isinstance(outcome, Redirect): return _Dispatch(outcome.name, tuple(outcome.values), frame)
		if isinstance(outcome, Rescan): return self.enter(outcome.name or name, outcome.body, tuple(outcome.values), frame)
		return self.on_error.exception_in_primitive(name, TypeError("Primitive returned %r"%type(outcome).__name__))

	def unknown_macro(self, name:str, values:tuple) -> str:
		self.__tick(name)
		if self.unknown == 'empty':
			logger.debug("Unknown macro %r expands to nothing", name)
			return ''
		if self.unknown == 'literal':
			return unparse(Body((Invocation(literal(name), tuple(literal(v) for v in values)),)))
		raise UnknownMacro(name)

	def __tick(self, name):
		self.steps += 1
		if self.max_steps is not None and self.steps > self.max_steps:
			raise StepBudgetExceeded(self.max_steps)

def bind_arguments(primitive:Primitive, args:tuple, filler) -> tuple:
	""" Pad or truncate to the primitive's declared arity, unless it is strict about it. """
	given = len(args)
	if given < primitive.minimum:
		if primitive.strict:
			raise ArityError(primitive.name, "expects at least %d arguments, got %d"%(primitive.minimum, given))
		return args + (filler,) * (primitive.minimum - given)
	if primitive.maximum is not None and given > primitive.maximum:
		if primitive.strict:
			raise ArityError(primitive.name, "expects at most %d arguments, got %d"%(primitive.maximum, given))
		return args[:primitive.maximum]
	return args
