import sys, unittest
from minttools import Interpreter
from minttools.compiling.compiler import compile_body
from minttools.runtime.dictionary import Dictionary, Macro
from minttools.runtime.engine import Engine, Frame, ROOT, Thunk
from minttools.support.interfaces import (
	LanguageError, UnknownMacro, StackOverflow, StepBudgetExceeded, PrimitiveError, ArityError, Halt, ExpansionErrorListener,
)

class TestLaws(unittest.TestCase):
	""" The basic promises of the language. """
	def setUp(self):
		self.interp = Interpreter()
		self.interp.define('GREET', 'Hello, [0]!')
		self.interp.define('ADD', '<++,[0],[1]>')
		self.interp.define('TWICE', '[0][0]')

	def test_01_identity(self):
		self.interp.define('X', 'just some text')
		self.assertEqual('just some text', self.interp.invoke('X'))

	def test_02_redefinition(self):
		self.interp.define('X', 'one')
		self.interp.define('X', 'two')
		self.assertEqual('two', self.interp.invoke('X'))

	def test_03_arity_tolerance(self):
		self.interp.define('P', '[0][1]')
		self.assertEqual('a', self.interp.invoke('P', ['a']))
		self.assertEqual('ab', self.interp.invoke('P', ['a', 'b', 'c']))
		self.assertEqual('', self.interp.invoke('P'))

	def test_04_call_by_expanded_value(self):
		self.interp.define('C', '0')
		self.interp.define('NEXT', '<ds,C,<++,<C>,1>><C>')
		self.interp.define('F', '[0]-[1]-[0]')
		self.assertEqual('1-2-1', self.interp.execute('<F,<NEXT>,<NEXT>>'))
		self.assertEqual('2', self.interp.invoke('C'))

	def test_05_escapes(self):
		self.assertEqual('<not invoked>', self.interp.execute('\\<not invoked\\>'))
		self.assertEqual('a,b', self.interp.execute('a,b'))

	def test_06_end_to_end(self):
		self.assertEqual('Hello, world!', self.interp.invoke('GREET', ['world']))
		self.assertEqual('5', self.interp.invoke('ADD', ['2', '3']))
		self.assertEqual('55', self.interp.execute('<TWICE,<ADD,2,3>>'))

	def test_07_literal_arguments_are_not_evaluated(self):
		self.assertEqual('<ADD,1,2><ADD,1,2>', self.interp.invoke('TWICE', ['<ADD,1,2>']))

	def test_08_computed_name(self):
		self.interp.define('pick', 'GREET')
		self.assertEqual('Hello, you!', self.interp.execute('<<pick>,you>'))

	def test_09_arguments_may_redefine_the_callee(self):
		self.interp.define('F', 'old')
		self.assertEqual('new', self.interp.execute('<F,<ds,F,new>>'))

	def test_10_running_body_survives_redefinition(self):
		self.interp.define('S', 'one<ds,S,two>three')
		self.assertEqual('onethree', self.interp.invoke('S'))
		self.assertEqual('two', self.interp.invoke('S'))

	def test_11_lazy_conditional_skips_other_branch(self):
		self.assertEqual('yes', self.interp.execute('<==,a,a,yes,<never defined>>'))
		self.assertEqual('no', self.interp.execute('<!=,a,a,<never defined>,no>'))

	def test_12_branches_see_the_caller_frame(self):
		self.interp.define('T', '<==,[0],x,[1],[2]>')
		self.assertEqual('yes', self.interp.invoke('T', ['x', 'yes', 'no']))
		self.assertEqual('no', self.interp.invoke('T', ['y', 'yes', 'no']))

class TestBudgets(unittest.TestCase):
	def test_01_runaway_recursion(self):
		interp = Interpreter(max_depth=50)
		interp.define('LOOP', '<LOOP>')
		with self.assertRaises(StackOverflow) as cm: interp.invoke('LOOP')
		self.assertEqual(50, cm.exception.depth)
		self.assertEqual('LOOP', cm.exception.trace[0])

	def test_02_deep_recursion_is_not_native(self):
		interp = Interpreter(max_depth=6000)
		interp.define('DOWN', '<==,[0],0,done,<DOWN,<--,[0],1>>>')
		self.assertEqual('done', interp.invoke('DOWN', ['5000']))

	def test_03_deeply_nested_arguments(self):
		interp = Interpreter()
		interp.define('ID', '[0]')
		self.assertEqual('x', interp.execute('<ID,' * 3000 + 'x' + '>' * 3000))

	def test_04_step_budget(self):
		interp = Interpreter(max_steps=20)
		interp.define('DOWN', '<==,[0],0,done,<DOWN,<--,[0],1>>>')
		with self.assertRaises(StepBudgetExceeded): interp.invoke('DOWN', ['100'])
		# The budget applies to each top-level call separately.
		self.assertEqual('done', interp.invoke('DOWN', ['2']))

	def test_05_deeply_nested_comparands(self):
		interp = Interpreter()
		text = '<==,' * 3000 + 'a' + ',a,a,b>' * 3000
		self.assertEqual('a', interp.execute(text))

	def test_06_recursion_inside_a_comparand(self):
		interp = Interpreter(max_depth=5000)
		interp.define('D', '<==,<==,[0],0,done,<D,<--,[0],1>>>,done,done,x>')
		for count in ['200', '1500', '4000']:
			with self.subTest(count=count): self.assertEqual('done', interp.invoke('D', [count]))
		interp.engine.max_depth = 1000
		with self.assertRaises(StackOverflow) as cm: interp.invoke('D', ['1500'])
		self.assertEqual(1000, cm.exception.depth)
		self.assertEqual('D', cm.exception.trace[0])

	def test_07_every_lazy_conditional(self):
		interp = Interpreter(max_depth=3000)
		inner = '<==,[0],0,stop,<R,<--,[0],1>>>'
		for name, rest in [('==', 'stop,stop,stop'), ('!=', 'stop,stop,stop'), ('a?', 'stop,stop,stop'), ('g?', '0,stop,stop'), ('n?', 'stop,stop')]:
			with self.subTest(name=name):
				interp.define('R', '<' + name + ',' + inner + ',' + rest + '>')
				self.assertEqual('stop', interp.invoke('R', ['2000']))

	def test_08_native_forcing_names_the_host_limit(self):
		interp = Interpreter(max_depth=None)
		interp.define_primitive('force', lambda ctx, t: t.force(), lazy=True)
		with self.assertRaises(StackOverflow) as cm: interp.execute('<force,' * 3000 + 'x' + '>' * 3000)
		self.assertEqual(sys.getrecursionlimit(), cm.exception.depth)
		self.assertEqual(('host recursion limit',), cm.exception.trace)
		self.assertEqual('ok', interp.execute('ok'))

class TestUnknownPolicy(unittest.TestCase):
	def test_01_error(self):
		interp = Interpreter()
		with self.assertRaises(UnknownMacro) as cm: interp.execute('a<nope,x>b')
		self.assertEqual('nope', cm.exception.name)

	def test_02_empty(self):
		self.assertEqual('ab', Interpreter(unknown='empty').execute('a<nope,x>b'))

	def test_03_literal(self):
		self.assertEqual('a<nope,x,y>b', Interpreter(unknown='literal').execute('a<nope,x,y>b'))

	def test_04_literal_escapes_values(self):
		interp = Interpreter(unknown='literal')
		for text in ['<nope,a\\,b>', '<nope,\\<x\\>>', '<nope,[0]>']:
			with self.subTest(text=text):
				passed = interp.execute(text)
				self.assertEqual(passed, interp.execute(passed))
		self.assertEqual('<nope,a\\,b>', interp.execute('<nope,a\\,b>'))

	def test_05_bad_policy(self):
		with self.assertRaises(ValueError): Interpreter(unknown='shrug')

class TestPrimitiveProtocol(unittest.TestCase):
	def setUp(self):
		self.interp = Interpreter()

	def test_01_padding_and_truncation(self):
		self.interp.define_primitive('cat', lambda ctx, a, b: a + '/' + b)
		self.assertEqual('x/', self.interp.execute('<cat,x>'))
		self.assertEqual('x/y', self.interp.execute('<cat,x,y,z>'))

	def test_02_strict(self):
		self.interp.define_primitive('cat', lambda ctx, a, b='': a + b, strict=True)
		self.assertEqual('x', self.interp.execute('<cat,x>'))
		with self.assertRaises(ArityError): self.interp.execute('<cat>')
		with self.assertRaises(ArityError): self.interp.execute('<cat,a,b,c>')

	def test_03_variadic(self):
		self.interp.define_primitive('count', lambda ctx, *args: str(len(args)))
		self.assertEqual('0', self.interp.execute('<count>'))
		self.assertEqual('3', self.interp.execute('<count,a,,c>'))

	def test_04_lazy_primitive_returns_a_thunk(self):
		self.interp.define_primitive('first', lambda ctx, *thunks: thunks[0] if thunks else '', lazy=True)
		self.assertEqual('a', self.interp.execute('<first,a,<never defined>>'))

	def test_05_thunks_force_once(self):
		self.interp.define('C', '0')
		self.interp.define('NEXT', '<ds,C,<++,<C>,1>><C>')
		self.interp.define_primitive('dup', lambda ctx, t: t.force() + t.force(), lazy=True)
		self.assertEqual('11', self.interp.execute('<dup,<NEXT>>'))
		self.assertEqual('1', self.interp.invoke('C'))

	def test_06_context(self):
		self.interp.define_primitive('where', lambda ctx: '%s@%d'%(ctx.name, ctx.frame.depth))
		self.interp.define('D', '<where>')
		self.assertEqual('where@0', self.interp.execute('<where>'))
		self.assertEqual('where@1', self.interp.invoke('D'))
		self.assertIs(self.interp, self.interp.engine.host)

	def test_07_native_exception(self):
		self.interp.define_primitive('boom', lambda ctx: str(1 // 0))
		with self.assertRaises(PrimitiveError) as cm: self.interp.execute('<boom>')
		self.assertIsInstance(cm.exception.__cause__, ZeroDivisionError)

	def test_08_error_listener(self):
		class Forgiving(ExpansionErrorListener):
			def exception_in_primitive(self, name, ex): return '(%s failed)'%name
		interp = Interpreter(on_error=Forgiving())
		interp.define_primitive('boom', lambda ctx: str(1 // 0))
		self.assertEqual('x(boom failed)y', interp.execute('x<boom>y'))

	def test_09_halt_is_not_an_error(self):
		with self.assertRaises(Halt) as cm: self.interp.execute('before<hl,3>after')
		self.assertEqual(3, cm.exception.code)
		self.assertNotIsInstance(cm.exception, LanguageError)

	def test_10_errors_abort_only_the_current_call(self):
		with self.assertRaises(UnknownMacro): self.interp.execute('<ds,X,kept><nope>')
		self.assertEqual('kept', self.interp.invoke('X'))
		self.assertEqual(0, self.interp.engine.depth())

	def test_11_lazy_generator(self):
		def either(ctx, first, second):
			text = yield first
			return text if text else second
		self.interp.define_primitive('either', either, lazy=True)
		self.assertEqual('b', self.interp.execute('<either,,b>'))
		self.assertEqual('a', self.interp.execute('<either,a,<never defined>>'))
		self.assertEqual('a', self.interp.invoke('either', ['a', 'b']))

	def test_12_lazy_generator_must_yield_thunks(self):
		def confused(ctx, thunk):
			yield 'text'
		self.interp.define_primitive('confused', confused, lazy=True)
		with self.assertRaises(PrimitiveError) as cm: self.interp.execute('<confused,x>')
		self.assertIsInstance(cm.exception.__cause__, TypeError)

class TestEngineDirectly(unittest.TestCase):
	def test_01_frames(self):
		frame = Frame('F', ('a',), ROOT, 1)
		self.assertEqual('a', frame.argument(0))
		self.assertEqual('', frame.argument(7))
		self.assertEqual(('F',), frame.trace())

	def test_02_evaluate_in_a_frame(self):
		dictionary = Dictionary()
		dictionary.define('W', Macro('W', compile_body('<[0]>')))
		engine = Engine(dictionary, unknown='literal')
		self.assertEqual('<x>', engine.call('W', ['x']))
		self.assertEqual('b-a', engine.evaluate(compile_body('[1]-[0]'), Frame('', ('a', 'b'), ROOT, 1)))

	def test_03_thunk_text(self):
		engine = Engine(Dictionary())
		thunk = Thunk(engine, compile_body('<f,[0]>\\,'), ROOT)
		self.assertEqual('<f,[0]>,', thunk.text)
		self.assertFalse(thunk.forced)
		self.assertEqual('x', Thunk.ready(engine, 'x', ROOT).force())
