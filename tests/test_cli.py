import io, os, unittest
from contextlib import redirect_stdout, redirect_stderr
from minttools.__main__ import parse_arguments, main

example_folder = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'example')

def run(*argv):
	out, err = io.StringIO(), io.StringIO()
	with redirect_stdout(out), redirect_stderr(err):
		code = main(parse_arguments(list(argv)))
	return code, out.getvalue(), err.getvalue()

class TestCommandLine(unittest.TestCase):
	def test_01_execute(self):
		self.assertEqual((0, 'Hello, you!\n', ''), run(os.path.join(example_folder, 'greeting.min'), '-e', '<GREET,you>'))

	def test_02_call(self):
		code, out, err = run(os.path.join(example_folder, 'counting.min'), '-c', 'COUNT', '2')
		self.assertEqual(0, code)
		self.assertEqual('2 1 done\n', out)

	def test_03_screen_output(self):
		code, out, err = run('-e', '<ow,drawn>returned')
		self.assertEqual('drawnreturned\n', out)

	def test_04_runtime_error(self):
		code, out, err = run('-e', '<nope>')
		self.assertEqual(1, code)
		self.assertIn('nope', err)

	def test_05_unknown_policy(self):
		self.assertEqual((0, '<nope,x>\n', ''), run('--unknown', 'literal', '-e', '<nope,x>'))

	def test_06_compile_error(self):
		code, out, err = run('-e', 'a<b')
		self.assertEqual(1, code)
		self.assertIn('column 2', err)

	def test_07_halt(self):
		self.assertEqual(4, run('-e', '<hl,4>')[0])

	def test_08_budgets(self):
		code, out, err = run('--max-depth', '10', '-e', '<ds,L,\\<L\\>><L>')
		self.assertEqual(1, code)
		self.assertIn('depth', err)

	def test_09_missing_file(self):
		self.assertEqual(1, run(os.path.join(example_folder, 'no-such-file.min'))[0])
