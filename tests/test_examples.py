import os, unittest
from minttools import Interpreter, StringEditor

example_folder = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'example')

def example(name):
	return os.path.join(example_folder, name)

class TestGreeting(unittest.TestCase):
	def setUp(self):
		self.interp = Interpreter()
		self.assertEqual(['GREET', 'ADD', 'TWICE', 'PAIR'], self.interp.load_file(example('greeting.min')))

	def test_01_greet(self):
		self.assertEqual('Hello, world!', self.interp.invoke('GREET', ['world']))

	def test_02_add_twice(self):
		self.assertEqual('5', self.interp.invoke('ADD', ['2', '3']))
		self.assertEqual('55', self.interp.execute('<TWICE,<ADD,2,3>>'))

	def test_03_missing_arguments(self):
		self.assertEqual('(a,)', self.interp.invoke('PAIR', ['a']))
		self.assertEqual('(a,b)', self.interp.invoke('PAIR', ['a', 'b', 'c']))

class TestCounting(unittest.TestCase):
	def setUp(self):
		self.interp = Interpreter()
		self.interp.load_file(example('counting.min'))

	def test_01_count(self):
		self.assertEqual('3 2 1 done', self.interp.invoke('COUNT', ['3']))
		self.assertEqual('done', self.interp.invoke('COUNT', ['0']))

	def test_02_factorial(self):
		self.assertEqual('120', self.interp.invoke('FACT', ['5']))
		self.assertEqual('1', self.interp.invoke('FACT', ['0']))

	def test_03_sum(self):
		self.assertEqual('60', self.interp.invoke('SUM', ['10 20 30']))

	def test_04_long_count(self):
		interp = Interpreter(max_depth=2000)
		interp.load_file(example('counting.min'))
		self.assertTrue(interp.invoke('COUNT', ['1500']).startswith('1500 1499 '))

class TestEditing(unittest.TestCase):
	def setUp(self):
		self.editor = StringEditor('abcd')
		self.interp = Interpreter(self.editor)
		self.interp.load_file(example('editing.min'))

	def test_01_motion(self):
		self.interp.invoke('end.of.buffer')
		self.assertEqual(4, self.editor.point)
		self.interp.invoke('key', ['C-b'])
		self.assertEqual(3, self.editor.point)
		self.interp.invoke('key', ['C-a'])
		self.assertEqual(0, self.editor.point)

	def test_02_command_loop(self):
		self.editor.feed('C-e', 'C-b', 'C-t', 'SPC', 'C-q')
		self.assertEqual('', self.interp.invoke('command.loop'))
		self.assertEqual('abdc ', self.editor.text)
		self.assertEqual(['C-q is undefined'], self.editor.status)

	def test_03_rebinding_a_key(self):
		self.interp.define('key.C-f', '<is,!>')
		self.interp.invoke('key', ['C-f'])
		self.assertEqual('!abcd', self.editor.text)
