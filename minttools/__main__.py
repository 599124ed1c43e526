"""
Load macro libraries, then evaluate some text or invoke a macro, and print the result.

	py -m minttools example/counting.min -c COUNT 5
	py -m minttools example/greeting.min -e "<GREET,world>"

Screen output from the macros goes to STDOUT as it happens; status announcements go to STDERR.
Input events, for the `it` primitive, are read a line at a time from STDIN.
"""

import sys, argparse, logging

from minttools import Interpreter, StringEditor, LanguageError, CompileError, Halt
from minttools.runtime.engine import DEFAULT_MAX_DEPTH, UNKNOWN_POLICIES, DEFAULT_UNKNOWN

class ConsoleEditor(StringEditor):
	""" A scratch buffer, but with the screen and status line attached to the console. """
	def read_input(self) -> str:
		if self.keys: return self.keys.popleft()
		line = sys.stdin.readline()
		return line.rstrip('\r\n')

	def write_output(self, text:str):
		sys.stdout.write(text)

	def write_status(self, text:str):
		print(text, file=sys.stderr)

def parse_arguments(argv=None):
	parser = argparse.ArgumentParser(prog='py -m minttools', description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument('libraries', nargs='*', metavar='FILE', help='macro library (.min) files to load, in order')
	parser.add_argument('-e', '--execute', metavar='TEXT', help='macro text to compile and evaluate')
	parser.add_argument('-c', '--call', nargs='+', metavar=('NAME', 'ARG'), help='invoke a macro by name, with literal arguments')
	parser.add_argument('--max-depth', type=int, default=DEFAULT_MAX_DEPTH, help='deepest allowed macro nesting (default %(default)s)')
	parser.add_argument('--max-steps', type=int, default=None, help='most invocations allowed per top-level call (default: no limit)')
	parser.add_argument('--unknown', choices=UNKNOWN_POLICIES, default=DEFAULT_UNKNOWN, help='what to make of an undefined name (default %(default)s)')
	parser.add_argument('-v', '--verbose', action='store_true', help='trace loading and expansion.')
	return parser.parse_args(argv)

def main(args) -> int:
	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format='%(levelname)s %(name)s: %(message)s')
	interp = Interpreter(ConsoleEditor(), max_depth=args.max_depth, max_steps=args.max_steps, unknown=args.unknown)
	try:
		for path in args.libraries: interp.load_file(path)
		results = []
		if args.execute is not None: results.append(interp.execute(args.execute))
		if args.call: results.append(interp.invoke(args.call[0], args.call[1:]))
	except CompileError as e:
		print(e.complaint(), file=sys.stderr)
		return 1
	except LanguageError as e:
		print(e, file=sys.stderr)
		return 1
	except OSError as e:
		print(e, file=sys.stderr)
		return 1
	except Halt as e:
		return e.code
	for text in results: print(text)
	return 0

if __name__ == '__main__': sys.exit(main(parse_arguments()))
