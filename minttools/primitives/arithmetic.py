"""
Arithmetic, MINT style.

Numbers are whatever digits trail the argument, optionally preceded by a minus sign.
Anything before that is a "prefix", and the left operand's prefix survives into the
result, so that <++,Fish 12,15> is "Fish 27". Text with no trailing digits is zero.

Division truncates toward zero, and the remainder takes the sign of the dividend.
Dividing by zero is not an error: the result is the dividend, unchanged.
"""

from .registry import STANDARD

DIGITS = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ'

def split_number(text:str, base:int=10) -> tuple[str, int]:
	""" Return (prefix, value) for text with a (possibly signed) number at the end. """
	valid = DIGITS[:base]
	i = len(text)
	while i > 0 and text[i-1].upper() in valid: i -= 1
	digits = text[i:]
	value = int(digits, base) if digits else 0
	if i > 0 and text[i-1] == '-':
		i -= 1
		value = -value
	return text[:i], value

def int_value(text:str, base:int=10) -> int:
	return split_number(text, base)[1]

def format_number(value:int, base:int=10) -> str:
	if value < 0: return '-' + format_number(-value, base)
	digits = []
	while True:
		value, digit = divmod(value, base)
		digits.append(DIGITS[digit])
		if not value: return ''.join(reversed(digits))

def _quotient(a, b):
	if b == 0: return a
	q = abs(a) // abs(b)
	return q if (a < 0) == (b < 0) else -q

def _remainder(a, b):
	if b == 0: return a
	return a - b * _quotient(a, b)

OPERATORS = {
	'++': lambda a, b: a + b,
	'--': lambda a, b: a - b,
	'**': lambda a, b: a * b,
	'//': _quotient,
	'%%': _remainder,
	'&&': lambda a, b: a & b,
	'||': lambda a, b: a | b,
	'^^': lambda a, b: a ^ b,
}

def _binary(operation):
	def primitive(ctx, x, y):
		prefix, a = split_number(x)
		return prefix + format_number(operation(a, int_value(y)))
	return primitive

for _name, _operation in OPERATORS.items():
	STANDARD.register(_name)(_binary(_operation))

@STANDARD.register('g?', lazy=True)
def greater(ctx, x, y, then, otherwise):
	""" <g?,X,Y,A,B> is A if X is numerically greater than Y, otherwise B. """
	return then if int_value((yield x)) > int_value((yield y)) else otherwise

BASES = {'A': 0, 'C': 0, 'B': 2, 'O': 8, 'D': 10, 'H': 16}

@STANDARD.register('bc')
def base_conversion(ctx, x, source='', target=''):
	"""
	<bc,X,Y,Z> converts X from base Y to base Z, where a base is one of the letters
	a or c (a character and its code), b, o, d, or h. The source defaults to a
	character and the target to decimal. A prefix is kept, as with arithmetic.
	"""
	source_base = BASES.get(source[:1].upper(), 0)
	if source_base:
		prefix, value = split_number(x, source_base)
	else:
		prefix, value = '', (ord(x[0]) if x else 0)
	target_base = BASES.get(target[:1].upper(), 10)
	if target_base: return prefix + format_number(value, target_base)
	return prefix + chr(value)
