"""
Scanning Interface Definitions.

The macro language has essentially no syntax beyond invocation, argument reference,
and literal text. So the whole of the lexical structure is these few characters.
Everything else is neutral text, passed through literally.
"""

OPEN = '<'
CLOSE = '>'
SEPARATOR = ','
ESCAPE = '\\'
REFERENCE = '['
REFERENCE_END = ']'

ACTIVE = OPEN + CLOSE + SEPARATOR + ESCAPE + REFERENCE

# In library files, these are layout rather than content unless escaped.
LAYOUT = '\t\r\n'
COMMENT = ';'
HEADER = ':'

MAX_NAME_LENGTH = 255

# Token kinds. A token is a 2-tuple of (kind, semantic).
TEXT = 'text'
OPEN_TOKEN = 'open'
CLOSE_TOKEN = 'close'
COMMA = 'comma'
ESCAPED = 'escape'
REF = 'ref'
