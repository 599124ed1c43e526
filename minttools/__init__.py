"""
minttools: a MINT-style macro language for hosting editor behavior.

Macro source is compiled into a dictionary of forms, and behavior happens by expansion.
The host supplies a thin layer of primitives through an EditorHandle; everything
else can be written, and rewritten, as macros.
"""

from .runtime.interpreter import Interpreter
from .runtime.editor import StringEditor
from .support.interfaces import LanguageError, CompileError, ExpansionError, Halt
