"""
The standard primitive repertoire. Importing this package registers everything into STANDARD.
"""

from .registry import STANDARD, PrimitiveTable, make_primitive
from . import forms, strings, arithmetic, variables, editing, library
