"""
Variables are named values that belong to the host rather than to the dictionary.
The interpreter supplies a few of its own settings this way, and a host application
can add more with Interpreter.define_variable.
"""

import logging

from ..support.interfaces import PrimitiveError
from .registry import STANDARD

logger = logging.getLogger(__name__)

@STANDARD.register('lv')
def load_variable(ctx, name):
	variable = ctx.host.variables.get(name)
	if variable is None:
		logger.debug("No variable named %r", name)
		return ''
	return variable.getter()

@STANDARD.register('sv')
def set_variable(ctx, name, value):
	variable = ctx.host.variables.get(name)
	if variable is None:
		logger.debug("No variable named %r", name)
	elif variable.setter is None:
		raise PrimitiveError(ctx.name, "Variable %r is read-only"%name)
	else: variable.setter(value)
