"""
Library files, and stopping.

Trouble with a library file is reported the MINT way: the primitive returns the
error message as its text, and returns nothing when all went well. That leaves the
macro code free to decide whether a missing library matters.
"""

import logging

from ..support.interfaces import CompileError, Halt
from .arithmetic import int_value
from .registry import STANDARD

logger = logging.getLogger(__name__)

@STANDARD.register('ll')
def load_library(ctx, path):
	try: ctx.host.load_file(path)
	except OSError as ex:
		logger.info("Could not load %s: %s", path, ex)
		return str(ex)
	except CompileError as ex: return ex.complaint()

@STANDARD.register('sl')
def save_library(ctx, path, *names):
	""" Write the named forms to a library file. Names which are not defined forms are skipped. """
	try: ctx.host.save_file(path, names)
	except OSError as ex: return str(ex)

@STANDARD.register('hl')
def halt(ctx, code):
	raise Halt(int_value(code))
