"""
An in-memory EditorHandle: one buffer held as a string, a queue of input events,
and lists which collect whatever is written to the screen and the status line.
It's what the interpreter uses when no editor is supplied, and it's handy in tests.
"""

from collections import deque
from typing import Iterable

from ..support.interfaces import EditorHandle

class StringEditor(EditorHandle):
	def __init__(self, text:str='', *, keys:Iterable[str]=()):
		self.text = text
		self.point = 0
		self.keys = deque(keys)
		self.output = []
		self.status = []

	def __clamp(self, position:int) -> int:
		return min(max(0, position), len(self.text))

	def size(self) -> int:
		return len(self.text)

	def read(self, start:int, stop:int) -> str:
		return self.text[self.__clamp(start):self.__clamp(stop)]

	def insert(self, position:int, text:str):
		position = self.__clamp(position)
		self.text = self.text[:position] + text + self.text[position:]
		if self.point >= position: self.point += len(text)

	def delete(self, start:int, stop:int):
		start, stop = sorted((self.__clamp(start), self.__clamp(stop)))
		self.text = self.text[:start] + self.text[stop:]
		if self.point >= stop: self.point -= stop - start
		elif self.point > start: self.point = start

	def get_point(self) -> int:
		return self.point

	def set_point(self, position:int):
		self.point = self.__clamp(position)

	def feed(self, *keys:str):
		""" Queue up input events. """
		self.keys.extend(keys)

	def read_input(self) -> str:
		return self.keys.popleft() if self.keys else ''

	def write_output(self, text:str):
		self.output.append(text)

	def write_status(self, text:str):
		self.status.append(text)

	@property
	def screen(self) -> str:
		""" Everything written so far, run together. """
		return ''.join(self.output)
