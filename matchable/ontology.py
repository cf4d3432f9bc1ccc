"""
These most-fundamental definitions are separate from the rest
to avoid various circular-import scenarios. Every other module
in the package leans on something here.
"""
from typing import Any, Callable

class Mismatch(Exception):
	"""
	The one way a match can fail: the shapes differ, or else a combiner
	rejected a pair of elements. The message is only for the curious.
	Public entry points turn this into a plain `None`.
	"""
	def __init__(self, reason:str="shapes differ"):
		super().__init__(reason)
		self.reason = reason

class LawViolation(AssertionError):
	""" A Matchable instance failed to match a structure against itself. """

class DerivationError(TypeError):
	""" The type has no sensible generic representation. """

def pair(a, b) -> tuple:
	return a, b

###############################################################################

_ABSENT = object()

class Thunk:
	""" A kind of not-yet-value which can be forced. """
	def __init__(self, fn:Callable[[], Any]):
		self.fn = fn
		self.value = _ABSENT
	
	def __repr__(self):
		if self.value is _ABSENT:
			return "<Thunk: %s>" % getattr(self.fn, "__name__", self.fn)
		else:
			return repr(self.value)
	
	def force(self):
		if self.value is _ABSENT:
			self.value = self.fn()
			del self.fn
		return self.value

def delay(fn:Callable[[], Any]) -> Thunk:
	return Thunk(fn)

def force(it):
	"""
	Force repeatedly until the result is no longer a thunk, then return that result.
	A thunk may well produce another thunk.
	"""
	while isinstance(it, Thunk): it = it.force()
	return it
