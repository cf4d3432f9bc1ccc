"""
The Matching Capability
========================

A container type is Matchable when two of its values can be laid
over each other exactly: same length, same branch choices, same keys,
same everything except the elements. When that works, the elements
line up in pairs and we get back one container of the same shape.

Only one operation is essential: `match_with(u, ta, tb)`, which
either returns the container of `u(a, b)` for every aligned pair,
or else raises `Mismatch`. The combiner `u` may also raise `Mismatch`
to reject a particular pair. Nothing partial ever comes out.

Everything else here is defined in terms of that one primitive:

	zip_match_with   -- same, but returns None rather than raising
	zip_match        -- pairs up the elements
	zipzip_match     -- two levels at once
	fmap_recovered   -- map a container by matching it against itself
	eq_default       -- structural equality
	lift_eq_default  -- structural equality under a given element relation

Instances are objects, registered against the Python class they serve.
The module-level functions find the instance by walking the MRO of the
first container's class. Should the second container resolve to some
other instance (say, a list against a tuple) then that is simply a
difference in shape.

The laws, which every instance must obey:

	zip_match(ta, tb) == tab   iff   fmap(first, tab) == ta and fmap(second, tab) == tb
	zip_match(ta, tb) == zip_match_with(pair, ta, tb)
	zip_match_with(f, ta, tb) == fmap(f, zip_match(ta, tb))   whenever f accepts every pair
"""
import operator
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional
from .ontology import Mismatch, LawViolation, pair

COMBINER = Callable[[Any, Any], Any]

class Matchable(ABC):
	""" Root for the objects that know how to match one kind of container. """
	kind: type = None

	@abstractmethod
	def match_with(self, u:COMBINER, ta, tb):
		""" Return the zipped container or raise Mismatch. """

	def zip_match_with(self, f:COMBINER, ta, tb) -> Optional[Any]:
		try: return self.match_with(f, ta, tb)
		except Mismatch: return None

	def zip_match(self, ta, tb) -> Optional[Any]:
		return self.zip_match_with(pair, ta, tb)

	def fmap(self, f:Callable, ta):
		try: return self.match_with(lambda a, _: f(a), ta, ta)
		except Mismatch as ex:
			raise LawViolation("%r failed to match a value against itself: %s" % (self, ex.reason)) from ex

	def __repr__(self):
		return "<%s for %s>" % (type(self).__name__, getattr(self.kind, "__name__", self.kind))

def agreement(eq):
	""" A combiner that accepts a pair only if its members are equal by `eq`. """
	def u(x, y):
		if not eq(x, y): raise Mismatch("elements differ: %r vs %r" % (x, y))
	return u

###############################################################################

INSTANCES : dict[type, Matchable] = {}

def register(kind:type, it:Matchable) -> Matchable:
	assert isinstance(it, Matchable), it
	it.kind = kind
	INSTANCES[kind] = it
	return it

def instance(kind:type):
	""" Class decorator: register one of these for the given kind of container. """
	def decorate(cls):
		register(kind, cls())
		return cls
	return decorate

def lookup(kind:type) -> Optional[Matchable]:
	for k in kind.__mro__:
		try: return INSTANCES[k]
		except KeyError: pass
	return None

def instance_of(value) -> Matchable:
	it = lookup(type(value))
	if it is None:
		raise TypeError("%s is not a Matchable container" % type(value).__name__)
	return it

###############################################################################

def match_with(u:COMBINER, ta, tb):
	""" The raising form, dispatched on the class of `ta`. """
	it = instance_of(ta)
	other = lookup(type(tb))
	if other is not it:
		raise Mismatch("different kinds of container: %s vs %s" % (type(ta).__name__, type(tb).__name__))
	return it.match_with(u, ta, tb)

def zip_match_with(f:COMBINER, ta, tb) -> Optional[Any]:
	try: return match_with(f, ta, tb)
	except Mismatch: return None

def zip_match(ta, tb) -> Optional[Any]:
	return zip_match_with(pair, ta, tb)

def zipzip_match(ta, tb) -> Optional[Any]:
	return zip_match_with(lambda ua, ub: match_with(pair, ua, ub), ta, tb)

def fmap_recovered(f:Callable, ta):
	"""
	Not recommended as a way to implement mapping in general,
	hence the name. But every Matchable can do it.
	"""
	return instance_of(ta).fmap(f, ta)

def lift_eq_default(eq:Callable[[Any, Any], bool], tx, ty) -> bool:
	return zip_match_with(agreement(eq), tx, ty) is not None

def eq_default(ta, tb) -> bool:
	return lift_eq_default(operator.eq, ta, tb)
