"""
Matchable for free, given a generic representation.

Decorate a record type, or the base class of a family of record types,
with `@derive` and you get a Matchable instance which works by taking
both values apart into representation nodes, matching those piece by
piece, and putting the result back together.

For example:

	@derive
	class Tree[A]: pass

	@dataclass
	class Leaf[A](Tree[A]):
		value: A

	@dataclass
	class Node[A](Tree[A]):
		label: str
		kids: list[Tree[A]]

Leaves only match leaves, nodes only match nodes with the same label
and the same number of kids, and so on down.

The representation is worked out at first use, not at decoration time,
because the cases of a family are usually defined after the base.
"""
from typing import Optional
from boozetools.support.foundation import Visitor
from .ontology import Mismatch
from .capability import Matchable, COMBINER, register, lookup
from . import capability, representation
from .representation import Shape, Unit, Slot, Embedded, Opaque, Choice, Product, Nest, Meta, Void

class NodeMatcher(Visitor):
	"""
	Matches two representation nodes of the same shape.
	The left-hand node decides which method applies;
	the shape guarantees the right-hand node agrees
	at least as far as the first choice.
	"""
	def __init__(self, u:COMBINER):
		self._u = u

	def match(self, a, b):
		return self.visit(a, b)

	def visit_Void(self, a:Void, b):
		raise AssertionError("Somehow a value of an empty type turned up.")

	def visit_Unit(self, a:Unit, b:Unit):
		return a

	def visit_Slot(self, a:Slot, b:Slot):
		return Slot(self._u(a.value, b.value))

	def visit_Embedded(self, a:Embedded, b:Embedded):
		return Embedded(capability.match_with(self._u, a.container, b.container))

	def visit_Opaque(self, a:Opaque, b:Opaque):
		if a.value == b.value: return a
		raise Mismatch("fields differ: %r vs %r" % (a.value, b.value))

	def visit_Choice(self, a:Choice, b:Choice):
		if a.side != b.side:
			pattern = "different cases: %s vs %s"
			raise Mismatch(pattern % (representation.constructor_name(a), representation.constructor_name(b)))
		return Choice(a.side, self.visit(a.inner, b.inner))

	def visit_Product(self, a:Product, b:Product):
		return Product(self.visit(a.first, b.first), self.visit(a.second, b.second))

	def visit_Nest(self, a:Nest, b:Nest):
		return Nest(capability.match_with(self.match, a.container, b.container))

	def visit_Meta(self, a:Meta, b:Meta):
		assert a.shape is b.shape, (a.shape, b.shape)
		return Meta(a.shape, self.visit(a.inner, b.inner))


class GenericInstance(Matchable):
	_shape : Optional[Shape] = None

	def shape(self) -> Shape:
		if self._shape is None:
			self._shape = representation.describe(self.kind)
		return self._shape

	def match_with(self, u:COMBINER, ta, tb):
		shape = self.shape()
		matched = NodeMatcher(u).match(shape.encode(ta), shape.encode(tb))
		return shape.decode(matched)


def derive(cls:type) -> type:
	""" Class decorator: Give this type a Matchable instance based on its generic representation. """
	register(cls, GenericInstance())
	return cls

def generic_zip_match_with(f:COMBINER, ta, tb):
	"""
	The Optional-returning form, insisting on a derived instance.
	Handy for writing a hand-made instance that defers to the generic one.
	"""
	it = lookup(type(ta))
	if not isinstance(it, GenericInstance):
		raise TypeError("%s has no derived Matchable instance" % type(ta).__name__)
	if lookup(type(tb)) is not it: return None
	try: return it.match_with(f, ta, tb)
	except Mismatch: return None
