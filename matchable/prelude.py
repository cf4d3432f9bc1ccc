"""
A handful of small container types that everything else can lean on.

Most of them get their Matchable instance by derivation.
The last three cannot: `Compose`, `Free` and `Cofree` are parametric in
another container type, which type annotations have no way to say.
Their instances are written out by hand in `instances`.
"""
from dataclasses import dataclass
from typing import Any
from .ontology import force
from .capability import eq_default
from .generic import derive

@derive
@dataclass(frozen=True)
class Identity[A]:
	value: A

@derive
@dataclass(frozen=True)
class Const[C, A]:
	""" Never holds an element; matches when the constants are equal. """
	value: C

@derive
class Maybe[A]:
	pass

@dataclass(frozen=True)
class Nothing[A](Maybe[A]):
	pass

@dataclass(frozen=True)
class Just[A](Maybe[A]):
	value: A

@derive
class Either[E, A]:
	pass

@dataclass(frozen=True)
class Left[E, A](Either[E, A]):
	value: E

@dataclass(frozen=True)
class Right[E, A](Either[E, A]):
	value: A

@derive
@dataclass(frozen=True)
class Pair[E, A]:
	""" The first component is carried along; the second is the element. """
	first: E
	second: A

@derive
@dataclass(frozen=True)
class NonEmpty[A]:
	head: A
	tail: list[A]

###############################################################################

@dataclass(frozen=True)
class Compose:
	""" An outer container whose elements are inner containers. """
	outer: Any

class Free:
	""" Either a leaf, or one more layer of some container around more of the same. """

@dataclass(frozen=True)
class Pure(Free):
	value: Any

@dataclass(frozen=True)
class Wrapped(Free):
	layer: Any  # A container of Free, or a thunk that makes one.

@dataclass(eq=False)
class Cofree:
	"""
	A value at every node, and a container of sub-trees beneath it.
	The tail may be a thunk, so the structure unfolds only as far as anybody looks.
	A tail may also lead back to an ancestor, making the structure cyclic.
	"""
	head: Any
	tail: Any

	def children(self):
		return force(self.tail)

	def __eq__(self, other):
		return isinstance(other, Cofree) and eq_default(self, other)
