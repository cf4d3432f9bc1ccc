"""
Generic Representation
=======================

Any record type, and any family of record types sharing a base class,
can be taken apart into a small closed set of structural pieces:

	Void      -- no constructors at all; there are no such values
	Unit      -- a constructor with no fields
	Slot      -- a field holding one element
	Embedded  -- a field holding some other Matchable container of elements
	Opaque    -- a field that never holds elements, such as a label
	Choice    -- which of two alternatives a value took
	Product   -- two pieces side by side
	Nest      -- a Matchable container whose elements are themselves pieces

plus `Meta`, which remembers the constructor so the pieces can be put
back together. These node types exist only for the duration of a match.

The type-level counterpart is a `Shape`, computed once per derived type
by reading type parameters and field annotations. A shape can encode
a value into nodes and decode nodes back into a value.

The element type is always the LAST type parameter of the constructor.
Any other parameters are just more opaque stuff.
"""
import dataclasses
import inspect
import typing
from typing import Any, NamedTuple, Optional, Sequence
from .ontology import DerivationError
from . import capability

class Void:
	""" Uninhabited. """
	def __new__(cls, *args):
		raise DerivationError("There are no values of a type with no cases.")

class Unit(NamedTuple):
	pass

class Slot(NamedTuple):
	value: Any

class Embedded(NamedTuple):
	container: Any

class Opaque(NamedTuple):
	value: Any

class Choice(NamedTuple):
	side: int  # zero or one
	inner: Any

class Product(NamedTuple):
	first: Any
	second: Any

class Nest(NamedTuple):
	container: Any

class Meta(NamedTuple):
	shape: "RecordShape"
	inner: Any

###############################################################################

class Shape:
	def encode(self, value): raise NotImplementedError(type(self))
	def decode(self, node): raise NotImplementedError(type(self))

class SlotShape(Shape):
	def encode(self, value): return Slot(value)
	def decode(self, node): return node.value
	def __repr__(self): return "slot"

class OpaqueShape(Shape):
	def encode(self, value): return Opaque(value)
	def decode(self, node): return node.value
	def __repr__(self): return "opaque"

class EmbeddedShape(Shape):
	def __init__(self, kind:type):
		self.kind = kind
	def encode(self, value): return Embedded(value)
	def decode(self, node): return node.container
	def __repr__(self): return self.kind.__name__

class NestShape(Shape):
	""" The outer container does the mapping, so it had better be Matchable. """
	def __init__(self, kind:type, inner:Shape):
		self.kind, self.inner = kind, inner
	def encode(self, value): return Nest(capability.fmap_recovered(self.inner.encode, value))
	def decode(self, node): return capability.fmap_recovered(self.inner.decode, node.container)
	def __repr__(self): return "%s[%r]" % (self.kind.__name__, self.inner)

class RecordShape(Shape):
	"""
	One constructor: some fixed number of parts, each with a shape.
	The parts go into a balanced tree of products.
	"""
	def __init__(self, name:str, parts:Sequence[Shape], project, build):
		self.name = name
		self.parts = tuple(parts)
		self._project = project
		self._build = build

	def encode(self, value):
		values = self._project(value)
		if len(values) != len(self.parts):
			raise TypeError("%r does not have the %d parts of %s" % (value, len(self.parts), self.name))
		pieces = [s.encode(v) for s, v in zip(self.parts, values)]
		return Meta(self, _multiply(pieces))

	def decode(self, node):
		assert node.shape is self, (node.shape, self)
		pieces = _divide(node.inner, len(self.parts))
		return self._build([s.decode(p) for s, p in zip(self.parts, pieces)])

	def __repr__(self):
		return "%s(%s)" % (self.name, ", ".join(map(repr, self.parts)))

class SumShape(Shape):
	"""
	The alternatives go into a balanced tree of binary choices.
	With no alternatives at all, the type is void.
	"""
	def __init__(self, base:type, alternatives:Sequence[tuple[type, RecordShape]]):
		self.base = base
		self.alternatives = tuple(alternatives)

	def _index(self, value) -> int:
		for i, (cls, _) in enumerate(self.alternatives):
			if type(value) is cls: return i
		for i, (cls, _) in enumerate(self.alternatives):
			if isinstance(value, cls): return i
		raise TypeError("%r is not any case of %s" % (value, self.base.__name__))

	def encode(self, value):
		if not self.alternatives:
			raise DerivationError("%s has no cases, so %r cannot be one of them." % (self.base.__name__, value))
		i = self._index(value)
		return _inject(i, len(self.alternatives), self.alternatives[i][1].encode(value))

	def decode(self, node):
		i, inner = _select(node, len(self.alternatives))
		return self.alternatives[i][1].decode(inner)

	def __repr__(self):
		return " | ".join(repr(shape) for _, shape in self.alternatives) or "void"

def _multiply(pieces):
	if not pieces: return Unit()
	if len(pieces) == 1: return pieces[0]
	half = len(pieces) // 2
	return Product(_multiply(pieces[:half]), _multiply(pieces[half:]))

def _divide(node, n) -> list:
	if n == 0: return []
	if n == 1: return [node]
	half = n // 2
	return _divide(node.first, half) + _divide(node.second, n - half)

def _inject(i, n, node):
	if n == 1: return node
	half = n // 2
	if i < half: return Choice(0, _inject(i, half, node))
	else: return Choice(1, _inject(i-half, n-half, node))

def _select(node, n) -> tuple[int, Any]:
	offset = 0
	while n > 1:
		half = n // 2
		if node.side: offset, n = offset+half, n-half
		else: n = half
		node = node.inner
	return offset, node

def constructor_name(node) -> Optional[str]:
	""" Chase down through choices to find out which constructor made this. """
	while isinstance(node, Choice): node = node.inner
	if isinstance(node, Meta): return node.shape.name
	return None

###############################################################################

SLOT = SlotShape()
OPAQUE = OpaqueShape()

def mentions(hint, slot) -> bool:
	return hint is slot or any(mentions(a, slot) for a in typing.get_args(hint))

def describe_field(hint, slot) -> Shape:
	""" Classify a field's annotation relative to the element type. """
	if slot is None or not mentions(hint, slot): return OPAQUE
	if hint is slot: return SLOT
	origin, args = typing.get_origin(hint), typing.get_args(hint)
	if origin is tuple:
		if len(args) == 2 and args[1] is Ellipsis:
			return _container(tuple, args[0], hint, slot)
		return _tuple_shape(args, slot)
	if origin is None or not isinstance(origin, type):
		raise DerivationError("Cannot represent %r generically." % (hint,))
	*others, last = args
	if any(mentions(a, slot) for a in others):
		raise DerivationError("In %r, the element type may only appear as the last argument." % (hint,))
	return _container(origin, last, hint, slot)

def _container(origin, last, hint, slot) -> Shape:
	if capability.lookup(origin) is None:
		raise DerivationError("In %r, %s is not a Matchable container." % (hint, origin.__name__))
	if last is slot: return EmbeddedShape(origin)
	return NestShape(origin, describe_field(last, slot))

def _tuple_shape(args, slot) -> RecordShape:
	parts = [describe_field(a, slot) for a in args]
	return RecordShape("tuple", parts, tuple, tuple)

def _record_fields(cls) -> list[str]:
	if dataclasses.is_dataclass(cls):
		return [f.name for f in dataclasses.fields(cls) if f.init]
	if issubclass(cls, tuple) and hasattr(cls, "_fields"):
		return list(cls._fields)
	raise DerivationError("%s is neither a dataclass nor a NamedTuple." % cls.__name__)

def is_record(cls) -> bool:
	return dataclasses.is_dataclass(cls) or (issubclass(cls, tuple) and hasattr(cls, "_fields"))

def _substitute(hint, env:dict):
	if not env: return hint
	if isinstance(hint, typing.TypeVar): return env.get(hint, hint)
	params = getattr(hint, "__parameters__", ())
	if params and typing.get_origin(hint) is not None:
		return hint[tuple(env.get(p, p) for p in params)]
	return hint

def _environments(cls) -> dict[type, dict]:
	"""
	Each generic ancestor has its own type variables, distinct from the
	ones of `cls` even where the names agree. Map each ancestor to the
	meaning of its variables, as seen from `cls`.
	"""
	envs = {}
	def walk(klass, env):
		if klass in envs: return
		envs[klass] = env
		for base in klass.__dict__.get("__orig_bases__", klass.__bases__):
			origin = typing.get_origin(base) or base
			if not isinstance(origin, type): continue
			params = getattr(origin, "__parameters__", ())
			walk(origin, {p: _substitute(a, env) for p, a in zip(params, typing.get_args(base))})
	walk(cls, {})
	return envs

def _field_hints(cls, names) -> dict:
	""" Annotations of each field, translated into the type variables of `cls`. """
	envs = _environments(cls)
	hints, resolved = {}, {}
	for n in names:
		owner = next((k for k in cls.__mro__ if n in inspect.get_annotations(k)), cls)
		if owner not in resolved:
			params = getattr(owner, "__parameters__", ())
			resolved[owner] = typing.get_type_hints(owner, localns={p.__name__: p for p in params})
		hints[n] = _substitute(resolved[owner][n], envs.get(owner, {}))
	return hints

def describe_record(cls) -> RecordShape:
	params = getattr(cls, "__parameters__", ())
	slot = params[-1] if params else None
	names = _record_fields(cls)
	hints = _field_hints(cls, names)
	parts = [describe_field(hints[n], slot) for n in names]
	def project(value): return [getattr(value, n) for n in names]
	def build(values): return cls(**dict(zip(names, values)))
	return RecordShape(cls.__name__, parts, project, build)

def _cases(base:type) -> list[type]:
	""" Every record class in the family, parents before children. """
	found = []
	def walk(cls):
		if cls in found: return
		if is_record(cls): found.append(cls)
		for sub in cls.__subclasses__(): walk(sub)
	walk(base)
	return found

def describe(base:type) -> Shape:
	"""
	A family of record classes is a sum of those classes, including the
	base itself if it is a record. A lone record is just the one record.
	A family with no records in it has no values at all.
	"""
	cases = _cases(base)
	if cases == [base]:
		return describe_record(base)
	return SumShape(base, [(cls, describe_record(cls)) for cls in cases])
