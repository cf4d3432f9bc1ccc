"""
Hand-made Matchable instances, for the shapes that either have no
generic representation (native sequences and dictionaries) or else
are parametric in some other container (Compose, Free, Cofree).
"""
from operator import itemgetter
from .ontology import Mismatch, force
from .capability import Matchable, COMBINER, instance, match_with
from .prelude import Compose, Free, Pure, Wrapped, Cofree

by_key = itemgetter(0)

class SequenceInstance(Matchable):
	""" Same length, then element by element. """
	def match_with(self, u:COMBINER, ta, tb):
		if len(ta) != len(tb):
			raise Mismatch("lengths differ: %d vs %d" % (len(ta), len(tb)))
		return self.kind(u(a, b) for a, b in zip(ta, tb))

@instance(list)
class ListInstance(SequenceInstance): pass

@instance(tuple)
class TupleInstance(SequenceInstance): pass

@instance(dict)
class OrderedMapInstance(Matchable):
	"""
	Both sides in ascending order of key. The key sequences must be identical,
	which means the same keys, the same number of them, nothing extra either side.
	The result comes back in ascending key order too.
	"""
	def match_with(self, u:COMBINER, ta, tb):
		if len(ta) != len(tb):
			raise Mismatch("key counts differ: %d vs %d" % (len(ta), len(tb)))
		result = {}
		for (ka, va), (kb, vb) in zip(sorted(ta.items(), key=by_key), sorted(tb.items(), key=by_key)):
			if ka != kb: raise Mismatch("keys differ: %r vs %r" % (ka, kb))
			result[ka] = u(va, vb)
		return result

@instance(Compose)
class ComposeInstance(Matchable):
	def match_with(self, u:COMBINER, ta:Compose, tb:Compose):
		return Compose(match_with(lambda ia, ib: match_with(u, ia, ib), ta.outer, tb.outer))

@instance(Free)
class FreeInstance(Matchable):
	"""
	Leaves combine with the given combiner. Layers match according to
	whatever container the layer happens to be. A leaf never matches a layer.
	"""
	def match_with(self, u:COMBINER, ta:Free, tb:Free):
		def go(a, b):
			a, b = force(a), force(b)
			if isinstance(a, Pure) and isinstance(b, Pure):
				return Pure(u(a.value, b.value))
			if isinstance(a, Wrapped) and isinstance(b, Wrapped):
				return Wrapped(match_with(go, force(a.layer), force(b.layer)))
			raise Mismatch("%s vs %s" % (type(a).__name__, type(b).__name__))
		return go(ta, tb)

@instance(Cofree)
class CofreeInstance(Matchable):
	"""
	Heads combine, and the tails match recursively.

	Tails are forced only as the match reaches them. A pair of nodes
	already under comparison further up is taken to match, and the
	result node for that pair gets shared. So a cyclic structure comes
	back as a cyclic result instead of an endless recursion.

	A structure that keeps making fresh nodes forever will, of course,
	recurse forever. Only finite or cyclic structures are supported.
	"""
	def match_with(self, u:COMBINER, ta:Cofree, tb:Cofree):
		in_progress = {}
		def go(a:Cofree, b:Cofree):
			if not (isinstance(a, Cofree) and isinstance(b, Cofree)):
				raise Mismatch("%s vs %s" % (type(a).__name__, type(b).__name__))
			key = id(a), id(b)
			try: return in_progress[key]
			except KeyError: pass
			node = in_progress[key] = Cofree(u(a.head, b.head), None)
			node.tail = match_with(go, a.children(), b.children())
			return node
		return go(ta, tb)
