import unittest

from matchable import (
	Compose, Pure, Wrapped, Cofree, Just, Nothing, delay, force,
	zip_match, zip_match_with, eq_default, fmap_recovered, Mismatch,
)

def _first(a, b): return a

class ComposeTests(unittest.TestCase):
	def test_inner_lists_pair_up(self):
		expect = Compose([[(1, 10), (2, 20)], [(3, 30)]])
		self.assertEqual(expect, zip_match(Compose([[1, 2], [3]]), Compose([[10, 20], [30]])))
	
	def test_inner_length_differs(self):
		self.assertIsNone(zip_match(Compose([[1, 2], [3]]), Compose([[10], [30]])))
	
	def test_outer_length_differs(self):
		self.assertIsNone(zip_match(Compose([[1, 2], [3]]), Compose([[10, 20]])))
	
	def test_mixed_containers(self):
		self.assertEqual(Compose({"a": Just((1, 2))}), zip_match(Compose({"a": Just(1)}), Compose({"a": Just(2)})))
		self.assertIsNone(zip_match(Compose({"a": Just(1)}), Compose({"a": Nothing()})))

class FreeTests(unittest.TestCase):
	def test_leaves_combine(self):
		self.assertEqual(Pure(3), zip_match_with(lambda a, b: a + b, Pure(1), Pure(2)))
	
	def test_leaf_never_matches_layer(self):
		self.assertIsNone(zip_match(Pure(1), Wrapped([Pure(2)])))
		self.assertIsNone(zip_match(Wrapped([]), Pure(1)))
	
	def test_layers_match_recursively(self):
		ta = Wrapped([Pure(1), Wrapped({"k": Pure(2)})])
		tb = Wrapped([Pure('a'), Wrapped({"k": Pure('b')})])
		self.assertEqual(Wrapped([Pure((1, 'a')), Wrapped({"k": Pure((2, 'b'))})]), zip_match(ta, tb))
	
	def test_layer_shapes_must_agree(self):
		self.assertIsNone(zip_match(Wrapped([Pure(1)]), Wrapped([Pure(1), Pure(2)])))
		self.assertIsNone(zip_match(Wrapped([Pure(1)]), Wrapped({0: Pure(1)})))
	
	def test_thunked_layers_are_forced(self):
		ta = Wrapped(delay(lambda: [Pure(1)]))
		self.assertEqual(Wrapped([Pure((1, 2))]), zip_match(ta, Wrapped([Pure(2)])))
	
	def test_fmap_recovered(self):
		self.assertEqual(Wrapped([Pure(2), Pure(3)]), fmap_recovered(lambda x: x + 1, Wrapped([Pure(1), Pure(2)])))

def _finite(head, *kids):
	return Cofree(head, list(kids))

class CofreeTests(unittest.TestCase):
	def test_heads_and_tails_combine(self):
		ta = _finite(1, _finite(2), _finite(3))
		tb = _finite('a', _finite('b'), _finite('c'))
		got = zip_match(ta, tb)
		self.assertEqual((1, 'a'), got.head)
		self.assertEqual([(2, 'b'), (3, 'c')], [kid.head for kid in got.children()])
	
	def test_tail_shapes_must_agree(self):
		self.assertIsNone(zip_match(_finite(1, _finite(2)), _finite(1)))
		self.assertIsNone(zip_match(_finite(1, _finite(2, _finite(3))), _finite(1, _finite(2))))
	
	def test_head_rejection(self):
		def reject(a, b): raise Mismatch("no")
		self.assertIsNone(zip_match_with(reject, _finite(1), _finite(1)))
	
	def test_structural_equality(self):
		self.assertEqual(_finite(1, _finite(2)), _finite(1, _finite(2)))
		self.assertNotEqual(_finite(1, _finite(2)), _finite(1, _finite(3)))
		self.assertTrue(eq_default(_finite(1), _finite(1)))
	
	def test_tails_unfold_on_demand(self):
		forced = []
		def tail():
			forced.append(True)
			return [_finite(2)]
		ta = Cofree(1, delay(tail))
		self.assertEqual([], forced)
		got = zip_match(ta, _finite(1, _finite(2)))
		self.assertEqual([True], forced)
		self.assertEqual((2, 2), got.children()[0].head)
		zip_match(ta, ta)
		self.assertEqual([True], forced)
	
	def test_cycles_match(self):
		ones = Cofree(1, None)
		ones.tail = delay(lambda: [ones])
		twos = Cofree(2, None)
		twos.tail = [twos]
		got = zip_match(ones, twos)
		self.assertEqual((1, 2), got.head)
		self.assertIs(got, force(got.tail)[0])
	
	def test_cycles_of_different_lengths(self):
		a1 = Cofree(0, None)
		a1.tail = [a1]
		b1, b2 = Cofree(0, None), Cofree(0, None)
		b1.tail, b2.tail = [b2], [b1]
		self.assertEqual((0, 0), zip_match(a1, b1).head)
		c1 = Cofree(0, None)
		c1.tail = [c1, c1]
		self.assertIsNone(zip_match(a1, c1))
	
	def test_cycle_with_a_rejected_head(self):
		a = Cofree(1, None)
		a.tail = [Cofree(2, [a])]
		b = Cofree(1, None)
		b.tail = [Cofree(3, [b])]
		self.assertFalse(eq_default(a, b))
		self.assertTrue(eq_default(a, a))
	
	def test_fmap_recovered(self):
		got = fmap_recovered(str, _finite(1, _finite(2)))
		self.assertEqual(_finite("1", _finite("2")), got)

if __name__ == '__main__':
	unittest.main()
