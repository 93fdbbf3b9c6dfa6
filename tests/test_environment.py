import unittest

from minijs.algebra import Supply, TypeVariable, Function, ArrayOf, NUMBER, STRING, compress
from minijs.environment import TypeEnvironment
from minijs.space import AlreadyExists, Layer

class ScopeTests(unittest.TestCase):
	def setUp(self) -> None:
		self.env = TypeEnvironment(Supply())

	def test_push_and_pop(self):
		self.assertEqual(0, self.env.depth())
		self.env.push_scope()
		self.env.push_scope()
		self.assertEqual(2, self.env.depth())
		self.env.pop_scope()
		self.env.pop_scope()
		self.assertEqual(0, self.env.depth())

	def test_cannot_pop_the_root(self):
		with self.assertRaises(RuntimeError):
			self.env.pop_scope()

	def test_inner_names_vanish(self):
		self.env.bind("outer", NUMBER)
		self.env.push_scope()
		self.env.bind("inner", STRING)
		self.assertIs(NUMBER, self.env.lookup("outer"))
		self.assertIs(STRING, self.env.lookup("inner"))
		self.env.pop_scope()
		self.assertIsNone(self.env.lookup("inner"))

	def test_shadowing(self):
		self.env.bind("x", NUMBER)
		with self.env.function_scope():
			self.env.bind("x", STRING)
			self.assertIs(STRING, self.env.lookup("x"))
		self.assertIs(NUMBER, self.env.lookup("x"))

	def test_duplicate_in_one_scope(self):
		self.env.bind("x", NUMBER)
		with self.assertRaises(AlreadyExists):
			self.env.bind("x", NUMBER)

	def test_unbound(self):
		self.assertIsNone(self.env.lookup("nobody"))

	def test_function_scope_pops_on_exception(self):
		with self.assertRaises(ValueError):
			with self.env.function_scope():
				raise ValueError()
		self.assertEqual(0, self.env.depth())

class GenericityTests(unittest.TestCase):
	def setUp(self) -> None:
		self.supply = Supply()
		self.env = TypeEnvironment(self.supply)

	def test_let_bound_names_are_instantiated(self):
		v = self.supply()
		self.env.bind("id", Function([v], v))
		one, two = self.env.lookup("id"), self.env.lookup("id")
		self.assertIsNot(one.params[0], v)
		self.assertIsNot(one.params[0], two.params[0])
		self.assertIs(one.params[0], one.result)

	def test_parameters_are_monomorphic(self):
		p = self.supply()
		with self.env.function_scope([p]):
			self.env.bind("p", p)
			self.assertTrue(self.env.is_non_generic(p))
			self.assertIs(p, self.env.lookup("p"))
		self.assertFalse(self.env.is_non_generic(p))

	def test_marking_does_not_leak_outward(self):
		p, q = self.supply(), self.supply()
		with self.env.function_scope([p]):
			with self.env.function_scope():
				self.env.mark_non_generic(q)
				self.assertTrue(self.env.is_non_generic(p))
				self.assertTrue(self.env.is_non_generic(q))
			self.assertFalse(self.env.is_non_generic(q))

	def test_local_types_mentioning_parameters_are_instantiated_afresh(self):
		p = self.supply()
		with self.env.function_scope([p]):
			self.env.bind("p", p)
			self.env.bind("pair", ArrayOf(p))
			self.assertIs(p, self.env.lookup("p"))
			found = self.env.lookup("pair")
			self.assertIsInstance(found, ArrayOf)
			self.assertIsNot(p, found.element)
			p.resolved = NUMBER
			self.assertIsInstance(compress(found.element), TypeVariable)

class LayerTests(unittest.TestCase):
	def test_chain(self):
		root = Layer()
		root.mount("a", None, 1)
		inner = root.child()
		inner.mount("b", None, 2)
		self.assertIn("a", inner)
		self.assertIn("b", inner)
		self.assertNotIn("b", root)
		self.assertEqual(1, inner.value("a"))
		with self.assertRaises(AlreadyExists):
			inner.mount("b", None, 3)
		inner.mount("a", None, 4)
		self.assertEqual(4, inner.value("a"))
		self.assertEqual(1, root.value("a"))

if __name__ == '__main__':
	unittest.main()
