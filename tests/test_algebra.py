import unittest

from minijs.algebra import (
	Supply, Primitive, Function, ArrayOf,
	NUMBER, STRING, BOOL, compress, occurs_in, fresh, type_to_string,
)

class CompressionTests(unittest.TestCase):
	def setUp(self) -> None:
		self.supply = Supply()

	def test_unbound_variable_is_itself(self):
		v = self.supply()
		self.assertIs(v, compress(v))

	def test_path_compression(self):
		a, b, c = self.supply(), self.supply(), self.supply()
		a.resolved = b
		b.resolved = c
		c.resolved = NUMBER
		self.assertIs(NUMBER, compress(a))
		self.assertIs(NUMBER, a.resolved)
		self.assertIs(NUMBER, b.resolved)

	def test_concrete_types_are_untouched(self):
		fn = Function([NUMBER], STRING)
		self.assertIs(fn, compress(fn))

class SupplyTests(unittest.TestCase):
	def test_numbering_starts_afresh(self):
		self.assertEqual("t0", Supply()().name)
		self.assertEqual("t0", Supply()().name)

	def test_names(self):
		supply = Supply()
		self.assertEqual(["t0", "t1", "elem"], [supply().name, supply().name, supply("elem").name])

class OccursTests(unittest.TestCase):
	def test_occurs(self):
		supply = Supply()
		v, w = supply(), supply()
		self.assertTrue(occurs_in(v, v))
		self.assertTrue(occurs_in(v, ArrayOf(v)))
		self.assertTrue(occurs_in(v, Function([NUMBER, ArrayOf(v)], BOOL)))
		self.assertTrue(occurs_in(v, Function([], v)))
		self.assertFalse(occurs_in(v, Function([w], w)))
		self.assertFalse(occurs_in(v, STRING))

	def test_occurs_through_resolution(self):
		supply = Supply()
		v, w = supply(), supply()
		w.resolved = ArrayOf(v)
		self.assertTrue(occurs_in(v, w))

class RenderTests(unittest.TestCase):
	def test_shapes(self):
		supply = Supply()
		v = supply()
		self.assertEqual("t0", type_to_string(v))
		self.assertEqual("Number", type_to_string(NUMBER))
		self.assertEqual("Array<String>", type_to_string(ArrayOf(STRING)))
		self.assertEqual("(Number, t0) -> Bool", type_to_string(Function([NUMBER, v], BOOL)))
		self.assertEqual("() -> Array<Array<t0>>", type_to_string(Function([], ArrayOf(ArrayOf(v)))))

	def test_function_parameters_get_parentheses(self):
		inner = Function([NUMBER], STRING)
		self.assertEqual("(((Number) -> String)) -> (Number) -> String", type_to_string(Function([inner], inner)))

	def test_renders_through_resolution(self):
		supply = Supply()
		v = supply()
		v.resolved = Function([NUMBER], NUMBER)
		self.assertEqual("Array<(Number) -> Number>", type_to_string(ArrayOf(v)))
		self.assertEqual("(((Number) -> Number)) -> Bool", type_to_string(Function([v], BOOL)))

	def test_idempotent(self):
		supply = Supply()
		a, b = supply(), supply()
		a.resolved = b
		b.resolved = ArrayOf(STRING)
		t = Function([a], a)
		first = type_to_string(compress(t))
		self.assertEqual(first, type_to_string(compress(t)))
		self.assertEqual("(Array<String>) -> Array<String>", first)

	def test_str(self):
		self.assertEqual("Array<Bool>", str(ArrayOf(BOOL)))

class FreshTests(unittest.TestCase):
	def test_fresh_is_consistent(self):
		supply = Supply()
		v = supply()
		original = Function([v, NUMBER], v)
		copy = fresh(original, supply)
		self.assertIsNot(copy, original)
		self.assertIsNot(copy.params[0], v)
		self.assertIs(copy.params[0], copy.result)
		self.assertIs(NUMBER, copy.params[1])

	def test_each_instance_is_independent(self):
		supply = Supply()
		v = supply()
		one, two = fresh(ArrayOf(v), supply), fresh(ArrayOf(v), supply)
		self.assertIsNot(one.element, two.element)

	def test_resolved_variables_are_not_replaced(self):
		supply = Supply()
		v = supply()
		v.resolved = STRING
		self.assertIs(STRING, fresh(ArrayOf(v), supply).element)

	def test_every_unbound_variable_is_replaced(self):
		supply = Supply()
		v, p = supply(), supply()
		p.resolved = ArrayOf(v)
		copy = fresh(Function([v, p], v), supply)
		self.assertIsNot(v, copy.result)
		self.assertIs(copy.result, copy.params[0])
		self.assertIs(copy.result, copy.params[1].element)

	def test_primitive_leaves_are_shared(self):
		self.assertIs(NUMBER, fresh(NUMBER, Supply()))
		self.assertIsInstance(fresh(Primitive("Number"), Supply()), Primitive)

if __name__ == '__main__':
	unittest.main()
