import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from stridecast.strides import *
from stridecast.shape import Dims, SCALAR, broadcast_shapes_to_max
from stridecast.view import View
from stridecast.errors import InvalidArgument
import unittest

class TestStridesForShape(unittest.TestCase):
  def test_default_strides(self):
    self.assertEqual(strides_for_shape((2, 3, 4)), (12, 4, 1))
    self.assertEqual(strides_for_shape(()), ())

  def test_size_one_dims_are_canonical(self):
    self.assertEqual(strides_for_shape((2, 1, 4)), (4, 0, 1))
    self.assertEqual(canonicalize_strides((1, 3), (3, 1)), (0, 1))

  def test_accepts_lists(self):
    self.assertEqual(canonicalize_strides([1, 3], [3, 1]), (0, 1))
    self.assertEqual(strides_for_shape([2, 3]), (3, 1))
    self.assertEqual(strides_for_shape(Dims((4, 2))), (2, 1))

class TestBroadcastStrides(unittest.TestCase):
  def test_basic_broadcast(self):
    shape = (3,)
    view = View.create(shape)
    aligned, _ = broadcast_shapes_to_max(shape, (2, 3))
    self.assertEqual(aligned, Dims((1, 3)))
    self.assertEqual(create_broadcast_strides(view.pad(aligned.rank), (2, 3)), (0, 1))

  def test_null_shape(self):
    view = View.create(None)
    aligned, _ = broadcast_shapes_to_max(None, None)
    self.assertIs(aligned, SCALAR)
    self.assertIsNone(create_broadcast_strides(view, None))

  def test_scalar_target_ignores_view(self):
    self.assertIsNone(create_broadcast_strides(View.create((2, 3)), None))
    self.assertIsNone(synthesize_strides((4,), (1,), SCALAR))

  def test_higher_rank_padding(self):
    _, aligned = broadcast_shapes_to_max((5, 1, 3), (3,))
    view = View.create((3,)).pad(aligned.rank)
    self.assertEqual(view.shape, Dims((1, 1, 3)))
    self.assertEqual(create_broadcast_strides(view, (5, 1, 3)), (0, 0, 1))
    self.assertEqual(create_broadcast_strides(view, (5, 4, 3)), (0, 0, 1))

  def test_keeps_existing_strides(self):
    view = View((1, 3), (7, 2), 5)
    self.assertEqual(create_broadcast_strides(view, (4, 3)), (0, 2))
    self.assertEqual(create_broadcast_strides(view, (1, 3)), (7, 2))

  def test_idempotent(self):
    view = View.create((4, 2, 3))
    aligned, other = broadcast_shapes_to_max(view.shape, view.shape)
    self.assertEqual(aligned, view.shape)
    self.assertEqual(other, view.shape)
    self.assertEqual(create_broadcast_strides(view, aligned), view.strides)

  def test_transposed_strides_carry_through(self):
    self.assertEqual(synthesize_strides((3, 1), (1, 3), (3, 5)), (1, 0))

  def test_rank_mismatch(self):
    self.assertRaises(InvalidArgument, create_broadcast_strides, View.create((3,)), (2, 3))
    self.assertRaises(InvalidArgument, create_broadcast_strides, View.create(None), (2, 3))
    self.assertRaises(InvalidArgument, synthesize_strides, (2, 3), (3,), (2, 3))

  def test_sizes_are_not_checked(self):
    self.assertEqual(synthesize_strides((3,), (1,), (1,)), (1,))
    self.assertEqual(synthesize_strides((3, 2), (2, 1), (4, 2)), (2, 1))

  def test_zero_sized_target(self):
    self.assertEqual(synthesize_strides((1, 3), (5, 1), (0, 3)), (5, 1))
    self.assertEqual(synthesize_strides((1, 3), (5, 1), (2, 3)), (0, 1))

if __name__ == '__main__':
  unittest.main()
