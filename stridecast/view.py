from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator
from stridecast.errors import InvalidArgument, ShapeMismatch
from stridecast.helpers import fully_flatten, get_shape, prod
from stridecast.shape import Shape, Scalar, SCALAR, to_shape, pad_shape, broadcast_shape
from stridecast.strides import strides_for_shape, synthesize_strides
import itertools

@dataclass(frozen=True)
class View():
  """
  Traversal pattern over a shared buffer.

  A view never owns, copies or writes its buffer. Every transformation returns
  a new view over the same buffer. A dimension with stride 0 and size > 1
  aliases: all its indices hit the same buffer cells, so writing through such
  a view is only safe when the caller accounts for that (see `aliased`).
  """
  shape:Shape
  strides:tuple[int, ...]|None
  offset:int = 0
  buffer:Any = field(default=None, compare=False, repr=False)

  def __post_init__(self):
    object.__setattr__(self, "shape", shape := to_shape(self.shape))
    if isinstance(shape, Scalar):
      if self.strides is not None: raise InvalidArgument(f"Scalar view cannot have strides, got {self.strides}")
      return
    if self.strides is None: raise InvalidArgument(f"View of shape {shape} needs strides")
    object.__setattr__(self, "strides", strides := tuple(self.strides))
    if len(strides) != shape.rank: raise InvalidArgument(f"Strides {strides} do not match shape {shape}")

  @staticmethod
  def create(shape:Shape|Iterable[int]|None=None, buffer:Any=None, offset:int=0) -> View:
    shape = to_shape(shape)
    if isinstance(shape, Scalar): return View(SCALAR, None, offset, buffer)
    return View(shape, strides_for_shape(shape.sizes), offset, buffer)

  @staticmethod
  def from_nested(data) -> View:
    shape = get_shape(data)
    return View.create(shape if shape else SCALAR, fully_flatten(data))

  @property
  def ndim(self) -> int: return self.shape.rank
  @property
  def size(self) -> int: return 1 if isinstance(self.shape, Scalar) else prod(self.shape)
  @property
  def contiguous(self) -> bool:
    return isinstance(self.shape, Scalar) or self.strides == strides_for_shape(self.shape.sizes)

  def pad(self, rank:int) -> View:
    shape = pad_shape(self.shape, rank)
    strides = self.strides or ()
    return View(shape, (0,)*(rank - len(strides)) + strides, self.offset, self.buffer)

  def broadcast_to(self, target:Shape|Iterable[int]|None) -> View:
    target = to_shape(target)
    if isinstance(target, Scalar):
      if not isinstance(self.shape, Scalar): raise InvalidArgument(f"Cannot broadcast view of shape {self.shape} to a scalar")
      return self
    aligned = self.pad(target.rank)
    for i, (s, t) in enumerate(zip(aligned.shape, target)):
      if s != t and s != 1: raise ShapeMismatch(i, (s, t), (self.shape, target))
    return View(target, synthesize_strides(aligned.shape, aligned.strides, target), self.offset, self.buffer)

  def _dim(self, dim:int) -> int:
    if not -self.ndim <= dim < self.ndim: raise InvalidArgument(f"Dimension {dim} out of range for shape {self.shape}")
    return dim % self.ndim

  def is_broadcast(self, dim:int) -> bool:
    dim = self._dim(dim)
    return self.strides[dim] == 0 and self.shape[dim] > 1
  @property
  def broadcast_dims(self) -> tuple[int, ...]: return tuple(i for i in range(self.ndim) if self.is_broadcast(i))
  @property
  def aliased(self) -> bool: return bool(self.broadcast_dims)

  def get_index(self, indices:int|Iterable[int]=()) -> int:
    indices = (indices,) if isinstance(indices, int) else tuple(indices)
    if len(indices) != self.ndim: raise InvalidArgument(f"Expected {self.ndim} indices for shape {self.shape}, got {indices}")
    index = self.offset
    for i, s, st in zip(indices, self.shape.sizes if self.ndim else (), self.strides or ()):
      if not 0 <= i < s: raise IndexError(f"Index {i} out of bounds for dimension of size {s}")
      index += i * st
    return index

  def positions(self) -> Iterator[int]:
    if isinstance(self.shape, Scalar):
      yield self.offset
      return
    for indices in itertools.product(*(range(s) for s in self.shape)): yield self.get_index(indices)

  def read(self, indices:int|Iterable[int]=()):
    if self.buffer is None: raise InvalidArgument("View has no buffer to read from")
    return self.buffer[self.get_index(indices)]

  def tolist(self):
    if self.buffer is None: raise InvalidArgument("View has no buffer to read from")
    if isinstance(self.shape, Scalar): return self.buffer[self.offset]
    def _build(dim:int, base:int):
      if dim == self.ndim: return self.buffer[base]
      return [_build(dim + 1, base + i * self.strides[dim]) for i in range(self.shape[dim])]
    return _build(0, self.offset)

def broadcast_views(view_a:View, view_b:View) -> tuple[View, View]:
  """Broadcasts two views against each other. The results share shape and keep their own buffers."""
  target = broadcast_shape(view_a.shape, view_b.shape)
  return view_a.broadcast_to(target), view_b.broadcast_to(target)
