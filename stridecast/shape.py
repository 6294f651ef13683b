from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator
from stridecast.errors import InvalidArgument, ShapeMismatch
from stridecast.helpers import DEBUG, all_instance, prod
import functools

@dataclass(frozen=True)
class Scalar:
  """Shape of a 0-dimensional operand. It has no dimensions to reconcile, which is not the same as `Dims(())`."""
  @property
  def rank(self) -> int: return 0
  def __repr__(self): return "Scalar"

SCALAR = Scalar()

@dataclass(frozen=True)
class Dims:
  sizes:tuple[int, ...]

  def __post_init__(self):
    if not isinstance(self.sizes, Iterable) or isinstance(self.sizes, str):
      raise InvalidArgument(f"Dimension sizes have to be a sequence of ints, got {self.sizes!r}")
    sizes = tuple(self.sizes)
    if not all_instance(sizes, int) or any(isinstance(s, bool) for s in sizes):
      raise InvalidArgument(f"Dimension sizes have to be ints, got {sizes}")
    if any(s < 0 for s in sizes): raise InvalidArgument(f"Dimension sizes cannot be negative, got {sizes}")
    object.__setattr__(self, "sizes", sizes)

  @property
  def rank(self) -> int: return len(self.sizes)
  @property
  def size(self) -> int: return prod(self.sizes)
  def __len__(self): return len(self.sizes)
  def __iter__(self) -> Iterator[int]: return iter(self.sizes)
  def __getitem__(self, i): return self.sizes[i]
  def __repr__(self): return f"Dims{self.sizes}"

Shape = Scalar|Dims

def to_shape(x:Shape|Iterable[int]|int|None) -> Shape:
  if x is None: return SCALAR
  if isinstance(x, (Scalar, Dims)): return x
  if isinstance(x, int) and not isinstance(x, bool): return Dims((x,))
  if isinstance(x, Iterable) and not isinstance(x, str): return Dims(tuple(x))
  raise InvalidArgument(f"Cannot interpret {x!r} as a shape")

def pad_shape(shape:Shape|Iterable[int]|None, rank:int) -> Dims:
  shape = to_shape(shape)
  if rank < shape.rank: raise InvalidArgument(f"Cannot pad {shape} of rank {shape.rank} down to rank {rank}")
  sizes = () if isinstance(shape, Scalar) else shape.sizes
  return Dims((1,)*(rank - len(sizes)) + sizes)

def _merge_dim(dim:int, sa:int, sb:int, shapes:tuple) -> int:
  if sa == sb or sb == 1: return sa
  if sa == 1: return sb
  raise ShapeMismatch(dim, (sa, sb), shapes)

def _aligned(a:Dims, b:Dims) -> tuple[Dims, Dims, tuple[int, ...]]:
  max_rank = max(a.rank, b.rank)
  pa, pb = pad_shape(a, max_rank), pad_shape(b, max_rank)
  try: merged = tuple(_merge_dim(i, sa, sb, (a, b)) for i, (sa, sb) in enumerate(zip(pa, pb)))
  except ShapeMismatch:
    if DEBUG: print(f"BROADCAST FAILED {a} {b}")
    raise
  return pa, pb, merged

def broadcast_shapes_to_max(shape_a:Shape|Iterable[int]|None, shape_b:Shape|Iterable[int]|None) -> tuple[Shape, Shape]:
  """
  Rank-aligns two shapes for broadcasting.

  Both shapes are left-padded with size-1 dimensions up to the larger rank and
  checked dimension by dimension. The returned pair is the two padded shapes
  before broadcasting, since each operand still addresses only its own buffer.
  The merged shape is `broadcast_shape(a, b)`.

  Scalar against scalar gives two scalars. Scalar against a shape gives that
  shape for both sides.

  Raises ShapeMismatch on the first (outermost) incompatible dimension.
  """
  a, b = to_shape(shape_a), to_shape(shape_b)
  if isinstance(a, Scalar) and isinstance(b, Scalar): return SCALAR, SCALAR
  if isinstance(a, Scalar): return b, b
  if isinstance(b, Scalar): return a, a
  pa, pb, _ = _aligned(a, b)
  if DEBUG >= 2: print(f"ALIGN {a} {b} -> {pa} {pb}")
  return pa, pb

def broadcast_shape(shape_a:Shape|Iterable[int]|None, shape_b:Shape|Iterable[int]|None) -> Shape:
  """Merged shape of two operands. A size-1 dimension against a size-0 one merges to 0, not to max(1, 0)."""
  a, b = to_shape(shape_a), to_shape(shape_b)
  if isinstance(a, Scalar): return b
  if isinstance(b, Scalar): return a
  return Dims(_aligned(a, b)[2])

def broadcast_shapes(*shapes:Shape|Iterable[int]|None) -> Shape:
  if not shapes: raise InvalidArgument("broadcast_shapes needs at least one shape")
  return functools.reduce(broadcast_shape, shapes[1:], to_shape(shapes[0]))

def can_broadcast(shape:Shape|Iterable[int]|None, target:Shape|Iterable[int]|None) -> bool:
  shape, target = to_shape(shape), to_shape(target)
  if shape.rank > target.rank: return False
  if isinstance(shape, Scalar) or isinstance(target, Scalar): return True
  return all(s == t or s == 1 for s, t in zip(pad_shape(shape, target.rank), target))
