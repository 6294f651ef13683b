from __future__ import annotations
from typing import Iterable, TYPE_CHECKING
from stridecast.errors import InvalidArgument
from stridecast.helpers import DEBUG
from stridecast.shape import Shape, Scalar, to_shape
import functools, itertools, operator
if TYPE_CHECKING: from stridecast.view import View

@functools.lru_cache(maxsize=None)
def _canonicalize_strides(shape:tuple[int, ...], strides:tuple[int, ...]) -> tuple[int, ...]:
  return tuple(0 if s == 1 else st for s, st in zip(shape, strides))

@functools.lru_cache(maxsize=None)
def _strides_for_shape(shape:tuple[int, ...]) -> tuple[int, ...]:
  if not shape: return ()
  strides = tuple(itertools.accumulate(reversed(shape[1:]), operator.mul, initial=1))[::-1]
  return _canonicalize_strides(shape, strides)

def canonicalize_strides(shape:Iterable[int], strides:Iterable[int]) -> tuple[int, ...]: return _canonicalize_strides(tuple(shape), tuple(strides))
def strides_for_shape(shape:Iterable[int]) -> tuple[int, ...]: return _strides_for_shape(tuple(shape))

def synthesize_strides(shape:Shape|Iterable[int]|None, strides:Iterable[int]|None, target:Shape|Iterable[int]|None) -> tuple[int, ...]|None:
  """
  Strides that make a (shape, strides) pair read as `target`.

  `shape` has to be rank-aligned with `target` already (see `pad_shape` and
  `View.pad`). A size-1 dimension that `target` stretches to more than one
  element gets stride 0, so every index along it reads the same slice. Every
  other dimension keeps its stride; sizes are not checked against `target`
  here, that is the job of `broadcast_shapes_to_max`.

  A scalar target means there is nothing to synthesize and returns None,
  whatever `shape` is.
  """
  target = to_shape(target)
  if isinstance(target, Scalar): return None
  shape = to_shape(shape)
  if shape.rank != target.rank:
    raise InvalidArgument(f"Shape {shape} has rank {shape.rank} but target {target} has rank {target.rank}. Align the shape before synthesizing strides")
  strides = tuple(strides) if strides is not None else ()
  if len(strides) != shape.rank: raise InvalidArgument(f"Strides {strides} do not match shape {shape}")
  new_strides = tuple(0 if s == 1 and t > 1 else st for s, t, st in zip(() if isinstance(shape, Scalar) else shape, target, strides))
  if DEBUG >= 2: print(f"STRIDES {shape} {strides} -> {target} {new_strides}")
  return new_strides

def create_broadcast_strides(view:View, target:Shape|Iterable[int]|None) -> tuple[int, ...]|None:
  return synthesize_strides(view.shape, view.strides, target)
