from __future__ import annotations

class InvalidArgument(ValueError):
  """The caller broke the calling protocol: wrong ranks, malformed sizes or a view that violates its invariant."""

class ShapeMismatch(ValueError):
  """Two sizes on the same aligned dimension are different and neither of them is 1."""
  def __init__(self, dim:int, sizes:tuple[int, int], shapes:tuple=()):
    self.dim, self.sizes, self.shapes = dim, tuple(sizes), tuple(shapes)
    operands = f" for shapes {', '.join(map(str, self.shapes))}" if self.shapes else ""
    super().__init__(f"Cannot broadcast dimension {dim}: sizes {self.sizes[0]} and {self.sizes[1]} are incompatible{operands}")
