"""
Parameter dimensions and the cross-product enumerator used by the sweep driver.

A sweep is described as an ordered list of named dimensions. The first
dimension is the outermost loop, so for dimensions (category, mode, flag) the
flag changes fastest. The repetition index always wraps the whole product.
"""

import itertools
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple


@dataclass(frozen=True)
class Dimension:
    """One axis of parameter variation: a name and its ordered tokens."""

    name: str
    values: Tuple[str, ...]

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "values", tuple(self.values))
        if not self.name:
            raise ValueError("Dimension name must not be empty")
        if not self.values:
            raise ValueError(f"Dimension '{self.name}' has no values")

    def __len__(self):
        return len(self.values)


@dataclass(frozen=True)
class RunDescriptor:
    """
    One concrete combination selected from the cross-product.

    ``params`` keeps dimension order, which is also the order of the
    positional arguments handed to the test executable.
    """

    repetition: int
    params: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    @property
    def args(self) -> List[str]:
        return [value for _, value in self.params]

    @property
    def label(self) -> str:
        return " ".join(self.args)


def build_dimensions(categories, modes, flags, extra_dimensions=None) -> List[Dimension]:
    """Build the standard category/mode/flag dimensions plus any extra named ones."""
    dimensions = [
        Dimension("category", categories),
        Dimension("mode", modes),
        Dimension("flag", flags),
    ]
    for name, values in (extra_dimensions or {}).items():
        dimensions.append(Dimension(name, values))

    names = [d.name for d in dimensions]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate dimension names: {', '.join(duplicates)}")
    return dimensions


def cross_product(dimensions: Sequence[Dimension]) -> Iterator[Tuple[Tuple[str, str], ...]]:
    """Yield every combination of the given dimensions, first dimension outermost."""
    if not dimensions:
        raise ValueError("At least one dimension is required")
    names = [d.name for d in dimensions]
    for combo in itertools.product(*(d.values for d in dimensions)):
        yield tuple(zip(names, combo))


def iter_runs(repetitions: int, dimensions: Sequence[Dimension]) -> Iterator[RunDescriptor]:
    """Yield run descriptors for repetitions 1..N (inclusive) over the full cross-product."""
    if repetitions < 1:
        raise ValueError(f"repetitions must be >= 1, got {repetitions}")
    # Materialize once so every repetition walks the same order
    combos = list(cross_product(dimensions))
    for repetition in range(1, repetitions + 1):
        for params in combos:
            yield RunDescriptor(repetition=repetition, params=params)


def count_runs(repetitions: int, dimensions: Sequence[Dimension]) -> int:
    total = repetitions
    for d in dimensions:
        total *= len(d)
    return total
