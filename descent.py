#!/usr/bin/env python3
"""
Descent helpers shared by the ladder and tree layouts
Both layouts shrink a working count one step at a time until a base case
"""

from dataclasses import dataclass
from typing import Callable, Iterator, Tuple

MIN_UNIT_ARITY = 2

# rule(remaining, index) -> (taken, units, next_remaining)
StepRule = Callable[[int, int], Tuple[int, int, int]]


def ceil_div(numerator: int, denominator: int) -> int:
    """Integer ceiling division"""
    return -(-numerator // denominator)


@dataclass(frozen=True)
class LayoutParams:
    """Parameter pair every layout is computed from"""

    base_width: int
    unit_arity: int

    def __post_init__(self):
        if self.base_width < 0:
            raise ValueError(f"Base width must be non-negative, got {self.base_width}")
        if self.unit_arity < MIN_UNIT_ARITY:
            raise ValueError(
                f"Unit arity must be at least {MIN_UNIT_ARITY}, got {self.unit_arity}"
            )


@dataclass(frozen=True)
class Step:
    """One step of a descent"""

    index: int
    remaining: int  # working count before this step
    taken: int  # flat addresses read by this step
    units: int  # units created by this step
    units_before: int  # units created by earlier steps
    inputs_before: int  # flat address of the first value this step reads

    @property
    def units_end(self) -> int:
        return self.units_before + self.units

    def holds_unit(self, unit_index: int) -> bool:
        return self.units_before <= unit_index < self.units_end


def descend(
    remaining: int, rule: StepRule, done: Callable[[int], bool]
) -> Iterator[Step]:
    """
    Walk a layout step by step until done(remaining) holds

    Args:
        remaining: Working count at the first step
        rule: Maps (remaining, index) to (taken, units, next_remaining)
        done: Base case predicate on the working count

    Yields:
        Step for every step taken, in order
    """
    index = 0
    units_before = 0
    inputs_before = 0
    while not done(remaining):
        taken, units, next_remaining = rule(remaining, index)
        yield Step(index, remaining, taken, units, units_before, inputs_before)
        units_before += units
        inputs_before += taken
        remaining = next_remaining
        index += 1


def search_arity(measure: Callable[[int], int], max_latency: int) -> int:
    """Smallest arity whose measured latency fits within max_latency"""
    if measure(MIN_UNIT_ARITY) <= max_latency:
        return MIN_UNIT_ARITY
    # Any non-trivial layout needs at least one stage
    if max_latency < 1:
        raise ValueError(f"Latency must be at least 1, got {max_latency}")

    arity = MIN_UNIT_ARITY + 1
    while measure(arity) > max_latency:
        arity += 1
    return arity
