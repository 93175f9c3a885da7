#!/usr/bin/env python3
"""
Ladder Layout
Overlapping-slope chain used to build a staged magnitude comparator
Unit 0 reads the first unit_arity inputs, every later unit reads the carry
of the unit before it plus up to unit_arity - 1 fresh inputs

    LUT width 4, base 10
    base #  0___1___2___3   4   5   6   7   8   9
                       10___|___|___|   |   |   |
                                   11___|___|___|
                                               trigger
"""

from typing import List, Optional

from descent import LayoutParams, Step, descend, search_arity


class LadderLayout:
    """Unit count, widths and input wiring of a ladder"""

    def __init__(self, base_width: int, unit_arity: int):
        self.params = LayoutParams(base_width, unit_arity)
        self.base_width = base_width
        self.unit_arity = unit_arity

    def __repr__(self):
        return f"LadderLayout(base_width={self.base_width}, unit_arity={self.unit_arity})"

    def _rule(self, remaining, index):
        if remaining < self.unit_arity:
            taken = remaining
        elif index == 0:
            taken = self.unit_arity
        else:
            taken = self.unit_arity - 1
        return taken, 1, remaining - taken

    def _walk(self):
        # A single input needs no comparison
        if self.base_width <= 1:
            return iter(())
        return descend(self.base_width, self._rule, lambda remaining: remaining == 0)

    def _find(self, unit_index: int) -> Optional[Step]:
        for step in self._walk():
            if step.index == unit_index:
                return step
        return None

    def steps(self) -> List[Step]:
        """One step per unit, taken = fresh inputs read by that unit"""
        return list(self._walk())

    def vector_size(self) -> int:
        """Number of units needed to build the ladder"""
        return sum(1 for _ in self._walk())

    def unit_width(self, unit_index: int) -> int:
        """Total inputs of a unit, 0 if the unit does not exist"""
        step = self._find(unit_index)
        if step is None:
            return 0
        return step.taken if step.index == 0 else step.taken + 1

    def last_unit_width(self) -> int:
        """Total inputs of the final unit, including its carry"""
        size = self.vector_size()
        if size == 0:
            return 0
        return self.unit_width(size - 1)

    def unit_input_address(self, unit_index: int, input_slot: int) -> Optional[int]:
        """
        Flat address feeding one input of one unit

        Addresses [0, base_width) are raw inputs, unit outputs follow in
        creation order. Slot 0 of every unit after the first is the carry.

        Returns:
            The address, or None when the unit or slot is out of range
        """
        step = self._find(unit_index)
        if step is None:
            return None
        if not 0 <= input_slot < self.unit_width(unit_index):
            return None

        if step.index == 0:
            return input_slot
        if input_slot == 0:
            return self.base_width + step.units_before - 1
        return step.inputs_before - 1 + input_slot

    def unit_output_address(self, unit_index: int) -> Optional[int]:
        """Flat address where a unit's output lands"""
        if not 0 <= unit_index < self.vector_size():
            return None
        return self.base_width + unit_index

    @staticmethod
    def unit_width_for_latency(base_width: int, max_latency: int) -> int:
        """
        Smallest unit arity that keeps the ladder within max_latency units
        The actual latency will be less than or equal to the request
        """
        return search_arity(
            lambda arity: LadderLayout(base_width, arity).vector_size(), max_latency
        )

    @classmethod
    def for_latency(cls, base_width: int, max_latency: int) -> "LadderLayout":
        return cls(base_width, cls.unit_width_for_latency(base_width, max_latency))

    def print_stats(self):
        """Print statistics about the ladder"""
        size = self.vector_size()
        print(f"\n{'='*60}")
        print(f"Ladder Layout Statistics")
        print(f"{'='*60}")
        print(f"Base width: {self.base_width}")
        print(f"Unit arity: {self.unit_arity}")
        print(f"Units (latency): {size}")
        print(f"Unit widths: {[self.unit_width(unit) for unit in range(size)]}")
        print(f"Last unit width: {self.last_unit_width()}")
        print(f"{'='*60}\n")
