#!/usr/bin/env python3
"""
N-ary Tree Layout
Pipelined reduction tree: every layer groups up to unit_arity values per unit
until a single value remains

    LUT width 3, base 10, unit count 7
    base #  0___1___2   3___4___5   6___7___8   9
                    |           |           |   |
                   10__________11__________12  13
                                            |   |
                                           14__15
                                                |
                                             trigger
"""

from typing import List, Optional

from descent import LayoutParams, Step, ceil_div, descend, search_arity


class TreeLayout:
    """Unit count, widths, depths and input wiring of an n-ary tree"""

    def __init__(self, base_width: int, unit_arity: int):
        self.params = LayoutParams(base_width, unit_arity)
        self.base_width = base_width
        self.unit_arity = unit_arity

    def __repr__(self):
        return f"TreeLayout(base_width={self.base_width}, unit_arity={self.unit_arity})"

    def _rule(self, remaining, index):
        groups = ceil_div(remaining, self.unit_arity)
        return remaining, groups, groups

    def _walk(self):
        return descend(self.base_width, self._rule, lambda remaining: remaining <= 1)

    def _find(self, unit_index: int) -> Optional[Step]:
        for layer in self._walk():
            if layer.holds_unit(unit_index):
                return layer
        return None

    def _width_in_layer(self, layer: Step, unit_index: int) -> int:
        if unit_index - layer.units_before == layer.units - 1:
            return layer.remaining % self.unit_arity or self.unit_arity
        return self.unit_arity

    def layers(self) -> List[Step]:
        """One step per layer, remaining = values entering the layer"""
        return list(self._walk())

    def vector_size(self) -> int:
        """Number of units needed to build the tree"""
        return sum(layer.units for layer in self._walk())

    def depth(self) -> int:
        """Number of layers between the raw inputs and the root"""
        return sum(1 for _ in self._walk())

    def address_count(self) -> int:
        """Size of the flat address space: raw inputs plus every unit output"""
        return self.base_width + self.vector_size()

    def unit_width(self, unit_index: int) -> int:
        """Inputs of a unit, 0 if the unit does not exist"""
        layer = self._find(unit_index)
        if layer is None:
            return 0
        return self._width_in_layer(layer, unit_index)

    def unit_depth(self, unit_index: int) -> int:
        """
        Layer a unit sits on, counting from 0 at the raw inputs
        Indices past the last unit resolve to depth()
        """
        depth = 0
        for layer in self._walk():
            if unit_index < layer.units_end:
                return layer.index
            depth += 1
        return depth

    def unit_input_address(self, unit_index: int, input_slot: int) -> Optional[int]:
        """
        Flat address feeding one input of one unit

        Addresses [0, base_width) are raw inputs, each layer's outputs follow
        the values that layer read.

        Returns:
            The address, or None when the unit or slot is out of range
        """
        layer = self._find(unit_index)
        if layer is None:
            return None
        if not 0 <= input_slot < self._width_in_layer(layer, unit_index):
            return None
        local_index = unit_index - layer.units_before
        return local_index * self.unit_arity + input_slot + layer.inputs_before

    def unit_output_address(self, unit_index: int) -> Optional[int]:
        """Flat address where a unit's output lands"""
        layer = self._find(unit_index)
        if layer is None:
            return None
        local_index = unit_index - layer.units_before
        return layer.inputs_before + layer.remaining + local_index

    def address_depth(self, address: int) -> Optional[int]:
        """
        Pipeline stage at which a flat address holds a valid value
        Raw inputs are ready at 0, the root output at depth()
        """
        if address < 0:
            return None
        end = 0
        for layer in self._walk():
            end = layer.inputs_before + layer.taken
            if address < end:
                return layer.index
        # Root output, or the lone raw input of a single-input tree
        if address == end and self.base_width > 0:
            return self.depth()
        return None

    @staticmethod
    def unit_width_for_latency(base_width: int, max_latency: int) -> int:
        """
        Smallest unit arity that keeps the tree within max_latency layers
        The actual latency will be less than or equal to the request
        """
        return search_arity(
            lambda arity: TreeLayout(base_width, arity).depth(), max_latency
        )

    @classmethod
    def for_latency(cls, base_width: int, max_latency: int) -> "TreeLayout":
        return cls(base_width, cls.unit_width_for_latency(base_width, max_latency))

    def print_stats(self):
        """Print statistics about the tree"""
        print(f"\n{'='*60}")
        print(f"Tree Layout Statistics")
        print(f"{'='*60}")
        print(f"Base width: {self.base_width}")
        print(f"Unit arity: {self.unit_arity}")
        print(f"Depth (latency): {self.depth()}")
        print(f"Units: {self.vector_size()}")
        for layer in self._walk():
            widths = [
                self._width_in_layer(layer, unit)
                for unit in range(layer.units_before, layer.units_end)
            ]
            print(f"  Layer {layer.index}: {layer.units} units, widths {widths}")
        print(f"{'='*60}\n")
