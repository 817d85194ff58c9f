"""Shared fixtures and utilities for Intcode tests."""

import random
from typing import Callable, List, Sequence, Tuple

import pytest

from intcode import HaltCondition, HaltReason, IntcodeVM, Opcode, ParameterMode


def encode(opcode: Opcode, *modes: ParameterMode) -> int:
    """Build an instruction word from an opcode and its argument modes."""
    word = int(opcode)
    for i, mode in enumerate(modes):
        word += int(mode) * 10 ** (i + 2)

    return word


class RandomProgramBuilder:
    """
    Builds random well-formed programs that always terminate.

    Programs are straight-line code with forward jumps only, followed by a
    HALT and a small data region.  Every write lands in the data region (or
    past the end of the image), so the code is never modified.  Values stay
    well inside the signed 64-bit range: multiplies always use a small
    immediate factor and the instruction count is bounded.
    """

    MAX_INSTRUCTIONS = 25
    DATA_CELLS = 16

    _CHOICES = [
        Opcode.ADD, Opcode.MULTIPLY, Opcode.INPUT, Opcode.OUTPUT, Opcode.JUMP_IF_TRUE,
        Opcode.JUMP_IF_FALSE, Opcode.LESS_THAN, Opcode.EQUALS, Opcode.ADJUST_RELATIVE_BASE,
    ]

    def __init__(self, seed: int) -> None:
        self._rng = random.Random(seed)

    def build(self) -> Tuple[List[int], List[int]]:
        """Return (image, inputs) where inputs covers every input instruction."""
        rng = self._rng
        count = rng.randint(1, self.MAX_INSTRUCTIONS)
        opcodes = [rng.choice(self._CHOICES) for _ in range(count)]

        offsets = []
        address = 0
        for opcode in opcodes:
            offsets.append(address)
            address += opcode.arity + 1

        halt_address = address
        offsets.append(halt_address)
        data_base = halt_address + 1

        image: List[int] = []
        for index, opcode in enumerate(opcodes):
            modes: List[ParameterMode] = []
            params: List[int] = []
            for arg in range(opcode.arity):
                mode, param = self._argument(opcode, arg, index, count, offsets, data_base)
                modes.append(mode)
                params.append(param)

            image.append(encode(opcode, *modes))
            image.extend(params)

        image.append(int(Opcode.HALT))
        image.extend(rng.randint(-100, 100) for _ in range(self.DATA_CELLS))

        inputs = [rng.randint(-100, 100) for _ in range(opcodes.count(Opcode.INPUT))]
        return image, inputs

    def _argument(
        self,
        opcode: Opcode,
        arg: int,
        index: int,
        count: int,
        offsets: Sequence[int],
        data_base: int
    ) -> Tuple[ParameterMode, int]:
        rng = self._rng

        if opcode in (Opcode.JUMP_IF_TRUE, Opcode.JUMP_IF_FALSE) and arg == 1:
            return ParameterMode.IMMEDIATE, offsets[rng.randint(index + 1, count)]

        if opcode is Opcode.MULTIPLY and arg == 0:
            return ParameterMode.IMMEDIATE, rng.randint(-3, 3)

        if opcode is Opcode.ADJUST_RELATIVE_BASE:
            return ParameterMode.IMMEDIATE, rng.randint(0, 5)

        if arg in opcode.write_params:
            mode = rng.choice((ParameterMode.POSITION, ParameterMode.RELATIVE))

        else:
            mode = rng.choice((ParameterMode.POSITION, ParameterMode.IMMEDIATE, ParameterMode.RELATIVE))

        if mode is ParameterMode.IMMEDIATE:
            return mode, rng.randint(-100, 100)

        # The relative base never goes negative, so relative offsets from the
        # data region always land in or beyond it.
        return mode, data_base + rng.randrange(self.DATA_CELLS)


class IntcodeTestHelpers:
    """Helper utilities for Intcode testing."""

    encode = staticmethod(encode)

    @staticmethod
    def run_to_exit(image: Sequence[int], inputs: Sequence[int] = ()) -> IntcodeVM:
        """Create a machine, push all inputs and run it to completion."""
        vm = IntcodeVM(image)
        for value in inputs:
            vm.push_input(value)

        assert vm.run(HaltCondition.EXIT) is HaltReason.EXITED
        return vm

    @staticmethod
    def outputs_of(image: Sequence[int], inputs: Sequence[int] = ()) -> List[int]:
        """Run a program to completion and return everything it output."""
        return IntcodeTestHelpers.run_to_exit(image, inputs).drain_output()

    @staticmethod
    def snapshot(vm: IntcodeVM) -> tuple:
        """Capture every observable piece of machine state."""
        return (
            vm.memory.snapshot(),
            vm.instruction_pointer,
            vm.relative_base,
            vm.pending_input,
            vm.pending_output,
            vm.state,
        )


@pytest.fixture
def helpers():
    """Provide test helper utilities."""
    return IntcodeTestHelpers


@pytest.fixture
def random_program() -> Callable[[int], Tuple[List[int], List[int]]]:
    """Factory for seeded random well-formed programs."""
    def _build(seed: int) -> Tuple[List[int], List[int]]:
        return RandomProgramBuilder(seed).build()
    return _build
