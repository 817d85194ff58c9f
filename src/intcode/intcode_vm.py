"""Intcode Virtual Machine - executes Intcode programs."""

from collections import deque
from enum import Enum
from typing import Any, Deque, Iterable, List, Sequence

from intcode.intcode_decoder import InstructionDecoder, ParameterMode
from intcode.intcode_error import (
    AddressOutOfRangeError, InputUnderflowError, InvalidWriteModeError, UseAfterExitError
)
from intcode.intcode_memory import IntcodeMemory, check_value
from intcode.intcode_opcode import MAX_ARITY, Opcode


class HaltCondition(Enum):
    """
    When a call to `IntcodeVM.run()` should return.

    EXIT: run until the halt instruction.
    OUTPUT: also return immediately after each output instruction.
    NEEDS_INPUT: also return when an input instruction finds the input queue empty.
    """
    EXIT = "exit"
    OUTPUT = "output"
    NEEDS_INPUT = "needs_input"


class HaltReason(Enum):
    """Why a call to `IntcodeVM.run()` returned."""
    EXITED = "exited"
    PRODUCED_OUTPUT = "produced_output"
    WAITING_FOR_INPUT = "waiting_for_input"


class MachineState(Enum):
    """Observable machine state between calls to `IntcodeVM.run()`."""
    RUNNING = "running"
    WAITING_FOR_INPUT = "waiting_for_input"
    PRODUCED_OUTPUT = "produced_output"
    EXITED = "exited"


class IntcodeVM:
    """
    Virtual machine for executing Intcode programs.

    The machine is a plain step loop: `run()` executes instructions until the
    requested halt condition is met and then returns, leaving the machine
    ready to be resumed by another call.  Input and output are FIFO queues
    owned by the machine.
    """

    def __init__(self, image: Iterable[int]) -> None:
        """
        Create a machine whose tape starts as a copy of `image`.

        Args:
            image: Program image (initial tape prefix)
        """
        self._memory = IntcodeMemory(image)
        self._ip = 0
        self._relative_base = 0
        self._input: Deque[int] = deque()
        self._output: Deque[int] = deque()
        self._state = MachineState.RUNNING

        self._decoder = InstructionDecoder()

        # Argument buffer reused for every instruction
        self._args: List[int] = [0] * MAX_ARITY

        self._dispatch_table = self._build_dispatch_table()

    def _build_dispatch_table(self) -> List[Any]:
        """
        Build jump table for opcode dispatch.

        Handlers take the resolved argument buffer and the instruction address,
        and return a new instruction pointer for a taken jump or None to advance
        past the instruction.
        """
        table: List[Any] = [None] * 100
        table[Opcode.ADD] = self._op_add
        table[Opcode.MULTIPLY] = self._op_multiply
        table[Opcode.INPUT] = self._op_input
        table[Opcode.OUTPUT] = self._op_output
        table[Opcode.JUMP_IF_TRUE] = self._op_jump_if_true
        table[Opcode.JUMP_IF_FALSE] = self._op_jump_if_false
        table[Opcode.LESS_THAN] = self._op_less_than
        table[Opcode.EQUALS] = self._op_equals
        table[Opcode.ADJUST_RELATIVE_BASE] = self._op_adjust_relative_base
        table[Opcode.HALT] = self._op_halt
        return table

    @property
    def state(self) -> MachineState:
        """Current machine state."""
        return self._state

    @property
    def instruction_pointer(self) -> int:
        """Address of the next instruction to execute."""
        return self._ip

    @property
    def relative_base(self) -> int:
        """Current relative base."""
        return self._relative_base

    @property
    def memory(self) -> IntcodeMemory:
        """The machine's tape."""
        return self._memory

    @property
    def pending_input(self) -> int:
        """Number of input values not yet consumed."""
        return len(self._input)

    @property
    def pending_output(self) -> int:
        """Number of output values not yet popped."""
        return len(self._output)

    def read(self, address: int) -> int:
        """Read a tape cell."""
        return self._memory.read(address)

    def memory_starts_with(self, prefix: Sequence[int]) -> bool:
        """Return True if the tape begins with `prefix`."""
        return self._memory.starts_with(prefix)

    def push_input(self, value: int) -> None:
        """
        Append a value to the input queue.

        Raises:
            ValueOutOfRangeError: If value does not fit in a signed 64-bit integer
        """
        self._input.append(check_value(value))

    def pop_output(self) -> int | None:
        """Remove and return the oldest output value, or None if there is none."""
        if not self._output:
            return None

        return self._output.popleft()

    def drain_output(self) -> List[int]:
        """Remove and return all pending output values, oldest first."""
        values = list(self._output)
        self._output.clear()
        return values

    def run(self, condition: HaltCondition = HaltCondition.EXIT) -> HaltReason:
        """
        Execute instructions until `condition` is met or the program exits.

        Args:
            condition: When to return control to the caller

        Returns:
            The reason execution stopped

        Raises:
            UseAfterExitError: If the machine has already exited
            IntcodeError: If the program faults; the faulting instruction has no effect
        """
        if self._state is MachineState.EXITED:
            raise UseAfterExitError()

        self._state = MachineState.RUNNING

        # Cache hot attributes in locals for the loop
        memory = self._memory
        decoder = self._decoder
        dispatch = self._dispatch_table
        stop_on_output = condition is HaltCondition.OUTPUT

        while True:
            ip = self._ip
            opcode = decoder.decode(memory.read(ip), ip)
            args = self._resolve_arguments(opcode, ip)

            if opcode is Opcode.INPUT and not self._input:
                if condition is HaltCondition.NEEDS_INPUT:
                    self._state = MachineState.WAITING_FOR_INPUT
                    return HaltReason.WAITING_FOR_INPUT

                raise InputUnderflowError(ip)

            target = dispatch[opcode](args, ip)
            if target is None:
                self._ip = ip + opcode.arity + 1

            else:
                # Negative jump target; IP stays on the jump
                if target < 0:
                    raise AddressOutOfRangeError(target, ip)

                self._ip = target

            if opcode is Opcode.OUTPUT:
                if stop_on_output:
                    self._state = MachineState.PRODUCED_OUTPUT
                    return HaltReason.PRODUCED_OUTPUT

            elif opcode is Opcode.HALT:
                self._state = MachineState.EXITED
                return HaltReason.EXITED

    def _resolve_arguments(self, opcode: Opcode, ip: int) -> List[int]:
        """
        Resolve each argument of the instruction at `ip` into the argument buffer.

        Write parameters resolve to addresses, all others to values.
        """
        memory = self._memory
        modes = self._decoder.modes
        args = self._args
        write_params = opcode.write_params
        relative_base = self._relative_base

        for i in range(opcode.arity):
            param = memory.read(ip + 1 + i)
            mode = modes[i]

            if i in write_params:
                if mode is ParameterMode.IMMEDIATE:
                    raise InvalidWriteModeError(opcode, i, ip)

                address = param if mode is ParameterMode.POSITION else param + relative_base
                if address < 0:
                    raise AddressOutOfRangeError(address, ip)

                args[i] = address
                continue

            if mode is ParameterMode.IMMEDIATE:
                args[i] = param
                continue

            address = param if mode is ParameterMode.POSITION else param + relative_base
            if address < 0:
                raise AddressOutOfRangeError(address, ip)

            args[i] = memory.read(address)

        return args

    def _op_add(self, args: List[int], ip: int) -> int | None:
        """ADD: tape[w2] = r0 + r1."""
        self._memory.write(args[2], check_value(args[0] + args[1], ip))
        return None

    def _op_multiply(self, args: List[int], ip: int) -> int | None:
        """MULTIPLY: tape[w2] = r0 * r1."""
        self._memory.write(args[2], check_value(args[0] * args[1], ip))
        return None

    def _op_input(self, args: List[int], _ip: int) -> int | None:
        """INPUT: tape[w0] = next input (the run loop guarantees the queue is non-empty)."""
        self._memory.write(args[0], self._input.popleft())
        return None

    def _op_output(self, args: List[int], _ip: int) -> int | None:
        """OUTPUT: append r0 to the output queue."""
        self._output.append(args[0])
        return None

    def _op_jump_if_true(self, args: List[int], _ip: int) -> int | None:
        """JUMP_IF_TRUE: if r0 != 0, jump to r1."""
        if args[0] != 0:
            return args[1]

        return None

    def _op_jump_if_false(self, args: List[int], _ip: int) -> int | None:
        """JUMP_IF_FALSE: if r0 == 0, jump to r1."""
        if args[0] == 0:
            return args[1]

        return None

    def _op_less_than(self, args: List[int], _ip: int) -> int | None:
        """LESS_THAN: tape[w2] = 1 if r0 < r1 else 0."""
        self._memory.write(args[2], 1 if args[0] < args[1] else 0)
        return None

    def _op_equals(self, args: List[int], _ip: int) -> int | None:
        """EQUALS: tape[w2] = 1 if r0 == r1 else 0."""
        self._memory.write(args[2], 1 if args[0] == args[1] else 0)
        return None

    def _op_adjust_relative_base(self, args: List[int], ip: int) -> int | None:
        """ADJUST_RELATIVE_BASE: rb += r0."""
        self._relative_base = check_value(self._relative_base + args[0], ip)
        return None

    def _op_halt(self, _args: List[int], ip: int) -> int | None:
        """HALT: stay on the halt instruction; the run loop marks the machine exited."""
        return ip
