"""Opcode definitions for the Intcode virtual machine."""

from enum import IntEnum
from typing import FrozenSet, List, Tuple

from intcode.intcode_error import UnknownOpcodeError


def _op(n: int, arity: int, write_params: Tuple[int, ...] = ()) -> Tuple[int, int, Tuple[int, ...]]:
    """Helper to construct an Opcode value: (integer_value, arity, write_params).

    arity is the number of parameter cells following the instruction word.
    write_params lists the argument positions that name a tape cell to store
    a result into, rather than supplying a value.
    """
    return (n, arity, write_params)


class Opcode(IntEnum):
    """
    Intcode operation codes.

    Each member carries its arity and the set of argument positions that are
    write parameters, so the engine never has to infer which arguments are
    addresses from the opcode itself.
    """

    _arity: int
    _write_params: FrozenSet[int]

    def __new__(cls, int_value: int, arity: int = 0, write_params: Tuple[int, ...] = ()) -> 'Opcode':
        obj = int.__new__(cls, int_value)
        obj._value_ = int_value
        obj._arity = arity
        obj._write_params = frozenset(write_params)
        return obj

    @property
    def arity(self) -> int:
        """Number of parameter cells following the instruction word."""
        return self._arity

    @property
    def write_params(self) -> FrozenSet[int]:
        """Argument positions that resolve to addresses rather than values."""
        return self._write_params

    ADD = _op(1, 3, (2,))                   # tape[w2] = r0 + r1
    MULTIPLY = _op(2, 3, (2,))              # tape[w2] = r0 * r1
    INPUT = _op(3, 1, (0,))                 # tape[w0] = next input
    OUTPUT = _op(4, 1)                      # emit r0
    JUMP_IF_TRUE = _op(5, 2)                # if r0 != 0: ip = r1
    JUMP_IF_FALSE = _op(6, 2)               # if r0 == 0: ip = r1
    LESS_THAN = _op(7, 3, (2,))             # tape[w2] = 1 if r0 < r1 else 0
    EQUALS = _op(8, 3, (2,))                # tape[w2] = 1 if r0 == r1 else 0
    ADJUST_RELATIVE_BASE = _op(9, 1)        # rb += r0
    HALT = _op(99, 0)                       # terminate


# Largest arity of any opcode; sizes the decoder's mode buffer and the engine's argument buffer.
MAX_ARITY = max(op.arity for op in Opcode)

# Dense table indexed by opcode number (an opcode is always word % 100).
_OPCODE_TABLE: List[Opcode | None] = [None] * 100
for _opcode in Opcode:
    _OPCODE_TABLE[_opcode] = _opcode


def lookup_opcode(n: int, address: int | None = None) -> Opcode:
    """
    Look up an opcode by number.

    Args:
        n: Opcode number
        address: Tape address of the instruction, for error reporting

    Returns:
        The matching Opcode

    Raises:
        UnknownOpcodeError: If n is not a recognised opcode
    """
    opcode = _OPCODE_TABLE[n] if 0 <= n < 100 else None
    if opcode is None:
        raise UnknownOpcodeError(n, address)

    return opcode
