"""Instruction decoding for the Intcode virtual machine."""

from enum import IntEnum
from typing import List, Tuple

from intcode.intcode_error import InvalidParameterModeError, UnknownOpcodeError
from intcode.intcode_opcode import MAX_ARITY, Opcode, lookup_opcode


class ParameterMode(IntEnum):
    """Addressing mode for a single instruction argument."""
    POSITION = 0    # Argument is an address
    IMMEDIATE = 1   # Argument is the value itself
    RELATIVE = 2    # Argument is an offset from the relative base


_MODES = (ParameterMode.POSITION, ParameterMode.IMMEDIATE, ParameterMode.RELATIVE)


def _split_instruction(word: int, modes: List[ParameterMode], address: int | None) -> Opcode:
    """
    Split an instruction word into its opcode, writing argument modes into `modes`.

    Only the first `arity` entries of `modes` are written.
    """
    if word < 0:
        raise UnknownOpcodeError(word, address)

    opcode = lookup_opcode(word % 100, address)
    mode_digits = word // 100
    for i in range(opcode.arity):
        digit = mode_digits % 10
        if digit > 2:
            raise InvalidParameterModeError(digit, address)

        modes[i] = _MODES[digit]
        mode_digits //= 10

    return opcode


def decode_instruction(word: int, address: int | None = None) -> Tuple[Opcode, List[ParameterMode]]:
    """
    Decode an instruction word like 1002 into (Opcode.MULTIPLY, [POSITION, IMMEDIATE, POSITION]).

    Args:
        word: Raw instruction word read from the tape
        address: Tape address of the word, for error reporting

    Returns:
        Tuple of the opcode and one parameter mode per argument

    Raises:
        UnknownOpcodeError: If the low two digits are not a known opcode
        InvalidParameterModeError: If a mode digit is not 0, 1 or 2
    """
    modes = [ParameterMode.POSITION] * MAX_ARITY
    opcode = _split_instruction(word, modes, address)
    return opcode, modes[:opcode.arity]


class InstructionDecoder:
    """
    Decoder that reuses a single mode buffer across instructions.

    The engine decodes one instruction per step, so the buffer is overwritten
    in place rather than allocating a new list each time.  Only the first
    `arity` entries of `modes` are meaningful after a call to `decode`.
    """

    def __init__(self) -> None:
        self.modes: List[ParameterMode] = [ParameterMode.POSITION] * MAX_ARITY

    def decode(self, word: int, address: int | None = None) -> Opcode:
        """
        Decode an instruction word, leaving its argument modes in `self.modes`.

        Args:
            word: Raw instruction word read from the tape
            address: Tape address of the word, for error reporting

        Returns:
            The decoded opcode
        """
        return _split_instruction(word, self.modes, address)
