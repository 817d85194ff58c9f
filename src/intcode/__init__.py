"""Intcode virtual machine package."""

# Main API
from intcode.intcode_vm import IntcodeVM, HaltCondition, HaltReason, MachineState
from intcode.intcode_program import parse_program, load_program, format_program

# Exceptions
from intcode.intcode_error import (
    IntcodeError, UnknownOpcodeError, InvalidParameterModeError, InvalidWriteModeError,
    AddressOutOfRangeError, UseAfterExitError, InputUnderflowError, ValueOutOfRangeError,
    ProgramParseError, NonAsciiOutputError
)

# Lower-level components
from intcode.intcode_opcode import Opcode, MAX_ARITY, lookup_opcode
from intcode.intcode_decoder import ParameterMode, InstructionDecoder, decode_instruction
from intcode.intcode_memory import IntcodeMemory, I64_MIN, I64_MAX

# Consumer helpers
from intcode.intcode_ascii import push_text, push_line, drain_text, run_until_input
from intcode.intcode_pipeline import AmplifierChain, max_thruster_signal


__all__ = [
    # Main API
    "IntcodeVM", "HaltCondition", "HaltReason", "MachineState",
    "parse_program", "load_program", "format_program",

    # Exceptions
    "IntcodeError", "UnknownOpcodeError", "InvalidParameterModeError", "InvalidWriteModeError",
    "AddressOutOfRangeError", "UseAfterExitError", "InputUnderflowError", "ValueOutOfRangeError",
    "ProgramParseError", "NonAsciiOutputError",

    # Lower-level components
    "Opcode", "MAX_ARITY", "lookup_opcode",
    "ParameterMode", "InstructionDecoder", "decode_instruction",
    "IntcodeMemory", "I64_MIN", "I64_MAX",

    # Consumer helpers
    "push_text", "push_line", "drain_text", "run_until_input",
    "AmplifierChain", "max_thruster_signal",
]
