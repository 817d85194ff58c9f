"""Exception classes for the Intcode virtual machine with detailed context."""

from typing import Optional


class IntcodeError(Exception):
    """Base exception for Intcode errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        address: Optional[int] = None,
        suggestion: Optional[str] = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            address: Tape address of the instruction (or cell) involved, if known
            suggestion: Suggestion for fixing the error
        """
        self.message = message
        self.context = context
        self.address = address
        self.suggestion = suggestion

        super().__init__(self._format_detailed_message())

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.address is not None:
            parts.append(f"Address: {self.address}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        return "\n".join(parts)


class UnknownOpcodeError(IntcodeError):
    """An instruction word decoded to an opcode that is not in the opcode table."""

    def __init__(self, opcode: int, address: Optional[int] = None):
        self.opcode = opcode
        super().__init__(
            f"Unknown opcode: {opcode}",
            address=address,
            suggestion="Valid opcodes are 1 to 9 and 99"
        )


class InvalidParameterModeError(IntcodeError):
    """An instruction word carried a parameter mode digit other than 0, 1 or 2."""

    def __init__(self, mode: int, address: Optional[int] = None):
        self.mode = mode
        super().__init__(
            f"Invalid parameter mode: {mode}",
            address=address,
            suggestion="Parameter modes are 0 (position), 1 (immediate) and 2 (relative)"
        )


class InvalidWriteModeError(IntcodeError):
    """Immediate mode was used for a parameter that names a cell to write into."""

    def __init__(self, opcode: int, argument: int, address: Optional[int] = None):
        self.opcode = opcode
        self.argument = argument
        super().__init__(
            f"Immediate mode used for write parameter {argument} of opcode {opcode}",
            address=address,
            suggestion="Write parameters must use position or relative mode"
        )


class AddressOutOfRangeError(IntcodeError):
    """A resolved tape address was negative."""

    def __init__(self, target: int, address: Optional[int] = None):
        self.target = target
        super().__init__(
            f"Address out of range: {target}",
            address=address,
            context="Tape addresses must be non-negative"
        )


class UseAfterExitError(IntcodeError):
    """run() was called on a machine that has already executed its halt instruction."""

    def __init__(self) -> None:
        super().__init__(
            "Machine has already exited",
            suggestion="Create a new machine to run the program again"
        )


class InputUnderflowError(IntcodeError):
    """An input instruction found the input queue empty and the caller did not allow a NEEDS_INPUT halt."""

    def __init__(self, address: Optional[int] = None):
        super().__init__(
            "Input instruction executed with an empty input queue",
            address=address,
            suggestion="Push more input, or run with HaltCondition.NEEDS_INPUT to suspend instead"
        )


class ValueOutOfRangeError(IntcodeError):
    """A value did not fit in a signed 64-bit integer."""

    def __init__(self, value: int, address: Optional[int] = None):
        self.value = value
        super().__init__(
            f"Value out of signed 64-bit range: {value}",
            address=address
        )


class ProgramParseError(IntcodeError):
    """Program text could not be parsed into an image."""

    def __init__(self, message: str, field_index: Optional[int] = None, received: Optional[str] = None):
        self.field_index = field_index
        self.received = received
        context = None
        if field_index is not None:
            context = f"Field {field_index}: {received!r}"

        super().__init__(
            message,
            context=context,
            suggestion="Programs are comma-separated decimal integers, e.g. 1,0,0,0,99"
        )


class NonAsciiOutputError(IntcodeError):
    """A machine produced an output value that is not an ASCII character code."""

    def __init__(self, value: int, text: str):
        self.value = value
        self.text = text
        super().__init__(
            f"Output value is not ASCII: {value}",
            context=f"Text decoded before this value: {text!r}"
        )
