"""ASCII helpers for Intcode programs that talk in lines of text."""

from typing import List, Tuple

from intcode.intcode_error import NonAsciiOutputError
from intcode.intcode_vm import HaltCondition, HaltReason, IntcodeVM


NEWLINE = 10


def push_text(vm: IntcodeVM, text: str) -> None:
    """
    Push each character of `text` to the machine's input as its character code.

    Raises:
        ValueError: If text contains a non-ASCII character
    """
    codes = [ord(char) for char in text]
    for code in codes:
        if code > 127:
            raise ValueError(f"Cannot send non-ASCII character {chr(code)!r} to an Intcode machine")

    for code in codes:
        vm.push_input(code)


def push_line(vm: IntcodeVM, line: str) -> None:
    """Push `line` followed by a newline."""
    push_text(vm, line)
    vm.push_input(NEWLINE)


def drain_text(vm: IntcodeVM) -> str:
    """
    Pop all pending output and decode it as ASCII text.

    Raises:
        NonAsciiOutputError: If an output value is outside 0..127.  The offending
            value has been popped; anything after it is still pending.
    """
    chars: List[str] = []
    while True:
        value = vm.pop_output()
        if value is None:
            break

        if value < 0 or value > 127:
            raise NonAsciiOutputError(value, "".join(chars))

        chars.append(chr(value))

    return "".join(chars)


def run_until_input(vm: IntcodeVM) -> Tuple[HaltReason, str]:
    """
    Run until the machine wants more input (or exits) and collect the text it printed.

    Returns:
        Tuple of the halt reason and the decoded output text
    """
    reason = vm.run(HaltCondition.NEEDS_INPUT)
    return reason, drain_text(vm)
