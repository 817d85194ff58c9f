"""Auto-growing tape memory for the Intcode virtual machine."""

from typing import Iterable, List, Sequence

from intcode.intcode_error import AddressOutOfRangeError, ValueOutOfRangeError


I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


def check_value(value: int, address: int | None = None) -> int:
    """
    Check that a value fits in a signed 64-bit integer.

    Args:
        value: Value to check
        address: Instruction address, for error reporting

    Returns:
        The value, unchanged

    Raises:
        ValueOutOfRangeError: If the value is outside the signed 64-bit range
    """
    if value < I64_MIN or value > I64_MAX:
        raise ValueOutOfRangeError(value, address)

    return value


class IntcodeMemory:
    """
    Tape memory: a logically infinite sequence of integers, zero beyond the physical end.

    Reads past the end return 0 without growing the buffer.  Writes past the
    end grow it, zero-filling any gap.
    """

    def __init__(self, image: Iterable[int]) -> None:
        self._cells: List[int] = [check_value(value) for value in image]

    def __len__(self) -> int:
        """Physical length of the tape (the highest written address + 1, or the image length)."""
        return len(self._cells)

    def read(self, address: int) -> int:
        """
        Read the cell at `address`.

        Raises:
            AddressOutOfRangeError: If address is negative
        """
        if address < 0:
            raise AddressOutOfRangeError(address)

        if address >= len(self._cells):
            return 0

        return self._cells[address]

    def write(self, address: int, value: int) -> None:
        """
        Write `value` to the cell at `address`, growing the tape if needed.

        Raises:
            AddressOutOfRangeError: If address is negative
        """
        if address < 0:
            raise AddressOutOfRangeError(address)

        cells = self._cells
        if address >= len(cells):
            cells.extend([0] * (address + 1 - len(cells)))

        cells[address] = value

    def snapshot(self) -> List[int]:
        """Return a copy of the physical tape contents."""
        return list(self._cells)

    def starts_with(self, prefix: Sequence[int]) -> bool:
        """Return True if the tape begins with `prefix` (cells past the end count as 0)."""
        return all(self.read(i) == value for i, value in enumerate(prefix))
