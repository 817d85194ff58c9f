"""Loading and parsing Intcode program images."""

import logging
from pathlib import Path
from typing import Iterable, List

from intcode.intcode_error import ProgramParseError, ValueOutOfRangeError
from intcode.intcode_memory import check_value


logger = logging.getLogger(__name__)


def parse_program(text: str) -> List[int]:
    """
    Parse comma-separated decimal program text into an image.

    Surrounding whitespace (including a trailing newline) is ignored, as is
    whitespace around individual fields.

    Args:
        text: Program source text, e.g. "1,0,0,0,99"

    Returns:
        The program image

    Raises:
        ProgramParseError: If the text is empty, a field is not an integer, or a
            value does not fit in a signed 64-bit integer
    """
    stripped = text.strip()
    if not stripped:
        raise ProgramParseError("Program text is empty")

    image: List[int] = []
    for index, field in enumerate(stripped.split(",")):
        token = field.strip()
        try:
            value = int(token, 10)

        except ValueError as e:
            raise ProgramParseError("Program field is not a decimal integer", index, field) from e

        try:
            image.append(check_value(value))

        except ValueOutOfRangeError as e:
            raise ProgramParseError("Program value out of signed 64-bit range", index, field) from e

    return image


def load_program(path: str | Path) -> List[int]:
    """
    Read and parse a program image from a UTF-8 text file.

    Args:
        path: Path to the program file

    Returns:
        The program image

    Raises:
        OSError: If the file cannot be read
        ProgramParseError: If the file contents are not a valid program
    """
    text = Path(path).read_text(encoding="utf-8")
    image = parse_program(text)
    logger.debug("Loaded program %s (%d values)", path, len(image))
    return image


def format_program(image: Iterable[int]) -> str:
    """Format an image as comma-separated decimal text."""
    return ",".join(str(value) for value in image)
