"""Tests for the opcode table and instruction decoder."""

import pytest

from intcode.intcode_decoder import InstructionDecoder, ParameterMode, decode_instruction
from intcode.intcode_error import InvalidParameterModeError, UnknownOpcodeError
from intcode.intcode_opcode import MAX_ARITY, Opcode, lookup_opcode


POS = ParameterMode.POSITION
IMM = ParameterMode.IMMEDIATE
REL = ParameterMode.RELATIVE


class TestOpcodeTable:
    """Test opcode arities and write parameters."""

    @pytest.mark.parametrize("opcode,arity,write_params", [
        (Opcode.ADD, 3, {2}),
        (Opcode.MULTIPLY, 3, {2}),
        (Opcode.INPUT, 1, {0}),
        (Opcode.OUTPUT, 1, set()),
        (Opcode.JUMP_IF_TRUE, 2, set()),
        (Opcode.JUMP_IF_FALSE, 2, set()),
        (Opcode.LESS_THAN, 3, {2}),
        (Opcode.EQUALS, 3, {2}),
        (Opcode.ADJUST_RELATIVE_BASE, 1, set()),
        (Opcode.HALT, 0, set()),
    ])
    def test_opcode_shape(self, opcode, arity, write_params):
        assert opcode.arity == arity
        assert opcode.write_params == frozenset(write_params)

    def test_opcode_numbers(self):
        assert [int(op) for op in Opcode] == [1, 2, 3, 4, 5, 6, 7, 8, 9, 99]

    def test_max_arity(self):
        assert MAX_ARITY == 3

    def test_lookup_known(self):
        assert lookup_opcode(8) is Opcode.EQUALS
        assert lookup_opcode(99) is Opcode.HALT

    @pytest.mark.parametrize("n", [0, 10, 42, 98, 100, -1])
    def test_lookup_unknown(self, n):
        with pytest.raises(UnknownOpcodeError) as exc_info:
            lookup_opcode(n, 17)

        assert exc_info.value.opcode == n
        assert exc_info.value.address == 17
        assert "Unknown opcode" in str(exc_info.value)


class TestDecodeInstruction:
    """Test decoding of raw instruction words."""

    def test_all_position_by_default(self):
        assert decode_instruction(1) == (Opcode.ADD, [POS, POS, POS])

    def test_mixed_modes(self):
        assert decode_instruction(1002) == (Opcode.MULTIPLY, [POS, IMM, POS])

    def test_high_modes(self):
        assert decode_instruction(11004) == (Opcode.OUTPUT, [POS])

    def test_relative_modes(self):
        assert decode_instruction(21101) == (Opcode.ADD, [IMM, IMM, REL])
        assert decode_instruction(204) == (Opcode.OUTPUT, [REL])
        assert decode_instruction(109) == (Opcode.ADJUST_RELATIVE_BASE, [IMM])

    def test_mode_count_matches_arity(self):
        opcode, modes = decode_instruction(101099)
        assert opcode is Opcode.HALT
        assert modes == []

    def test_digits_beyond_arity_are_ignored(self):
        # Digit 9 sits above INPUT's only argument.
        assert decode_instruction(90203) == (Opcode.INPUT, [REL])

    def test_invalid_mode_digit(self):
        with pytest.raises(InvalidParameterModeError) as exc_info:
            decode_instruction(301, 5)

        assert exc_info.value.mode == 3
        assert exc_info.value.address == 5

    def test_unknown_opcode(self):
        with pytest.raises(UnknownOpcodeError) as exc_info:
            decode_instruction(1042)

        assert exc_info.value.opcode == 42

    def test_negative_word_is_unknown(self):
        # -1 % 100 is 99 in Python; a negative word must not decode as HALT.
        with pytest.raises(UnknownOpcodeError):
            decode_instruction(-1)


class TestInstructionDecoder:
    """Test the buffer-reusing decoder."""

    def test_buffer_is_reused(self):
        decoder = InstructionDecoder()
        buffer = decoder.modes

        assert decoder.decode(1002) is Opcode.MULTIPLY
        assert decoder.modes is buffer
        assert decoder.modes == [POS, IMM, POS]

        assert decoder.decode(21101) is Opcode.ADD
        assert decoder.modes is buffer
        assert decoder.modes == [IMM, IMM, REL]

    def test_shorter_instruction_overwrites_prefix_only(self):
        decoder = InstructionDecoder()
        decoder.decode(22201)
        assert decoder.decode(104) is Opcode.OUTPUT
        assert decoder.modes[0] is IMM

    def test_buffer_length(self):
        assert len(InstructionDecoder().modes) == MAX_ARITY
