# tests/arch/chip8/test_decode.py
"""
オペコードのデコード（ニーモニックとオペランド表記）の検証。
"""
import pytest

from retro_chip8.arch.chip8.instructions import UNKNOWN, decode_fields, decode_opcode


def test_decode_fields():
    f = decode_fields(0xD12A)
    assert (f.x, f.y, f.n, f.nn, f.nnn) == (0x1, 0x2, 0xA, 0x2A, 0x12A)


@pytest.mark.parametrize("opcode, text", [
    (0x00E0, "CLS"),
    (0x00EE, "RET"),
    (0x00C4, "SCD 4"),
    (0x00FB, "SCR"),
    (0x00FC, "SCL"),
    (0x00FD, "EXIT"),
    (0x00FE, "LOW"),
    (0x00FF, "HIGH"),
    (0x0123, "SYS $123"),
    (0x1234, "JP $234"),
    (0x2345, "CALL $345"),
    (0x3A12, "SE VA, #$12"),
    (0x4A12, "SNE VA, #$12"),
    (0x5AB0, "SE VA, VB"),
    (0x6A12, "LD VA, #$12"),
    (0x7A12, "ADD VA, #$12"),
    (0x8AB0, "LD VA, VB"),
    (0x8AB4, "ADD VA, VB"),
    (0x8AB7, "SUBN VA, VB"),
    (0x8ABE, "SHL VA, VB"),
    (0x9AB0, "SNE VA, VB"),
    (0xA123, "LD I, $123"),
    (0xB123, "JP V1, $123"),
    (0xCA0F, "RND VA, #$0F"),
    (0xD125, "DRW V1, V2, 5"),
    (0xE19E, "SKP V1"),
    (0xE1A1, "SKNP V1"),
    (0xF107, "LD V1, DT"),
    (0xF10A, "LD V1, K"),
    (0xF115, "LD DT, V1"),
    (0xF118, "LD ST, V1"),
    (0xF11E, "ADD I, V1"),
    (0xF129, "LD F, V1"),
    (0xF130, "LD HF, V1"),
    (0xF133, "LD B, V1"),
    (0xF155, "LD [I], V1"),
    (0xF165, "LD V1, [I]"),
    (0xF175, "LD R, V1"),
    (0xF185, "LD V1, R"),
])
def test_mnemonics(opcode, text):
    assert decode_opcode(opcode).to_text() == text


@pytest.mark.parametrize("opcode", [0x8008, 0x800F, 0xE100, 0xF1FF, 0xF100])
def test_unknown_opcodes(opcode):
    op = decode_opcode(opcode)
    assert op.mnemonic == UNKNOWN
    assert op.operands == [f"${opcode:04X}"]
