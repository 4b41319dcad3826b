import pytest
from chip8_tracer.arch.chip8 import Chip8Cpu
from chip8_tracer.arch.chip8.disassembler import disassemble
from chip8_tracer.arch.chip8.instructions import decode_opcode


@pytest.fixture
def cpu():
    return Chip8Cpu()


@pytest.mark.parametrize("opcode, text", [
    (0x0000, "NOP"),
    (0x00E0, "CLS"),
    (0x00EE, "RET"),
    (0x1ABC, "JP $ABC"),
    (0x2ABC, "CALL $ABC"),
    (0x3A12, "SE VA, #$12"),
    (0x5AB0, "SE VA, VB"),
    (0x8AB6, "SHR VA"),
    (0x8ABE, "SHL VA"),
    (0xA123, "LD I, $123"),
    (0xB123, "JP V0, $123"),
    (0xDAB3, "DRW VA, VB, 3"),
    (0xE39E, "SKP V3"),
    (0xF30A, "LD V3, K"),
    (0xF333, "LD B, V3"),
    (0xF365, "LD V3, [I]"),
])
def test_decode_text(opcode, text):
    op = decode_opcode(opcode, 0x200)
    assert op.text() == text
    assert op.length == 2
    assert op.address == 0x200


def test_decode_operand_fields():
    op = decode_opcode(0xD125, 0x300)
    assert op.pattern == "DXYN"
    assert (op.x, op.y, op.n, op.kk, op.nnn) == (1, 2, 5, 0x25, 0x125)
    assert op.operand_bytes == [0xD1, 0x25]


def test_decode_unknown_does_not_raise():
    op = decode_opcode(0x5121, 0x200)
    assert op.pattern is None
    assert op.mnemonic == "UNKNOWN"


def test_disassemble_marks_unknown_words(cpu):
    cpu.load(bytes([0x51, 0x21, 0x00, 0xE0]))
    assert disassemble(cpu.get_bus(), 0x200, 4) == [
        (0x200, "5121", "DW $5121"),
        (0x202, "00E0", "CLS"),
    ]


def test_disassemble_stops_at_end_of_memory(cpu):
    rows = cpu.disassemble(0xFFC, 16)
    assert [row[0] for row in rows] == [0xFFC, 0xFFE]


def test_disassemble_ignores_trailing_odd_byte(cpu):
    assert len(cpu.disassemble(0x200, 3)) == 1


def test_disassemble_does_not_log_bus_activity(cpu):
    cpu.disassemble(0x200, 32)
    assert cpu.get_bus().get_and_clear_activity_log() == []
