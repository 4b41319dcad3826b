# tests/debugger/test_debugger.py
"""
chip8_tracer.debugger.debuggerモジュールの単体テスト。
Debuggerの実行制御、ブレークポイント管理、および条件チェック機能を検証します。
"""
import pytest
from unittest.mock import patch

from chip8_tracer.core.errors import UnknownOpcodeError
from chip8_tracer.core.snapshot import Snapshot, Operation, Metadata
from chip8_tracer.arch.chip8 import Chip8Cpu, Chip8CpuState
from chip8_tracer.debugger.debugger import Debugger, BreakpointCondition, BreakpointConditionType

# @intent:test_suite デバッガのブレークポイントと実行制御機能の検証。


def words(*opcodes):
    data = bytearray()
    for op in opcodes:
        data += bytes([op >> 8, op & 0xFF])
    return bytes(data)


# 0x200: ADD V0, #$01 ; 0x202: JP $200
COUNTER_LOOP = words(0x7001, 0x1200)


@pytest.fixture
def setup_debugger():
    cpu = Chip8Cpu()
    debugger = Debugger(cpu)
    return debugger, cpu


def test_add_remove_breakpoint(setup_debugger):
    debugger, _ = setup_debugger
    bp1 = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x202)
    bp2 = BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0x300)

    debugger.add_breakpoint(bp1)
    debugger.add_breakpoint(bp2)
    debugger.add_breakpoint(bp1) # 重複追加は無視される
    assert debugger.get_breakpoints() == [bp1, bp2]

    bp1_disabled = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x202, enabled=False)
    debugger.update_breakpoint(bp1, bp1_disabled)
    assert debugger.get_breakpoints() == [bp1_disabled, bp2]

    debugger.remove_breakpoint(bp2)
    debugger.remove_breakpoint(bp2) # 存在しないブレークポイントの削除はエラーにならない
    assert debugger.get_breakpoints() == [bp1_disabled]


def test_step_instruction_records_history(setup_debugger):
    debugger, cpu = setup_debugger
    with patch.object(cpu, 'step', return_value=Snapshot(
        state=Chip8CpuState(pc=0x202),
        operation=Operation(opcode_hex="0000", mnemonic="NOP", length=2),
        metadata=Metadata(cycle_count=1),
    )) as mock_step:
        snapshot = debugger.step_instruction()
        mock_step.assert_called_once()
    assert snapshot.state.pc == 0x202
    assert debugger.get_last_snapshot() is snapshot
    assert debugger.get_history() == [snapshot]


def test_history_is_bounded():
    cpu = Chip8Cpu()
    cpu.load(COUNTER_LOOP)
    debugger = Debugger(cpu, history_limit=3)
    for _ in range(10):
        debugger.step_instruction()
    history = debugger.get_history()
    assert len(history) == 3
    assert history[-1] is debugger.get_last_snapshot()


def test_pc_match_breakpoint(setup_debugger, capsys):
    debugger, cpu = setup_debugger
    cpu.load(words(0x0000, 0x0000, 0x0000, 0x1206))
    bp = BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x204)
    debugger.add_breakpoint(bp)

    assert debugger.run() == bp
    assert cpu.get_state().pc == 0x204
    assert debugger.last_hit == bp
    assert "Breakpoint hit at PC: 0x0204" in capsys.readouterr().out

    # 同じ位置から再開すると、まず1命令進んでから次の判定を行う
    assert debugger.run(max_steps=5) is None
    assert cpu.get_state().pc == 0x206


def test_disabled_breakpoint_is_ignored(setup_debugger):
    debugger, cpu = setup_debugger
    cpu.load(COUNTER_LOOP)
    debugger.add_breakpoint(BreakpointCondition(BreakpointConditionType.PC_MATCH, value=0x202, enabled=False))
    assert debugger.run(max_steps=6) is None
    assert cpu.get_state().v[0] == 3


def test_memory_write_breakpoint(setup_debugger):
    debugger, cpu = setup_debugger
    cpu.load(words(0xA300, 0x6107, 0xF155, 0x1206))
    bp = BreakpointCondition(BreakpointConditionType.MEMORY_WRITE, address=0x301)
    debugger.add_breakpoint(bp)
    assert debugger.run(max_steps=100) == bp
    assert cpu.get_state().pc == 0x206
    assert cpu.dump_memory(0x301, 1) == b"\x07"


def test_memory_read_breakpoint(setup_debugger):
    debugger, cpu = setup_debugger
    cpu.load(words(0x0000, 0x0000, 0x1204))
    bp = BreakpointCondition(BreakpointConditionType.MEMORY_READ, address=0x203)
    debugger.add_breakpoint(bp)
    assert debugger.run(max_steps=100) == bp
    assert cpu.get_state().pc == 0x204


def test_register_value_breakpoint(setup_debugger):
    debugger, cpu = setup_debugger
    cpu.load(COUNTER_LOOP)
    bp = BreakpointCondition(BreakpointConditionType.REGISTER_VALUE, register_name="V0", value=5)
    debugger.add_breakpoint(bp)
    assert debugger.run(max_steps=100) == bp
    assert cpu.get_state().v[0] == 5


def test_register_change_breakpoint(setup_debugger):
    debugger, cpu = setup_debugger
    cpu.load(words(0x0000, 0x0000, 0xA123, 0x1206))
    bp = BreakpointCondition(BreakpointConditionType.REGISTER_CHANGE, register_name="I")
    debugger.add_breakpoint(bp)
    assert debugger.run(max_steps=100) == bp
    assert cpu.get_state().i == 0x123
    assert cpu.get_state().pc == 0x206


def test_max_steps(setup_debugger):
    debugger, cpu = setup_debugger
    cpu.load(COUNTER_LOOP)
    assert debugger.run(max_steps=10) is None
    assert cpu.get_state().v[0] == 5
    assert debugger.run(max_steps=0) is None
    assert cpu.get_state().v[0] == 5


def test_fault_propagates(setup_debugger):
    debugger, cpu = setup_debugger
    cpu.load(words(0x0000, 0x5121))
    with pytest.raises(UnknownOpcodeError):
        debugger.run(max_steps=10)
