# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from chip8_tracer.core.errors import OutOfBoundsError
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.devices import Peripherals
from chip8_tracer.arch.chip8.constants import INSTRUCTION_LENGTH, NUM_KEYS
from .base import Chip8Operation, push, pop

# @intent:utility_function 次の命令を読み飛ばします。PCはフェッチ時点で既に2進んでいるため、さらに2進めます。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + INSTRUCTION_LENGTH) & 0xFFFF

# --- NOP (0000) ---
def execute_nop(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    pass

# --- RET (00EE) ---
# @intent:responsibility スタックから戻りアドレスを取り出してPCに設定します。
def execute_ret(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.pc = pop(state)

# --- JP addr (1nnn) ---
def execute_jp(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.pc = op.nnn

# --- CALL addr (2nnn) ---
# @intent:responsibility 現在のPC（次の命令のアドレス）を積み、サブルーチンへジャンプします。
def execute_call(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    push(state, state.pc)
    state.pc = op.nnn

# --- SE Vx, byte (3xkk) ---
def execute_se_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if state.v[op.x] == op.kk:
        skip_next(state)

# --- SNE Vx, byte (4xkk) ---
def execute_sne_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if state.v[op.x] != op.kk:
        skip_next(state)

# --- SE Vx, Vy (5xy0) ---
def execute_se_reg(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if state.v[op.x] == state.v[op.y]:
        skip_next(state)

# --- SNE Vx, Vy (9xy0) ---
def execute_sne_reg(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if state.v[op.x] != state.v[op.y]:
        skip_next(state)

# --- JP V0, addr (Bnnn) ---
# @intent:responsibility V0 + nnn へジャンプします。メモリ外を指した場合は次のフェッチで障害になります。
def execute_jp_v0(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.pc = state.v[0] + op.nnn

# @intent:utility_function VxをキーインデックスとしてキーパッドのOn/Offを参照します。
def _key_for(state: Chip8CpuState, op: Chip8Operation, io: Peripherals) -> bool:
    key = state.v[op.x]
    if key >= NUM_KEYS:
        raise OutOfBoundsError(f"Key index V{op.x:X}={key:#04x} out of range at {op.address:#05x}.", key)
    return io.keypad.is_pressed(key)

# --- SKP Vx (Ex9E) ---
def execute_skp(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if _key_for(state, op, io):
        skip_next(state)

# --- SKNP Vx (ExA1) ---
def execute_sknp(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    if not _key_for(state, op, io):
        skip_next(state)
