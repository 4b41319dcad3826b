# src/chip8_tracer/arch/chip8/instructions/load.py
"""
ロード/ストア命令の実装（レジスタ、Iレジスタ、タイマー、メモリ転送）。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.devices import Peripherals
from chip8_tracer.arch.chip8.constants import INSTRUCTION_LENGTH, FONTSET_ADDR, GLYPH_HEIGHT
from .base import Chip8Operation

# --- LD Vx, byte (6xkk) ---
def execute_ld_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] = op.kk

# --- LD Vx, Vy (8xy0) ---
def execute_ld_reg(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] = state.v[op.y]

# --- LD I, addr (Annn) ---
def execute_ld_i(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.i = op.nnn

# --- LD Vx, DT (Fx07) ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] = state.delay_timer

# --- LD Vx, K (Fx0A) ---
# @intent:responsibility キー入力待ち。押下中のキーがなければPCを巻き戻し、次のステップで同じ命令を再実行します。
# @intent:rationale 実際にブロックせず、呼び出し側のステップ駆動によるポーリングで待機を表現します。
def execute_ld_vx_k(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    key = io.keypad.first_pressed()
    if key is None:
        state.pc = (state.pc - INSTRUCTION_LENGTH) & 0xFFFF
    else:
        state.v[op.x] = key

# --- LD DT, Vx (Fx15) ---
def execute_ld_dt(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.delay_timer = state.v[op.x]

# --- LD ST, Vx (Fx18) ---
def execute_ld_st(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.sound_timer = state.v[op.x]

# --- LD F, Vx (Fx29) ---
# @intent:responsibility Vxの値に対応する組み込み数字グリフの先頭アドレスをIに設定します。
def execute_ld_f(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.i = FONTSET_ADDR + state.v[op.x] * GLYPH_HEIGHT

# --- LD B, Vx (Fx33) ---
# @intent:responsibility Vxを10進の百・十・一の位に分解し、I, I+1, I+2 に格納します。
def execute_ld_b(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    value = state.v[op.x]
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
# @intent:responsibility V0..Vx（両端を含む）をIから始まるメモリに格納します。Iは変化しません。
def execute_ld_store(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    for idx in range(op.x + 1):
        bus.write(state.i + idx, state.v[idx])

# --- LD Vx, [I] (Fx65) ---
def execute_ld_load(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    for idx in range(op.x + 1):
        state.v[idx] = bus.read(state.i + idx)
