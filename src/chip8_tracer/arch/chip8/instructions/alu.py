# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VFは汎用レジスタであると同時にキャリー/ボローのフラグでもあります。
加減算では結果をVxへ書いた後にVFを書くため、x == 0xF の場合はフラグ値が残ります。
シフトではVFを先に書き、その後にシフト結果をVxへ書きます。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.devices import Peripherals
from chip8_tracer.arch.chip8.constants import FLAG_REG
from .base import Chip8Operation

# --- ADD Vx, byte (7xkk) ---
# @intent:responsibility 8ビットで折り返す加算。フラグは変化しません。
def execute_add_byte(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] = (state.v[op.x] + op.kk) & 0xFF

# --- OR / AND / XOR Vx, Vy (8xy1 / 8xy2 / 8xy3) ---
def execute_or(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] |= state.v[op.y]

def execute_and(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] &= state.v[op.y]

def execute_xor(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] ^= state.v[op.y]

# --- ADD Vx, Vy (8xy4) ---
# @intent:responsibility VF = 1 if 桁あふれ else 0
def execute_add_reg(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    res = state.v[op.x] + state.v[op.y]
    state.v[op.x] = res & 0xFF
    state.v[FLAG_REG] = 1 if res > 0xFF else 0

# @intent:utility_function a - b を8ビットで折り返して計算し、(結果, VF) を返します。
# @intent:rationale このマシンのVFはボローが発生したときに0、しなかったときに1になります（反転規約）。
def sub8(a: int, b: int):
    return (a - b) & 0xFF, 0 if a < b else 1

# --- SUB Vx, Vy (8xy5) ---
def execute_sub(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    res, flag = sub8(state.v[op.x], state.v[op.y])
    state.v[op.x] = res
    state.v[FLAG_REG] = flag

# --- SUBN Vx, Vy (8xy7) ---
def execute_subn(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    res, flag = sub8(state.v[op.y], state.v[op.x])
    state.v[op.x] = res
    state.v[FLAG_REG] = flag

# --- SHR Vx (8xy6) ---
# @intent:responsibility シフト前の最下位ビットをVFに退避してから右シフトします。Vyは参照しません。
def execute_shr(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    value = state.v[op.x]
    state.v[FLAG_REG] = value & 0x01
    state.v[op.x] = value >> 1

# --- SHL Vx (8xyE) ---
# @intent:responsibility シフト前の最上位ビットをVFに退避してから左シフトします（8ビットで切り捨て）。
def execute_shl(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    value = state.v[op.x]
    state.v[FLAG_REG] = (value >> 7) & 0x01
    state.v[op.x] = (value << 1) & 0xFF

# --- ADD I, Vx (Fx1E) ---
def execute_add_i(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.i = (state.i + state.v[op.x]) & 0xFFFF

# --- RND Vx, byte (Cxkk) ---
def execute_rnd(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    state.v[op.x] = io.random_byte() & op.kk
