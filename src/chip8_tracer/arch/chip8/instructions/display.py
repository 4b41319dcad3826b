# src/chip8_tracer/arch/chip8/instructions/display.py
"""
画面命令（クリア、スプライト描画）の実装。
"""
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.devices import Peripherals
from chip8_tracer.arch.chip8.constants import FLAG_REG
from .base import Chip8Operation

# --- CLS (00E0) ---
def execute_cls(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    io.display.clear()

# --- DRW Vx, Vy, nibble (Dxyn) ---
# @intent:responsibility Iから読み出したn行のスプライトを (Vx, Vy) にXOR描画します。
# @intent:post-condition 点灯していた画素が1つでも消えた場合にVF=1、それ以外はVF=0。
def execute_drw(state: Chip8CpuState, bus: Bus, op: Chip8Operation, io: Peripherals) -> None:
    x_coord = state.v[op.x]
    y_coord = state.v[op.y]
    collided = False
    for row in range(op.n):
        bits = bus.read(state.i + row)
        collided |= io.display.draw_row(x_coord, y_coord + row, bits)
    state.v[FLAG_REG] = 1 if collided else 0
