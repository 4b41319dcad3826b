# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field, replace
from typing import List

from chip8_tracer.core.state import CpuState
from chip8_tracer.arch.chip8.constants import START_ADDR, NUM_REGS, STACK_SIZE, FLAG_REG

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC, SP）、スタック、タイマーの状態を保持します。
# @intent:rationale VFは汎用レジスタとキャリー/ボロー/衝突フラグを兼ねるため、独立したフラグフィールドは設けません。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    spはスタックの次の空きスロットを指します（0 = 空）。
    """
    pc: int = START_ADDR
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGS)
    i: int = 0x000                # Address Register
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    delay_timer: int = 0
    sound_timer: int = 0

    @property
    def vf(self) -> int:
        return self.v[FLAG_REG]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REG] = value & 0xFF

    def copy(self) -> 'Chip8CpuState':
        return replace(self, v=list(self.v), stack=list(self.stack))
