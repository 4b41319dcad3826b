# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from dataclasses import dataclass
from typing import Optional

from chip8_tracer.core.errors import StackOverflowError, StackUnderflowError
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.arch.chip8.constants import STACK_SIZE

# @intent:data_structure デコード済みのCHIP-8命令記述子。
# @intent:rationale 上位ニブルで命令ファミリー、残りのニブルでオペランドを表す命令エンコーディングをそのまま写します。
#                  patternは "8XY4" のような命令形式タグで、未定義のオペコードではNoneになります。
@dataclass(frozen=True)
class Chip8Operation(Operation):
    pattern: Optional[str] = None
    opcode: int = 0
    address: int = 0

    @property
    def x(self) -> int:
        return (self.opcode >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.opcode >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.opcode & 0xF

    @property
    def kk(self) -> int:
        return self.opcode & 0xFF

    @property
    def nnn(self) -> int:
        return self.opcode & 0xFFF

# @intent:utility_function オペコードからオペランドフィールド (x, y, n, kk, nnn) を取り出します。
def operand_fields(opcode: int) -> dict:
    return {
        "x": (opcode >> 8) & 0xF,
        "y": (opcode >> 4) & 0xF,
        "n": opcode & 0xF,
        "kk": opcode & 0xFF,
        "nnn": opcode & 0xFFF,
    }

# @intent:utility_function 2バイトをビッグエンディアンで16ビットのオペコードに結合します。
def combine_opcode(high: int, low: int) -> int:
    return ((high << 8) | low) & 0xFFFF

# @intent:utility_function 戻りアドレスをスタックに積みます。
# @intent:pre-condition スタックに空きがない場合はStackOverflowErrorを発生させます。
def push(state, value: int) -> None:
    if state.sp >= STACK_SIZE:
        raise StackOverflowError(f"Stack overflow: {STACK_SIZE} return addresses already pushed.", state.sp)
    state.stack[state.sp] = value
    state.sp += 1

# @intent:utility_function スタックから戻りアドレスを取り出します。
def pop(state) -> int:
    if state.sp == 0:
        raise StackUnderflowError("Stack underflow: return with an empty call stack.", state.sp)
    state.sp -= 1
    return state.stack[state.sp]
