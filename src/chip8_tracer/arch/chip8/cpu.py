# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

このモジュールはメモリ・画面・レジスタ・スタック・キーパッド・タイマーを所有する
CHIP-8マシンを提供し、AbstractCpuインターフェースを実装します。
外部のドライバは一定周期でtick()とtick_timers()を呼び出し、実行速度を決定します。
"""
import random
from typing import Dict, List, Optional, Tuple

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.errors import OutOfBoundsError
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo, DisassemblyLine
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.devices import FrameBuffer, Keypad, Peripherals
from chip8_tracer.arch.chip8.constants import (
    RAM_SIZE, START_ADDR, FONTSET, FONTSET_ADDR, NUM_REGS, INSTRUCTION_LENGTH, FLAG_REG,
)
from chip8_tracer.arch.chip8.instructions import decode_opcode, execute_instruction
from chip8_tracer.arch.chip8.instructions.base import combine_opcode
from chip8_tracer.arch.chip8 import disassembler

# @intent:utility_function 4KBのRAMを0x000-0xFFFに配置した標準のバスを生成します。
def create_memory_bus() -> Bus:
    bus = Bus()
    bus.register_device(0x000, RAM_SIZE - 1, RAM(RAM_SIZE))
    return bus

# @intent:responsibility CHIP-8マシンの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8をエミュレートするクラス。

    busを省略した場合は標準の4KB RAMバスを生成します。
    rngには getrandbits(8) を提供する乱数源を注入でき、省略時は新しい random.Random を使います。
    """
    def __init__(self, bus: Optional[Bus] = None, rng: Optional[random.Random] = None):
        if bus is None:
            bus = create_memory_bus()
        self._io = Peripherals(rng=rng if rng is not None else random.Random())
        super().__init__(bus)
        self._load_fontset()

    # @intent:responsibility CHIP-8の初期状態（PC=0x200、その他は0）を生成します。
    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility 予約領域にグリフアトラスを書き込みます。
    def _load_fontset(self) -> None:
        for offset, byte in enumerate(FONTSET):
            self._bus.poke(FONTSET_ADDR + offset, byte)

    # @intent:responsibility マシン全体を初期状態に戻します。
    # @intent:post-condition 新しく生成したインスタンスと状態が一致します（乱数源の内部状態を除く）。
    def reset(self) -> None:
        super().reset()
        self._bus.reset_devices()
        self._bus.get_and_clear_activity_log()
        self._io.display.clear()
        self._io.keypad.reset()
        self._load_fontset()

    # @intent:responsibility プログラムイメージを0x200から配置します。
    # @intent:pre-condition len(data) <= メモリサイズ - 0x200。超過した場合は何も書き込まずにOutOfBoundsErrorを発生させます。
    def load(self, data: bytes) -> None:
        capacity = self._bus.get_address_limit() - START_ADDR
        if len(data) > capacity:
            raise OutOfBoundsError(
                f"Program image of {len(data)} bytes exceeds the {capacity} bytes available at {START_ADDR:#05x}.",
                START_ADDR + len(data) - 1,
            )
        for offset, byte in enumerate(data):
            self._bus.poke(START_ADDR + offset, byte)

    # @intent:responsibility 1命令を実行します。トレースが不要な呼び出し側向けのstep()の別名です。
    def tick(self) -> None:
        self.step()

    # @intent:responsibility 遅延タイマーとサウンドタイマーを1ずつ減らします（0で止まる）。
    def tick_timers(self) -> None:
        s = self._state
        if s.delay_timer > 0:
            s.delay_timer -= 1
        if s.sound_timer > 0:
            s.sound_timer -= 1

    # @intent:responsibility サウンドタイマーがちょうど1（このティックで0になる）かを返します。
    def should_play_sound(self) -> bool:
        return self._state.sound_timer == 1

    def get_display(self) -> Tuple[bool, ...]:
        return self._io.display.view()

    def get_framebuffer(self) -> FrameBuffer:
        return self._io.display

    def get_keypad(self) -> Keypad:
        return self._io.keypad

    # @intent:pre-condition indexは0-15である必要があります。範囲外はIndexError。
    def keypress(self, index: int, pressed: bool) -> None:
        self._io.keypad.set_key(index, pressed)

    # @intent:responsibility PCから2バイトを読み、ビッグエンディアンのオペコードとして返します。PCは2進みます。
    def _fetch(self) -> int:
        pc = self._state.pc
        high = self._bus.read(pc)
        low = self._bus.read(pc + 1)
        self._state.pc = (pc + INSTRUCTION_LENGTH) & 0xFFFF
        return combine_opcode(high, low)

    def _decode(self, opcode: int, address: int) -> Operation:
        return decode_opcode(opcode, address)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus, self._io)

    # @intent:responsibility 検査用に、指定範囲のメモリ内容をアクセスログなしで返します。
    def dump_memory(self, start_addr: int = 0, length: Optional[int] = None) -> bytes:
        if length is None:
            length = self._bus.get_address_limit() - start_addr
        return bytes(self._bus.peek(addr) for addr in range(start_addr, start_addr + length))

    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        regs = {f"V{idx:X}": s.v[idx] for idx in range(NUM_REGS)}
        regs.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return regs

    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{idx:X}", 8) for idx in range(NUM_REGS)]),
            RegisterLayoutInfo("Pointers/Timers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8),
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ])
        ]

    # @intent:responsibility VFをフラグとして解釈した状態を返します。
    def get_flag_state(self) -> Dict[str, bool]:
        return {"VF": self._state.v[FLAG_REG] != 0}

    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._bus, start_addr, length)
