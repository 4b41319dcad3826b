# src/chip8_tracer/arch/chip8/devices.py
"""
CHIP-8 の周辺装置（フレームバッファ、キーパッド、乱数源）。

これらはメモリ空間には現れず、命令実行部から直接操作されます。
"""
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from chip8_tracer.arch.chip8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, NUM_KEYS


# @intent:responsibility 64x32のモノクロ画面を行優先の真偽値配列として保持します。
# @intent:invariant 画素の更新はクリアを除き、常にスプライト行とのXORで行われます。
class FrameBuffer:
    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self._pixels: List[bool] = [False] * (width * height)

    def clear(self) -> None:
        self._pixels = [False] * (self.width * self.height)

    # @intent:responsibility 1画素をXORで反転させ、点灯していた画素が消えた場合にTrueを返します。
    # @intent:pre-condition x, yは画面の範囲内に折り返し済みである必要があります。
    def xor_pixel(self, x: int, y: int) -> bool:
        idx = self.width * y + x
        was_lit = self._pixels[idx]
        self._pixels[idx] = not was_lit
        return was_lit

    # @intent:responsibility 1バイト分（8画素）のスプライト行を描画し、衝突の有無を返します。
    # @intent:rationale 座標は画面端で折り返されます（トーラス状）。
    def draw_row(self, x: int, y: int, bits: int) -> bool:
        collided = False
        row = y % self.height
        for column in range(8):
            if bits & (0x80 >> column):
                col = (x + column) % self.width
                collided |= self.xor_pixel(col, row)
        return collided

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[self.width * y + x]

    # @intent:responsibility 描画側に渡すための読み取り専用ビューを返します。
    def view(self) -> Tuple[bool, ...]:
        return tuple(self._pixels)

    def rows(self) -> List[Tuple[bool, ...]]:
        return [tuple(self._pixels[y * self.width:(y + 1) * self.width]) for y in range(self.height)]

    def __eq__(self, other) -> bool:
        if not isinstance(other, FrameBuffer):
            return NotImplemented
        return (self.width, self.height, self._pixels) == (other.width, other.height, other._pixels)


# @intent:responsibility 16キーの押下状態を保持します。更新は外部の入力処理からのみ行われます。
class Keypad:
    def __init__(self):
        self._keys: List[bool] = [False] * NUM_KEYS

    def reset(self) -> None:
        self._keys = [False] * NUM_KEYS

    # @intent:pre-condition indexは0-15である必要があります。
    def set_key(self, index: int, pressed: bool) -> None:
        if not 0 <= index < NUM_KEYS:
            raise IndexError(f"Key index {index} out of range (0-{NUM_KEYS - 1}).")
        self._keys[index] = bool(pressed)

    def is_pressed(self, index: int) -> bool:
        if not 0 <= index < NUM_KEYS:
            raise IndexError(f"Key index {index} out of range (0-{NUM_KEYS - 1}).")
        return self._keys[index]

    # @intent:responsibility 押下中のキーのうち最小のインデックスを返します。なければNone。
    def first_pressed(self) -> Optional[int]:
        for idx, pressed in enumerate(self._keys):
            if pressed:
                return idx
        return None

    def snapshot(self) -> Tuple[bool, ...]:
        return tuple(self._keys)


# @intent:responsibility 命令実行部が参照する周辺装置をまとめて受け渡すためのコンテナ。
# @intent:rationale 乱数源は差し替え可能とし、テストで再現性のある値を注入できるようにします。
@dataclass
class Peripherals:
    display: FrameBuffer = field(default_factory=FrameBuffer)
    keypad: Keypad = field(default_factory=Keypad)
    rng: random.Random = field(default_factory=random.Random)

    def random_byte(self) -> int:
        return self.rng.getrandbits(8) & 0xFF
