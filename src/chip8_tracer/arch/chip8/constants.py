# src/chip8_tracer/arch/chip8/constants.py
"""
CHIP-8 マシンの固定パラメータと組み込みフォント。
"""

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

RAM_SIZE = 0x1000     # 4KB
NUM_REGS = 16
NUM_KEYS = 16
STACK_SIZE = 16

START_ADDR = 0x200    # プログラムのロード開始アドレス
FONTSET_ADDR = 0x000  # グリフアトラスの先頭アドレス
GLYPH_HEIGHT = 5      # 1文字あたりのバイト数

INSTRUCTION_LENGTH = 2
FLAG_REG = 0xF

# @intent:constant 16進数字 0-F の 4x5 ビットマップ。各行の上位4ビットのみ使用します。
FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80, # F
])
