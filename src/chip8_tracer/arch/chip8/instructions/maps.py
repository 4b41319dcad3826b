# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。
"""
from . import control
from . import load
from . import alu
from . import display

# @intent:map 命令形式の照合テーブル。(mask, match, pattern, mnemonic, operand_formats)
# @intent:rationale 16ビットのオペコードを4つのニブルとして照合します。maskが0のニブルはオペランドとして取り出されます。
#                  先に一致した行が採用されます。operand_formatsはChip8Operationの属性名で展開されます。
PATTERN_TABLE = [
    # System
    (0xFFFF, 0x0000, "0000", "NOP",  []),
    (0xFFFF, 0x00E0, "00E0", "CLS",  []),
    (0xFFFF, 0x00EE, "00EE", "RET",  []),

    # Control
    (0xF000, 0x1000, "1NNN", "JP",   ["${nnn:03X}"]),
    (0xF000, 0x2000, "2NNN", "CALL", ["${nnn:03X}"]),
    (0xF000, 0x3000, "3XKK", "SE",   ["V{x:X}", "#${kk:02X}"]),
    (0xF000, 0x4000, "4XKK", "SNE",  ["V{x:X}", "#${kk:02X}"]),
    (0xF00F, 0x5000, "5XY0", "SE",   ["V{x:X}", "V{y:X}"]),

    # Load / ALU
    (0xF000, 0x6000, "6XKK", "LD",   ["V{x:X}", "#${kk:02X}"]),
    (0xF000, 0x7000, "7XKK", "ADD",  ["V{x:X}", "#${kk:02X}"]),
    (0xF00F, 0x8000, "8XY0", "LD",   ["V{x:X}", "V{y:X}"]),
    (0xF00F, 0x8001, "8XY1", "OR",   ["V{x:X}", "V{y:X}"]),
    (0xF00F, 0x8002, "8XY2", "AND",  ["V{x:X}", "V{y:X}"]),
    (0xF00F, 0x8003, "8XY3", "XOR",  ["V{x:X}", "V{y:X}"]),
    (0xF00F, 0x8004, "8XY4", "ADD",  ["V{x:X}", "V{y:X}"]),
    (0xF00F, 0x8005, "8XY5", "SUB",  ["V{x:X}", "V{y:X}"]),
    (0xF00F, 0x8006, "8XY6", "SHR",  ["V{x:X}"]),
    (0xF00F, 0x8007, "8XY7", "SUBN", ["V{x:X}", "V{y:X}"]),
    (0xF00F, 0x800E, "8XYE", "SHL",  ["V{x:X}"]),
    (0xF00F, 0x9000, "9XY0", "SNE",  ["V{x:X}", "V{y:X}"]),
    (0xF000, 0xA000, "ANNN", "LD",   ["I", "${nnn:03X}"]),
    (0xF000, 0xB000, "BNNN", "JP",   ["V0", "${nnn:03X}"]),
    (0xF000, 0xC000, "CXKK", "RND",  ["V{x:X}", "#${kk:02X}"]),

    # Display
    (0xF000, 0xD000, "DXYN", "DRW",  ["V{x:X}", "V{y:X}", "{n}"]),

    # Keypad
    (0xF0FF, 0xE09E, "EX9E", "SKP",  ["V{x:X}"]),
    (0xF0FF, 0xE0A1, "EXA1", "SKNP", ["V{x:X}"]),

    # Timers / Memory
    (0xF0FF, 0xF007, "FX07", "LD",   ["V{x:X}", "DT"]),
    (0xF0FF, 0xF00A, "FX0A", "LD",   ["V{x:X}", "K"]),
    (0xF0FF, 0xF015, "FX15", "LD",   ["DT", "V{x:X}"]),
    (0xF0FF, 0xF018, "FX18", "LD",   ["ST", "V{x:X}"]),
    (0xF0FF, 0xF01E, "FX1E", "ADD",  ["I", "V{x:X}"]),
    (0xF0FF, 0xF029, "FX29", "LD",   ["F", "V{x:X}"]),
    (0xF0FF, 0xF033, "FX33", "LD",   ["B", "V{x:X}"]),
    (0xF0FF, 0xF055, "FX55", "LD",   ["[I]", "V{x:X}"]),
    (0xF0FF, 0xF065, "FX65", "LD",   ["V{x:X}", "[I]"]),
]

# @intent:map 命令形式タグから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # System
    "0000": control.execute_nop,
    "00E0": display.execute_cls,
    "00EE": control.execute_ret,

    # Control
    "1NNN": control.execute_jp,
    "2NNN": control.execute_call,
    "3XKK": control.execute_se_byte,
    "4XKK": control.execute_sne_byte,
    "5XY0": control.execute_se_reg,
    "9XY0": control.execute_sne_reg,
    "BNNN": control.execute_jp_v0,
    "EX9E": control.execute_skp,
    "EXA1": control.execute_sknp,

    # Load / Store
    "6XKK": load.execute_ld_byte,
    "8XY0": load.execute_ld_reg,
    "ANNN": load.execute_ld_i,
    "FX07": load.execute_ld_vx_dt,
    "FX0A": load.execute_ld_vx_k,
    "FX15": load.execute_ld_dt,
    "FX18": load.execute_ld_st,
    "FX29": load.execute_ld_f,
    "FX33": load.execute_ld_b,
    "FX55": load.execute_ld_store,
    "FX65": load.execute_ld_load,

    # ALU
    "7XKK": alu.execute_add_byte,
    "8XY1": alu.execute_or,
    "8XY2": alu.execute_and,
    "8XY3": alu.execute_xor,
    "8XY4": alu.execute_add_reg,
    "8XY5": alu.execute_sub,
    "8XY6": alu.execute_shr,
    "8XY7": alu.execute_subn,
    "8XYE": alu.execute_shl,
    "FX1E": alu.execute_add_i,
    "CXKK": alu.execute_rnd,

    # Display
    "DXYN": display.execute_drw,
}
