# src/chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用しますが、バスアクセスログを汚さないように
Bus.peekで読み出します。
"""
from typing import List

from chip8_tracer.common.types import DisassemblyLine
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.constants import INSTRUCTION_LENGTH
from chip8_tracer.arch.chip8.instructions import decode_opcode
from chip8_tracer.arch.chip8.instructions.base import combine_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。
    未定義のワードは "DW $xxxx" として表示します。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, bus.get_address_limit())

    # 1命令ぶんの2バイトが揃わない末尾は出力しない
    while current_addr + 1 < end_addr:
        opcode = combine_opcode(bus.peek(current_addr), bus.peek(current_addr + 1))
        operation = decode_opcode(opcode, current_addr)

        if operation.pattern is None:
            mnemonic_str = f"DW ${opcode:04X}"
        else:
            mnemonic_str = operation.text()

        result.append((current_addr, operation.opcode_hex, mnemonic_str))
        current_addr += INSTRUCTION_LENGTH

    return result
