# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from chip8_tracer.core.errors import UnknownOpcodeError
from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.devices import Peripherals
from chip8_tracer.arch.chip8.constants import INSTRUCTION_LENGTH
from .base import Chip8Operation, operand_fields
from .maps import PATTERN_TABLE, EXECUTE_MAP

# @intent:responsibility 16ビットのオペコードをCHIP-8の命令記述子にデコードします。
# @intent:post-condition 未定義のオペコードでも例外は発生させず、pattern=Noneの "UNKNOWN" 命令を返します。
def decode_opcode(opcode: int, address: int) -> Chip8Operation:
    """
    CHIP-8のオペコードをデコードし、Chip8Operationオブジェクトを返します。
    """
    for mask, match, pattern, mnemonic, formats in PATTERN_TABLE:
        if opcode & mask == match:
            fields = operand_fields(opcode)
            return Chip8Operation(
                opcode_hex=f"{opcode:04X}", mnemonic=mnemonic,
                operands=[fmt.format(**fields) for fmt in formats],
                operand_bytes=[opcode >> 8, opcode & 0xFF],
                cycle_count=1, length=INSTRUCTION_LENGTH,
                pattern=pattern, opcode=opcode, address=address,
            )
    return Chip8Operation(
        opcode_hex=f"{opcode:04X}", mnemonic="UNKNOWN", operands=[f"${opcode:04X}"],
        operand_bytes=[opcode >> 8, opcode & 0xFF],
        cycle_count=1, length=INSTRUCTION_LENGTH, pattern=None, opcode=opcode, address=address,
    )

# @intent:responsibility デコードされたCHIP-8命令を実行します。
# @intent:pre-condition PCはフェッチ済み（命令の次のアドレスを指している）である必要があります。
def execute_instruction(operation: Chip8Operation, state: Chip8CpuState, bus: Bus, io: Peripherals) -> None:
    executor = EXECUTE_MAP.get(operation.pattern)
    if executor is None:
        raise UnknownOpcodeError(operation.opcode, operation.address)
    executor(state, bus, operation, io)
