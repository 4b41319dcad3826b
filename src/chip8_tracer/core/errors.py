# chip8_tracer/core/errors.py
"""
Core Layer (致命的な実行時障害)

不正なプログラムイメージによって発生する障害を表す例外を定義します。
これらはCPU内部で回復されることはなく、呼び出し側が停止・リセット・診断表示の
いずれを行うかを判断します。
"""
from typing import Optional


# @intent:responsibility 全ての致命的なCPU障害の基底クラス。
class CpuFault(Exception):
    pass


# @intent:responsibility メモリ・スタック・キーパッドの範囲外アクセスを表します。
# @intent:rationale IndexErrorを継承し、Bus/RAM層の境界チェックと同じ扱いで捕捉できるようにします。
class OutOfBoundsError(CpuFault, IndexError):
    def __init__(self, message: str, address: Optional[int] = None):
        super().__init__(message)
        self.address = address


class StackOverflowError(OutOfBoundsError):
    pass


class StackUnderflowError(OutOfBoundsError):
    pass


# @intent:responsibility 定義済みのどの命令形式にも一致しないオペコードを表します。
class UnknownOpcodeError(CpuFault):
    def __init__(self, opcode: int, address: int):
        super().__init__(f"Unknown opcode {opcode:04X} at {address:#05x}")
        self.opcode = opcode
        self.address = address
