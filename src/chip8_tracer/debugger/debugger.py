# chip8_tracer/debugger/debugger.py
"""
デバッガモジュール。

コアエンジンの実行を制御し、ユーザーが指定した条件（ブレークポイント）で
実行を中断させる責務を負います。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Snapshot
from chip8_tracer.transport.bus import BusAccessType

# @intent:responsibility ブレークポイントの条件タイプを定義します。
class BreakpointConditionType(Enum):
    PC_MATCH = "PC_MATCH"               # プログラムカウンタが特定のアドレスに一致
    MEMORY_READ = "MEMORY_READ"         # 特定のアドレスが読み込まれた
    MEMORY_WRITE = "MEMORY_WRITE"       # 特定のアドレスに書き込まれた
    REGISTER_VALUE = "REGISTER_VALUE"   # 特定のレジスタが特定の値になった
    REGISTER_CHANGE = "REGISTER_CHANGE" # 特定のレジスタの値が変化した

# @intent:responsibility ブレークポイントをトリガーする条件を定義します。
# @intent:rationale ブレークポイント条件は一度設定したら変更されないため、不変にします（frozen=True）。
@dataclass(frozen=True)
class BreakpointCondition:
    condition_type: BreakpointConditionType
    value: Optional[int] = None           # PC_MATCH, REGISTER_VALUEで使用
    address: Optional[int] = None         # MEMORY_READ, MEMORY_WRITEで使用
    register_name: Optional[str] = None   # REGISTER_VALUE, REGISTER_CHANGEで使用 (例: "V3", "I")
    enabled: bool = True

# @intent:responsibility コアエンジンの実行制御とブレークポイント管理を行います。
class Debugger:
    """
    CPUの実行を制御し、ブレークポイントの管理を行うクラス。
    CPUが送出した障害（CpuFault）はrun()からそのまま伝播します。
    """
    def __init__(self, cpu: AbstractCpu, history_limit: int = 1000):
        self._cpu = cpu
        self._breakpoints: List[BreakpointCondition] = []
        self._running: bool = False
        self._previous_registers: Dict[str, int] = cpu.get_register_map()
        self._last_snapshot: Optional[Snapshot] = None
        self._history: List[Snapshot] = []
        self._history_limit = history_limit
        self.last_hit: Optional[BreakpointCondition] = None

    def add_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition not in self._breakpoints:
            self._breakpoints.append(condition)

    def update_breakpoint(self, old_condition: BreakpointCondition, new_condition: BreakpointCondition) -> None:
        if old_condition in self._breakpoints:
            idx = self._breakpoints.index(old_condition)
            self._breakpoints[idx] = new_condition

    def remove_breakpoint(self, condition: BreakpointCondition) -> None:
        if condition in self._breakpoints:
            self._breakpoints.remove(condition)

    def get_breakpoints(self) -> List[BreakpointCondition]:
        return list(self._breakpoints)

    def get_history(self) -> List[Snapshot]:
        return list(self._history)

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    # @intent:responsibility 現在のPCに一致する有効なPC_MATCHブレークポイントを返します。
    def _check_pc_breakpoints(self, pc: int) -> Optional[BreakpointCondition]:
        for bp in self._breakpoints:
            if bp.enabled and bp.condition_type == BreakpointConditionType.PC_MATCH and bp.value == pc:
                return bp
        return None

    # @intent:responsibility Snapshotに基づいてPC_MATCH以外のブレークポイントをチェックします。
    def _check_other_breakpoints(self, snapshot: Snapshot, registers: Dict[str, int]) -> Optional[BreakpointCondition]:
        for bp in self._breakpoints:
            if not bp.enabled:
                continue

            if bp.condition_type == BreakpointConditionType.MEMORY_READ:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.READ and access.address == bp.address:
                        return bp
            elif bp.condition_type == BreakpointConditionType.MEMORY_WRITE:
                for access in snapshot.bus_activity:
                    if access.access_type == BusAccessType.WRITE and access.address == bp.address:
                        return bp
            elif bp.condition_type == BreakpointConditionType.REGISTER_VALUE:
                if bp.register_name in registers and registers[bp.register_name] == bp.value:
                    return bp
            elif bp.condition_type == BreakpointConditionType.REGISTER_CHANGE:
                name = bp.register_name
                if name in registers and name in self._previous_registers:
                    if registers[name] != self._previous_registers[name]:
                        return bp
        return None

    def step_instruction(self) -> Snapshot:
        """
        CPUを1命令分実行し、その結果のSnapshotを返します。
        """
        self._previous_registers = self._cpu.get_register_map()
        snapshot = self._cpu.step()
        self._last_snapshot = snapshot

        self._history.append(snapshot)
        if len(self._history) > self._history_limit:
            del self._history[0]

        return snapshot

    # @intent:responsibility ブレークポイントにヒットするか、stop()されるか、max_steps命令を実行するまでCPUを実行します。
    # @intent:return ヒットしたブレークポイント。ヒットせずに停止した場合はNone。
    def run(self, max_steps: Optional[int] = None) -> Optional[BreakpointCondition]:
        self._running = True
        self.last_hit = None
        steps = 0

        # 現在のPCにブレークポイントがある場合は、まず1命令進めてから判定を開始する
        if self._check_pc_breakpoints(self._cpu.get_state().pc) and (max_steps is None or max_steps > 0):
            snapshot = self.step_instruction()
            steps += 1
            hit = self._check_other_breakpoints(snapshot, self._cpu.get_register_map())
            if hit:
                return self._break(hit, snapshot.state.pc)

        while self._running:
            if max_steps is not None and steps >= max_steps:
                self._running = False
                return None

            current_pc = self._cpu.get_state().pc
            hit = self._check_pc_breakpoints(current_pc)
            if hit:
                return self._break(hit, current_pc)

            snapshot = self.step_instruction()
            steps += 1

            hit = self._check_other_breakpoints(snapshot, self._cpu.get_register_map())
            if hit:
                return self._break(hit, snapshot.state.pc)
        return None

    def _break(self, hit: BreakpointCondition, pc: int) -> BreakpointCondition:
        self._running = False
        self.last_hit = hit
        print(f"Breakpoint hit at PC: {pc:#06x}")
        return hit

    def stop(self) -> None:
        self._running = False
