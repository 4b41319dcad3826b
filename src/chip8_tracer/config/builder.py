import random
import warnings
from typing import Tuple
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.arch.chip8.cpu import Chip8Cpu, create_memory_bus
from chip8_tracer.arch.chip8.constants import RAM_SIZE
from .models import SystemConfig, CpuInitialState

# @intent:responsibility システム構成（Config）に基づいて、Bus、Device、CPUを生成・接続し、初期状態を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Chip8Cpu, Bus]:
        if config.architecture.upper() not in ("CHIP8", "CHIP-8"):
            raise ValueError(f"Unsupported architecture: {config.architecture}")

        bus = self._build_bus(config)
        rng = random.Random(config.random_seed) if config.random_seed is not None else None
        cpu = Chip8Cpu(bus, rng=rng)
        cpu.set_symbol_map(config.symbols)

        # 初期状態の適用
        self.apply_initial_state(cpu, config.initial_state)

        return cpu, bus

    # @intent:responsibility メモリマップからバスを構築します。CHIP-8では0x000-0xFFFの全域がRAMで覆われている必要があります。
    def _build_bus(self, config: SystemConfig) -> Bus:
        if not config.memory_map:
            return create_memory_bus()

        bus = Bus()
        covered = set()
        total = 0
        for region in config.memory_map:
            if region.type != "RAM":
                warnings.warn(
                    f"Unknown device type '{region.type}' for range {region.start:03X}-{region.end:03X}, defaulting to RAM"
                )
            bus.register_device(region.start, region.end, RAM(region.end - region.start + 1))
            covered.update(range(region.start, region.end + 1))
            total += region.end - region.start + 1

        if covered != set(range(RAM_SIZE)) or total != RAM_SIZE:
            raise ValueError(f"CHIP8 memory map must cover exactly 0x000-{RAM_SIZE - 1:#05x}.")
        return bus

    # @intent:responsibility Configで定義された初期状態をCPUに適用します。
    def apply_initial_state(self, cpu: Chip8Cpu, config_state: CpuInitialState) -> None:
        """
        CPUをリセットし、Configから指定された初期値を適用します。
        """
        cpu.reset()
        state = cpu.get_state()

        state.pc = config_state.pc & 0xFFFF
        state.i = config_state.i & 0xFFFF
        state.delay_timer = config_state.delay_timer & 0xFF
        state.sound_timer = config_state.sound_timer & 0xFF
        for reg_name, value in config_state.registers.items():
            name = reg_name.lower()
            if len(name) == 2 and name[0] == "v" and name[1] in "0123456789abcdef":
                state.v[int(name[1], 16)] = value & 0xFF
            else:
                raise ValueError(f"Unknown register '{reg_name}' in initial_state")
