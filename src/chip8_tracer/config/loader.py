import warnings
import yaml
from typing import Dict, Any
from .models import SystemConfig, MemoryRegion, CpuInitialState

KNOWN_KEYS = {"architecture", "memory_map", "initial_state", "random_seed", "symbols"}

# @intent:responsibility YAML形式のマシン構成を読み込み、SystemConfigに変換します。
class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError("Machine configuration must be a mapping.")
        for key in data:
            if key not in KNOWN_KEYS:
                warnings.warn(f"Ignoring unknown configuration key '{key}'")

        arch = str(data.get("architecture", "CHIP8"))

        # Parse Memory Map
        memory_map = []
        for region_data in data.get("memory_map", []) or []:
            memory_map.append(MemoryRegion(
                start=self._parse_int(region_data.get("start")),
                end=self._parse_int(region_data.get("end")),
                type=region_data.get("type", "RAM"),
                label=region_data.get("label", ""),
            ))

        # Parse Initial State
        initial_state_data = data.get("initial_state", {}) or {}
        registers = {
            str(name).lower(): self._parse_int(value)
            for name, value in (initial_state_data.get("registers", {}) or {}).items()
        }
        initial_state = CpuInitialState(
            pc=self._parse_int(initial_state_data.get("pc", 0x200)),
            i=self._parse_int(initial_state_data.get("i", 0)),
            delay_timer=self._parse_int(initial_state_data.get("delay_timer", 0)),
            sound_timer=self._parse_int(initial_state_data.get("sound_timer", 0)),
            registers=registers,
        )

        seed = data.get("random_seed")
        symbols = {
            str(name): self._parse_int(addr)
            for name, addr in (data.get("symbols", {}) or {}).items()
        }

        return SystemConfig(
            architecture=arch,
            memory_map=memory_map,
            initial_state=initial_state,
            random_seed=None if seed is None else self._parse_int(seed),
            symbols=symbols,
        )

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
