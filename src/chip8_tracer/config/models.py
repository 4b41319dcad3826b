from dataclasses import dataclass, field
from typing import Dict, List, Optional

@dataclass
class MemoryRegion:
    start: int
    end: int
    type: str  # "RAM"
    label: str = ""

@dataclass
class CpuInitialState:
    pc: int = 0x200
    i: int = 0x000
    delay_timer: int = 0
    sound_timer: int = 0
    registers: Dict[str, int] = field(default_factory=dict)  # 例: {"v0": 5, "vf": 1}

@dataclass
class SystemConfig:
    architecture: str = "CHIP8"
    memory_map: List[MemoryRegion] = field(default_factory=list)
    initial_state: CpuInitialState = field(default_factory=CpuInitialState)
    random_seed: Optional[int] = None
    symbols: Dict[str, int] = field(default_factory=dict)
