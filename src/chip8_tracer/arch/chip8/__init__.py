# src/chip8_tracer/arch/chip8/__init__.py
"""
CHIP-8 Architecture Package
"""
from .cpu import Chip8Cpu, create_memory_bus
from .state import Chip8CpuState
from .devices import FrameBuffer, Keypad, Peripherals
