# src/retro_chip8/arch/chip8/__init__.py
"""
CHIP-8 / SUPER-CHIP Architecture Package
"""
from .cpu import Chip8Cpu
from .display import Framebuffer
from .state import Chip8CpuState
