# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
import random
from dataclasses import dataclass
from typing import List, NamedTuple

from retro_chip8.arch.chip8.display import Framebuffer
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.config.models import QuirkConfig
from retro_chip8.transport.bus import Bus


# @intent:data_structure 16bit命令語から固定のビット位置で切り出したフィールド。状態は持ちません。
class Fields(NamedTuple):
    x: int    # bits 8-11 (レジスタ番号)
    y: int    # bits 4-7  (レジスタ番号)
    n: int    # bits 0-3
    nn: int   # bits 0-7
    nnn: int  # bits 0-11 (アドレス)


# @intent:utility_function 命令語を各フィールドに分解します。
def decode_fields(opcode: int) -> Fields:
    return Fields(
        x=(opcode >> 8) & 0xF,
        y=(opcode >> 4) & 0xF,
        n=opcode & 0xF,
        nn=opcode & 0xFF,
        nnn=opcode & 0xFFF,
    )


# @intent:responsibility 命令の実行に必要な、CPUが所有する資源一式を束ねます。
@dataclass
class ExecutionContext:
    state: Chip8CpuState
    bus: Bus
    display: Framebuffer
    quirks: QuirkConfig
    rng: random.Random
    rpl: List[int]


# @intent:utility_function 次の命令をスキップします（PCを2進める）。
def skip_next(state: Chip8CpuState) -> None:
    state.pc += 2


# @intent:utility_function オペランド表記用のレジスタ名。
def reg(index: int) -> str:
    return f"V{index:X}"
