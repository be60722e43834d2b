# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from retro_chip8.common.types import KeyCode
from retro_chip8.core.state import CpuState

# @intent:constant プログラムのロード開始アドレス兼PCの初期値。
PROGRAM_START = 0x200
REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
# @intent:constant Fx75/Fx85 で使用する永続フラグレジスタの数。
RPL_COUNT = 8


# @intent:responsibility CHIP-8 CPUの全てのレジスタ（V0〜VF, I, PC）、コールスタック、タイマ、キー状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。

    VF は汎用レジスタであると同時に、キャリー/ボロー/シフトアウト/衝突の
    フラグ出力先でもあります。フラグを定義する命令は結果を書き込んだ後、
    VF を無条件に上書きします。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x000    # Index Register (12bit実効アドレス、16bitで保持)
    stack: List[int] = field(default_factory=list)
    delay_timer: int = 0
    sound_timer: int = 0
    key: KeyCode = None  # 現在押されているキー (0x0〜0xF) または None
    awaiting_key: bool = False  # Fx0A でキー入力待ち中

    # @intent:accessor フラグレジスタ VF へのアクセスを提供します。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    @property
    def sp(self) -> int:
        return len(self.stack)
