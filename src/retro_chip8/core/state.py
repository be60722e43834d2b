# retro_chip8/core/state.py
"""
Core Layer (共通の状態)

全アーキテクチャに共通する状態（プログラムカウンタと停止フラグ）を定義します。
"""
from dataclasses import dataclass


# @intent:responsibility 命令サイクルが参照する最小限の状態。レジスタはサブクラスで追加します。
@dataclass
class CpuState:
    pc: int = 0x0000
    halted: bool = False  # True の間、step() は命令を実行しない
