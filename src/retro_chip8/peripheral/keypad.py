# src/retro_chip8/peripheral/keypad.py
"""
Peripheral Bridge (キー入力)

外部の物理キーイベント1件を 16 個の論理キーコードのいずれか、または「押下なし」に変換し、
CPU のキー状態スロットへ書き込みます。ブリッジ自身は状態を持ちません。
"""
from typing import Dict, Optional

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.common.types import KeyCode

# @intent:constant 物理キー名 → 論理キーコードの対応表。プロセス全体で共有される不変データです。
#                  1 2 3 4      1 2 3 C
#                  Q W E R  →   4 5 6 D
#                  A S D F      7 8 9 E
#                  Z X C V      A 0 B F
KEY_MAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}


# @intent:responsibility 物理キー名を論理キーコードに変換します。
# @intent:return 対応表にないキー、またはイベントなし (None) の場合は None。
def translate_key(physical_key: Optional[str]) -> KeyCode:
    if not physical_key:
        return None
    return KEY_MAP.get(physical_key.upper())


# @intent:responsibility 1回の入力ポーリング結果を CPU のキー状態へ反映します。
class KeypadBridge:
    """
    ポーリングごとにキー状態を丸ごと上書きします（最後のイベントが勝ち、複数キーは蓄積しません）。
    """
    def __init__(self, cpu: Chip8Cpu):
        self._cpu = cpu

    def poll(self, physical_key: Optional[str]) -> KeyCode:
        key = translate_key(physical_key)
        self._cpu.set_key(key)
        return key
