# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令の実行結果（デコードされた命令、メタデータ、バスアクセス）を
記録した不変のデータ構造を定義します。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import BusAccess


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（命令語、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode: int # 16bit命令語 例: 0xD125
    mnemonic: str # 例: "DRW"
    operands: List[str] = field(default_factory=list) # 例: ["V1", "V2", "5"]
    length: int = 2 # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    # @intent:responsibility 表示用のアセンブリ表記を返します。
    def to_text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計ステップ数、キー待ち状態など）を記録するデータクラス。
    """
    step_count: int
    awaiting_key: bool = False
    note: Optional[str] = None # 例: "unknown opcode"

# @intent:responsibility ある一時点におけるCPUとバスの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1命令の実行直後における、CPUの状態とバスアクティビティを記録したデータ構造。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
