# retro_chip8/core/cpu.py
"""
Core Layer (命令サイクル)

フェッチ・デコード・実行を1命令ずつ進め、その都度 Snapshot を返す基底クラスを定義します。
命令語の形式と各命令の意味はサブクラスと Instruction Layer が決めます。
"""
import copy
from abc import ABC, abstractmethod
from typing import Dict, Optional

from retro_chip8.core.snapshot import Metadata, Operation, Snapshot
from retro_chip8.core.state import CpuState
from retro_chip8.transport.bus import Bus


# @intent:responsibility 命令サイクルの骨組みと、状態・実行ステップ数の管理を提供します。
class AbstractCpu(ABC):
    """
    Snapshot を返す命令サイクルの基底クラス。

    状態オブジェクトは CPU が所有します。get_state() は参照を返すため、
    外部から書き換えるのはテストと周辺機器ブリッジに限ります。
    """
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._step_count: int = 0

    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        pass

    # @intent:responsibility 状態を初期値に戻し、ステップ数を0にします。メモリには触れません。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._step_count = 0

    def get_state(self) -> CpuState:
        return self._state

    @property
    def bus(self) -> Bus:
        return self._bus

    @property
    def step_count(self) -> int:
        return self._step_count

    # @intent:post-condition 戻り値は命令語。PC は次の命令を指している。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:return Snapshotのメタデータに残す注記（未知オペコードなど）。なければNone。
    @abstractmethod
    def _execute(self, operation: Operation) -> Optional[str]:
        pass

    # @intent:responsibility 1命令を実行し、その直後の状態を Snapshot として返します。
    # @intent:rationale 流れ（履歴の破棄、停止判定、フェッチ、デコード、実行、記録）は全アーキテクチャ共通で、
    #                  停止中の扱いだけを _handle_halt で差し替えられるようにしています。
    def step(self) -> Snapshot:
        self._bus.get_and_clear_activity_log()

        halted = self._handle_halt()
        if halted is not None:
            return halted

        operation = self._decode(self._fetch())
        note = self._execute(operation)
        return self._create_snapshot(operation, note)

    # @intent:return 停止中なら命令を実行せずに HALT の Snapshot を、そうでなければ None。
    def _handle_halt(self) -> Optional[Snapshot]:
        if not self._state.halted:
            return None
        return self._create_snapshot(Operation(0x0000, "HALT", length=0), None, count=False)

    # @intent:rationale 状態は可変の dataclass なので、複製を格納して以降の実行から切り離します。
    def _create_snapshot(self, operation: Operation, note: Optional[str], count: bool = True) -> Snapshot:
        if count:
            self._step_count += 1
        metadata = Metadata(
            step_count=self._step_count,
            awaiting_key=getattr(self._state, "awaiting_key", False),
            note=note,
        )
        return Snapshot(copy.deepcopy(self._state), operation, metadata, self._bus.get_and_clear_activity_log())

    # @intent:responsibility UI がレジスタ構成を知らずに表示できるよう、名前と値の辞書を返します。
    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        pass
