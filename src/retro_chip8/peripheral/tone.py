# src/retro_chip8/peripheral/tone.py
"""
Peripheral Bridge (サウンド)

サウンドタイマの状態から「トーンを鳴らすべきか」の二値を導き、
その値が変化したときだけ開始/停止のエッジを外部音声デバイスへ通知します。
"""
from enum import Enum
from typing import Callable, Optional


# @intent:responsibility トーンの状態遷移を表します。
class ToneEdge(Enum):
    START = "START"
    STOP = "STOP"


# @intent:responsibility sound_timer > 0 の真偽が切り替わったときだけエッジを発行します。
class ToneGate:
    """
    同じ状態が続く間は何も通知しません。初期状態は「停止」です。
    """
    def __init__(self, listener: Optional[Callable[[ToneEdge], None]] = None):
        self._listener = listener
        self._playing = False

    @property
    def playing(self) -> bool:
        return self._playing

    # @intent:return 遷移が起きた場合はそのエッジ、なければ None。
    def update(self, sound_timer: int) -> Optional[ToneEdge]:
        should_play = sound_timer > 0
        if should_play == self._playing:
            return None
        self._playing = should_play
        edge = ToneEdge.START if should_play else ToneEdge.STOP
        if self._listener is not None:
            self._listener(edge)
        return edge
