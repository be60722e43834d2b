# retro_chip8/runtime/runner.py
"""
実行ループモジュール。

1回の反復で「CPUを1ティック進める → 画面が変化していれば描画 → トーンの開始/停止を通知 →
入力イベントを1件読んでキー状態へ反映」を順に行います。
外部のレンダラ・音声デバイス・入力源は呼び出し可能オブジェクトとして注入します。
"""
import logging
from typing import Callable, Optional

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.common.types import Renderer
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.peripheral.keypad import KeypadBridge
from retro_chip8.peripheral.tone import ToneEdge, ToneGate
from retro_chip8.runtime.clock import TimerClock

logger = logging.getLogger(__name__)

# @intent:data_structure 1回のポーリングで物理キー名1件、またはイベントなし (None) を返す入力源。
InputSource = Callable[[], Optional[str]]


# @intent:responsibility コアの実行制御と、周辺機器とのやり取りを1つのループにまとめます。
class Runner:
    """
    CPUの実行を制御し、描画・音声・入力の受け渡しを行うクラス。
    単一スレッドで動作し、コア内部の状態は Runner 以外から変更されない前提です。
    """
    def __init__(self, cpu: Chip8Cpu, clock: Optional[TimerClock] = None,
                 renderer: Optional[Renderer] = None,
                 input_source: Optional[InputSource] = None,
                 tone_listener: Optional[Callable[[ToneEdge], None]] = None):
        self._cpu = cpu
        self._clock = clock or TimerClock()
        self._renderer = renderer
        self._input_source = input_source
        self._keypad = KeypadBridge(cpu)
        self._tone = ToneGate(tone_listener)
        self._running: bool = False
        self._last_snapshot: Optional[Snapshot] = None

    @property
    def cpu(self) -> Chip8Cpu:
        return self._cpu

    @property
    def clock(self) -> TimerClock:
        return self._clock

    @property
    def running(self) -> bool:
        return self._running

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    # @intent:responsibility ループ1回分を実行し、その命令のSnapshotを返します。
    # @intent:rationale Fx0A のキー待ちはここで繰り返し呼ばれることで解消されます（入力の再ポーリングはこのループの責務）。
    def run_iteration(self) -> Snapshot:
        cpu = self._cpu
        snapshot = cpu.tick(self._clock.advance())

        if self._renderer is not None and cpu.display_changed():
            cpu.render(self._renderer)

        self._tone.update(cpu.get_state().sound_timer)

        event = self._input_source() if self._input_source is not None else None
        self._keypad.poll(event)

        self._last_snapshot = snapshot
        return snapshot

    # @intent:responsibility 60Hz のフレーム1回分の命令を実行します。停止状態になれば途中で抜けます。
    def run_frame(self) -> Optional[Snapshot]:
        for _ in range(self._clock.instructions_per_frame):
            if self._cpu.halted:
                break
            self.run_iteration()
        return self._last_snapshot

    def step_instruction(self) -> Snapshot:
        return self.run_iteration()

    # @intent:responsibility stop() が呼ばれるか、CPUが停止するか、反復回数の上限に達するまで実行を続けます。
    def run(self, max_iterations: Optional[int] = None) -> None:
        self._running = True
        iterations = 0
        try:
            while self._running:
                if self._cpu.halted:
                    logger.info("machine halted at PC %03X", self._cpu.get_state().pc)
                    break
                if max_iterations is not None and iterations >= max_iterations:
                    break
                self.run_iteration()
                iterations += 1
        finally:
            self._running = False

    def stop(self) -> None:
        self._running = False
