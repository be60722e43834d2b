# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

Chip8Cpu はメモリ（バス）、レジスタ、PC、I、コールスタック、タイマ、キー状態、
そしてフレームバッファを単独で所有します。フレームバッファは外部と共有せず、
描画結果は render() / pixels() などのメソッドを介してのみ公開します。
"""
import logging
import random
from typing import Dict, Optional

from retro_chip8.arch.chip8.display import Framebuffer
from retro_chip8.arch.chip8.font import FONT, FONT_ADDRESS, LARGE_FONT, LARGE_FONT_ADDRESS
from retro_chip8.arch.chip8.instructions import ExecutionContext, decode_opcode, execute_instruction
from retro_chip8.arch.chip8.state import Chip8CpuState, PROGRAM_START, RPL_COUNT
from retro_chip8.common.errors import RomLoadError
from retro_chip8.common.types import KeyCode, PixelMatrix, Renderer
from retro_chip8.config.models import QuirkConfig
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Operation, Snapshot
from retro_chip8.transport.bus import Bus, MEMORY_SIZE

logger = logging.getLogger(__name__)

# @intent:constant ROMとしてロード可能な最大バイト数 (0x200〜0xFFF)。
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START


# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 / SUPER-CHIP CPUをエミュレートするクラス。

    step() は1命令だけを実行し、タイマには触れません。tick() は step() の後に
    指定回数だけタイマを減算します。タイマの減算周期は runtime.clock.TimerClock が決めます。
    """
    # @intent:pre-condition `bus`は 0x000〜0xFFF が全てマップ済みである必要があります。
    def __init__(self, bus: Bus, quirks: Optional[QuirkConfig] = None, rng: Optional[random.Random] = None):
        self._quirks = quirks or QuirkConfig()
        self._rng = rng or random.Random()
        self._display = Framebuffer()
        # @intent:rationale 永続フラグレジスタ (Fx75/Fx85) はリセットをまたいで保持します。
        self._rpl = [0] * RPL_COUNT
        super().__init__(bus)
        self._context = self._create_context()
        self._load_fonts()

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    def _create_context(self) -> ExecutionContext:
        return ExecutionContext(
            state=self._state,
            bus=self._bus,
            display=self._display,
            quirks=self._quirks,
            rng=self._rng,
            rpl=self._rpl,
        )

    # @intent:responsibility 小フォントを 0x050 に、大フォントを 0x0A0 に配置します。
    def _load_fonts(self) -> None:
        self._bus.load(FONT_ADDRESS, FONT)
        self._bus.load(LARGE_FONT_ADDRESS, LARGE_FONT)

    # @intent:responsibility レジスタ、スタック、タイマ、キー状態、画面を初期化します。メモリ内容は保持します。
    def reset(self) -> None:
        super().reset()
        self._display = Framebuffer()
        self._context = self._create_context()
        self._load_fonts()

    @property
    def quirks(self) -> QuirkConfig:
        return self._quirks

    # @intent:responsibility プログラムのバイト列を 0x200 から書き込みます。
    # @intent:pre-condition 空のイメージ、および 3584 バイトを超えるイメージは致命的エラーです。
    def load_program(self, data: bytes) -> None:
        if not data:
            raise RomLoadError("ROM image is empty.")
        if len(data) > MAX_PROGRAM_SIZE:
            raise RomLoadError(
                f"ROM image is {len(data)} bytes; at most {MAX_PROGRAM_SIZE} bytes fit above {PROGRAM_START:#05x}."
            )
        self._bus.load(PROGRAM_START, data)
        logger.info("loaded %d bytes at %03X", len(data), PROGRAM_START)

    # @intent:responsibility PC から2バイトをビッグエンディアンの命令語として読み出し、PCを2進めます。
    # @intent:post-condition PC または PC+1 が範囲外なら MemoryAccessError。
    def _fetch(self) -> int:
        pc = self._state.pc
        opcode = (self._bus.read(pc) << 8) | self._bus.read(pc + 1)
        self._state.pc = pc + 2
        return opcode

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    def _execute(self, operation: Operation) -> Optional[str]:
        return execute_instruction(operation, self._context)

    # @intent:responsibility 1命令を実行した後、timer_ticks 回だけタイマを減算します。
    def tick(self, timer_ticks: int = 1) -> Snapshot:
        snapshot = self.step()
        for _ in range(timer_ticks):
            self.tick_timers()
        return snapshot

    # @intent:responsibility 遅延タイマとサウンドタイマをそれぞれ1減算します (0で止まる)。
    def tick_timers(self) -> None:
        state = self._state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

    # --- Peripheral Bridge 向けアクセサ ---

    @property
    def key(self) -> KeyCode:
        return self._state.key

    # @intent:responsibility キー状態を丸ごと上書きします。複数キーの同時押下は保持しません。
    def set_key(self, key: KeyCode) -> None:
        if key is not None and not 0 <= key <= 0xF:
            raise ValueError(f"Key code {key} is not in range 0x0-0xF.")
        self._state.key = key

    # @intent:accessor 「音を鳴らすべきか」の二値信号 (sound_timer > 0)。
    @property
    def sound_active(self) -> bool:
        return self._state.sound_timer > 0

    @property
    def halted(self) -> bool:
        return self._state.halted

    # --- フレームバッファ公開用メソッド ---

    def display_changed(self) -> bool:
        return self._display.changed()

    # @intent:responsibility 外部レンダラにピクセル行列を渡し、dirty フラグを下ろします。
    def render(self, renderer: Renderer) -> None:
        self._display.render(renderer)

    def pixels(self) -> PixelMatrix:
        return self._display.pixels()

    def pixel(self, x: int, y: int) -> bool:
        return self._display.pixel(x, y)

    def display_rows(self):
        return self._display.rows

    def display_size(self):
        return self._display.width, self._display.height

    def display_text(self) -> str:
        return str(self._display)

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": value for index, value in enumerate(s.v)}
        registers.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return registers
