from dataclasses import dataclass, field
from typing import Optional

# @intent:responsibility インタプリタ間で挙動が分かれる命令（Quirk）の切替を保持します。
# @intent:rationale 既定値は SUPER-CHIP 系インタプリタで一般的な挙動に合わせています。
@dataclass
class QuirkConfig:
    index_overflow_flag: bool = True       # Fx1E: I が 0xFFF に達する/折り返すと VF=1
    shift_uses_vy: bool = False            # 8xy6/8xyE: Vy をシフトして Vx に格納
    jump_with_vx: bool = True              # Bnnn: nnn + Vx (False なら nnn + V0)
    load_store_increments_i: bool = False  # Fx55/Fx65: 実行後 I = I + x + 1

@dataclass
class TimingConfig:
    cpu_hz: int = 700        # 1秒あたりの命令数
    timer_hz: int = 60       # 遅延/サウンドタイマの減算周波数
    coupled_timers: bool = False  # True: 1命令ごとにタイマを減算（初期のインタプリタと同じ挙動）

@dataclass
class DisplayConfig:
    scale: int = 10
    color_on: str = "#FFFFFF"
    color_off: str = "#000000"

@dataclass
class SystemConfig:
    quirks: QuirkConfig = field(default_factory=QuirkConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    rng_seed: Optional[int] = None
