# src/retro_chip8/runtime/clock.py
"""
タイマクロック。

遅延/サウンドタイマを命令実行レートから切り離し、エミュレート時間に対して
固定周波数 (既定 60Hz) で減算するための刻みを計算します。
壁時計ではなく実行した命令数で時間を数えるため、結果は常に決定的です。
"""
from retro_chip8.common.errors import ConfigError
from retro_chip8.config.models import TimingConfig


# @intent:responsibility 1命令ごとに、その時点までに期限を迎えたタイマ減算の回数を返します。
class TimerClock:
    """
    cpu_hz 命令ごとに timer_hz 回のタイマ減算を均等に割り当てます。
    coupled=True の場合は1命令ごとに1回減算します（初期のインタプリタと同じ挙動）。
    """
    def __init__(self, cpu_hz: int = 700, timer_hz: int = 60, coupled: bool = False):
        if cpu_hz <= 0 or timer_hz <= 0:
            raise ConfigError(f"Clock rates must be positive (cpu_hz={cpu_hz}, timer_hz={timer_hz}).")
        self.cpu_hz = cpu_hz
        self.timer_hz = timer_hz
        self.coupled = coupled
        self._accumulator = 0

    @classmethod
    def from_config(cls, timing: TimingConfig) -> "TimerClock":
        return cls(timing.cpu_hz, timing.timer_hz, timing.coupled_timers)

    # @intent:accessor 60Hz のフレーム1回あたりに実行する命令数。
    @property
    def instructions_per_frame(self) -> int:
        return max(1, round(self.cpu_hz / self.timer_hz))

    # @intent:responsibility 命令1つ分だけ時間を進め、期限を迎えたタイマ減算の回数を返します。
    def advance(self) -> int:
        if self.coupled:
            return 1
        self._accumulator += self.timer_hz
        ticks, self._accumulator = divmod(self._accumulator, self.cpu_hz)
        return ticks

    def reset(self) -> None:
        self._accumulator = 0
