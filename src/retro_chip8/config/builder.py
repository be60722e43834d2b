import random
from typing import Optional, Tuple

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.runtime.clock import TimerClock
from retro_chip8.runtime.runner import InputSource, Runner
from retro_chip8.transport.bus import Bus, create_memory_bus
from .models import SystemConfig

# @intent:responsibility システム構成（Config）に基づいて、Bus と CPU を生成・接続し、Quirk と乱数源を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Chip8Cpu, Bus]:
        bus = create_memory_bus()
        rng = random.Random(config.rng_seed)
        cpu = Chip8Cpu(bus, quirks=config.quirks, rng=rng)
        return cpu, bus

    # @intent:responsibility CPU とタイマクロックを組み合わせた実行ループを生成します。
    def build_runner(self, config: SystemConfig, renderer=None,
                     input_source: Optional[InputSource] = None, tone_listener=None) -> Runner:
        cpu, _ = self.build_system(config)
        return Runner(
            cpu,
            clock=TimerClock.from_config(config.timing),
            renderer=renderer,
            input_source=input_source,
            tone_listener=tone_listener,
        )
