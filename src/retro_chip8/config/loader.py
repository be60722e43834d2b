import logging
from typing import Any, Dict

import yaml

from retro_chip8.common.errors import ConfigError
from .models import SystemConfig, QuirkConfig, TimingConfig, DisplayConfig

logger = logging.getLogger(__name__)

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = self._safe_load(f)
        logger.debug("loaded config from %s", path)
        return self.parse(data or {})

    def load_from_string(self, text: str) -> SystemConfig:
        return self.parse(self._safe_load(text) or {})

    def _safe_load(self, source) -> Any:
        try:
            return yaml.safe_load(source)
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML: {e}") from e

    def parse(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ConfigError(f"Config root must be a mapping, got {type(data).__name__}")

        # Parse Quirks
        quirk_data = self._section(data, "quirks")
        defaults = QuirkConfig()
        quirks = QuirkConfig(
            index_overflow_flag=self._parse_bool(quirk_data.get("index_overflow_flag", defaults.index_overflow_flag)),
            shift_uses_vy=self._parse_bool(quirk_data.get("shift_uses_vy", defaults.shift_uses_vy)),
            jump_with_vx=self._parse_bool(quirk_data.get("jump_with_vx", defaults.jump_with_vx)),
            load_store_increments_i=self._parse_bool(
                quirk_data.get("load_store_increments_i", defaults.load_store_increments_i)),
        )

        # Parse Timing
        timing_data = self._section(data, "timing")
        timing = TimingConfig(
            cpu_hz=self._parse_int(timing_data.get("cpu_hz", TimingConfig.cpu_hz)),
            timer_hz=self._parse_int(timing_data.get("timer_hz", TimingConfig.timer_hz)),
            coupled_timers=self._parse_bool(timing_data.get("coupled_timers", TimingConfig.coupled_timers)),
        )
        if timing.cpu_hz <= 0 or timing.timer_hz <= 0:
            raise ConfigError(f"Clock rates must be positive: cpu_hz={timing.cpu_hz}, timer_hz={timing.timer_hz}")

        # Parse Display
        display_data = self._section(data, "display")
        display = DisplayConfig(
            scale=self._parse_int(display_data.get("scale", DisplayConfig.scale)),
            color_on=str(display_data.get("color_on", DisplayConfig.color_on)),
            color_off=str(display_data.get("color_off", DisplayConfig.color_off)),
        )
        if display.scale <= 0:
            raise ConfigError(f"Display scale must be positive: {display.scale}")

        seed = data.get("rng_seed")
        return SystemConfig(
            quirks=quirks,
            timing=timing,
            display=display,
            rng_seed=None if seed is None else self._parse_int(seed),
        )

    def _section(self, data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"Section '{name}' must be a mapping.")
        return section

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                pass
        raise ConfigError(f"Invalid integer format: {value}")

    def _parse_bool(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        raise ConfigError(f"Invalid boolean value: {value}")
