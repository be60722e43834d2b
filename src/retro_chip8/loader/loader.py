# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。

ヘッダを持たないフラットなバイナリイメージを読み込み、0x200 から配置します。
"""
import logging
from pathlib import Path
from typing import Union

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.common.errors import RomLoadError

logger = logging.getLogger(__name__)

class RomLoader:
    """
    ROMファイルを読み込み、CPUのメモリにロードするローダー。
    ファイルが存在しない、空である、またはメモリに収まらない場合は RomLoadError を送出します。
    """
    def read_rom(self, file_path: Union[str, Path]) -> bytes:
        path = Path(file_path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise RomLoadError(f"Cannot read ROM file {path}: {e}") from e
        if not data:
            raise RomLoadError(f"ROM file {path} is empty.")
        return data

    def load_rom(self, file_path: Union[str, Path], cpu: Chip8Cpu) -> int:
        data = self.read_rom(file_path)
        cpu.load_program(data)
        logger.info("ROM %s loaded (%d bytes)", file_path, len(data))
        return len(data)
