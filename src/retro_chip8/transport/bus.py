# retro_chip8/transport/bus.py
"""
Transport Layer (メモリバス)

CHIP-8 の 4KB のフラットなアドレス空間を 1 つの RAM で表現し、
命令からの読み書きを記録付きで仲介します。
0x000〜0xFFF の外を指すアクセスは全て MemoryAccessError になります。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List

from retro_chip8.common.errors import MemoryAccessError

# @intent:constant CHIP-8 のアドレス空間サイズ (0x000〜0xFFF)。
MEMORY_SIZE = 0x1000


class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"


# @intent:responsibility 命令が行った1バイト分のメモリアクセスを記録します。
@dataclass(frozen=True)
class BusAccess:
    address: int
    data: int
    access_type: BusAccessType


# @intent:responsibility バイト単位で読み書きできる固定長のRAMです。
class RAM:
    # @intent:pre-condition size は正の整数。
    def __init__(self, size: int = MEMORY_SIZE):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._cells = bytearray(size)

    @property
    def size(self) -> int:
        return len(self._cells)

    def _check(self, address: int) -> None:
        if not 0 <= address < len(self._cells):
            raise MemoryAccessError(address, len(self._cells))

    def read(self, address: int) -> int:
        self._check(address)
        return self._cells[address]

    # @intent:pre-condition data は 0〜255。それ以外は ValueError。
    def write(self, address: int, data: int) -> None:
        self._check(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._cells[address] = data

    # @intent:responsibility 連続領域をまとめて書き込みます。範囲の両端を先に検査し、部分書き込みを起こしません。
    def write_block(self, address: int, payload: bytes) -> None:
        if not payload:
            return
        self._check(address)
        self._check(address + len(payload) - 1)
        self._cells[address:address + len(payload)] = payload

    def read_block(self, address: int, length: int) -> bytes:
        if length <= 0:
            return b""
        self._check(address)
        self._check(address + length - 1)
        return bytes(self._cells[address:address + length])


# @intent:responsibility CPU からのメモリアクセスの窓口となり、1命令ぶんのアクセス履歴を保持します。
# @intent:rationale 履歴は Snapshot に添付され、命令ごとに何を読み書きしたかを観測できるようにします。
class Bus:
    """
    RAM を1つ所有するメモリバス。

    read/write は履歴に残ります。peek/load/dump はフォントやROMの配置、
    UI からの参照に使うもので、履歴には残りません。
    """
    def __init__(self, ram: RAM = None):
        self._ram = ram if ram is not None else RAM()
        self._activity: List[BusAccess] = []

    @property
    def size(self) -> int:
        return self._ram.size

    def read(self, address: int) -> int:
        data = self._ram.read(address)
        self._activity.append(BusAccess(address, data, BusAccessType.READ))
        return data

    def write(self, address: int, data: int) -> None:
        self._ram.write(address, data)
        self._activity.append(BusAccess(address, data, BusAccessType.WRITE))

    def peek(self, address: int) -> int:
        return self._ram.read(address)

    # @intent:responsibility フォントやROMイメージなどの連続データを、履歴を残さずに書き込みます。
    def load(self, address: int, data: Iterable[int]) -> None:
        self._ram.write_block(address, bytes(data))

    def dump(self, address: int, length: int) -> bytes:
        return self._ram.read_block(address, length)

    # @intent:responsibility 記録済みのアクセス履歴を返し、履歴を空にします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        activity, self._activity = self._activity, []
        return activity


# @intent:responsibility 標準の 4KB RAM を持つバスを生成します。
def create_memory_bus(size: int = MEMORY_SIZE) -> Bus:
    return Bus(RAM(size))
