# tests/transport/test_bus.py
"""
retro_chip8.transport.busモジュールの単体テスト。
"""
import pytest

from retro_chip8.common.errors import MemoryAccessError
from retro_chip8.transport.bus import Bus, BusAccess, BusAccessType, RAM, create_memory_bus, MEMORY_SIZE

# @intent:test_suite 4KBメモリバスとRAMの読み書き、アクセス履歴、範囲外アクセスを検証します。

class TestRAM:
    def test_default_size(self):
        assert RAM().size == MEMORY_SIZE

    def test_init_invalid_size(self):
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(0)
        with pytest.raises(ValueError):
            RAM(1.5)

    def test_read_write_within_bounds(self):
        ram = RAM(4)
        ram.write(0, 0x12)
        ram.write(3, 0x78)
        assert ram.read(0) == 0x12
        assert ram.read(3) == 0x78
        assert ram.read(1) == 0x00

    # @intent:test_case_oob 範囲外アクセスは MemoryAccessError (IndexError の一種) になることを検証します。
    def test_out_of_bounds(self):
        ram = RAM(4)
        with pytest.raises(MemoryAccessError) as excinfo:
            ram.read(4)
        assert excinfo.value.address == 4
        assert excinfo.value.size == 4
        with pytest.raises(IndexError):
            ram.write(-1, 0)

    def test_write_invalid_data(self):
        with pytest.raises(ValueError):
            RAM(4).write(0, 0x100)

    def test_blocks(self):
        ram = RAM(8)
        ram.write_block(2, b"\x01\x02\x03")
        assert ram.read_block(1, 5) == b"\x00\x01\x02\x03\x00"
        assert ram.read_block(0, 0) == b""
        with pytest.raises(MemoryAccessError):
            ram.read_block(6, 3)


class TestBus:
    def test_unmapped_access_raises(self):
        bus = create_memory_bus()
        with pytest.raises(MemoryAccessError) as excinfo:
            bus.read(MEMORY_SIZE)
        assert excinfo.value.address == MEMORY_SIZE
        with pytest.raises(MemoryAccessError):
            bus.write(-1, 0)

    def test_custom_size(self):
        bus = create_memory_bus(0x100)
        assert bus.size == 0x100
        with pytest.raises(MemoryAccessError):
            bus.peek(0x100)

    # @intent:test_case_log 読み書きが記録され、取得時にクリアされることを検証します。
    def test_activity_log(self):
        bus = Bus()
        bus.write(0x300, 0x12)
        bus.read(0x300)
        assert bus.get_and_clear_activity_log() == [
            BusAccess(0x300, 0x12, BusAccessType.WRITE),
            BusAccess(0x300, 0x12, BusAccessType.READ),
        ]
        assert bus.get_and_clear_activity_log() == []

    def test_failed_access_is_not_logged(self):
        bus = Bus()
        with pytest.raises(MemoryAccessError):
            bus.read(0x1000)
        assert bus.get_and_clear_activity_log() == []

    def test_peek_load_dump_are_not_logged(self):
        bus = create_memory_bus()
        bus.load(0x200, b"\x01\x02\x03")
        assert bus.peek(0x201) == 0x02
        assert bus.dump(0x200, 3) == b"\x01\x02\x03"
        assert bus.get_and_clear_activity_log() == []

    # @intent:test_case_load 範囲をはみ出すロードは何も書き込まずに失敗することを検証します。
    def test_load_past_end_writes_nothing(self):
        bus = create_memory_bus()
        with pytest.raises(MemoryAccessError):
            bus.load(0xFFE, b"\x11\x22\x33")
        assert bus.dump(0xFFE, 2) == b"\x00\x00"
