import random
import unittest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.font import FONT_ADDRESS, LARGE_FONT_ADDRESS
from retro_chip8.common.errors import MemoryAccessError
from retro_chip8.config.models import QuirkConfig
from retro_chip8.transport.bus import create_memory_bus


class Chip8LoadTestBase(unittest.TestCase):
    quirks = QuirkConfig()

    def setUp(self):
        self.bus = create_memory_bus()
        self.cpu = Chip8Cpu(self.bus, quirks=self.quirks, rng=random.Random(0))
        self.state = self.cpu.get_state()

    def _execute(self, opcode):
        self.bus.load(self.state.pc, opcode.to_bytes(2, "big"))
        return self.cpu.step()


class TestChip8LoadInstructions(Chip8LoadTestBase):
    def test_ld_i(self):
        self._execute(0xA123)
        self.assertEqual(self.state.i, 0x123)

    def test_add_i(self):
        self.state.i = 0x100
        self.state.v[2] = 0x20
        self._execute(0xF21E)
        self.assertEqual(self.state.i, 0x120)
        self.assertEqual(self.state.vf, 0)

    # 既定の Quirk では I が 0xFFF に達すると VF=1
    def test_add_i_overflow_flag(self):
        self.state.i = 0xFF0
        self.state.v[2] = 0x0F
        self._execute(0xF21E)
        self.assertEqual(self.state.i, 0xFFF)
        self.assertEqual(self.state.vf, 1)

    def test_add_i_overflow_does_not_clear_flag(self):
        self.state.i = 0x100
        self.state.vf = 1
        self._execute(0xF01E)
        self.assertEqual(self.state.vf, 1)

    def test_ld_font(self):
        self.state.v[4] = 0xA
        self._execute(0xF429)
        self.assertEqual(self.state.i, FONT_ADDRESS + 5 * 0xA)

    def test_ld_large_font(self):
        self.state.v[4] = 3
        self._execute(0xF430)
        self.assertEqual(self.state.i, LARGE_FONT_ADDRESS + 10 * 3)

    def test_ld_bcd(self):
        self.state.v[5] = 156
        self.state.i = 0x300
        self._execute(0xF533)
        self.assertEqual(self.bus.dump(0x300, 3), bytes([1, 5, 6]))

    def test_ld_bcd_small_values(self):
        self.state.v[5] = 7
        self.state.i = 0x300
        self._execute(0xF533)
        self.assertEqual(self.bus.dump(0x300, 3), bytes([0, 0, 7]))

    def test_ld_bcd_out_of_range(self):
        self.state.i = 0xFFE
        with self.assertRaises(MemoryAccessError):
            self._execute(0xF033)

    def test_store_regs_inclusive(self):
        self.state.v[:4] = [1, 2, 3, 4]
        self.state.i = 0x300
        self._execute(0xF355)
        self.assertEqual(self.bus.dump(0x300, 5), bytes([1, 2, 3, 4, 0]))
        self.assertEqual(self.state.i, 0x300)

    def test_load_regs_inclusive(self):
        self.bus.load(0x300, bytes([9, 8, 7, 6]))
        self.state.i = 0x300
        self._execute(0xF265)
        self.assertEqual(self.state.v[:4], [9, 8, 7, 0])
        self.assertEqual(self.state.i, 0x300)

    def test_rpl_save_restore_survives_reset(self):
        self.state.v[:3] = [0x11, 0x22, 0x33]
        self._execute(0xF275)
        self.cpu.reset()
        self.state = self.cpu.get_state()
        self._execute(0xF285)
        self.assertEqual(self.state.v[:3], [0x11, 0x22, 0x33])

    def test_rpl_ignores_registers_above_seven(self):
        self.state.v[8] = 0x44
        self._execute(0xF875)
        self._execute(0xF885)
        self.assertEqual(self.state.v[8], 0x44)


class TestChip8LoadQuirks(Chip8LoadTestBase):
    quirks = QuirkConfig(index_overflow_flag=False, load_store_increments_i=True)

    def test_add_i_without_overflow_flag(self):
        self.state.i = 0xFF0
        self.state.v[2] = 0x0F
        self._execute(0xF21E)
        self.assertEqual(self.state.i, 0xFFF)
        self.assertEqual(self.state.vf, 0)

    def test_store_load_increment_i(self):
        self.state.i = 0x300
        self._execute(0xF355)
        self.assertEqual(self.state.i, 0x304)
        self._execute(0xF065)
        self.assertEqual(self.state.i, 0x305)


if __name__ == '__main__':
    unittest.main()
