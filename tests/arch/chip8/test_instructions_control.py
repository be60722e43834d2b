import random
import unittest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.common.errors import StackUnderflowError
from retro_chip8.config.models import QuirkConfig
from retro_chip8.transport.bus import create_memory_bus


class TestChip8ControlInstructions(unittest.TestCase):
    quirks = QuirkConfig()

    def setUp(self):
        self.bus = create_memory_bus()
        self.cpu = Chip8Cpu(self.bus, quirks=self.quirks, rng=random.Random(0))
        self.state = self.cpu.get_state()

    def _execute(self, opcode):
        self.bus.load(self.state.pc, opcode.to_bytes(2, "big"))
        return self.cpu.step()

    def test_jp(self):
        self._execute(0x1ABC)
        self.assertEqual(self.state.pc, 0xABC)

    def test_call_pushes_return_address(self):
        self._execute(0x2400)
        self.assertEqual(self.state.pc, 0x400)
        self.assertEqual(self.state.stack, [0x202])

    # CALL の直後に RET すると、CALL の次の命令に戻りスタックは空になる
    def test_call_ret_round_trip(self):
        self.bus.load(0x200, bytes([0x23, 0x00]))
        self.bus.load(0x300, bytes([0x00, 0xEE]))
        self.cpu.step()
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.stack, [])

    def test_nested_calls(self):
        self.bus.load(0x200, bytes([0x23, 0x00]))
        self.bus.load(0x300, bytes([0x24, 0x00]))
        self.bus.load(0x400, bytes([0x00, 0xEE]))
        self.bus.load(0x302, bytes([0x00, 0xEE]))
        for _ in range(4):
            self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.sp, 0)

    def test_ret_empty_stack(self):
        with self.assertRaises(StackUnderflowError):
            self._execute(0x00EE)

    def test_se_sne_imm(self):
        self.state.v[1] = 0x42
        self._execute(0x3142)
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x3143)
        self.assertEqual(self.state.pc, 0x206)
        self._execute(0x4143)
        self.assertEqual(self.state.pc, 0x20A)
        self._execute(0x4142)
        self.assertEqual(self.state.pc, 0x20C)

    def test_se_sne_reg(self):
        self.state.v[1] = 7
        self.state.v[2] = 7
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x204)
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x206)
        self.state.v[2] = 8
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x20A)

    def test_se_reg_ignores_low_nibble(self):
        self.state.v[1] = 7
        self.state.v[2] = 7
        snapshot = self._execute(0x5125)
        self.assertEqual(snapshot.operation.mnemonic, "SE")
        self.assertEqual(self.state.pc, 0x204)

    def test_jp_offset_with_vx(self):
        self.state.v[0] = 0x01
        self.state.v[3] = 0x10
        self._execute(0xB300)
        self.assertEqual(self.state.pc, 0x310)

    def test_sys_is_ignored(self):
        snapshot = self._execute(0x0123)
        self.assertEqual(snapshot.operation.mnemonic, "SYS")
        self.assertEqual(self.state.pc, 0x202)


class TestChip8JumpQuirk(unittest.TestCase):
    def test_jp_offset_with_v0(self):
        bus = create_memory_bus()
        cpu = Chip8Cpu(bus, quirks=QuirkConfig(jump_with_vx=False))
        state = cpu.get_state()
        state.v[0] = 0x01
        state.v[3] = 0x10
        cpu.load_program(bytes([0xB3, 0x00]))
        cpu.step()
        self.assertEqual(state.pc, 0x301)


if __name__ == '__main__':
    unittest.main()
