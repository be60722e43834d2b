import sys
import unittest

from PySide6.QtGui import QColor
from PySide6.QtWidgets import QApplication

from retro_chip8.config.models import DisplayConfig
from retro_chip8.ui.display_view import DisplayView
from retro_chip8.ui.register_view import RegisterView


class TestDisplayView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_size_hint_follows_scale(self):
        view = DisplayView(DisplayConfig(scale=5))
        self.assertEqual((view.sizeHint().width(), view.sizeHint().height()), (320, 160))

    def test_set_pixels_uses_configured_colors(self):
        view = DisplayView(DisplayConfig(color_on="#00FF00", color_off="#000080"))
        pixels = [[False] * 64 for _ in range(32)]
        pixels[1][2] = True
        view(pixels)
        self.assertEqual(QColor(view.image.pixel(2, 1)), QColor("#00FF00"))
        self.assertEqual(QColor(view.image.pixel(0, 0)), QColor("#000080"))

    def test_resolution_change_recreates_image(self):
        view = DisplayView()
        view.set_pixels([[False] * 128 for _ in range(64)])
        self.assertEqual((view.image.width(), view.image.height()), (128, 64))
        view.set_pixels([[False] * 64 for _ in range(32)])
        self.assertEqual((view.image.width(), view.image.height()), (64, 32))

    def test_paint_does_not_fail(self):
        view = DisplayView()
        view.resize(640, 320)
        view.grab()


class TestRegisterView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_update_registers_formats_hex(self):
        view = RegisterView()
        view.update_registers({"V0": 0x0A, "I": 0x123, "PC": 0x200})
        self.assertEqual(view.value_text("V0"), "0A")
        self.assertEqual(view.value_text("I"), "0123")
        view.update_registers({"V0": 0xFF, "I": 0x123, "PC": 0x202})
        self.assertEqual(view.value_text("V0"), "FF")
        self.assertEqual(view.value_text("PC"), "0202")


if __name__ == '__main__':
    unittest.main()
