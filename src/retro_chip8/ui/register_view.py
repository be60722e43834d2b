# src/retro_chip8/ui/register_view.py
"""
CPUのレジスタを表示するウィジェット。
Chip8Cpu.get_register_map() の内容をそのまま一覧表示します。
"""
from typing import Dict

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont, QFontDatabase
from PySide6.QtWidgets import QFormLayout, QLabel, QWidget

# @intent:constant 16ビット幅で表示するレジスタ。それ以外は8ビット幅で表示します。
WIDE_REGISTERS = ("I", "PC")


# @intent:responsibility 現在のシステムで利用可能な等幅フォントを返します。
def monospace_font(size: int = 10) -> QFont:
    family = QFontDatabase.systemFont(QFontDatabase.FixedFont).family()
    for preferred in ("Consolas", "Menlo", "Monaco", "Courier New"):
        if preferred in QFontDatabase.families():
            family = preferred
            break
    return QFont(family, size)


# @intent:responsibility レジスタ名と値のラベルを管理し、値を16進で更新します。
class RegisterView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")
        self._layout = QFormLayout(self)
        self._layout.setLabelAlignment(Qt.AlignLeft)
        self._layout.setContentsMargins(10, 10, 10, 10)
        self._font = monospace_font()
        self._labels: Dict[str, QLabel] = {}

    # @intent:responsibility 初回呼び出し時にラベルを生成し、以降は値だけを書き換えます。
    def update_registers(self, registers: Dict[str, int]) -> None:
        for name, value in registers.items():
            label = self._labels.get(name)
            if label is None:
                label = QLabel()
                label.setFont(self._font)
                name_label = QLabel(f"{name}:")
                name_label.setFont(self._font)
                self._layout.addRow(name_label, label)
                self._labels[name] = label
            width = 4 if name in WIDE_REGISTERS else 2
            label.setText(f"{value:0{width}X}")

    def value_text(self, name: str) -> str:
        return self._labels[name].text()
