# src/retro_chip8/ui/display_view.py
"""
フレームバッファを描画するウィジェット。
ピクセル行列を QImage に変換し、表示倍率に合わせて拡大して描画します。
"""
from typing import Optional

from PySide6.QtCore import Qt, QRect, QSize
from PySide6.QtGui import QColor, QImage, QPainter
from PySide6.QtWidgets import QWidget

from retro_chip8.common.types import PixelMatrix
from retro_chip8.config.models import DisplayConfig


# @intent:responsibility Runner から渡されたピクセル行列を画面に表示します。
class DisplayView(QWidget):
    """
    Renderer として Runner に渡せるよう、インスタンス自体を呼び出し可能にしています。
    """
    def __init__(self, config: Optional[DisplayConfig] = None, parent=None):
        super().__init__(parent)
        self._image = QImage(64, 32, QImage.Format_RGB32)
        self.apply_config(config or DisplayConfig())
        self.setFocusPolicy(Qt.NoFocus)

    # @intent:responsibility 表示色と倍率を設定し、画面を消灯色で塗りつぶします。
    def apply_config(self, config: DisplayConfig) -> None:
        self._config = config
        self._on = QColor(config.color_on)
        self._off = QColor(config.color_off)
        self._image.fill(self._off)
        self.setMinimumSize(self.sizeHint())
        self.update()

    @property
    def image(self) -> QImage:
        return self._image

    def sizeHint(self) -> QSize:
        return QSize(64 * self._config.scale, 32 * self._config.scale)

    def __call__(self, pixels: PixelMatrix) -> None:
        self.set_pixels(pixels)

    # @intent:responsibility ピクセル行列を QImage に書き写します。解像度が変わった場合は作り直します。
    def set_pixels(self, pixels: PixelMatrix) -> None:
        height = len(pixels)
        width = len(pixels[0]) if height else 0
        if self._image.width() != width or self._image.height() != height:
            self._image = QImage(width, height, QImage.Format_RGB32)
        on, off = self._on.rgb(), self._off.rgb()
        for y, row in enumerate(pixels):
            for x, lit in enumerate(row):
                self._image.setPixel(x, y, on if lit else off)
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._off)
        # 縦横比を保ったまま最大の整数倍に拡大
        factor = max(1, min(self.width() // max(1, self._image.width()),
                            self.height() // max(1, self._image.height())))
        w = self._image.width() * factor
        h = self._image.height() * factor
        x = (self.width() - w) // 2
        y = (self.height() - h) // 2
        painter.drawImage(QRect(x, y, w, h), self._image)
        painter.end()
