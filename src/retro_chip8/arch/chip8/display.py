# src/retro_chip8/arch/chip8/display.py
"""
ビットプレーン・フレームバッファ。

標準 (64x32) と拡張 (128x64) の2つの解像度を持ち、各走査線を
解像度の幅に等しいビット幅の整数1つで保持します（最上位ビットが左端のピクセル）。
描画・スクロール・クリアは Resolution に対して一度だけ記述され、
両解像度で共通に使用されます。
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List

from retro_chip8.common.types import PixelMatrix, Renderer

logger = logging.getLogger(__name__)

# @intent:constant 00FB / 00FC によるスクロール量（ピクセル）。
SCROLL_SHIFT = 4


# @intent:responsibility 1つの解像度モードの寸法と行ストレージの形を定義します。
@dataclass(frozen=True)
class Resolution:
    width: int
    height: int

    # @intent:accessor 1行分の全ビットを立てたマスク。
    @property
    def row_mask(self) -> int:
        return (1 << self.width) - 1


LORES = Resolution(64, 32)
HIRES = Resolution(128, 64)


# @intent:responsibility 1つの解像度の画素データを保持し、ビット演算による描画を行います。
class BitPlane:
    """
    解像度 1 つ分の行データ。行は整数で、ビット (width-1) が列 0 に対応します。
    """
    def __init__(self, resolution: Resolution):
        self.resolution = resolution
        self.rows: List[int] = [0] * resolution.height

    def clear(self) -> None:
        self.rows = [0] * self.resolution.height

    # @intent:responsibility スプライトをXOR描画し、衝突の有無を返します。
    # @intent:pre-condition x, y は 0 以上。はみ出した行は折り返さずに捨てます。
    def draw(self, x: int, y: int, sprite: Iterable[int]) -> bool:
        width = self.resolution.width
        height = self.resolution.height
        mask = self.resolution.row_mask
        collided = False
        for offset, byte in enumerate(sprite):
            row = y + offset
            if row >= height:
                break
            # 左端に揃えてから x だけ右へずらす。右端からはみ出したビットは捨てる
            pattern = ((byte & 0xFF) << (width - 8)) >> x & mask
            if self.rows[row] & pattern:
                collided = True
            self.rows[row] ^= pattern
        return collided

    def scroll_down(self, count: int) -> None:
        height = self.resolution.height
        count = min(count, height)
        self.rows = [0] * count + self.rows[:height - count]

    def scroll_left(self, count: int = SCROLL_SHIFT) -> None:
        mask = self.resolution.row_mask
        self.rows = [(row << count) & mask for row in self.rows]

    def scroll_right(self, count: int = SCROLL_SHIFT) -> None:
        self.rows = [row >> count for row in self.rows]

    def pixel(self, x: int, y: int) -> bool:
        return (self.rows[y] >> (self.resolution.width - 1 - x)) & 1 == 1

    def to_matrix(self) -> PixelMatrix:
        width = self.resolution.width
        return [
            [(row >> (width - 1 - col)) & 1 == 1 for col in range(width)]
            for row in self.rows
        ]


# @intent:responsibility 2つの解像度のビットプレーンを所有し、アクティブな方に対して描画します。
class Framebuffer:
    """
    CHIP-8 / SUPER-CHIP のフレームバッファ。

    変更操作は全て dirty フラグを立てます。dirty フラグを下ろすのは render() だけです。
    アクティブでない側のプレーンはモード切替で消去されず、そのまま残ります。
    """
    def __init__(self):
        self._planes = {False: BitPlane(LORES), True: BitPlane(HIRES)}
        self._extended = False
        self._changed = False

    @property
    def extended(self) -> bool:
        return self._extended

    @property
    def resolution(self) -> Resolution:
        return self._active.resolution

    @property
    def width(self) -> int:
        return self._active.resolution.width

    @property
    def height(self) -> int:
        return self._active.resolution.height

    @property
    def rows(self) -> List[int]:
        return list(self._active.rows)

    @property
    def _active(self) -> BitPlane:
        return self._planes[self._extended]

    # @intent:return スプライトがすでに点灯していたピクセルを1つでも消した場合 True。
    def draw(self, x: int, y: int, sprite: Iterable[int]) -> bool:
        self._changed = True
        return self._active.draw(x, y, sprite)

    def clear(self) -> None:
        self._active.clear()
        self._changed = True

    def scroll_down(self, count: int) -> None:
        self._active.scroll_down(count)
        self._changed = True

    def scroll_left(self) -> None:
        self._active.scroll_left()
        self._changed = True

    def scroll_right(self) -> None:
        self._active.scroll_right()
        self._changed = True

    # @intent:responsibility 解像度モードを切り替え、新たにアクティブになったプレーンを消去します。
    def set_mode(self, extended: bool) -> None:
        logger.debug("display mode -> %s", "128x64" if extended else "64x32")
        self._extended = extended
        self._active.clear()
        self._changed = True

    def changed(self) -> bool:
        return self._changed

    def pixel(self, x: int, y: int) -> bool:
        return self._active.pixel(x, y)

    def pixels(self) -> PixelMatrix:
        return self._active.to_matrix()

    # @intent:responsibility 外部レンダラへピクセル行列を渡し、最後に dirty フラグを下ろします。
    # @intent:pre-condition 呼び出し側は changed() が True のときにのみ呼び出します。画素データは変更しません。
    def render(self, renderer: Renderer) -> None:
        renderer(self._active.to_matrix())
        self._changed = False

    def __str__(self) -> str:
        width = self._active.resolution.width
        return "".join(f"{row:0{width}b}\n" for row in self._active.rows)
