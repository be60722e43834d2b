# tests/arch/chip8/test_display.py
"""
retro_chip8.arch.chip8.displayモジュールの単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.display import BitPlane, Framebuffer, HIRES, LORES, Resolution

# @intent:test_suite ビットプレーン上の描画・スクロール・クリアと、解像度切替を検証します。

class TestResolution:
    def test_row_mask(self):
        assert Resolution(8, 1).row_mask == 0xFF
        assert LORES.row_mask == (1 << 64) - 1


@pytest.mark.parametrize("resolution", [LORES, HIRES])
class TestBitPlane:
    def test_draw_sets_leftmost_bits(self, resolution):
        plane = BitPlane(resolution)
        assert plane.draw(0, 0, [0x80]) is False
        assert plane.pixel(0, 0) is True
        assert plane.pixel(1, 0) is False

    # @intent:test_case_collision 同じスプライトを2回描くと元に戻り、2回目は衝突を報告することを検証します。
    def test_collision_idempotence(self, resolution):
        plane = BitPlane(resolution)
        plane.draw(10, 3, [0x01])  # 既存の点灯ピクセル
        before = list(plane.rows)
        sprite = [0xF0, 0x90, 0xF0]
        plane.draw(4, 2, sprite)
        assert plane.draw(4, 2, sprite) is True
        assert plane.rows == before

    def test_clips_at_right_and_bottom(self, resolution):
        plane = BitPlane(resolution)
        w, h = resolution.width, resolution.height
        plane.draw(w - 4, h - 1, [0xFF, 0xFF])
        assert plane.rows[h - 1] == 0xF
        assert plane.rows[0] == 0
        assert plane.pixel(w - 1, h - 1) is True

    # @intent:test_case_scroll 下スクロール後、行 k (k >= n) は元の行 k - n であり、先頭 n 行は空であることを検証します。
    def test_scroll_down(self, resolution):
        plane = BitPlane(resolution)
        for row in range(resolution.height):
            plane.rows[row] = row + 1
        before = list(plane.rows)
        n = 3
        plane.scroll_down(n)
        assert plane.rows[:n] == [0] * n
        for k in range(n, resolution.height):
            assert plane.rows[k] == before[k - n]

    def test_scroll_down_more_than_height(self, resolution):
        plane = BitPlane(resolution)
        plane.rows = [1] * resolution.height
        plane.scroll_down(resolution.height + 5)
        assert plane.rows == [0] * resolution.height

    def test_scroll_left_and_right(self, resolution):
        plane = BitPlane(resolution)
        plane.draw(4, 0, [0x80])
        plane.scroll_left()
        assert plane.pixel(0, 0) is True
        plane.scroll_left()
        assert plane.rows[0] == 0
        plane.draw(resolution.width - 8, 1, [0x01])
        plane.scroll_right()
        assert plane.rows[1] == 0

    def test_clear(self, resolution):
        plane = BitPlane(resolution)
        plane.draw(0, 0, [0xFF] * 5)
        plane.clear()
        assert all(not lit for row in plane.to_matrix() for lit in row)


class TestFramebuffer:
    def test_initial_state(self):
        fb = Framebuffer()
        assert fb.extended is False
        assert (fb.width, fb.height) == (64, 32)
        assert fb.changed() is False

    # @intent:test_case_clear クリア後は全ピクセルが消灯していることを検証します。
    def test_clear_unsets_every_pixel(self):
        fb = Framebuffer()
        for y in range(0, 32, 4):
            fb.draw(y, y, [0xFF, 0xFF, 0xFF])
        fb.clear()
        assert all(not fb.pixel(x, y) for y in range(32) for x in range(64))

    # @intent:test_case_dirty 変更操作で dirty が立ち、render() のみがそれを下ろすことを検証します。
    def test_render_clears_dirty_flag(self):
        fb = Framebuffer()
        fb.draw(0, 0, [0x80])
        assert fb.changed() is True
        frames = []
        fb.render(frames.append)
        assert fb.changed() is False
        assert len(frames) == 1
        assert len(frames[0]) == 32 and len(frames[0][0]) == 64
        assert frames[0][0][0] is True
        # render は画素を変更しない
        assert fb.pixel(0, 0) is True

    def test_each_mutation_sets_dirty(self):
        fb = Framebuffer()
        for mutate in (fb.clear, lambda: fb.scroll_down(1), fb.scroll_left, fb.scroll_right,
                       lambda: fb.set_mode(True)):
            fb.render(lambda pixels: None)
            mutate()
            assert fb.changed() is True

    # @intent:test_case_mode 拡張モードへの切替で解像度が変わり、元のプレーンは保持されることを検証します。
    def test_set_mode_preserves_inactive_plane(self):
        fb = Framebuffer()
        fb.draw(0, 0, [0x80])
        fb.set_mode(True)
        assert (fb.width, fb.height) == (128, 64)
        assert fb.pixel(0, 0) is False
        fb.draw(127 - 7, 63, [0x01])
        assert fb.pixel(127, 63) is True
        fb.set_mode(False)
        assert fb.pixel(0, 0) is False  # 新たにアクティブになったプレーンは消去される

    def test_rows_is_a_copy(self):
        fb = Framebuffer()
        rows = fb.rows
        rows[0] = 1
        assert fb.rows[0] == 0

    def test_str_dump(self):
        fb = Framebuffer()
        fb.draw(0, 0, [0xA0])
        lines = str(fb).splitlines()
        assert len(lines) == 32
        assert lines[0] == "101" + "0" * 61
        assert lines[1] == "0" * 64
