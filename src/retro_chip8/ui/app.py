# src/retro_chip8/ui/app.py
"""
GUI版のエントリポイント (`retro-chip8` コマンド)。
"""
import logging
import sys

from PySide6.QtWidgets import QApplication

from .main_window import MainWindow

# @intent:responsibility ログ出力を設定し、メインウィンドウを起動します。
def main():
    """
    第1引数にROMのパスが与えられた場合は、読み込んだ上で実行を開始します。
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    qt_app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    if len(sys.argv) > 1 and window.load_rom(sys.argv[1]):
        window.start()
    sys.exit(qt_app.exec())

if __name__ == '__main__':
    main()
