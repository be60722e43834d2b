# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
画面表示、レジスタ表示、実行制御（Run/Stop/Step）、ファイル操作をまとめ、
QTimer から 60Hz で Runner を1フレームずつ進めます。
"""
import logging
from typing import Dict, List, Optional

from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QAction, QCloseEvent, QKeyEvent
from PySide6.QtWidgets import (QApplication, QDockWidget, QFileDialog, QLabel, QMainWindow,
                               QMessageBox, QToolBar)

from retro_chip8.common.errors import Chip8Error
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import SystemConfig
from retro_chip8.loader.loader import RomLoader
from retro_chip8.peripheral.keypad import KEY_MAP
from retro_chip8.peripheral.tone import ToneEdge
from retro_chip8.runtime.runner import Runner
from .display_view import DisplayView
from .register_view import RegisterView

logger = logging.getLogger(__name__)

# @intent:constant 1フレームの間隔 (ミリ秒)。約60Hz。
FRAME_INTERVAL_MS = 16

# @intent:constant Qtのキーコード → キーマップ上の物理キー名。
QT_KEY_NAMES: Dict[int, str] = {int(getattr(Qt.Key, f"Key_{name}")): name for name in KEY_MAP}


# @intent:responsibility アプリケーションのメインウィンドウを定義し、UIとRunnerを結び付けます。
class MainWindow(QMainWindow):
    """
    アプリケーションのメインウィンドウクラス。
    実行は全てGUIスレッド上の QTimer で行うため、コアへのアクセスは単一スレッドに限られます。
    """
    def __init__(self, config: Optional[SystemConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self.setWindowTitle("Retro CHIP-8")
        self.setFocusPolicy(Qt.StrongFocus)

        self._config = config or SystemConfig()
        self._rom_path: Optional[str] = None
        # 押下中の物理キー名。最後に押されたキーが末尾
        self._held_keys: List[str] = []

        self.display_view = DisplayView(self._config.display)
        self.setCentralWidget(self.display_view)

        self.timer = QTimer(self)
        self.timer.setInterval(FRAME_INTERVAL_MS)
        self.timer.timeout.connect(self._run_frame)

        self._create_toolbar()
        self._create_menus()
        self._create_status_inspector()
        self._create_status_bar()
        self._setup_backend()
        self._update_ui_state(False)

    # @intent:responsibility 現在の構成から CPU と Runner を作り直します。
    def _setup_backend(self):
        self.runner: Runner = SystemBuilder().build_runner(
            self._config,
            renderer=self.display_view,
            input_source=self._poll_key,
            tone_listener=self._on_tone,
        )
        self.display_view.set_pixels(self.runner.cpu.pixels())
        self.register_view.update_registers(self.runner.cpu.get_register_map())

    @property
    def config(self) -> SystemConfig:
        return self._config

    # @intent:responsibility メニューバーを作成し、ROM と構成ファイルのロードを追加します。
    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")

        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._open_rom)
        file_menu.addAction(self.load_rom_action)

        self.load_config_action = QAction("Load Config...", self)
        self.load_config_action.triggered.connect(self._open_config)
        file_menu.addAction(self.load_config_action)

    # @intent:responsibility 実行制御用のツールバーを作成します。
    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        toolbar.setFocusPolicy(Qt.NoFocus)
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self.stop)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self.step)
        toolbar.addAction(self.step_action)

    def _create_status_inspector(self):
        dock = QDockWidget("Registers", self)
        dock.setAllowedAreas(Qt.RightDockWidgetArea)
        self.register_view = RegisterView()
        dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, dock)

    def _create_status_bar(self):
        self.status_label = QLabel("No ROM loaded")
        self.tone_label = QLabel("")
        self.statusBar().addWidget(self.status_label, 1)
        self.statusBar().addPermanentWidget(self.tone_label)

    # @intent:responsibility 実行状態に応じてUIコンポーネントの有効/無効を切り替えます。
    def _update_ui_state(self, is_running: bool):
        self.load_rom_action.setEnabled(not is_running)
        self.load_config_action.setEnabled(not is_running)
        self.run_action.setEnabled(not is_running)
        self.step_action.setEnabled(not is_running)
        self.stop_action.setEnabled(is_running)

    # --- 実行制御 ---

    @Slot()
    def start(self):
        if self.runner.cpu.halted:
            return
        self._update_ui_state(True)
        self.status_label.setText("Running...")
        self.timer.start()

    @Slot()
    def stop(self):
        self.timer.stop()
        self._update_ui_state(False)
        self._show_snapshot_status()

    @Slot()
    def step(self):
        try:
            self.runner.step_instruction()
        except Chip8Error as e:
            self._on_fatal(e)
            return
        self.register_view.update_registers(self.runner.cpu.get_register_map())
        self._show_snapshot_status()

    # @intent:responsibility QTimer から呼ばれ、1フレーム分の命令を実行して表示を更新します。
    @Slot()
    def _run_frame(self):
        try:
            self.runner.run_frame()
        except Chip8Error as e:
            self._on_fatal(e)
            return
        self.register_view.update_registers(self.runner.cpu.get_register_map())
        if self.runner.cpu.halted:
            self.stop()
            self.status_label.setText("Halted")

    def _on_fatal(self, error: Chip8Error):
        logger.error("execution stopped: %s", error)
        self.timer.stop()
        self._update_ui_state(False)
        self.run_action.setEnabled(False)
        self.step_action.setEnabled(False)
        self.status_label.setText(f"Error: {error}")

    def _show_snapshot_status(self):
        snapshot = self.runner.get_last_snapshot()
        if snapshot is None:
            return
        text = f"PC {snapshot.state.pc:03X}  {snapshot.operation.to_text()}"
        if snapshot.metadata.awaiting_key:
            text += "  (waiting for key)"
        self.status_label.setText(text)

    # --- 周辺機器 ---

    # @intent:responsibility 押下中のキーのうち最後に押されたものを返します。押下なしなら None。
    def _poll_key(self) -> Optional[str]:
        return self._held_keys[-1] if self._held_keys else None

    def _on_tone(self, edge: ToneEdge):
        if edge is ToneEdge.START:
            QApplication.beep()
            self.tone_label.setText("♪ Tone")
        else:
            self.tone_label.setText("")

    def keyPressEvent(self, event: QKeyEvent):
        name = QT_KEY_NAMES.get(int(event.key()))
        if name is None:
            super().keyPressEvent(event)
            return
        if not event.isAutoRepeat():
            if name in self._held_keys:
                self._held_keys.remove(name)
            self._held_keys.append(name)

    def keyReleaseEvent(self, event: QKeyEvent):
        name = QT_KEY_NAMES.get(int(event.key()))
        if name is None:
            super().keyReleaseEvent(event)
            return
        if not event.isAutoRepeat() and name in self._held_keys:
            self._held_keys.remove(name)

    # --- ファイル操作 ---

    # @intent:responsibility 新しいシステムを作り直してから ROM をロードします。
    # @intent:return 成功した場合 True。失敗はダイアログで通知します。
    def load_rom(self, file_name: str) -> bool:
        self.stop()
        self._setup_backend()
        try:
            RomLoader().load_rom(file_name, self.runner.cpu)
        except Chip8Error as e:
            QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")
            return False
        self._rom_path = file_name
        self.status_label.setText(f"Loaded {file_name}")
        return True

    # @intent:responsibility 構成を読み込み、ロード済みの ROM があれば新しいシステムへ再ロードします。
    def load_config(self, file_name: str) -> bool:
        try:
            self._config = ConfigLoader().load_from_file(file_name)
        except (Chip8Error, OSError) as e:
            QMessageBox.critical(self, "Error", f"Failed to load config: {e}")
            return False
        self.display_view.apply_config(self._config.display)
        if self._rom_path is not None:
            return self.load_rom(self._rom_path)
        self.stop()
        self._setup_backend()
        self.status_label.setText(f"Config loaded from {file_name}")
        return True

    @Slot()
    def _open_rom(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open ROM", "", "CHIP-8 ROMs (*.ch8 *.c8 *.sc8);;All Files (*)")
        if file_name:
            self.load_rom(file_name)

    @Slot()
    def _open_config(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Config", "", "YAML Files (*.yaml *.yml);;All Files (*)")
        if file_name:
            self.load_config(file_name)

    def closeEvent(self, event: QCloseEvent):
        self.timer.stop()
        event.accept()
