"""
エミュレーションセッションを終了させる致命的エラーの型定義。

未知のオペコードはエラーではありません（ログ出力のみで実行を継続します）。
ここに定義される例外はコア内部で握りつぶされず、常に呼び出し元へ伝播します。
"""


# @intent:responsibility 本パッケージが送出する全ての例外の基底クラスです。
class Chip8Error(Exception):
    pass


# @intent:responsibility 0〜4095 の範囲外を指すメモリアクセスを表します。
# @intent:rationale 既存の呼び出し側が IndexError を捕捉できるよう、IndexError も継承します。
class MemoryAccessError(Chip8Error, IndexError):
    def __init__(self, address: int, size: int = 0x1000):
        super().__init__(f"Address {address:#05x} out of bounds for memory of size {size:#06x}.")
        self.address = address
        self.size = size


# @intent:responsibility 空のコールスタックに対する RET を表します。
class StackUnderflowError(Chip8Error):
    def __init__(self, pc: int):
        super().__init__(f"RET with empty call stack at PC {pc:#05x}")
        self.pc = pc


# @intent:responsibility ROMイメージが存在しない、空である、またはメモリに収まらないことを表します。
class RomLoadError(Chip8Error, ValueError):
    pass


# @intent:responsibility 設定ファイルの値が解釈できないことを表します。
class ConfigError(Chip8Error, ValueError):
    pass
