"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスを定義します。
"""
from typing import Callable, List, Optional

# @intent:data_structure 論理キーコード (0x0〜0xF)。押下なしは None。
KeyCode = Optional[int]

# @intent:data_structure 外部レンダラへ渡すピクセル行列。pixels[row][col] が True なら点灯。
PixelMatrix = List[List[bool]]

# @intent:data_structure ピクセル行列を受け取って描画する外部レンダラ。
Renderer = Callable[[PixelMatrix], None]
