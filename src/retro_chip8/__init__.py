"""
retro_chip8

CHIP-8 / SUPER-CHIP 互換の命令セットインタプリタと、そのビットプレーン・フレームバッファ。
"""
__version__ = "0.1.0"
