# src/retro_chip8/arch/chip8/instructions/graphics.py
"""
画面制御命令（クリア、スプライト描画、スクロール、解像度切替）の実装。
実際のビット操作は Framebuffer に委譲します。
"""
from retro_chip8.arch.chip8.display import LORES
from retro_chip8.core.snapshot import Operation
from .base import ExecutionContext, decode_fields, reg

# --- CLS ---
def decode_cls(opcode: int) -> Operation:
    return Operation(opcode, "CLS")

def execute_cls(ctx: ExecutionContext, op: Operation) -> None:
    ctx.display.clear()

# --- DRW ---
def decode_drw(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "DRW", [reg(f.x), reg(f.y), str(f.n)])

# @intent:responsibility memory[I..I+n) をスプライトとして (Vx, Vy) にXOR描画し、衝突を VF に反映します。
# @intent:rationale VF のクリアは Vx/Vy の読み出しより先に行います (x または y が F の場合に観測される挙動)。
#                   描画原点は現在の解像度によらず標準解像度 (64x32) で剰余を取ります。
def execute_drw(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state = ctx.state
    state.vf = 0
    x = state.v[f.x] % LORES.width
    y = state.v[f.y] % LORES.height
    sprite = [ctx.bus.read(state.i + row) for row in range(f.n)]
    if ctx.display.draw(x, y, sprite):
        state.vf = 1

# --- SCD n ---
def decode_scd(opcode: int) -> Operation:
    return Operation(opcode, "SCD", [str(opcode & 0xF)])

def execute_scd(ctx: ExecutionContext, op: Operation) -> None:
    ctx.display.scroll_down(op.opcode & 0xF)

# --- SCR / SCL ---
def decode_scr(opcode: int) -> Operation:
    return Operation(opcode, "SCR")

def execute_scr(ctx: ExecutionContext, op: Operation) -> None:
    ctx.display.scroll_right()

def decode_scl(opcode: int) -> Operation:
    return Operation(opcode, "SCL")

def execute_scl(ctx: ExecutionContext, op: Operation) -> None:
    ctx.display.scroll_left()

# --- LOW / HIGH ---
def decode_low(opcode: int) -> Operation:
    return Operation(opcode, "LOW")

def execute_low(ctx: ExecutionContext, op: Operation) -> None:
    ctx.display.set_mode(extended=False)

def decode_high(opcode: int) -> Operation:
    return Operation(opcode, "HIGH")

def execute_high(ctx: ExecutionContext, op: Operation) -> None:
    ctx.display.set_mode(extended=True)
