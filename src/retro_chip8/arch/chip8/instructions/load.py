# src/retro_chip8/arch/chip8/instructions/load.py
"""
インデックスレジスタとメモリ転送命令の実装。

メモリアクセスはすべてバス経由で行い、範囲外アクセスは MemoryAccessError として伝播します。
"""
import logging

from retro_chip8.arch.chip8.font import FONT_ADDRESS, FONT_GLYPH_SIZE, LARGE_FONT_ADDRESS, LARGE_FONT_GLYPH_SIZE
from retro_chip8.arch.chip8.state import RPL_COUNT
from retro_chip8.core.snapshot import Operation
from .base import ExecutionContext, decode_fields, reg

logger = logging.getLogger(__name__)

# --- LD I, nnn ---
def decode_ld_i(opcode: int) -> Operation:
    return Operation(opcode, "LD", ["I", f"${opcode & 0xFFF:03X}"])

def execute_ld_i(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.i = op.opcode & 0xFFF

# --- ADD I, Vx ---
def decode_add_i(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "ADD", ["I", reg(f.x)])

# @intent:responsibility I += Vx (16bitで保持)。
# @intent:rationale アドレス範囲外への到達で VF=1 とする拡張挙動は全てのインタプリタに共通ではないため、Quirk で切り替えます。
def execute_add_i(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state = ctx.state
    res = (state.i + state.v[f.x]) & 0xFFFF
    if ctx.quirks.index_overflow_flag and (res >= 0xFFF or res < state.i):
        state.vf = 1
    state.i = res

# --- LD F, Vx ---
def decode_ld_font(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", ["F", reg(f.x)])

# @intent:responsibility I を Vx の小フォントグリフのアドレス (0x050 + 5*Vx) に設定します。
def execute_ld_font(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.i = FONT_ADDRESS + FONT_GLYPH_SIZE * ctx.state.v[f.x]

# --- LD HF, Vx ---
def decode_ld_large_font(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", ["HF", reg(f.x)])

def execute_ld_large_font(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.i = LARGE_FONT_ADDRESS + LARGE_FONT_GLYPH_SIZE * ctx.state.v[f.x]

# --- LD B, Vx ---
def decode_ld_bcd(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", ["B", reg(f.x)])

# @intent:responsibility Vx を10進3桁 (百, 十, 一) に分解して memory[I..I+2] に書き込みます。
def execute_ld_bcd(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    value = ctx.state.v[f.x]
    i = ctx.state.i
    ctx.bus.write(i, value // 100)
    ctx.bus.write(i + 1, (value // 10) % 10)
    ctx.bus.write(i + 2, value % 10)

# --- LD [I], Vx ---
def decode_store_regs(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", ["[I]", reg(f.x)])

# @intent:responsibility V0..Vx (x を含む) を memory[I] から順に書き込みます。
def execute_store_regs(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state = ctx.state
    for index in range(f.x + 1):
        ctx.bus.write(state.i + index, state.v[index])
    if ctx.quirks.load_store_increments_i:
        state.i = (state.i + f.x + 1) & 0xFFFF

# --- LD Vx, [I] ---
def decode_load_regs(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", [reg(f.x), "[I]"])

def execute_load_regs(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state = ctx.state
    for index in range(f.x + 1):
        state.v[index] = ctx.bus.read(state.i + index)
    if ctx.quirks.load_store_increments_i:
        state.i = (state.i + f.x + 1) & 0xFFFF

# --- LD R, Vx / LD Vx, R ---
def decode_store_rpl(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", ["R", reg(f.x)])

# @intent:responsibility V0..Vx を永続フラグレジスタへ退避します。x は 7 までが有効です。
def execute_store_rpl(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    if f.x >= RPL_COUNT:
        logger.warning("LD R, V%X ignored: only V0-V%X can be saved", f.x, RPL_COUNT - 1)
        return
    ctx.rpl[:f.x + 1] = ctx.state.v[:f.x + 1]

def decode_load_rpl(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", [reg(f.x), "R"])

def execute_load_rpl(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    if f.x >= RPL_COUNT:
        logger.warning("LD V%X, R ignored: only V0-V%X can be restored", f.x, RPL_COUNT - 1)
        return
    ctx.state.v[:f.x + 1] = ctx.rpl[:f.x + 1]
