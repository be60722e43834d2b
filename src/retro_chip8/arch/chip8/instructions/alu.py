# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

フラグを定義する命令は結果を Vx に書き込んだ後で VF を無条件に上書きします。
したがって x == F の場合、最終的な VF はフラグ値になります。
"""
from retro_chip8.core.snapshot import Operation
from .base import ExecutionContext, decode_fields, reg

# --- LD Vx, nn ---
def decode_ld_imm(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", [reg(f.x), f"#${f.nn:02X}"])

def execute_ld_imm(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.v[f.x] = f.nn

# --- ADD Vx, nn ---
def decode_add_imm(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "ADD", [reg(f.x), f"#${f.nn:02X}"])

# @intent:responsibility 8bitで折り返す加算。VFは変更しません。
def execute_add_imm(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.v[f.x] = (ctx.state.v[f.x] + f.nn) & 0xFF

# --- 8xyN ---
# @intent:map 8xyN の下位ニブルとニーモニックの対応。
REGISTER_OP_MNEMONICS = {
    0x0: "LD", 0x1: "OR", 0x2: "AND", 0x3: "XOR",
    0x4: "ADD", 0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL",
}

# @intent:responsibility 8xyN (レジスタ間演算) をデコードします。
def decode_register_op(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, REGISTER_OP_MNEMONICS[f.n], [reg(f.x), reg(f.y)])

def execute_ld_reg(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.v[f.x] = ctx.state.v[f.y]

def execute_or(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.v[f.x] |= ctx.state.v[f.y]

def execute_and(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.v[f.x] &= ctx.state.v[f.y]

def execute_xor(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.v[f.x] ^= ctx.state.v[f.y]

# @intent:responsibility Vx += Vy。VF = 1 は8bitの和が桁あふれした場合のみ。
def execute_add_reg(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    v = ctx.state.v
    res = v[f.x] + v[f.y]
    v[f.x] = res & 0xFF
    ctx.state.vf = 1 if res > 0xFF else 0

# @intent:responsibility Vx -= Vy。VF = 1 はボローが発生しなかった場合 (Vx >= Vy)。
def execute_sub(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    v = ctx.state.v
    no_borrow = v[f.x] >= v[f.y]
    v[f.x] = (v[f.x] - v[f.y]) & 0xFF
    ctx.state.vf = 1 if no_borrow else 0

# @intent:responsibility Vx = Vy - Vx。フラグの極性は SUB と同じ。
def execute_subn(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    v = ctx.state.v
    no_borrow = v[f.y] >= v[f.x]
    v[f.x] = (v[f.y] - v[f.x]) & 0xFF
    ctx.state.vf = 1 if no_borrow else 0

# @intent:responsibility 論理右シフト。VF = シフトアウトされた最下位ビット。
def execute_shr(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    v = ctx.state.v
    source = v[f.y] if ctx.quirks.shift_uses_vy else v[f.x]
    v[f.x] = source >> 1
    ctx.state.vf = source & 0x1

# @intent:responsibility 論理左シフト。VF = シフトアウトされた最上位ビット。
def execute_shl(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    v = ctx.state.v
    source = v[f.y] if ctx.quirks.shift_uses_vy else v[f.x]
    v[f.x] = (source << 1) & 0xFF
    ctx.state.vf = (source >> 7) & 0x1

# --- RND ---
def decode_rnd(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "RND", [reg(f.x), f"#${f.nn:02X}"])

# @intent:responsibility Vx = 乱数8bit AND nn。
def execute_rnd(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.v[f.x] = ctx.rng.randint(0, 0xFF) & f.nn
