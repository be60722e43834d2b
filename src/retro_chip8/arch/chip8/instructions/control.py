# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

実行時点で PC はすでに次の命令を指しています (フェッチで +2 済み)。
"""
import logging

from retro_chip8.common.errors import StackUnderflowError
from retro_chip8.core.snapshot import Operation
from .base import ExecutionContext, decode_fields, reg, skip_next

logger = logging.getLogger(__name__)

# --- SYS ---
# @intent:responsibility SYS nnn (0nnn) をデコードします。機械語ルーチン呼び出しは現代的な実装に倣い無視します。
def decode_sys(opcode: int) -> Operation:
    return Operation(opcode, "SYS", [f"${opcode & 0xFFF:03X}"])

def execute_sys(ctx: ExecutionContext, op: Operation) -> None:
    logger.debug("ignoring SYS %03X at %03X", op.opcode & 0xFFF, ctx.state.pc - 2)

# --- RET ---
def decode_ret(opcode: int) -> Operation:
    return Operation(opcode, "RET")

# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。
# @intent:post-condition 空のスタックに対する RET は致命的エラーです。
def execute_ret(ctx: ExecutionContext, op: Operation) -> None:
    state = ctx.state
    if not state.stack:
        raise StackUnderflowError(state.pc - 2)
    state.pc = state.stack.pop()

# --- EXIT ---
def decode_exit(opcode: int) -> Operation:
    return Operation(opcode, "EXIT")

# @intent:responsibility マシンを停止状態にします。以降のステップは HALT を返します。
def execute_exit(ctx: ExecutionContext, op: Operation) -> None:
    logger.info("EXIT at %03X", ctx.state.pc - 2)
    ctx.state.halted = True

# --- JP ---
def decode_jp(opcode: int) -> Operation:
    return Operation(opcode, "JP", [f"${opcode & 0xFFF:03X}"])

def execute_jp(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.pc = op.opcode & 0xFFF

# --- CALL ---
def decode_call(opcode: int) -> Operation:
    return Operation(opcode, "CALL", [f"${opcode & 0xFFF:03X}"])

# @intent:responsibility 戻りアドレス（次の命令）をプッシュしてからジャンプします。
def execute_call(ctx: ExecutionContext, op: Operation) -> None:
    ctx.state.stack.append(ctx.state.pc)
    ctx.state.pc = op.opcode & 0xFFF

# --- SE / SNE (Immediate) ---
def decode_se_imm(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "SE", [reg(f.x), f"#${f.nn:02X}"])

def execute_se_imm(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    if ctx.state.v[f.x] == f.nn:
        skip_next(ctx.state)

def decode_sne_imm(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "SNE", [reg(f.x), f"#${f.nn:02X}"])

def execute_sne_imm(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    if ctx.state.v[f.x] != f.nn:
        skip_next(ctx.state)

# --- SE / SNE (Register) ---
def decode_se_reg(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "SE", [reg(f.x), reg(f.y)])

def execute_se_reg(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    if ctx.state.v[f.x] == ctx.state.v[f.y]:
        skip_next(ctx.state)

def decode_sne_reg(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "SNE", [reg(f.x), reg(f.y)])

def execute_sne_reg(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    if ctx.state.v[f.x] != ctx.state.v[f.y]:
        skip_next(ctx.state)

# --- JP Vx ---
def decode_jp_offset(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "JP", [reg(f.x), f"${f.nnn:03X}"])

# @intent:responsibility nnn にレジスタ値を加えた番地へジャンプします。
# @intent:rationale 加算に使うレジスタ (Vx か V0 か) は Quirk で切り替えます。
def execute_jp_offset(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    offset_reg = f.x if ctx.quirks.jump_with_vx else 0
    ctx.state.pc = f.nnn + ctx.state.v[offset_reg]
