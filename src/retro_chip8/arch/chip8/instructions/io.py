# src/retro_chip8/arch/chip8/instructions/io.py
"""
キー入力とタイマ命令の実装。
"""
from retro_chip8.core.snapshot import Operation
from .base import ExecutionContext, decode_fields, reg, skip_next

# --- SKP / SKNP ---
def decode_skp(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "SKP", [reg(f.x)])

# @intent:responsibility 現在押されているキーが Vx と等しければ次の命令をスキップします。
def execute_skp(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    if ctx.state.key == ctx.state.v[f.x]:
        skip_next(ctx.state)

def decode_sknp(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "SKNP", [reg(f.x)])

def execute_sknp(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    if ctx.state.key != ctx.state.v[f.x]:
        skip_next(ctx.state)

# --- LD Vx, K ---
def decode_wait_key(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", [reg(f.x), "K"])

# @intent:responsibility キーが押されていればその値を Vx に格納し、なければ同じ命令を再実行させます。
# @intent:rationale 再帰的に命令サイクルを呼び直すのではなく、PC を 2 戻して待機中フラグを立てるだけにします。
#                   次のステップが同じ命令を再フェッチするため、呼び出し側のループがそのまま再試行ループになります。
def execute_wait_key(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state = ctx.state
    if state.key is None:
        state.pc -= 2
        state.awaiting_key = True
        return
    state.v[f.x] = state.key
    state.awaiting_key = False

# --- Timers ---
def decode_ld_from_dt(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", [reg(f.x), "DT"])

def execute_ld_from_dt(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.v[f.x] = ctx.state.delay_timer

def decode_ld_dt(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", ["DT", reg(f.x)])

def execute_ld_dt(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.delay_timer = ctx.state.v[f.x]

def decode_ld_st(opcode: int) -> Operation:
    f = decode_fields(opcode)
    return Operation(opcode, "LD", ["ST", reg(f.x)])

def execute_ld_st(ctx: ExecutionContext, op: Operation) -> None:
    f = decode_fields(op.opcode)
    ctx.state.sound_timer = ctx.state.v[f.x]
