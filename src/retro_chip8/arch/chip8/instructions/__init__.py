# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8 / SUPER-CHIP 命令セット実装パッケージ。
"""
import logging

from retro_chip8.core.snapshot import Operation
from .base import ExecutionContext, Fields, decode_fields
from .maps import DECODE_MAPS, EXECUTE_MAPS, lookup

logger = logging.getLogger(__name__)

UNKNOWN = "UNKNOWN"

# @intent:responsibility CHIP-8のオペコードをデコードします。
def decode_opcode(opcode: int) -> Operation:
    """
    オペコードをデコードし、Operationオブジェクトを返します。
    未知のオペコードの場合は"UNKNOWN"を返します。
    """
    decoder = lookup(DECODE_MAPS, opcode)
    if decoder:
        return decoder(opcode)
    return Operation(opcode, UNKNOWN, [f"${opcode:04X}"])

# @intent:responsibility デコードされた命令を実行し、CPUの状態を変更します。
# @intent:return 未知の命令で何も実行しなかった場合は注記文字列、それ以外は None。
# @intent:rationale 未知の命令は致命的エラーにしません。拡張命令を含むROMでも実行を継続できるようにするためです。
def execute_instruction(operation: Operation, ctx: ExecutionContext):
    executor = lookup(EXECUTE_MAPS, operation.opcode)
    if executor is None:
        logger.warning("unknown opcode %04X at %03X", operation.opcode, ctx.state.pc - 2)
        return "unknown opcode"
    executor(ctx, operation)
    return None

__all__ = ["ExecutionContext", "Fields", "decode_fields", "decode_opcode", "execute_instruction", "UNKNOWN"]
