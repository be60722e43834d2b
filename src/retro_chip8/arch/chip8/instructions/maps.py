# src/retro_chip8/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。

CHIP-8 の命令語はオペランドを含むため、マスクごとの表に分けて登録します。
検索は表の並び順（より具体的なマスクが先）に行います。
"""
from . import alu
from . import control
from . import graphics
from . import io
from . import load

# @intent:map (マスク, {マスク後の命令語: デコード関数}) のリスト。
DECODE_MAPS = [
    (0xFFFF, {
        0x00E0: graphics.decode_cls,
        0x00EE: control.decode_ret,
        0x00FB: graphics.decode_scr,
        0x00FC: graphics.decode_scl,
        0x00FD: control.decode_exit,
        0x00FE: graphics.decode_low,
        0x00FF: graphics.decode_high,
    }),
    (0xFFF0, {
        0x00C0: graphics.decode_scd,
    }),
    (0xF0FF, {
        0xE09E: io.decode_skp,
        0xE0A1: io.decode_sknp,
        0xF007: io.decode_ld_from_dt,
        0xF00A: io.decode_wait_key,
        0xF015: io.decode_ld_dt,
        0xF018: io.decode_ld_st,
        0xF01E: load.decode_add_i,
        0xF029: load.decode_ld_font,
        0xF030: load.decode_ld_large_font,
        0xF033: load.decode_ld_bcd,
        0xF055: load.decode_store_regs,
        0xF065: load.decode_load_regs,
        0xF075: load.decode_store_rpl,
        0xF085: load.decode_load_rpl,
    }),
    (0xF00F, {
        0x8000: alu.decode_register_op,
        0x8001: alu.decode_register_op,
        0x8002: alu.decode_register_op,
        0x8003: alu.decode_register_op,
        0x8004: alu.decode_register_op,
        0x8005: alu.decode_register_op,
        0x8006: alu.decode_register_op,
        0x8007: alu.decode_register_op,
        0x800E: alu.decode_register_op,
    }),
    (0xF000, {
        0x0000: control.decode_sys,
        0x1000: control.decode_jp,
        0x2000: control.decode_call,
        0x3000: control.decode_se_imm,
        0x4000: control.decode_sne_imm,
        0x5000: control.decode_se_reg,
        0x6000: alu.decode_ld_imm,
        0x7000: alu.decode_add_imm,
        0x9000: control.decode_sne_reg,
        0xA000: load.decode_ld_i,
        0xB000: control.decode_jp_offset,
        0xC000: alu.decode_rnd,
        0xD000: graphics.decode_drw,
    }),
]

# @intent:map (マスク, {マスク後の命令語: 実行関数}) のリスト。DECODE_MAPS と同じキー構成を持ちます。
EXECUTE_MAPS = [
    (0xFFFF, {
        0x00E0: graphics.execute_cls,
        0x00EE: control.execute_ret,
        0x00FB: graphics.execute_scr,
        0x00FC: graphics.execute_scl,
        0x00FD: control.execute_exit,
        0x00FE: graphics.execute_low,
        0x00FF: graphics.execute_high,
    }),
    (0xFFF0, {
        0x00C0: graphics.execute_scd,
    }),
    (0xF0FF, {
        0xE09E: io.execute_skp,
        0xE0A1: io.execute_sknp,
        0xF007: io.execute_ld_from_dt,
        0xF00A: io.execute_wait_key,
        0xF015: io.execute_ld_dt,
        0xF018: io.execute_ld_st,
        0xF01E: load.execute_add_i,
        0xF029: load.execute_ld_font,
        0xF030: load.execute_ld_large_font,
        0xF033: load.execute_ld_bcd,
        0xF055: load.execute_store_regs,
        0xF065: load.execute_load_regs,
        0xF075: load.execute_store_rpl,
        0xF085: load.execute_load_rpl,
    }),
    (0xF00F, {
        0x8000: alu.execute_ld_reg,
        0x8001: alu.execute_or,
        0x8002: alu.execute_and,
        0x8003: alu.execute_xor,
        0x8004: alu.execute_add_reg,
        0x8005: alu.execute_sub,
        0x8006: alu.execute_shr,
        0x8007: alu.execute_subn,
        0x800E: alu.execute_shl,
    }),
    (0xF000, {
        0x0000: control.execute_sys,
        0x1000: control.execute_jp,
        0x2000: control.execute_call,
        0x3000: control.execute_se_imm,
        0x4000: control.execute_sne_imm,
        0x5000: control.execute_se_reg,
        0x6000: alu.execute_ld_imm,
        0x7000: alu.execute_add_imm,
        0x9000: control.execute_sne_reg,
        0xA000: load.execute_ld_i,
        0xB000: control.execute_jp_offset,
        0xC000: alu.execute_rnd,
        0xD000: graphics.execute_drw,
    }),
]


# @intent:utility_function マスク表を順に引き、最初に一致したエントリを返します。
def lookup(maps, opcode: int):
    for mask, table in maps:
        entry = table.get(opcode & mask)
        if entry is not None:
            return entry
    return None
