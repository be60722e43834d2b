# tests/conftest.py
"""
テスト全体で共有するフィクスチャ。
Qtのウィジェットテストはディスプレイを持たない環境でも動くよう offscreen で実行します。
"""
import os
import random

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.config.models import QuirkConfig
from retro_chip8.transport.bus import create_memory_bus


# @intent:utility_function 16bit命令語の並びをビッグエンディアンのバイト列に変換します。
def assemble(*opcodes: int) -> bytes:
    return b"".join(op.to_bytes(2, "big") for op in opcodes)


@pytest.fixture(name="assemble")
def assemble_fixture():
    return assemble


@pytest.fixture
def bus():
    return create_memory_bus()


@pytest.fixture
def cpu(bus):
    return Chip8Cpu(bus, quirks=QuirkConfig(), rng=random.Random(0))


# @intent:utility_function 命令列をロードしたCPUを生成するファクトリ。
@pytest.fixture
def make_cpu():
    def _make(*opcodes: int, quirks: QuirkConfig = None) -> Chip8Cpu:
        cpu = Chip8Cpu(create_memory_bus(), quirks=quirks or QuirkConfig(), rng=random.Random(0))
        if opcodes:
            cpu.load_program(assemble(*opcodes))
        return cpu
    return _make
