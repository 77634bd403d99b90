"""Shared test fixtures."""

import time
from dataclasses import dataclass
from typing import Annotated

import pytest
from pydantic import TypeAdapter

from pymillis import Millis


@dataclass
class FrozenClocks:
    mono: int
    wall: int

    def advance(self, nanos: int) -> None:
        self.mono += nanos
        self.wall += nanos


@pytest.fixture
def frozen_clocks(monkeypatch):
    clocks = FrozenClocks(mono=5_000_000_000, wall=1_511_885_454_870_000_000)
    monkeypatch.setattr(time, "monotonic_ns", lambda: clocks.mono)
    monkeypatch.setattr(time, "time_ns", lambda: clocks.wall)
    return clocks


@pytest.fixture
def encode():
    def _encode(value, target) -> str:
        return TypeAdapter(Annotated[target, Millis()]).dump_json(value).decode()

    return _encode


@pytest.fixture
def decode():
    def _decode(src: str, target):
        return TypeAdapter(Annotated[target, Millis()]).validate_json(src)

    return _decode
