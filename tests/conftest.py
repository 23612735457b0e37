"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state
from chip8vm.machine import InputSample


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state in modern mode."""
    return create_state(modern_mode=True)


@pytest.fixture
def legacy_state():
    """Provide a fresh state in classic CHIP-8 mode."""
    return create_state(modern_mode=False)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **values):
    """Helper to set registers by name, e.g. set_registers(state, V1=0x10, VF=1)."""
    V = state.V
    for name, value in values.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def program_bytes(*instructions):
    """Assemble 16-bit instructions into a big-endian program image."""
    return b"".join(instruction.to_bytes(2, "big") for instruction in instructions)


class RecordingDisplay:
    """Display collaborator that keeps every frame it receives."""

    def __init__(self):
        self.frames = []

    def draw(self, framebuffer):
        self.frames.append(jnp.array(framebuffer))


class ScriptedInput:
    """Input collaborator replaying a fixed list of samples, then idle."""

    def __init__(self, samples=()):
        self.samples = list(samples)
        self.polls = 0

    def poll(self):
        self.polls += 1
        if self.samples:
            return self.samples.pop(0)
        return InputSample()
