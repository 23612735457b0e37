"""Tests for control flow instructions."""

import pytest
from chip8vm import execute, MemoryAccessError
from conftest import set_registers


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001)
        assert state.pc == 1

    def test_jump_is_absolute(self, fresh_state):
        """1NNN ignores the current pc."""
        state = fresh_state.replace(pc=fresh_state.pc + 0x100)
        state = execute(state, 0x1ABC)
        assert state.pc == 0xABC


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = set_registers(fresh_state, V5=0x42)
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = set_registers(fresh_state, V5=0x41)
        initial_pc = state.pc

        state = execute(state, 0x3542)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = set_registers(fresh_state, V3=0x10)
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = set_registers(fresh_state, V3=0x20)
        initial_pc = state.pc

        state = execute(state, 0x4320)
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x55)
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x44)
        initial_pc = state.pc

        state = execute(state, 0x5120)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = set_registers(fresh_state, V7=0xAA, V8=0xBB)
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = set_registers(fresh_state, V7=0xCC, V8=0xCC)
        initial_pc = state.pc

        state = execute(state, 0x9780)
        assert state.pc == initial_pc

    def test_register_skip_with_nonzero_low_nibble_is_unsupported(self, fresh_state):
        """5XY1 is not a CHIP-8 instruction and must not skip."""
        initial_pc = fresh_state.pc

        state = execute(fresh_state, 0x5121)  # V1 == V2 == 0
        assert state.pc == initial_pc

    def test_skip_with_zero_values(self, fresh_state):
        """Test skip instructions with zero values."""
        initial_pc = fresh_state.pc

        state = execute(fresh_state, 0x3000)  # Skip if V0 == 0
        assert state.pc == initial_pc + 2

    def test_skip_boundary_values(self, fresh_state):
        """Test skip instructions with boundary values."""
        state = set_registers(fresh_state, V0=0xFF)
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 2


class TestKeySkips:
    """Test EX9E / EXA1 with a sampled key."""

    def test_skip_if_key_pressed(self, fresh_state):
        state = set_registers(fresh_state, V4=0xA)
        initial_pc = state.pc

        state = execute(state, 0xE49E, key=0xA)
        assert state.pc == initial_pc + 2

    def test_no_skip_if_other_key_pressed(self, fresh_state):
        state = set_registers(fresh_state, V4=0xA)
        initial_pc = state.pc

        state = execute(state, 0xE49E, key=0x3)
        assert state.pc == initial_pc

    def test_skip_if_not_key(self, fresh_state):
        state = set_registers(fresh_state, V4=0xA)
        initial_pc = state.pc

        state = execute(state, 0xE4A1, key=0x3)
        assert state.pc == initial_pc + 2

    def test_no_skip_if_not_key_matches(self, fresh_state):
        state = set_registers(fresh_state, V4=0xA)
        initial_pc = state.pc

        state = execute(state, 0xE4A1, key=0xA)
        assert state.pc == initial_pc

    @pytest.mark.parametrize("instruction", [0xE49E, 0xE4A1])
    def test_missing_key_never_skips(self, fresh_state, instruction):
        """Without a sampled key both key skips are no-ops."""
        initial_pc = fresh_state.pc

        state = execute(fresh_state, instruction, key=None)
        assert state.pc == initial_pc


class TestJumpWithOffset:
    """Test jump with offset in both modes."""

    def test_jump_with_offset_legacy(self, legacy_state):
        """BNNN - Jump with V0 offset (classic mode)."""
        state = execute(legacy_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260

    def test_jump_with_offset_modern(self, modern_state):
        """BXNN - Jump with VX offset (modern mode)."""
        state = execute(modern_state, 0x6210)  # V2 = 0x10
        state = execute(state, 0xB250)  # Jump to 0x250 + V2
        assert state.pc == 0x260

    def test_jump_mode_comparison(self, legacy_state, modern_state):
        """Test that modern_mode changes which register is added."""
        state_legacy = set_registers(legacy_state, V0=0x10, V2=0x30)
        state_modern = set_registers(modern_state, V0=0x10, V2=0x30)

        state_legacy = execute(state_legacy, 0xB250)
        state_modern = execute(state_modern, 0xB250)

        assert state_legacy.pc == 0x260  # 0x250 + V0
        assert state_modern.pc == 0x280  # 0x250 + V2

    def test_jump_with_offset_past_memory_is_fatal(self, legacy_state):
        state = set_registers(legacy_state, V0=0x02)

        with pytest.raises(MemoryAccessError):
            execute(state, 0xBFFF)
