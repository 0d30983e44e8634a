import pytest

from chip8vm.errors import AddressError, StackOverflowError, StackUnderflowError
from chip8vm.state import Framebuffer, Keyboard, Memory, Registers, Stack


class TestStack:

    def test_last_in_first_out(self):
        stack = Stack()
        stack.push(22)
        stack.push(12)
        assert stack.pop() == 12
        assert stack.pop() == 22
        assert len(stack) == 0

    def test_overflow_raises(self):
        stack = Stack()
        for i in range(16):
            stack.push(0x200 + 2 * i)
        with pytest.raises(StackOverflowError):
            stack.push(0x300)
        assert len(stack) == 16

    def test_underflow_raises(self):
        with pytest.raises(StackUnderflowError):
            Stack().pop()


class TestMemory:

    def test_size_and_bounds(self):
        mem = Memory()
        assert len(mem) == 4096
        mem.write_block(0xFFF, [0xAB])
        assert mem.read(0xFFF) == 0xAB
        with pytest.raises(AddressError):
            mem.read(0x1000)
        with pytest.raises(AddressError):
            mem.read(-1)

    def test_block_past_end_raises(self):
        mem = Memory()
        with pytest.raises(AddressError) as exc:
            mem.read_block(0xFFE, 3)
        assert exc.value.address == 0x1000
        with pytest.raises(AddressError):
            mem.write_block(0xFFF, b"\x01\x02")

    def test_block_round_trip(self):
        mem = Memory()
        mem.write_block(0x300, [1, 2, 3])
        assert mem.read_block(0x300, 3) == b"\x01\x02\x03"


class TestRegisters:

    def test_initial_values(self):
        regs = Registers()
        assert regs.pc == 0x200
        assert regs.V == [0] * 16
        assert regs.I == 0

    def test_timers_stop_at_zero(self):
        regs = Registers()
        regs.delay_timer = 1
        regs.sound_timer = 2
        regs.tick_timers()
        assert (regs.delay_timer, regs.sound_timer) == (0, 1)
        regs.tick_timers()
        regs.tick_timers()
        assert (regs.delay_timer, regs.sound_timer) == (0, 0)


class TestFramebuffer:

    def test_draw_twice_erases(self):
        fb = Framebuffer()
        assert fb.draw_sprite(3, 4, b"\xFF\x81") is False
        assert fb.is_lit(3, 4) and fb.is_lit(10, 4) and fb.is_lit(3, 5)
        assert not fb.is_lit(4, 5)
        assert fb.draw_sprite(3, 4, b"\xFF\x81") is True
        assert list(fb.lit()) == []

    def test_wraps_around_edges(self):
        fb = Framebuffer()
        fb.draw_sprite(63, 31, b"\xC0\xC0")
        assert sorted(fb.lit()) == [(0, 0), (0, 31), (63, 0), (63, 31)]

    def test_clear(self):
        fb = Framebuffer()
        fb.draw_sprite(0, 0, b"\xFF")
        fb.clear()
        assert not fb.pixels.any()


class TestKeyboard:

    def test_latch(self):
        kb = Keyboard()
        kb[0xA] = True
        assert kb[0xA]
        assert not kb[0xB]
        kb.set_all([True] * 16)
        assert all(kb[i] for i in range(16))

    def test_wait_for_key(self):
        kb = Keyboard()
        kb.wait_for_key(7)
        assert kb.waiting_for_keyboard
        assert kb.keyboard_register == 7
