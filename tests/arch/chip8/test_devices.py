import random
import pytest
from chip8_tracer.arch.chip8.devices import FrameBuffer, Keypad, Peripherals


class TestFrameBuffer:
    def test_xor_pixel_reports_lit_pixel_going_dark(self):
        fb = FrameBuffer()
        assert fb.xor_pixel(3, 4) is False
        assert fb.get_pixel(3, 4) is True
        assert fb.xor_pixel(3, 4) is True
        assert fb.get_pixel(3, 4) is False

    def test_draw_row_wraps(self):
        fb = FrameBuffer()
        assert fb.draw_row(62, 33, 0xC1) is False
        # y=33 は 1 行目に折り返す、x=62+7 は 5 列目に折り返す
        assert fb.get_pixel(62, 1) and fb.get_pixel(63, 1) and fb.get_pixel(5, 1)
        assert sum(fb.view()) == 3

    def test_clear_and_equality(self):
        a, b = FrameBuffer(), FrameBuffer()
        a.draw_row(0, 0, 0xFF)
        assert a != b
        a.clear()
        assert a == b

    def test_rows_shape(self):
        rows = FrameBuffer().rows()
        assert len(rows) == 32
        assert all(len(row) == 64 for row in rows)


class TestKeypad:
    def test_first_pressed(self):
        keypad = Keypad()
        assert keypad.first_pressed() is None
        keypad.set_key(9, True)
        keypad.set_key(2, True)
        assert keypad.first_pressed() == 2
        keypad.reset()
        assert keypad.snapshot() == (False,) * 16

    def test_out_of_range(self):
        keypad = Keypad()
        with pytest.raises(IndexError):
            keypad.set_key(16, True)
        with pytest.raises(IndexError):
            keypad.is_pressed(-1)


def test_peripherals_random_byte_uses_injected_rng():
    io1 = Peripherals(rng=random.Random(5))
    io2 = Peripherals(rng=random.Random(5))
    values = [io1.random_byte() for _ in range(8)]
    assert values == [io2.random_byte() for _ in range(8)]
    assert all(0 <= v <= 0xFF for v in values)
