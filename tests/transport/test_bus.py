# tests/transport/test_bus.py
"""
chip8_tracer.transport.busモジュールの単体テスト。
"""
import pytest
from chip8_tracer.core.errors import OutOfBoundsError
from chip8_tracer.transport.bus import Bus, Device, RAM, BusAccessType

# @intent:test_suite 共通バスとデバイスの基本的な機能とエラーハンドリングを検証します。

class TestRAM:
    # @intent:test_case_init RAMクラスが正しいサイズで初期化されることを検証します。
    def test_ram_init_valid_size(self):
        ram = RAM(16)
        assert ram.get_size() == 16
        assert all(b == 0 for b in ram._memory)

    def test_ram_init_invalid_size(self):
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(0)
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(1.5)

    # @intent:test_case_oob 境界外アドレスへのアクセス時にOutOfBoundsError（IndexErrorの派生）が発生することを検証します。
    def test_ram_read_write_out_of_bounds(self):
        ram = RAM(4)
        with pytest.raises(IndexError, match="Address 4 out of bounds for RAM of size 4."):
            ram.read(4)
        with pytest.raises(OutOfBoundsError):
            ram.write(-1, 0x00)

    def test_ram_write_invalid_data(self):
        ram = RAM(1)
        with pytest.raises(ValueError, match="Data 256 is not an 8-bit value."):
            ram.write(0, 0x100)

    # @intent:test_case_reset resetで全バイトが0に戻ることを検証します。
    def test_ram_reset(self):
        ram = RAM(4)
        ram.write(2, 0x55)
        ram.reset()
        assert ram.read(2) == 0
        assert ram.get_size() == 4

class TestBus:
    @pytest.fixture
    def bus(self):
        bus = Bus()
        bus.register_device(0x000, 0xFFF, RAM(0x1000))
        return bus

    # @intent:test_case_log read/writeがアクティビティログに記録され、取得時にクリアされることを検証します。
    def test_activity_log(self, bus):
        bus.write(0x300, 0xAA)
        assert bus.read(0x300) == 0xAA
        log = bus.get_and_clear_activity_log()
        assert [(a.address, a.data, a.access_type) for a in log] == [
            (0x300, 0xAA, BusAccessType.WRITE),
            (0x300, 0xAA, BusAccessType.READ),
        ]
        assert bus.get_and_clear_activity_log() == []

    # @intent:test_case_peek_poke peek/pokeはログに残らないことを検証します。
    def test_peek_poke_not_logged(self, bus):
        bus.poke(0x200, 0x12)
        assert bus.peek(0x200) == 0x12
        assert bus.get_and_clear_activity_log() == []

    def test_unmapped_address(self, bus):
        with pytest.raises(OutOfBoundsError, match="not mapped"):
            bus.read(0x1000)
        with pytest.raises(IndexError):
            bus.write(0x1000, 0x00)

    def test_address_limit_and_reset(self, bus):
        assert bus.get_address_limit() == 0x1000
        bus.poke(0xFFF, 0x01)
        bus.reset_devices()
        assert bus.peek(0xFFF) == 0x00

    def test_register_device_invalid(self):
        bus = Bus()
        with pytest.raises(ValueError):
            bus.register_device(0x200, 0x100, RAM(0x100))
        with pytest.raises(ValueError):
            bus.register_device(0x000, 0x0FF, RAM(0x200))
        with pytest.raises(TypeError):
            bus.register_device(0x000, 0x0FF, object())
        assert Bus().get_address_limit() == 0

    # @intent:test_case_custom_device 独自のDevice実装も登録・アクセスできることを検証します。
    def test_custom_device(self):
        class ConstantDevice(Device):
            def read(self, address: int) -> int:
                return 0x42

            def write(self, address: int, data: int) -> None:
                pass

        bus = Bus()
        bus.register_device(0x000, 0x00F, ConstantDevice())
        assert bus.read(0x005) == 0x42
        bus.reset_devices()
