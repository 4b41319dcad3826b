import unittest
from chip8_tracer.arch.chip8.state import Chip8CpuState


class TestChip8CpuState(unittest.TestCase):
    def test_defaults(self):
        state = Chip8CpuState()
        self.assertEqual(state.pc, 0x200)
        self.assertEqual(state.sp, 0)
        self.assertEqual(len(state.v), 16)
        self.assertEqual(len(state.stack), 16)

    def test_instances_do_not_share_lists(self):
        a = Chip8CpuState()
        b = Chip8CpuState()
        a.v[0] = 1
        a.stack[0] = 0x202
        self.assertEqual(b.v[0], 0)
        self.assertEqual(b.stack[0], 0)

    def test_vf_is_register_f(self):
        state = Chip8CpuState()
        state.vf = 0x1FF
        self.assertEqual(state.v[0xF], 0xFF)
        state.v[0xF] = 0
        self.assertEqual(state.vf, 0)

    def test_copy_is_deep(self):
        state = Chip8CpuState()
        clone = state.copy()
        clone.v[3] = 9
        clone.stack[0] = 0x300
        self.assertEqual(state.v[3], 0)
        self.assertEqual(state.stack[0], 0)
        self.assertNotEqual(state, clone)

if __name__ == '__main__':
    unittest.main()
