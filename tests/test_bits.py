from chip8vm.bits import split_byte, merge_nibbles, merge_u16, split_u16


class TestNibbles:

    def test_byte_round_trip(self):
        for b in range(256):
            assert merge_nibbles(*split_byte(b)) == b

    def test_split_byte(self):
        assert split_byte(0b01111110) == (0b0111, 0b1110)
        assert split_byte(0x00) == (0, 0)
        assert split_byte(0xFF) == (0xF, 0xF)

    def test_u16_reconstructs_nibbles(self):
        for nibbles in [(0, 0, 0, 0), (0xD, 0x0, 0x1, 0x5), (0xF, 0xF, 0xF, 0xF), (1, 2, 3, 4)]:
            word = merge_u16(*nibbles)
            assert split_byte(word >> 8) + split_byte(word & 0xFF) == nibbles
            assert split_u16(word) == nibbles

    def test_merge_u16_order(self):
        assert merge_u16(0x1, 0x2, 0x3, 0x4) == 0x1234
