# nibble helpers: an opcode is two bytes viewed as four 4-bit values


def split_byte(b):
    """Split a byte into its (high, low) nibbles."""
    return (b >> 4) & 0xF, b & 0xF


def merge_nibbles(high, low):
    return ((high & 0xF) << 4) | (low & 0xF)


def merge_u16(n0, n1, n2, n3):
    """Pack four nibbles (most significant first) into a 16-bit word."""
    return (merge_nibbles(n0, n1) << 8) | merge_nibbles(n2, n3)


def split_u16(word):
    return split_byte((word >> 8) & 0xFF) + split_byte(word & 0xFF)
