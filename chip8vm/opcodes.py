# Decoder: maps a 4-nibble opcode onto one of the 35 CHIP-8 operations.
# Patterns are disjoint, so table order does not matter.

from collections import namedtuple
from enum import Enum

from .bits import merge_u16
from .errors import UnknownOpcodeError


class Op(Enum):
    SYS = "0nnn"           # machine code routine, ignored
    CLS = "00E0"           # clear the display
    RET = "00EE"           # return from subroutine
    JP = "1nnn"            # jump to nnn
    CALL = "2nnn"          # call subroutine at nnn
    SE_VX_KK = "3xkk"      # skip if Vx == kk
    SNE_VX_KK = "4xkk"     # skip if Vx != kk
    SE_VX_VY = "5xy0"      # skip if Vx == Vy
    LD_VX_KK = "6xkk"      # Vx = kk
    ADD_VX_KK = "7xkk"     # Vx += kk, no carry
    LD_VX_VY = "8xy0"
    OR = "8xy1"
    AND = "8xy2"
    XOR = "8xy3"
    ADD = "8xy4"           # VF = carry
    SUB = "8xy5"           # VF = NOT borrow
    SHR = "8xy6"           # VF = shifted out LSB
    SUBN = "8xy7"          # Vx = Vy - Vx, VF = NOT borrow
    SHL = "8xyE"           # VF = shifted out MSB
    SNE_VX_VY = "9xy0"     # skip if Vx != Vy
    LD_I = "Annn"
    JP_V0 = "Bnnn"         # jump to nnn + V0
    RND = "Cxkk"
    DRW = "Dxyn"
    SKP = "Ex9E"           # skip if key Vx is down
    SKNP = "ExA1"          # skip if key Vx is up
    LD_VX_DT = "Fx07"
    WAITKEY = "Fx0A"
    LD_DT_VX = "Fx15"
    LD_ST_VX = "Fx18"
    ADD_I_VX = "Fx1E"
    FONT = "Fx29"          # I = address of glyph Vx
    BCD = "Fx33"
    STORE = "Fx55"         # mem[I..I+x] = V0..Vx
    LOAD = "Fx65"          # V0..Vx = mem[I..I+x]


_ = None  # wildcard nibble


def but(*excluded):
    """Nibble position matching every value except the excluded ones."""
    return frozenset(range(16)) - frozenset(excluded)


# dispatch table: nibble pattern -> operation
PATTERNS = [
    ((0x0, but(0x0), _, _), Op.SYS),
    ((0x0, 0x0, but(0xE), _), Op.SYS),
    ((0x0, 0x0, 0xE, but(0x0, 0xE)), Op.SYS),
    ((0x0, 0x0, 0xE, 0x0), Op.CLS),
    ((0x0, 0x0, 0xE, 0xE), Op.RET),

    ((0x1, _, _, _), Op.JP),
    ((0x2, _, _, _), Op.CALL),
    ((0x3, _, _, _), Op.SE_VX_KK),
    ((0x4, _, _, _), Op.SNE_VX_KK),
    ((0x5, _, _, 0x0), Op.SE_VX_VY),
    ((0x6, _, _, _), Op.LD_VX_KK),
    ((0x7, _, _, _), Op.ADD_VX_KK),

    ((0x8, _, _, 0x0), Op.LD_VX_VY),
    ((0x8, _, _, 0x1), Op.OR),
    ((0x8, _, _, 0x2), Op.AND),
    ((0x8, _, _, 0x3), Op.XOR),
    ((0x8, _, _, 0x4), Op.ADD),
    ((0x8, _, _, 0x5), Op.SUB),
    ((0x8, _, _, 0x6), Op.SHR),
    ((0x8, _, _, 0x7), Op.SUBN),
    ((0x8, _, _, 0xE), Op.SHL),

    ((0x9, _, _, 0x0), Op.SNE_VX_VY),
    ((0xA, _, _, _), Op.LD_I),
    ((0xB, _, _, _), Op.JP_V0),
    ((0xC, _, _, _), Op.RND),
    ((0xD, _, _, _), Op.DRW),

    ((0xE, _, 0x9, 0xE), Op.SKP),
    ((0xE, _, 0xA, 0x1), Op.SKNP),

    ((0xF, _, 0x0, 0x7), Op.LD_VX_DT),
    ((0xF, _, 0x0, 0xA), Op.WAITKEY),
    ((0xF, _, 0x1, 0x5), Op.LD_DT_VX),
    ((0xF, _, 0x1, 0x8), Op.LD_ST_VX),
    ((0xF, _, 0x1, 0xE), Op.ADD_I_VX),
    ((0xF, _, 0x2, 0x9), Op.FONT),
    ((0xF, _, 0x3, 0x3), Op.BCD),
    ((0xF, _, 0x5, 0x5), Op.STORE),
    ((0xF, _, 0x6, 0x5), Op.LOAD),
]


class Instruction(namedtuple("Instruction", "op x y n kk nnn")):
    """A decoded opcode together with all of its operand fields."""

    __slots__ = ()

    @classmethod
    def from_nibbles(cls, op, nibbles):
        _, b, c, d = nibbles
        return cls(op, b, c, d, (c << 4) | d, (b << 8) | (c << 4) | d)


def matches(pattern, nibbles):
    for p, n in zip(pattern, nibbles):
        if p is None:
            continue
        if isinstance(p, frozenset):
            if n not in p:
                return False
        elif p != n:
            return False
    return True


def decode(nibbles, address=None):
    """Decode a 4-nibble opcode. Raises UnknownOpcodeError when no pattern matches."""
    nibbles = tuple(nibbles)
    for pattern, op in PATTERNS:
        if matches(pattern, nibbles):
            return Instruction.from_nibbles(op, nibbles)
    raise UnknownOpcodeError(merge_u16(*nibbles), address)
