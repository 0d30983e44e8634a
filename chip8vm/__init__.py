from .errors import (Chip8Error, UnknownOpcodeError, ProgramTooLargeError, AddressError,
                     StackOverflowError, StackUnderflowError, NotRunningError)
from .opcodes import Op, Instruction, decode
from .vm import Chip8, VMState
from .driver import FrameDriver

__version__ = "0.1.0"
