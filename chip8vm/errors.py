class Chip8Error(Exception):
    """Base class for every fatal interpreter condition."""


class UnknownOpcodeError(Chip8Error):
    def __init__(self, opcode, address=None):
        self.opcode = opcode
        self.address = address
        msg = f"Unknown opcode: {opcode:04X}"
        if address is not None:
            msg += f" at address 0x{address:03X}"
        super().__init__(msg)


class ProgramTooLargeError(Chip8Error):
    def __init__(self, size, limit):
        self.size = size
        self.limit = limit
        super().__init__(f"Program is {size} bytes, at most {limit} bytes fit in memory")


class AddressError(Chip8Error):
    def __init__(self, address):
        self.address = address
        super().__init__(f"Memory address out of bounds: 0x{address:X}")


class StackOverflowError(Chip8Error):
    pass


class StackUnderflowError(Chip8Error):
    pass


class NotRunningError(Chip8Error):
    pass
