import sys

from .errors import Chip8Error
from .vm import Chip8


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) < 1:
        print("Usage: python -m chip8vm <rom-file>")
        return 1

    vm = Chip8()
    try:
        vm.initialize()
        vm.load_program(argv[0])
    except (Chip8Error, OSError) as e:
        print("Emulation error:", e)
        return 1

    # imported late so the core runs without a display
    import pyglet
    from .window import Chip8Window

    window = Chip8Window(vm)
    pyglet.app.run()
    return 1 if window.error is not None else 0


if __name__ == "__main__":
    sys.exit(main())
