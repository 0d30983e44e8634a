# Frame driver: the piece between the input collaborator and the VM.
# Once per frame it latches the key states, resolves a pending Fx0A and
# runs one cycle unless the VM is still waiting for a key.

from .constants import NUM_KEYS
from .log import log


class FrameDriver:

    def __init__(self, vm):
        self.vm = vm
        self.frames = 0

    def update_keys(self, states):
        """Latch 16 key states. Returns the key that went down this frame, or None."""
        states = [bool(s) for s in states]
        if len(states) != NUM_KEYS:
            raise ValueError(f"expected {NUM_KEYS} key states, got {len(states)}")

        keyboard = self.vm.keyboard
        pressed = None
        for i, down in enumerate(states):
            if down and not keyboard[i]:
                pressed = i
        keyboard.set_all(states)

        if keyboard.waiting_for_keyboard and pressed is not None:
            keyboard.waiting_for_keyboard = False
            self.vm.regs.V[keyboard.keyboard_register] = pressed
            log(f"Key {pressed:X} -> V{keyboard.keyboard_register:X}")
        return pressed

    def step(self):
        if self.vm.waiting_for_keyboard:
            return False
        self.vm.cycle()
        self.frames += 1
        return True

    def frame(self, states):
        self.update_keys(states)
        return self.step()
