# pyglet front end: window, key latch, rendering and frame pacing.

import pyglet

from . import config
from .constants import NUM_KEYS
from .driver import FrameDriver
from .errors import Chip8Error
from .log import toggle_logs


class Chip8Window(pyglet.window.Window):

    def __init__(self, vm):
        super().__init__(config.window_width, config.window_height,
                         caption=config.caption, resizable=False)
        self.vm = vm
        self.driver = FrameDriver(vm)
        self.key_inputs = [False] * NUM_KEYS
        self.error = None

        # Pre-create a pixel sprite for drawing
        self.pixel = pyglet.image.SolidColorImagePattern(config.pixel_color).create_image(
            config.scale, config.scale)

        pyglet.clock.schedule_interval(self.tick, 1.0 / config.cycle_hz)

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol == config.quit_key:
            self.close()
        if symbol in config.keymap:
            self.key_inputs[config.keymap[symbol]] = True
        if symbol == config.log_toggle_key:
            toggle_logs()

    def on_key_release(self, symbol, modifiers):
        if symbol in config.keymap:
            self.key_inputs[config.keymap[symbol]] = False

    # ---- CPU cycle ----
    def tick(self, dt):
        if self.error is not None:
            return
        try:
            self.driver.frame(self.key_inputs)
        except Chip8Error as e:
            print("Emulation error:", e)
            self.error = e
            self.close()

    # ---- Drawing ----
    def on_draw(self):
        self.clear()
        for x, y in self.vm.gfx.lit():
            # pyglet's origin is bottom left, row 0 of the framebuffer is the top
            self.pixel.blit(x * config.scale, (config.height - 1 - y) * config.scale)

    def close(self):
        pyglet.clock.unschedule(self.tick)
        super().close()
