from pyglet.window import key

from .constants import WIDTH, HEIGHT

# ---- Configuration ----
scale = 10
width, height = WIDTH, HEIGHT
window_width, window_height = width * scale, height * scale
caption = "CHIP-8 Emulator"
pixel_color = (255, 255, 255, 255)
cycle_hz = 60  # one VM cycle per frame

#map binding keys
keymap = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}

quit_key = key.ESCAPE
log_toggle_key = key.F1
