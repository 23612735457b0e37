"""pygame display and keyboard collaborators for the run loop."""

import numpy as np
import pygame

from chip8vm.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chip8vm.machine import InputSample
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme

# Hex keypad laid over the left of a QWERTY keyboard:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  <-  Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


class PygameDisplay:
    """Window that shows the framebuffer scaled up."""

    def __init__(self, scale: int = 8, color_scheme: str = "classic",
                 caption: str = "CHIP-8"):
        pygame.init()
        self.scale = scale
        self.on_color, self.off_color = create_color_scheme(color_scheme)
        self.screen = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
        pygame.display.set_caption(caption)
        self.screen.fill(self.off_color)
        pygame.display.flip()

    def draw(self, framebuffer):
        rgb = chip8_display_to_rgb(framebuffer, self.scale, self.on_color, self.off_color)
        # surfarray expects (width, height, 3)
        surface = pygame.surfarray.make_surface(np.ascontiguousarray(rgb.swapaxes(0, 1)))
        self.screen.blit(surface, (0, 0))
        pygame.display.flip()

    def close(self):
        pygame.quit()


class PygameInput:
    """Reports the most recent mapped key-down since the last poll."""

    def poll(self) -> InputSample:
        key = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return InputSample(quit=True)
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return InputSample(quit=True)
                if event.key in KEY_MAP:
                    key = KEY_MAP[event.key]
        return InputSample(key=key)
