from typing import NamedTuple, Sequence

from chip8.config import PIXEL_OFF, PIXEL_ON, SCREEN_HEIGHT, SCREEN_WIDTH, SPRITE_WIDTH


class DisplayStats(NamedTuple):
    width: int
    height: int
    pixels_on: int
    pixels_total: int


class Display:
    """64x32 monochrome framebuffer, one 0/1 byte per pixel"""

    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT):
        self.w, self.h = w, h
        self.buffer = [bytearray(w) for _ in range(h)]

    def __str__(self):
        return self.render()

    def render(self, on=PIXEL_ON, off=PIXEL_OFF, pixel_width=1):
        """text dump of the framebuffer, for debugging and headless presentation"""
        on, off = on * pixel_width, off * pixel_width
        return "\n".join("".join(on if p else off for p in row) for row in self.buffer)

    def _check(self, x, y):
        if not (0 <= x < self.w and 0 <= y < self.h):
            raise IndexError(f"Pixel ({x}, {y}) is outside the {self.w}x{self.h} display")

    def get_pixel(self, x: int, y: int) -> bool:
        """return True if pixel is ON, return False if pixel is OFF"""
        self._check(x, y)
        return self.buffer[y][x] == 1

    def set_pixel(self, x: int, y: int, on: bool) -> None:
        self._check(x, y)
        self.buffer[y][x] = 1 if on else 0

    def clear(self) -> None:
        for row in self.buffer:
            row[:] = bytes(self.w)

    def draw_sprite(self, x: int, y: int, sprite: Sequence[int]) -> bool:
        """XOR an 8 pixel wide sprite onto the screen at (x, y)

        Both axes wrap around independently. Returns True if any pixel that
        was ON got switched OFF (collision).
        """
        collision = False
        # step through each sprite byte, one row each
        for i, sprite_byte in enumerate(sprite):
            y_coordinate = (y + i) % self.h
            row = self.buffer[y_coordinate]
            for j in range(SPRITE_WIDTH):     # most significant bit first
                if not (sprite_byte >> (SPRITE_WIDTH - 1 - j)) & 0x1:
                    continue
                x_coordinate = (x + j) % self.w
                # the only case when a pixel gets erased is when it was ON and is turned ON again
                if row[x_coordinate]:
                    collision = True
                row[x_coordinate] ^= 1
        return collision

    def rows(self):
        """read-only snapshot of the framebuffer as tuples of booleans"""
        return tuple(tuple(p == 1 for p in row) for row in self.buffer)

    @property
    def pixels_on(self):
        return sum(sum(row) for row in self.buffer)

    def stats(self) -> DisplayStats:
        return DisplayStats(self.w, self.h, self.pixels_on, self.w * self.h)
