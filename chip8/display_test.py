import unittest

from chip8.display import Display


class TestDrawing(unittest.TestCase):
    def setUp(self):
        self.screen = Display()

    def test_clear(self):
        self.screen.set_pixel(3, 4, True)
        self.screen.clear()
        self.assertFalse(any(self.screen.get_pixel(x, y)
                             for y in range(32) for x in range(64)))

    def test_wraparound_and_collision(self):
        self.assertFalse(self.screen.draw_sprite(60, 0, [0xFF]))
        lit = [x for x in range(64) if self.screen.get_pixel(x, 0)]
        self.assertEqual(lit, [0, 1, 2, 3, 60, 61, 62, 63])
        self.assertTrue(self.screen.draw_sprite(60, 0, [0xFF]))
        self.assertEqual(self.screen.pixels_on, 0)

    def test_vertical_wraparound(self):
        self.screen.draw_sprite(0, 31, [0x80, 0x80])
        self.assertTrue(self.screen.get_pixel(0, 31))
        self.assertTrue(self.screen.get_pixel(0, 0))

    def test_msb_is_leftmost(self):
        self.screen.draw_sprite(10, 5, [0b10000001])
        self.assertTrue(self.screen.get_pixel(10, 5))
        self.assertFalse(self.screen.get_pixel(11, 5))
        self.assertTrue(self.screen.get_pixel(17, 5))

    def test_zero_bits_never_collide(self):
        self.screen.draw_sprite(0, 0, [0xF0])
        self.assertFalse(self.screen.draw_sprite(0, 0, [0x0F]))
        self.assertEqual(self.screen.pixels_on, 8)

    def test_empty_sprite(self):
        self.assertFalse(self.screen.draw_sprite(0, 0, b""))
        self.assertEqual(self.screen.pixels_on, 0)

    def test_pixel_bounds(self):
        with self.assertRaises(IndexError):
            self.screen.get_pixel(64, 0)
        with self.assertRaises(IndexError):
            self.screen.set_pixel(0, 32, True)


class TestSnapshots(unittest.TestCase):
    def test_render(self):
        screen = Display()
        screen.set_pixel(1, 0, True)
        first_row = screen.render(on="#", off=".", pixel_width=2).split("\n")[0]
        self.assertEqual(first_row[:6], "..##..")
        self.assertEqual(len(first_row), 128)

    def test_stats_and_rows(self):
        screen = Display()
        screen.set_pixel(2, 2, True)
        self.assertEqual(screen.stats(), (64, 32, 1, 2048))
        self.assertTrue(screen.rows()[2][2])


if __name__ == "__main__":
    unittest.main()
