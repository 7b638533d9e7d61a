"""Capability interfaces the CPU talks to.

Any object with these methods can be handed to ``CPU.step``; the concrete
``Memory``, ``Display`` and ``Keypad`` classes are one implementation each.
"""
from typing import Optional, Protocol, Sequence


class MemoryBus(Protocol):
    def read_byte(self, address: int) -> int: ...

    def write_byte(self, address: int, value: int) -> None: ...

    def read_word(self, address: int) -> int: ...


class DisplayBus(Protocol):
    def clear(self) -> None: ...

    def draw_sprite(self, x: int, y: int, sprite: Sequence[int]) -> bool: ...

    def get_pixel(self, x: int, y: int) -> bool: ...

    def set_pixel(self, x: int, y: int, on: bool) -> None: ...


class InputBus(Protocol):
    def update(self) -> None: ...

    def try_get_key_press(self) -> Optional[int]: ...

    def is_key_down(self, key: int) -> bool: ...
