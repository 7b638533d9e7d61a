import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame

from chip8.config import KEY_LAYOUT
from chip8.errors import InputBackendError
from chip8.keypad import KeyEvent, KeypadBackend


KEY_MAPPINGS = {getattr(pygame, f"K_{char}"): key for char, key in KEY_LAYOUT.items()}


class PygameBackend(KeypadBackend):
    """reads the keyboard through the pygame event queue

    pygame must be initialised (and a window open) by whoever drives the
    emulator; only KEYDOWN/KEYUP events are taken off the queue.
    """

    def __init__(self, mappings=None):
        self.mappings = dict(KEY_MAPPINGS if mappings is None else mappings)

    def translate(self, event):
        """map a pygame key event to a KeyEvent, None for anything unmapped"""
        if event.type not in (pygame.KEYDOWN, pygame.KEYUP):
            return None
        key = self.mappings.get(event.key)
        if key is None:
            return None
        return KeyEvent(key, event.type == pygame.KEYDOWN)

    def poll(self):
        try:
            events = pygame.event.get(eventtype=(pygame.KEYDOWN, pygame.KEYUP))
        except pygame.error as e:
            raise InputBackendError(f"could not read pygame events: {e}") from e
        translated = (self.translate(event) for event in events)
        return [e for e in translated if e is not None]
