import abc
import logging
from collections import deque
from typing import Iterable, NamedTuple, Optional

from chip8.config import NUM_KEYS
from chip8.errors import InvalidKeyError

log = logging.getLogger(__name__)


class KeyEvent(NamedTuple):
    key: int
    pressed: bool = True


def _check_key(key):
    if not 0 <= key < NUM_KEYS:
        raise InvalidKeyError(key)


def _as_events(batch):
    return [e if isinstance(e, KeyEvent) else KeyEvent(e) for e in batch]


# ******************** BACKENDS
class KeypadBackend(abc.ABC):
    """source of raw key events for a Keypad

    ``poll`` returns whatever happened since the previous call. A backend
    that can't read its device raises InputBackendError; having nothing to
    report is just an empty result.
    """

    @abc.abstractmethod
    def poll(self) -> Iterable[KeyEvent]:
        ...


class HeadlessBackend(KeypadBackend):
    """never reports anything, for running ROMs without a keyboard"""

    def poll(self):
        return ()


class ScriptedBackend(KeypadBackend):
    """replays a fixed sequence of event batches, one batch per poll

    Used by tests to reproduce key-wait scenarios exactly.
    """

    def __init__(self, batches=()):
        self.batches = deque(_as_events(batch) for batch in batches)

    def __repr__(self):
        return f"ScriptedBackend(pending={len(self.batches)})"

    def push(self, *events):
        """queue one more batch, bare ints count as presses"""
        self.batches.append(_as_events(events))

    def poll(self):
        if not self.batches:
            return ()
        return self.batches.popleft()


# ******************** KEYPAD
class Keypad:
    """16 key hex keypad: a FIFO of presses plus a held-down table"""

    def __init__(self, backend=None):
        self.backend = backend if backend is not None else HeadlessBackend()
        self.pressed_keys = deque()
        self.held = [False] * NUM_KEYS
        self._presses = [0] * NUM_KEYS

    def __str__(self):
        held = " ".join(f"{k:X}" for k in self.held_keys()) or "-"
        return f"HELD:{held} | QUEUED:{len(self.pressed_keys)}"

    def update(self) -> None:
        """pull fresh events from the backend"""
        for event in self.backend.poll():
            log.debug("key 0x%x %s", event.key, "down" if event.pressed else "up")
            # backends aren't trusted to stay in 0-F, only the low nibble counts
            key = event.key & 0xF
            if event.pressed:
                self.press(key)
            else:
                self.release(key)

    def press(self, key: int) -> None:
        _check_key(key)
        self.held[key] = True
        self.pressed_keys.append(key)
        self._presses[key] += 1

    def release(self, key: int) -> None:
        _check_key(key)
        self.held[key] = False

    def try_get_key_press(self) -> Optional[int]:
        """get first button pressed present in the queue, None if there's none"""
        if not self.pressed_keys:
            return None
        return self.pressed_keys.popleft()

    def is_key_down(self, key: int) -> bool:
        _check_key(key)
        return self.held[key]

    def held_keys(self):
        return [k for k, down in enumerate(self.held) if down]

    def clear(self):
        self.pressed_keys.clear()
        self.held = [False] * NUM_KEYS

    @property
    def activity(self):
        """presses seen per key, diagnostics only"""
        return tuple(self._presses)
