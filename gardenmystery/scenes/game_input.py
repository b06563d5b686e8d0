from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from copy import deepcopy

import pygame

MOD_MASK = pygame.KMOD_SHIFT | pygame.KMOD_CTRL | pygame.KMOD_ALT


def encode_keybinding(keycode: int, mods: int = 0) -> int:
    """
    Encode a key + modifiers into a single int so bindings can distinguish combos.
    """
    return int(keycode) | ((int(mods) & MOD_MASK) << 16)


# Single-key commands (non-movement).
DEFAULT_BINDINGS: Dict[str, List[int]] = {
    "escape": [encode_keybinding(pygame.K_ESCAPE)],
    "toggle_fullscreen": [encode_keybinding(pygame.K_F11)],
    "yarn": [encode_keybinding(pygame.K_1), encode_keybinding(pygame.K_KP1)],
    "toy": [encode_keybinding(pygame.K_2), encode_keybinding(pygame.K_KP2)],
    "sniff": [encode_keybinding(pygame.K_SPACE)],
    "restart": [encode_keybinding(pygame.K_r)],
    "next_level": [encode_keybinding(pygame.K_n), encode_keybinding(pygame.K_RETURN)],
}

# Movement bindings (keycode -> (dx, dy)); four directions only.
DEFAULT_MOVE_BINDINGS: Dict[int, Tuple[int, int]] = {
    encode_keybinding(pygame.K_UP): (0, -1),
    encode_keybinding(pygame.K_DOWN): (0, 1),
    encode_keybinding(pygame.K_LEFT): (-1, 0),
    encode_keybinding(pygame.K_RIGHT): (1, 0),
    encode_keybinding(pygame.K_w): (0, -1),
    encode_keybinding(pygame.K_s): (0, 1),
    encode_keybinding(pygame.K_a): (-1, 0),
    encode_keybinding(pygame.K_d): (1, 0),
}


@dataclass
class GameCommand:
    """Logical game command produced from raw keyboard input."""
    kind: str
    vector: Optional[Tuple[int, int]] = None
    raw_key: Optional[int] = None


class GameInput:
    """
    Maps pygame key events to abstract commands. It knows nothing about
    the game state; the engine decides what a command means right now.
    """

    def __init__(
        self,
        *,
        bindings: Optional[Dict[str, Iterable[int]]] = None,
        move_bindings: Optional[Dict[int, Tuple[int, int]]] = None,
    ) -> None:
        self.bindings: Dict[str, List[int]] = deepcopy(DEFAULT_BINDINGS)
        self.move_bindings: Dict[int, Tuple[int, int]] = deepcopy(DEFAULT_MOVE_BINDINGS)
        # raw key that started the current sniff
        self._sniff_key: Optional[int] = None
        if bindings:
            for k, vals in bindings.items():
                self.bindings[k] = list(vals)
        if move_bindings:
            for k, v in move_bindings.items():
                self.move_bindings[int(k)] = (int(v[0]), int(v[1]))

    def _command_for(self, combined: int) -> Optional[str]:
        for kind, codes in self.bindings.items():
            if combined in codes:
                return kind
        return None

    def handle_keydown(self, event: pygame.event.Event) -> List[GameCommand]:
        key = event.key
        combined = encode_keybinding(key, getattr(event, "mod", 0))

        kind = self._command_for(combined)
        if kind is not None:
            if kind == "sniff":
                self._sniff_key = key
            return [GameCommand(kind, raw_key=key)]
        if combined in self.move_bindings:
            return [GameCommand("move", vector=self.move_bindings[combined], raw_key=key)]
        return []

    def handle_keyup(self, event: pygame.event.Event) -> List[GameCommand]:
        # only sniffing is held; everything else fires on press.
        # Match the bare key: modifiers may have changed since the press.
        if self._sniff_key is not None and event.key == self._sniff_key:
            self._sniff_key = None
            return [GameCommand("sniff_end", raw_key=event.key)]
        return []
