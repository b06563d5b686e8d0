from __future__ import annotations

"""
Engine entry point: owns the pygame loop.

The loop turns key presses into Game calls and redraws; all rules live in
the turn engine. Moves closer together than ``cfg.move_delay_ms`` are
dropped here so a held key cannot fire several turns at once.
"""

import logging

import pygame

from gardenmystery import config
from gardenmystery.game import Game
from gardenmystery.render.ascii import AsciiRenderer
from gardenmystery.scenes.game_input import GameCommand, GameInput

log = logging.getLogger(__name__)


class Engine:
    def __init__(self, cfg: config.GameConfig, game: Game | None = None) -> None:
        pygame.init()
        self.cfg = cfg
        self.game = game or Game(cfg)
        self.renderer = AsciiRenderer(cfg.view_width, cfg.view_height, cfg.tile_size)
        self.input = GameInput()
        self.clock = pygame.time.Clock()
        self.running = False
        self.last_move_ms = -cfg.move_delay_ms

    def handle(self, cmd: GameCommand, now_ms: int) -> None:
        game = self.game
        if cmd.kind == "escape":
            self.running = False
        elif cmd.kind == "toggle_fullscreen":
            self.renderer.toggle_fullscreen()
        elif cmd.kind == "move" and cmd.vector is not None:
            if now_ms - self.last_move_ms < self.cfg.move_delay_ms:
                return
            if game.move(cmd.vector):
                self.last_move_ms = now_ms
                self.renderer.note_turn(game, now_ms)
        elif cmd.kind in ("yarn", "toy"):
            if game.use_item(cmd.kind):
                self.renderer.note_turn(game, now_ms)
        elif cmd.kind == "sniff":
            game.set_sniffing(True)
        elif cmd.kind == "sniff_end":
            game.set_sniffing(False)
        elif cmd.kind == "restart":
            game.restart()
        elif cmd.kind == "next_level" and game.won:
            game.next_level()

    def run(self) -> None:
        if self.game.state is None:
            self.game.start_level(0)
        self.running = True
        log.info("engine loop started")
        try:
            while self.running:
                now = pygame.time.get_ticks()
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN:
                        for cmd in self.input.handle_keydown(event):
                            self.handle(cmd, now)
                    elif event.type == pygame.KEYUP:
                        for cmd in self.input.handle_keyup(event):
                            self.handle(cmd, now)
                self.renderer.draw(self.game, now)
                self.clock.tick(60)
        finally:
            self.renderer.teardown()
