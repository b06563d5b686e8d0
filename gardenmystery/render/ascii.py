"""Pygame-based ASCII-style renderer for the garden."""
import pygame
from typing import Dict, List, Tuple

from gardenmystery.game import Game
from gardenmystery.state.actors import ALERT, CHASE, SLEEP
from gardenmystery.state.entities import TOY, TREAT, YARN
from gardenmystery.state.world import EXIT, GRASS, PATH, WALL, WATER

Color = Tuple[int, int, int]

TILE_STYLE: Dict[str, Tuple[str, Color, Color]] = {
    # glyph, fg, bg
    WALL: ("#", (60, 120, 60), (30, 60, 30)),
    PATH: (".", (170, 150, 110), (235, 222, 190)),
    GRASS: (",", (40, 140, 40), (150, 200, 120)),
    WATER: ("~", (200, 230, 255), (70, 130, 200)),
    EXIT: ("E", (90, 60, 30), (235, 222, 190)),
}
ITEM_STYLE: Dict[str, Tuple[str, Color]] = {
    TREAT: ("T", (140, 90, 40)),
    YARN: ("Y", (230, 90, 120)),
    TOY: ("S", (220, 180, 40)),
}
CAT_COLORS: Dict[str, Color] = {
    CHASE: (170, 30, 30),
    ALERT: (220, 120, 20),
    SLEEP: (90, 110, 180),
}
EFFECT_TTL_MS = 800
SHAKE_MS = 500


class AsciiRenderer:
    def __init__(self, width: int, height: int, tile: int) -> None:
        pygame.init()
        self.width = width
        self.height = height
        self.tile = tile
        self.display = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Pugly's Garden Mystery")
        self.surface = pygame.Surface((width, height))
        self.map_font = pygame.font.Font(None, tile)
        self.font = pygame.font.Font(None, 26)
        self.small_font = pygame.font.Font(None, 20)
        self.bg = (60, 45, 30)
        self.ink = (40, 30, 20)
        self.paper = (245, 236, 215)
        self.player_color = (120, 80, 40)
        self.cat_color = (90, 90, 90)
        self.hud_height = 96
        # transient effects: (kind, pos, created_ms)
        self.effects: List[Tuple[str, Tuple[int, int], int]] = []
        self.shake_until_ms = 0

    def note_turn(self, game: Game, now_ms: int) -> None:
        """Pick up presentation hints from the last accepted turn."""
        result = game.last_result
        if result is None:
            return
        for kind, pos in result.effects:
            self.effects.append((kind, pos, now_ms))
        if result.disturbance:
            self.shake_until_ms = now_ms + SHAKE_MS

    def _glyph(self, ch: str, color: Color, font, center: Tuple[int, int]) -> None:
        img = font.render(ch, True, color)
        self.surface.blit(img, img.get_rect(center=center))

    def draw(self, game: Game, now_ms: int) -> None:
        self.surface.fill(self.bg)
        state = game.state
        if state is None:
            self._present()
            return

        self.effects = [e for e in self.effects if now_ms - e[2] < EFFECT_TTL_MS]
        t = self.tile
        ox = (self.width - state.world.width * t) // 2
        oy = self.hud_height + 8
        if now_ms < self.shake_until_ms:
            ox += 4 if (now_ms // 50) % 2 else -4

        def cell(pos: Tuple[int, int]) -> pygame.Rect:
            return pygame.Rect(ox + pos[0] * t, oy + pos[1] * t, t, t)

        for y in range(state.world.height):
            for x in range(state.world.width):
                ch, fg, bg = TILE_STYLE[state.world.tile_at((x, y))]
                rect = cell((x, y))
                pygame.draw.rect(self.surface, bg, rect)
                self._glyph(ch, fg, self.map_font, rect.center)

        for pos in game.scent_trail():
            pygame.draw.circle(self.surface, (240, 140, 190), cell(pos).center, t // 2, 2)

        for ent in state.items:
            if ent.collected:
                continue
            ch, color = ITEM_STYLE[ent.kind]
            self._glyph(ch, color, self.map_font, cell(ent.pos).center)

        for cat in state.cats:
            rect = cell(cat.pos)
            self._glyph("C", CAT_COLORS.get(cat.state, self.cat_color), self.map_font, rect.center)
            if cat.state == ALERT:
                self._glyph("!", (220, 120, 20), self.small_font, rect.topright)
            elif cat.state == SLEEP:
                self._glyph("z", (90, 110, 180), self.small_font, rect.topright)

        self._glyph("P", self.player_color, self.map_font, cell(state.player.pos).center)

        for kind, pos, _ in self.effects:
            color = (255, 230, 120) if kind == "sparkle" else (200, 190, 170)
            pygame.draw.circle(self.surface, color, cell(pos).center, t // 4)

        self._draw_hud(game)
        if state.over:
            self._draw_banner(game)
        self._present()

    def _draw_hud(self, game: Game) -> None:
        state = game.state
        rect = pygame.Rect(8, 8, self.width - 16, self.hud_height - 8)
        pygame.draw.rect(self.surface, self.paper, rect)
        pygame.draw.rect(self.surface, self.ink, rect, 2)
        lvl = game.level
        self.surface.blit(self.font.render(lvl.name, True, self.ink), (rect.x + 10, rect.y + 8))
        stats = (
            f"Treats left: {state.treats_left}   Yarn x{state.player.yarn} (1)"
            f"   Toys x{state.player.toys} (2)   Moves: {state.moves}   Par: {lvl.par_time}s"
        )
        self.surface.blit(self.small_font.render(stats, True, self.ink), (rect.x + 10, rect.y + 36))
        if game.moves_until_active > 0:
            status = f"Cats Asleep: {game.moves_until_active}"
        else:
            status = "SNIFFING..." if game.sniffing else "HOLD SPACE TO SNIFF"
        self.surface.blit(self.small_font.render(status, True, self.ink), (rect.right - 200, rect.y + 10))
        for line in game.log.tail(1):
            self.surface.blit(self.small_font.render(line, True, (140, 90, 20)), (rect.x + 10, rect.y + 60))

    def _draw_banner(self, game: Game) -> None:
        if game.won:
            title = "Delicious Victory!"
            hint = "N: next garden" if game.has_next_level else "You completed all gardens!"
        else:
            title = "Caught!"
            hint = "R: try again"
        box = pygame.Rect(0, 0, 420, 120)
        box.center = (self.width // 2, self.height // 2)
        pygame.draw.rect(self.surface, self.paper, box)
        pygame.draw.rect(self.surface, self.ink, box, 4)
        self._glyph(title, self.ink, self.font, (box.centerx, box.y + 40))
        self._glyph(hint, self.ink, self.small_font, (box.centerx, box.y + 80))

    def _present(self) -> None:
        self.display.blit(self.surface, (0, 0))
        pygame.display.flip()

    def toggle_fullscreen(self) -> None:
        flags = self.display.get_flags()
        if flags & pygame.FULLSCREEN:
            self.display = pygame.display.set_mode((self.width, self.height))
        else:
            self.display = pygame.display.set_mode((self.width, self.height), pygame.FULLSCREEN)

    def teardown(self) -> None:
        pygame.quit()
