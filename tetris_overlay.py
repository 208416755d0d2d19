
"""F1 tuning panel: numeric CONFIG entries stepped within fixed bounds"""
from dataclasses import dataclass
from typing import List
import pygame
from tetris_config import CONFIG

@dataclass(frozen=True)
class Setting:
    key: str
    label: str
    lo: int
    hi: int
    step: int
    next_game: bool = False   # read when a Session is built, not every frame

SETTINGS: List[Setting] = [
    Setting("DAS_MS", "DAS (ms)", 0, 400, 10),
    Setting("ARR_MS", "ARR (ms, 0=every frame)", 0, 200, 5),
    Setting("LOCK_DELAY_MS", "Lock delay (ms)", 100, 3000, 50, True),
    Setting("SPEED_UNIT_MS", "Level 1 gravity (ms)", 200, 3000, 50, True),
    Setting("MAX_SPEED_LEVEL", "Speed cap (level)", 1, 40, 1, True),
]

class Overlay:
    def __init__(self, settings: List[Setting] = SETTINGS):
        self.settings = settings
        self.active = False
        self.index = 0

    @property
    def selected(self) -> Setting:
        return self.settings[self.index]

    def toggle(self):
        self.active = not self.active

    def adjust(self, direction: int):
        s = self.selected
        CONFIG[s.key] = min(s.hi, max(s.lo, CONFIG[s.key] + direction * s.step))

    def handle(self, e):
        if e.key in (pygame.K_ESCAPE, pygame.K_F1):
            self.toggle()
        elif e.key in (pygame.K_UP, pygame.K_DOWN):
            self.index = (self.index + (1 if e.key == pygame.K_DOWN else -1)) % len(self.settings)
        elif e.key in (pygame.K_LEFT, pygame.K_RIGHT):
            self.adjust(1 if e.key == pygame.K_RIGHT else -1)

    def lines(self) -> List[str]:
        out = []
        for s in self.settings:
            mark = "*" if s.next_game else ""
            out.append(f"{s.label}{mark}: {CONFIG[s.key]}")
        return out

    def draw(self, screen, font, w, h):
        if not self.active:
            return
        panel = pygame.Surface((w - 80, h - 80), pygame.SRCALPHA)
        panel.fill((20, 25, 40, 230))
        screen.blit(panel, (40, 40))
        screen.blit(font.render("↑/↓ select  ←/→ adjust  * applies on R", True, (230, 240, 255)), (60, 60))
        for i, text in enumerate(self.lines()):
            col = (255, 255, 255) if i == self.index else (200, 210, 235)
            screen.blit(font.render(text, True, col), (60, 100 + 30 * i))
