
"""
Rendering helpers for the Tetris front-end.

Optimizations:
- Pre-render block cell Surfaces per color (solid + ghost outline) and blit them.
- Pre-render static background (grid + panel frame + preview frames) once per Dims.
- Cache HUD text and preview surfaces; re-render only when values change.

The renderer only ever reads a Snapshot; it never touches the session.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Tuple, Optional
from tetris_layout import Dims
from tetris_piece import Color, Piece
from tetris_session import Snapshot, Status

COLORS: Dict[Color, Tuple[int,int,int]] = {
    Color.RED: (255,102,119),
    Color.CYAN: (102,224,255),
    Color.YELLOW: (255,224,102),
    Color.GREEN: (94,224,142),
}
GHOST_COLOR = (220,225,240)
TEXT = (200,210,240)

@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    next_piece: Optional[Piece] = None
    held_piece: Optional[Piece] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    next_s: Optional[pygame.Surface] = None
    held_s: Optional[pygame.Surface] = None

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(d.cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(d.rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        # Next + Hold preview frames, 4x4 cells each
        self.next_pos = (d.panel_x + 12, d.panel_y + 150)
        self.held_pos = (d.panel_x + 12, d.panel_y + 150 + d.preview_cell*4 + 48)
        for (px, py) in (self.next_pos, self.held_pos):
            frame = pygame.Rect(px-6, py-6, d.preview_cell*4+12, d.preview_cell*4+12)
            pygame.draw.rect(self.bg, (15,18,40), frame)
            pygame.draw.rect(self.bg, (55,65,110), frame, 1)
        self.controls = [
            self.font.render(line, True, (165,175,215)) for line in (
                "←/→ Move  ↓ Soft drop", "Space Hard drop", "X/↑ Rot CW  Z Rot CCW",
                "C Hold  < Fast shift", "Enter Start  R Restart", "Q Quit  F1 Overlay",
            )
        ]

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[Color, pygame.Surface] = {}
        c = self.dims.cell
        for color, rgb in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(rgb)
            self.cell_surf[color] = s
        self.ghost_surf = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
        pygame.draw.rect(self.ghost_surf, GHOST_COLOR, (0,0,c-8,c-8), 2)

    # ---------- Previews ----------
    def _preview(self, piece: Piece) -> pygame.Surface:
        pc = self.dims.preview_cell
        s = pygame.Surface((pc*4, pc*4), pygame.SRCALPHA)
        if piece.is_none:
            return s
        block = pygame.Surface((pc-2, pc-2))
        block.fill(COLORS[piece.color])
        for c, r in piece.cells():
            # offsets span columns -1..1 and rows 1..4
            s.blit(block, ((c+1)*pc + 1, (r-1)*pc + 1))
        return s

    # ---------- HUD / Panel ----------
    def draw_panel_hud(self, screen: pygame.Surface, snap: Snapshot):
        d = self.dims
        f = self.font
        if snap.score != self.hud.score:
            self.hud.score = snap.score
            self.hud.score_s = f.render(f"Score: {snap.score}", True, TEXT)
        if snap.level != self.hud.level:
            self.hud.level = snap.level
            self.hud.level_s = f.render(f"Level: {snap.level}", True, TEXT)
        if snap.lines != self.hud.lines:
            self.hud.lines = snap.lines
            self.hud.lines_s = f.render(f"Lines: {snap.lines}", True, TEXT)
        if snap.next_piece != self.hud.next_piece:
            self.hud.next_piece = snap.next_piece
            self.hud.next_s = self._preview(snap.next_piece)
        if snap.held_piece != self.hud.held_piece:
            self.hud.held_piece = snap.held_piece
            self.hud.held_s = self._preview(snap.held_piece)
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(f.render("Next:", True, TEXT), (d.panel_x + 12, d.panel_y + 126))
        screen.blit(self.hud.next_s, self.next_pos)
        screen.blit(f.render("Hold:", True, TEXT), (self.held_pos[0], self.held_pos[1] - 24))
        screen.blit(self.hud.held_s, self.held_pos)
        y = d.panel_y + d.board_h - 20*len(self.controls) - 8
        for surf in self.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20

    # ---------- Whole frame ----------
    def draw(self, screen: pygame.Surface, snap: Snapshot):
        screen.blit(self.bg, (0,0))
        active = set(snap.active)
        for r, row in enumerate(snap.grid, start=1):
            for c, color in enumerate(row, start=1):
                if color is not None and (c, r) not in active:
                    screen.blit(self.cell_surf[color], self.dims.cell_topleft(c, r))
        for (c, r) in snap.ghost:
            if (c, r) not in active:
                screen.blit(self.ghost_surf, self.dims.cell_topleft(c, r, 4))
        for (c, r) in snap.active:
            screen.blit(self.cell_surf[snap.active_color], self.dims.cell_topleft(c, r))
        self.draw_panel_hud(screen, snap)
        if snap.status is Status.IDLE:
            self._banner(screen, "Press Enter to start")
        elif snap.status is Status.GAME_OVER:
            self._banner(screen, "GAME OVER (R to Restart)")

    def _banner(self, screen: pygame.Surface, text: str):
        d = self.dims
        msg = self.big_font.render(text, True, (255,220,220))
        rect = msg.get_rect(center=(d.board_x + d.board_w // 2, d.board_y + d.board_h // 2))
        screen.blit(msg, rect)
