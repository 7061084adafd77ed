#!/usr/bin/env python3
"""
Grid Pathfinding Viewer — step-by-step A* / Dijkstra on an editable grid

- Keyboard:
    [SPACE]      -> run/pause (restarts once the search is over)
    [N]          -> single step
    [I]          -> instant: run to completion
    [R]          -> reset
    [+]/[-]      -> steps/sec
    arrows       -> add/remove rows (up/down) and columns (right/left)
    [S]/[E]      -> move start/end to the cell under the mouse
    [A]/[D]      -> select algorithm (A* / Dijkstra)
    [G]          -> toggle g|h labels
    [Q]/[ESC]    -> quit
- Mouse:
    left drag    -> draw walls
    right drag   -> erase walls

Settings: GRIDSTAR_* env vars or --key=value (see gridstar.app.config).
"""

import logging
import sys
from typing import List, Optional

import pygame

from gridstar.app.config import Settings, resolve_settings
from gridstar.app.session import Session
from gridstar.core.types import GridConfigError, Position

# ---------- Config ----------
PANEL_W = 280
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255, 255, 255)
BLACK       = (  0,   0,   0)
GRAY        = (110, 110, 120)
BLUE        = ( 70, 130, 180)
RED         = (220,  50,  47)
FLOOR       = ( 28,  30,  38)
WALL        = (230, 230, 236)
VISITED     = ( 76,  76,  84)
FRONTIER    = (153, 153, 160)
NEON_MINT   = (  0, 255, 200)
CARD_BG     = ( 24,  28,  36, 220)
TEXT_LIGHT  = (230, 235, 240)
ACCENT_GOLD = (255, 210,   0)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        if self.active and self.togglable:
            bg = (58, 86, 160)
        elif self.hover:
            bg = (46, 50, 60)
        else:
            bg = (36, 40, 48)
        pygame.draw.rect(screen, bg, self.rect, border_radius=10)
        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255), self.rect, width=2, border_radius=10)
        text = font.render(self.label, True, (235, 238, 242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: Session, cell_size: int = 28):
        pygame.init()

        self.session = session
        self.cell_size = cell_size
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)
        self.show_state = False

        win_w = GRID_MARGIN * 2 + session.cols * cell_size + PANEL_W
        win_h = max(GRID_MARGIN * 2 + session.rows * cell_size, 480)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding")
        self.clock = pygame.time.Clock()

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Largest integer cell size that fits the grid left of the panel."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = max(4, min(avail_w // self.session.cols, avail_h // self.session.rows))
        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        panel_x = GRID_MARGIN * 2 + self.session.cols * self.cell_size
        self._panel = pygame.Rect(panel_x, 0, max(PANEL_W, win_w - panel_x), win_h)
        self._build_buttons()

    def _build_buttons(self):
        self._buttons.clear()
        x = self._panel.x + 16
        y = self._panel.y + 250  # leaves space for metrics card above
        w = self._panel.width - 32
        h, gap = 34, 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            nonlocal y
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)
            y += h + gap

        add("Run / Pause", self.session.toggle_run, togglable=True, store_as="btn_run")
        add("Step Once", self.session.step_once)
        add("Instant", self.session.run_instant)
        add("Reset", self.session.reset)
        add("Algo: A*", lambda: self._switch_algo("A*"), togglable=True, store_as="btn_algo_a")
        add("Algo: Dijkstra", lambda: self._switch_algo("Dijkstra"), togglable=True, store_as="btn_algo_d")
        self._refresh_active_states()

    def _refresh_active_states(self):
        self.btn_run.active = self.session.running
        self.btn_algo_a.active = self.session.selected_algo == "A*"
        self.btn_algo_d.active = self.session.selected_algo == "Dijkstra"

    # ---------- input ----------
    def _cell_at(self, px: int, py: int) -> Optional[Position]:
        ox, oy = self._grid_origin
        col = (px - ox) // self.cell_size
        row = (py - oy) // self.cell_size
        if 0 <= col < self.session.cols and 0 <= row < self.session.rows:
            return Position(col, row)
        return None

    def _switch_algo(self, label: str):
        self.session.switch_algo(label)
        self._refresh_active_states()

    def _resize_grid(self, d_rows: int, d_cols: int):
        self.session.resize(self.session.rows + d_rows, self.session.cols + d_cols)
        self._layout(*self.screen.get_size())

    def _handle_events(self) -> bool:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                return False
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    return False
                elif e.key == pygame.K_SPACE:
                    self.session.toggle_run()
                elif e.key == pygame.K_n:
                    self.session.step_once()
                elif e.key == pygame.K_i:
                    self.session.run_instant()
                elif e.key == pygame.K_r:
                    self.session.reset()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                    self.session.bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
                    self.session.bump_speed(-1)
                elif e.key == pygame.K_UP:
                    self._resize_grid(+1, 0)
                elif e.key == pygame.K_DOWN:
                    self._resize_grid(-1, 0)
                elif e.key == pygame.K_RIGHT:
                    self._resize_grid(0, +1)
                elif e.key == pygame.K_LEFT:
                    self._resize_grid(0, -1)
                elif e.key in (pygame.K_s, pygame.K_e):
                    cell = self._cell_at(*pygame.mouse.get_pos())
                    if cell is not None:
                        if e.key == pygame.K_s:
                            self.session.set_start(cell)
                        else:
                            self.session.set_end(cell)
                elif e.key == pygame.K_a:
                    self._switch_algo("A*")
                elif e.key == pygame.K_d:
                    self._switch_algo("Dijkstra")
                elif e.key == pygame.K_g:
                    self.show_state = not self.show_state
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

        left, _, right = pygame.mouse.get_pressed()
        if left or right:
            cell = self._cell_at(*pygame.mouse.get_pos())
            if cell is not None:
                self.session.set_wall(cell, blocked=bool(left))
        return True

    def run(self):
        while self._handle_events():
            self.session.tick()
            self._refresh_active_states()
            self._draw()
            self.clock.tick(60)
        pygame.quit()

    # ---------- drawing ----------
    def _draw(self):
        snap = self.session.snapshot()
        self.screen.fill(BLACK)
        self._draw_grid(snap)
        self._draw_panel(snap)
        pygame.display.flip()

    def _cell_rect(self, col: int, row: int) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        return pygame.Rect(ox + col * cs, oy + row * cs, cs, cs)

    def _draw_grid(self, snap: dict):
        cs = self.cell_size
        for row in range(snap["rows"]):
            for col in range(snap["cols"]):
                if snap["walls"][row][col]:
                    color = WALL
                elif snap["visited"] and snap["visited"][row][col]:
                    color = VISITED
                else:
                    color = FLOOR
                pygame.draw.rect(self.screen, color, self._cell_rect(col, row))

        for (col, row) in snap["frontier"]:
            pygame.draw.rect(self.screen, FRONTIER, self._cell_rect(col, row))

        pygame.draw.rect(self.screen, BLUE, self._cell_rect(*snap["start"]))
        pygame.draw.rect(self.screen, RED, self._cell_rect(*snap["end"]))
        pygame.draw.rect(self.screen, WHITE, self._cell_rect(*snap["current"]), 2)

        # path
        path = snap["path"]
        if len(path) >= 2:
            pts = [self._cell_rect(col, row).center for (col, row) in path]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, max(2, cs // 6))

        if self.show_state and cs >= 24:
            for row, cells in enumerate(snap["state"]):
                for col, token in enumerate(cells):
                    if token is None:
                        continue
                    txt = self.font_small.render(token, True, TEXT_LIGHT)
                    self.screen.blit(txt, txt.get_rect(center=self._cell_rect(col, row).center))

        # grid lines
        ox, oy = self._grid_origin
        w, h = snap["cols"] * cs, snap["rows"] * cs
        for i in range(snap["rows"] + 1):
            pygame.draw.line(self.screen, GRAY, (ox, oy + i * cs), (ox + w, oy + i * cs))
        for j in range(snap["cols"] + 1):
            pygame.draw.line(self.screen, GRAY, (ox + j * cs, oy), (ox + j * cs, oy + h))

    def _draw_panel(self, snap: dict):
        card = pygame.Surface((self._panel.width - 20, 230), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        self.screen.blit(card, (self._panel.x + 10, self._panel.y + 10))

        x0 = self._panel.x + 24
        y0 = self._panel.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = snap["metrics"]
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Status: {snap['status']}")
        line(f"Steps: {m.get('steps', 0)}")
        line(f"Frontier: {m.get('frontier_size', 0)}")
        line(f"Visited: {m.get('visited_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("path_cost") is not None:
            line(f"Path Cost: {m['path_cost']}")
        line(f"Grid: {snap['rows']}x{snap['cols']}  Speed: {snap['steps_per_sec']}/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def build_session(settings: Settings) -> Session:
    if settings.map:
        try:
            return Session.from_map(settings.map, algo=settings.algo, steps_per_sec=settings.steps_per_sec)
        except (GridConfigError, OSError) as ex:
            print(f"Failed to load map {settings.map}: {ex}")
    return Session(rows=settings.rows, cols=settings.cols, algo=settings.algo,
                   steps_per_sec=settings.steps_per_sec)


def main(argv: Optional[List[str]] = None):
    try:
        settings = resolve_settings(argv)
    except GridConfigError as ex:
        print(f"Invalid settings: {ex}")
        sys.exit(2)
    logging.basicConfig(level=settings.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    Viewer(build_session(settings), cell_size=settings.cell_size).run()


if __name__ == "__main__":
    main()
