"""
Interactive Pygame Viewer for the Grid Simulations

Menu:
  1 / 2 / 3   Heat / Wave / Life
  ESC         Quit

In a simulation:
  SPACE       Pause / Resume
  R           Reset (clear for Life)
  1 / 2 / 3   Palette: gray / fire / blue-red
  M           Back to menu
  S           Save frame.png
  UP / DOWN   alpha (Heat) or c (Wave) up / down
  RIGHT/LEFT  dt up / down
  C           Clear (Life)
  N           Single step (Life)
  P           Randomize (Life)
  Mouse L     Paint heat / displacement, or set cells alive
"""

import pygame

from .simulator import Simulator
from .presets import DISPLAY_SCALE, GRID_SIZE, MODE_ORDER, list_presets

MENU = "menu"

HUD_BG = (0, 0, 0, 140)
HUD_TEXT = (230, 235, 245)
HUD_WARN = (230, 41, 55)

# Arrow keys -> (param key, up) per mode
_ADJUST_KEYS = {
    "heat": {pygame.K_UP: ("alpha", True), pygame.K_DOWN: ("alpha", False),
             pygame.K_RIGHT: ("dt", True), pygame.K_LEFT: ("dt", False)},
    "wave": {pygame.K_UP: ("c", True), pygame.K_DOWN: ("c", False),
             pygame.K_RIGHT: ("dt", True), pygame.K_LEFT: ("dt", False)},
}

_HELP = {
    "heat": ["Mouse: paint    Space: pause    R: reset",
             "1/2/3: colormap    S: save    M: menu    Arrows: alpha/dt +/-"],
    "wave": ["Mouse: add displacement    Space: pause    R: reset",
             "1/2/3: colormap    S: save    M: menu    Arrows: c/dt +/-"],
    "life": ["Mouse: toggle cells    Space: run/pause    R: clear",
             "P: randomize    N: single-step    1/2/3: colormap    M: menu"],
}


class Viewer:

    def __init__(self, width=None, height=None, sim_size=GRID_SIZE,
                 start_mode=MENU, palette="fire"):
        self.sim_size = sim_size
        self.canvas_w = width or sim_size * DISPLAY_SCALE
        self.canvas_h = height or sim_size * DISPLAY_SCALE
        self.running = True
        self.view = start_mode
        self.sim = Simulator(mode=MODE_ORDER[0] if start_mode == MENU else start_mode,
                             nx=sim_size, ny=sim_size, palette=palette)
        self.hud_font = None
        self.title_font = None

    def _render_frame(self):
        rgba = self.sim.pixels()
        return pygame.surfarray.make_surface(rgba[..., :3].swapaxes(0, 1).copy())

    def _draw_menu(self, screen):
        screen.fill((0, 0, 0))
        title = self.title_font.render("sim2d-visual", True, HUD_TEXT)
        screen.blit(title, ((screen.get_width() - title.get_width()) // 2, 40))
        y = 120
        lines = ["Choose a simulation:"]
        lines += [f"{n}) {name}" for n, (_, name, _) in enumerate(list_presets(), 1)]
        lines += ["ESC to quit"]
        for line in lines:
            screen.blit(self.hud_font.render(line, True, HUD_TEXT), (60, y))
            y += 30

    def _draw_hud(self, screen):
        status = self.sim.status()
        margin, pad, line_h = 12, 6, 20

        parts = [self.view.upper()]
        defs = self.sim.engine.get_param_defs()
        if defs:
            parts += [f"{d['label']}={status[d['key']]:{d['fmt']}}" for d in defs]
            parts.append(f"(<= {status['dt_max']:.6g} stable)")
        else:
            parts.append(f"gen={status['generation']:,}")
        head = "   ".join(parts)
        if status["paused"]:
            head = "[PAUSED]  " + head

        lines = [head] + _HELP[self.view]
        warn = status.get("unstable", False)
        n_lines = len(lines) + (1 if warn else 0)
        bg = pygame.Surface((screen.get_width() - 2 * margin, n_lines * line_h + 2 * pad),
                            pygame.SRCALPHA)
        bg.fill(HUD_BG)
        screen.blit(bg, (margin, margin))

        y = margin + pad
        for line in lines:
            screen.blit(self.hud_font.render(line, True, HUD_TEXT), (margin + 10, y))
            y += line_h
        if warn:
            msg = "WARNING: dt above stability -> using substeps"
            screen.blit(self.hud_font.render(msg, True, HUD_WARN), (margin + 10, y))

    def _handle_mouse(self):
        if not pygame.mouse.get_pressed()[0]:
            return
        mx, my = pygame.mouse.get_pos()
        ix = int(mx * self.sim.nx / self.canvas_w)
        iy = int(my * self.sim.ny / self.canvas_h)
        self.sim.paint(ix, iy)

    def _save_screenshot(self, path="frame.png"):
        pygame.image.save(self._render_frame(), path)
        print(f"Frame saved: {path}")

    def run(self):
        """Main viewer loop."""
        pygame.init()

        screen = pygame.display.set_mode((self.canvas_w, self.canvas_h), pygame.RESIZABLE)
        pygame.display.set_caption("sim2d-visual")
        clock = pygame.time.Clock()

        self.hud_font = pygame.font.SysFont("menlo", 16)
        self.title_font = pygame.font.SysFont("menlo", 40)

        while self.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                elif event.type == pygame.VIDEORESIZE:
                    self.canvas_w, self.canvas_h = event.w, event.h
                elif event.type == pygame.KEYDOWN:
                    self._handle_keydown(event)

            if self.view == MENU:
                self._draw_menu(screen)
                pygame.display.flip()
                clock.tick(60)
                continue

            self._handle_mouse()
            self.sim.frame()

            sim_surface = self._render_frame()
            scaled = pygame.transform.scale(sim_surface, (self.canvas_w, self.canvas_h))
            screen.blit(scaled, (0, 0))
            self._draw_hud(screen)

            pygame.display.flip()
            clock.tick(120)

        pygame.quit()

    def _handle_keydown(self, event):
        key = event.key

        if self.view == MENU:
            if key == pygame.K_ESCAPE:
                self.running = False
            elif pygame.K_1 <= key <= pygame.K_3:
                self.view = MODE_ORDER[key - pygame.K_1]
                self.sim.set_mode(self.view)
            return

        if key == pygame.K_ESCAPE:
            self.running = False

        elif key == pygame.K_SPACE:
            self.sim.toggle_pause()

        elif key == pygame.K_r:
            self.sim.reset()

        elif pygame.K_1 <= key <= pygame.K_3:
            self.sim.set_palette(key - pygame.K_1)

        elif key == pygame.K_m:
            self.view = MENU

        elif key == pygame.K_s:
            self._save_screenshot()

        elif key in _ADJUST_KEYS.get(self.view, {}):
            param, up = _ADJUST_KEYS[self.view][key]
            self.sim.adjust(param, up=up)

        elif self.view == "life":
            if key == pygame.K_c:
                self.sim.reset()
            elif key == pygame.K_n:
                self.sim.single_step()
            elif key == pygame.K_p:
                self.sim.randomize()
