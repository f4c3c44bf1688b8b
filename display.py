"""
Elfcode CRT Display
====================
Shows a finished CRT Screen (crt.py) in a pygame window.  The window runs
in a background thread so the caller can keep printing to the console.

Usage (programmatic):
    from display import CRTDisplay
    disp = CRTDisplay(screen, scale=12)
    disp.start()       # launches background thread
    disp.wait()        # until the window is closed (Esc or close button)

Usage (CLI):
    python cli.py crt program.txt --display
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from crt import Screen

# Phosphor colours (R, G, B)
COLOR_LIT = (80, 255, 120)
COLOR_DARK = (10, 24, 12)
COLOR_BLANK = (0, 0, 0)
BORDER = 8               # pixels around the tube


def render_screen(pygame_module, screen: "Screen", scale: int = 10):
    """Render *screen* to a new pygame surface, one block per pixel."""
    surface = pygame_module.Surface((screen.width * scale + 2 * BORDER,
                                     screen.height * scale + 2 * BORDER))
    surface.fill(COLOR_BLANK)
    for r, row in enumerate(screen.pixels):
        for c, ch in enumerate(row):
            if ch == ' ':
                continue
            color = COLOR_LIT if ch == '#' else COLOR_DARK
            pygame_module.draw.rect(
                surface, color,
                (BORDER + c * scale, BORDER + r * scale, scale, scale))
    return surface


class CRTDisplay:
    """Background-threaded pygame window showing one Screen."""

    def __init__(self, screen: "Screen", scale: int = 10,
                 title: str = "Elfcode CRT"):
        self.screen = screen
        self.scale = max(1, scale)
        self.title = title
        self.fps = 30
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._started = threading.Event()

    # -- public API -------------------------------------------------------

    def start(self):
        """Start the display thread.  Returns once the window is open."""
        self._stop_event.clear()
        self._started.clear()
        self._thread = threading.Thread(target=self._run, daemon=True,
                                        name="elfcode-display")
        self._thread.start()
        self._started.wait(timeout=5.0)

    def stop(self):
        """Signal the display thread to shut down and wait for it."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=3.0)
            self._thread = None

    def wait(self):
        """Block until the user closes the window."""
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # -- internals --------------------------------------------------------

    def _run(self):
        """Main display loop (runs in background thread)."""
        import pygame

        pygame.init()
        pygame.display.set_caption(self.title)
        image = render_screen(pygame, self.screen, self.scale)
        window = pygame.display.set_mode(image.get_size())
        clock = pygame.time.Clock()
        self._started.set()

        try:
            while not self._stop_event.is_set():
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._stop_event.set()
                    elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        self._stop_event.set()
                window.blit(image, (0, 0))
                pygame.display.flip()
                clock.tick(self.fps)
        except pygame.error as e:
            print(f"\n[display] error: {e}")
        finally:
            pygame.quit()
