"""
Desktop host for the elimination wheel using pygame.

Plays the part of the host application: owns the roster, removes
eliminated participants and hides the wheel when it asks to close.
"""

import pygame
import asyncio
import logging
from typing import Optional

from ..config.settings import Settings, get_settings
from ..core.events import EventBus, EventType, Event, key_event, tick_event
from ..core.timers import FrameScheduler
from ..animation.spin import SpinAnimator
from ..graphics.wheel import segment_color, segment_polygon, label_position, truncate_label
from ..widget import SpinWheel, WheelView, KEY_ENTER, KEY_ESCAPE, KEY_SPACE

logger = logging.getLogger(__name__)

BG_COLOR = (15, 23, 42)
PANEL_COLOR = (30, 41, 59)
TEXT_COLOR = (226, 232, 240)
MUTED_COLOR = (120, 130, 150)
ACCENT_COLOR = (220, 38, 38)

# pygame key -> widget key name
KEY_NAMES = {
    pygame.K_ESCAPE: KEY_ESCAPE,
    pygame.K_RETURN: KEY_ENTER,
    pygame.K_KP_ENTER: KEY_ENTER,
    pygame.K_SPACE: KEY_SPACE,
}


def widget_key(key: int) -> Optional[str]:
    """Translate a pygame key code to the widget's key name."""
    return KEY_NAMES.get(key)


class LogBuffer(logging.Handler):
    """Keeps recent log lines for the on-screen log panel."""

    def __init__(self, max_lines: int = 20) -> None:
        super().__init__()
        self.max_lines = max_lines
        self.lines: list[str] = []
        self.setFormatter(logging.Formatter("%(levelname).1s %(name)s: %(message)s"))

    def emit(self, record: logging.LogRecord) -> None:
        self.lines.append(self.format(record))
        if len(self.lines) > self.max_lines * 2:
            self.lines = self.lines[-self.max_lines:]

    @property
    def visible(self) -> list[str]:
        return self.lines[-self.max_lines:]


class SimulatorWindow:
    """
    Window hosting one SpinWheel.

    Keyboard Mapping:
        ENTER / SPACE: Start the vote
        ESC: Dismiss the wheel (not while spinning or revealing)
        O: Open the wheel again
        R: Restore the full roster
        L: Toggle the log panel
        Q: Quit
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.config = self.settings.simulator
        self.event_bus = event_bus or EventBus()

        self.roster: list[str] = list(self.settings.participants)
        self.eliminated: list[str] = []

        self.scheduler = FrameScheduler()
        self.animator = SpinAnimator()
        self.wheel = SpinWheel(
            members=self.roster,
            on_eliminate=self._on_eliminate,
            on_close=self._on_close,
            settings=self.settings,
            scheduler=self.scheduler,
            event_bus=self.event_bus,
        )

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._big_font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0

        # Log viewer
        self._show_log = False
        self.log_buffer = LogBuffer()
        logging.getLogger().addHandler(self.log_buffer)

        self.event_bus.subscribe(EventType.TICK, self._on_tick)
        self.event_bus.subscribe(EventType.KEY_PRESS, self._on_key)

        logger.info("SimulatorWindow created")

    # Host callbacks
    def _on_eliminate(self, name: str) -> None:
        if name in self.roster:
            self.roster.remove(name)
        self.eliminated.append(name)
        logger.info(f"Roster: {len(self.roster)} remaining after removing {name}")

    def _on_close(self) -> None:
        self.wheel.set_open(False)

    # Event handlers
    def _on_tick(self, event: Event) -> None:
        delta_ms = event.data.get("delta", 0.016) * 1000
        self.scheduler.update(delta_ms)

        view = self.wheel.view()
        self.animator.set_target(view.rotation, view.spinning, view.spin_duration * 1000)
        self.animator.update(delta_ms)

    def _on_key(self, event: Event) -> None:
        key = event.data.get("key")
        if key == "o":
            self.wheel.set_open(True)
        elif key == "r":
            self.roster = list(self.settings.participants)
            self.eliminated.clear()
            self.wheel.set_members(self.roster)
        elif key == "l":
            self._show_log = not self._show_log
        elif key == "q":
            self._running = False
        elif key:
            self.wheel.handle_key(key)

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                key = widget_key(event.key) or event.unicode.lower() or None
                if key:
                    self.event_bus.emit(key_event(key))

    # Rendering
    def _init_pygame(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._screen = pygame.display.set_mode((self.config.width, self.config.height))
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont("DejaVu Sans", 18)
        self._big_font = pygame.font.SysFont("DejaVu Sans", 72, bold=True)
        self._small_font = pygame.font.SysFont("DejaVu Sans", 13)

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _render(self) -> None:
        if not self._screen:
            return

        self._screen.fill(BG_COLOR)
        view = self.wheel.view()

        if not view.open:
            self._render_closed()
        elif view.show_reveal:
            self._render_reveal(view)
        else:
            self._render_wheel(view)
            self._render_panel(view)

        self._render_status(view)
        self._render_log_panel()
        pygame.display.flip()

    def _render_closed(self) -> None:
        lines = [f"{len(self.roster)} crewmate(s) remaining", "O: open wheel   R: restore roster   L: log   Q: quit"]
        if self.eliminated:
            lines.insert(0, f"Ejected: {', '.join(self.eliminated)}")
        for i, line in enumerate(lines):
            self._blit_centered(self._font, line, TEXT_COLOR, self.config.height // 2 - 30 + i * 30)

    def _render_wheel(self, view: WheelView) -> None:
        radius = min(self.config.width, self.config.height) * 0.36
        center = (self.config.width * 0.33, self.config.height * 0.5)
        n = len(view.members)

        if n == 0:
            pygame.draw.circle(self._screen, PANEL_COLOR, center, radius)
        for i, name in enumerate(view.members):
            points = segment_polygon(center, radius, i, n, self.animator.angle)
            pygame.draw.polygon(self._screen, segment_color(i), points.tolist())
            label = self._small_font.render(truncate_label(name), True, (255, 255, 255))
            x, y = label_position(center, radius, i, n, self.animator.angle)
            self._screen.blit(label, label.get_rect(center=(x, y)))

        pygame.draw.circle(self._screen, (75, 85, 99), center, radius, 2)
        pygame.draw.circle(self._screen, ACCENT_COLOR, center, 24)
        vote = self._small_font.render("VOTE", True, (255, 255, 255))
        self._screen.blit(vote, vote.get_rect(center=center))

        # Pointer at the top
        cx, top = center[0], center[1] - radius
        pygame.draw.polygon(self._screen, ACCENT_COLOR, [(cx - 10, top - 14), (cx + 10, top - 14), (cx, top + 4)])

    def _render_panel(self, view: WheelView) -> None:
        x = int(self.config.width * 0.66)
        y = 60
        title = self._font.render("EMERGENCY MEETING", True, TEXT_COLOR)
        self._screen.blit(title, (x, y))
        y += 40

        for name in view.members or ["No crewmates available"]:
            self._screen.blit(self._small_font.render(name, True, MUTED_COLOR), (x, y))
            y += 18

        color = ACCENT_COLOR if view.can_start else PANEL_COLOR
        button = pygame.Rect(x, self.config.height - 120, 220, 44)
        pygame.draw.rect(self._screen, color, button, border_radius=10)
        label = self._font.render(view.start_label, True, TEXT_COLOR)
        self._screen.blit(label, label.get_rect(center=button.center))

        hint = "ESC: close" if view.can_dismiss else "Spinning..."
        self._screen.blit(self._small_font.render(hint, True, MUTED_COLOR), (x, button.bottom + 10))

    def _render_reveal(self, view: WheelView) -> None:
        text = view.typed_text + ("|" if view.show_cursor else "")
        self._blit_centered(self._big_font, text, ACCENT_COLOR, self.config.height // 2 - 60)
        self._blit_centered(self._font, "WAS EJECTED", TEXT_COLOR, self.config.height // 2 + 40)

    def _render_status(self, view: WheelView) -> None:
        status = f"{view.state.name}  |  {view.status_message}" if view.status_message else view.state.name
        self._screen.blit(self._small_font.render(status, True, MUTED_COLOR), (10, self.config.height - 22))

    def _render_log_panel(self) -> None:
        if not self._show_log:
            return

        rect = pygame.Rect(10, 10, 420, self.config.height - 60)
        surf = pygame.Surface(rect.size, pygame.SRCALPHA)
        surf.fill((20, 25, 35, 230))
        self._screen.blit(surf, rect.topleft)

        y = rect.y + 8
        for line in self.log_buffer.visible:
            # Color code by level
            if line.startswith("E"):
                color = (255, 100, 100)
            elif line.startswith("W"):
                color = (255, 200, 100)
            elif line.startswith("I"):
                color = (150, 200, 150)
            else:
                color = MUTED_COLOR
            text = line[:57] + "..." if len(line) > 60 else line
            self._screen.blit(self._small_font.render(text, True, color), (rect.x + 8, y))
            y += 16

    def _blit_centered(self, font: pygame.font.Font, text: str, color: tuple, y: int) -> None:
        surface = font.render(text, True, color)
        self._screen.blit(surface, surface.get_rect(center=(self.config.width // 2, y)))

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True
        self.wheel.set_open(True)

        logger.info("Simulator started")

        try:
            while self._running:
                self._handle_events()

                if self._clock:
                    delta = self._clock.get_time() / 1000.0
                    self.event_bus.emit(tick_event(delta, self._frame_count))

                self._render()

                if self._clock:
                    self._clock.tick(self.config.fps)

                self._frame_count += 1

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        self.wheel.destroy()
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="simulator"))
        pygame.quit()
        logger.info("Simulator stopped")
        logging.getLogger().removeHandler(self.log_buffer)

    def stop(self) -> None:
        self._running = False
