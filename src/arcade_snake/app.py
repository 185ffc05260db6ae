"""pygame front end: window, input mapping, rendering and the frame loop."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

import pygame

from .audio import AudioEngine
from .config import (
    FPS,
    GRID_SIZES,
    ConfigError,
    Difficulty,
    EngineConfig,
    GameMode,
    Theme,
)
from .engine import GameEngine
from .entities import Direction, FoodKind, GameState, PowerUpKind
from .events import EventType, GameOver, LevelUp
from .storage import ProfileStore

logger = logging.getLogger(__name__)

FONT_NAME: str = "consolas"
FONT_SIZE: int = 18
HUD_HEIGHT: int = 28

KEY_TO_DIRECTION = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

PALETTE = {
    "bg": pygame.Color(7, 10, 18),
    "grid": pygame.Color(10, 40, 60),
    "text": pygame.Color(216, 239, 255),
    "hud": pygame.Color(10, 10, 10),
    "obstacle": pygame.Color(120, 120, 140),
    "moving_obstacle": pygame.Color(255, 70, 90),
}

# Head, body and food colours per theme; rainbow is computed per segment
THEME_COLORS: dict[Theme, tuple[str, str, str]] = {
    Theme.NEON: ("#00ff00", "#00cc00", "#ff0000"),
    Theme.CLASSIC: ("#4caf50", "#388e3c", "#f44336"),
    Theme.RAINBOW: ("#ffffff", "#ffffff", "#ffd700"),
    Theme.FIRE: ("#ff6600", "#ff3300", "#ffff00"),
    Theme.ICE: ("#00ffff", "#0099ff", "#ffffff"),
    Theme.MATRIX: ("#00ff00", "#008800", "#00ff00"),
    Theme.CYBERPUNK: ("#ff00ff", "#cc00cc", "#00ffff"),
}

FOOD_COLORS = {
    FoodKind.BONUS: pygame.Color(0, 200, 255),
    FoodKind.GOLDEN: pygame.Color(255, 208, 0),
}

POWER_UP_COLORS = {
    PowerUpKind.SPEED: pygame.Color(255, 235, 59),
    PowerUpKind.SLOW: pygame.Color(100, 181, 246),
    PowerUpKind.GHOST: pygame.Color(206, 147, 216),
    PowerUpKind.INVINCIBLE: pygame.Color(255, 152, 0),
    PowerUpKind.DOUBLE_POINTS: pygame.Color(129, 199, 132),
    PowerUpKind.SHRINK: pygame.Color(240, 98, 146),
    PowerUpKind.MAGNET: pygame.Color(244, 67, 54),
    PowerUpKind.FREEZE: pygame.Color(178, 235, 242),
}


class ArcadeSnakeApp:
    """Owns the window and feeds frame time into a :class:`GameEngine`."""

    def __init__(self, config: EngineConfig, profile: ProfileStore) -> None:
        pygame.init()
        self.config = config
        self.profile = profile
        self.cell = config.cell_size
        board = config.grid_size * self.cell
        self.window = pygame.display.set_mode(
            (board, board + HUD_HEIGHT), pygame.DOUBLEBUF | pygame.SCALED
        )
        pygame.display.set_caption("Arcade Snake")
        self.font = pygame.font.SysFont(FONT_NAME, FONT_SIZE)
        self.background = self._build_background()
        self.head_color, self.body_color, self.food_color = (
            pygame.Color(c) for c in THEME_COLORS[config.theme]
        )
        self.banner: str | None = None
        self.banner_timer: float = 0.0

        self.engine = GameEngine(config, high_score=profile.high_score)
        self.audio = AudioEngine(enabled=config.sound_enabled)
        self.audio.bind(self.engine)
        self.engine.on(EventType.LEVEL_UP, self._on_level_up)
        self.engine.on(EventType.GAME_OVER, self._on_game_over)
        self.new_game()

    # --- Engine events -------------------------------------------------

    def _on_level_up(self, event: LevelUp) -> None:
        self._show_banner(f"LEVEL {event.level}")

    def _on_game_over(self, event: GameOver) -> None:
        unlocked = self.profile.record_game(event.stats)
        if unlocked:
            self._show_banner("Unlocked: " + ", ".join(unlocked))

    def _show_banner(self, text: str, seconds: float = 1.5) -> None:
        self.banner = text
        self.banner_timer = seconds * 1000

    def new_game(self) -> None:
        self.engine.init()
        self.engine.set_state(GameState.PLAYING)

    # --- Input -----------------------------------------------------------

    def handle_events(self) -> bool:
        """Translate window/keyboard events into engine intents."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type != pygame.KEYDOWN:
                continue
            state = self.engine.get_state()
            if event.key == pygame.K_SPACE:
                self.engine.toggle_pause()
                continue
            if state is GameState.GAME_OVER:
                if event.key == pygame.K_r:
                    self.new_game()
                elif event.key == pygame.K_q:
                    return False
                continue
            direction = KEY_TO_DIRECTION.get(event.key)
            if direction is not None:
                self.engine.change_direction(direction)
        return True

    # --- Draw ------------------------------------------------------------

    def _build_background(self) -> pygame.Surface:
        """Grid background drawn once to keep draw() light."""
        size = self.config.grid_size * self.cell
        surface = pygame.Surface((size, size))
        surface.fill(PALETTE["bg"])
        for i in range(0, size, self.cell):
            pygame.draw.line(surface, PALETTE["grid"], (i, 0), (i, size), 1)
            pygame.draw.line(surface, PALETTE["grid"], (0, i), (size, i), 1)
        return surface

    def _cell_rect(self, x: int, y: int, inset: int = 1) -> pygame.Rect:
        return pygame.Rect(
            x * self.cell + inset,
            y * self.cell + inset + HUD_HEIGHT,
            self.cell - inset * 2,
            self.cell - inset * 2,
        )

    def _segment_color(self, idx: int) -> pygame.Color:
        if self.config.theme is Theme.RAINBOW:
            color = pygame.Color(0)
            color.hsva = ((idx * 15 + pygame.time.get_ticks() // 10) % 360, 100, 100, 100)
            return color
        return self.head_color if idx == 0 else self.body_color

    def draw(self) -> None:
        self.window.fill((0, 0, 0))
        self.window.blit(self.background, (0, HUD_HEIGHT))

        for obstacle in self.engine.get_obstacles():
            color = PALETTE["moving_obstacle"] if obstacle.movable else PALETTE["obstacle"]
            pygame.draw.rect(self.window, color, self._cell_rect(*obstacle.position), border_radius=2)

        food = self.engine.get_food()
        if food is not None:
            color = FOOD_COLORS.get(food.kind, self.food_color)
            pygame.draw.ellipse(self.window, color, self._cell_rect(*food.position, inset=2))

        for power_up in self.engine.get_power_ups():
            rect = self._cell_rect(*power_up.position, inset=2)
            pygame.draw.rect(self.window, POWER_UP_COLORS[power_up.kind], rect, border_radius=4)

        effect = self.engine.get_active_effect()
        ghosting = effect is not None and effect.kind is PowerUpKind.GHOST
        for idx, segment in enumerate(self.engine.get_snake().segments):
            color = self._segment_color(idx)
            if ghosting:
                color = pygame.Color(color.r // 2, color.g // 2, color.b // 2)
            pygame.draw.rect(self.window, color, self._cell_rect(*segment), border_radius=4)

        self._draw_hud()
        state = self.engine.get_state()
        if state is GameState.PAUSED:
            self._draw_overlay(["Paused", "Press SPACE to resume"])
        elif state is GameState.GAME_OVER:
            stats = self.engine.get_stats()
            self._draw_overlay(
                [
                    "Game Over",
                    f"Score: {stats.score}",
                    f"Best:  {stats.high_score}",
                    "R to restart / Q to quit",
                ]
            )
        elif self.banner:
            self._draw_overlay([self.banner], dim=False)

    def _draw_hud(self) -> None:
        stats = self.engine.get_stats()
        pygame.draw.rect(self.window, PALETTE["hud"], (0, 0, self.window.get_width(), HUD_HEIGHT))
        text = (
            f"SCORE {stats.score:05}  LV {stats.level}  "
            f"LIVES {stats.lives}  x{stats.combo}"
        )
        self.window.blit(self.font.render(text, True, PALETTE["text"]), (8, 5))

        effect = self.engine.get_active_effect()
        if effect is None:
            return
        ratio = effect.remaining(self.engine.clock) / effect.duration
        width = int(80 * ratio)
        bar = pygame.Rect(self.window.get_width() - 90, 10, width, 8)
        pygame.draw.rect(self.window, POWER_UP_COLORS[effect.kind], bar, border_radius=2)

    def _draw_overlay(self, lines: list[str], dim: bool = True) -> None:
        width, height = self.window.get_size()
        overlay = pygame.Surface((width, height), pygame.SRCALPHA)
        if dim:
            overlay.fill((5, 5, 15, 140))
        for idx, text in enumerate(lines):
            surf = self.font.render(text, True, PALETTE["text"])
            rect = surf.get_rect(center=(width // 2, height // 2 + idx * (FONT_SIZE + 8)))
            overlay.blit(surf, rect)
        self.window.blit(overlay, (0, 0))

    # --- Main loop -------------------------------------------------------

    def start(self) -> None:
        """Run the frame loop: handle input, advance the engine, render."""
        clock = pygame.time.Clock()
        running = True
        while running:
            dt_ms = clock.tick(FPS)
            running = self.handle_events()
            self.engine.update(dt_ms)
            if self.banner_timer > 0:
                self.banner_timer -= dt_ms
                if self.banner_timer <= 0:
                    self.banner = None
            self.draw()
            pygame.display.update()
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play Arcade Snake.")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty])
    parser.add_argument("--mode", choices=[m.value for m in GameMode])
    parser.add_argument("--theme", choices=[t.value for t in Theme])
    parser.add_argument("--grid", choices=sorted(GRID_SIZES), help="board size preset")
    parser.add_argument("--grid-size", type=int, help="explicit board size in cells")
    parser.add_argument("--mute", action="store_true", help="disable sound effects")
    parser.add_argument("--profile", help="path to the profile JSON file")
    parser.add_argument(
        "--remember",
        action="store_true",
        help="save the options given on this command line as the new defaults",
    )
    parser.add_argument("--log-level", default="WARNING")
    return parser


def config_overrides(args: argparse.Namespace) -> dict[str, object]:
    overrides: dict[str, object] = {
        "difficulty": args.difficulty,
        "mode": args.mode,
        "theme": args.theme,
        "grid_size": args.grid_size or (GRID_SIZES[args.grid] if args.grid else None),
    }
    if args.mute:
        overrides["sound_enabled"] = False
    return {key: value for key, value in overrides.items() if value is not None}


def resolve_config(profile: ProfileStore, args: argparse.Namespace) -> EngineConfig:
    """Build the run config; command line options only persist with --remember."""
    overrides = config_overrides(args)
    config = profile.engine_config(**overrides)
    if args.remember and overrides:
        settings = config.to_settings()
        profile.update_settings(**{key: settings[key] for key in overrides})
    return config


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    profile = ProfileStore(args.profile) if args.profile else ProfileStore()
    try:
        config = resolve_config(profile, args)
    except ConfigError as exc:
        parser.error(str(exc))
    logger.info(
        "Starting %s/%s on a %dx%d grid",
        config.mode.value,
        config.difficulty.value,
        config.grid_size,
        config.grid_size,
    )
    ArcadeSnakeApp(config, profile).start()
