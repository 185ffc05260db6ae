"""Entry point for the Arcade Snake game."""

from __future__ import annotations

from arcade_snake.app import main

if __name__ == "__main__":
    main()
