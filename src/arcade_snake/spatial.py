"""Cell -> occupant lookup rebuilt from the entity store every tick."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from .entities import Position

if TYPE_CHECKING:
    from .store import EntityStore

FOOD_ID = "food"


def snake_id(index: int) -> str:
    return f"snake-{index}"


def power_up_id(ident: str) -> str:
    return f"powerup-{ident}"


def obstacle_id(ident: str) -> str:
    return f"obstacle-{ident}"


class SpatialIndex:
    """Hash of grid cells to the ids of whatever sits on them.

    The index is never patched incrementally; callers clear and repopulate
    it after every mutation so a query can never see a stale cell.
    """

    def __init__(self) -> None:
        self._cells: dict[Position, set[str]] = {}
        self._positions: dict[str, Position] = {}

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, ident: object) -> bool:
        return ident in self._positions

    def insert(self, ident: str, position: Iterable[int]) -> None:
        pos = Position(*position)
        if ident in self._positions:
            self.remove(ident)
        self._cells.setdefault(pos, set()).add(ident)
        self._positions[ident] = pos

    def remove(self, ident: str) -> None:
        pos = self._positions.pop(ident, None)
        if pos is None:
            return
        occupants = self._cells.get(pos)
        if occupants is None:
            return
        occupants.discard(ident)
        if not occupants:
            del self._cells[pos]

    def query(self, position: Iterable[int]) -> set[str]:
        return set(self._cells.get(Position(*position), ()))

    def query_radius(self, position: Iterable[int], radius: int) -> set[str]:
        """Collect occupants of the (2r+1)x(2r+1) box centred on ``position``."""

        cx, cy = position
        found: set[str] = set()
        if radius < 0:
            return found
        for dx in range(-radius, radius + 1):
            for dy in range(-radius, radius + 1):
                found.update(self._cells.get(Position(cx + dx, cy + dy), ()))
        return found

    def position_of(self, ident: str) -> Position | None:
        return self._positions.get(ident)

    def occupied(self) -> set[Position]:
        return set(self._cells)

    def clear(self) -> None:
        self._cells.clear()
        self._positions.clear()

    def rebuild(self, store: EntityStore) -> None:
        self.clear()
        for index, segment in enumerate(store.snake.segments):
            self.insert(snake_id(index), segment)
        if store.food is not None:
            self.insert(FOOD_ID, store.food.position)
        for power_up in store.power_ups:
            self.insert(power_up_id(power_up.id), power_up.position)
        for obstacle in store.obstacles:
            self.insert(obstacle_id(obstacle.id), obstacle.position)
