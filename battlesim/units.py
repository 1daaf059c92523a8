"""Things that stand on the battlefield."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_HP = 100
DEFAULT_RANGE = 5
DEFAULT_DAMAGE = 10
DEFAULT_MOVEMENT_COST = 2


@dataclass(eq=False)
class Entity:
    """Anything that belongs to a team and occupies a tile."""

    team: int
    x: int
    y: int


@dataclass(eq=False)
class Unit(Entity):
    """A fighting unit with its current target and route to it."""

    hp: int = DEFAULT_HP
    attack_range: int = DEFAULT_RANGE
    damage_points: int = DEFAULT_DAMAGE
    movement_cost: int = DEFAULT_MOVEMENT_COST
    enemy: Unit | None = field(default=None, repr=False)
    enemy_path: list[tuple[int, int]] = field(default_factory=list, repr=False)
    attacking_units: list[Unit] = field(default_factory=list, repr=False)

    def add_attacking_unit(self, unit: Unit) -> None:
        """Record that ``unit`` is targeting this one."""
        self.attacking_units.append(unit)

    def remove_attacking_unit(self, unit: Unit) -> None:
        """Forget every record of ``unit`` targeting this one."""
        self.attacking_units[:] = [u for u in self.attacking_units if u is not unit]

    def in_range(self, target: Unit) -> bool:
        """Whether ``target`` is within attack range, by Manhattan distance."""
        distance = abs(self.x - target.x) + abs(self.y - target.y)
        return distance <= self.attack_range

    def attack(self, target: Unit) -> None:
        target.hp -= self.damage_points

    def is_dead(self) -> bool:
        return self.hp <= 0