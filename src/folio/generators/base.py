"""Template generator: one draw per slot, rendered in slot order."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Mapping

from folio.generators.pools import FragmentPool, PoolConfigError
from folio.generators.random_utils import pick


@dataclass(frozen=True)
class Slot:
    """A template position filled from the pool of the same name."""

    pool: str
    optional: bool = False


@dataclass(frozen=True)
class Draw:
    """The fragments picked for one generation, keyed by slot, in order."""

    parts: tuple[tuple[str, str], ...]

    def get(self, slot: str) -> str | None:
        for name, value in self.parts:
            if name == slot:
                return value
        return None

    @property
    def values(self) -> list[str]:
        return [value for _, value in self.parts]


class TemplateGenerator:
    """Base for the name and prompt generators.

    Subclasses set ``SLOTS`` and implement ``render``.  Construction fails
    fast with ``PoolConfigError`` if any slot's pool is absent.
    """

    SLOTS: tuple[Slot, ...] = ()

    def __init__(
        self,
        pools: Mapping[str, FragmentPool],
        rng: random.Random | None = None,
    ):
        missing = [slot.pool for slot in self.SLOTS if slot.pool not in pools]
        if missing:
            raise PoolConfigError(
                f"{type(self).__name__} needs pools: {', '.join(missing)}"
            )
        self.pools = {slot.pool: pools[slot.pool] for slot in self.SLOTS}
        self.rng = rng or random.Random()

    def draw(self, include: Iterable[str] = ()) -> Draw:
        """Pick one fragment per required slot and per requested optional slot."""
        wanted = set(include)
        unknown = wanted - {s.pool for s in self.SLOTS if s.optional}
        if unknown:
            raise ValueError(f"not optional slots of {type(self).__name__}: {sorted(unknown)}")
        parts = tuple(
            (slot.pool, pick(self.pools[slot.pool].fragments, self.rng))
            for slot in self.SLOTS
            if not slot.optional or slot.pool in wanted
        )
        return Draw(parts)

    def render(self, draw: Draw) -> str:
        raise NotImplementedError
