"""Writing-prompt generator.

Each slot holds whole sentences, so a shuffled prompt still reads as
prose.
"""

from __future__ import annotations

import random

from folio.generators.base import Draw, Slot, TemplateGenerator
from folio.generators.pools import load_bundled_pools
from folio.generators.random_utils import shuffle as fisher_yates


class PromptGenerator(TemplateGenerator):
    SLOTS = (
        Slot("character"),
        Slot("conflict"),
        Slot("setting"),
        Slot("twist", optional=True),
    )

    @classmethod
    def bundled(cls, rng: random.Random | None = None) -> "PromptGenerator":
        return cls(load_bundled_pools("prompts"), rng=rng)

    def render(self, draw: Draw, *, shuffle: bool = False) -> str:
        sentences = draw.values
        if shuffle:
            sentences = fisher_yates(sentences, self.rng)
        return " ".join(sentences)

    def generate(self, *, shuffle: bool = False, include_twist: bool = False) -> str:
        draw = self.draw(["twist"] if include_twist else [])
        return self.render(draw, shuffle=shuffle)
