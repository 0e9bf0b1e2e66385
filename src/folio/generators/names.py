"""Wuxia name generator.

A name is a surname and a given name, optionally followed by a courtesy
name (*zi*) and an epithet::

    Murong Xue, courtesy name Qingfeng, the Jade-Faced Swordsman
"""

from __future__ import annotations

import random

from folio.generators.base import Draw, Slot, TemplateGenerator
from folio.generators.pools import load_bundled_pools


class WuxiaNameGenerator(TemplateGenerator):
    SLOTS = (
        Slot("surname"),
        Slot("given"),
        Slot("courtesy", optional=True),
        Slot("epithet", optional=True),
    )

    @classmethod
    def bundled(cls, rng: random.Random | None = None) -> "WuxiaNameGenerator":
        return cls(load_bundled_pools("wuxia"), rng=rng)

    def render(self, draw: Draw) -> str:
        text = f"{draw.get('surname')} {draw.get('given')}"
        courtesy = draw.get("courtesy")
        if courtesy:
            text += f", courtesy name {courtesy}"
        epithet = draw.get("epithet")
        if epithet:
            text += f", {epithet}"
        return text

    def generate(self, *, include_zi: bool = True, include_epithet: bool = False) -> str:
        include = []
        if include_zi:
            include.append("courtesy")
        if include_epithet:
            include.append("epithet")
        return self.render(self.draw(include))
