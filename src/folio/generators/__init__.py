"""Random content generators over fixed fragment pools."""

from folio.generators.names import WuxiaNameGenerator
from folio.generators.pools import (
    FragmentPool,
    PoolConfigError,
    load_bundled_pools,
    load_pools,
)
from folio.generators.prompts import PromptGenerator
from folio.generators.random_utils import pick, shuffle

__all__ = [
    "FragmentPool",
    "PoolConfigError",
    "PromptGenerator",
    "WuxiaNameGenerator",
    "load_bundled_pools",
    "load_pools",
    "pick",
    "shuffle",
]
