"""Fragment pools: fixed, ordered, non-empty lists of text snippets.

Pools live in YAML documents shaped like::

    pools:
      surname: [Murong, Ouyang, ...]
      given: [Xue, Wuji, ...]

The bundled documents are ``folio/data/pools/<name>.yaml``.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Iterable

import yaml

POOL_DIR = "data/pools"


class PoolConfigError(ValueError):
    """A pool is missing, empty, or its document is malformed."""


@dataclass(frozen=True)
class FragmentPool:
    name: str
    fragments: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.fragments:
            raise PoolConfigError(f"fragment pool '{self.name}' is empty")
        for frag in self.fragments:
            if not isinstance(frag, str) or not frag.strip():
                raise PoolConfigError(f"fragment pool '{self.name}' contains a blank or non-text entry")

    @classmethod
    def of(cls, name: str, fragments: Iterable[Any]) -> "FragmentPool":
        return cls(name=name, fragments=tuple(fragments))

    def __len__(self) -> int:
        return len(self.fragments)

    def __getitem__(self, index: int) -> str:
        return self.fragments[index]


def pools_from_dict(data: Any, *, source: str = "<dict>") -> dict[str, FragmentPool]:
    """Build pools from a ``{"pools": {name: [...]}}`` mapping."""
    if not isinstance(data, dict) or not isinstance(data.get("pools"), dict):
        raise PoolConfigError(f"{source}: expected a top-level 'pools' mapping")
    pools: dict[str, FragmentPool] = {}
    for name, fragments in data["pools"].items():
        if not isinstance(fragments, list):
            raise PoolConfigError(f"{source}: pool '{name}' must be a list")
        pools[str(name)] = FragmentPool.of(str(name), fragments)
    return pools


def load_pools(path: Path) -> dict[str, FragmentPool]:
    """Load pools from a YAML file."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise PoolConfigError(f"cannot read pool file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise PoolConfigError(f"invalid YAML in {path}: {e}") from e
    return pools_from_dict(data, source=str(path))


def load_bundled_pools(name: str) -> dict[str, FragmentPool]:
    """Load one of the pool documents shipped with the package."""
    resource = resources.files("folio") / POOL_DIR / f"{name}.yaml"
    if not resource.is_file():
        raise PoolConfigError(f"no bundled pool document named '{name}'")
    data = yaml.safe_load(resource.read_text(encoding="utf-8"))
    return pools_from_dict(data, source=f"bundled:{name}")
