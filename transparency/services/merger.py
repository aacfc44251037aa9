# transparency/services/merger.py
from typing import Any, Iterable, List

from .rollup import field_value


def _normalized(record: Any, key: str) -> str:
    return str(field_value(record, key, "")).lower()


def merge_seeded(seed: Iterable[Any], live: Iterable[Any], key: str = "name") -> List[Any]:
    """Seed entries first, then live entries whose lowercased key is not already seeded.

    Name equality is the only identity, so differently-cased copies of a
    seeded organization collapse into the seed entry.
    """
    seed = list(seed)
    seeded = {_normalized(record, key) for record in seed}
    return seed + [record for record in live if _normalized(record, key) not in seeded]
