import json
from pathlib import Path
from typing import Any, Iterable, List, Tuple

from .dictionary import ConstructionFailure


def _entries_from_json(data: Any) -> List[Tuple[Any, Any]]:
    skills = data.get("skills") if isinstance(data, dict) else None
    if isinstance(skills, dict):
        return list(skills.items())
    if isinstance(skills, list):
        entries = []
        for item in skills:
            if not isinstance(item, dict):
                raise ConstructionFailure(f"Seed item must be an object, got {item!r}")
            entries.append((item.get("keyword"), item.get("weight")))
        return entries
    raise ConstructionFailure("Seed file must contain a 'skills' object or list")


def load_seed(path: Path) -> List[Tuple[Any, Any]]:
    """
    Read (keyword, weight) pairs from a JSON seed file, in file order.

    Accepts either {"skills": {"python": 7}} or
    {"skills": [{"keyword": "python", "weight": 7}]}. Entries are not
    validated here; WeightedDictionary.build does that.
    """
    if not path.exists():
        raise ConstructionFailure(f"Seed file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ConstructionFailure(f"Cannot read seed file {path}: {e}") from e
    return _entries_from_json(data)


def save_seed(path: Path, entries: Iterable[Tuple[str, int]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {"skills": [{"keyword": k, "weight": w} for k, w in entries]}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
