import yaml
from pathlib import Path

from ..domain.models import CatalogEntry


def load_catalog_from_yaml(path: str) -> list[CatalogEntry]:
    p = Path(path)
    if not p.exists():
        raise RuntimeError(f"catalog file not found: {path}")

    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or "dorms" not in data:
        raise RuntimeError("Invalid catalog.yaml format")

    dorms = data["dorms"]
    if not isinstance(dorms, list):
        raise RuntimeError("dorms must be a list")

    entries = []
    seen_ids: set[str] = set()
    for dorm in dorms:
        if not isinstance(dorm, dict):
            raise RuntimeError(f"Invalid dorm entry: {dorm}")
        dorm_id = str(dorm.get("id") or "").strip()
        name = str(dorm.get("name") or "").strip()
        city = str(dorm.get("city") or "").strip()
        price = dorm.get("price")

        if not dorm_id or not name or not city:
            raise RuntimeError(f"Invalid dorm entry: {dorm}")
        if isinstance(price, bool) or not isinstance(price, int) or price < 0:
            raise RuntimeError(f"Invalid dorm price: {dorm}")
        if dorm_id in seen_ids:
            raise RuntimeError(f"Duplicate dorm id: {dorm_id}")
        seen_ids.add(dorm_id)

        entries.append(CatalogEntry(id=dorm_id, name=name, city=city, price=price))

    return entries
