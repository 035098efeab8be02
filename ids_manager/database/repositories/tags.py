"""
tags.py - Tag helpers
Single responsibility: normalize and (de)serialize feedback tags.
"""
import json


def normalize_tags(tags: list[str] | None) -> list[str]:
    if not tags:
        return []
    seen = set()
    normalized: list[str] = []
    for raw in tags:
        name = raw.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        normalized.append(name)
    return normalized


def dump_tags(tags: list[str] | None) -> str:
    return json.dumps(normalize_tags(tags), ensure_ascii=False)


def load_tags(raw: str | None) -> list[str]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return []
    return [str(v) for v in value] if isinstance(value, list) else []
