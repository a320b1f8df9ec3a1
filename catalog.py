"""Catalog normalizer: sticker feeds in, one canonical Catalog out.

A feed is either flat (a list of sticker records) or grouped (a list of
``{category, items: [...]}``). It is classified once into FlatFeed or
GroupedFeed and then normalized; nothing downstream sees the raw shape.

Also builds grouped feeds from a directory of PNG files.
"""

import json
import logging
import os
import re
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from models import (
    Catalog, CatalogLoadError, CategoryGroup, StickerRecord,
    DEFAULT_CATEGORY, IMAGE_FIELDS,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlatFeed:
    items: list


@dataclass(frozen=True)
class GroupedFeed:
    groups: list


# === Classification ===

def _is_group(entry) -> bool:
    return isinstance(entry, dict) and isinstance(entry.get("items"), list)


def classify_feed(raw) -> FlatFeed | GroupedFeed:
    if raw is None:
        raise CatalogLoadError("No sticker catalog was provided")
    if not isinstance(raw, list):
        raise CatalogLoadError(f"Sticker catalog must be a list, got {type(raw).__name__}")
    if not raw:
        raise CatalogLoadError("Sticker catalog is empty")
    if _is_group(raw[0]):
        return GroupedFeed(raw)
    return FlatFeed(raw)


# === Records ===

def _text(entry: dict, name: str, owner) -> str | None:
    """Optional string field; anything else but null is a load error."""
    value = entry.get(name)
    if value is not None and not isinstance(value, str):
        raise CatalogLoadError(f"{owner}: {name!r} must be text, got {value!r}")
    return value or None


def _image_ref(item: dict, owner) -> str | None:
    for name in IMAGE_FIELDS:
        value = _text(item, name, owner)
        if value:
            return value
    return None


def _tags(item: dict, owner) -> frozenset[str]:
    tags = item.get("tags")
    if tags is None:
        return frozenset()
    if isinstance(tags, str):
        tags = [tags]
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise CatalogLoadError(f"{owner}: 'tags' must be a list of text, got {tags!r}")
    return frozenset(tags)


def _make_record(item, category: str | None = None) -> StickerRecord:
    if not isinstance(item, dict):
        raise CatalogLoadError(f"Sticker entry must be an object, got {item!r}")
    sticker_id = item.get("id")
    if not sticker_id:
        raise CatalogLoadError(f"Sticker entry has no id: {item!r}")
    if isinstance(sticker_id, bool) or not isinstance(sticker_id, (str, int)):
        raise CatalogLoadError(f"Sticker id must be text, got {sticker_id!r}")
    owner = f"Sticker {sticker_id!r}"
    file = _image_ref(item, owner)
    if file is None:
        raise CatalogLoadError(f"{owner} has no image reference")
    return StickerRecord(
        id=str(sticker_id),
        file=file,
        label=_text(item, "label", owner) or "",
        category=_text(item, "category", owner) or category or DEFAULT_CATEGORY,
        tags=_tags(item, owner),
    )


def _group_name(entry: dict) -> str:
    return _text(entry, "category", "Sticker group") or DEFAULT_CATEGORY


def _index(records) -> dict[str, StickerRecord]:
    by_id: dict[str, StickerRecord] = {}
    for r in records:
        if r.id in by_id:
            log.warning("Duplicate sticker id %r; the later entry wins", r.id)
        by_id[r.id] = r
    return by_id


# === Normalization ===

def _normalize_flat(feed: FlatFeed) -> Catalog:
    flat = tuple(_make_record(item) for item in feed.items)
    buckets: dict[str, list[StickerRecord]] = {}
    for r in flat:
        buckets.setdefault(r.category or DEFAULT_CATEGORY, []).append(r)
    grouped = tuple(
        CategoryGroup(name, tuple(sorted(buckets[name], key=lambda r: r.id)))
        for name in sorted(buckets)
    )
    return Catalog(flat=flat, grouped=grouped, by_id=_index(flat))


def _normalize_grouped(feed: GroupedFeed) -> Catalog:
    groups = []
    for entry in feed.groups:
        if not _is_group(entry):
            raise CatalogLoadError(f"Sticker group must have an items list: {entry!r}")
        name = _group_name(entry)
        groups.append(CategoryGroup(name, tuple(_make_record(item, name) for item in entry["items"])))
    flat = tuple(r for g in groups for r in g.stickers)
    return Catalog(flat=flat, grouped=tuple(groups), by_id=_index(flat))


def normalize(raw) -> Catalog:
    """Turn a decoded feed (flat or grouped) into a Catalog."""
    feed = classify_feed(raw)
    if isinstance(feed, GroupedFeed):
        return _normalize_grouped(feed)
    return _normalize_flat(feed)


def flatten_feed(raw) -> list[dict]:
    """Grouped feed -> equivalent flat feed, category copied onto each item."""
    feed = classify_feed(raw)
    if isinstance(feed, FlatFeed):
        return list(feed.items)
    flat = []
    for entry in feed.groups:
        if not _is_group(entry):
            raise CatalogLoadError(f"Sticker group must have an items list: {entry!r}")
        name = _group_name(entry)
        for item in entry["items"]:
            flat.append({**item, "category": item.get("category") or name})
    return flat


def load_catalog(path: str) -> Catalog:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise CatalogLoadError(f"Sticker catalog not found: {path}") from e
    except (OSError, ValueError) as e:
        raise CatalogLoadError(f"Could not read sticker catalog {path}: {e}") from e
    catalog = normalize(raw)
    log.debug("Loaded %d stickers in %d categories from %s",
              len(catalog), len(catalog.grouped), path)
    return catalog


def image_path(record: StickerRecord, base_dir: str) -> str:
    return os.path.join(base_dir, record.file)


# === Feed generation from a sticker directory ===

_CATEGORY_RE = re.compile(r"^([a-z-]+)", re.IGNORECASE)


def category_key(base: str) -> str:
    """Everything before the first non-letter, or "other"."""
    m = _CATEGORY_RE.match(base)
    return m.group(1) if m else "other"


def display_category(key: str) -> str:
    # "party-hats" -> "Party Hats"
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), key.replace("-", " "))


def _is_readable_png(path: str) -> bool:
    try:
        with Image.open(path) as img:
            img.verify()
        return True
    except (OSError, UnidentifiedImageError, SyntaxError):
        return False


def build_feed_from_directory(directory: str) -> list[dict]:
    """Grouped feed for every readable ``*.png`` in *directory*."""
    groups: dict[str, list[dict]] = {}
    for name in os.listdir(directory):
        if not name.endswith(".png"):
            continue
        if not _is_readable_png(os.path.join(directory, name)):
            log.warning("Skipping unreadable image %s", name)
            continue
        base = name[:-len(".png")]
        key = category_key(base)
        groups.setdefault(key, []).append({
            "id": base,
            "file": name,
            "label": key.replace("-", " "),
        })
    return [
        {
            "category": display_category(key),
            "items": sorted(groups[key], key=lambda item: item["id"].lower()),
        }
        for key in sorted(groups, key=str.lower)
    ]


def write_feed(feed: list[dict], path: str):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(feed, f, indent=2)
        f.write("\n")
