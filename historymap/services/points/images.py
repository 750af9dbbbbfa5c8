"""
Image URL resolution for points.

A point may reference images through ``photoUrls`` and/or ``photoIds``.
Entries are either absolute URLs, used unchanged, or storage-relative paths,
which are served through the local file proxy.
"""
from typing import Any, Iterable, List, Optional, Sequence

DEFAULT_SOURCE_ORDER = ("photoUrls", "photoIds")
DEFAULT_PROXY_BASE = "/api/files"

_ABSOLUTE_PREFIXES = ("http://", "https://")
_SOURCE_FIELDS = {"photoUrls": "photo_urls", "photoIds": "photo_ids"}


def resolve_image_url(entry: Any, proxy_base: str = DEFAULT_PROXY_BASE) -> Optional[str]:
    """Resolve one entry, or None for empty and non-string entries."""
    if not entry or not isinstance(entry, str):
        return None
    if entry.startswith(_ABSOLUTE_PREFIXES):
        return entry
    path = entry.lstrip("/")
    if not path:
        return None
    return f"{proxy_base.rstrip('/')}/{path}"


def _source_entries(point: Any, source: str) -> Sequence[Any]:
    if isinstance(point, dict):
        entries = point.get(source)
    else:
        entries = getattr(point, _SOURCE_FIELDS[source], None)
    if isinstance(entries, (list, tuple)):
        return entries
    return ()


def _resolve_all(entries: Iterable[Any], proxy_base: str) -> List[str]:
    urls = []
    for entry in entries:
        url = resolve_image_url(entry, proxy_base)
        if url:
            urls.append(url)
    return urls


def preview_image(
    point: Any,
    proxy_base: str = DEFAULT_PROXY_BASE,
    source_order: Sequence[str] = DEFAULT_SOURCE_ORDER,
) -> Optional[str]:
    """First resolved URL from the highest-priority source that has one."""
    for source in source_order:
        urls = _resolve_all(_source_entries(point, source), proxy_base)
        if urls:
            return urls[0]
    return None


def gallery_images(
    point: Any,
    proxy_base: str = DEFAULT_PROXY_BASE,
    source_order: Sequence[str] = DEFAULT_SOURCE_ORDER,
) -> List[str]:
    """All resolved URLs across sources in priority order, without duplicates."""
    seen = set()
    gallery = []
    for source in source_order:
        for url in _resolve_all(_source_entries(point, source), proxy_base):
            if url not in seen:
                seen.add(url)
                gallery.append(url)
    return gallery


class ImageResolver:
    """Binds the proxy base and source order configured for the service."""

    def __init__(self, proxy_base: str = DEFAULT_PROXY_BASE, source_order: Sequence[str] = DEFAULT_SOURCE_ORDER):
        self.proxy_base = proxy_base
        self.source_order = tuple(source_order)

    def resolve(self, entry: Any) -> Optional[str]:
        return resolve_image_url(entry, self.proxy_base)

    def preview(self, point: Any) -> Optional[str]:
        return preview_image(point, self.proxy_base, self.source_order)

    def gallery(self, point: Any) -> List[str]:
        return gallery_images(point, self.proxy_base, self.source_order)

    def attach_preview(self, points):
        """Return copies of the points with ``image_url`` filled in."""
        return [p.model_copy(update={"image_url": self.preview(p)}) for p in points]
