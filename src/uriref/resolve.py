"""uriref.resolve
Resolution of a URI reference against a base URI (RFC 2396 section 5.2) and the reverse,
relativizing a URI against a base path.
"""

import collections
import logging
import threading

from typing import TYPE_CHECKING, Self

from .config import settings
from .normalize import normalize_path

if TYPE_CHECKING:
    from .uri import Uri

logger = logging.getLogger(__name__)


class ResolutionCache:
    """A bounded, thread-safe memo of resolve() results keyed by the fingerprints of base and reference.
    Pass one to resolve() to share results between calls; the library keeps no cache of its own.
    """

    def __init__(self: Self, maxsize: int | None = None) -> None:
        self.maxsize: int = settings.resolve_cache_size if maxsize is None else maxsize
        self._entries: collections.OrderedDict[tuple[str, str], "Uri"] = collections.OrderedDict()
        self._lock: threading.Lock = threading.Lock()

    def __len__(self: Self) -> int:
        return len(self._entries)

    def get(self: Self, key: tuple[str, str]) -> "Uri | None":
        with self._lock:
            result: Uri | None = self._entries.get(key)
            if result is not None:
                self._entries.move_to_end(key)
            return result

    def put(self: Self, key: tuple[str, str], value: "Uri") -> None:
        if self.maxsize <= 0:
            return
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.maxsize:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("resolution cache full, evicted %r", evicted)

    def clear(self: Self) -> None:
        with self._lock:
            self._entries.clear()


def _merge_paths(base: "Uri", r: "Uri") -> str:
    """All but the last segment of the base path, followed by the reference path, normalized."""
    base_path: str = base.raw_path or ""
    ref_path: str = r.raw_path or ""
    if base.raw_authority is not None and len(base_path) == 0:
        return normalize_path(f"/{ref_path}")
    dirname, slash, _ = base_path.rpartition("/")
    return normalize_path(dirname + slash + ref_path)


def _resolve(base: "Uri", r: "Uri") -> "Uri":
    if r.is_absolute() or base.is_opaque():
        return r

    # A same-document reference such as "#foo"
    if (
        r.raw_scheme is None
        and r.raw_authority is None
        and r.raw_path == ""
        and r.raw_query is None
        and r.raw_fragment is not None
    ):
        if r.raw_fragment == base.raw_fragment:
            return base
        return base.replace(raw_fragment=r.raw_fragment)

    if r.raw_scheme is not None:
        return r

    if r.raw_authority is not None:
        return r.replace(raw_scheme=base.raw_scheme)

    path: str = r.raw_path or ""
    if not path.startswith("/"):
        path = _merge_paths(base, r)
    return base.replace(raw_path=path, raw_query=r.raw_query, raw_fragment=r.raw_fragment)


def resolve(base: "Uri", r: "Uri", cache: ResolutionCache | None = None) -> "Uri":
    """Resolves the reference r against base.
    If r is absolute or base is opaque, r is returned. A bare fragment reference takes everything
    else from base. Otherwise the result has base's scheme, r's query and fragment, and an
    authority and path taken from r or, failing that, merged with base's.
    """
    if cache is None:
        return _resolve(base, r)

    key: tuple[str, str] = (base.fingerprint, r.fingerprint)
    result: Uri | None = cache.get(key)
    if result is None:
        result = _resolve(base, r)
        cache.put(key, result)
    return result


def related(full: "Uri", base: "Uri") -> "Uri":
    """Returns full as a reference relative to base's path.
    e.g. related(parse("http://example.com/path/path2?k=v"), parse("/path/")) gives "path2?k=v"
    The test is a plain string prefix on the raw paths; when it fails full is returned unchanged.
    """
    if full.raw_path is None or base.raw_path is None:
        return full
    if not full.raw_path.startswith(base.raw_path):
        return full
    return type(full).build(
        path=full.raw_path[len(base.raw_path) :],
        query=full.raw_query,
        fragment=full.raw_fragment,
    )
