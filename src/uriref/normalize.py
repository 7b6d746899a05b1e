"""uriref.normalize
Removal of "." and ".." segments from a path, in the manner of RFC 2396 section 5.2 step 6.

The path is worked on as a list of characters with a parallel list holding the start index of
each segment. Separators are blanked to "" and a removed segment has its start set to _REMOVED,
so no segment substrings are built until the final join.
"""

_REMOVED: int = -1


def _segment_count(path: str) -> int:
    """Returns the number of segments in path, or -1 if path is already in normal form."""
    end: int = len(path) - 1
    p: int = 0
    while p <= end and path[p] == "/":
        p += 1
    normal: bool = p <= 1
    count: int = 0
    while p <= end:
        if _dots_at(path, p) > 0:
            normal = False
        count += 1
        # Skip to the start of the next segment.
        while p <= end:
            p += 1
            if path[p - 1] != "/":
                continue
            while p <= end and path[p] == "/":
                normal = False
                p += 1
            break
    return -1 if normal else count


def _dots_at(chars: str | list[str], p: int) -> int:
    """1 if a "." segment starts at p, 2 for "..", else 0.
    A segment ends at a "/" (or a blanked separator) or at the end of chars.
    """
    end: int = len(chars) - 1
    if chars[p] != ".":
        return 0
    if p == end or chars[p + 1] in ("/", ""):
        return 1
    if chars[p + 1] == "." and (p + 1 == end or chars[p + 2] in ("/", "")):
        return 2
    return 0


def _split(chars: list[str], segments: list[int]) -> None:
    end: int = len(chars) - 1
    p: int = 0
    while p <= end and chars[p] == "/":
        chars[p] = ""
        p += 1
    i: int = 0
    while p <= end:
        segments[i] = p
        i += 1
        p += 1
        while p <= end:
            p += 1
            if chars[p - 1] != "/":
                continue
            chars[p - 1] = ""
            while p <= end and chars[p] == "/":
                chars[p] = ""
                p += 1
            break
    if i != len(segments):
        raise RuntimeError(f"expected {len(segments)} segments, found {i}")


def _remove_dots(chars: list[str], segments: list[int]) -> None:
    for i in range(len(segments)):
        dots: int = _dots_at(chars, segments[i])
        if dots == 0:
            continue
        if dots == 1:
            segments[i] = _REMOVED
            continue
        # A ".." cancels the closest surviving segment before it, unless that one is an unpaired "..".
        j: int = i - 1
        while j >= 0 and segments[j] == _REMOVED:
            j -= 1
        if j >= 0 and _dots_at(chars, segments[j]) != 2:
            segments[i] = _REMOVED
            segments[j] = _REMOVED


def _maybe_add_leading_dot(chars: list[str], segments: list[int]) -> None:
    """Prepends a "." segment when the first surviving segment of a relative path holds a ":".
    Without it "a:b/c" would read back as an opaque URI with scheme "a".
    """
    if len(chars) == 0 or chars[0] == "":
        # Absolute path
        return
    first: int = 0
    while first < len(segments) and segments[first] == _REMOVED:
        first += 1
    if first >= len(segments) or first == 0:
        # Nothing survived, or the original first segment did.
        return
    p: int = segments[first]
    while p < len(chars) and chars[p] not in (":", ""):
        p += 1
    if p >= len(chars) or chars[p] == "":
        return
    # The original first segment was removed, so its slot is free for ".".
    chars[0] = "."
    chars[1] = ""
    segments[0] = 0


def _join(chars: list[str], segments: list[int]) -> int:
    """Compacts the surviving segments to the front of chars and returns the new length."""
    end: int = len(chars) - 1
    p: int = 0
    if end >= 0 and chars[0] == "":
        chars[0] = "/"
        p = 1
    for q in segments:
        if q == _REMOVED:
            continue
        if p == q:
            while p <= end and chars[p] != "":
                p += 1
        elif p < q:
            while q <= end and chars[q] != "":
                chars[p] = chars[q]
                p += 1
                q += 1
        else:
            raise RuntimeError(f"segment at {q} overlaps output at {p}")
        # Keep the separator that followed the segment, trailing slash included.
        if max(p, q) <= end:
            chars[p] = "/"
            p += 1
    return p


def normalize_path(path: str) -> str:
    """Returns path with its "." and ".." segments removed and runs of "/" collapsed.
    e.g. normalize_path("/./path/../path3/path2") == "/path3/path2"
    Leading ".." segments are kept when there is nothing left for them to cancel.
    A path that needs no work is returned as is.
    """
    count: int = _segment_count(path)
    if count < 0:
        return path

    chars: list[str] = list(path)
    segments: list[int] = [0] * count
    _split(chars, segments)
    _remove_dots(chars, segments)
    _maybe_add_leading_dot(chars, segments)
    length: int = _join(chars, segments)
    return "".join(chars[:length])
