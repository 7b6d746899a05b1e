"""uriref.uri
The Uri value type.
"""

import dataclasses
import functools

from typing import Any, Self

from . import resolve as _resolve
from .authority import parse_authority
from .decode import decode
from .normalize import normalize_path


def _decode_if_not_none(s: str | None) -> str | None:
    if s is None:
        return None
    return decode(s)


def _hierarchical_part(authority: str | None, path: str, query: str | None) -> str:
    result: str = ""
    if authority is not None:
        result += f"//{authority}"
    result += path
    if query is not None:
        result += f"?{query}"
    return result


@dataclasses.dataclass(frozen=True)
class Uri:
    """A URI reference, absolute or relative, hierarchical or opaque.
    The raw_* fields hold the components exactly as they appeared in the parsed text, still
    percent-encoded; the unprefixed properties decode them. Build instances with parse_uri_reference()
    or Uri.build(); every operation returns a new instance.
    """

    raw_scheme: str | None = None
    raw_scheme_specific_part: str = ""
    raw_authority: str | None = None
    raw_userinfo: str | None = None
    raw_host: str | None = None
    port: int | None = None
    raw_path: str | None = ""
    raw_query: str | None = None
    raw_fragment: str | None = None

    def __post_init__(self: Self) -> None:
        # Fill in the scheme-specific part of a hierarchical URI built field by field.
        if self.raw_path is not None and len(self.raw_scheme_specific_part) == 0:
            object.__setattr__(
                self,
                "raw_scheme_specific_part",
                _hierarchical_part(self.raw_authority, self.raw_path, self.raw_query),
            )

    @classmethod
    def build(
        cls,
        scheme: str | None = None,
        authority: str | None = None,
        path: str | None = "",
        query: str | None = None,
        fragment: str | None = None,
        scheme_specific_part: str | None = None,
    ) -> Self:
        """Assembles a Uri from raw components.
        A path of None makes an opaque URI, which needs a scheme and a scheme_specific_part.
        Raises AuthorityError for a malformed authority.
        """
        if path is None:
            if scheme is None or scheme_specific_part is None:
                raise ValueError("an opaque URI needs a scheme and a scheme-specific part")
            return cls(raw_scheme=scheme, raw_scheme_specific_part=scheme_specific_part, raw_path=None, raw_fragment=fragment)

        userinfo: str | None = None
        host: str | None = None
        port: int | None = None
        if authority is not None:
            userinfo, host, port = parse_authority(authority)
        return cls(
            raw_scheme=scheme,
            raw_scheme_specific_part=_hierarchical_part(authority, path, query),
            raw_authority=authority,
            raw_userinfo=userinfo,
            raw_host=host,
            port=port,
            raw_path=path,
            raw_query=query,
            raw_fragment=fragment,
        )

    def replace(self: Self, **changes: Any) -> Self:
        """Returns a copy with the given raw fields replaced.
        The scheme-specific part of a hierarchical result is recomputed, and an absolute result
        whose scheme-specific part does not start with "/" becomes opaque, as it would read back.
        The authority is not re-parsed, so raw_userinfo, raw_host and port must be passed along
        with raw_authority.
        Raises ValueError for an opaque result without a scheme, or a path that does not start
        with "/" after an authority.
        """
        result: Self = dataclasses.replace(self, **changes)
        if "raw_scheme_specific_part" in changes:
            return result
        if result.raw_path is None:
            if result.raw_scheme is None:
                raise ValueError(f"an opaque URI needs a scheme: {result.raw_scheme_specific_part!r}")
            return result
        if result.raw_authority is not None and len(result.raw_path) > 0 and not result.raw_path.startswith("/"):
            raise ValueError(f"a path after an authority must start with '/': {result.raw_path!r}")

        ssp: str = _hierarchical_part(result.raw_authority, result.raw_path, result.raw_query)
        if result.raw_scheme is not None and not ssp.startswith("/"):
            return dataclasses.replace(result, raw_scheme_specific_part=ssp, raw_path=None, raw_query=None)
        return dataclasses.replace(result, raw_scheme_specific_part=ssp)

    def is_absolute(self: Self) -> bool:
        return self.raw_scheme is not None

    def is_opaque(self: Self) -> bool:
        return self.raw_path is None

    def is_server_based(self: Self) -> bool:
        """True if the authority was split into userinfo, host and port."""
        return self.raw_host is not None

    @property
    def scheme(self: Self) -> str | None:
        # Schemes cannot hold escapes.
        return self.raw_scheme

    @functools.cached_property
    def scheme_specific_part(self: Self) -> str:
        return decode(self.raw_scheme_specific_part)

    @functools.cached_property
    def authority(self: Self) -> str | None:
        return _decode_if_not_none(self.raw_authority)

    @functools.cached_property
    def user_info(self: Self) -> str | None:
        return _decode_if_not_none(self.raw_userinfo)

    @functools.cached_property
    def host(self: Self) -> str | None:
        return _decode_if_not_none(self.raw_host)

    @functools.cached_property
    def path(self: Self) -> str | None:
        return _decode_if_not_none(self.raw_path)

    @functools.cached_property
    def query(self: Self) -> str | None:
        return _decode_if_not_none(self.raw_query)

    @functools.cached_property
    def fragment(self: Self) -> str | None:
        return _decode_if_not_none(self.raw_fragment)

    @functools.cached_property
    def fingerprint(self: Self) -> str:
        """scheme, authority, fragment, path and query run together, for use as a memo key.
        Each part is length-prefixed so that different URIs never share a fingerprint; an opaque
        URI contributes its scheme-specific part in place of the authority.
        """
        parts: tuple[str | None, ...] = (
            self.raw_scheme,
            self.raw_scheme_specific_part if self.is_opaque() else self.raw_authority,
            self.raw_fragment,
            self.raw_path,
            self.raw_query,
        )
        return "".join("-" if part is None else f"{len(part)}:{part}" for part in parts)

    @functools.cached_property
    def _rendered(self: Self) -> str:
        result: str = ""
        if self.raw_scheme is not None:
            result += f"{self.raw_scheme}:"
        if self.raw_path is None:
            result += self.raw_scheme_specific_part
        else:
            result += _hierarchical_part(self.raw_authority, self.raw_path, self.raw_query)
        if self.raw_fragment is not None:
            result += f"#{self.raw_fragment}"
        return result

    def serialize(self: Self) -> str:
        """[scheme ":"] (scheme-specific-part | ["//" authority] path ["?" query]) ["#" fragment]"""
        return self._rendered

    def __str__(self: Self) -> str:
        return self._rendered

    def with_scheme(self: Self, scheme: str | None) -> Self:
        return self.replace(raw_scheme=scheme)

    def with_authority(self: Self, authority: str | None) -> Self:
        """Raises AuthorityError for a malformed authority."""
        userinfo: str | None = None
        host: str | None = None
        port: int | None = None
        if authority is not None:
            userinfo, host, port = parse_authority(authority)
        return self.replace(
            raw_authority=authority,
            raw_userinfo=userinfo,
            raw_host=host,
            port=port,
            raw_path=self.raw_path if self.raw_path is not None else "",
        )

    def with_path(self: Self, path: str) -> Self:
        return self.replace(raw_path=path)

    def with_query(self: Self, query: str | None) -> Self:
        return self.replace(raw_query=query, raw_path=self.raw_path if self.raw_path is not None else "")

    def with_fragment(self: Self, fragment: str | None) -> Self:
        return self.replace(raw_fragment=fragment)

    def normalize(self: Self) -> Self:
        """Returns this URI with its path in normal form.
        Opaque URIs, and those whose path is already normal, are returned as they are.
        """
        if self.raw_path is None or len(self.raw_path) == 0:
            return self
        path: str = normalize_path(self.raw_path)
        if path == self.raw_path:
            return self
        return self.replace(raw_path=path)

    def resolve(self: Self, r: "Uri", cache: "_resolve.ResolutionCache | None" = None) -> "Uri":
        """Resolves the reference r against this URI."""
        return _resolve.resolve(self, r, cache=cache)

    def related(self: Self, base: "Uri") -> "Uri":
        """Returns this URI relative to base's path, or this URI if base's path is not a prefix of it."""
        return _resolve.related(self, base)
