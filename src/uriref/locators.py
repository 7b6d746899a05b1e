"""uriref.locators
Views over a Uri for the two kinds of resource locator the library knows about:
file: URIs that stand for a path on disk, and URIs naming a server.
Both wrap a Uri and wrap again whatever resolve() and normalize() return.
"""

import dataclasses
import enum
import re
import urllib.parse

from typing import Mapping, Self

from .authority import build_authority, parse_authority
from .config import settings
from .errors import AuthorityError
from .parse import parse_uri_reference
from .uri import Uri


class OsFamily(str, enum.Enum):
    POSIX = "posix"
    WINDOWS = "windows"


def _os_family(os_family: OsFamily | str | None) -> OsFamily:
    if os_family is None:
        return OsFamily(settings.os_family)
    return OsFamily(os_family)


# A decoded file: path that starts with a drive letter, e.g. "/c:/windows"
_DRIVE_PATH_PAT: re.Pattern[str] = re.compile(r"\A/?[A-Za-z]:(?:/|\Z)")

# A Windows path with a drive letter, after "\" has been turned into "/", e.g. "c:/windows"
_WINDOWS_DRIVE_PAT: re.Pattern[str] = re.compile(r"\A[A-Za-z]:")


@dataclasses.dataclass(frozen=True)
class FileLocator:
    """A file: URI, rendered as an operating system path on demand."""

    uri: Uri

    @classmethod
    def parse(cls, data: str) -> Self:
        return cls(parse_uri_reference(data))

    @classmethod
    def from_path(cls, path: str, os_family: OsFamily | str | None = None) -> Self:
        r"""Returns the file: URI for an absolute path.
        e.g. from_path(r"c:\windows\a b.txt", "windows") is file:///c%3A/windows/a%20b.txt
        and from_path(r"\\server\share", "windows") is file://server/share
        """
        if _os_family(os_family) is OsFamily.WINDOWS:
            path = path.replace("\\", "/")
            if path.startswith("//"):
                host, slash, rest = path[2:].partition("/")
                return cls(Uri.build(scheme="file", authority=host, path=urllib.parse.quote(slash + rest)))
            if _WINDOWS_DRIVE_PAT.match(path):
                path = f"/{path}"
        if not path.startswith("/"):
            raise ValueError(f"not an absolute path: {path!r}")
        return cls(Uri.build(scheme="file", authority="", path=urllib.parse.quote(path, safe="/")))

    @property
    def path(self: Self) -> str | None:
        return self.uri.path

    @property
    def host(self: Self) -> str | None:
        if self.uri.host is not None:
            return self.uri.host
        # A registry-based authority is taken whole.
        return self.uri.authority or None

    def filename(self: Self, os_family: OsFamily | str | None = None) -> str:
        r"""Returns the path this URI stands for, in the conventions of os_family.
        A host other than localhost names a share: file://server/share/a is \\server\share\a on Windows.
        """
        path: str = self.path or ""
        host: str | None = self.host
        if host == "localhost":
            host = None

        value: str = path
        if host is not None:
            value = f"//{host}{path}"
        if _os_family(os_family) is not OsFamily.WINDOWS:
            return value
        if host is None and _DRIVE_PATH_PAT.match(path) and path.startswith("/"):
            value = path[1:]
        return value.replace("/", "\\")

    def directory(self: Self) -> Self:
        """Returns the directory holding this file. The root directory is its own parent."""
        path: str | None = self.uri.raw_path
        if path is None:
            return self
        stripped: str = path.rstrip("/")
        dirname, slash, _ = stripped.rpartition("/")
        parent: str
        if len(slash) == 0:
            parent = "/" if path.startswith("/") else ""
        elif len(dirname) == 0:
            parent = "/"
        else:
            parent = dirname
        return type(self)(self.uri.replace(raw_path=parent, raw_query=None, raw_fragment=None))

    def resolve(self: Self, r: "FileLocator | Uri") -> Self:
        return type(self)(self.uri.resolve(r.uri if isinstance(r, FileLocator) else r))

    def normalize(self: Self) -> Self:
        return type(self)(self.uri.normalize())

    def __str__(self: Self) -> str:
        return str(self.uri)


@dataclasses.dataclass(frozen=True)
class NetworkLocator:
    """A URI whose authority, when it has one, is server-based: [userinfo "@"] host [":" port].
    Raises AuthorityError for a registry-based authority.
    """

    uri: Uri

    def __post_init__(self: Self) -> None:
        if self.uri.raw_authority and not self.uri.is_server_based():
            raise AuthorityError(self.uri.raw_authority)

    @classmethod
    def parse(cls, data: str) -> Self:
        return cls(parse_uri_reference(data))

    @property
    def scheme(self: Self) -> str | None:
        return self.uri.scheme

    @property
    def authority(self: Self) -> str | None:
        return self.uri.authority

    @property
    def user_info(self: Self) -> str | None:
        return self.uri.user_info

    @property
    def host(self: Self) -> str | None:
        return self.uri.host

    @property
    def port(self: Self) -> int | None:
        return self.uri.port

    @property
    def path(self: Self) -> str | None:
        return self.uri.path

    @property
    def query(self: Self) -> str | None:
        return self.uri.query

    @property
    def fragment(self: Self) -> str | None:
        return self.uri.fragment

    def _with_server(self: Self, userinfo: str | None, host: str | None, port: int | None) -> Self:
        authority: str | None = None
        if userinfo is not None or host is not None or port is not None:
            authority = build_authority(userinfo, host if host is not None else "", port)
        return type(self)(self.uri.with_authority(authority))

    def with_scheme(self: Self, scheme: str | None) -> Self:
        """An empty scheme removes it."""
        return type(self)(self.uri.with_scheme(scheme or None))

    def with_user_info(self: Self, user: str | None, password: str | None = None) -> Self:
        """An empty user removes the user information."""
        userinfo: str | None = None
        if user:
            userinfo = f"{user}:{password}" if password else user
        return self._with_server(userinfo, self.uri.raw_host, self.uri.port)

    def with_host(self: Self, host: str | None) -> Self:
        """An empty host removes it. An IPv6 address is bracketed if need be."""
        return self._with_server(self.uri.raw_userinfo, host or None, self.uri.port)

    def with_port(self: Self, port: int | None) -> Self:
        if port is not None and not 0 <= port <= 65535:
            raise ValueError(f"port out of range: {port}")
        return self._with_server(self.uri.raw_userinfo, self.uri.raw_host, port)

    def with_path(self: Self, path: str) -> Self:
        return type(self)(self.uri.with_path(path))

    def with_query(self: Self, query: str | None) -> Self:
        """An empty query removes it."""
        return type(self)(self.uri.with_query(query or None))

    def with_fragment(self: Self, fragment: str | None) -> Self:
        """An empty fragment removes it."""
        return type(self)(self.uri.with_fragment(fragment or None))

    def with_query_values(self: Self, values: Mapping[str, str]) -> Self:
        """Merges values into the query; a name already present takes the new value."""
        data: dict[str, str] = dict(urllib.parse.parse_qsl(self.uri.raw_query or "", keep_blank_values=True))
        data.update(values)
        return type(self)(self.uri.with_query(urllib.parse.urlencode(data)))

    def with_query_value(self: Self, name: str, value: str) -> Self:
        return self.with_query_values({name: value})

    def resolve(self: Self, r: "NetworkLocator | Uri") -> Self:
        return type(self)(self.uri.resolve(r.uri if isinstance(r, NetworkLocator) else r))

    def normalize(self: Self) -> Self:
        return type(self)(self.uri.normalize())

    def related(self: Self, base: "NetworkLocator | Uri") -> Self:
        return type(self)(self.uri.related(base.uri if isinstance(base, NetworkLocator) else base))

    def is_origin_form(self: Self) -> bool:
        """absolute-path [ "?" query ], RFC 7230 section 5.3.1"""
        return (
            self.uri.raw_scheme is None
            and self.uri.raw_authority is None
            and self.uri.raw_path is not None
            and self.uri.raw_path.startswith("/")
            and self.uri.raw_fragment is None
        )

    def is_authority_form(self: Self) -> bool:
        """host ":" port alone, RFC 7230 section 5.3.3
        Both "www.example.com:80" and "//www.example.com:80" qualify. Without the "//" the text
        parses as an opaque URI whose scheme is the host, so it is checked again as an authority.
        """
        if self.uri.is_opaque():
            if self.uri.raw_fragment is not None:
                return False
            try:
                userinfo, host, port = parse_authority(str(self.uri))
            except AuthorityError:
                return False
            return userinfo is None and host is not None and port is not None
        return (
            self.uri.raw_scheme is None
            and bool(self.uri.raw_authority)
            and self.uri.raw_path == ""
            and self.uri.raw_query is None
            and self.uri.raw_fragment is None
        )

    def is_asterisk_form(self: Self) -> bool:
        """The lone "*" target, RFC 7230 section 5.3.4"""
        return str(self.uri) == "*"

    def __str__(self: Self) -> str:
        return str(self.uri)
