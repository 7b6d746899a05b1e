__version__ = "0.1"

from .authority import build_authority, parse_authority
from .decode import decode, encode_code_point
from .errors import AuthorityError, HierarchicalPartError, UriSyntaxError
from .locators import FileLocator, NetworkLocator, OsFamily
from .normalize import normalize_path
from .parse import parse, parse_uri_reference
from .resolve import ResolutionCache, related, resolve
from .uri import Uri
