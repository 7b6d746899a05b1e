"""uriref.authority
Splitting the authority component into userinfo, host and port.
"""

import logging
import re

from .errors import AuthorityError

logger = logging.getLogger(__name__)

# Each of these ABNF rules is from RFC 3986 or 6874.

# DIGIT = %x30-39
_DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = r"[0-9A-Fa-f]"

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
_UNRESERVED: str = r"[A-Za-z0-9\-._~]"

# pct-encoded = "%" HEXDIG HEXDIG
_PCT_ENCODED: str = rf"%{_HEXDIG}{_HEXDIG}"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
_SUB_DELIMS: str = r"[!$&'()*+,;=]"

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
_DEC_OCTET: str = rf"(?:25[0-5]|2[0-4]{_DIGIT}|1{_DIGIT}{{2}}|[1-9]{_DIGIT}|{_DIGIT})"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
_IPV4ADDRESS: str = rf"{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}"

# h16 = 1*4HEXDIG
_H16: str = rf"(?:{_HEXDIG}{{1,4}})"

# ls32 = ( h16 ":" h16 ) / IPv4address
_LS32: str = rf"(?:{_H16}:{_H16}|{_IPV4ADDRESS})"

# IPv6address, the nine alternatives of RFC 3986 section 3.2.2
_IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{_H16}:){{6}}{_LS32}",
                                         rf"::(?:{_H16}:){{5}}{_LS32}",
                              rf"(?:{_H16})?::(?:{_H16}:){{4}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,1}}{_H16})?::(?:{_H16}:){{3}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,2}}{_H16})?::(?:{_H16}:){{2}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,3}}{_H16})?::(?:{_H16}:){_LS32}",
            rf"(?:(?:{_H16}:){{0,4}}{_H16})?::{_LS32}",
            rf"(?:(?:{_H16}:){{0,5}}{_H16})?::{_H16}",
            rf"(?:(?:{_H16}:){{0,6}}{_H16})?::",
        )
    )
    + ")"
)

# IPv6addrz = IPv6address "%25" ZoneID
_IPV6ADDRZ: str = rf"{_IPV6ADDRESS}%25(?:{_UNRESERVED}|{_PCT_ENCODED})+"

# IPvFuture = "v" 1*HEXDIG "." 1*( unreserved / sub-delims / ":" )
_IPVFUTURE: str = rf"[vV]{_HEXDIG}+\.(?:{_UNRESERVED}|{_SUB_DELIMS}|:)+"

# IP-literal = "[" ( IPv6address / IPv6addrz / IPvFuture  ) "]"
_IP_LITERAL: str = rf"\[(?:{_IPV6ADDRESS}|{_IPV6ADDRZ}|{_IPVFUTURE})\]"
_IP_LITERAL_PAT: re.Pattern[str] = re.compile(rf"\A{_IP_LITERAL}\Z")

# reg-name = *( unreserved / pct-encoded / sub-delims )
_REG_NAME: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS})*"

# host = IP-literal / IPv4address / reg-name
_HOST_PAT: re.Pattern[str] = re.compile(rf"\A(?:{_IP_LITERAL}|{_IPV4ADDRESS}|{_REG_NAME})\Z")

# The overall shape: [ userinfo "@" ] host [ ":" port ].
# userinfo runs to the last "@"; a host holding ":" has to be bracketed.
_AUTHORITY_SHAPE_PAT: re.Pattern[str] = re.compile(
    r"\A(?:(?P<userinfo>.*)@)?(?P<host>\[[^\[\]]*\]|[^\[\]@:]*)(?::(?P<port>[0-9]*))?\Z",
    re.DOTALL,
)


def parse_authority(raw: str) -> tuple[str | None, str | None, int | None]:
    """Returns (userinfo, host, port) for a server-based authority.
    A registry-based authority, one whose host is not a valid server host, gives (None, None, None).
    Raises AuthorityError when raw does not have the userinfo@host:port shape.
    """
    if len(raw) == 0:
        return None, None, None

    m: re.Match[str] | None = _AUTHORITY_SHAPE_PAT.match(raw)
    if m is None:
        logger.debug("authority %r does not have the userinfo@host:port shape", raw)
        raise AuthorityError(raw)

    host: str = m["host"]
    if host.startswith("[") and _IP_LITERAL_PAT.match(host) is None:
        logger.debug("authority %r has a malformed IP literal", raw)
        raise AuthorityError(raw)
    if _HOST_PAT.match(host) is None:
        return None, None, None

    port: int | None = None
    if m["port"]:
        port = int(m["port"], base=10)
    return m["userinfo"], host, port


def build_authority(userinfo: str | None, host: str | None, port: int | None) -> str | None:
    """userinfo@host:port
    An IPv6 host is bracketed if it is not already.
    """
    if host is None:
        return None
    result: str = ""
    if userinfo is not None:
        result += f"{userinfo}@"
    if ":" in host and not (host.startswith("[") and host.endswith("]")):
        result += f"[{host}]"
    else:
        result += host
    if port is not None:
        result += f":{port}"
    return result
