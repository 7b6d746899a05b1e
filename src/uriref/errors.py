"""uriref.errors
Exceptions raised while parsing URI references.
"""

from typing import Self


class UriSyntaxError(ValueError):
    """The given text is not a URI reference."""

    def __init__(self: Self, message: str, text: str) -> None:
        super().__init__(f"{message}: {text!r}")
        self.text: str = text


class HierarchicalPartError(UriSyntaxError):
    def __init__(self: Self, text: str) -> None:
        super().__init__("Hierarchical URI scheme-specific part syntax error", text)


class AuthorityError(UriSyntaxError):
    def __init__(self: Self, text: str) -> None:
        super().__init__("Hierarchical URI authority part syntax error", text)
