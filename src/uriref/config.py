"""uriref.config
Settings read from the environment when the package is first imported.
"""

import os


def _default_os_family() -> str:
    return "windows" if os.name == "nt" else "posix"


class Settings:
    """Global settings."""

    # Capacity of a ResolutionCache built without an explicit maxsize. 0 disables storing.
    resolve_cache_size: int = int(os.getenv("URIREF_RESOLVE_CACHE_SIZE", "1024"))

    # "posix" or "windows"; used by FileLocator when no family is passed.
    os_family: str = os.getenv("URIREF_OS_FAMILY", _default_os_family()).lower()


settings = Settings()
