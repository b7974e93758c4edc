"""errexplain: plain-language explanations for console errors."""

from importlib import metadata

try:
    __version__ = metadata.version("errexplain")
except metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["__version__"]
