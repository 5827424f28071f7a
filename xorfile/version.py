"""Package version, taken from the engine so the CLI and metadata agree."""

from .engine import xorfile


__version__ = xorfile.ENGINE_VERSION


__all__ = ["__version__"]
