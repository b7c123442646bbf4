"""evocycle — configuration-driven evolution cycle engine."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("evocycle")
except PackageNotFoundError:
    __version__ = "0.1.0"  # fallback for development
