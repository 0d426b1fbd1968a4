"""asmsplit: find, catalog and cut functions in glabel-style assembly listings."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("asmsplit")
except PackageNotFoundError:
    __version__ = "dev"
