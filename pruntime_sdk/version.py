"""
Version lookup for the pRuntime console.

Installed distributions report their metadata version; a source checkout
reads ``pyproject.toml`` next to the package.
"""
import importlib.metadata
import pathlib

import tomli

DISTRIBUTION = "pruntime-console"
FALLBACK_VERSION = "0.1.0"
PYPROJECT_PATH = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def _pyproject_version(path: pathlib.Path = PYPROJECT_PATH) -> str:
    try:
        with path.open("rb") as f:
            return tomli.load(f)["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        return FALLBACK_VERSION


def get_version() -> str:
    """Return the console version, preferring installed package metadata."""
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return _pyproject_version()


__version__ = get_version()
