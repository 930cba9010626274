"""
Command line interface for the pRuntime SDK.
"""
from .main import app, run

__all__ = ["app", "run"]
