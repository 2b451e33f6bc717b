# sitemap_ping/__init__.py
"""
sitemap_ping package initializer.
Defines package version and exposes the hook and CLI entry points.
"""
__version__ = "0.1.0"

from sitemap_ping.hook import on_success, run_hook
from sitemap_ping.cli import cli as main_cli

__all__ = ["__version__", "on_success", "run_hook", "main_cli"]
