# File: sitemap_ping/verify.py
"""sitemap_ping.verify: checks that the build output contains a sitemap."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, Union

from sitemap_ping.logger import logger
from sitemap_ping.models import PhaseOutcome, Proceed, SitemapLocation, Stop

__all__ = ["FALLBACK_PATHS", "FileChecker", "LocalFileChecker", "find_sitemap"]

FALLBACK_PATHS: Sequence[str] = ("/sitemap.xml", "/sitemap-index.xml", "/sitemap-0.xml")


class FileChecker(Protocol):
    def exists(self, root: Path, relative: str) -> bool: ...


class LocalFileChecker:
    """Checks against the local build output. Read-only; only regular files count."""

    def exists(self, root: Path, relative: str) -> bool:
        # "/sitemap.xml" is relative to the publish dir, not the filesystem root
        target = Path(root) / relative.lstrip("/")
        found = target.is_file()
        logger.debug("Sitemap candidate %s -> %s", target, found)
        return found


def find_sitemap(
    publish_dir: Union[str, Path],
    sitemap_path: str,
    checker: FileChecker | None = None,
    fallbacks: Sequence[str] = FALLBACK_PATHS,
) -> PhaseOutcome[SitemapLocation]:
    """Look for the configured sitemap, then each fallback in order.

    Only existence is checked. Finding a fallback is logged but the
    configured path is kept in the returned location for URL building.
    """
    checker = checker or LocalFileChecker()
    root = Path(publish_dir)

    if checker.exists(root, sitemap_path):
        return Proceed(SitemapLocation(path=sitemap_path, configured=sitemap_path))

    for alt in fallbacks:
        if checker.exists(root, alt):
            logger.info("Sitemap not at %s, using %s instead.", sitemap_path, alt)
            return Proceed(SitemapLocation(path=alt, configured=sitemap_path))

    logger.warning("Sitemap ping: no sitemap found at %s. Skipping.", sitemap_path)
    return Stop("sitemap missing")
