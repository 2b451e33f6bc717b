# File: sitemap_ping/hook.py
"""sitemap_ping.hook: post-deploy entry point running the three phases in order.

Config resolution, sitemap check, then the ping fan-out. Each phase returns
``Proceed`` or ``Stop`` and the driver checks the tag before moving on. Nothing
here raises to the orchestrator: every ending is a successful run.
"""

from __future__ import annotations

import asyncio
from contextlib import AsyncExitStack
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

from sitemap_ping.config import PluginInputs, resolve_config
from sitemap_ping.logger import logger
from sitemap_ping.models import HookReport, PingTarget, RunStatus, Stop
from sitemap_ping.notifier import DEFAULT_TARGETS, AiohttpGetter, HttpGetter, Notifier
from sitemap_ping.verify import FileChecker, find_sitemap

__all__ = ["publish_dir_from", "on_success", "run_hook"]


def publish_dir_from(constants: Any) -> Union[str, Path]:
    """Read PUBLISH_DIR from a mapping or an object attribute."""
    if isinstance(constants, Mapping):
        value = constants.get("PUBLISH_DIR")
    else:
        value = getattr(constants, "PUBLISH_DIR", None)
    if not value:
        raise ValueError("constants.PUBLISH_DIR is not set")
    return value


async def _run(
    constants: Any,
    inputs: Union[PluginInputs, Mapping[str, Any], None],
    env: Optional[Mapping[str, str]],
    checker: Optional[FileChecker],
    getter: Optional[HttpGetter],
    targets: Sequence[PingTarget],
    timeout: Optional[float],
    concurrent: Optional[bool],
) -> HookReport:
    resolved = resolve_config(
        inputs, lambda: publish_dir_from(constants), env, timeout=timeout, concurrent=concurrent
    )
    if isinstance(resolved, Stop):
        return HookReport(RunStatus.UNRESOLVED)
    config = resolved.value

    found = find_sitemap(config.publish_dir, config.sitemap_path, checker)
    if isinstance(found, Stop):
        return HookReport(RunStatus.SITEMAP_MISSING, sitemap_url=config.sitemap_url)

    # the configured path builds the URL even when a fallback was found
    report = HookReport(RunStatus.NOTIFIED, sitemap_url=config.sitemap_url, location=found.value)
    async with AsyncExitStack() as stack:
        if getter is None:
            getter = await stack.enter_async_context(AiohttpGetter(config.timeout))
        notifier = Notifier(getter, targets, concurrent=config.concurrent)
        report.results = await notifier.notify(config.sitemap_url)
    return report


async def on_success(
    constants: Any,
    inputs: Union[PluginInputs, Mapping[str, Any], None] = None,
    utils: Any = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    checker: Optional[FileChecker] = None,
    getter: Optional[HttpGetter] = None,
    targets: Sequence[PingTarget] = DEFAULT_TARGETS,
    timeout: Optional[float] = None,
    concurrent: Optional[bool] = None,
) -> HookReport:
    """Run the hook once after a successful deploy.

    ``constants`` carries ``PUBLISH_DIR``; ``inputs`` may hold ``siteUrl`` and
    ``sitemapPath``; ``utils`` is accepted for the orchestrator contract and
    not used. ``env`` defaults to ``os.environ``. ``checker`` and ``getter``
    replace the filesystem and network access, mainly for tests.
    """
    try:
        return await _run(constants, inputs, env, checker, getter, targets, timeout, concurrent)
    except Exception as exc:
        logger.error("Sitemap ping failed unexpectedly: %s", exc)
        logger.debug("Traceback", exc_info=True)
        return HookReport(RunStatus.CRASHED)


def run_hook(
    constants: Any,
    inputs: Union[PluginInputs, Mapping[str, Any], None] = None,
    utils: Any = None,
    **kwargs: Any,
) -> HookReport:
    """Synchronous wrapper around :func:`on_success`."""
    return asyncio.run(on_success(constants, inputs, utils, **kwargs))
