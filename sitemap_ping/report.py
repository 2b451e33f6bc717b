# sitemap_ping/report.py

"""
JSON report of a hook run.

Serializes a HookReport to a file on request; the hook never writes one by itself.
"""
import json
from pathlib import Path

from sitemap_ping.models import HookReport


def render_json(report: HookReport, output_path: Path | str) -> Path:
    """
    Save *report* as JSON at *output_path* and return the written path.

    Example:
    ```python
    from sitemap_ping.report import render_json
    render_json(report, 'reports/ping.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)

    return output
