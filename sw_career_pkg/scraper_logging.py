import os
import sys
import tempfile
import time
from typing import List, Optional

from . import config


def debug(message: str) -> None:
    """Print a checkpoint line to stderr when SWCAREER_DEBUG is enabled."""
    if config.DEBUG:
        print(f"[sw-career] {message}", file=sys.stderr)


def add_debug(debug_list: List[str], tag: str) -> None:
    """Append a debug tag to the in-flight list.

    Tags are short and never contain credentials, so they can be returned
    to API callers as-is.
    """
    debug_list.append(tag)


async def save_debug_files(page, prefix: str = "debug") -> Optional[dict]:
    """Save a full-page screenshot and HTML content to the temp dir.

    Returns a map with file paths or None if saving fails. Only called when
    a run is started with `debug` enabled.
    """
    try:
        ts = int(time.time())
        base = os.path.join(tempfile.gettempdir(), f"{prefix}_{ts}")
        screenshot_path = f"{base}.png"
        html_path = f"{base}.html"
        await page.screenshot(path=screenshot_path, full_page=True)
        content = await page.content()
        with open(html_path, "w", encoding="utf-8") as f:
            f.write(content)
        return {"screenshot": screenshot_path, "html": html_path}
    except Exception as e:
        debug(f"Saving debug files failed: {e}")
        return None
