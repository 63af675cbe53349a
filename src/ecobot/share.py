"""Social share link for a finished footprint."""

from __future__ import annotations

import logging
import webbrowser
from urllib.parse import quote

from ecobot.settings import DEFAULT_SHARE_BASE_URL

LOGGER = logging.getLogger(__name__)

__all__ = ["build_share_text", "build_share_url", "open_share_link"]


def build_share_text(total_tons: float) -> str:
    """Return the pre-filled post announcing ``total_tons``."""

    return (
        f"I just calculated my carbon footprint: {total_tons:.2f} tons CO2/year "
        "using EcoBot! Taking action to reduce my environmental impact. "
        "#CarbonFootprint #ClimateAction #Sustainability"
    )


def build_share_url(total_tons: float, base_url: str = DEFAULT_SHARE_BASE_URL) -> str:
    """Return an intent URL with the share text URL-encoded."""

    return f"{base_url}?text={quote(build_share_text(total_tons), safe='')}"


def open_share_link(url: str) -> bool:
    """Open ``url`` in the user's browser.

    Returns:
        ``True`` when a browser accepted the URL.
    """

    opened = webbrowser.open(url, new=2)
    if not opened:
        LOGGER.warning("No browser available to open share link")
    return opened
