"""Marker icon set handed to the map renderer."""
import logging

from historymap.schemas.views import IconSpec, MarkerIconSet

logger = logging.getLogger(__name__)


def init_marker_icons(icon_base_url: str, pin_icon_url: str, pin_size: int = 32) -> MarkerIconSet:
    """
    Build the icon set once at startup.

    The default marker images live under ``icon_base_url``; the detail page
    pin is a single square image anchored at its bottom centre.
    """
    base = icon_base_url.rstrip("/")
    icons = MarkerIconSet(
        default=IconSpec(
            icon_url=f"{base}/marker-icon.png",
            icon_retina_url=f"{base}/marker-icon-2x.png",
            shadow_url=f"{base}/marker-shadow.png",
        ),
        pin=IconSpec(
            icon_url=pin_icon_url,
            icon_retina_url=pin_icon_url,
            icon_size=(pin_size, pin_size),
            icon_anchor=(pin_size // 2, pin_size),
            popup_anchor=(0, -pin_size),
        ),
    )
    logger.info(f"Marker icons initialized from {base}")
    return icons
