from app.core.config import Settings, settings as default_settings
from app.models.order import ColorMode


def rate_for(color_mode: str, settings: Settings = default_settings) -> int:
    """Cents per page for the given color mode."""
    if ColorMode(color_mode) == ColorMode.COLOR:
        return settings.COLOR_PRICE_CENTS
    return settings.BW_PRICE_CENTS


def calculate_amount_cents(pages: int, copies: int, color_mode: str, settings: Settings = default_settings) -> int:
    """
    Price a print job.

    Args:
        pages: Page count of the document, at least 1
        copies: Number of copies, at least 1
        color_mode: 'bw' or 'color'
        settings: Settings carrying the per-page rates

    Returns:
        int: pages * copies * rate, in cents
    """
    if pages < 1:
        raise ValueError(f"pages must be at least 1, got {pages}")
    if copies < 1:
        raise ValueError(f"copies must be at least 1, got {copies}")
    return pages * copies * rate_for(color_mode, settings)
