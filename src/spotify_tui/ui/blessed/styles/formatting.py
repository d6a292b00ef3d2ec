"""Formatting helper functions."""

from typing import Any, Optional


def format_time(milliseconds: Optional[int]) -> str:
    """
    Format milliseconds as M:SS (or H:MM:SS for long podcast episodes).

    Args:
        milliseconds: Duration or position in milliseconds

    Returns:
        Formatted time string

    Examples:
        >>> format_time(61000)
        '1:01'
        >>> format_time(3723000)
        '1:02:03'
    """
    total_seconds = max(int((milliseconds or 0) // 1000), 0)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def artist_names(item: Optional[dict[str, Any]]) -> str:
    """Comma separated artist names of a track or album payload."""
    if not item:
        return ""
    return ", ".join(a.get("name", "") for a in item.get("artists") or [] if a)


def item_subtitle(item: Optional[dict[str, Any]]) -> str:
    """Second line under a playing item: the artists of a track, the show of an episode."""
    if not item:
        return ""
    if item.get("type") == "episode":
        return (item.get("show") or {}).get("name", "")
    return artist_names(item)


def liked_marker(item_id: Optional[str], liked_ids: set[str]) -> str:
    return "♥ " if item_id and item_id in liked_ids else "  "
