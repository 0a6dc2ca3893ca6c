"""
Human readable renderings of check results.
"""

from typing import List

from ..models.check_result import PackageUpdate

SUMMARY_LIMIT = 3


def format_update_summary(updates: List[PackageUpdate], limit: int = SUMMARY_LIMIT) -> str:
    """One-line summary, e.g. ``foo 1.0.0→1.1.0, bar 2.0→3.0 (+2 more)``."""
    short = ", ".join(str(u) for u in updates[:limit])
    more = f" (+{len(updates) - limit} more)" if len(updates) > limit else ""
    return f"{short}{more}"


def format_detailed_updates(updates: List[PackageUpdate]) -> str:
    """One block per update, with the compare link on its own line."""
    lines = []
    for update in updates:
        line = f"  {update.name}: {update.current} → {update.latest}"
        if update.compare_url:
            line += f"\n    {update.compare_url}"
        lines.append(line)
    return "\n".join(lines)


def format_unpinned(names: List[str], limit: int = None) -> str:
    if limit is None or len(names) <= limit:
        return ", ".join(names)
    return f"{', '.join(names[:limit])} (+{len(names) - limit})"
