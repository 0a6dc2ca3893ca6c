"""
Version comparison for exact dotted version strings.

Only plain ``1.2.3`` style versions are ordered numerically. Anything with a
non-numeric component (date stamps, ``1.2.x``, calendar schemes) degrades to
a plain string comparison, which is good enough to spot "different" but not
to order exotic schemes correctly. Range operators (``^``, ``~``) are not
understood at all.
"""

import re
from typing import List, Optional

# an empty component ("1.") counts as 0
_NUMERIC = re.compile(r'^\d*$')


def normalize_version(version: str) -> str:
    """Trim whitespace and a leading ``v``."""
    version = version.strip()
    if version.startswith('v'):
        version = version[1:]
    return version


def _release_part(version: str) -> str:
    # 1.2.3-beta.1 -> 1.2.3
    return normalize_version(version).split('-', 1)[0]


def _numeric_parts(release: str) -> Optional[List[int]]:
    parts = release.split('.')
    if not all(_NUMERIC.match(p) for p in parts):
        return None
    return [int(p) if p else 0 for p in parts]


def compare_version(a: str, b: str) -> int:
    """
    Compare two version strings.

    Args:
        a: First version
        b: Second version

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b
    """
    ra = _release_part(a)
    rb = _release_part(b)
    pa = _numeric_parts(ra)
    pb = _numeric_parts(rb)

    if pa is None or pb is None:
        if ra == rb:
            return 0
        return 1 if ra > rb else -1

    length = max(len(pa), len(pb))
    for i in range(length):
        av = pa[i] if i < len(pa) else 0
        bv = pb[i] if i < len(pb) else 0
        if av > bv:
            return 1
        if av < bv:
            return -1
    return 0


def is_newer(latest: str, current: str) -> bool:
    """True when ``latest`` orders strictly after ``current``."""
    return compare_version(latest, current) > 0
