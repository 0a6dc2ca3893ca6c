"""
Git remote URL helpers: normalisation, display names and compare links.
"""

import re
from typing import Optional

ABSOLUTE_URL = re.compile(r'^(?:https?|ssh|git)://')
SSH_SHORTHAND = re.compile(r'^git@([^:]+):(.+)$')
HOST_ORG_REPO = re.compile(r'^[^/:]+/[^/]+/[^/]+$')
ORG_REPO = re.compile(r'^[^/:]+/[^/]+$')
PINNED_SHA = re.compile(r'^[0-9a-f]{40}$', re.IGNORECASE)
GITHUB_REPO = re.compile(r'github\.com[/:]([^/]+/[^/]+)')

DEFAULT_GIT_HOST = 'github.com'
SHORT_SHA_LENGTH = 7


def is_absolute_url(url: str) -> bool:
    return bool(ABSOLUTE_URL.match(url))


def normalize_git_url(url: str) -> str:
    """
    Turn a git remote into a fetchable URL.

    Absolute URLs are kept, ``git@host:path`` becomes ``https://host/path``,
    ``host/org/repo`` gets an https scheme and ``org/repo`` is assumed to
    live on GitHub. Anything else is returned untouched and will fail later
    at fetch time.
    """
    if is_absolute_url(url):
        return url

    ssh_match = SSH_SHORTHAND.match(url)
    if ssh_match:
        return f"https://{ssh_match.group(1)}/{ssh_match.group(2)}"

    if HOST_ORG_REPO.match(url):
        return f"https://{url}"
    if ORG_REPO.match(url):
        return f"https://{DEFAULT_GIT_HOST}/{url}"

    return url


def extract_display_name(url: str) -> str:
    """Reduce a remote to its ``org/repo`` part for display."""
    ssh_match = SSH_SHORTHAND.match(url)
    if ssh_match:
        return ssh_match.group(2)

    if is_absolute_url(url):
        # everything after scheme://host/
        _, _, rest = url.partition('://')
        _, slash, path = rest.partition('/')
        if slash and path:
            return path

    # org/repo shorthand is already a display name
    return url


def build_compare_url(url: str, current: str, latest: str) -> Optional[str]:
    """GitHub compare link between two commits, or None for other hosts."""
    match = GITHUB_REPO.search(url)
    if not match:
        return None

    repo = re.sub(r'\.git$', '', match.group(1))
    return f"https://github.com/{repo}/compare/{current}...{latest}"


def is_pinned_sha(ref: Optional[str]) -> bool:
    """True only for a full 40 character hex commit id."""
    if not ref:
        return False
    return bool(PINNED_SHA.match(ref))


def short_sha(sha: str) -> str:
    return sha[:SHORT_SHA_LENGTH]
