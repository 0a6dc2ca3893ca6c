"""
Source Parser - turns raw pin strings from settings files into specs.

Recognised forms::

    npm:left-pad@1.3.0
    npm:@scope/pkg
    git:github.com/org/repo@main
    git:git@github.com:org/repo.git@<40-hex sha>
    https://github.com/org/repo@v1.0.0

Local paths (``/abs``, ``./rel``, ``../up``) and anything unrecognised are
dropped without complaint.
"""

import re
from typing import Optional, Tuple

from ..models.package_spec import NpmSpec, GitSpec, PackageSpec
from .git_url import is_absolute_url, normalize_git_url, extract_display_name

NPM_PREFIX = 'npm:'
GIT_PREFIX = 'git:'

NPM_PATTERN = re.compile(r'^(@?[^@]+(?:/[^@]+)?)(?:@(.+))?$')
GIT_PATTERN = re.compile(r'^(.+?)(?:@([^@]+))?$')
LOCAL_PREFIXES = ('/', './', '..')


def is_local_path(source: str) -> bool:
    return source.startswith(LOCAL_PREFIXES)


def parse_npm_source(source: str) -> Optional[NpmSpec]:
    """Parse an ``npm:`` source, or return None."""
    if not source.startswith(NPM_PREFIX):
        return None

    match = NPM_PATTERN.match(source[len(NPM_PREFIX):].strip())
    if not match:
        return None
    return NpmSpec(name=match.group(1), version=match.group(2), source=source)


def _is_user_part(url: str, ref: str) -> bool:
    """True when the @ being split on separates a URL user from its host."""
    # git@host:org/repo; ref names can never contain ":"
    if ':' in ref:
        return True
    # ssh://git@host/org/repo
    return is_absolute_url(url) and '/' not in url.split('://', 1)[1]


def _split_ref(value: str) -> Optional[Tuple[str, Optional[str]]]:
    match = GIT_PATTERN.match(value)
    if not match:
        return None

    url, ref = match.group(1), match.group(2)
    if ref is not None and _is_user_part(url, ref):
        return value, None
    return url, ref


def parse_git_source(source: str) -> Optional[GitSpec]:
    """Parse a ``git:`` prefixed source or an absolute git URL."""
    if source.startswith(GIT_PREFIX):
        value = source[len(GIT_PREFIX):].strip()
    elif is_absolute_url(source):
        value = source
    else:
        return None

    split = _split_ref(value)
    if not split:
        return None

    url, ref = split
    normalized = normalize_git_url(url)
    return GitSpec(
        url=normalized,
        ref=ref,
        source=source,
        display_name=extract_display_name(normalized),
    )


def parse_source(source: str) -> Optional[PackageSpec]:
    """
    Parse a raw source string into a spec.

    Args:
        source: Pin string as written in a settings file

    Returns:
        NpmSpec, GitSpec, or None for local paths and unknown forms
    """
    if not source or is_local_path(source):
        return None

    npm_spec = parse_npm_source(source)
    if npm_spec:
        return npm_spec

    return parse_git_source(source)
