"""
Git remote handler.
Uses ``git ls-remote`` to read ref tips without cloning.
"""

import logging
import os
import re
import subprocess
from typing import Optional, Dict

from .base_handler import BaseHandler
from ..models.check_result import PackageOutcome, PackageUpdate
from ..models.package_spec import GitSpec
from ..utils.git_url import build_compare_url, is_pinned_sha, short_sha

DEFAULT_TIMEOUT = 10
DEFAULT_GIT = 'git'

SHA_LINE = re.compile(r'^([0-9a-f]{40})', re.IGNORECASE)

logger = logging.getLogger(__name__)


def git_ls_remote(
    url: str,
    ref: str,
    timeout: float = DEFAULT_TIMEOUT,
    executable: str = DEFAULT_GIT
) -> Optional[str]:
    """
    Read the commit a remote ref points at.

    The git process is killed if it outlives ``timeout``.

    Args:
        url: Remote URL
        ref: Exact ref to list (``HEAD``, ``refs/tags/v1``, ...)
        timeout: Seconds before the process is killed
        executable: git binary to run

    Returns:
        40 character SHA from the first output line, or None
    """
    command = [executable, 'ls-remote', url, ref]
    # never block on a credential prompt
    env = {**os.environ, 'GIT_TERMINAL_PROMPT': '0'}

    try:
        logger.debug(f"Executing: {' '.join(command)}")
        result = subprocess.run(
            command,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"git ls-remote {url} {ref} timed out after {timeout}s")
        return None
    except OSError as e:
        logger.warning(f"Could not run {executable}: {e}")
        return None

    if result.returncode != 0:
        logger.warning(f"git ls-remote {url} {ref} failed with code {result.returncode}: "
                       f"{result.stderr.strip()}")
        return None

    if not result.stdout:
        return None

    first_line = result.stdout.splitlines()[0]
    match = SHA_LINE.match(first_line)
    return match.group(1) if match else None


def fetch_latest_git_sha(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    executable: str = DEFAULT_GIT
) -> Optional[str]:
    """Tip of the remote's default branch."""
    return git_ls_remote(url, 'HEAD', timeout, executable)


def resolve_git_ref(
    url: str,
    ref: str,
    timeout: float = DEFAULT_TIMEOUT,
    executable: str = DEFAULT_GIT
) -> Optional[Dict[str, str]]:
    """
    Resolve a tag or branch name to a commit.

    Tags are probed before branches, so a tag and a branch sharing a name
    always resolve as the tag. That tie-break is arbitrary.

    Returns:
        ``{'sha': ..., 'kind': 'tag' | 'branch'}`` or None
    """
    tag_sha = git_ls_remote(url, f"refs/tags/{ref}", timeout, executable)
    if tag_sha:
        return {'sha': tag_sha, 'kind': 'tag'}

    branch_sha = git_ls_remote(url, f"refs/heads/{ref}", timeout, executable)
    if branch_sha:
        return {'sha': branch_sha, 'kind': 'branch'}

    return None


class GitHandler(BaseHandler):
    """Handler for specs pinned to a git commit, tag or branch."""

    def get_kind(self) -> str:
        return "git"

    @property
    def timeout(self) -> float:
        return self.get_setting('git', 'timeout', DEFAULT_TIMEOUT)

    @property
    def executable(self) -> str:
        return self.get_setting('git', 'executable', DEFAULT_GIT)

    def check(self, spec: GitSpec) -> PackageOutcome:
        label = spec.label
        if not spec.ref:
            return PackageOutcome.unpinned(label)

        head = fetch_latest_git_sha(spec.url, self.timeout, self.executable)
        if not head:
            self.handle_error(label)
            return PackageOutcome.failed(label, f"Failed to check {label}")

        if is_pinned_sha(spec.ref):
            return self._check_sha(spec, head)
        return self._check_named_ref(spec, head)

    def _check_sha(self, spec: GitSpec, head: str) -> PackageOutcome:
        if spec.ref.lower() == head.lower():
            return PackageOutcome.up_to_date(spec.label)

        self.logger.info(f"{spec.label}: {short_sha(spec.ref)} -> {short_sha(head)}")
        return PackageOutcome.updated(PackageUpdate(
            name=spec.label,
            current=short_sha(spec.ref),
            latest=short_sha(head),
            source=spec.source,
            compare_url=build_compare_url(spec.url, spec.ref, head),
        ))

    def _check_named_ref(self, spec: GitSpec, head: str) -> PackageOutcome:
        resolved = resolve_git_ref(spec.url, spec.ref, self.timeout, self.executable)
        if not resolved:
            self.handle_error(f"{spec.label}@{spec.ref}")
            return PackageOutcome.failed(spec.label, f"Failed to resolve {spec.label}@{spec.ref}")

        sha = resolved['sha']
        if sha.lower() == head.lower():
            return PackageOutcome.up_to_date(spec.label)

        self.logger.info(f"{spec.label}: {spec.ref} ({resolved['kind']}) {short_sha(sha)} "
                         f"-> HEAD {short_sha(head)}")
        return PackageOutcome.updated(PackageUpdate(
            name=spec.label,
            current=f"{spec.ref} ({short_sha(sha)})",
            latest=f"HEAD ({short_sha(head)})",
            source=spec.source,
            compare_url=build_compare_url(spec.url, sha, head),
        ))
