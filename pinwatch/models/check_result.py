"""
Check Result models.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List


@dataclass
class PackageUpdate:
    """An available update for one pinned package.

    ``current`` and ``latest`` are already formatted for display: raw
    version strings for npm, short SHAs for git.
    """

    name: str
    current: str
    latest: str
    source: str
    compare_url: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name} {self.current}→{self.latest}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = {
            'name': self.name,
            'current': self.current,
            'latest': self.latest,
            'source': self.source,
        }
        if self.compare_url:
            data['compareUrl'] = self.compare_url
        return data


@dataclass
class PackageOutcome:
    """Result of resolving a single spec against its upstream."""

    UPDATE = 'update'
    UNPINNED = 'unpinned'
    ERROR = 'error'
    UP_TO_DATE = 'up_to_date'

    status: str
    label: str
    update: Optional[PackageUpdate] = None
    message: Optional[str] = None

    @classmethod
    def updated(cls, update: PackageUpdate) -> 'PackageOutcome':
        return cls(status=cls.UPDATE, label=update.name, update=update)

    @classmethod
    def unpinned(cls, label: str) -> 'PackageOutcome':
        return cls(status=cls.UNPINNED, label=label)

    @classmethod
    def failed(cls, label: str, message: str) -> 'PackageOutcome':
        return cls(status=cls.ERROR, label=label, message=message)

    @classmethod
    def up_to_date(cls, label: str) -> 'PackageOutcome':
        return cls(status=cls.UP_TO_DATE, label=label)


@dataclass
class CheckResult:
    """Aggregate report of one update check.

    Every checked spec lands in at most one bucket; specs that are up to
    date land in none.
    """

    updates: List[PackageUpdate] = field(default_factory=list)
    skipped_unpinned: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    check_time: datetime = field(default_factory=datetime.now)

    def add(self, outcome: PackageOutcome) -> None:
        """File an outcome into its bucket."""
        if outcome.status == PackageOutcome.UPDATE:
            self.updates.append(outcome.update)
        elif outcome.status == PackageOutcome.UNPINNED:
            self.skipped_unpinned.append(outcome.label)
        elif outcome.status == PackageOutcome.ERROR:
            self.errors.append(outcome.message or f"Failed to check {outcome.label}")

    def __str__(self) -> str:
        lines = [f"[{self.status.upper()}] {len(self.updates)} update(s), "
                 f"{len(self.skipped_unpinned)} unpinned, {len(self.errors)} error(s)"]
        for update in self.updates:
            lines.append(f"  {update}")
        for error in self.errors:
            lines.append(f"  ! {error}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'updates': [u.to_dict() for u in self.updates],
            'skippedUnpinned': list(self.skipped_unpinned),
            'errors': list(self.errors),
            'checkTime': self.check_time.isoformat() if self.check_time else None,
        }

    @property
    def has_updates(self) -> bool:
        return bool(self.updates)

    @property
    def is_success(self) -> bool:
        """Check if every spec could be resolved."""
        return not self.errors

    @property
    def status(self) -> str:
        """Get status string."""
        if self.updates:
            return 'updated'
        if self.errors:
            return 'error'
        return 'unchanged'
