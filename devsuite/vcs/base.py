"""
Base interface for VCS providers.
"""

from abc import ABC, abstractmethod
from typing import Any

from devsuite.checks.base import RepositorySnapshot


class BaseVCSProvider(ABC):
    """Fetches repository facts and normalizes them for the health checks."""

    @abstractmethod
    def get_platform_name(self) -> str:
        """Return the platform identifier (e.g. 'github')."""

    @abstractmethod
    def validate_credentials(self) -> bool:
        """Return True if the provider has usable credentials."""

    @abstractmethod
    def get_repository_url(self, owner: str, repo: str) -> str:
        """Return the web URL of a repository."""

    @abstractmethod
    def get_snapshot(self, owner: str, repo: str) -> RepositorySnapshot:
        """
        Fetch everything the health checks need.

        Implementations must turn partial failures (missing README, no
        license, unreadable contributor list) into absent values instead of
        raising.
        """

    @abstractmethod
    def get_issues(
        self, owner: str, repo: str, state: str = "open", limit: int = 100
    ) -> list[dict[str, Any]]:
        """Fetch issues with at least ``title``, ``body``, ``number``, ``labels``."""
