"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class Storage(ABC):
    """Abstract base class for weight table and config storage."""

    @abstractmethod
    def load_config(self) -> dict:
        """Load configuration. Returns config dict."""
        pass

    @abstractmethod
    def load_weights(self, user_id: str = "default") -> dict | None:
        """Load a user's selector snapshot {weights, recent}. Returns None if not found."""
        pass

    @abstractmethod
    def save_weights(self, state: dict, user_id: str = "default") -> None:
        """Save a user's selector snapshot."""
        pass

    @abstractmethod
    def list_users(self) -> list[str]:
        """List all user IDs with a stored weight table."""
        pass

    @abstractmethod
    def delete_user(self, user_id: str) -> bool:
        """Delete a user's weight table. Returns True if something was deleted."""
        pass
