"""File-based storage implementation."""

import json
import logging
import os
import re

from core.interfaces import Storage

logger = logging.getLogger(__name__)

# User ids end up in file names
USER_ID_RE = re.compile(r"[A-Za-z0-9_-]+")


class FileStorage(Storage):
    """File-based storage implementation."""

    def __init__(self, config_file: str = None, state_dir: str = None):
        self.config_file = config_file or os.path.expanduser('~/.config/dojo/config.json')
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.state_dir = state_dir or project_root

    def _get_weights_file(self, user_id: str) -> str:
        """Get weight table file path for a user."""
        if not USER_ID_RE.fullmatch(user_id):
            raise ValueError(f"Invalid user id: {user_id!r}")
        if user_id == "default":
            return os.path.join(self.state_dir, 'dojo_weights.json')
        return os.path.join(self.state_dir, f'dojo_weights_{user_id}.json')

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            raise FileNotFoundError(
                f"Config file not found at {self.config_file}\n"
                f'Please create it with: {{"correct_factor": 0.85, "wrong_factor": 1.3}}'
            )
        with open(self.config_file, 'r') as f:
            return json.load(f)

    def load_weights(self, user_id: str = "default") -> dict | None:
        weights_file = self._get_weights_file(user_id)
        if os.path.exists(weights_file):
            try:
                with open(weights_file, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"Error loading weights for {user_id}: {e}")
                return None
        return None

    def save_weights(self, state: dict, user_id: str = "default") -> None:
        weights_file = self._get_weights_file(user_id)
        os.makedirs(self.state_dir, exist_ok=True)
        with open(weights_file, 'w', encoding='utf-8') as f:
            json.dump(state, f, indent=2, ensure_ascii=False)

    def list_users(self) -> list[str]:
        """List all existing user IDs."""
        users = []
        if os.path.exists(self.state_dir):
            for filename in os.listdir(self.state_dir):
                if filename == 'dojo_weights.json':
                    users.append('default')
                elif filename.startswith('dojo_weights_') and filename.endswith('.json'):
                    user_id = filename[13:-5]  # Remove 'dojo_weights_' and '.json'
                    users.append(user_id)
        return sorted(users)

    def delete_user(self, user_id: str) -> bool:
        """Delete a user's weight table file."""
        weights_file = self._get_weights_file(user_id)
        if os.path.exists(weights_file):
            os.remove(weights_file)
            return True
        return False
