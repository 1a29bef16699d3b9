"""REST API client for dojo server."""

import requests


class DojoAPIClient:
    """Client for communicating with the dojo REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        response = self.session.post(f"{self.base_url}{endpoint}", json=data or {})
        response.raise_for_status()
        return response.json()

    def _delete(self, endpoint: str, params: dict = None) -> dict:
        """Make a DELETE request."""
        response = self.session.delete(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_kana_groups(self) -> dict:
        return self._get("/api/kana/groups")

    def start_drill(self, groups: list[str] = None, items: list[dict] = None,
                    reverse: bool = False) -> dict:
        """Start a drill. Returns the first prompt with its drill_id."""
        return self._post("/api/drills", {
            'user_id': self.user_id,
            'groups': groups or [],
            'items': items or [],
            'reverse': reverse
        })

    def get_drill(self, drill_id: str) -> dict:
        """Get the current prompt and stats of a drill."""
        return self._get(f"/api/drills/{drill_id}")

    def submit_answer(self, drill_id: str, answer: str) -> dict:
        """Submit an answer for the current character."""
        return self._post(f"/api/drills/{drill_id}/answer", {'answer': answer})

    def skip(self, drill_id: str) -> dict:
        return self._post(f"/api/drills/{drill_id}/skip")

    def get_weak_characters(self, drill_id: str, limit: int = 10) -> dict:
        return self._get(f"/api/drills/{drill_id}/weak", {'limit': limit})

    def end_drill(self, drill_id: str) -> dict:
        return self._delete(f"/api/drills/{drill_id}")

    def get_weights(self) -> dict:
        """Get the user's weight table."""
        return self._get("/api/weights")

    def reset_weights(self) -> dict:
        return self._delete("/api/weights", {'user_id': self.user_id})
