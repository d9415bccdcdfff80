"""REST API client for lingodrill server."""

import requests


class LingoAPIClient:
    """Client for communicating with the lingodrill REST API."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        response = self.session.get(f"{self.base_url}{endpoint}", params=params or {})
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        response = self.session.post(f"{self.base_url}{endpoint}", json=data or {})
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        return self._get("/")

    def get_status(self) -> dict:
        return self._get("/api/status")

    def get_mistakes(self, limit: int = 20) -> dict:
        """Get the most-missed entries."""
        return self._get("/api/mistakes", {'limit': limit})

    def start_round(self, kind: str) -> dict:
        return self._post("/api/rounds", {'kind': kind})

    def get_round(self, round_id: str) -> dict:
        return self._get(f"/api/rounds/{round_id}")

    def answer(self, round_id: str, choice: str) -> dict:
        """Answer a quiz question or select a capture bubble."""
        return self._post(f"/api/rounds/{round_id}/answer", {'choice': choice})

    def tick(self, round_id: str, elapsed: float) -> dict:
        return self._post(f"/api/rounds/{round_id}/tick", {'elapsed': elapsed})

    def reveal_complete(self, round_id: str) -> dict:
        return self._post(f"/api/rounds/{round_id}/reveal-complete")

    def restart(self, round_id: str) -> dict:
        return self._post(f"/api/rounds/{round_id}/restart")

    def teardown(self, round_id: str) -> dict:
        response = self.session.delete(f"{self.base_url}/api/rounds/{round_id}")
        response.raise_for_status()
        return response.json()
