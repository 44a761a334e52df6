"""
- HTTP client for the Wordle API (used by wordle-cli)
Thin wrapper around requests: builds URLs, adds the bearer token and turns
error responses into ApiError with the server's "detail" message.
"""

from typing import Any, Dict, Optional

import requests

DEFAULT_TIMEOUT = 10.0


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class WordleClient:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        verify: bool | str = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        # False or a CA bundle path for self-signed dev certs
        self.verify = verify
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> requests.Response:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return self.session.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            headers=headers,
            timeout=self.timeout,
            verify=self.verify,
        )

    @staticmethod
    def _json_or_raise(response: requests.Response) -> Dict[str, Any]:
        if response.status_code >= 400:
            try:
                message = response.json().get("detail", response.reason)
            except ValueError:
                message = response.text or response.reason
            raise ApiError(response.status_code, str(message))
        return response.json()

    def health(self) -> bool:
        try:
            response = self._request("GET", "/api/health")
        except requests.RequestException:
            return False
        return response.status_code == 200

    def new_game(self) -> Dict[str, Any]:
        return self._json_or_raise(self._request("POST", "/api/game/new", json={}))

    def get_game(self, game_id: str) -> Dict[str, Any]:
        return self._json_or_raise(self._request("GET", f"/api/game/{game_id}"))

    def guess(self, game_id: str, word: str) -> Dict[str, Any]:
        return self._json_or_raise(self._request("POST", f"/api/game/{game_id}/guess", json={"word": word}))
