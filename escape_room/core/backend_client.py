"""HTTP client for the escape room backend."""

from __future__ import annotations

import logging
from typing import Any, Iterable

import requests

from escape_room.constants.network_constants import BACKEND_TIMEOUT_SECONDS, DEFAULT_BACKEND_URL
from escape_room.core.models import LeaderboardRow, PlayerIdentity, Question, ScoreSubmission

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Raised for transport failures and non-2xx backend responses."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class HttpBackendClient:
    """Thin wrapper over the backend's JSON endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BACKEND_URL,
        timeout: float = BACKEND_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = session or requests.Session()

    def login(self, name: str, college: str) -> PlayerIdentity:
        name = name.strip()
        college = college.strip()
        if not name or not college:
            raise ValueError("Missing student name or college name")
        body = self._request("POST", "/api/login", json={"studentName": name, "collegeName": college})
        return PlayerIdentity(student_id=str(body["studentID"]), name=name, college=college)

    def get_questions(self, level: int) -> list[Question]:
        body = self._request("GET", "/api/questions")
        raw_questions = body.get(f"level{level}") or []
        return [Question.from_wire(item) for item in raw_questions]

    def submit_score(self, submission: ScoreSubmission) -> dict[str, Any]:
        return self._request("POST", "/api/submit-score", json=submission.to_payload())

    def get_player_score(self, student_id: str, level: int) -> dict[str, Any] | None:
        try:
            return self._request("GET", f"/api/player-score/{student_id}/{level}")
        except BackendError as exc:
            if exc.status_code == 404:
                return None
            raise

    def get_level_scores(self, student_id: str, levels: Iterable[int]) -> dict[int, int]:
        """Recorded score per level; levels without a score are left out."""
        scores: dict[int, int] = {}
        for level in levels:
            body = self.get_player_score(student_id, level)
            if body is not None:
                scores[level] = int(body["score"])
        return scores

    def get_leaderboard(self, level: int) -> list[LeaderboardRow]:
        rows = self._request("GET", f"/api/leaderboard/{level}")
        return [
            LeaderboardRow(
                student_id=str(row["id"]),
                name=row["name"],
                college=row["college"],
                score=row["score"],
                total=row["total"],
                time_taken=row["timeTaken"],
            )
            for row in rows
        ]

    def check_eligibility(self, student_id: str, level: int) -> bool:
        try:
            body = self._request(
                "GET",
                "/api/check-eligibility",
                params={"studentID": student_id, "level": level},
            )
        except BackendError as exc:
            logger.error("Eligibility check failed: %s", exc)
            return False
        return bool(body.get("eligible", False))

    def get_rules(self) -> list[str]:
        body = self._request("GET", "/api/rules")
        return list(body.get("rules", []))

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self._http.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise BackendError(f"Network error: {exc}") from exc

        if not response.ok:
            message = "Network response was not ok"
            try:
                body = response.json()
            except ValueError:
                body = {}
            if isinstance(body, dict):
                message = body.get("detail") or body.get("error") or message
            raise BackendError(str(message), status_code=response.status_code)
        return response.json()
