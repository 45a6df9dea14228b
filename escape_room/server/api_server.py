"""FastAPI server that exposes the escape room backend endpoints."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, Header, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel
import uvicorn

from escape_room.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from escape_room.core.escape_room_manager import EscapeRoomManager


class LoginPayload(BaseModel):
    """Payload schema for player login."""

    studentName: str
    collegeName: str


class ScorePayload(BaseModel):
    """Payload schema for level score submission."""

    studentID: int | str
    level: int
    score: int
    timeTaken: int
    totalQuestions: int


class AdminLoginPayload(BaseModel):
    username: str
    password: str


def _get_manager_dependency(manager: EscapeRoomManager):
    def dependency() -> EscapeRoomManager:
        return manager

    return dependency


def create_api_app(manager: EscapeRoomManager) -> FastAPI:
    """Create a FastAPI application wired to the provided manager."""
    app = FastAPI(title="EscapeQt API", version="0.1.0")
    manager_dep = _get_manager_dependency(manager)

    def require_admin(
        authorization: str | None = Header(default=None),
        escape_manager: EscapeRoomManager = Depends(manager_dep),
    ) -> None:
        if not authorization:
            raise HTTPException(status_code=401, detail="No token provided")
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise HTTPException(status_code=401, detail="Malformed token")
        if not escape_manager.is_admin_token_valid(token.strip()):
            raise HTTPException(status_code=401, detail="Invalid or expired token")

    @app.get("/ping", response_class=PlainTextResponse)
    def ping() -> str:
        return "pong"

    @app.post("/api/login")
    def login(
        payload: LoginPayload,
        escape_manager: EscapeRoomManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            student = escape_manager.login(payload.studentName, payload.collegeName)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"studentID": int(student.student_id), "currentLevel": 1}

    @app.get("/api/questions")
    def get_questions(escape_manager: EscapeRoomManager = Depends(manager_dep)) -> dict[str, object]:
        return escape_manager.get_all_questions()

    @app.post("/api/submit-score")
    def submit_score(
        payload: ScorePayload,
        escape_manager: EscapeRoomManager = Depends(manager_dep),
    ) -> dict[str, str]:
        try:
            escape_manager.submit_score(
                str(payload.studentID),
                payload.level,
                payload.score,
                payload.timeTaken,
                payload.totalQuestions,
            )
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"message": "Score saved"}

    @app.get("/api/player-score/{student_id}/{level}")
    def get_player_score(
        student_id: str,
        level: int,
        escape_manager: EscapeRoomManager = Depends(manager_dep),
    ) -> dict[str, int]:
        entry = escape_manager.get_player_score(student_id, level)
        if entry is None:
            raise HTTPException(status_code=404, detail="Score not found")
        return {
            "score": entry.score,
            "timeTaken": entry.time_taken,
            "totalQuestions": entry.total_questions,
        }

    @app.get("/api/leaderboard/{level}")
    def get_leaderboard(
        level: int,
        escape_manager: EscapeRoomManager = Depends(manager_dep),
    ) -> list[dict[str, object]]:
        return [row.to_payload() for row in escape_manager.get_leaderboard(level)]

    @app.get("/api/check-eligibility")
    def check_eligibility(
        studentID: str | None = None,
        level: int | None = None,
        escape_manager: EscapeRoomManager = Depends(manager_dep),
    ) -> dict[str, bool]:
        if not studentID or level is None:
            return {"eligible": False}
        return {"eligible": escape_manager.is_eligible(studentID, level)}

    @app.get("/api/rules")
    def get_rules(escape_manager: EscapeRoomManager = Depends(manager_dep)) -> dict[str, list[str]]:
        return {"rules": escape_manager.get_rules()}

    @app.post("/api/admin/login")
    def admin_login(
        payload: AdminLoginPayload,
        escape_manager: EscapeRoomManager = Depends(manager_dep),
    ) -> dict[str, str]:
        token = escape_manager.admin_login(payload.username, payload.password)
        if token is None:
            raise HTTPException(status_code=401, detail="Invalid admin credentials")
        return {"token": token}

    @app.post("/api/admin/reset", dependencies=[Depends(require_admin)])
    def reset_leaderboard(escape_manager: EscapeRoomManager = Depends(manager_dep)) -> dict[str, str]:
        escape_manager.reset_leaderboard()
        return {"message": "All leaderboard scores have been reset."}

    return app


def run_api_server(
    manager: EscapeRoomManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve the API in the foreground until interrupted."""
    app = create_api_app(manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    uvicorn.Server(config).run()


def start_api_server(
    manager: EscapeRoomManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    thread = Thread(
        target=run_api_server,
        args=(manager, host, port),
        name="EscapeRoomApiServer",
        daemon=True,
    )
    thread.start()
    return thread
