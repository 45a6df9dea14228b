"""Level and proctoring constants shared across the client and the backend."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

QUESTIONS_PER_LEVEL: int = 8
LEVEL_DURATION_SECONDS: int = 300
TIMER_INTERVAL_MS: int = 1000

VIOLATION_THRESHOLD: int = 3
VIOLATION_DEBOUNCE_MS: int = 2000
FORCED_SUBMISSION_DELAY_MS: int = 1000
SPLIT_SCREEN_RATIO: float = 0.7

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
QUESTIONS_DIR: Path = DATA_DIR / "questions"
RULES_FILE: Path = DATA_DIR / "rules.json"
SESSIONS_DIR: Path = Path.home() / ".escape_room" / "sessions"


@dataclass(frozen=True, slots=True)
class LevelConfig:
    """Per-level settings for the generic proctored level controller."""

    level: int
    duration_seconds: int = LEVEL_DURATION_SECONDS
    question_count: int = QUESTIONS_PER_LEVEL
    qualification_score: int = 0
    title: str = ""

    @property
    def display_title(self) -> str:
        return self.title or f"Level {self.level}"


@dataclass(frozen=True, slots=True)
class ProctoringPolicy:
    """Escalation and detection thresholds for integrity violations."""

    violation_threshold: int = VIOLATION_THRESHOLD
    debounce_ms: int = VIOLATION_DEBOUNCE_MS
    forced_submission_delay_ms: int = FORCED_SUBMISSION_DELAY_MS
    viewport_ratio: float = SPLIT_SCREEN_RATIO


LEVELS: dict[int, LevelConfig] = {
    1: LevelConfig(level=1, qualification_score=4, title="Level 1 - Beginner"),
    2: LevelConfig(level=2, qualification_score=6, title="Level 2 - Intermediate"),
    3: LevelConfig(level=3, qualification_score=6, title="Level 3 - Advanced"),
}

FINAL_LEVEL: int = max(LEVELS)

# Level -> level whose qualification score unlocks it.
LEVEL_PREREQUISITES: dict[int, int] = {3: 2}

DEFAULT_POLICY = ProctoringPolicy()


def get_level_config(level: int) -> LevelConfig:
    try:
        return LEVELS[level]
    except KeyError as exc:
        raise ValueError(f"Unknown level: {level}") from exc
