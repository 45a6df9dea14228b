from __future__ import annotations

import json

from escape_room.core.models import QuizSession
from escape_room.core.services.session_store import (
    InMemorySessionStore,
    JsonFileSessionStore,
    session_key,
)

from fakes import make_bank


def make_session(**overrides) -> QuizSession:
    session = QuizSession.fresh(level=3, student_id="7", questions=make_bank(4), duration_seconds=300)
    for name, value in overrides.items():
        setattr(session, name, value)
    return session


def test_session_key_is_scoped_by_level_and_student():
    assert session_key(3, "7") == "level3_state_v1_7"
    assert session_key(2, "7") != session_key(3, "7")


def test_snapshot_document_uses_wire_field_names():
    store = InMemorySessionStore()
    store.persist(make_session(selected_answers=[1, None, None, None], current_index=1, remaining_seconds=240))

    document = json.loads(store.raw("level3_state_v1_7"))
    assert set(document) == {"questions", "selectedAnswers", "currentIndex", "time", "submitted", "violationCount"}
    assert document["selectedAnswers"] == [1, None, None, None]
    assert document["currentIndex"] == 1
    assert document["time"] == 240
    assert set(document["questions"][0]) == {"id", "text", "choices", "answerIndex"}


def test_restore_round_trips_progress():
    store = InMemorySessionStore()
    original = make_session(selected_answers=[2, 0, None, None], current_index=2, remaining_seconds=95)
    store.persist(original)

    restored = store.restore(3, "7", duration_seconds=300)

    assert restored.questions == original.questions
    assert restored.selected_answers == [2, 0, None, None]
    assert restored.current_index == 2
    assert restored.remaining_seconds == 95
    assert restored.submitted is False


def test_restore_missing_snapshot_returns_none():
    assert InMemorySessionStore().restore(1, "nobody", duration_seconds=300) is None


def test_out_of_range_values_are_clamped():
    store = InMemorySessionStore()
    store._write(
        "level3_state_v1_7",
        json.dumps(
            {
                "questions": [q.to_wire() for q in make_bank(3)],
                "selectedAnswers": [1],
                "currentIndex": 9,
                "time": 4000,
            }
        ),
    )

    restored = store.restore(3, "7", duration_seconds=300)

    assert restored.current_index == 2
    assert restored.remaining_seconds == 300
    assert restored.selected_answers == [1, None, None]


def test_malformed_snapshot_is_discarded(tmp_path):
    store = JsonFileSessionStore(tmp_path)
    path = store.path_for("level3_state_v1_7")
    path.write_text("{not json", encoding="utf-8")

    assert store.restore(3, "7", duration_seconds=300) is None
    assert not path.exists()


def test_wrongly_typed_snapshot_is_discarded():
    store = InMemorySessionStore()
    store._write("level3_state_v1_7", json.dumps({"questions": "oops", "time": "soon"}))

    assert store.restore(3, "7", duration_seconds=300) is None
    assert store.keys() == []


def test_submitted_or_empty_snapshots_are_discarded():
    store = InMemorySessionStore()
    store.persist(make_session(submitted=True))
    assert store.restore(3, "7", duration_seconds=300) is None
    assert store.keys() == []

    store._write("level3_state_v1_7", json.dumps({"questions": [], "time": 100}))
    assert store.restore(3, "7", duration_seconds=300) is None


def test_json_file_store_survives_a_new_instance(tmp_path):
    JsonFileSessionStore(tmp_path).persist(make_session(current_index=3, remaining_seconds=12))

    restored = JsonFileSessionStore(tmp_path).restore(3, "7", duration_seconds=300)

    assert (restored.current_index, restored.remaining_seconds) == (3, 12)
    assert [p.name for p in tmp_path.iterdir()] == ["level3_state_v1_7.json"]


def test_clear_is_idempotent(tmp_path):
    store = JsonFileSessionStore(tmp_path)
    store.persist(make_session())
    store.clear("level3_state_v1_7")
    store.clear("level3_state_v1_7")

    assert list(tmp_path.iterdir()) == []
