# /tests/test_history_service.py

from datetime import datetime, timedelta, timezone

from app.services.history_service import get_history


def test_history_maps_rows_to_camel_case(db_service, make_user):
    # Arrange
    user = make_user()
    generation = db_service.add_generation_record({
        "user_id": user.id,
        "input_content": "x" * 150,
        "input_content_hash": "a" * 64,
        "selected_platforms": ["linkedin", "threads"],
        "selected_tone": "educational",
        "status": "pending",
    })
    db_service.finalize_generation(generation.id, {
        "status": "partial",
        "core_message": "Core",
        "key_points": ["one"],
        "output_linkedin": {"post": "Hello"},
        "output_threads": {"error": "timeout"},
        "total_tokens_used": 600,
        "llm_provider": "openai",
    })

    # Act
    history = get_history(db_service, user.id)

    # Assert
    assert history.total == 1
    record = history.generations[0]
    assert record.id == generation.id
    assert record.status == "partial"
    assert record.selectedPlatforms == ["linkedin", "threads"]
    assert record.coreMessage == "Core"
    assert record.outputs == {"linkedin": {"post": "Hello"}, "threads": {"error": "timeout"}}
    assert record.totalTokensUsed == 600


def test_history_is_scoped_to_user_and_limited(db_service, make_user):
    owner, stranger = make_user(), make_user()
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for i in range(3):
        db_service.add_generation_record({
            "user_id": owner.id,
            "input_content": f"content {i}" + "x" * 100,
            "input_content_hash": str(i) * 64,
            "selected_platforms": ["linkedin"],
            "selected_tone": "educational",
            "created_at": start + timedelta(hours=i),
        })
    db_service.add_generation_record({
        "user_id": stranger.id,
        "input_content": "y" * 120,
        "input_content_hash": "f" * 64,
        "selected_platforms": ["threads"],
        "selected_tone": "authority",
    })

    history = get_history(db_service, owner.id, limit=2)

    assert history.total == 3
    assert [g.inputContent[:9] for g in history.generations] == ["content 2", "content 1"]
