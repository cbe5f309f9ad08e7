"""Tests for core entities."""

import pytest
from pydantic import ValidationError

from hn_classifier.core import ClassificationResult, Datapoint, HnApiComment, HnStory, ModelOutcome


def test_classification_result_from_json_aliases() -> None:
    """Test the LLM JSON shape maps onto the model."""
    result = ClassificationResult.model_validate(
        {"isAiRelated": True, "hypeMeter": 7, "tags": ["llm", "agents"]}
    )

    assert result.is_ai_related is True
    assert result.hype_meter == 7
    assert result.tags == ["llm", "agents"]
    assert result.to_output() == {"isAiRelated": True, "hypeMeter": 7, "tags": ["llm", "agents"]}


@pytest.mark.parametrize("hype", [0, 11, -1])
def test_classification_result_rejects_hype_out_of_range(hype: int) -> None:
    """Test hypeMeter must be within 1-10."""
    with pytest.raises(ValidationError):
        ClassificationResult.model_validate({"isAiRelated": False, "hypeMeter": hype, "tags": []})


@pytest.mark.parametrize("hype", [1, 10])
def test_classification_result_accepts_bounds(hype: int) -> None:
    """Test hypeMeter bounds are inclusive."""
    result = ClassificationResult.model_validate({"isAiRelated": False, "hypeMeter": hype, "tags": []})
    assert result.hype_meter == hype


def test_classification_result_rejects_too_many_tags() -> None:
    """Test at most 3 tags are allowed."""
    with pytest.raises(ValidationError):
        ClassificationResult.model_validate(
            {"isAiRelated": True, "hypeMeter": 5, "tags": ["a", "b", "c", "d"]}
        )


def test_classification_result_requires_all_fields() -> None:
    """Test missing fields are rejected."""
    with pytest.raises(ValidationError):
        ClassificationResult.model_validate({"isAiRelated": True, "tags": []})


def test_hn_story_defaults_missing_fields() -> None:
    """Test optional story fields fall back to defaults."""
    story = HnStory.model_validate({"id": 8863, "type": "story", "url": "http://x"})

    assert story.title == ""
    assert story.by == ""
    assert story.time == 0
    assert story.score == 0
    assert story.kids is None
    assert not story.dead and not story.deleted


def test_hn_story_requires_id() -> None:
    """Test a response without id is an invalid shape."""
    with pytest.raises(ValidationError):
        HnStory.model_validate({"title": "No id"})


@pytest.mark.parametrize(
    "data",
    [
        {"id": "100"},
        {"id": 100, "score": "42"},
        {"id": 100, "dead": "yes"},
        {"id": 100, "kids": ["201"]},
    ],
)
def test_hn_story_rejects_coercible_values(data: dict) -> None:
    """Test values of the wrong JSON type are not coerced."""
    with pytest.raises(ValidationError):
        HnStory.model_validate(data)


def test_hn_api_comment_rejects_coercible_values() -> None:
    """Test a comment with a non-boolean flag is an invalid shape."""
    with pytest.raises(ValidationError):
        HnApiComment.model_validate({"by": "bob", "text": "hi", "deleted": 1})


def test_datapoint_accessors() -> None:
    """Test title, comment and URL are read from the step input."""
    datapoint = Datapoint(
        run_id="r1",
        input={
            "run": {"url": "https://news.ycombinator.com/item?id=1"},
            "item": {"title": "Hello"},
            "firstComment": {"by": "pg", "text": "First!"},
        },
        output={"isAiRelated": False, "hypeMeter": 2, "tags": []},
    )

    assert datapoint.title == "Hello"
    assert datapoint.comment_text == "First!"
    assert datapoint.url == "https://news.ycombinator.com/item?id=1"


def test_datapoint_tolerates_missing_keys() -> None:
    """Test an incomplete input yields empty strings."""
    datapoint = Datapoint(run_id="r1", input={}, output=None)

    assert datapoint.title == ""
    assert datapoint.comment_text == ""
    assert datapoint.url == ""


def test_model_outcome_from_partial_output() -> None:
    """Test stored outputs missing fields become None values."""
    outcome = ModelOutcome.from_output({"hypeMeter": 3})

    assert outcome.is_ai_related is None
    assert outcome.hype_meter == 3
    assert outcome.tags == []
    assert outcome.ok


def test_model_outcome_failed() -> None:
    """Test a failed call carries its error and no values."""
    error = RuntimeError("boom")
    outcome = ModelOutcome.failed(error)

    assert not outcome.ok
    assert outcome.error is error
    assert outcome.is_ai_related is None
    assert outcome.hype_meter is None
