"""Tests for the core record types."""

import pytest

from tierroute.errors import RouterConfigError
from tierroute.types import (
    Attachment,
    ModelPair,
    ModelTier,
    ReasonCategory,
    RoutingContext,
    RoutingResult,
    Tool,
    UserPreference,
)


class TestRoutingContext:

    def test_from_snake_case(self):
        context = RoutingContext.from_dict({
            "tools": ["web_search", {"name": "code_interpreter", "type": "function"}],
            "user_preference": "cost",
            "message_count": 4,
            "is_continuation": True,
            "previous_model": "gpt-4o",
        })
        assert context.tools == (Tool("web_search"), Tool("code_interpreter", "function"))
        assert context.user_preference == UserPreference.COST
        assert context.message_count == 4
        assert context.is_continuation
        assert context.previous_model == "gpt-4o"

    def test_from_empty(self):
        assert RoutingContext.from_dict({}) == RoutingContext()

    def test_to_dict_uses_camel_case(self):
        data = RoutingContext(
            attachments=(Attachment(type="image/png", name="a.png"),),
            user_preference=UserPreference.QUALITY,
        ).to_dict()
        assert data["userPreference"] == "quality"
        assert data["attachments"][0]["type"] == "image/png"
        assert data["messageCount"] == 0

    def test_round_trip(self):
        context = RoutingContext(
            tools=(Tool("search"),),
            attachments=(Attachment(mime_type="application/pdf", size=10),),
            message_count=12,
            conversation_id="abc",
            metadata={"k": "v"},
        )
        assert RoutingContext.from_dict(context.to_dict()) == context

    def test_hashable_with_metadata(self):
        """Metadata is left out of the hash, so contexts work as dict keys."""
        first = RoutingContext(message_count=3, metadata={"k": "v"})
        second = RoutingContext(message_count=3, metadata={"k": "v"})
        assert hash(first) == hash(second)
        assert {first: "seen"}[second] == "seen"


class TestAttachment:

    @pytest.mark.parametrize("attachment,image,document", [
        (Attachment(type="image/png"), True, False),
        (Attachment(mime_type="image/webp"), True, False),
        (Attachment(type="application/pdf"), False, True),
        (Attachment(type="document"), False, True),
        (Attachment(type="file", mime_type="application/pdf"), False, True),
        (Attachment(type="text/plain"), False, False),
        (Attachment(), False, False),
    ])
    def test_kind(self, attachment, image, document):
        assert attachment.looks_like_image() is image
        assert attachment.looks_like_document() is document


class TestModelPair:

    def test_for_tier(self):
        pair = ModelPair(expert="e", complex="c", moderate="m", simple="s", trivial="t")
        assert pair.for_tier(ModelTier.MODERATE) == "m"
        assert pair.for_tier("trivial") == "t"

    def test_dict_round_trip(self):
        data = {"expert": "e", "complex": "c", "moderate": "m", "simple": "s", "trivial": "t"}
        assert ModelPair.from_dict(data).to_dict() == data

    def test_missing_tier(self):
        with pytest.raises(RouterConfigError, match="simple, trivial"):
            ModelPair.from_dict({"expert": "e", "complex": "c", "moderate": "m"})


class TestRoutingResult:

    def test_to_dict(self):
        result = RoutingResult(
            model="m",
            tier=ModelTier.MODERATE,
            confidence=0.5,
            reason="r",
            reason_category=ReasonCategory.CODE,
            strong_win_rate=0.4,
            threshold=0.5,
        )
        assert result.to_dict() == {
            "model": "m",
            "tier": "moderate",
            "confidence": 0.5,
            "reason": "r",
            "reasonCategory": "code",
            "strongWinRate": 0.4,
            "threshold": 0.5,
            "estimatedCost": None,
            "routingDurationMs": 0,
        }
