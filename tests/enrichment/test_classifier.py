"""Tests for classification and location extraction response handling."""

import json

import pendulum
import pytest

from redline.enrichment import LocationExtractor, MockProvider, ViolenceClassifier
from redline.exceptions import ClassificationError, LocationExtractionError
from redline.models import Article


def article(**overrides) -> Article:
    values = dict(
        id=7,
        source_id=1,
        url="https://www.thedailystar.net/city/clash-3612345",
        title="Activists clash in Bogura",
        content="Supporters of two parties clashed on Tuesday. Ten people were injured.",
        source_name="The Daily Star",
        published_at=pendulum.datetime(2024, 5, 10, tz="UTC"),
    )
    values.update(overrides)
    return Article(**values)


VALID = {
    "is_political_violence": True,
    "confidence": 0.87,
    "reasoning": "Clash between party supporters with injuries.",
    "key_indicators": ["clashed", "injured"],
    "violence_type": "party clash",
    "location_mentioned": "Bogura",
    "political_actors": ["Awami League", "BNP"],
}


@pytest.mark.asyncio
class TestViolenceClassifier:
    async def test_parses_fenced_json(self) -> None:
        provider = MockProvider([f"```json\n{json.dumps(VALID)}\n```"], model="gemini-1.5-flash", name="gemini")

        result = await ViolenceClassifier(provider).classify(article())

        assert result.is_political_violence is True
        assert result.confidence == 0.87
        assert result.political_actors == ["Awami League", "BNP"]
        assert result.model_version == "gemini-1.5-flash"
        assert result.provider == "gemini"
        assert result.processing_time_ms >= 0

    async def test_request_parameters(self) -> None:
        provider = MockProvider([json.dumps(VALID)])

        await ViolenceClassifier(provider).classify(article())

        system, prompt, temperature, max_tokens = provider.calls[0]
        assert "Respond only with valid JSON" in system
        assert "Title: Activists clash in Bogura" in prompt
        assert "Source: The Daily Star" in prompt
        assert "Date: 2024-05-10" in prompt
        assert temperature == 0.1
        assert max_tokens == 500

    async def test_content_truncated(self) -> None:
        provider = MockProvider([json.dumps(VALID)])

        await ViolenceClassifier(provider, max_content_chars=20).classify(article(content="x" * 100))

        assert "x" * 20 + "..." in provider.calls[0][1]
        assert "x" * 21 not in provider.calls[0][1]

    async def test_non_json_reply(self) -> None:
        provider = MockProvider(["I think this article is about politics."])

        with pytest.raises(ClassificationError, match="Invalid AI response format"):
            await ViolenceClassifier(provider).classify(article())

    @pytest.mark.parametrize(
        "override",
        [
            {"confidence": 1.4},
            {"confidence": -0.1},
            {"confidence": "0.8"},
            {"confidence": True},
            {"is_political_violence": "yes"},
            {"is_political_violence": None},
        ],
    )
    async def test_invalid_structure(self, override) -> None:
        provider = MockProvider([json.dumps({**VALID, **override})])

        with pytest.raises(ClassificationError, match="Invalid classification response structure"):
            await ViolenceClassifier(provider).classify(article())

    async def test_optional_fields_may_be_missing(self) -> None:
        provider = MockProvider([json.dumps({"is_political_violence": False, "confidence": 0})])

        result = await ViolenceClassifier(provider).classify(article())

        assert result.is_political_violence is False
        assert result.confidence == 0
        assert result.key_indicators == []
        assert result.violence_type is None


@pytest.mark.asyncio
class TestLocationExtractor:
    async def test_extracts_locations(self) -> None:
        reply = {
            "locations": [
                {
                    "extracted_text": "Bogura",
                    "normalized_name": "Bogra",
                    "type": "district",
                    "confidence": 0.9,
                    "context": "clashed in Bogura on Tuesday",
                    "coordinates": {"lat": 24.85, "lng": 89.37, "confidence": 0.8},
                    "administrative_hierarchy": {"division": "Rajshahi", "district": "Bogra"},
                }
            ],
            "summary": {"total_locations": 1, "primary_location": "Bogra", "geographic_scope": "local"},
        }
        provider = MockProvider([json.dumps(reply)], model="gpt-4o-mini", name="openai")

        extraction = await LocationExtractor(provider).extract(article())

        assert len(extraction.locations) == 1
        location = extraction.locations[0]
        assert location.location_type == "district"
        assert location.coordinates.to_wkt() == "POINT(89.37 24.85)"
        assert extraction.summary.primary_location == "Bogra"
        assert extraction.provider == "openai"
        _, _, temperature, max_tokens = provider.calls[0]
        assert (temperature, max_tokens) == (0.2, 2000)

    async def test_empty_location_list_is_valid(self) -> None:
        extraction = await LocationExtractor(MockProvider(['{"locations": []}'])).extract(article())
        assert extraction.locations == []
        assert extraction.summary is None

    @pytest.mark.parametrize("reply", ['{"summary": {}}', '{"locations": "Dhaka"}', '[]', "not json"])
    async def test_invalid_replies(self, reply) -> None:
        with pytest.raises(LocationExtractionError):
            await LocationExtractor(MockProvider([reply])).extract(article())
