import pytest

from topicweight.errors import GenerationError, ValidationError
from topicweight.models.analysis import AnalysisRequest, BiasPreference
from topicweight.orchestrator.analyzer import AnalysisOrchestrator, build_analysis_context, order_categories
from topicweight.orchestrator.prompts import build_messages, requested_categories

from conftest import FakeGenerator, FakeSearch, category, generated, hit


def payload_out_of_order():
    return {
        "data": [
            generated("Policy Impact Potential", 4, ["p1"]),
            generated("Personal Relevance", 5),
            generated("Statistical Impact", 8, ["s1"]),
            generated("Social Relevance", 6, ["r1"]),
        ]
    }


@pytest.mark.asyncio
async def test_handle_end_to_end():
    generator = FakeGenerator(payload=payload_out_of_order())
    search = FakeSearch(results={"s1": [hit(1)], "r1": [hit(2), hit(1)], "p1": [hit(3)]})
    orchestrator = AnalysisOrchestrator(generator, search, max_results=3)

    response = await orchestrator.handle(
        AnalysisRequest(topic="  Minimum wage  ", days_per_year=10, personal_impact="I earn it")
    )

    assert [c.name.value for c in response.categories] == [
        "Statistical Impact",
        "Social Relevance",
        "Policy Impact Potential",
        "Personal Relevance",
    ]
    assert response.total_hours == 41
    assert [e.citation_id for e in response.sources] == [1, 2, 3]
    assert [s.citation_id for s in response.categories[1].facts[0].sources] == [2, 1]
    assert "Personal Relevance: 5/10" in response.analysis_context
    assert response.analysis_context.startswith(response.total_hours_description)

    body = response.to_dict()
    assert body["totalHours"] == 41
    assert body["weights"][0]["category"] == "Statistical Impact"
    assert body["sources"][0]["citation"] == "[1]"
    assert len(generator.calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("topic", [None, "", "   \n"])
async def test_blank_topic_rejected_before_any_call(topic):
    generator = FakeGenerator(payload=payload_out_of_order())
    search = FakeSearch()
    orchestrator = AnalysisOrchestrator(generator, search)
    with pytest.raises(ValidationError, match="Topic input is required."):
        await orchestrator.handle(AnalysisRequest(topic=topic, days_per_year=10))
    assert generator.calls == []
    assert search.queries == []


@pytest.mark.asyncio
@pytest.mark.parametrize("days", [None, 0, -3, float("nan"), float("inf"), 1e308])
async def test_days_per_year_must_be_positive(days):
    generator = FakeGenerator(payload=payload_out_of_order())
    orchestrator = AnalysisOrchestrator(generator, FakeSearch())
    with pytest.raises(ValidationError):
        await orchestrator.handle(AnalysisRequest(topic="t", days_per_year=days))
    assert generator.calls == []


@pytest.mark.asyncio
async def test_unexpected_generator_failure_is_wrapped():
    orchestrator = AnalysisOrchestrator(FakeGenerator(error=RuntimeError("socket closed")), FakeSearch())
    with pytest.raises(GenerationError):
        await orchestrator.handle(AnalysisRequest(topic="t", days_per_year=10))


def test_personal_relevance_only_requested_with_personal_impact():
    names = [n.value for n in requested_categories(AnalysisRequest(topic="t", days_per_year=1))]
    assert "Personal Relevance" not in names
    names = [
        n.value
        for n in requested_categories(AnalysisRequest(topic="t", days_per_year=1, personal_impact="  x "))
    ]
    assert names[-1] == "Personal Relevance"


def test_prompt_templates():
    system, user = build_messages(
        AnalysisRequest(
            topic=" Tariffs ",
            days_per_year=12,
            bias_preference=BiasPreference.LEFT,
            year=2019,
        )
    )
    assert system["role"] == "system"
    assert "Statistical Impact, Policy Impact Potential, and Social Relevance" in system["content"]
    assert 'Analyze the topic: "Tariffs"' in user["content"]
    assert "a left perspective" in user["content"]
    assert "around the year 2019" in user["content"]
    assert "12 days per year" in user["content"]

    _, default_user = build_messages(AnalysisRequest(topic="x", days_per_year=1))
    assert "a neutral perspective" in default_user["content"]
    assert "recent and relevant data" in default_user["content"]


def test_order_categories_uses_display_order():
    ordered = order_categories(
        [
            category("Personal Relevance", 1),
            category("Policy Impact Potential", 1),
            category("Statistical Impact", 1),
        ]
    )
    assert [c.name.value for c in ordered] == [
        "Statistical Impact",
        "Policy Impact Potential",
        "Personal Relevance",
    ]


def test_analysis_context_lists_weights():
    context = build_analysis_context("29 hours = ...", [category("Social Relevance", 6.5)])
    assert context.splitlines()[0] == "29 hours = ..."
    assert "- Social Relevance: 6.5/10" in context
