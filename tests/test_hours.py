import pytest

from topicweight.orchestrator.hours import aggregate_hours, relevance_modifier

from conftest import category


@pytest.fixture
def base_categories():
    return [
        category("Statistical Impact", 8),
        category("Social Relevance", 6),
        category("Policy Impact Potential", 4),
    ]


def test_worked_example_without_personal_relevance(base_categories):
    estimate = aggregate_hours(base_categories, 10)
    assert estimate.total_available_hours == 240
    assert estimate.average_weight == pytest.approx(6.0)
    assert estimate.relevance_modifier == 1
    assert estimate.total_hours == 29


def test_worked_example_with_personal_relevance(base_categories):
    categories = base_categories + [category("Personal Relevance", 5)]
    estimate = aggregate_hours(categories, 10)
    assert estimate.average_weight == pytest.approx(5.75)
    assert estimate.relevance_modifier == pytest.approx(1.5)
    assert estimate.total_hours == 41


def test_description_mentions_modifier_only_when_present(base_categories):
    plain = aggregate_hours(base_categories, 10).description
    assert plain.startswith("29 hours")
    assert "6.0 average weight across 3 categories" in plain
    assert "240 available hours" in plain
    assert "personal relevance modifier" not in plain

    personal = aggregate_hours(base_categories + [category("Personal Relevance", 5)], 10).description
    assert "× personal relevance modifier 1.5" in personal
    assert "5.8 average weight across 4 categories" in personal


def test_total_hours_non_decreasing_in_days(base_categories):
    previous = -1
    for days in [0, 0.5, 1, 2, 3.3, 7, 10, 30, 100, 365]:
        total = aggregate_hours(base_categories, days).total_hours
        assert isinstance(total, int)
        assert total >= 0
        assert total >= previous
        previous = total


def test_rounds_half_up():
    # (5 / 10) * (45 / 5) = 4.5 exactly
    estimate = aggregate_hours([category("Statistical Impact", 5)], 1.875)
    assert estimate.total_hours == 5


def test_first_personal_relevance_wins():
    categories = [
        category("Personal Relevance", 2),
        category("Personal Relevance", 9),
    ]
    assert relevance_modifier(categories) == pytest.approx(1.2)


def test_empty_categories_rejected():
    with pytest.raises(ValueError):
        aggregate_hours([], 10)
