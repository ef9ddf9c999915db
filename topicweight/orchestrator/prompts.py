"""Prompt templates for the structured topic analysis."""

from __future__ import annotations

from topicweight.models.analysis import AnalysisRequest, BiasPreference
from topicweight.models.category import CategoryName

# Order in which categories are listed to the model
PROMPT_CATEGORY_ORDER: tuple[CategoryName, ...] = (
    CategoryName.STATISTICAL_IMPACT,
    CategoryName.POLICY_IMPACT_POTENTIAL,
    CategoryName.SOCIAL_RELEVANCE,
    CategoryName.PERSONAL_RELEVANCE,
)

SYSTEM_PROMPT = """\
You are a system that evaluates political topics, as relevant to US citizens \
or visa holders. Return structured output for the following categories: \
{categories}. Err toward two or more sentences per category.

For each category provide:
- category: the category name, exactly as listed above.
- weight: a number between 1 and 10 indicating the importance of the category.
- facts: a list of 5 key facts relevant to the category. Facts must be \
specific, non-empty, self-contained statements that can be searched for on \
the web. Include statistics (percentages, per capita numbers, etc.) when \
available. Do not include URLs.
- reasoning: explain the relevance and significance of the facts to the \
category in a few sentences, terse but not overly so.

For "Personal Relevance", return an empty facts list.

Assess categories (when present) as follows:
- Statistical Impact: statistical relevance to the majority of Americans.
- Policy Impact Potential: consider legislative options and also \
non-legislative ones, such as rules set by private bodies.
- Social Relevance: score based on correcting imbalances, weighing measures \
that correct imbalances for statistical minorities above measures that are \
statistically irrelevant or reduce the rights of statistical minorities.
- Personal Relevance: how strongly the user's stated personal stake ties \
them to the topic.

Wrap the array of categories in an outer object under the key "data".\
"""

USER_PROMPT = """\
Analyze the topic: "{topic}" with the following considerations:

{personal_impact}
{bias}
{year}
{days}

Return structured output for each category.\
"""

# JSON schema sent with the request; mirrors GeneratedAnalysis
ANALYSIS_SCHEMA_NAME = "topic_weights"
ANALYSIS_SCHEMA: dict = {
    "type": "object",
    "properties": {
        "data": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "category": {"type": "string"},
                    "weight": {"type": "number"},
                    "facts": {"type": "array", "items": {"type": "string"}},
                    "reasoning": {"type": "string"},
                },
                "required": ["category", "weight", "facts", "reasoning"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["data"],
    "additionalProperties": False,
}


def requested_categories(request: AnalysisRequest) -> list[CategoryName]:
    """Categories to ask for; Personal Relevance only with a personal stake."""
    return [
        name
        for name in PROMPT_CATEGORY_ORDER
        if name != CategoryName.PERSONAL_RELEVANCE or request.has_personal_impact
    ]


def personal_impact_content(request: AnalysisRequest) -> str:
    if not request.has_personal_impact:
        return ""
    return f'The user provided personal relevance: "{request.personal_impact.strip()}."'


def bias_content(request: AnalysisRequest) -> str:
    bias = request.bias_preference or BiasPreference.NEUTRAL
    return f"The user prefers a {BiasPreference(bias).value} perspective for this analysis."


def year_content(request: AnalysisRequest) -> str:
    if request.year:
        return f"Focus the analysis on data and context from around the year {request.year}."
    return "Focus the analysis on recent and relevant data."


def days_content(request: AnalysisRequest) -> str:
    return (
        f"The user is willing to spend {request.days_per_year:g} days per year on "
        "political reasoning, research, and discussion."
    )


def _join_categories(names: list[CategoryName]) -> str:
    values = [n.value for n in names]
    if len(values) == 1:
        return values[0]
    return ", ".join(values[:-1]) + ", and " + values[-1]


def build_messages(request: AnalysisRequest) -> list[dict]:
    """Render the system and user messages for one analysis request."""
    system = SYSTEM_PROMPT.format(categories=_join_categories(requested_categories(request)))
    user = USER_PROMPT.format(
        topic=request.topic.strip(),
        personal_impact=personal_impact_content(request),
        bias=bias_content(request),
        year=year_content(request),
        days=days_content(request),
    )
    return [
        {"role": "system", "content": system},
        {"role": "user", "content": user},
    ]
