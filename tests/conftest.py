import asyncio

from topicweight.models.category import Category, CategoryName, Fact


class FakeSearch:
    """Search provider with canned results, optional delays and failures."""

    name = "fake"

    def __init__(self, results=None, delays=None, failures=None):
        self.results = results or {}
        self.delays = delays or {}
        self.failures = failures or set()
        self.queries = []

    async def search(self, query):
        self.queries.append(query)
        await asyncio.sleep(self.delays.get(query, 0))
        if query in self.failures:
            raise RuntimeError(f"search exploded for {query}")
        return self.results.get(query, [])


class FakeGenerator:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    async def generate_structured(self, messages, schema_name, schema):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.payload


class FakeGroundTruth:
    def __init__(self, links=None, failures=None):
        self.links = links or {}
        self.failures = failures or set()
        self.calls = []

    async def lookup(self, url):
        self.calls.append(url)
        if url in self.failures:
            raise RuntimeError(f"lookup exploded for {url}")
        return self.links.get(url, "")


def hit(n):
    return {"title": f"Title {n}", "link": f"https://example.com/{n}", "snippet": f"Snippet {n}"}


def category(name, weight, facts=(), reasoning="Because."):
    return Category(
        name=CategoryName(name),
        weight=weight,
        reasoning=reasoning,
        facts=[Fact(text=f) for f in facts],
    )


def generated(name, weight, facts=(), reasoning="Because."):
    return {"category": name, "weight": weight, "facts": list(facts), "reasoning": reasoning}
