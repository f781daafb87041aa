import pytest

from chat_backend.config import Settings
from chat_backend.models import ProductCandidate
from chat_backend.shopify_client import CatalogError


def make_product(handle, title, description="", price=None, tags=None, available=True):
    return ProductCandidate(
        handle=handle,
        title=title,
        description=description,
        tags=tags or [],
        min_price=price,
        max_price=price,
        available=available,
        url=f"https://arthlife.in/products/{handle}",
    )


ROSE_QUARTZ = make_product(
    "rose-quartz-bracelet", "Rose Quartz Bracelet",
    "A stone of love and compassion.\nHandmade with natural beads.", price=1299.0,
    tags=["bracelet", "love"],
)
CITRINE = make_product("citrine-bracelet", "Citrine Bracelet", "Stone of abundance.", price=999.0)
AURA_KIT = make_product("aura-cleanse-kit", "Aura Cleanse Kit", "Sage, palo santo and selenite.", price=1499.0)


class FakeCatalog:
    """Returns canned results per query; records every query it receives."""

    def __init__(self, results=None, default=None, fail=False):
        self.results = results or {}
        self.default = default if default is not None else []
        self.fail = fail
        self.queries = []

    def __call__(self, query):
        self.queries.append(query)
        if self.fail:
            raise CatalogError("storefront HTTP 503")
        return list(self.results.get(query, self.default))


class FakeLLM:
    def __init__(self, reply=None, exc=None):
        self.reply = reply
        self.exc = exc
        self.calls = []

    def rewrite_product_reply(self, query, facts, lang, history=None):
        self.calls.append((query, facts, lang))
        if self.exc:
            raise self.exc
        return self.reply


@pytest.fixture()
def settings():
    return Settings(brand_name="Arthlife", support_email="info@arthlife.in", shopify_domain="arthlife.in")


@pytest.fixture()
def catalog():
    return FakeCatalog(default=[ROSE_QUARTZ, CITRINE, AURA_KIT])
