import pytest
import requests

from chat_backend import shopify_client
from chat_backend.shopify_client import CatalogError, ShopifyStorefrontClient


class FakeResponse:
    def __init__(self, status_code=200, body=None, raises=False):
        self.status_code = status_code
        self._body = body
        self._raises = raises

    def json(self):
        if self._raises:
            raise ValueError("not json")
        return self._body


NODE = {
    "handle": "rose-quartz-bracelet",
    "title": "Rose Quartz Bracelet",
    "description": "",
    "descriptionHtml": "<p>Stone of <b>love</b></p>",
    "productType": "Bracelet",
    "tags": ["love"],
    "availableForSale": False,
    "onlineStoreUrl": None,
    "priceRange": {
        "minVariantPrice": {"amount": "1299.0", "currencyCode": "INR"},
        "maxVariantPrice": {"amount": "1499.0", "currencyCode": "INR"},
    },
}


@pytest.fixture()
def client():
    return ShopifyStorefrontClient("https://arthlife.myshopify.com/", "shpat_token", timeout=5)


def fake_post(response, seen=None):
    def _post(url, json=None, headers=None, timeout=None):
        if seen is not None:
            seen.update(url=url, json=json, headers=headers, timeout=timeout)
        if isinstance(response, Exception):
            raise response
        return response
    return _post


def test_search_products_maps_nodes(client, monkeypatch):
    seen = {}
    body = {"data": {"products": {"edges": [{"node": NODE}, {"node": {"title": "no handle"}}]}}}
    monkeypatch.setattr(shopify_client.requests, "post", fake_post(FakeResponse(body=body), seen))

    products = client.search_products("rose OR quartz")

    assert seen["url"] == "https://arthlife.myshopify.com/api/2024-04/graphql.json"
    assert seen["headers"]["X-Shopify-Storefront-Access-Token"] == "shpat_token"
    assert seen["json"]["variables"] == {"q": "rose OR quartz", "first": 5}
    assert seen["timeout"] == 5

    assert len(products) == 1
    p = products[0]
    assert p.title == "Rose Quartz Bracelet"
    assert p.description == "Stone of love"
    assert (p.min_price, p.max_price, p.currency) == (1299.0, 1499.0, "INR")
    assert p.available is False
    assert p.url == "https://arthlife.myshopify.com/products/rose-quartz-bracelet"


@pytest.mark.parametrize("response", [
    FakeResponse(status_code=401, body={"errors": "Unauthorized"}),
    FakeResponse(body={"errors": [{"message": "Throttled"}]}),
    FakeResponse(body={"data": None}),
    FakeResponse(body={"data": {"shop": {}}}),
    FakeResponse(body=["unexpected"]),
    FakeResponse(raises=True),
    requests.ConnectionError("dns"),
    requests.Timeout("slow"),
])
def test_search_failures_raise_catalog_error(client, monkeypatch, response):
    monkeypatch.setattr(shopify_client.requests, "post", fake_post(response))
    with pytest.raises(CatalogError):
        client.search_products("citrine")


def test_empty_result_set(client, monkeypatch):
    body = {"data": {"products": {"edges": []}}}
    monkeypatch.setattr(shopify_client.requests, "post", fake_post(FakeResponse(body=body)))
    assert client.search_products("citrine") == []
    assert client.fetch_sample() is None


def test_fetch_sample(client, monkeypatch):
    body = {"data": {"products": {"edges": [{"node": {"title": "Citrine Tower", "handle": "citrine-tower"}}]}}}
    monkeypatch.setattr(shopify_client.requests, "post", fake_post(FakeResponse(body=body)))
    assert client.fetch_sample() == {"title": "Citrine Tower", "handle": "citrine-tower"}
