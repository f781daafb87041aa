import logging
import requests
from typing import List, Dict, Optional, Any
from .models import ProductCandidate

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = """
      handle
      title
      description
      descriptionHtml
      productType
      tags
      availableForSale
      onlineStoreUrl
      priceRange {
        minVariantPrice { amount currencyCode }
        maxVariantPrice { amount currencyCode }
      }
"""

SEARCH_QUERY = """
query($q: String!, $first: Int!) {
  products(first: $first, query: $q) {
    edges { node { %s } }
  }
}
""" % PRODUCT_FIELDS

SAMPLE_QUERY = """
query {
  products(first: 1) {
    edges { node { title handle } }
  }
}
"""


class CatalogError(Exception):
    """Catalog unreachable or returned something other than products."""


class ShopifyStorefrontClient:
    def __init__(self, domain: str, access_token: str, api_version: str = "2024-04",
                 timeout: float = 5.0, page_size: int = 5):
        self.domain = domain.replace("https://", "").replace("/", "")
        self.url = f"https://{self.domain}/api/{api_version}/graphql.json"
        self.headers = {
            "X-Shopify-Storefront-Access-Token": access_token,
            "Content-Type": "application/json"
        }
        self.timeout = timeout
        self.page_size = page_size

    def _graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = requests.post(
                self.url,
                json={"query": query, "variables": variables or {}},
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CatalogError(f"storefront request failed: {e}") from e

        if response.status_code != 200:
            raise CatalogError(f"storefront HTTP {response.status_code}")
        try:
            body = response.json()
        except ValueError as e:
            raise CatalogError("storefront returned non-JSON body") from e
        if not isinstance(body, dict):
            raise CatalogError("storefront returned an unexpected body")
        if body.get("errors"):
            raise CatalogError(f"storefront errors: {body['errors']}")
        data = body.get("data")
        if not isinstance(data, dict):
            raise CatalogError("storefront response has no data")
        return data

    def _edges(self, data: Dict[str, Any]) -> List[Dict[str, Any]]:
        try:
            return [edge["node"] for edge in data["products"]["edges"]]
        except (KeyError, TypeError) as e:
            raise CatalogError("storefront response has no product edges") from e

    def search_products(self, query: str) -> List[ProductCandidate]:
        """Free-text storefront search; `query` may contain OR-combined terms."""
        data = self._graphql(SEARCH_QUERY, {"q": query, "first": self.page_size})
        products = []
        for node in self._edges(data):
            try:
                products.append(self._map_to_candidate(node))
            except (KeyError, TypeError, ValueError) as e:
                logger.debug("Skipping malformed product node: %s", e)
        logger.debug("Storefront search %r -> %d products", query, len(products))
        return products

    def fetch_sample(self) -> Optional[Dict[str, str]]:
        """First product in the store, used by the /ping diagnostic."""
        nodes = self._edges(self._graphql(SAMPLE_QUERY))
        if not nodes:
            return None
        return {"title": nodes[0].get("title"), "handle": nodes[0].get("handle")}

    def _clean_html(self, raw_html: str) -> str:
        from bs4 import BeautifulSoup
        if not raw_html: return ""
        text = BeautifulSoup(raw_html, "html.parser").get_text(separator=" ")
        return " ".join(text.split())[:1000]

    def _map_to_candidate(self, node: Dict[str, Any]) -> ProductCandidate:
        handle = node["handle"]
        description = node.get("description") or self._clean_html(node.get("descriptionHtml", ""))
        price_range = node.get("priceRange") or {}
        min_p = price_range.get("minVariantPrice") or {}
        max_p = price_range.get("maxVariantPrice") or {}

        return ProductCandidate(
            handle=handle,
            title=str(node.get("title") or ""),
            description=description,
            tags=[str(t) for t in node.get("tags") or []],
            product_type=str(node.get("productType") or ""),
            min_price=float(min_p["amount"]) if min_p.get("amount") else None,
            max_price=float(max_p["amount"]) if max_p.get("amount") else None,
            currency=min_p.get("currencyCode") or "INR",
            available=bool(node.get("availableForSale", True)),
            url=node.get("onlineStoreUrl") or f"https://{self.domain}/products/{handle}",
        )
