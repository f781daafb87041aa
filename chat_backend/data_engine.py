import logging
import os
import re
from typing import Callable, Dict, List, Optional, Sequence, Set

import pandas as pd
from bs4 import BeautifulSoup
from rapidfuzz.distance import Levenshtein

from .models import ProductCandidate, RankedMatch
from .shopify_client import CatalogError

logger = logging.getLogger(__name__)

CatalogSearch = Callable[[str], List[ProductCandidate]]

STOP_WORDS = {
    'i', 'want', 'need', 'to', 'buy', 'get', 'looking', 'for', 'show', 'me', 'the', 'a', 'an', 'only',
    'just', 'with', 'in', 'of', 'products', 'product', 'is', 'are', 'there', 'any', 'do', 'you', 'have',
    'sell', 'please', 'pls', 'plz', 'what', 'which', 'price', 'cost', 'how', 'much', 'it', 'your', 'my',
    'can', 'tell', 'about', 'available', 'and', 'or', 'some',
    # romanized Hindi fillers
    'kya', 'hai', 'hain', 'mujhe', 'chahiye', 'aap', 'ka', 'ki', 'ke', 'ko', 'se', 'mein', 'kitna',
    'kitne', 'dikhao', 'batao', 'bhi', 'koi',
    # Devanagari fillers
    'मुझे', 'चाहिए', 'दिखाओ', 'दिखाइए', 'दिखाना', 'है', 'हैं', 'क्या', 'का', 'की', 'के', 'को', 'में',
    'कोई', 'आप', 'कितना', 'कितने',
}

# Catalog vocabulary: user word -> extra search terms
SYNONYMS: Dict[str, List[str]] = {
    "bracelet": ["band", "kada"],
    "kada": ["bracelet"],
    "kangan": ["bracelet"],
    "stone": ["crystal", "gemstone"],
    "crystal": ["stone"],
    "patthar": ["stone", "crystal"],
    "necklace": ["pendant", "mala"],
    "mala": ["necklace", "beads"],
    "soap": ["cleanse", "bar"],
    "cleanse": ["soap", "sage", "smudge"],
    "tigereye": ["tiger eye"],
    "ब्रेसलेट": ["bracelet"],
    "पत्थर": ["stone", "crystal"],
    "माला": ["mala"],
    "क्रिस्टल": ["crystal"],
    "साबुन": ["soap"],
}

MAX_OVERLAP_SCORE = 5
TITLE_SUBSTRING_BONUS = 3
TITLE_PREFIX_BONUS = 1
FUZZY_BONUS = 1
DESCRIPTION_PREFIX_CHARS = 200

# Devanagari vowel signs are not \w, so the block is listed explicitly
TOKEN = re.compile(r"(?:[^\W_]|[ऀ-ॿ])+")


def _stem(token: str) -> str:
    if len(token) > 3 and token.endswith("s") and not token.endswith("ss"):
        return token[:-1]
    return token


def tokenize(text: str) -> List[str]:
    return [_stem(t) for t in TOKEN.findall(str(text).lower())]


def query_tokens(text: str) -> List[str]:
    """User-side tokens: stop words removed, order kept, no duplicates."""
    seen = []
    for t in tokenize(text):
        if t not in STOP_WORDS and t not in seen:
            seen.append(t)
    return seen


def _normalize_text(text: str) -> str:
    return "".join(TOKEN.findall(str(text).lower()))


def _parse_price(raw) -> Optional[float]:
    """'1299.00', 'Rs. 1,299', '₹1299' -> 1299.0; anything unreadable -> None."""
    text = re.sub(r'^\s*(?:rs\.?|inr|₹)\s*', '', str(raw), flags=re.IGNORECASE)
    value = re.sub(r'[^\d.]', '', text)
    try:
        return float(value) if value else None
    except ValueError:
        return None


def build_query_variants(text: str) -> List[str]:
    """Verbatim text, cleaned tokens, then synonym expansions joined with storefront OR syntax."""
    raw = (text or "").strip()
    tokens = query_tokens(raw)
    variants = [raw, " ".join(tokens)]

    expanded = []
    for token in tokens:
        for alias in SYNONYMS.get(token, []):
            if alias not in tokens and alias not in expanded:
                expanded.append(alias)
    if expanded:
        variants.append(" OR ".join(tokens + expanded))

    result = []
    for v in variants:
        if v and v not in result:
            result.append(v)
    return result


def token_aliases(token: str) -> Set[str]:
    """The token itself plus the catalog words it stands for, e.g. kada -> bracelet."""
    aliases = {token}
    for alias in SYNONYMS.get(token, []):
        aliases.update(tokenize(alias))
    return aliases


def score_candidate(product: ProductCandidate, user_text: str) -> RankedMatch:
    user_tokens = query_tokens(user_text)
    aliases = {t: token_aliases(t) for t in user_tokens}
    searchable = " ".join([
        product.title,
        product.description[:DESCRIPTION_PREFIX_CHARS],
        " ".join(product.tags),
        product.product_type,
    ])
    candidate_tokens = set(tokenize(searchable))
    # one point per user word found in the product, directly or through a synonym
    overlap = sum(1 for t in user_tokens if aliases[t] & candidate_tokens)
    score = float(min(overlap, MAX_OVERLAP_SCORE))

    norm_title = _normalize_text(product.title)
    title_tokens = set(tokenize(product.title))
    norm_query = "".join(user_tokens)
    title_covers_query = bool(user_tokens) and all(aliases[t] & title_tokens for t in user_tokens)
    if (norm_query and norm_query in norm_title) or title_covers_query:
        score += TITLE_SUBSTRING_BONUS
    if any(norm_title.startswith(a) for t in user_tokens for a in aliases[t]):
        score += TITLE_PREFIX_BONUS

    # typo tolerance on the title only, e.g. "quarts" / "citrin"
    unmatched = [t for t in user_tokens if not aliases[t] & title_tokens and len(t) >= 4]
    if any(Levenshtein.distance(u, t) <= 1 for u in unmatched for t in title_tokens if len(t) >= 4):
        score += FUZZY_BONUS

    return RankedMatch(product=product, score=score, overlap=overlap)


def select_best(pool: Sequence[ProductCandidate], user_text: str, threshold: float) -> Optional[RankedMatch]:
    """Highest score wins, earliest in the pool on ties; None below threshold or with no shared token."""
    best = None
    for product in pool:
        ranked = score_candidate(product, user_text)
        if ranked.overlap == 0:
            continue
        if best is None or ranked.score > best.score:
            best = ranked
    if best is None or best.score <= 0 or best.score < threshold:
        return None
    return best


def resolve_product(variants: Sequence[str], catalog_search: Optional[CatalogSearch],
                    user_text: str, threshold: float) -> Optional[RankedMatch]:
    if catalog_search is None:
        return None

    pool: List[ProductCandidate] = []
    seen = set()
    for variant in variants:
        try:
            candidates = catalog_search(variant) or []
        except CatalogError as e:
            logger.warning("Catalog search failed for %r: %s", variant, e)
            continue
        except Exception:
            logger.exception("Unexpected catalog failure for %r", variant)
            continue
        for p in candidates:
            if p.handle not in seen:
                seen.add(p.handle)
                pool.append(p)

    best = select_best(pool, user_text, threshold)
    if best:
        logger.info("Matched %s (score=%.1f) from %d candidates", best.product.handle, best.score, len(pool))
    else:
        logger.info("No product match among %d candidates", len(pool))
    return best


class ProductResolver:
    def __init__(self, catalog_search: Optional[CatalogSearch], threshold: float = 2.0):
        self.catalog_search = catalog_search
        self.threshold = threshold

    def resolve(self, text: str) -> Optional[RankedMatch]:
        return resolve_product(build_query_variants(text), self.catalog_search, text, self.threshold)


class CsvCatalog:
    """Catalog backed by a Shopify products CSV export, for stores without a storefront token."""

    def __init__(self, filepath: str, domain: str = "", limit: int = 5):
        self.domain = domain
        self.limit = limit
        self.products: List[ProductCandidate] = []
        if os.path.exists(filepath):
            self._load_csv(filepath)
        else:
            logger.warning("Catalog CSV not found: %s", filepath)

    def _load_csv(self, filepath: str):
        try:
            self.products = list(self._read_products(filepath))
        except Exception:
            logger.exception("Error loading catalog CSV %s; continuing with an empty catalog", filepath)
            self.products = []
            return
        logger.info("Loaded %d products from %s", len(self.products), filepath)

    def _read_products(self, filepath: str):
        df = pd.read_csv(filepath, encoding='utf-8-sig', dtype=str).fillna("")
        df.columns = df.columns.str.strip()
        cols = df.columns
        price_col = next((c for c in ['Variant Price', 'Price'] if c in cols), None)
        body_col = next((c for c in ['Body (HTML)', 'Description'] if c in cols), None)
        type_col = next((c for c in ['Type', 'Product Type'] if c in cols), None)
        status_col = 'Status' if 'Status' in cols else None

        for handle, rows in df.groupby('Handle', sort=False):
            base = rows.iloc[0]
            if not base.get('Title'):
                continue
            if status_col and base[status_col] and base[status_col].lower() != "active":
                continue
            prices = []
            if price_col:
                prices = [p for p in (_parse_price(raw) for raw in rows[price_col]) if p is not None]
            yield ProductCandidate(
                handle=handle,
                title=base['Title'],
                description=self._clean_html(base[body_col]) if body_col else "",
                tags=[t.strip() for t in str(base.get('Tags', '')).split(',') if t.strip()],
                product_type=base[type_col] if type_col else "",
                min_price=min(prices) if prices else None,
                max_price=max(prices) if prices else None,
                url=f"https://{self.domain}/products/{handle}",
            )

    def _clean_html(self, html_content: str) -> str:
        if not html_content: return ""
        return re.sub(r'\s+', ' ', BeautifulSoup(html_content, "html.parser").get_text(separator=" ")).strip()[:1500]

    def search_products(self, query: str) -> List[ProductCandidate]:
        phrases = [_normalize_text(part) for part in re.split(r"\s+OR\s+", query)]
        terms = [t for t in phrases + query_tokens(query) if len(t) >= 3]
        results = []
        for p in self.products:
            haystack = _normalize_text(" ".join([p.title, " ".join(p.tags), p.product_type]))
            if any(t in haystack for t in terms):
                results.append(p)
            if len(results) >= self.limit:
                break
        return results
