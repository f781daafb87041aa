import logging
import re
from typing import Dict, List, Optional
from .brand_voice import TEMPLATES, PRODUCT_LABELS, SUGGESTIONS
from .business_rules import BusinessRules, PRODUCT_INTENTS
from .config import Settings
from .llm_gateway import LLMGateway
from .models import (
    HistoryTurn, Intent, LanguageTag, ProductCandidate, ProductSummary, RankedMatch,
    ReplyDocument, ReplyOutcome,
)

logger = logging.getLogger(__name__)

DESCRIPTION_CHARS = 350

TEMPLATE_KEYS = {
    Intent.TRACK_ORDER: "track_order",
    Intent.REPLACE: "replace",
    Intent.REFUND: "refund",
    Intent.ADDRESS_CHANGE: "address_change",
    Intent.ORDER_ID: "order_id",
    Intent.GREETING: "greeting",
    Intent.OFF_TOPIC: "scope",
}

SUGGESTION_KEYS = {
    Intent.TRACK_ORDER: "order",
    Intent.ORDER_ID: "order",
    Intent.ADDRESS_CHANGE: "order",
}


def format_price(amount: Optional[float], currency: str = "INR") -> str:
    if amount is None:
        return ""
    if currency == "INR":
        return f"₹{amount:,.0f}"
    return f"{currency} {amount:,.0f}"


def summarize(product: ProductCandidate) -> ProductSummary:
    return ProductSummary(
        title=product.title,
        handle=product.handle,
        url=product.url,
        price=format_price(product.min_price, product.currency),
    )


class ReplyComposer:
    def __init__(self, settings: Settings, llm: Optional[LLMGateway] = None,
                 templates: Optional[Dict[str, Dict[str, str]]] = None):
        self.settings = settings
        self.llm = llm
        self.templates = templates if templates is not None else TEMPLATES

    def template(self, key: str, lang: LanguageTag, **values) -> str:
        variants = self.templates.get(key, {})
        text = variants.get(lang.value) or variants.get(LanguageTag.ENGLISH.value, "")
        return text.format(brand=self.settings.brand_name, email=self.settings.support_email, **values)

    def suggestions(self, key: str, lang: LanguageTag) -> List[str]:
        chips = SUGGESTIONS.get(lang.value, {})
        return list(chips.get(key) or SUGGESTIONS[LanguageTag.ENGLISH.value].get(key, []))

    def plain_product_reply(self, product: ProductCandidate, lang: LanguageTag) -> str:
        labels = PRODUCT_LABELS.get(lang.value, PRODUCT_LABELS["en"])
        price = format_price(product.min_price, product.currency)
        headline = f"**{product.title}**" + (f" - {labels['from']} {price}" if price else "")
        lines = [headline]
        description = re.sub(r"\s+", " ", product.description).strip()[:DESCRIPTION_CHARS]
        if description:
            lines.append(description)
        if BusinessRules.get_stock_status(product) == "out_of_stock":
            lines.append(labels["out_of_stock"])
        lines.append(f"{labels['buy']}: {product.url}")
        return "\n".join(lines)

    def _generated_reply(self, product: ProductCandidate, lang: LanguageTag, query: str,
                         history: Optional[List[HistoryTurn]]) -> Optional[str]:
        if self.llm is None:
            return None
        facts = {
            "title": product.title,
            "price": format_price(product.min_price, product.currency),
            "stock": "In Stock" if product.available else "Out of Stock",
            "description": product.description,
            "url": product.url,
        }
        try:
            return self.llm.rewrite_product_reply(query, facts, lang, history)
        except Exception:
            logger.exception("LLM rewrite raised; using template reply")
            return None

    def compose(
        self,
        intent: Intent,
        lang: LanguageTag,
        match: Optional[RankedMatch] = None,
        query: str = "",
        history: Optional[List[HistoryTurn]] = None,
        order_id: Optional[str] = None,
    ) -> ReplyDocument:
        if intent in TEMPLATE_KEYS:
            outcome = ReplyOutcome.REFUSED if intent == Intent.OFF_TOPIC else ReplyOutcome.ANSWERED
            return ReplyDocument(
                text=self.template(TEMPLATE_KEYS[intent], lang, order_id=order_id or ""),
                intent=intent,
                lang=lang,
                outcome=outcome,
                suggestions=self.suggestions(SUGGESTION_KEYS.get(intent, "default"), lang),
            )

        if intent in PRODUCT_INTENTS and match is not None:
            product = match.product
            text = self._generated_reply(product, lang, query, history)
            generated = bool(text)
            if not generated:
                text = self.plain_product_reply(product, lang)
            return ReplyDocument(
                text=text,
                intent=intent,
                lang=lang,
                product=summarize(product),
                suggestions=self.suggestions("product", lang),
                generated=generated,
            )

        return self.clarify(intent, lang)

    def clarify(self, intent: Intent, lang: LanguageTag) -> ReplyDocument:
        return ReplyDocument(
            text=self.template("clarify", lang),
            intent=intent,
            lang=lang,
            outcome=ReplyOutcome.CLARIFY,
            suggestions=self.suggestions("clarify", lang),
        )

    def refuse(self, intent: Intent, lang: LanguageTag) -> ReplyDocument:
        return ReplyDocument(
            text=self.template("scope", lang),
            intent=intent,
            lang=lang,
            outcome=ReplyOutcome.REFUSED,
            suggestions=self.suggestions("default", lang),
        )

    def empty(self, lang: LanguageTag) -> ReplyDocument:
        return ReplyDocument(text=self.template("empty", lang), lang=lang, outcome=ReplyOutcome.EMPTY)
