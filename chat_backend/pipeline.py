import logging
from typing import Optional
from .business_rules import BusinessRules, PRODUCT_INTENTS
from .config import Settings
from .data_engine import CsvCatalog, CatalogSearch, ProductResolver
from .language import classify_language, prior_language
from .llm_gateway import LLMGateway
from .models import ChatRequest, Intent, ReplyDocument
from .reply_composer import ReplyComposer
from .shopify_client import ShopifyStorefrontClient

logger = logging.getLogger(__name__)


class ChatPipeline:
    """Language -> intent -> (product resolution) -> reply. No state between requests."""

    def __init__(self, settings: Settings, catalog_search: Optional[CatalogSearch] = None,
                 llm: Optional[LLMGateway] = None):
        self.settings = settings
        self.resolver = ProductResolver(catalog_search, threshold=settings.match_threshold)
        self.composer = ReplyComposer(settings, llm)

    def handle(self, request: ChatRequest) -> ReplyDocument:
        text = (request.message or "").strip()
        prior = prior_language(request.history, request.locale_hint)

        if not text:
            return self.composer.empty(prior or classify_language(""))

        lang = classify_language(text, prior, min_hits=self.settings.hinglish_min_hits)
        intent = BusinessRules.classify_intent(text)
        logger.info("lang=%s intent=%s", lang.value, intent.value)

        if intent not in PRODUCT_INTENTS:
            order_id = BusinessRules.extract_order_id(text) if intent == Intent.ORDER_ID else None
            return self.composer.compose(intent, lang, order_id=order_id)

        match = self.resolver.resolve(text)
        if match is not None:
            return self.composer.compose(intent, lang, match, query=text, history=request.history)

        if not BusinessRules.is_in_scope(text, self.settings.brand_name):
            return self.composer.refuse(intent, lang)
        return self.composer.clarify(intent, lang)


def build_catalog(settings: Settings) -> Optional[CatalogSearch]:
    if settings.storefront_enabled:
        logger.info("Catalog: Shopify storefront %s", settings.shopify_domain)
        client = ShopifyStorefrontClient(
            settings.shopify_domain,
            settings.storefront_token,
            api_version=settings.shopify_api_version,
            timeout=settings.catalog_timeout,
        )
        return client.search_products
    if settings.catalog_csv_path:
        logger.info("Catalog: CSV export %s", settings.catalog_csv_path)
        return CsvCatalog(settings.catalog_csv_path, domain=settings.shopify_domain or "").search_products
    logger.warning("No catalog configured; product questions will get the clarification reply.")
    return None


def build_llm(settings: Settings) -> Optional[LLMGateway]:
    if not settings.llm_enabled:
        logger.info("GROQ_API_KEY not set; replies use templates only.")
        return None
    return LLMGateway(settings.groq_api_key, settings.brand_name, settings.groq_models,
                      timeout=settings.llm_timeout)


def build_pipeline(settings: Settings) -> ChatPipeline:
    return ChatPipeline(settings, build_catalog(settings), build_llm(settings))
