import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Optional, Tuple

VERSION = "storefront-chat:v3"

DEFAULT_GROQ_MODELS = (
    "llama-3.3-70b-versatile",
    "llama-3.1-8b-instant",
)


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, built once at startup and handed to each component."""
    brand_name: str = "Arthlife"
    support_email: str = "info@arthlife.in"
    shopify_domain: Optional[str] = None
    storefront_token: Optional[str] = None
    shopify_api_version: str = "2024-04"
    catalog_csv_path: Optional[str] = None
    catalog_timeout: float = 5.0
    groq_api_key: Optional[str] = None
    groq_models: Tuple[str, ...] = field(default=DEFAULT_GROQ_MODELS)
    llm_timeout: float = 8.0
    hinglish_min_hits: int = 2
    match_threshold: float = 2.0
    log_level: str = "INFO"

    @property
    def storefront_enabled(self) -> bool:
        return bool(self.shopify_domain and self.storefront_token)

    @property
    def llm_enabled(self) -> bool:
        return bool(self.groq_api_key)


def _clean_domain(domain: Optional[str]) -> Optional[str]:
    if not domain:
        return None
    return domain.replace("https://", "").replace("http://", "").strip("/")


def load_settings() -> Settings:
    """
    Reads the process environment (after .env has been loaded).
    Invalid numeric values raise ValueError so a bad deploy fails at startup.
    """
    models = os.getenv("GROQ_MODELS")
    groq_models = tuple(m.strip() for m in models.split(",") if m.strip()) if models else DEFAULT_GROQ_MODELS

    return Settings(
        brand_name=os.getenv("BRAND_NAME", "Arthlife"),
        support_email=os.getenv("SUPPORT_EMAIL", "info@arthlife.in"),
        shopify_domain=_clean_domain(os.getenv("SHOPIFY_DOMAIN")),
        storefront_token=os.getenv("SHOPIFY_STOREFRONT_TOKEN") or None,
        shopify_api_version=os.getenv("SHOPIFY_API_VERSION", "2024-04"),
        catalog_csv_path=os.getenv("CATALOG_CSV_PATH") or None,
        catalog_timeout=float(os.getenv("CATALOG_TIMEOUT", "5")),
        groq_api_key=os.getenv("GROQ_API_KEY") or None,
        groq_models=groq_models,
        llm_timeout=float(os.getenv("LLM_TIMEOUT", "8")),
        hinglish_min_hits=int(os.getenv("HINGLISH_MIN_HITS", "2")),
        match_threshold=float(os.getenv("MATCH_THRESHOLD", "2")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def setup_logging(level: str = "INFO"):
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    for h in list(root.handlers):
        root.removeHandler(h)
    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(logging.Formatter('%(asctime)s | %(levelname)s | %(name)s | %(message)s'))
    root.addHandler(sh)

    logging.captureWarnings(True)
    # requests/urllib3 are chatty at INFO
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
