import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from .brand_voice import TEMPLATES
from .config import VERSION, load_settings, setup_logging
from .models import ChatRequest, ChatResponse
from .pipeline import build_pipeline
from .shopify_client import CatalogError, ShopifyStorefrontClient

settings = load_settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

pipeline = build_pipeline(settings)


@app.post("/chat", response_model=ChatResponse)
def chat(request: ChatRequest):
    try:
        doc = pipeline.handle(request)
    except Exception:
        logger.exception("Chat pipeline failed")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Error", "reply": TEMPLATES["error"]["en"], "version": VERSION},
        )

    return ChatResponse(
        reply=doc.text,
        intent=doc.intent,
        lang=doc.lang,
        outcome=doc.outcome,
        product=doc.product,
        suggestions=doc.suggestions,
        version=VERSION,
    )


def _mask(token):
    if not token:
        return None
    return token[:6] + "…" + token[-4:]


@app.get("/ping")
def ping():
    catalog = "storefront" if settings.storefront_enabled else ("csv" if settings.catalog_csv_path else None)
    sample_item = None
    errors = None
    http = None

    if settings.storefront_enabled:
        client = ShopifyStorefrontClient(
            settings.shopify_domain,
            settings.storefront_token,
            api_version=settings.shopify_api_version,
            timeout=settings.catalog_timeout,
        )
        try:
            sample_item = client.fetch_sample()
            http = 200
        except CatalogError as e:
            logger.warning("Ping: storefront check failed: %s", e)
            http = "fetch_failed"
            errors = str(e)[:200]

    return {
        "ok": catalog is not None,
        "version": VERSION,
        "domain": settings.shopify_domain,
        "token_masked": _mask(settings.storefront_token),
        "catalog": catalog,
        "llm_present": settings.llm_enabled,
        "http": http,
        "sample_item": sample_item,
        "errors": errors,
    }
