from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class LanguageTag(str, Enum):
    HINDI = "hi"
    HINGLISH = "hi-Latn"
    ENGLISH = "en"


class Intent(str, Enum):
    TRACK_ORDER = "track_order"
    REPLACE = "replace"
    REFUND = "refund"
    ADDRESS_CHANGE = "address_change"
    PRODUCT_LOOKUP = "product_lookup"
    PRICE_LOOKUP = "price_lookup"
    GREETING = "greeting"
    OFF_TOPIC = "off_topic"
    ORDER_ID = "order_id"


class ReplyOutcome(str, Enum):
    ANSWERED = "answered"
    CLARIFY = "clarify"    # asked the user for a product/category name
    REFUSED = "refused"    # outside the brand's scope
    EMPTY = "empty"


class HistoryTurn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role: str = "user"
    text: str = Field(default="", alias="content")
    lang: Optional[LanguageTag] = None


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = ""
    history: List[HistoryTurn] = []
    locale_hint: Optional[str] = Field(default=None, alias="localeHint")


class ProductCandidate(BaseModel):
    handle: str
    title: str
    description: str = ""
    tags: List[str] = []
    product_type: str = ""
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    currency: str = "INR"
    available: bool = True
    url: str = ""


class RankedMatch(BaseModel):
    product: ProductCandidate
    score: float
    overlap: int


class ProductSummary(BaseModel):
    title: str
    handle: str
    url: str
    price: str = ""


class ReplyDocument(BaseModel):
    text: str
    intent: Optional[Intent] = None
    lang: LanguageTag = LanguageTag.ENGLISH
    outcome: ReplyOutcome = ReplyOutcome.ANSWERED
    product: Optional[ProductSummary] = None
    suggestions: List[str] = []
    # True when the text came from the LLM rather than a template
    generated: bool = False


class ChatResponse(BaseModel):
    reply: str
    intent: Optional[Intent] = None
    lang: LanguageTag
    outcome: ReplyOutcome
    product: Optional[ProductSummary] = None
    suggestions: List[str] = []
    version: str
