import re
from typing import List, Optional, Pattern, Tuple
from .models import Intent, ProductCandidate


def _any(*triggers: str) -> Pattern:
    return re.compile("|".join(triggers), re.IGNORECASE)


# ---------------------------------------------------------
# ORDER IDENTIFIERS
# ---------------------------------------------------------
# Letters prefix (optional) + at least 4 digits, e.g. 10234, AR-10234, #5521
ORDER_ID_PATTERNS = [
    re.compile(r"#\s?([a-z]{0,4}-?\d{3,})\b", re.IGNORECASE),
    re.compile(r"\border\s*(?:id|no\.?|number|num)?\s*(?:is|hai|:|-)?\s*#?\s*([a-z]{0,4}-?\d{4,})\b", re.IGNORECASE),
    re.compile(r"(?:\bid\b|आईडी|ऑर्डर)\s*(?:is|hai|है|:|-)?\s*#?\s*([a-z]{0,4}-?\d{4,})\b", re.IGNORECASE),
]

# ---------------------------------------------------------
# INTENT RULE TABLE (evaluated top to bottom, first match wins)
# ---------------------------------------------------------
OFF_TOPIC = _any(
    # Competitors / Marketplaces
    r"\bamazon\b", r"\bflipkart\b", r"\bmyntra\b", r"\bnykaa\b", r"\bmeesho\b", r"\bajio\b",
    r"\baliexpress\b", r"\bebay\b", r"\bwalmart\b", r"\bsnapdeal\b",
    # Business / Corporate
    r"\brevenue\b", r"\bstock price\b", r"\bmarket cap\b", r"\bprofit\b", r"\bheadquarters\b",
    r"\bceo\b", r"\bfounder\b", r"\bemployees\b", r"\bother brands\b", r"\bcompetitors?\b",
    # General knowledge unrelated to the brand
    r"\bwho is the\b", r"\bcapital of\b", r"\bweather\b", r"\bmausam\b", r"\bnews\b", r"\bcricket\b",
    r"\bpolitics\b", r"\belections?\b", r"\bmovies?\b", r"\brecipes?\b", r"\bjokes?\b", r"\bhomework\b",
    r"मौसम", r"समाचार", r"क्रिकेट",
)

GREETING = re.compile(
    r"^\s*(?:hi+|hello+|hey+|hlo|namaste|namaskar|good (?:morning|afternoon|evening)|नमस्ते|नमस्कार)"
    r"(?:\s+(?:there|team|ji|sir|mam))?[\s!.,]*$",
    re.IGNORECASE,
)

ORDER_ID = _any(*[p.pattern for p in ORDER_ID_PATTERNS])

TRACK_ORDER = _any(
    r"\btrack", r"\bstatus\b", r"where.*\border", r"\border\b.*\b(?:kahan|kaha|kab)\b",
    r"\bkab (?:tak )?(?:aayega|aaega|ayega|milega|aayegi|milegi)", r"\bshipped\b", r"\bdispatch",
    r"\bcourier\b", r"\bawb\b", r"not (?:yet )?(?:received|delivered)", r"nahi (?:aaya|mila)",
    r"when will .*(?:arrive|deliver|reach)", r"कहाँ", r"कहां", r"ट्रैक", r"कब तक",
)

REPLACE = _any(
    r"replace", r"exchange", r"\bdamaged?\b", r"\bbroken\b", r"\bwrong (?:item|product)\b",
    r"\btoot", r"रिप्लेस", r"एक्सचेंज", r"टूट",
    # "पता बदलना" is an address change, so only item nouns qualify here
    r"(?:प्रोडक्ट|सामान|आइटम|ब्रेसलेट|साइज़|साइज) (?:को )?बदल",
)

REFUND = _any(
    r"refund", r"\breturn", r"money back", r"(?:paise|paisa|paisey) wapas", r"\bwapas\b",
    r"\bcancel", r"रिफंड", r"वापस", r"रिटर्न", r"कैंसिल",
)

ADDRESS_CHANGE = _any(
    r"address", r"\baddr\b", r"pata (?:badal|change)", r"\bpin ?code\b", r"delivery location",
    r"एड्रेस", r"पता (?:बदल|चेंज)",
)

PRICE_LOOKUP = _any(
    r"\bprice", r"\bcost", r"how much", r"\bkitn[ae]\b", r"\brate\b", r"\bmrp\b", r"\bdaam\b",
    r"\bk[ie]+mat\b", r"₹", r"\brs\.?\s?\d", r"कीमत", r"दाम", r"कितन", r"प्राइस",
)

PRODUCT_LOOKUP = _any(
    r"bracelet", r"\bstone", r"crystal", r"\bkit\b", r"\bsoap", r"\baura\b", r"cleans",
    r"pendant", r"necklace", r"\bring\b", r"\bmala\b", r"rudraksh", r"pyramid", r"\btree\b",
    r"quartz", r"citrine", r"amethyst", r"tiger ?eye", r"\bproducts?\b", r"\bbuy\b",
    r"\bsell\b", r"\bkhar[ie]+d", r"in stock", r"available", r"\bkada\b", r"\bkangan\b", r"\bpatthar\b",
    r"ब्रेसलेट", r"पत्थर", r"माला", r"क्रिस्टल", r"साबुन", r"खरीद",
)

INTENT_RULES: List[Tuple[Pattern, Intent]] = [
    (OFF_TOPIC, Intent.OFF_TOPIC),
    (GREETING, Intent.GREETING),
    (ORDER_ID, Intent.ORDER_ID),
    (TRACK_ORDER, Intent.TRACK_ORDER),
    (REPLACE, Intent.REPLACE),
    (REFUND, Intent.REFUND),
    (ADDRESS_CHANGE, Intent.ADDRESS_CHANGE),
    (PRICE_LOOKUP, Intent.PRICE_LOOKUP),
    (PRODUCT_LOOKUP, Intent.PRODUCT_LOOKUP),
]

# The only intents that reach the catalog; everything else is answered from fixed copy
PRODUCT_INTENTS = {Intent.PRODUCT_LOOKUP, Intent.PRICE_LOOKUP}

BRAND_VOCABULARY = [
    r"bracelet", r"\bstones?\b", r"crystal", r"\bkit\b", r"\bsoap", r"\baura\b", r"cleans",
    r"pendant", r"necklace", r"\brings?\b", r"\bmala\b", r"rudraksh", r"pyramid", r"quartz",
    r"citrine", r"amethyst", r"tiger ?eye", r"healing", r"energy",
    r"\border", r"deliver", r"shipping", r"exchange", r"refund", r"\btrack", r"payment",
    r"\bcod\b", r"\bproducts?\b", r"\bprice", r"\bkada\b", r"\bkangan\b", r"\bpatthar\b",
    r"ब्रेसलेट", r"पत्थर", r"माला", r"क्रिस्टल", r"साबुन", r"ऑर्डर", r"डिलीवरी", r"रिफंड",
]


class BusinessRules:

    # ---------------------------------------------------------
    # 1. INTENT CLASSIFICATION
    # ---------------------------------------------------------
    @staticmethod
    def classify_intent(text: str) -> Intent:
        """Total over all strings: falls back to a product lookup."""
        t = (text or "").lower()
        for pattern, intent in INTENT_RULES:
            if pattern.search(t):
                return intent
        return Intent.PRODUCT_LOOKUP

    @staticmethod
    def extract_order_id(text: str) -> Optional[str]:
        for pattern in ORDER_ID_PATTERNS:
            m = pattern.search(text or "")
            if m:
                return m.group(1).upper()
        return None

    # ---------------------------------------------------------
    # 2. BRAND BOUNDARY RULES
    # ---------------------------------------------------------
    @staticmethod
    def is_in_scope(text: str, brand_name: str = "") -> bool:
        """True when the message mentions the brand, a product category or an order/logistics noun."""
        t = (text or "").lower()
        if brand_name and brand_name.lower() in t:
            return True
        return bool(re.search("|".join(BRAND_VOCABULARY), t))

    # ---------------------------------------------------------
    # 3. STOCK AVAILABILITY RULES
    # ---------------------------------------------------------
    @staticmethod
    def get_stock_status(product: ProductCandidate) -> str:
        return "in_stock" if product.available else "out_of_stock"
