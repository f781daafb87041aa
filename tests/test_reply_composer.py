import pytest

from chat_backend.models import Intent, LanguageTag, RankedMatch, ReplyOutcome
from chat_backend.reply_composer import ReplyComposer, format_price
from tests.conftest import ROSE_QUARTZ, FakeLLM, make_product

MATCH = RankedMatch(product=ROSE_QUARTZ, score=7, overlap=3)


def test_format_price():
    assert format_price(1299.0) == "₹1,299"
    assert format_price(25.5, "USD") == "USD 26"
    assert format_price(None) == ""


@pytest.mark.parametrize("intent", [Intent.TRACK_ORDER, Intent.REPLACE, Intent.REFUND, Intent.ADDRESS_CHANGE])
@pytest.mark.parametrize("lang", list(LanguageTag))
def test_procedural_replies_ignore_the_llm(settings, intent, lang):
    offline = ReplyComposer(settings).compose(intent, lang)
    failing = ReplyComposer(settings, FakeLLM(exc=RuntimeError("down"))).compose(intent, lang)
    chatty = ReplyComposer(settings, FakeLLM(reply="anything"))
    assert offline == failing == chatty.compose(intent, lang)
    assert chatty.llm.calls == []
    assert offline.text
    assert offline.intent == intent
    assert offline.lang == lang
    assert offline.outcome == ReplyOutcome.ANSWERED


def test_track_order_template_mentions_tracking(settings):
    doc = ReplyComposer(settings).compose(Intent.TRACK_ORDER, LanguageTag.HINGLISH)
    assert "track" in doc.text.lower()
    assert doc.suggestions


def test_templates_fill_brand_email_and_order_id(settings):
    composer = ReplyComposer(settings)
    assert "info@arthlife.in" in composer.compose(Intent.REPLACE, LanguageTag.ENGLISH).text
    assert "Arthlife" in composer.compose(Intent.GREETING, LanguageTag.HINDI).text
    doc = composer.compose(Intent.ORDER_ID, LanguageTag.ENGLISH, order_id="AR10234")
    assert "AR10234" in doc.text


def test_off_topic_is_a_refusal(settings):
    doc = ReplyComposer(settings).compose(Intent.OFF_TOPIC, LanguageTag.ENGLISH)
    assert doc.outcome == ReplyOutcome.REFUSED
    assert "only for Arthlife" in doc.text


def test_missing_translation_falls_back_to_english(settings):
    templates = {"refund": {"en": "Refund in English"}}
    doc = ReplyComposer(settings, templates=templates).compose(Intent.REFUND, LanguageTag.HINDI)
    assert doc.text == "Refund in English"
    assert doc.lang == LanguageTag.HINDI


def test_plain_product_reply(settings):
    doc = ReplyComposer(settings).compose(Intent.PRODUCT_LOOKUP, LanguageTag.ENGLISH, MATCH, query="rose quartz")
    assert doc.text.startswith("**Rose Quartz Bracelet** - from ₹1,299")
    assert "A stone of love and compassion. Handmade" in doc.text
    assert doc.text.endswith("Buy/see: https://arthlife.in/products/rose-quartz-bracelet")
    assert doc.product.handle == "rose-quartz-bracelet"
    assert doc.product.price == "₹1,299"
    assert doc.generated is False


def test_plain_reply_truncates_and_flags_stock(settings):
    product = make_product("p", "Pyrite Cube", "x" * 1000, available=False)
    text = ReplyComposer(settings).plain_product_reply(product, LanguageTag.HINDI)
    assert "x" * 350 in text and "x" * 351 not in text
    assert "अभी स्टॉक में नहीं है।" in text
    assert " - " not in text.splitlines()[0]  # no price known


def test_generated_reply_is_used_when_available(settings):
    llm = FakeLLM(reply="Rose Quartz is the stone of love 💗 Buy: https://arthlife.in/products/rose-quartz-bracelet")
    doc = ReplyComposer(settings, llm).compose(Intent.PRICE_LOOKUP, LanguageTag.HINGLISH, MATCH, query="rose quartz price")
    assert doc.text == llm.reply
    assert doc.generated is True
    _, facts, lang = llm.calls[0]
    assert facts["price"] == "₹1,299"
    assert facts["url"] == ROSE_QUARTZ.url
    assert lang == LanguageTag.HINGLISH


@pytest.mark.parametrize("llm", [FakeLLM(reply=None), FakeLLM(reply=""), FakeLLM(exc=RuntimeError("boom"))])
def test_generation_failure_uses_template(settings, llm):
    baseline = ReplyComposer(settings).compose(Intent.PRODUCT_LOOKUP, LanguageTag.ENGLISH, MATCH)
    doc = ReplyComposer(settings, llm).compose(Intent.PRODUCT_LOOKUP, LanguageTag.ENGLISH, MATCH)
    assert doc == baseline


def test_product_intent_without_match_asks_for_clarification(settings):
    doc = ReplyComposer(settings).compose(Intent.PRODUCT_LOOKUP, LanguageTag.ENGLISH)
    assert doc.outcome == ReplyOutcome.CLARIFY
    assert "Rose Quartz" in doc.text
    assert doc.product is None
