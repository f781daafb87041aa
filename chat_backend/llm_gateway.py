import logging
import time
from groq import Groq, APIError
from typing import List, Dict, Optional, Sequence
from .models import HistoryTurn, LanguageTag
from .brand_voice import LANGUAGE_NAMES

logger = logging.getLogger(__name__)


class LLMGateway:
    """
    Best-effort rewriter for product answers. Every failure mode returns None
    so the caller keeps its template reply.
    """

    def __init__(self, api_key: str, brand_name: str, models: Sequence[str],
                 timeout: float = 8.0, client=None):
        self.client = client or Groq(api_key=api_key, timeout=timeout, max_retries=0)
        self.timeout = timeout
        self.brand_name = brand_name
        self.model_cascade = list(models)

    def _system_prompt(self, lang: LanguageTag) -> str:
        return f"""
        You are {self.brand_name}'s chat assistant.
        Reply in {LANGUAGE_NAMES.get(lang.value, "English")} in 3-4 lines.

        RULES:
        1. Talk only about {self.brand_name} and the PRODUCT below. Never mention competitors or marketplaces.
        2. Use only the facts given. If something is missing, do not guess.
        3. Keep the price and the link exactly as given.
        4. Stay brand-safe and friendly. No medical claims.
        """

    def rewrite_product_reply(
        self,
        query: str,
        facts: Dict[str, str],
        lang: LanguageTag,
        history: Optional[List[HistoryTurn]] = None
    ) -> Optional[str]:

        user_prompt = f"""
        User query: {query}
        Product: {facts.get('title', '')} {facts.get('price', '')}
        Stock: {facts.get('stock', '')}
        Desc: {facts.get('description', '')[:500]}
        Link: {facts.get('url', '')}
        Generate a short, warm reply including meaning/benefit and the Buy link.
        """

        messages = [{"role": "system", "content": self._system_prompt(lang)}]
        for turn in (history or [])[-4:]:
            if turn.role in ("user", "assistant") and turn.text:
                messages.append({"role": turn.role, "content": turn.text})
        messages.append({"role": "user", "content": user_prompt})

        # one timeout budget for the whole cascade, not per model
        deadline = time.monotonic() + self.timeout
        for model in self.model_cascade:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.warning("LLM budget of %.1fs spent before trying %s", self.timeout, model)
                break
            try:
                chat_completion = self.client.chat.completions.create(
                    model=model,
                    messages=messages,
                    temperature=0.7,
                    max_tokens=300,
                    timeout=remaining,
                )
                content = (chat_completion.choices[0].message.content or "").strip()
                if content:
                    return content
                logger.warning("Empty completion from %s", model)
            except APIError as e:
                # rate limits, timeouts and connection errors all land here
                logger.warning("LLM %s unavailable: %s", model, e)
            except Exception:
                logger.exception("Unexpected LLM failure from %s", model)
        return None
