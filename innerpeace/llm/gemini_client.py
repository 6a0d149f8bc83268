import json
import re
from typing import Optional, Sequence

import aiohttp
from pydantic import ValidationError

from innerpeace.config import get_settings
from innerpeace.core.exceptions import OracleResponseError
from innerpeace.core.logger import logger
from innerpeace.llm.fallbacks import (
    band_sentiment,
    canned_cbt_exercise,
    canned_chat_response,
    canned_dbt_skill,
    lexical_sentiment,
)
from innerpeace.llm.prompt_builder import (
    build_cbt_prompt,
    build_chat_contents,
    build_dbt_prompt,
    build_sentiment_prompt,
    build_single_prompt,
)
from innerpeace.memory.schemas import SentimentAnalysis, UserProfile

FENCE = re.compile(r"```(?:json)?\s*|\s*```")


def parse_sentiment(raw: str) -> SentimentAnalysis:
    """Parse the oracle's JSON answer, tolerating markdown code fences."""
    cleaned = FENCE.sub("", raw).strip()
    try:
        data = json.loads(cleaned)
        analysis = SentimentAnalysis.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise OracleResponseError(f"Unparseable sentiment response: {e}") from e

    label = band_sentiment(analysis.score)
    if label != analysis.label:
        logger.debug("Oracle label {} re-banded to {} for score {}", analysis.label, label, analysis.score)
    return SentimentAnalysis(score=analysis.score, label=label, insights=analysis.insights[:3])


class GeminiClient:
    """Chat completion and sentiment scoring against the Gemini REST API.

    Any non-clean answer (no key, network error, bad status, empty text,
    malformed JSON) is downgraded to the local fallback. Callers cannot
    tell the difference; only the logs can.
    """

    async def complete_chat(
        self,
        message: str,
        history: Sequence[dict] = (),
        profile: Optional[UserProfile] = None,
    ) -> str:
        text = await self._generate(build_chat_contents(message, history, profile))
        if not text:
            return canned_chat_response(message)
        return text

    async def score_sentiment(self, text: str) -> SentimentAnalysis:
        raw = await self._generate(build_single_prompt(build_sentiment_prompt(text)))
        if not raw:
            return lexical_sentiment(text)
        try:
            return parse_sentiment(raw)
        except OracleResponseError as e:
            logger.error("Sentiment analysis error: {}", e)
            return lexical_sentiment(text)

    async def generate_cbt_exercise(self, concern: str) -> str:
        text = await self._generate(build_single_prompt(build_cbt_prompt(concern)))
        return text or canned_cbt_exercise(concern)

    async def generate_dbt_skill(self, situation: str) -> str:
        text = await self._generate(build_single_prompt(build_dbt_prompt(situation)))
        return text or canned_dbt_skill(situation)

    async def _generate(self, contents: list[dict]) -> Optional[str]:
        current = get_settings()
        if not current.GEMINI_API_KEY:
            logger.info("No Gemini API key configured. Using fallback responses.")
            return None

        payload = {
            "contents": contents,
            "generationConfig": {
                "temperature": current.GEMINI_TEMPERATURE,
                "maxOutputTokens": current.GEMINI_MAX_OUTPUT_TOKENS,
            },
        }

        try:
            data = await self._post(current.GEMINI_API_URL, current.GEMINI_API_KEY, payload, current.ORACLE_TIMEOUT_SECONDS)
        except Exception as e:
            logger.error("Gemini API request failed: {}", e)
            return None

        if data is None:
            return None
        return self._first_text(data)

    async def _post(self, url: str, api_key: str, payload: dict, timeout: float) -> Optional[dict]:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=timeout)) as session:
            async with session.post(url, params={"key": api_key}, json=payload) as resp:
                if resp.status != 200:
                    body = await resp.text()
                    logger.error("Gemini API error response: {} {}", resp.status, body[:200])
                    return None
                return await resp.json()

    @staticmethod
    def _first_text(data: dict) -> Optional[str]:
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.error("Gemini API returned no candidates")
            return None
        text = (text or "").strip()
        return text or None

# Singleton
_oracle_client = None

def get_oracle_client():
    global _oracle_client
    if _oracle_client is None:
        _oracle_client = GeminiClient()
    return _oracle_client
