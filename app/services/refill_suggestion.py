"""
Refill retailer suggestions.

Asks an OpenAI chat model for the best online retailer to refill a
prescription, given the medication and the user's location, and validates the
JSON answer against RefillSuggestion.
"""
import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from app.core.config import settings
from app.schemas.refill import RefillSuggestion, RefillSuggestionRequest

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert at finding the best online retailer for prescription refills."

USER_PROMPT_TEMPLATE = """Based on the medication "{medication}" and the user's location "{location}", suggest the best online retailer to refill the prescription.

Consider factors such as price, availability, and delivery time.

Explain why you chose this retailer in the reason field.
Respond with a single JSON object with exactly these keys:
  "retailer": the retailer's name (string),
  "url": the URL to purchase the medication (string, absolute http(s) URL),
  "price": the price of the medication at the retailer (number),
  "reason": why this retailer was suggested (string)."""


class RefillSuggestionError(Exception):
    """The suggestion could not be produced or did not match the expected shape."""


def build_messages(request: RefillSuggestionRequest) -> list[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": USER_PROMPT_TEMPLATE.format(
                medication=request.medication,
                location=request.location,
            ),
        },
    ]


class RefillSuggestionService:
    def __init__(self, client: Optional[AsyncOpenAI] = None, model: Optional[str] = None):
        self._client = client
        self.model = model or settings.refill_suggestion_model

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not settings.OPENAI_API_KEY:
                raise RefillSuggestionError("OPENAI_API_KEY is not configured")
            self._client = AsyncOpenAI(
                api_key=settings.OPENAI_API_KEY,
                timeout=settings.REFILL_SUGGESTION_TIMEOUT_SECONDS,
            )
        return self._client

    async def suggest(self, request: RefillSuggestionRequest) -> RefillSuggestion:
        messages = build_messages(request)
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                response_format={"type": "json_object"},
                temperature=settings.REFILL_SUGGESTION_TEMPERATURE,
            )
        except OpenAIError as e:
            logger.error(f"Refill suggestion request failed: {e}")
            raise RefillSuggestionError(str(e)) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise RefillSuggestionError("Empty suggestion response")
        try:
            suggestion = RefillSuggestion.model_validate_json(content)
        except ValidationError as e:
            logger.warning(f"Refill suggestion did not match schema: {e}")
            raise RefillSuggestionError("Malformed suggestion response") from e

        logger.info(
            f"Refill suggestion | medication={request.medication!r} "
            f"retailer={suggestion.retailer!r} model={self.model}"
        )
        return suggestion


_service: Optional[RefillSuggestionService] = None


def get_refill_suggestion_service() -> RefillSuggestionService:
    global _service
    if _service is None:
        _service = RefillSuggestionService()
    return _service
