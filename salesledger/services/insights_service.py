import json
import logging
from typing import Dict, Iterable, List

import requests

from salesledger.core.config import settings
from salesledger.models.sale import Sale
from salesledger.services.ledger_service import aggregate_client_debts, total_pending

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

NOT_CONFIGURED_MESSAGE = "Chave da API Gemini não configurada. Configure GEMINI_API_KEY no arquivo .env"
FALLBACK_MESSAGE = "Erro ao gerar insights. Verifique sua conexão e chave da API."
EMPTY_RESPONSE_MESSAGE = "Não foi possível gerar insights."
NO_SALES_MESSAGE = (
    "Você ainda não tem vendas registradas. Comece adicionando suas primeiras "
    "vendas para receber insights personalizados!"
)


class GeminiError(Exception):
    """Raised when the Gemini API call fails or returns an unexpected body."""


def build_insights_prompt(sales: Iterable[Sale]) -> str:
    """Describe the owner's pending sales for the model."""
    pending = [sale for sale in sales if sale.is_pending()]
    summaries = aggregate_client_debts(pending)
    details = [
        {
            "client": sale.client_name,
            "value": sale.value,
            "item": sale.item_sold,
            "date": sale.date
        }
        for sale in pending
    ]

    return (
        "Analyze the following sales data from a small merchant and give 3 quick, "
        f"professional pieces of advice in {settings.INSIGHTS_LANGUAGE}.\n\n"
        f"Total outstanding sales: {total_pending(summaries):.2f}\n"
        f"Number of clients with debts: {len(summaries)}\n"
        f"Detailed pending sales: {json.dumps(details, ensure_ascii=False)}\n\n"
        "Return only the 3 pieces of advice as short bullet points."
    )


def _gemini_generate_content(parts: List[Dict], temperature: float = 0.6, max_output_tokens: int = 1024) -> str:
    url = GEMINI_URL.format(model=settings.GEMINI_MODEL)
    payload = {
        "contents": [
            {
                "role": "user",
                "parts": parts
            }
        ],
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_output_tokens
        }
    }

    try:
        response = requests.post(
            url,
            params={"key": settings.GEMINI_API_KEY},
            json=payload,
            timeout=settings.GEMINI_TIMEOUT_SECONDS
        )
    except requests.RequestException as e:
        raise GeminiError(f"Gemini API request failed: {e}") from e

    if response.status_code != 200:
        raise GeminiError(f"Gemini API request failed ({response.status_code}): {response.text}")

    try:
        data = response.json()
    except ValueError as e:
        raise GeminiError(f"Gemini API returned a non-JSON body: {e}") from e
    if not isinstance(data, dict):
        raise GeminiError(f"Unexpected Gemini response body: {type(data).__name__}")

    candidates = data.get("candidates") or []
    if not isinstance(candidates, list):
        raise GeminiError("Unexpected Gemini candidates field")
    if not candidates:
        return ""

    content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
    if not isinstance(content, dict):
        raise GeminiError("Unexpected Gemini candidate shape")
    parts_out = content.get("parts") or []
    if not isinstance(parts_out, list):
        raise GeminiError("Unexpected Gemini content parts")
    return "".join(str(part.get("text", "")) for part in parts_out if isinstance(part, dict))


def summarize(sales: List[Sale]) -> str:
    """
    Ask Gemini for short financial advice about the pending sales.

    Best effort: a missing key or any API failure yields a fixed message
    instead of an error.
    """
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set, skipping insights generation")
        return NOT_CONFIGURED_MESSAGE

    prompt = build_insights_prompt(sales)
    try:
        text = _gemini_generate_content([{"text": prompt}])
    except GeminiError as e:
        logger.error("Insights generation failed: %s", e)
        return FALLBACK_MESSAGE

    return text.strip() or EMPTY_RESPONSE_MESSAGE
