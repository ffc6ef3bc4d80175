"""
Admin assistant. Answers questions about the business from the
aggregate statistics, via an OpenAI-compatible chat completions API.
"""

import json

import httpx
from loguru import logger

from core.config import settings
from core.pricing import PRICING
from schemas.billing import AggregateStatistics


FALLBACK_REPLY = "Sorry, I encountered an error while processing your request."


class AssistantNotConfigured(Exception):
    pass


def build_system_prompt(stats: AggregateStatistics) -> str:
    as_of = stats.as_of
    pricing_lines = "\n".join(
        f"{tier}: Company {entry.company_cost}, My {entry.resale_price}"
        for tier, entry in PRICING.items()
    )
    return f"""
You are the admin assistant for an ISP subscriber billing business.
You have access to the following business statistics:
{json.dumps(stats.to_prompt_dict(), indent=2)}

The user is the admin and may ask questions in English or Urdu.
Respond accurately based on the data provided.
If the user asks in Urdu, respond in Urdu.

Business rules:
- Profit = My Price - Company Price
- Total Profit = Active Users * (My Price - Company Price)
- Terminated users are NOT included in profit calculations.
- "Paid": users whose expiration date is in a later month than {as_of.strftime('%B %Y')}.
- "Pending": users whose expiration date is in {as_of.strftime('%B %Y')} or earlier.

Current date: {as_of.strftime('%B %d, %Y')}.

Pricing reference:
{pricing_lines}
""".strip()


async def ask(question: str, stats: AggregateStatistics) -> str:
    if not settings.assistant_api_key:
        raise AssistantNotConfigured("ASSISTANT_API_KEY is not set")

    payload = {
        "model": settings.assistant_model,
        "messages": [
            {"role": "system", "content": build_system_prompt(stats)},
            {"role": "user", "content": question},
        ],
        "temperature": 0.2,
    }
    headers = {
        "Authorization": f"Bearer {settings.assistant_api_key}",
        "Content-Type": "application/json",
    }

    try:
        async with httpx.AsyncClient(timeout=settings.assistant_timeout) as client:
            r = await client.post(settings.assistant_api_url, headers=headers, json=payload)
        if r.status_code >= 400:
            logger.error(f"Assistant upstream error: {r.status_code} {r.text[:200]}")
            return FALLBACK_REPLY
        return r.json()["choices"][0]["message"]["content"]
    except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
        logger.error(f"Assistant request failed: {e}")
        return FALLBACK_REPLY
