"""
AI Advisor Agent for ZenMoney

The advisor answers free-form questions about the user's own money,
grounded in their recent transaction history.

CRITICAL BOUNDARIES:
- CAN: Read the (capped) transaction context it is given
- CAN: Give encouraging, realistic, concise advice
- CANNOT: Raise. Every failure (missing key, network, auth, bad
  request) comes back as display-ready text flagged is_error
- CANNOT: See more than the most recent N transactions

There is no retry: one failed call produces one message and the
interaction ends.
"""

import json
from typing import Optional, Sequence

import google.generativeai as genai

from zenmoney.config import GeminiSettings, get_settings
from zenmoney.events import EventLogger
from zenmoney.models.events import EventBuilder
from zenmoney.models.transaction import AdviceResponse, Transaction


DEFAULT_CONTEXT_LIMIT = 100

MISSING_KEY_MESSAGE = (
    "Please configure your API Key. Add 'GEMINI_API_KEY' with your AIza... key "
    "to your environment or .env file, then restart the app."
)
ACCESS_DENIED_MESSAGE = (
    "Access Denied (403). Please check if your API Key is valid and has credits."
)
INVALID_REQUEST_MESSAGE = (
    "Invalid Request (400). The API Key might be malformed."
)
EMPTY_RESPONSE_MESSAGE = "I couldn't generate a response at this time."


def build_system_instruction(transactions: Sequence[Transaction]) -> str:
    """Persona and formatting rules, with the history embedded as JSON."""
    history = json.dumps(
        [t.model_dump(mode="json") for t in transactions],
        ensure_ascii=False,
    )

    return f"""You are ZenMoney AI, a helpful, friendly, and concise financial assistant.

Here is the user's recent transaction history in JSON format:
{history}

Analyze this data to answer the user's questions.
- Be encouraging but realistic.
- The user uses Indonesian Rupiah (IDR / Rp) as their currency.
- When mentioning amounts, format them nicely (e.g. "1.5 million" or "Rp 50.000").
- Use **bold text** for key numbers or categories.
- Use bullet points (* or -) for lists of advice or breakdown.
- Keep answers short (under 3 sentences unless asked for detail) as this is a mobile app.

If you cannot find the answer in the data, politely say so."""


def describe_error(error: Exception) -> str:
    """Turn an API/transport failure into a message for the chat."""
    message = str(error) or repr(error)

    if "403" in message:
        return ACCESS_DENIED_MESSAGE
    if "400" in message:
        return INVALID_REQUEST_MESSAGE

    return (
        "Sorry, I'm having trouble connecting to the financial brain right now. "
        f"(Error: {message[:50]}...)"
    )


class AdvisorAgent:
    """
    Gemini-backed advisor.

    The model is built per request because the system instruction
    carries the transaction context.
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        event_logger: Optional[EventLogger] = None,
        context_limit: int = DEFAULT_CONTEXT_LIMIT,
    ):
        self._settings = settings or get_settings().gemini
        self._events = event_logger or EventLogger()
        self._context_limit = context_limit

    @property
    def is_configured(self) -> bool:
        return self._settings.is_configured

    def _build_model(self, system_instruction: str):
        """Configure Google Generative AI and build a model for one request."""
        genai.configure(api_key=self._settings.api_key)
        return genai.GenerativeModel(
            model_name=self._settings.model_name,
            system_instruction=system_instruction,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
            },
        )

    async def generate_advice(
        self,
        query: str,
        transactions: Sequence[Transaction],
    ) -> AdviceResponse:
        """
        Answer a question about the given transactions.

        Only the first context_limit transactions are sent; callers pass
        them most recent first.
        """
        if not self.is_configured:
            self._events.log(EventBuilder.advisor_not_configured())
            return AdviceResponse(text=MISSING_KEY_MESSAGE, is_error=True)

        context = list(transactions)[:self._context_limit]
        self._events.log(EventBuilder.advice_requested(len(query), len(context)))

        try:
            model = self._build_model(build_system_instruction(context))
            response = await model.generate_content_async(query)
        except Exception as e:
            self._events.log(EventBuilder.advice_failed(str(e)))
            return AdviceResponse(text=describe_error(e), is_error=True)

        text = self._response_text(response)
        if not text:
            return AdviceResponse(text=EMPTY_RESPONSE_MESSAGE)
        return AdviceResponse(text=text)

    def _response_text(self, response) -> str:
        # .text raises ValueError when the candidate was blocked or empty
        try:
            return (response.text or "").strip()
        except ValueError:
            return ""
