"""
Peppa - Advisory Client

Async client for the external move/pass advisory service (a Gemini-style
``generateContent`` endpoint). Every answer is validated against the hand
it was asked about; anything else raises an AdvisoryError subclass so the
caller can fall back to the local heuristic.
"""

from __future__ import annotations

import json
import logging
import re
import time
from typing import Sequence

import httpx
from pydantic import ValidationError

from src.advisory.models import GenerateContentResponse
from src.advisory.prompts import (
    move_generation_config,
    move_prompt,
    pass_generation_config,
    pass_prompt,
)
from src.config.settings import Settings
from src.engine.base import Card
from src.engine.rules import legal_cards_for
from src.engine.state import GameState
from src.engine.validators import validate_pass_selection

logger = logging.getLogger(__name__)

_ID_NOISE = re.compile(r"[`\"'\n\[\]]")


class AdvisoryError(Exception):
    """The advisory service produced no usable proposal."""


class AdvisoryDisabled(AdvisoryError):
    """The advisory service is switched off or has no credentials."""


class AdvisoryTimeout(AdvisoryError):
    """The advisory service did not answer in time."""


class MalformedProposal(AdvisoryError):
    """The advisory service answered with something we cannot use."""


class AdvisoryClient:
    """Proposes passes and moves for computer players.

    Wraps an ``httpx.AsyncClient``; one is created lazily unless supplied.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings
        self._http = http_client
        self._owns_http = http_client is None

    @property
    def enabled(self) -> bool:
        return self._settings.advisory_active

    @property
    def endpoint(self) -> str:
        base = self._settings.advisory_base_url.rstrip("/")
        return f"{base}/models/{self._settings.advisory_model}:generateContent"

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._settings.advisory_timeout_seconds)
        return self._http

    async def _generate(self, prompt: str, generation_config: dict) -> str:
        """Send one prompt and return the response text."""
        if not self.enabled:
            raise AdvisoryDisabled("advisory service disabled")

        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }
        headers = {"x-goog-api-key": self._settings.advisory_api_key or ""}

        try:
            response = await self._client().post(self.endpoint, json=body, headers=headers)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise AdvisoryTimeout(f"request timed out: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            raise AdvisoryError(f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise AdvisoryError(f"transport error: {exc}") from exc

        try:
            parsed = GenerateContentResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise MalformedProposal(f"unreadable response body: {exc}") from exc

        return parsed.text

    async def propose_pass(self, hand: Sequence[Card]) -> tuple[str, ...]:
        """
        Ask for three cards to pass.

        Raises:
            AdvisoryError: On any failure, including an invalid selection
        """
        start = time.monotonic()
        text = await self._generate(
            pass_prompt(hand), pass_generation_config(self._settings.advisory_temperature)
        )

        try:
            ids = json.loads(text.strip() or "[]")
        except json.JSONDecodeError as exc:
            raise MalformedProposal(f"pass proposal is not JSON: {text!r}") from exc

        if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
            raise MalformedProposal(f"pass proposal is not a list of ids: {text!r}")

        try:
            selection = validate_pass_selection(hand, ids)
        except ValueError as exc:
            raise MalformedProposal(str(exc)) from exc

        logger.debug(
            "Pass proposal %s in %.0fms", selection, (time.monotonic() - start) * 1000
        )
        return selection

    async def propose_move(self, state: GameState, player_id: int) -> Card:
        """
        Ask for a card to play. Only legal cards are offered to the service.

        Raises:
            AdvisoryError: On any failure, including a card that is not legal
        """
        start = time.monotonic()
        playable = legal_cards_for(state, player_id)
        lead_suit = state.lead_suit if state.current_trick else None
        text = await self._generate(
            move_prompt(playable, state.current_trick, lead_suit),
            move_generation_config(self._settings.advisory_temperature),
        )

        card_id = _ID_NOISE.sub("", text).strip()
        for card in playable:
            if card.id == card_id:
                logger.debug(
                    "Player %d move proposal %s in %.0fms",
                    player_id,
                    card.label,
                    (time.monotonic() - start) * 1000,
                )
                return card

        raise MalformedProposal(f"proposed card {card_id!r} is not playable")

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None
