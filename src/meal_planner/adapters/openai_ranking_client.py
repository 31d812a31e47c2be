"""OpenAI Responses API client for candidate ranking."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from meal_planner.services.ranking import RankingClient


@dataclass
class OpenAIRankingClient(RankingClient):
    """Ranking client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, timeout_seconds: float) -> "OpenAIRankingClient":
        """Create an OpenAI ranking client."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key, timeout=timeout_seconds, max_retries=0
            )
        )

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": prompt,
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "meal_ranking",
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return json.loads(output_text)
