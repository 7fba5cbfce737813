from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional
import logging

from google import genai
from google.genai import types

from pnl_sim.advisory.prompt import build_prompt
from pnl_sim.config.env import AdvisoryConfig, TargetsConfig, get_advisory_config
from pnl_sim.projection.result import ProjectedStatement
from pnl_sim.projection.scenario import ScenarioParams

logger = logging.getLogger(__name__)

MISSING_KEY_TEXT = "Advisory unavailable: API key not configured."
UNAVAILABLE_TEXT = "Advisory temporarily unavailable. The projection above is unaffected."
EMPTY_TEXT = "Advisory unavailable: the model returned no text."


@dataclass(frozen=True)
class AdvisoryResult:
    text: str
    available: bool  # False means text is a placeholder
    prompt: str


class AdvisoryClient:
    """Sends the scenario prompt to Gemini. Collaborator failures degrade to a
    labeled placeholder instead of raising."""

    def __init__(
        self,
        config: Optional[AdvisoryConfig] = None,
        targets: Optional[TargetsConfig] = None,
        client: Any = None,
    ):
        self.config = config or get_advisory_config()
        self.targets = targets
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(api_key=self.config.api_key)
        return self._client

    def analyze(
        self,
        params: ScenarioParams,
        projected: ProjectedStatement,
        custom_prompt: Optional[str] = None,
    ) -> AdvisoryResult:
        prompt = custom_prompt or build_prompt(params, projected, self.targets)
        if self._client is None and not self.config.api_key:
            logger.warning("advisory skipped: no API key configured")
            return AdvisoryResult(text=MISSING_KEY_TEXT, available=False, prompt=prompt)
        try:
            response = self._get_client().models.generate_content(
                model=self.config.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    temperature=self.config.temperature,
                    max_output_tokens=self.config.max_output_tokens,
                ),
            )
        except Exception:
            logger.exception("advisory call failed (model=%s)", self.config.model)
            return AdvisoryResult(text=UNAVAILABLE_TEXT, available=False, prompt=prompt)
        text = getattr(response, "text", None)
        if not text:
            return AdvisoryResult(text=EMPTY_TEXT, available=False, prompt=prompt)
        return AdvisoryResult(text=text, available=True, prompt=prompt)
