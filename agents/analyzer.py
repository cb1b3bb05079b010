"""PydanticAI-backed analyzer service.

ContentAnalyzer implements AnalyzerService with one PydanticAI agent per
analysis kind. Each agent has a fixed system prompt and a structured
output type from models.analysis, so replies are parsed and validated by
PydanticAI before the pipeline sees them.

Models:
    - Remote models: PydanticAI model strings ('openai:gpt-4o', 'google-gla:...')
    - Local OpenAI-compatible servers: 'openai:{model_name}@{base_url}'

Design:
    - Stateless per call: agents are built once and shared by every
      concurrent pipeline invocation
    - Failures propagate: the calling stage records them
    - No retries beyond PydanticAI's own output-validation retries
"""

import json
import logging
from typing import Any

from openai import AsyncOpenAI
from pydantic import BaseModel
from pydantic_ai import Agent, PromptedOutput
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.profiles.openai import OpenAIModelProfile
from pydantic_ai.providers.openai import OpenAIProvider

from agents.base import JsonDict
from agents.prompts import (
    CATEGORIZATION_PROMPT,
    DOCUMENT_PROMPT,
    MULTI_MODAL_PROMPT,
    SENTIMENT_PROMPT,
    TREND_PROMPT,
    VIBE_PROMPT,
    VIDEO_PROMPT,
)
from config import Config
from models.analysis import (
    CategoryAnalysis,
    DocumentAnalysis,
    MultiModalAnalysis,
    SentimentAnalysis,
    TrendAnalysis,
    VibeAnalysis,
    VideoAnalysis,
)

logger = logging.getLogger(__name__)

# kind -> (system prompt, output model)
_ANALYSES: dict[str, tuple[str, type[BaseModel]]] = {
    "sentiment": (SENTIMENT_PROMPT, SentimentAnalysis),
    "categorization": (CATEGORIZATION_PROMPT, CategoryAnalysis),
    "video": (VIDEO_PROMPT, VideoAnalysis),
    "document": (DOCUMENT_PROMPT, DocumentAnalysis),
    "multi_modal": (MULTI_MODAL_PROMPT, MultiModalAnalysis),
    "trends": (TREND_PROMPT, TrendAnalysis),
    "vibe": (VIBE_PROMPT, VibeAnalysis),
}


def _parse_local_model(model_str: str) -> tuple[str, str] | None:
    """Parse local model string into (model_name, base_url) or None if not local."""
    if model_str.startswith("openai:") and "@" in model_str:
        rest = model_str[7:]  # Remove "openai:" prefix
        model_name, base_url = rest.split("@", 1)
        return model_name, base_url
    return None


def _create_model(model_str: str, api_key: str = ""):
    """Create the appropriate model based on the model string.

    Supports:
    - Local models: 'openai:{model_name}@http://127.0.0.1:8080/v1'
    - Remote OpenAI models: 'openai:gpt-4o' (configured key, else OPENAI_API_KEY)
    - Any other PydanticAI model string, resolved by PydanticAI

    Returns:
        PydanticAI model instance or model string
    """
    parsed = _parse_local_model(model_str)
    if parsed:
        model_name, base_url = parsed
        logger.info("Using local model | model=%s base_url=%s", model_name, base_url)
        # Local servers don't need authentication - use placeholder
        client = AsyncOpenAI(base_url=base_url, api_key="local-model")
        # Local servers generally don't support response_format or tool_choice
        profile = OpenAIModelProfile(supports_json_object_output=False)
        return OpenAIChatModel(
            model_name,
            provider=OpenAIProvider(openai_client=client),
            profile=profile,
        )
    if api_key and model_str.startswith("openai:"):
        return OpenAIChatModel(model_str[7:], provider=OpenAIProvider(api_key=api_key))
    return model_str


def _create_agent(
    model: str,
    system_prompt: str,
    output_model: type[BaseModel],
    temperature: float,
    retries: int,
    api_key: str = "",
) -> Agent[None, Any]:
    """Create one PydanticAI agent for an analysis kind.

    Local models get PromptedOutput since they can't do tool-based
    structured output.
    """
    is_local = _parse_local_model(model) is not None
    output_type = PromptedOutput(output_model) if is_local else output_model

    return Agent(
        _create_model(model, api_key),
        output_type=output_type,
        system_prompt=system_prompt,
        model_settings={"temperature": temperature},
        retries=retries,
    )


def _to_message(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2, default=str)


class ContentAnalyzer:
    """Runs the content analyses against the configured models.

    Example:
        >>> analyzer = ContentAnalyzer(config)
        >>> result = await analyzer.analyze_sentiment(posts)
        >>> result["overallSentiment"]
        0.42
    """

    def __init__(self, config: Config):
        """Build one agent per analysis kind.

        Args:
            config: Application configuration with model settings
        """
        self.config = config
        self._agents: dict[str, Agent[None, Any]] = {}
        for kind, (prompt, output_model) in _ANALYSES.items():
            is_vibe = kind == "vibe"
            self._agents[kind] = _create_agent(
                config.vibe_model if is_vibe else config.analyzer_model,
                prompt,
                output_model,
                temperature=config.vibe_temperature if is_vibe else config.analyzer_temperature,
                retries=config.analyzer_retries,
                api_key=config.openai_api_key,
            )

    async def _run(self, kind: str, message: str) -> JsonDict:
        result = await self._agents[kind].run(message)
        usage = result.usage()
        logger.debug(
            "Analysis complete | kind=%s requests=%d tokens=%d/%d",
            kind,
            usage.requests,
            usage.input_tokens or 0,
            usage.output_tokens or 0,
        )
        return result.output.model_dump(mode="json", by_alias=True)

    async def analyze_sentiment(self, posts: list[JsonDict]) -> JsonDict:
        return await self._run("sentiment", f"Posts:\n{_to_message(posts)}")

    async def categorize(self, content: JsonDict) -> JsonDict:
        return await self._run("categorization", f"Content:\n{_to_message(content)}")

    async def analyze_video(self, payload: JsonDict) -> JsonDict:
        return await self._run("video", f"Video Data:\n{_to_message(payload)}")

    async def process_document(self, payload: JsonDict) -> JsonDict:
        return await self._run("document", f"Document Data:\n{_to_message(payload)}")

    async def analyze_multi_modal(self, payload: JsonDict) -> JsonDict:
        return await self._run("multi_modal", f"Multi-Modal Data:\n{_to_message(payload)}")

    async def analyze_trends(self, payload: JsonDict) -> JsonDict:
        return await self._run("trends", f"Analysis Data:\n{_to_message(payload)}")

    async def analyze_vibe(self, payload: JsonDict, preferences: str = "") -> JsonDict:
        message = f"Data to analyze:\n{_to_message(payload)}"
        if preferences:
            message += f"\n\nAdditional preferences:\n{preferences}"
        return await self._run("vibe", message)
