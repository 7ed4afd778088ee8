"""AI provider interface and implementations."""

import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple, Union

from google import genai
from google.genai import types as genai_types
from openai import AsyncOpenAI

from ..config.models import AIConfig
from ..exceptions import NoProviderConfiguredError

_PLACEHOLDER_KEY = re.compile(r"your_.*_here", re.IGNORECASE)


def is_usable_key(api_key: Optional[str]) -> bool:
    """A key is usable when it is set and not a template placeholder."""
    if not api_key or not api_key.strip():
        return False
    return not _PLACEHOLDER_KEY.fullmatch(api_key.strip())


class AIProvider(ABC):
    """Abstract base class for AI completion providers."""

    name: str = ""

    def __init__(self, model: str) -> None:
        self.model = model

    @property
    def is_configured(self) -> bool:
        return True

    @abstractmethod
    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """
        Run one completion.

        Args:
            system: System instruction
            prompt: User prompt
            temperature: Sampling temperature
            max_tokens: Maximum output tokens

        Returns:
            The raw response text
        """


class GeminiProvider(AIProvider):
    """Google Gemini implementation of AI provider."""

    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gemini-1.5-flash",
        client: Optional[genai.Client] = None,
    ) -> None:
        """
        Initialize Gemini provider.

        Args:
            api_key: Gemini API key
            model: Model name to use
            client: Pre-built client (for testing)
        """
        super().__init__(model)
        self.client = client if client is not None else genai.Client(api_key=api_key)

    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        response = await self.client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=genai_types.GenerateContentConfig(
                system_instruction=system,
                temperature=temperature,
                max_output_tokens=max_tokens,
            ),
        )
        return response.text or ""


class OpenAIProvider(AIProvider):
    """OpenAI implementation of AI provider."""

    name = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key
            model: Model name to use
            base_url: Custom base URL (for compatible endpoints)
            client: Pre-built client (for testing)
        """
        super().__init__(model)
        self.client = client if client is not None else AsyncOpenAI(api_key=api_key, base_url=base_url)

    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content or ""


class UnconfiguredProvider(AIProvider):
    """Placeholder for a provider without usable credentials."""

    def __init__(self, name: str, model: str) -> None:
        super().__init__(model)
        self.name = name

    @property
    def is_configured(self) -> bool:
        return False

    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        raise NoProviderConfiguredError(f"AI provider '{self.name}' is not configured")


class MockProvider(AIProvider):
    """Mock provider for testing and dry runs.

    Replies are served in order; the last one repeats. An exception in the
    list is raised instead of returned.
    """

    name = "mock"

    def __init__(
        self,
        responses: Sequence[Union[str, Exception]] = ("{}",),
        model: str = "mock",
        name: str = "mock",
    ) -> None:
        super().__init__(model)
        self.name = name
        self.responses = list(responses)
        self.calls: List[Tuple[str, str, float, int]] = []

    async def complete(
        self,
        system: str,
        prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        self.calls.append((system, prompt, temperature, max_tokens))
        index = min(len(self.calls), len(self.responses)) - 1
        reply = self.responses[index]
        if isinstance(reply, Exception):
            raise reply
        return reply


def build_providers(ai_config: AIConfig) -> List[AIProvider]:
    """
    Construct providers in priority order, Gemini first.

    A provider without a usable key becomes an UnconfiguredProvider. OpenAI
    keys must additionally carry the ``sk-`` prefix.
    """
    providers: List[AIProvider] = []

    gemini = ai_config.gemini
    if is_usable_key(gemini.api_key):
        providers.append(GeminiProvider(api_key=gemini.api_key, model=gemini.model))
    else:
        providers.append(UnconfiguredProvider("gemini", gemini.model))

    openai_config = ai_config.openai
    if is_usable_key(openai_config.api_key) and openai_config.api_key.startswith("sk-"):
        providers.append(
            OpenAIProvider(
                api_key=openai_config.api_key,
                model=openai_config.model,
                base_url=openai_config.base_url,
            )
        )
    else:
        providers.append(UnconfiguredProvider("openai", openai_config.model))

    return providers
