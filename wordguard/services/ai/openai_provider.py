# wordguard/services/ai/openai_provider.py
import asyncio
import logging
from typing import Dict, List, Optional

import backoff
from openai import APIConnectionError, OpenAI, RateLimitError

from wordguard.services.ai.base import AIProvider
from wordguard.utils.text_utils import clip_text

logger = logging.getLogger(__name__)


class OpenAIProvider(AIProvider):
    """
    Клиент OpenAI-совместимого API (OpenAI, SiliconFlow, DeepSeek и т.п.).
    Синхронный SDK вызывается в отдельном потоке.
    """

    def __init__(self, api_key: Optional[str], model: str, base_url: Optional[str] = None, timeout: float = 8):
        self.model = model
        self.timeout = timeout
        self.client: Optional[OpenAI] = None

        if not api_key:
            logger.warning("⚠️ OpenAI API key is not configured, AI checks are disabled")
            return

        self.client = OpenAI(api_key=api_key, base_url=base_url or None, timeout=timeout)
        logger.info(f"✅ OpenAI-compatible client initialized (model: {model})")

    def is_available(self) -> bool:
        return self.client is not None

    def get_name(self) -> str:
        return "OpenAI"

    @backoff.on_exception(
        backoff.expo,
        (APIConnectionError, RateLimitError),
        max_tries=3,
        on_backoff=lambda details: logger.warning(
            f"🔄 Retrying OpenAI request (attempt {details['tries']})"
        )
    )
    async def _request(
        self,
        messages: List[Dict[str, str]],
        temperature: float,
        response_format: Optional[Dict[str, str]] = None
    ) -> str:
        if not self.client:
            raise RuntimeError("OpenAI client not initialized")

        request_params = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }

        if response_format:
            request_params["response_format"] = response_format

        response = await asyncio.to_thread(
            self.client.chat.completions.create,
            **request_params
        )

        return (response.choices[0].message.content or "").strip()

    async def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.1
    ) -> str:
        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": clip_text(prompt, 7000)})

        return await self._request(
            messages,
            temperature,
            response_format={"type": "json_object"}
        )
