from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

from openai import OpenAI

from config.llm_routes import ROUTES
from config.settings import Settings, get_settings
from utils.llm_logger import log_call, sha256_text


PROVIDER = "openrouter"


class LLMClient:
    """Minimal wrapper to centralize per-use-case routing and logging.

    Talks to OpenRouter through the OpenAI-compatible chat completions API.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[Any] = None) -> None:
        self.settings = settings or get_settings()
        if client is None:
            if not self.settings.openrouter_api_key:
                raise RuntimeError("OPENROUTER_API_KEY required to build an LLM client")
            client = OpenAI(
                api_key=self.settings.openrouter_api_key,
                base_url=self.settings.openrouter_base_url,
                timeout=self.settings.llm_timeout_seconds,
                default_headers={
                    "HTTP-Referer": self.settings.openrouter_referer,
                    "X-Title": self.settings.openrouter_title,
                },
            )
        self._client = client

    def chat(
        self,
        *,
        use_case: str,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        prompt_name: Optional[str] = None,
        prompt_text: Optional[str] = None,
    ) -> Any:
        route = ROUTES.get(use_case, {})
        model = route.get("model") or self.settings.openrouter_model
        op = route.get("operation", use_case)
        temp = temperature if temperature is not None else route.get("temperature")

        kwargs: Dict[str, Any] = {"model": model, "messages": messages}
        if temp is not None:
            kwargs["temperature"] = temp
        if route.get("max_tokens"):
            kwargs["max_tokens"] = route["max_tokens"]

        t0 = time.time()
        try:
            resp = self._client.chat.completions.create(**kwargs)
        except Exception as e:
            log_call(
                caller=f"llm_client.chat:{use_case}",
                provider=PROVIDER,
                model=model,
                operation=op,
                prompt_name=prompt_name,
                prompt_hash=sha256_text(prompt_text),
                duration_ms=int((time.time() - t0) * 1000),
                status="error",
                error=str(e),
                settings=self.settings,
            )
            raise

        usage = getattr(resp, "usage", None)
        usage_obj = None
        if usage:
            usage_obj = {
                "prompt_tokens": getattr(usage, "prompt_tokens", None),
                "completion_tokens": getattr(usage, "completion_tokens", None),
                "total_tokens": getattr(usage, "total_tokens", None),
            }
        log_call(
            caller=f"llm_client.chat:{use_case}",
            provider=PROVIDER,
            model=model,
            operation=op,
            prompt_name=prompt_name,
            prompt_hash=sha256_text(prompt_text),
            duration_ms=int((time.time() - t0) * 1000),
            status="ok",
            usage=usage_obj,
            settings=self.settings,
        )
        return resp

    def complete(self, *, use_case: str, prompt: str, prompt_name: Optional[str] = None) -> Optional[str]:
        """Single-turn completion; returns the first choice's text or None when the reply is empty."""
        resp = self.chat(
            use_case=use_case,
            messages=[{"role": "user", "content": prompt}],
            prompt_name=prompt_name or use_case,
            prompt_text=prompt,
        )
        choices = getattr(resp, "choices", None) or []
        if not choices:
            return None
        message = getattr(choices[0], "message", None)
        return getattr(message, "content", None) or None
