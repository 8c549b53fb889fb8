# app/ai_system/inference_client.py
"""
Hugging Face Inference Client
Thin wrapper over huggingface_hub.InferenceClient. The SDK client is created
lazily on first use and only when an API key is configured; callers treat a
``None`` result as "fall back to the static tables".
"""
import logging
from typing import Optional

from config.aiconfig import ai_settings

logger = logging.getLogger(__name__)


class InferenceClientWrapper:
    """Singleton holding the lazily-created SDK client"""

    _instance = None
    _client = None
    _load_attempted = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def _lazy_load_client(self):
        """Create the SDK client once; later calls reuse the result, even a failed one."""
        if self._load_attempted:
            return self._client

        self._load_attempted = True

        if not ai_settings.inference_enabled:
            logger.info("ℹ️  HUGGING_FACE_API_KEY not set - using local analysis only")
            return None

        try:
            from huggingface_hub import InferenceClient

            self._client = InferenceClient(
                token=ai_settings.HUGGING_FACE_API_KEY,
                timeout=ai_settings.INFERENCE_TIMEOUT,
            )
            logger.info("✅ Hugging Face inference client initialized")
        except Exception as e:
            logger.error(f"❌ Failed to initialize Hugging Face client: {e}")
            self._client = None

        return self._client

    @property
    def available(self) -> bool:
        return self._lazy_load_client() is not None

    def generate(
        self,
        model: str,
        prompt: str,
        max_new_tokens: int,
        temperature: float,
        return_full_text: bool = True,
    ) -> Optional[str]:
        """
        Run one text-generation call.

        Returns the generated text, or None when the client is unavailable or
        the model call fails. Failures are logged, never raised.
        """
        client = self._lazy_load_client()
        if client is None:
            return None

        try:
            logger.info(f"🤖 Trying model: {model}")
            text = client.text_generation(
                prompt,
                model=model,
                max_new_tokens=max_new_tokens,
                temperature=temperature,
                do_sample=False,
                return_full_text=return_full_text,
            )
            return text or ""
        except Exception as e:
            logger.warning(f"⚠️  Model {model} failed: {e}")
            return None

    def reset(self):
        """Drop the cached client so the next call picks up new settings."""
        self._client = None
        self._load_attempted = False
        logger.info("🔄 Inference client reset")


# Global instance
inference_client = InferenceClientWrapper()
