"""
Completion service client.

Thin async wrapper over a LangChain chat model. Sends rendered prompt
messages and returns the reply text. Failures are raised once as
ExternalServiceError; there is no automatic retry.

Dependencies: langchain_google_genai, langchain_core, studyhub.configs
System role: External text-completion boundary
"""

import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from studyhub.configs.llm import LLMSettings
from studyhub.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

EMPTY_REPLY = "I'm sorry, I couldn't generate a response."


class CompletionClient:
    """Async text-completion client."""

    def __init__(
        self,
        model: BaseChatModel | None = None,
        settings: LLMSettings | None = None,
    ) -> None:
        """
        Initialize completion client.

        Args:
            model: Pre-built chat model (tests inject fakes here)
            settings: LLM settings used when model is None
        """
        self.settings = settings or LLMSettings()
        if model is None:
            kwargs = {}
            if self.settings.api_key:
                kwargs["google_api_key"] = self.settings.api_key
            model = ChatGoogleGenerativeAI(
                model=self.settings.model_id,
                temperature=self.settings.temperature,
                max_output_tokens=self.settings.max_tokens,
                **kwargs,
            )
        self._model = model

    async def acomplete(self, messages: list[BaseMessage]) -> str:
        """
        Send messages and return the reply text.

        Args:
            messages: Rendered system/history/user messages

        Returns:
            str: Reply text, or a stock apology when the reply is empty

        Raises:
            ExternalServiceError: The completion call failed
        """
        logger.info(f"{__name__}:acomplete - START messages={len(messages)} model={self.settings.model_id}")
        try:
            result = await self._model.ainvoke(messages)
        except Exception as e:
            logger.error(f"{__name__}:acomplete - FAILED {type(e).__name__}: {e}")
            raise ExternalServiceError(
                "Completion request failed",
                service="completion",
                details={"error_type": type(e).__name__},
            ) from e

        text = _content_to_text(result.content)
        logger.info(f"{__name__}:acomplete - OK reply_len={len(text)}")
        return text or EMPTY_REPLY


def _content_to_text(content) -> str:
    # Providers may return a list of content parts instead of a string
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content or "")
