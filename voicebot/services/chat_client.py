"""
Chat-completion client for the Azure OpenAI deployment behind the bot.
"""

import logging
from typing import List

from openai import AsyncAzureOpenAI

from voicebot.config.constants import LOGGER_NAME
from voicebot.models.schemas import ChatTurn

logger = logging.getLogger(LOGGER_NAME)


class ChatCompletionClient:
    """
    Sends a conversation transcript to Azure OpenAI and returns the reply.

    One request per call, no streaming and no retry: errors raised by the
    ``openai`` package propagate to the caller.
    """

    def __init__(self, endpoint: str, api_key: str, deployment: str, api_version: str):
        """
        Initialize the client.

        Args:
            endpoint: Azure OpenAI resource endpoint
            api_key: Azure OpenAI key
            deployment: Name of the chat model deployment
            api_version: Azure OpenAI REST API version
        """
        self.deployment = deployment
        self.client = AsyncAzureOpenAI(
            azure_endpoint=endpoint,
            api_key=api_key,
            api_version=api_version,
        )
        logger.info(f"ChatCompletionClient initialized with deployment: {deployment}")

    async def get_reply(self, turns: List[ChatTurn]) -> str:
        """
        Get the model's next turn for a transcript.

        Args:
            turns: The full transcript in conversational order

        Returns:
            Text of the first choice, or an empty string if it has no content
        """
        response = await self.client.chat.completions.create(
            model=self.deployment,
            messages=[turn.to_message() for turn in turns],
        )
        content = response.choices[0].message.content
        if not content:
            logger.warning(f"Empty completion from deployment {self.deployment}")
            return ""
        logger.debug(f"Completion: {content[:100]}")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
