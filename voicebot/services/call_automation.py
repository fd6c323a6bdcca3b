"""
Azure Communication Services Call Automation wrapper.

Places outbound calls and issues the bot's "speak then listen" media command.
Only the commands are sent from here; their outcomes arrive later as cloud
events on the callback endpoint.
"""

import logging
from typing import Optional

from azure.communication.callautomation import (
    PhoneNumberIdentifier,
    RecognizeInputType,
    TextSource,
)
from azure.communication.callautomation.aio import CallAutomationClient

from voicebot.config.constants import END_SILENCE_TIMEOUT_MS, LOGGER_NAME, VOICE_NAME

logger = logging.getLogger(LOGGER_NAME)


class CallAutomationService:
    """
    Outbound calling and call media for the bot.

    Args:
        connection_string: ACS resource connection string
        source_phone_number: ACS number the calls are placed from
        cognitive_services_endpoint: Endpoint used by ACS for speech synthesis
            and recognition
    """

    def __init__(
        self,
        connection_string: str,
        source_phone_number: str,
        cognitive_services_endpoint: str,
        voice_name: str = VOICE_NAME,
        end_silence_timeout_ms: int = END_SILENCE_TIMEOUT_MS,
    ):
        self.client = CallAutomationClient.from_connection_string(connection_string)
        self.source_phone_number = source_phone_number
        self.cognitive_services_endpoint = cognitive_services_endpoint
        self.voice_name = voice_name
        self.end_silence_timeout_ms = end_silence_timeout_ms

    async def place_call(self, target_phone_number: str, callback_url: str) -> Optional[str]:
        """
        Ask ACS to dial a phone number.

        Returns as soon as ACS accepts the request; the connection itself is
        reported later by a CallConnected event.

        Returns:
            The call connection ID assigned by ACS
        """
        result = await self.client.create_call(
            target_participant=PhoneNumberIdentifier(target_phone_number),
            callback_url=callback_url,
            source_caller_id_number=PhoneNumberIdentifier(self.source_phone_number),
            cognitive_services_endpoint=self.cognitive_services_endpoint,
        )
        logger.info(f"Call to {target_phone_number} accepted: {result.call_connection_id}")
        return result.call_connection_id

    async def speak_and_listen(
        self,
        call_connection_id: str,
        target_phone_number: str,
        text: str,
        operation_context: Optional[str] = None,
    ) -> None:
        """
        Play text to a participant, then listen for their reply.

        The text is the prompt of a speech recognition request, so ACS starts
        recognizing as soon as playback ends. The recognized speech comes back
        as a RecognizeCompleted event.

        Args:
            call_connection_id: Call to act on
            target_phone_number: Participant to speak to and listen to
            text: What the bot says
            operation_context: Echoed back on the resulting events
        """
        call_connection = self.client.get_call_connection(call_connection_id)
        await call_connection.start_recognizing_media(
            input_type=RecognizeInputType.SPEECH,
            target_participant=PhoneNumberIdentifier(target_phone_number),
            play_prompt=TextSource(text=text, voice_name=self.voice_name),
            end_silence_timeout=self.end_silence_timeout_ms / 1000,
            operation_context=operation_context,
        )
        logger.debug(f"Speak-and-listen issued on call {call_connection_id}")

    async def close(self) -> None:
        """Close the underlying HTTP pipeline."""
        await self.client.close()
