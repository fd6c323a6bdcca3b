"""
Builds the bot's initial system prompt from an uploaded intake form.
"""

import logging

from voicebot.config.constants import INTAKE_PROMPT_PREAMBLE, LOGGER_NAME
from voicebot.services.document_client import DocumentTextExtractor

logger = logging.getLogger(LOGGER_NAME)


async def handle_generate_prompt(document: bytes, extractor: DocumentTextExtractor) -> str:
    """
    OCR an intake form and put the receptionist instructions in front of it.

    Args:
        document: Raw bytes of the uploaded form
        extractor: OCR client

    Returns:
        The instruction preamble followed by the form's text
    """
    form_text = await extractor.extract_text(document)
    logger.info(f"Generated prompt from a {len(document)} byte document")
    return INTAKE_PROMPT_PREAMBLE + form_text
