"""
OCR client for uploaded intake forms, backed by Azure AI Document Intelligence.
"""

import logging

from azure.ai.formrecognizer.aio import DocumentAnalysisClient
from azure.core.credentials import AzureKeyCredential

from voicebot.config.constants import DOCUMENT_MODEL_ID, LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class DocumentTextExtractor:
    """Extracts the text of a document image with the prebuilt read model."""

    def __init__(self, endpoint: str, key: str, model_id: str = DOCUMENT_MODEL_ID):
        self.endpoint = endpoint
        self.credential = AzureKeyCredential(key)
        self.model_id = model_id

    async def extract_text(self, document: bytes) -> str:
        """
        Run the read model over a document and wait for it to finish.

        Args:
            document: Raw bytes of the uploaded file

        Returns:
            All text found in the document

        Raises:
            azure.core.exceptions.AzureError: If the analysis fails
        """
        async with DocumentAnalysisClient(self.endpoint, self.credential) as client:
            poller = await client.begin_analyze_document(self.model_id, document=document)
            result = await poller.result()

        content = result.content or ""
        logger.info(f"Extracted {len(content)} characters with {self.model_id}")
        return content
