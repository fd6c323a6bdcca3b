"""
Services module for the cloud APIs the voice bot talks to.

Key components:
- call_automation: Azure Communication Services Call Automation wrapper that
  places outbound calls and plays the bot's turns followed by speech
  recognition.
- chat_client: Azure OpenAI chat-completion client returning the bot's next
  turn for a transcript.
- document_client: Azure AI Document Intelligence OCR used to read uploaded
  intake forms.

All three use the async SDK clients so that waiting on one request never
blocks the event loop serving the others.
"""
