"""
Patient Intake Voice Bot - Azure Communication Services to Azure OpenAI

This application phones a patient and walks them through an intake form. An
uploaded image of the form is read with Azure AI Document Intelligence to build
the system prompt; the call is placed with Azure Communication Services Call
Automation, and every turn of the conversation is produced by an Azure OpenAI
chat deployment, spoken with text-to-speech and answered by speech recognition.

Architecture Overview:
- FastAPI server exposing the prompt, call and callback endpoints
- In-memory conversation sessions, one transcript per call
- Event-driven turn-taking: speak, listen, and answer each recognized utterance

Key Components:
- config: Constants, logging setup and environment settings
- handlers: Endpoint logic and per-event Call Automation handlers
- models: Chat turn and event schemas, session registry
- services: Clients for Call Automation, Azure OpenAI and Document Intelligence
- callback_manager: Routes callback batches to the event handlers

Getting Started:
1. Set up environment variables (or a .env file):
   - AZURE_COG_SERVICES_KEY / AZURE_COG_SERVICES_ENDPOINT
   - ACS_CONNECTION_STRING / ACS_PHONE_NUMBER
   - OPENAI_ENDPOINT / OPENAI_KEY / OPENAI_DEPLOYMENT_NAME
   - HOST_NAME: Public URL of this server, used for callbacks
   - LOG_LEVEL: Logging level (default INFO)

2. Start the server:
   ```bash
   python run.py
   ```

3. Open the server's root URL, upload an intake form, and place a call.
"""
