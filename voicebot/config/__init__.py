"""
Configuration module for the voice bot.

Key components:
- constants: Application-wide constants such as the logger name, the speech
  voice, Call Automation event types and the intake-form preamble.
- logging_config: Console and rotating-file logging for the application logger.
- settings: Required connection strings, keys and endpoints read from the
  environment, failing fast when any is missing.

Usage examples:
```python
from voicebot.config.logging_config import configure_logging
from voicebot.config.settings import load_settings

logger = configure_logging()
settings = load_settings()
logger.info(f"Callbacks will be sent to {settings.host_name}")
```
"""
