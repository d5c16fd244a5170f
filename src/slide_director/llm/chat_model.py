"""Construction of the chat model the slide agent talks to."""

import logging

from langchain_openai import ChatOpenAI

from slide_director.config import Config, requires_api_key
from slide_director.domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "not-needed"


def build_chat_model(config: Config) -> ChatOpenAI:
    """
    Builds a tool-capable chat model for the configured provider.

    Every supported provider exposes an OpenAI-compatible endpoint, so one
    client class serves all of them.

    Args:
        config: Runtime configuration values.

    Returns:
        The chat model.

    Raises:
        ConfigurationError: If the provider needs an API key and none is set.
    """
    api_key = config.get_api_key()
    if not api_key:
        if requires_api_key(config.provider):
            raise ConfigurationError(
                f"Provider '{config.provider.value}' requires an API key."
            )
        api_key = PLACEHOLDER_API_KEY

    logger.debug(
        "Building chat model %s via %s", config.model_name, config.provider.value
    )
    return ChatOpenAI(
        model=config.model_name,
        api_key=api_key,
        base_url=config.get_base_url(),
        temperature=config.temperature,
    )
