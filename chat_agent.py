# chat_agent.py

import json
import logging
import time
from typing import Optional

from openai import OpenAI

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"


class GenerationError(Exception):
    """
    A generation call failed. `user_message` is safe to show as-is and
    always suggests trying again.
    """

    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


class InvalidResponseError(GenerationError):
    """The model answered, but not with the JSON shape that was asked for."""


def failure_message(what: str) -> str:
    return f"Failed to generate {what}. Please try again."


class ChatAgent:
    """
    One chat-completions call in strict JSON mode.

    Sampling is tuned for variety: a high temperature plus presence and
    frequency penalties so repeated calls don't converge on the same dish.
    """

    def __init__(
        self,
        client=None,
        model=DEFAULT_MODEL,
        temperature=0.9,
        presence_penalty=0.6,
        frequency_penalty=0.6,
        clock=time.time,
    ):
        self.client = client or OpenAI()
        self.model = model
        self.temperature = temperature
        self.presence_penalty = presence_penalty
        self.frequency_penalty = frequency_penalty
        self.clock = clock

    def timestamp(self) -> int:
        """Milliseconds since the epoch; goes into prompts so no two are identical."""
        return int(self.clock() * 1000)

    def complete(self, system_prompt: str, user_prompt: str, what: str) -> str:
        """
        Send the prompt pair and return the message content.
        Any client error is logged and re-raised as GenerationError.
        """
        logger.debug(
            "Requesting %s from %s (system=%d chars, user=%d chars)",
            what, self.model, len(system_prompt), len(user_prompt),
        )
        try:
            completion = self.client.chat.completions.create(
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                model=self.model,
                response_format={"type": "json_object"},
                temperature=self.temperature,
                presence_penalty=self.presence_penalty,
                frequency_penalty=self.frequency_penalty,
            )
            content = completion.choices[0].message.content
        except Exception as e:
            logger.exception("Error generating %s", what)
            raise GenerationError(f"Chat completion for {what} failed: {e}", failure_message(what)) from e

        logger.debug("Raw %s response: %s", what, content)
        return content

    def complete_json(self, system_prompt: str, user_prompt: str, what: str) -> dict:
        """
        Like complete(), but parses the content and requires a JSON object.
        """
        content = self.complete(system_prompt, user_prompt, what)
        if not content:
            logger.error("Empty %s response", what)
            raise InvalidResponseError(f"Empty {what} response received", failure_message(what))

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("JSON decode error in %s response: %s", what, e)
            raise InvalidResponseError(
                f"Invalid {what} format received: {e}", failure_message(what)
            ) from e

        if not isinstance(data, dict):
            logger.error("Expected a JSON object for %s, got %s", what, type(data).__name__)
            raise InvalidResponseError(f"Invalid {what} format received", failure_message(what))
        return data

    def require_list(self, data: dict, key: str, what: str) -> list:
        """
        Shape validation: `key` must hold a list of objects.
        """
        value = data.get(key)
        if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
            logger.error("%s response is missing a '%s' list", what, key)
            raise InvalidResponseError(f"Invalid {what} format received", failure_message(what))
        return value


def read_response(factory, data, what: str):
    """
    Build a model object from parsed JSON; nested entries that are not
    objects count as an invalid response.
    """
    try:
        return factory(data)
    except (AttributeError, TypeError) as e:
        logger.error("Could not read %s response: %s", what, e)
        raise InvalidResponseError(f"Invalid {what} format received", failure_message(what)) from e
