"""
Subtask Decomposition - Splits a task into simpler steps with the OpenAI chat API
"""
from typing import Any, List, Optional
import logging
import re

import openai

from habitdesk.core.config import settings
from habitdesk.core.dependencies import get_openai_client
from habitdesk.core.constants import MAX_SUBTASKS
from habitdesk.core.exceptions import (
    ConfigurationError,
    ParseError,
    RemoteError,
    TransportError,
)
from habitdesk.utils.prompts import format_subtask_prompt

logger = logging.getLogger(__name__)

# "1." / "2)" / "3-" or a bare "-" / "." / ")" at the start of a line
_LEADING_MARKER = re.compile(r"^\d?[.)\-]")


def parse_subtasks(content: str) -> List[str]:
    """
    Extract up to MAX_SUBTASKS subtasks from free text

    Args:
        content: Model output, one subtask per line

    Returns:
        Non-empty, trimmed lines with any leading enumeration marker removed

    Raises:
        ParseError: If no usable line is found
    """
    out = []
    for line in content.splitlines():
        s = line.strip()
        match = _LEADING_MARKER.match(s)
        if match:
            s = s[match.end():].strip()
        if s:
            out.append(s)
            if len(out) >= MAX_SUBTASKS:
                break

    if not out:
        raise ParseError("Could not parse subtasks from response")
    return out


def break_into_subtasks(task: str, api_key: Optional[str] = None, client: Any = None) -> List[str]:
    """
    Ask the model to break a task into exactly 3 simpler subtasks

    Args:
        task: The task description
        api_key: Credential to use; defaults to the configured OPENAI_API_KEY
        client: Pre-built OpenAI-compatible client (used by tests)

    Returns:
        Up to 3 subtask strings

    Raises:
        ConfigurationError: If no API key is configured
        TransportError: If the request cannot reach the service
        RemoteError: If the service answers with an error status
        ParseError: If the response contains no usable subtasks
    """
    if client is None:
        api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        if not api_key:
            raise ConfigurationError("OPENAI_API_KEY is not set")

        client = get_openai_client(api_key)

    try:
        response = client.chat.completions.create(
            model=settings.OPENAI_MODEL,
            messages=[
                {"role": "user", "content": format_subtask_prompt(task)}
            ]
        )
    except openai.APIConnectionError as e:
        logger.error(f"Subtask request failed to connect: {e}")
        raise TransportError(f"Could not reach the OpenAI API: {e}")
    except openai.APIStatusError as e:
        logger.error(f"Subtask request rejected with status {e.status_code}: {e}")
        raise RemoteError(f"OpenAI API error {e.status_code}: {e.message}", status_code=e.status_code)
    except openai.APIResponseValidationError as e:
        logger.error(f"Subtask response did not match the API schema: {e}")
        raise ParseError(f"Unexpected response from the OpenAI API: {e.message}")
    except openai.APIError as e:
        logger.error(f"Subtask request failed: {e}")
        raise RemoteError(f"OpenAI API error: {e.message}")

    if not response.choices:
        raise ParseError("OpenAI returned no choices")

    content = response.choices[0].message.content or ""
    subtasks = parse_subtasks(content)
    logger.info(f"Split task into {len(subtasks)} subtasks")
    return subtasks
