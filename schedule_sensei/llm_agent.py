# schedule_sensei/llm_agent.py

import logging
from typing import List, Optional, Sequence

import httpx
import openai
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from schedule_sensei.config import Settings, get_settings
from schedule_sensei.errors import (
    EmptyScheduleError,
    MissingCredentialError,
    ScheduleSenseiError,
    TransportError,
    UpstreamError,
)
from schedule_sensei.models import Task
from schedule_sensei.prompts import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger(__name__)

GENERIC_UPSTREAM_MESSAGE = "OpenAI API error"
GENERIC_FAILURE_MESSAGE = "Failed to get response from OpenAI."


def build_messages(prompt: str) -> List[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


def _upstream_message(exc: openai.APIStatusError) -> str:
    # the SDK unwraps {"error": {...}} into exc.body already
    body = exc.body
    if isinstance(body, dict):
        message = body.get("message")
        if not message and isinstance(body.get("error"), dict):
            message = body["error"].get("message")
        if message:
            return str(message)
    return GENERIC_UPSTREAM_MESSAGE


def describe_error(exc: Exception) -> str:
    if isinstance(exc, ScheduleSenseiError) and str(exc):
        return str(exc)
    return GENERIC_FAILURE_MESSAGE


async def consult(
    tasks: Sequence[Task],
    question: Optional[str],
    credential: str,
    *,
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Send the schedule (and optional question) to the chat-completion API
    and return the reply text.

    Both preconditions are checked before anything touches the network.
    Exactly one request is made: the SDK's own retries are switched off.
    """
    if not tasks:
        raise EmptyScheduleError()
    if not credential or not credential.strip():
        raise MissingCredentialError()
    settings = settings or get_settings()

    prompt = build_prompt(tasks, question)
    logger.info(
        "[Progress] Consulting %s with %d tasks (%d prompt chars)",
        settings.model, len(tasks), len(prompt),
    )

    try:
        async with AsyncOpenAI(
            api_key=credential.strip(),
            base_url=settings.base_url,
            max_retries=0,
            timeout=settings.timeout,
            http_client=http_client,
        ) as client:
            completion = await client.chat.completions.create(
                model=settings.model,
                messages=build_messages(prompt),
                max_tokens=settings.max_tokens,
                temperature=settings.temperature,
            )
    except openai.APIStatusError as exc:
        logger.warning("Chat completion rejected with HTTP %s", exc.status_code)
        raise UpstreamError(_upstream_message(exc), status_code=exc.status_code) from exc
    except openai.APIConnectionError as exc:
        logger.warning("Chat completion transport failure: %s", exc)
        raise TransportError(str(exc) or GENERIC_FAILURE_MESSAGE) from exc
    except openai.APIResponseValidationError as exc:
        raise UpstreamError(f"Unexpected response from OpenAI: {exc}", status_code=exc.status_code) from exc
    except ValueError as exc:
        # 2xx with a body that claims to be JSON but is not
        logger.warning("Chat completion body could not be decoded: %s", exc)
        raise UpstreamError("OpenAI returned a response that is not valid JSON") from exc

    if not isinstance(completion, ChatCompletion):
        # the SDK hands back the raw text for non-JSON content types
        raise UpstreamError("OpenAI returned an unexpected response body")

    if not completion.choices or completion.choices[0].message.content is None:
        raise UpstreamError("OpenAI returned no completion text")
    reply = completion.choices[0].message.content
    logger.info("[Progress] Received %d chars from %s", len(reply), settings.model)
    return reply
