"""
Parcel Assistant Chat Lambda
----------------------------
API Gateway handler for the parcel tracking assistant.

POST {"message": "...", "userId": "..."}
    1. Look up the user's parcels
    2. Embed them in a prompt with the user's question
    3. Ask Gemini and return {"response": "...", "success": true}

OPTIONS answers the CORS preflight.
"""

import base64
import binascii
import json
from typing import Any, Dict, Optional

from config import Settings, get_settings
from context import build_prompt, fetch_parcel_context
from errors import ConfigurationError, UpstreamError, ValidationError
from llm import GeminiClient
from models import ChatRequest, ResponseEnvelope
from store import get_parcel_store
from utils.logger import logger

# CORS headers for API Gateway responses
CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def _response(status_code: int, envelope: ResponseEnvelope, headers: dict = None) -> dict:
    """Build API Gateway response."""
    response_headers = dict(CORS_HEADERS)
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(envelope.to_dict()),
    }


def _preflight_response() -> dict:
    return {
        "statusCode": 200,
        "headers": dict(PREFLIGHT_HEADERS),
        "body": "ok",
    }


def _get_method(event: dict) -> str:
    """HTTP method from a REST (v1) or HTTP API (v2) event; direct invokes count as POST."""
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "POST").upper()


def _parse_body(event: dict) -> Any:
    """Decode and parse the JSON body. Any failure here is fatal for the request."""
    raw = event.get("body")
    if raw is None:
        raise UpstreamError("Request body is required")

    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise UpstreamError(f"Invalid base64 request body: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise UpstreamError(f"Invalid JSON body: {e}") from e


def handle_request(
    event: Dict[str, Any],
    settings: Settings,
    store=None,
    llm: Optional[GeminiClient] = None,
) -> dict:
    """
    Run one chat request through gate, context fetch, generation and shaping.

    Args:
        event: API Gateway proxy event
        settings: Process-wide configuration
        store: Parcel store; built from settings when omitted
        llm: Gemini client; built from settings when omitted

    Returns:
        API Gateway proxy response
    """
    method = _get_method(event)
    logger.info(f"Incoming {method} request")

    if method == "OPTIONS":
        return _preflight_response()

    if method != "POST":
        logger.warning(f"Rejected method: {method}")
        return _response(
            405,
            ResponseEnvelope.failure("Method not allowed"),
            headers={"Allow": "POST, OPTIONS"},
        )

    try:
        if not settings.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY not found in environment variables")
        if llm is None:
            llm = GeminiClient.from_settings(settings)

        chat_request = ChatRequest.from_body(_parse_body(event))
        logger.info(
            f"Chat request: user={chat_request.user_id} message_len={len(chat_request.message)}"
        )

        if store is None:
            store = get_parcel_store(settings)
        parcels = fetch_parcel_context(store, chat_request.user_id)

        prompt = build_prompt(chat_request.message, parcels)
        answer = llm.generate(prompt)

        logger.info(f"Answered with {len(answer)} chars using {len(parcels)} parcels")
        return _response(200, ResponseEnvelope.ok(answer))

    except ValidationError as e:
        logger.warning(f"Invalid chat request: {e}")
        return _response(400, ResponseEnvelope.failure(str(e)))

    except Exception as e:
        logger.exception(f"Error in chat handler: {e}")
        message = str(e) or "An error occurred"
        return _response(500, ResponseEnvelope.failure(message))


def lambda_handler(event, context):
    # Preflight never depends on configuration
    if _get_method(event) == "OPTIONS":
        return _preflight_response()

    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return _response(500, ResponseEnvelope.failure(str(e)))

    return handle_request(event, settings)
