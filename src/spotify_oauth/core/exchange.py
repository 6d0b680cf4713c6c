"""
Exchange of an authorization code for a `Token`.

Two flavours share one contract:

- `exchange` blocks, using `requests`
- `exchange_async` suspends, using `aiohttp`

Each performs exactly one POST to the token endpoint with HTTP Basic auth and
a form body. There are no retries, and no timeout unless the caller passes one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import aiohttp
import requests

from .callback import CallbackResult, Granted
from .errors import ErrorKind, SpotifyOAuthError
from .token import Token
from .urls import TOKEN_URL

logger = logging.getLogger(__name__)


def _form_body(callback: CallbackResult, redirect_uri: str) -> Dict[str, str]:
    if not isinstance(callback, Granted):
        raise SpotifyOAuthError(
            ErrorKind.PARSING_FAILED, "Spotify callback code failed to parse: missing code."
        )
    return {
        "grant_type": "authorization_code",
        "code": callback.code,
        "redirect_uri": str(redirect_uri),
    }


def _token_from_response(status: int, body: str) -> Token:
    if 200 <= status < 300:
        token = Token.from_json(body)
        logger.info(
            "exchange.done",
            extra={"status": status, "expires_at": token.expires_at, "scope": token.scope_string},
        )
        return token
    logger.warning("exchange.http_error", extra={"status": status})
    raise SpotifyOAuthError(
        ErrorKind.PARSING_FAILED, "Failed to convert callback into token.", status=status
    )


def exchange(
    callback: CallbackResult,
    client_id: str,
    client_secret: str,
    redirect_uri: str,
    *,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> Token:
    """Exchange a granted callback for a token (blocking).

    Args:
        callback: Result of `CallbackResult.parse`; must be `Granted`.
        client_id: Application client id (Basic auth username).
        client_secret: Application client secret (Basic auth password).
        redirect_uri: The redirect URI used in the authorization request.
        session: Optional `requests.Session` to send the request with.
        timeout: Optional deadline in seconds; None waits indefinitely.

    Raises:
        SpotifyOAuthError: PARSING_FAILED for a denied callback, an unreadable
            or malformed body, or a non-2xx status; REQUEST_FAILED when the
            endpoint could not be reached.
    """
    data = _form_body(callback, redirect_uri)
    http = session or requests
    logger.info("exchange.start", extra={"url": TOKEN_URL})
    try:
        response = http.post(
            TOKEN_URL,
            data=data,
            auth=(client_id, client_secret),
            headers={"Accept": "application/json"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        raise SpotifyOAuthError(ErrorKind.REQUEST_FAILED, "Spotify auth request failed.", e) from e

    try:
        body = response.text
    except (requests.RequestException, UnicodeDecodeError) as e:
        raise SpotifyOAuthError(
            ErrorKind.PARSING_FAILED, "Failed to read the token response body.", e
        ) from e

    return _token_from_response(response.status_code, body)


async def exchange_async(
    callback: CallbackResult,
    client_id: str,
    client_secret: str,
    redirect_uri: str,
    *,
    session: Optional[aiohttp.ClientSession] = None,
    timeout: Optional[float] = None,
) -> Token:
    """Exchange a granted callback for a token from within an event loop.

    Same arguments and errors as `exchange`. When no session is given, a
    short-lived `aiohttp.ClientSession` is opened for this one request.
    """
    data = _form_body(callback, redirect_uri)
    if session is None:
        async with aiohttp.ClientSession() as own_session:
            return await _post_async(own_session, data, client_id, client_secret, timeout)
    return await _post_async(session, data, client_id, client_secret, timeout)


async def _post_async(
    session: aiohttp.ClientSession,
    data: Dict[str, str],
    client_id: str,
    client_secret: str,
    timeout: Optional[float],
) -> Token:
    logger.info("exchange.start", extra={"url": TOKEN_URL})
    to = aiohttp.ClientTimeout(total=timeout)
    try:
        async with session.post(
            TOKEN_URL,
            data=data,
            auth=aiohttp.BasicAuth(client_id, client_secret),
            headers={"Accept": "application/json"},
            timeout=to,
        ) as response:
            try:
                body = await response.text()
            except (aiohttp.ClientPayloadError, UnicodeDecodeError) as e:
                raise SpotifyOAuthError(
                    ErrorKind.PARSING_FAILED, "Failed to read the token response body.", e
                ) from e
            status = response.status
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise SpotifyOAuthError(ErrorKind.REQUEST_FAILED, "Spotify auth request failed.", e) from e

    return _token_from_response(status, body)
