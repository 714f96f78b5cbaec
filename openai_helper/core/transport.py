"""HTTPS request transport for the OpenAI API."""

import logging
from typing import Any

import httpx

from openai_helper.core.config import ClientConfig
from openai_helper.core.exceptions import UpstreamTimeoutError, UpstreamUnreachableError
from openai_helper.core.logging import REQUEST_LOGGER_NAME

logger = logging.getLogger(__name__)
request_log = logging.getLogger(REQUEST_LOGGER_NAME)


def _timeout(config: ClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        config.timeout_s,
        connect=config.connect_timeout_s,
    )


def _auth_headers(config: ClientConfig) -> dict[str, str]:
    return {"Authorization": f"Bearer {config.api_key}"}


def _send(method_desc: str, url: str, config: ClientConfig, **request_kwargs: Any) -> httpx.Response:
    """Send one POST and record it in the request log."""
    try:
        with httpx.Client(timeout=_timeout(config)) as client:
            logger.debug(f"Sending {method_desc} to {url}")
            response = client.post(url, **request_kwargs)
            request_log.info("POST %s -> %d", url, response.status_code)
            return response

    except httpx.TimeoutException as e:
        logger.error(f"Timeout error to {url}: {e}")
        request_log.info("POST %s -> timeout", url)
        raise UpstreamTimeoutError(
            "API did not respond in time",
            upstream=url,
        ) from e

    except (httpx.ConnectError, httpx.NetworkError) as e:
        logger.error(f"Connection error to {url}: {e}")
        request_log.info("POST %s -> unreachable", url)
        raise UpstreamUnreachableError(
            f"Connection to API failed: {str(e)}",
            upstream=url,
        ) from e

    except httpx.HTTPError as e:
        logger.error(f"Transport error to {url}: {e}")
        request_log.info("POST %s -> transport error", url)
        raise UpstreamUnreachableError(
            f"Request to API failed: {str(e)}",
            upstream=url,
        ) from e


def post_json(
    path: str,
    request_body: dict[str, Any],
    config: ClientConfig,
) -> httpx.Response:
    """
    POST a JSON body to an API endpoint.

    Args:
        path: Endpoint path, e.g. ``/v1/chat/completions``
        request_body: The request body dict to send
        config: Client configuration for base URL, key and timeouts

    Returns:
        httpx.Response object from the API

    Raises:
        UpstreamUnreachableError: If connection to the API fails
        UpstreamTimeoutError: If the request times out
    """
    headers = _auth_headers(config)
    headers["Content-Type"] = "application/json"
    return _send("JSON request", config.endpoint(path), config, json=request_body, headers=headers)


def post_multipart(
    path: str,
    data: dict[str, str],
    files: dict[str, Any],
    config: ClientConfig,
) -> httpx.Response:
    """
    POST a multipart form to an API endpoint.

    Args:
        path: Endpoint path, e.g. ``/v1/files``
        data: Plain form fields
        files: httpx ``files`` mapping of field name to (filename, file object)
        config: Client configuration for base URL, key and timeouts

    Returns:
        httpx.Response object from the API

    Raises:
        UpstreamUnreachableError: If connection to the API fails
        UpstreamTimeoutError: If the request times out
    """
    return _send(
        "multipart upload",
        config.endpoint(path),
        config,
        data=data,
        files=files,
        headers=_auth_headers(config),
    )
