"""
Page fetching.

One HTTP GET per call, no retries. Every requests failure is turned
into a NetworkError so pipelines only have to handle one error type.
"""

from __future__ import annotations

from typing import Optional

import requests

from duscraper.errors import NetworkError


DEFAULT_TIMEOUT = 30.0


def fetch_page(url: str, timeout: float = DEFAULT_TIMEOUT, user_agent: Optional[str] = None) -> str:
    """
    Download one page and return its body as text.

    Raises:
        NetworkError: on timeout, DNS/connection failure or a non-2xx status.
    """
    headers = {"User-Agent": user_agent} if user_agent else None

    try:
        resp = requests.get(url, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        raise NetworkError(url, f"HTTP {status}", status_code=status) from exc
    except requests.RequestException as exc:
        raise NetworkError(url, str(exc) or exc.__class__.__name__) from exc

    return resp.text
