import json
import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

import httpx

logger = logging.getLogger("linkmeta")

MOBILE_UA = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_2 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) "
    "Version/17.0 Mobile/15E148 Safari/604.1"
)

DESKTOP_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/125.0.0.0 Safari/537.36"
)

ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
ACCEPT_LANGUAGE = "zh-CN,zh;q=0.9,en;q=0.8"

TIMEOUT = float(os.getenv("LINKMETA_TIMEOUT", "8.0"))

NETWORK_EXCEPTIONS = (
    httpx.HTTPError,
    httpx.TimeoutException,
)

PARSE_EXCEPTIONS = (
    json.JSONDecodeError,
    ValueError,
    IndexError,
    TypeError,
    KeyError,
    AttributeError,
    RecursionError,
)


@dataclass(frozen=True)
class Page:
    status: int
    url: str
    text: str


def _headers(mobile: bool = True) -> dict[str, str]:
    return {
        "User-Agent": MOBILE_UA if mobile else DESKTOP_UA,
        "Accept": ACCEPT,
        "Accept-Language": ACCEPT_LANGUAGE,
    }


def new_client(mobile: bool = True) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=TIMEOUT,
        headers=_headers(mobile),
    )


@asynccontextmanager
async def client_scope(client: Optional[httpx.AsyncClient] = None,
                       mobile: bool = True) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client untouched, or an ad-hoc one closed on exit."""
    if client is not None:
        yield client
        return
    own = new_client(mobile)
    try:
        yield own
    finally:
        await own.aclose()


async def fetch_page(client: httpx.AsyncClient, url: str, mobile: bool = True) -> Page:
    """GET ``url`` following redirects. Non-2xx raises ``httpx.HTTPStatusError``."""
    resp = await client.get(url, headers=_headers(mobile), follow_redirects=True)
    resp.raise_for_status()
    return Page(status=resp.status_code, url=str(resp.url), text=resp.text)


async def resolve_final_url(client: httpx.AsyncClient, url: str) -> str:
    """Follow a short link to its canonical URL: HEAD first, then GET.

    Falls back to ``url`` itself when both requests fail.
    """
    try:
        resp = await client.head(url, headers=_headers(True), follow_redirects=True)
        return str(resp.url) or url
    except NETWORK_EXCEPTIONS as e:
        logger.debug(f"HEAD 跳转解析失败，改用 GET: {e}")
    try:
        resp = await client.get(url, headers=_headers(True), follow_redirects=True)
        return str(resp.url) or url
    except NETWORK_EXCEPTIONS as e:
        logger.warning(f"短链接跳转解析失败 {url}: {e}")
        return url
