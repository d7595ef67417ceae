# paige_api/services/http_client.py
import asyncio
from typing import Any, Awaitable, Optional, Tuple

import httpx

from paige_api.config import settings
from paige_api.utils.logger import logger

# --- Shared outbound client (singleton pattern) ---

_httpx_client: Optional[httpx.AsyncClient] = None


async def get_httpx_client() -> httpx.AsyncClient:
    """Returns a singleton httpx.AsyncClient instance."""
    global _httpx_client
    if _httpx_client is None:
        _httpx_client = httpx.AsyncClient(timeout=float(settings.HTTP_TIMEOUT_SECONDS))
        logger.info("[HTTPX Client] New httpx.AsyncClient initialized.")
    return _httpx_client


async def shutdown_httpx_client():
    """Closes the httpx.AsyncClient instance during application shutdown."""
    global _httpx_client
    if _httpx_client:
        await _httpx_client.aclose()
        _httpx_client = None
        logger.info("[HTTPX Client] httpx.AsyncClient closed.")


async def run_with_timeout(coro: Awaitable[Any], seconds: float, label: str, default: Any = None) -> Tuple[Any, Optional[str]]:
    """
    Awaits `coro` with a hard timeout. Returns (result, None) on success and
    (default, message) on timeout or error, so callers can fall back locally.
    """
    try:
        result = await asyncio.wait_for(coro, timeout=seconds)
        return result, None
    except asyncio.TimeoutError:
        msg = f"{label} timed out after {seconds}s"
        logger.warning(f"[TIMEOUT] {msg}")
        return default, msg
    except Exception as e:
        msg = f"{label} error: {e}"
        logger.error(f"[HTTPX Client] {msg}", exc_info=True)
        return default, msg
