from __future__ import annotations

import logging

import httpx

logger = logging.getLogger(__name__)


def trigger_worker_restart(
    url: str,
    timeout: float = 2.0,
    transport: httpx.BaseTransport | None = None,
) -> bool:
    """Ask a running worker to reload its code.

    Best effort: any failure is logged and reported as ``False``.
    """
    try:
        with httpx.Client(timeout=timeout, transport=transport) as client:
            response = client.post(url)
    except httpx.TimeoutException:
        logger.warning("Worker restart timed out")
        return False
    except httpx.TransportError as exc:
        logger.warning("Worker not running, will start on next hook")
        logger.debug("Restart request to %s failed: %s", url, exc)
        return False
    except (httpx.InvalidURL, httpx.HTTPError) as exc:
        logger.warning("Worker restart request to %s failed: %s", url, exc)
        return False

    if response.status_code != 200:
        logger.warning("Worker restart returned status %s", response.status_code)
        return False
    logger.info("Worker restart triggered")
    return True
