"""
Diagnostics: source reachability checks.
"""

import logging

import requests

from bbcd.core.constants import DEFAULT_PROBE_TIMEOUT_SEC
from bbcd.core.sources import Source, SourceCatalog

logger = logging.getLogger(__name__)


def check_source(source: Source, timeout: float = DEFAULT_PROBE_TIMEOUT_SEC) -> dict:
    """
    Probe a source's stream prefix with a HEAD request.
    Network errors are reported in the result, never raised.
    """
    info = {
        "id": source.id,
        "name": source.name,
        "url": source.key,
        "reachable": False,
        "status_code": None,
        "error": None,
    }
    if not source.key:
        info["error"] = "No stream url configured"
        return info

    try:
        resp = requests.head(source.key, timeout=timeout, allow_redirects=True)
    except requests.exceptions.Timeout:
        info["error"] = "Request timed out"
    except requests.exceptions.ConnectionError:
        info["error"] = "Could not connect"
    except requests.exceptions.RequestException as e:
        info["error"] = f"Request failed: {e}"
    else:
        info["status_code"] = resp.status_code
        # CDN prefixes answer 403/404 for the bare directory but still exist
        info["reachable"] = resp.status_code < 500

    if not info["reachable"]:
        logger.warning("Source %s unreachable: %s", source.name,
                       info["error"] or info["status_code"])
    return info


def get_diagnostics(catalog: SourceCatalog,
                    timeout: float = DEFAULT_PROBE_TIMEOUT_SEC) -> dict:
    """Gather reachability for every source with a stream url."""
    results = [check_source(s, timeout) for s in catalog if s.key]
    return {
        "total_sources": len(catalog),
        "probed": len(results),
        "reachable": sum(1 for r in results if r["reachable"]),
        "sources": results,
    }
