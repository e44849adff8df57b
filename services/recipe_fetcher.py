"""
Fetch recipe pages for the AI parser.

Only http(s) URLs on allowlisted recipe sites are fetched. Redirects are
followed by hand so every hop is checked against the allowlist again.
"""

import logging
import re
from typing import Iterable, Tuple
from urllib.parse import urljoin, urlsplit

import httpx
from bs4 import BeautifulSoup

from app.config import settings
from app.exceptions import ServiceValidationError

logger = logging.getLogger("foodplanner.recipe_fetcher")

USER_AGENT = "FoodPlannerRecipeImporter/1.0"
REDIRECT_STATUSES = (301, 302, 303, 307, 308)
_WHITESPACE = re.compile(r"\s+")


def is_url(value: str) -> bool:
    return bool(re.match(r"^https?://", (value or "").strip(), re.IGNORECASE))


def host_allowed(host: str, allowlist: Iterable[str]) -> bool:
    """True when ``host`` is an allowlisted domain or one of its subdomains."""
    host = (host or "").lower().rstrip(".")
    for domain in allowlist:
        domain = domain.lower().strip().lstrip(".")
        if domain and (host == domain or host.endswith("." + domain)):
            return True
    return False


def validate_recipe_url(raw_url: str) -> str:
    url = (raw_url or "").strip()
    if not url:
        raise ServiceValidationError("Invalid URL")
    parsed = urlsplit(url)
    if parsed.scheme not in ("http", "https"):
        raise ServiceValidationError("Only http and https URLs are allowed")
    if parsed.username or parsed.password:
        raise ServiceValidationError("URLs with credentials are not allowed")
    if not parsed.hostname:
        raise ServiceValidationError("Invalid host in URL")
    if not host_allowed(parsed.hostname, settings.recipe_url_allowlist):
        raise ServiceValidationError(
            f"Domain {parsed.hostname} is not an allowed recipe site",
            details={"allowed_domains": list(settings.recipe_url_allowlist)},
        )
    return url


def _build_client() -> httpx.Client:
    return httpx.Client(
        timeout=httpx.Timeout(settings.recipe_fetch_timeout_sec),
        headers={"User-Agent": USER_AGENT},
        follow_redirects=False,
    )


def fetch_html(url: str) -> Tuple[str, str]:
    """Return ``(final_url, html)``; any failure becomes a ServiceValidationError."""
    current = validate_recipe_url(url)
    max_bytes = settings.recipe_fetch_max_bytes
    with _build_client() as client:
        for _ in range(settings.recipe_fetch_max_redirects + 1):
            try:
                with client.stream("GET", current) as resp:
                    if resp.status_code in REDIRECT_STATUSES and resp.headers.get("location"):
                        current = validate_recipe_url(
                            urljoin(current, resp.headers["location"])
                        )
                        continue
                    if resp.status_code != 200:
                        raise ServiceValidationError(
                            f"Could not load recipe page (HTTP {resp.status_code})"
                        )

                    content_type = (resp.headers.get("content-type") or "").lower()
                    if content_type and "html" not in content_type:
                        raise ServiceValidationError("Unsupported content type")

                    data = bytearray()
                    for chunk in resp.iter_bytes():
                        data.extend(chunk)
                        if len(data) > max_bytes:
                            raise ServiceValidationError("Recipe page is too large")
                    html = data.decode(resp.encoding or "utf-8", errors="replace")
                    logger.info("Fetched %s (%d bytes)", current, len(data))
                    return current, html
            except httpx.TimeoutException:
                raise ServiceValidationError("Fetching the recipe page timed out")
            except httpx.RequestError as e:
                logger.warning("Fetching %s failed: %s", current, e)
                raise ServiceValidationError("Could not load recipe page")
    raise ServiceValidationError("Too many redirects")


def html_to_text(html: str, max_chars: int) -> str:
    """Visible page text with scripts and styles removed, whitespace collapsed."""
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    text = _WHITESPACE.sub(" ", soup.get_text(" ")).strip()
    return text[:max_chars]


def fetch_page_text(url: str) -> str:
    _, html = fetch_html(url)
    text = html_to_text(html, settings.recipe_prompt_max_chars)
    if not text:
        raise ServiceValidationError("Recipe page contains no text")
    return text
