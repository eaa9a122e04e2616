import ipaddress
import logging
import socket
from typing import Callable
from urllib.parse import urljoin, urlparse

import httpx

logger = logging.getLogger(__name__)

DEFAULT_FETCH_HEADERS = {
    'User-Agent': 'threat-actor-catalog/0.1 (+importer)',
    'Accept': 'text/html,application/xhtml+xml,text/plain;q=0.9,*/*;q=0.5',
}


class OutboundURLError(ValueError):
    """The URL was rejected before any request was made."""


class RemoteFetchError(RuntimeError):
    """The remote content could not be retrieved."""


def is_blocked_outbound_ip(ip_value: str) -> bool:
    try:
        ip_addr = ipaddress.ip_address(ip_value)
    except ValueError:
        return True
    return (
        ip_addr.is_private
        or ip_addr.is_loopback
        or ip_addr.is_link_local
        or ip_addr.is_multicast
        or ip_addr.is_reserved
        or ip_addr.is_unspecified
    )


def host_matches_allowed_domains(hostname: str, allowed_domains: set[str]) -> bool:
    return any(hostname == domain or hostname.endswith(f'.{domain}') for domain in allowed_domains)


def validate_outbound_url(
    source_url: str,
    *,
    allowed_domains: set[str] | None = None,
    resolve_host: Callable[..., object] = socket.getaddrinfo,
) -> str:
    normalized = str(source_url or '').strip()
    parsed = urlparse(normalized)
    scheme = parsed.scheme.lower()
    if scheme not in {'http', 'https'}:
        raise OutboundURLError('source_url must use http or https')
    if parsed.username or parsed.password:
        raise OutboundURLError('source_url must not include credentials')

    hostname = (parsed.hostname or '').strip('.').lower()
    if not hostname:
        raise OutboundURLError('source_url must include a valid hostname')
    if hostname == 'localhost' or hostname.endswith('.localhost'):
        raise OutboundURLError('source_url points to a blocked host')
    if allowed_domains and not host_matches_allowed_domains(hostname, allowed_domains):
        raise OutboundURLError('source_url domain is not allowed')

    try:
        addr_infos = resolve_host(
            hostname,
            parsed.port or (443 if scheme == 'https' else 80),
            proto=socket.IPPROTO_TCP,
        )
    except OSError as exc:
        raise OutboundURLError(f'failed to resolve source_url host: {exc}') from exc

    for addr_info in addr_infos:
        if is_blocked_outbound_ip(str(addr_info[4][0])):
            raise OutboundURLError('source_url resolves to a blocked IP range')
    return normalized


def safe_http_get(
    source_url: str,
    *,
    timeout: float,
    allowed_domains: set[str] | None = None,
    max_redirects: int = 3,
    validate_url: Callable[..., str] = validate_outbound_url,
    http_get: Callable[..., httpx.Response] = httpx.get,
) -> httpx.Response:
    current_url = validate_url(source_url, allowed_domains=allowed_domains)
    for _ in range(max_redirects + 1):
        response = http_get(
            current_url,
            timeout=timeout,
            follow_redirects=False,
            headers=DEFAULT_FETCH_HEADERS,
        )
        if not response.is_redirect:
            return response
        location = response.headers.get('location')
        if not location:
            return response
        current_url = validate_url(urljoin(str(response.url), location), allowed_domains=allowed_domains)
    raise RemoteFetchError('too many redirects while fetching source_url')


def fetch_remote_text(
    source_url: str,
    *,
    timeout: float,
    max_bytes: int,
    allowed_domains: set[str] | None = None,
    get_response: Callable[..., httpx.Response] | None = None,
) -> str:
    fetch = get_response or safe_http_get
    try:
        response = fetch(source_url, timeout=timeout, allowed_domains=allowed_domains)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning('fetch of %s failed: %s', source_url, exc)
        raise RemoteFetchError(f'failed to fetch source_url: {exc}') from exc

    if len(response.content) > max_bytes:
        logger.warning('fetch of %s returned %d bytes, limit is %d', source_url, len(response.content), max_bytes)
        raise RemoteFetchError('remote content exceeds the size limit')
    return response.text
