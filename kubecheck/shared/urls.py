"""URL helpers shared by probes, notifiers and reports."""

import ipaddress
from urllib.parse import urlsplit, urlunsplit

MASKED_PASSWORD = "****"


def clean_url(url: str) -> str:
    """Mask the basic auth password of ``url`` so it can be logged or reported."""
    if not url:
        return url

    parsed = urlsplit(url)
    if parsed.password is None:
        return url

    userinfo, _, hostinfo = parsed.netloc.rpartition("@")
    username = userinfo.split(":", 1)[0]
    netloc = f"{username}:{MASKED_PASSWORD}@{hostinfo}"
    return urlunsplit((parsed.scheme, netloc, parsed.path, parsed.query, parsed.fragment))


def url_host(host: str) -> str:
    """Host as it must appear in a URL authority; IPv6 literals get brackets."""
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return host

    if address.version == 6:
        return f"[{address.compressed}]"
    return address.compressed
