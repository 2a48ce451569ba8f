import httpx

from order_console.core.config import Settings

_WILDCARD_HOSTS = ("", "0.0.0.0", "::")


def api_client(settings: Settings, base_url: str | None = None) -> httpx.Client:
    """HTTP client for the console API with the configured request timeout.

    Without ``base_url`` the client targets the address the server listens
    on, with wildcard hosts replaced by the loopback address.
    """
    if base_url is None:
        host = settings.app.http_host_listen
        if host in _WILDCARD_HOSTS:
            host = "127.0.0.1"
        base_url = f"http://{host}:{settings.app.http_port_listen}"
    return httpx.Client(base_url=base_url, timeout=settings.app.request_timeout_seconds)
