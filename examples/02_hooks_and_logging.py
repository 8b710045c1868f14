"""
Hooks, Plugins and Logging Examples

Demonstrates before/after/error hooks, a custom plugin, structured
logging and the async client.
"""

import asyncio

from instagram_client import AsyncInstagram, ClientConfig, Instagram, Plugin


def hooks_example():
    """before/after/error callbacks from the config."""
    print("\n=== Hooks ===")

    def before(request):
        # Returning None keeps the request unchanged
        print(f"-> {request.method} {request.url.split('?')[0]}")

    def after(response):
        print(f"<- {response.status_code} {response.reason}")

    def error(exc):
        print(f"!! {type(exc).__name__}: {exc}")

    config = ClientConfig(
        client_id="YOUR_CLIENT_ID",
        client_secret="YOUR_CLIENT_SECRET",
        client_ip="203.0.113.10",
        before=before,
        after=after,
        error=error,
    )

    with Instagram(config) as api:
        api.get("/media/popular")


class TraceIdPlugin(Plugin):
    """Adds a trace header to every request."""

    def __init__(self, trace_id: str):
        self.trace_id = trace_id

    def before_request(self, request):
        return request.with_header("X-Trace-Id", self.trace_id)


def plugins_and_logging_example():
    """Custom plugin plus JSON logs to a rotating file."""
    print("\n=== Plugins + Logging ===")

    config = ClientConfig.create(
        client_id="YOUR_CLIENT_ID",
        client_secret="YOUR_CLIENT_SECRET",
        timeout=(3, 10),
        log_enabled=True,
        log_level="INFO",
        log_format="json",
        log_path="logs/instagram.log",
    )

    with Instagram(config, plugins=[TraceIdPlugin("demo-1")]) as api:
        api.get("/tags/search", {"q": "sunset"})
    print("See logs/instagram.log (tokens are masked)")


async def async_example():
    """Same API with async/await."""
    print("\n=== Async ===")

    config = ClientConfig(client_id="YOUR_CLIENT_ID", client_secret="YOUR_CLIENT_SECRET")

    async with AsyncInstagram(config) as api:
        res = await api.get("/tags/sunset")
        print(res.data)


if __name__ == "__main__":
    hooks_example()
    plugins_and_logging_example()
    asyncio.run(async_example())
