"""Security response headers for a JSON-only API. Raw ASGI.

Headers a handler already set are left alone. HSTS is only sent when the
deployment terminates TLS (settings.hsts_enabled).
"""

from typing import Callable

API_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Referrer-Policy": "no-referrer",
}
HSTS_HEADER = ("Strict-Transport-Security", "max-age=31536000; includeSubDomains")


def build_security_headers(hsts_enabled: bool) -> list[tuple[bytes, bytes]]:
    headers = dict(API_SECURITY_HEADERS)
    if hsts_enabled:
        headers[HSTS_HEADER[0]] = HSTS_HEADER[1]
    return [(k.lower().encode(), v.encode()) for k, v in headers.items()]


def SecurityHeadersMiddleware(app: Callable, hsts_enabled: bool = False) -> Callable:
    """Append security headers missing from each HTTP response."""
    security_headers = build_security_headers(hsts_enabled)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                present = {name.lower() for name, _ in headers}
                headers.extend(h for h in security_headers if h[0] not in present)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
