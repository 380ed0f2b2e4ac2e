"""HTTP middleware: timeout, request ID, security headers, response cache.

Applied in main app; order matters (last added = outermost).
Import and use from mynet.main.
"""

from mynet.middleware.request_id import RequestIDMiddleware
from mynet.middleware.response_cache import ResponseCacheMiddleware
from mynet.middleware.security_headers import SecurityHeadersMiddleware
from mynet.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "ResponseCacheMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
