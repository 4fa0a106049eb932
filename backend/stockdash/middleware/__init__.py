# Middleware — request logging, security headers
from stockdash.middleware.request_logger import RequestLoggerMiddleware
from stockdash.middleware.security import SecurityHeadersMiddleware

__all__ = ["RequestLoggerMiddleware", "SecurityHeadersMiddleware"]
