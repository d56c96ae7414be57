"""HTTP middleware: request log and access control.

Applied in main.create_app; order matters (last added = outermost).
"""

from storefront.middleware.access_control import AccessControlMiddleware
from storefront.middleware.request_log import RequestLogMiddleware

__all__ = ["AccessControlMiddleware", "RequestLogMiddleware"]
