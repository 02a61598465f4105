"""HTTP middleware."""
from .request_log import get_request_id, log_requests
