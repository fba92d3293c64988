"""HTTP client layer: the request transport and the response bridge."""

from adocli.client.response import emit_response, extract_response_data, parse_path, select_path
from adocli.client.transport import Transport

__all__ = [
    "Transport",
    "emit_response",
    "extract_response_data",
    "parse_path",
    "select_path",
]
