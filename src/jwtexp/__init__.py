from jwtexp.buffers import BufferPool, default_pool
from jwtexp.diagnostics import DiagnosticSink, NullSink, configure_logging, get_logger
from jwtexp.errors import ConfigError, InvariantError, JwtExpError
from jwtexp.extract import extract_expiration, has_expired, is_token_expired, seconds_until_expiration
from jwtexp.settings import ExtractorSettings, load_settings

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BufferPool",
    "ConfigError",
    "DiagnosticSink",
    "ExtractorSettings",
    "InvariantError",
    "JwtExpError",
    "NullSink",
    "configure_logging",
    "default_pool",
    "extract_expiration",
    "get_logger",
    "has_expired",
    "is_token_expired",
    "load_settings",
    "seconds_until_expiration",
]
