"""Utility modules for the connect helper."""

from .fs_utils import get_directory_info
from .hash_utils import extract_api_key_secret, hash_api_key, sha256_hex
from .logger import ContextAwareLogger, CorrelationIdFilter, configure_logging, get_logger
from .random_utils import RandomString, generate_random_string
from .sanitizer import Sanitizer, sanitize_data, sanitize_text_field

__all__ = [
    "ContextAwareLogger",
    "CorrelationIdFilter",
    "RandomString",
    "Sanitizer",
    "configure_logging",
    "extract_api_key_secret",
    "generate_random_string",
    "get_directory_info",
    "get_logger",
    "hash_api_key",
    "sanitize_data",
    "sanitize_text_field",
    "sha256_hex",
]
