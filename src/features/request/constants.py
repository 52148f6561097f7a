"""Constants for request construction and outbound option building.

Centralizes protocol defaults so the normalizer and the builder agree.
"""

# Construction defaults
DEFAULT_METHOD = "GET"
DEFAULT_FOLLOW = 20
DEFAULT_COMPRESS = True
DEFAULT_COUNTER = 0
DEFAULT_TIMEOUT_MS = 0  # 0 = unlimited
DEFAULT_SIZE_BYTES = 0  # 0 = unlimited

# Methods that must not carry a body
BODYLESS_METHODS = frozenset({"GET", "HEAD"})

# Methods that get an explicit zero Content-Length when sent without a body
ZERO_LENGTH_METHODS = frozenset({"POST", "PUT"})

SUPPORTED_PROTOCOLS = frozenset({"http:", "https:"})

# Outbound header defaults
DEFAULT_ACCEPT = "*/*"
DEFAULT_USER_AGENT = "request-core/0.1 (+https://github.com/request-core)"
DEFAULT_ACCEPT_ENCODING = "gzip,deflate"
DEFAULT_CONNECTION = "close"

# Inferred content types
TEXT_CONTENT_TYPE = "text/plain;charset=UTF-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded;charset=UTF-8"

# Chunk size for reading file-like bodies
DEFAULT_CHUNK_SIZE = 8192
