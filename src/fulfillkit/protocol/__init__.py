"""Wire-format detection, key-case normalization and dialog state codec."""

from fulfillkit.protocol.casing import camelize_key, normalize_payload, to_camel_case
from fulfillkit.protocol.detector import (
    ACTIONS_API_VERSION_HEADER,
    ASSISTANT_API_VERSION_HEADER,
    detect_protocol,
    detect_schema_version,
    detect_wire_format,
    get_header,
)
from fulfillkit.protocol.state import DialogStateCodec

__all__ = [
    "ACTIONS_API_VERSION_HEADER",
    "ASSISTANT_API_VERSION_HEADER",
    "DialogStateCodec",
    "camelize_key",
    "detect_protocol",
    "detect_schema_version",
    "detect_wire_format",
    "get_header",
    "normalize_payload",
    "to_camel_case",
]
