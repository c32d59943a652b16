# ============================================================================
# ConvertKit - Package Initialization
#
# Purpose: Package-level exports and version information
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ConvertKit import to_int64, to_hex, to_json
#
# Changelog:
#   2026-03-02: Initial package setup
#   2026-03-04: Export XML codec
# ============================================================================

__version__ = "0.2.0"
__license__ = "Apache-2.0"

from ConvertKit.encoding import from_base64, from_hex, to_base64, to_hex
from ConvertKit.errors import (
    ConfigurationError,
    ConvertKitError,
    EncodingError,
    ParseError,
    SerializationError,
)
from ConvertKit.numeric import (
    from_bool,
    from_float64,
    from_int,
    from_int64,
    from_uint64,
    to_bool,
    to_float64,
    to_int,
    to_int64,
    to_uint64,
)
from ConvertKit.serialization import from_json, from_xml, to_json, to_xml

__all__ = [
    "__version__",
    # Numbers and booleans
    "to_int",
    "from_int",
    "to_int64",
    "from_int64",
    "to_uint64",
    "from_uint64",
    "to_float64",
    "from_float64",
    "to_bool",
    "from_bool",
    # Byte encodings
    "to_base64",
    "from_base64",
    "to_hex",
    "from_hex",
    # Structured values
    "to_json",
    "from_json",
    "to_xml",
    "from_xml",
    # Errors
    "ConvertKitError",
    "ParseError",
    "EncodingError",
    "SerializationError",
    "ConfigurationError",
]
