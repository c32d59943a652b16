# ============================================================================
# ConvertKit - Serialization Package
#
# Purpose: JSON and XML serialization of structured values
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ConvertKit.serialization import to_json, from_xml
#
# Changelog:
#   2026-03-03: Initial serialization package
# ============================================================================

from ConvertKit.serialization.json_codec import from_json, to_json
from ConvertKit.serialization.xml_codec import XML_HEADER, from_xml, to_xml

__all__ = ["to_json", "from_json", "to_xml", "from_xml", "XML_HEADER"]
