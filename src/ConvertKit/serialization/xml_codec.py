# ============================================================================
# ConvertKit - XML Serialization
#
# Purpose: Serialize structured values to XML text and decode XML text into
#          target types or mutable instances
# Inputs: Models, dataclasses, dicts, lists, scalars / XML text
# Outputs: XML text / validated values
# Dependencies: lxml, pydantic, pydantic_core, typing
# Usage: text = to_xml(item); item = from_xml(text, Item)
#
# Element naming:
#   - Root element: explicit ``tag`` argument, else the class attribute
#     ``xml_tag: ClassVar[str]``, else the class name
#   - Child elements: field alias if set, else field name
#   - Lists: one repeated sibling element per item
#
# Changelog:
#   2026-03-04: Initial XML codec on lxml
#   2026-03-05: Root element check against ``xml_tag`` on decode
#   2026-03-08: Optional standard XML header and pretty printing
#   2026-03-16: Reject documents declaring an encoding other than UTF-8;
#               type introspection helpers moved to targets.py
# ============================================================================

import inspect
import re
from typing import Any, Dict, List, Optional

from lxml import etree
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ConvertKit.errors import SerializationError
from ConvertKit.numeric import from_bool, from_float64
from ConvertKit.serialization.targets import (
    field_tags,
    is_instance_target,
    mapping_value,
    populate,
    sequence_item,
    unwrap_optional,
    validate_into,
)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

_DECLARED_ENCODING_RE = re.compile(r"""\A\s*<\?xml\b[^>]*?\bencoding\s*=\s*["']([^"']*)["']""")
_UTF8_NAMES = frozenset({"utf-8", "utf8"})


def _root_tag(value: Any, tag: Optional[str]) -> str:
    if tag:
        return tag
    if isinstance(value, dict):
        raise SerializationError("to_xml: a dict needs an explicit root tag")
    cls = type(value)
    return getattr(cls, "xml_tag", None) or cls.__name__


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return from_bool(value)
    if isinstance(value, float):
        return from_float64(value)
    return str(value)


def _build_elements(tag: str, data: Any) -> List[etree._Element]:
    if data is None:
        return []
    if isinstance(data, list):
        return [element for item in data for element in _build_elements(tag, item)]

    element = etree.Element(tag)
    if isinstance(data, dict):
        for key, child in data.items():
            element.extend(_build_elements(str(key), child))
    else:
        element.text = _scalar_text(data)
    return [element]


def to_xml(value: Any, tag: Optional[str] = None, pretty_print: bool = False, declaration: bool = False) -> str:
    """
    Serialize a value to XML text.

    Args:
        value: Model, dataclass, dict, list or scalar to serialize
        tag: Root element name override
        pretty_print: Indent nested elements
        declaration: Prefix the standard ``<?xml ...?>`` header

    Returns:
        XML text (a top-level list yields one root element per item)

    Raises:
        SerializationError: If the value is not serializable, a dict has no
            root tag, or a key is not a valid element name
    """
    if isinstance(value, list):
        tags = [_root_tag(item, tag) for item in value]
    else:
        tags = [_root_tag(value, tag)]

    try:
        data = to_jsonable_python(value, by_alias=True, bytes_mode="utf8")
        if isinstance(value, list):
            elements = [e for item_tag, item in zip(tags, data) for e in _build_elements(item_tag, item)]
        else:
            elements = _build_elements(tags[0], data)
        body = "".join(etree.tostring(e, encoding="unicode", pretty_print=pretty_print) for e in elements)
    except (PydanticSerializationError, ValueError, TypeError) as e:
        raise SerializationError(f"to_xml: cannot serialize {type(value).__name__}", details=str(e)) from e

    if declaration:
        return XML_HEADER + body
    return body


# ---- decoding ----


def _children(element: etree._Element) -> List[etree._Element]:
    # Skips comments and processing instructions, whose tag is not a string
    return [child for child in element if isinstance(child.tag, str)]


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _generic_data(element: etree._Element) -> Any:
    """Untyped tree: text leaves, nested dicts, repeated tags collected into lists."""
    children = _children(element)
    if not children:
        return element.text or ""

    data: Dict[str, Any] = {}
    repeated = set()
    for child in children:
        key = _local_name(child)
        value = _generic_data(child)
        if key in repeated:
            data[key].append(value)
        elif key in data:
            data[key] = [data[key], value]
            repeated.add(key)
        else:
            data[key] = value
    return data


def _element_data(element: etree._Element, annotation: Any) -> Any:
    """Convert an element into data shaped for validation against annotation."""
    annotation = unwrap_optional(annotation)

    fields = field_tags(annotation)
    if fields is not None:
        grouped: Dict[str, List[etree._Element]] = {}
        for child in _children(element):
            grouped.setdefault(_local_name(child), []).append(child)

        data: Dict[str, Any] = {}
        for child_tag, (_, field_annotation) in fields.items():
            matches = grouped.get(child_tag)
            if not matches:
                continue
            field_annotation = unwrap_optional(field_annotation)
            item_annotation = sequence_item(field_annotation)
            if item_annotation is not None:
                data[child_tag] = [_element_data(m, item_annotation) for m in matches]
            else:
                data[child_tag] = _element_data(matches[-1], field_annotation)
        return data

    value_annotation = mapping_value(annotation)
    if value_annotation is not None:
        return {_local_name(child): _element_data(child, value_annotation) for child in _children(element)}

    if annotation is Any or annotation is object:
        return _generic_data(element)

    text = element.text or ""
    if annotation is str:
        return text
    return text.strip()


def _parse(text: str) -> etree._Element:
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8")
        except UnicodeDecodeError as e:
            raise SerializationError("from_xml: input is not valid UTF-8", details=str(e)) from e

    # Only UTF-8 documents are supported; the text is handed to libxml2 as UTF-8 bytes
    declared = _DECLARED_ENCODING_RE.match(text)
    if declared and declared.group(1).lower() not in _UTF8_NAMES:
        raise SerializationError(f"from_xml: unsupported document encoding {declared.group(1)!r}")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True, remove_pis=True)
    try:
        return etree.fromstring(text.encode("utf-8"), parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise SerializationError("from_xml: malformed XML", details=str(e)) from e


def from_xml(text: str, target: Any) -> Any:
    """
    Decode XML text into a target.

    Child elements are matched to fields by alias or name. List-typed
    fields collect every matching child; for other fields the last
    matching child wins. Unknown elements are ignored.

    Args:
        text: XML text
        target: Either a type / typing form, whose validated value is
            returned, or a mutable instance (model, dataclass, dict, list)
            that is populated in place; a list target gets one decoded
            element appended

    Returns:
        The decoded value, or the populated target instance

    Raises:
        SerializationError: On malformed XML, a root element that does not
            match the target's ``xml_tag``, or a mismatch with the target's shape
    """
    root = _parse(text)

    annotation = type(target) if is_instance_target(target) else target
    expected = getattr(annotation, "xml_tag", None) if inspect.isclass(annotation) else None
    if expected and _local_name(root) != expected:
        raise SerializationError(f"from_xml: expected element <{expected}> but have <{_local_name(root)}>")

    if isinstance(target, list):
        target.append(_generic_data(root))
        return target
    if isinstance(target, dict):
        return populate("from_xml", _generic_data(root), target)
    if is_instance_target(target):
        return populate("from_xml", _element_data(root, annotation), target)

    # A sequence target holds the root element as its single item
    item_annotation = sequence_item(unwrap_optional(target))
    if item_annotation is not None:
        return validate_into("from_xml", [_element_data(root, item_annotation)], target)
    return validate_into("from_xml", _element_data(root, target), target)
