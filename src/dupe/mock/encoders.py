"""
Dupe Response Encoders

Serialize records into response bodies. Every encoder exposes
``encode(record_or_records, root=label) -> str`` and a ``content_type``.

- XmlEncoder: ActiveResource-style XML documents with typed leaves
- JsonEncoder: root-wrapped JSON objects
"""

import json
import re
import xml.etree.ElementTree as ET
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping

from ..common import InvalidArgumentError, singularize
from ..store.database import Record, attributes_of

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Letters or underscore first, then letters, digits, hyphens, dots or underscores
XML_NAME = re.compile(r"[^\W\d][\w.\-]*")


class XmlEncoder:
    """
    Encode records as XML.

    Example:
        XmlEncoder().encode(record, root='author')

        <?xml version="1.0" encoding="UTF-8"?>
        <author>
          <id type="integer">1</id>
          <name>Arthur C. Clarke</name>
        </author>
    """

    content_type = 'application/xml'

    def encode(self, data: Any, root: str) -> str:
        element = self._build(root, data)
        ET.indent(element, space='  ')
        return f"{XML_DECLARATION}\n{ET.tostring(element, encoding='unicode')}\n"

    def _build(self, tag: Any, value: Any) -> ET.Element:
        tag = str(tag)
        if not XML_NAME.fullmatch(tag):
            raise InvalidArgumentError(f"'{tag}' cannot be used as an XML element name")
        element = ET.Element(tag)

        if isinstance(value, Record):
            value = attributes_of(value)

        if isinstance(value, Mapping):
            for key, child in value.items():
                element.append(self._build(key, child))
        elif isinstance(value, (list, tuple)):
            element.set('type', 'array')
            child_tag = singularize(tag)
            for item in value:
                element.append(self._build(child_tag, item))
        elif value is None:
            element.set('nil', 'true')
        elif isinstance(value, bool):
            # bool before int: bool is an int subclass
            element.set('type', 'boolean')
            element.text = 'true' if value else 'false'
        elif isinstance(value, int):
            element.set('type', 'integer')
            element.text = str(value)
        elif isinstance(value, float):
            element.set('type', 'float')
            element.text = repr(value)
        elif isinstance(value, Decimal):
            element.set('type', 'decimal')
            element.text = str(value)
        elif isinstance(value, datetime):
            element.set('type', 'datetime')
            element.text = value.isoformat()
        elif isinstance(value, date):
            element.set('type', 'date')
            element.text = value.isoformat()
        else:
            element.text = str(value)

        return element


class JsonEncoder:
    """Encode records as ``{"<root>": payload}`` JSON documents."""

    content_type = 'application/json'

    def encode(self, data: Any, root: str) -> str:
        return json.dumps({root: self._payload(data)}, default=self._default)

    def _payload(self, data: Any) -> Any:
        if isinstance(data, Record):
            return {key: self._payload(value) for key, value in attributes_of(data).items()}
        if isinstance(data, (list, tuple)):
            return [self._payload(item) for item in data]
        return data

    def _default(self, value: Any) -> Any:
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, Decimal):
            return str(value)
        if isinstance(value, Record):
            return self._payload(value)
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


ENCODERS = {
    'xml': XmlEncoder,
    'json': JsonEncoder,
}


def get_encoder(format: str):
    """
    Get an encoder instance for a response format.

    Args:
        format: Format name (xml, json)

    Returns:
        Encoder instance

    Raises:
        InvalidArgumentError: If the format is not supported
    """
    try:
        return ENCODERS[format]()
    except KeyError:
        raise InvalidArgumentError(
            f"Unsupported format '{format}'. Expected one of: {', '.join(ENCODERS)}"
        ) from None
