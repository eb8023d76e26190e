"""JSON-in-text column codec.

List and dict fields (gallery, highlights, services, payment metadata) are
stored as JSON strings in TEXT columns. Decoding never raises: absent or
corrupt values fall back to a default so callers can always iterate.

- stringify_json / parse_json_field: the plain codec.
- JSONText: a SQLAlchemy TypeDecorator applying the codec per column.
"""

import json
import logging

from sqlalchemy.types import Text, TypeDecorator

logger = logging.getLogger(__name__)

# (column, raw value) pairs already reported as malformed
_reported_malformed = set()


def stringify_json(value):
    """Serialize a value to a JSON string, or None if absent/unserializable."""
    if value is None:
        return None
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        logger.warning(f"Could not serialize value to JSON: {e}")
        return None


def parse_json_field(raw, default):
    """Decode a stored JSON string, returning ``default`` on empty or bad input."""
    if raw is None or raw == "":
        return default
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return default


class JSONText(TypeDecorator):
    """TEXT column holding JSON, exposed to Python as a list or dict.

    ``default_factory`` builds the value returned for NULL or malformed
    rows. Malformed rows are logged once per distinct value.
    """

    impl = Text
    cache_ok = True

    def __init__(self, default_factory=list, column_label=None, **kwargs):
        super().__init__(**kwargs)
        self.default_factory = default_factory
        self.column_label = column_label

    def process_bind_param(self, value, dialect):
        return stringify_json(value)

    def process_result_value(self, value, dialect):
        default = self.default_factory()
        parsed = parse_json_field(value, default)
        if not isinstance(parsed, type(default)):
            # Valid JSON of the wrong shape, e.g. 'null' in a list column
            parsed = default
        if parsed is default and value not in (None, ""):
            key = (self.column_label, value)
            if key not in _reported_malformed:
                _reported_malformed.add(key)
                logger.warning(
                    f"Malformed JSON in column {self.column_label or '?'}: {value[:80]!r}"
                )
        return parsed


def JSONList(column_label=None):
    return JSONText(list, column_label=column_label)


def JSONDict(column_label=None):
    return JSONText(dict, column_label=column_label)
