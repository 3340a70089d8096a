"""Schema parsing: turn schema text into an ordered tuple of SchemaElement."""

import functools
import re
from collections import namedtuple

from verbump.elements import (
    ElementKind,
    SEPARATORS,
    VersionType,
    YEAR_KINDS,
    get_element,
)
from verbump.errors import SchemaError

SchemaElement = namedtuple(
    "SchemaElement",
    ["kind", "separator", "separator_optional", "element_optional"],
)
SchemaElement.__doc__ = """One position of a parsed schema.

separator is the front separator ('' for the first element).
"""

_TOKEN_RE = re.compile(r"([%s]?)([^%s]+)" % (re.escape(SEPARATORS), re.escape(SEPARATORS)))


def resolve_alias(schema):
    """Return the preset schema text for an alias, else schema unchanged."""
    version_type = VersionType.from_alias(schema)
    if version_type is not None:
        return version_type.schema
    return schema


def tokenize(text):
    """Split schema-shaped text into (separator, token) pairs.

    Raises SchemaError on empty tokens (doubled or trailing separators).
    """
    if not text:
        raise SchemaError("Schema must not be empty")
    tokens = []
    pos = 0
    for match in _TOKEN_RE.finditer(text):
        if match.start() != pos:
            raise SchemaError(f"Malformed schema {text!r} near position {pos}")
        tokens.append((match.group(1), match.group(2)))
        pos = match.end()
    if pos != len(text):
        raise SchemaError(f"Malformed schema {text!r}: trailing separator")
    if tokens and tokens[0][0]:
        raise SchemaError(f"Malformed schema {text!r}: leading separator")
    return tokens


@functools.lru_cache(maxsize=256)
def parse_schema(schema):
    """Parse schema text (or a preset alias) into a tuple of SchemaElement.

    A trailing '?' marks an element optional. When the first element is
    optional, the separator in front of the second element is optional too.
    Unknown element names raise SchemaError.
    """
    text = resolve_alias(schema)
    elements = []
    first_optional = False
    for index, (separator, token) in enumerate(tokenize(text)):
        kind = get_element(token)
        if kind is None:
            raise SchemaError(f"Unknown schema element {token!r} in schema {text!r}")
        optional = token.endswith("?")
        if index == 0:
            first_optional = optional
        elements.append(SchemaElement(
            kind=kind,
            separator=separator,
            separator_optional=(index == 1 and first_optional),
            element_optional=optional,
        ))
    return tuple(elements)


def schema_kinds(schema):
    """Return the element kinds of a schema, in order."""
    return [element.kind for element in parse_schema(schema)]


def strip_schema_from_mod_meta(schema):
    """Return the schema text without its modifier and metadata elements."""
    text = resolve_alias(schema)
    kept = [
        (separator, token)
        for separator, token in tokenize(text)
        if get_element(token) not in (ElementKind.SEMVER_MODIFIER, ElementKind.METADATA)
    ]
    return "".join(separator + token for separator, token in kept)


def _safe_kinds(schema):
    if not schema:
        return None
    try:
        return schema_kinds(schema)
    except SchemaError:
        return None


def is_schema_semver(schema):
    """True for Major.Minor.Patch with optional -Modifier and +Metadata."""
    kinds = _safe_kinds(schema)
    if not kinds or len(kinds) < 3:
        return False
    expected = [
        ElementKind.MAJOR, ElementKind.MINOR, ElementKind.PATCH,
        ElementKind.SEMVER_MODIFIER, ElementKind.METADATA,
    ]
    return len(kinds) <= len(expected) and kinds == expected[:len(kinds)]


def is_schema_four_part(schema):
    """True for Major.Minor.Patch.Nano with optional -Modifier and +Metadata."""
    kinds = _safe_kinds(schema)
    if not kinds:
        return False
    core = [k for k in kinds if k not in (ElementKind.SEMVER_MODIFIER, ElementKind.METADATA)]
    return core == [ElementKind.MAJOR, ElementKind.MINOR, ElementKind.PATCH, ElementKind.NANO]


def is_schema_calver(schema):
    """True if the schema contains any year element."""
    kinds = _safe_kinds(schema)
    if not kinds:
        return False
    return any(kind in YEAR_KINDS for kind in kinds)
