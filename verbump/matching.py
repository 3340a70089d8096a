"""Boolean predicates over schemas, pins and version strings."""

import re

from verbump.elements import ElementKind, get_element
from verbump.schema import parse_schema, resolve_alias
from verbump.segmenter import parse_version

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

_SEMVER_KINDS = (ElementKind.MAJOR, ElementKind.MINOR, ElementKind.PATCH)


def _component_ok(component, allow_free_slot):
    element, text = component
    if text is None:
        # modifier and metadata are optional when rendering, so also when parsing
        return element.element_optional or element.kind.is_modifier \
            or element.kind == ElementKind.METADATA
    if allow_free_slot and get_element(text) == element.kind:
        return True
    return element.kind.matches(text)


def _extras_ok(schema, parsed, strict):
    """Check modifier/metadata text that no schema element declares."""
    kinds = {element.kind for element in schema}
    has_modifier = any(kind.is_modifier for kind in kinds)
    if parsed.modifier is not None and not has_modifier:
        if strict or not ElementKind.SEMVER_MODIFIER.matches(parsed.modifier):
            return False
    if parsed.metadata is not None and ElementKind.METADATA not in kinds:
        if strict or not ElementKind.METADATA.matches(parsed.metadata):
            return False
    return True


def _matches(schema, text, is_pin):
    if not schema or not text:
        return False
    elements = parse_schema(schema)
    parsed = parse_version(text, schema)
    if parsed is None or len(parsed.components) > len(elements):
        return False
    if not all(_component_ok(c, allow_free_slot=is_pin) for c in parsed.components):
        return False
    return _extras_ok(elements, parsed, strict=is_pin)


def is_version_matching_schema(schema, version):
    """Return True if version can be laid out over schema with valid values."""
    return _matches(schema, version, is_pin=False)


def is_pin_matching_schema(schema, pin):
    """Return True if pin fits schema.

    Each position holds either a valid literal or the element's own name
    (a free slot). A pin may not carry a modifier or metadata the schema
    does not declare.
    """
    return _matches(schema, resolve_alias(pin) if pin else pin, is_pin=True)


def is_version_matching_schema_and_pin(schema, pin, version):
    """Return True if version fits schema and agrees with every pin literal.

    Modifier and metadata positions are counters the bump engine advances,
    so they are not compared against the pin.
    """
    if not is_pin_matching_schema(schema, pin):
        return False
    if not is_version_matching_schema(schema, version):
        return False
    pin_parsed = parse_version(resolve_alias(pin), schema)
    version_parsed = parse_version(version, schema)
    for pin_component, version_component in zip(pin_parsed.components, version_parsed.components):
        kind = pin_component.element.kind
        if kind in (ElementKind.SEMVER_MODIFIER, ElementKind.METADATA):
            continue
        literal = pin_component.text
        if literal is None or get_element(literal) == kind:
            continue
        if literal != version_component.text:
            return False
    return True


def is_version_semver(version):
    """Return True if version is a valid semver.org version string."""
    if not version:
        return False
    return SEMVER_RE.match(version) is not None


def _differing_element(old_version, new_version, schema, kinds=None):
    if not (is_version_matching_schema(schema, old_version)
            and is_version_matching_schema(schema, new_version)):
        return None
    old_parsed = parse_version(old_version, schema)
    new_parsed = parse_version(new_version, schema)
    for old, new in zip(old_parsed.components, new_parsed.components):
        if old.text != new.text:
            kind = old.element.kind
            if kinds is None or kind in kinds:
                return kind
    return None


def get_largest_version_element_difference(old_version, new_version, schema):
    """Return the leftmost element kind whose text differs, or None.

    None also when either version does not match schema.
    """
    if old_version is None or new_version is None or schema is None:
        raise TypeError("old_version, new_version and schema are required")
    return _differing_element(old_version, new_version, schema)


def get_largest_semver_version_element_difference(old_version, new_version, schema):
    """Like get_largest_version_element_difference, for Major/Minor/Patch only."""
    if old_version is None or new_version is None or schema is None:
        raise TypeError("old_version, new_version and schema are required")
    return _differing_element(old_version, new_version, schema, kinds=_SEMVER_KINDS)
