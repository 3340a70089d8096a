"""Split version (or pin) strings into one raw text per schema element.

Segmentation never raises for data that does not fit: parse_version returns
None and the matcher turns that into a False.
"""

from collections import namedtuple

from verbump.elements import ElementKind, MAVEN_SNAPSHOT
from verbump.schema import parse_schema

VersionComponent = namedtuple("VersionComponent", ["element", "text"])


class ParsedVersion:
    """A version string segmented against a schema."""

    def __init__(self, components, modifier=None, metadata=None, is_snapshot=False):
        self.components = components    # one VersionComponent per schema element, text may be None
        self.modifier = modifier        # text after the modifier dash, or the modifier element's text
        self.metadata = metadata        # everything after the first '+'
        self.is_snapshot = is_snapshot  # a trailing -SNAPSHOT was stripped

    def texts(self):
        return [component.text for component in self.components]

    def text_for(self, kind):
        """Return the raw text of the first component of the given kind."""
        for component in self.components:
            if component.element.kind == kind:
                return component.text
        return None

    def __repr__(self):
        return (f"ParsedVersion(components={self.texts()!r}, modifier={self.modifier!r}, "
                f"metadata={self.metadata!r}, is_snapshot={self.is_snapshot})")


def _modifier_tail(schema, has_branch):
    """Return the index of the dash-fronted modifier split off up front."""
    if has_branch:
        return None
    for index, element in enumerate(schema):
        if element.kind.is_modifier and element.separator == "-":
            return index
    return None


def _split_dash(core, tail_index):
    """Decide whether a modifier is split off on the first dash."""
    if tail_index is not None:
        return True
    # an undeclared -modifier is only recognizable when nothing else claims dashes
    return not any(
        element.separator == "-" or element.kind.may_contain_separators
        for element in core
    )


def reads_back_modifier(schema):
    """Return True if a modifier rendered with schema parses back as the modifier.

    Branch text may contain dashes, so a branch schema without a modifier
    element has nowhere to put one.
    """
    elements = parse_schema(schema)
    if any(element.kind.is_modifier for element in elements):
        return True
    if any(element.kind == ElementKind.BRANCH for element in elements):
        return False
    core = [
        element for element in elements
        if not (element.kind == ElementKind.METADATA and element.separator == "+")
    ]
    return _split_dash(core, None)


def _walk(elements, text):
    """Assign text to elements. Returns a list of strings or None."""
    if not elements:
        return [] if not text else None

    greedy = None
    for index, element in enumerate(elements):
        if element.kind == ElementKind.BRANCH:
            greedy = index
            break
    if greedy is None:
        for index, element in enumerate(elements):
            if element.kind.may_contain_separators:
                greedy = index
    if greedy is None:
        greedy = len(elements) - 1

    values = [None] * len(elements)
    rest = text

    # left of the greedy element: cut at the next element's separator
    for index in range(greedy):
        separator = elements[index + 1].separator
        cut = rest.find(separator)
        if cut < 0:
            return None
        values[index] = rest[:cut]
        rest = rest[cut + len(separator):]

    # right of it: peel from the end, each element at its own front separator
    for index in range(len(elements) - 1, greedy, -1):
        separator = elements[index].separator
        cut = rest.rfind(separator)
        if cut < 0:
            return None
        values[index] = rest[cut + len(separator):]
        rest = rest[:cut]

    values[greedy] = rest
    return values


def parse_version(text, schema):
    """Segment text against schema.

    Returns a ParsedVersion, or None when text cannot be laid out over the
    schema's elements.
    """
    if not text:
        return None
    elements = parse_schema(schema)

    is_snapshot = False
    if text.endswith(MAVEN_SNAPSHOT):
        is_snapshot = True
        text = text[:-len(MAVEN_SNAPSHOT)]

    metadata = None
    if "+" in text:
        text, metadata = text.split("+", 1)

    has_branch = any(element.kind == ElementKind.BRANCH for element in elements)
    tail_index = _modifier_tail(elements, has_branch)
    core_indices = [
        index for index, element in enumerate(elements)
        if index != tail_index
        and not (element.kind == ElementKind.METADATA and element.separator == "+")
    ]
    core = [elements[index] for index in core_indices]

    modifier = None
    if not has_branch and "-" in text and _split_dash(core, tail_index):
        text, modifier = text.split("-", 1)

    values = _walk(core, text)
    if values is None:
        # retry with the optional elements left out
        kept = [pos for pos, element in enumerate(core) if not element.element_optional]
        if len(kept) == len(core):
            return None
        partial = _walk([core[pos] for pos in kept], text)
        if partial is None:
            return None
        values = [None] * len(core)
        for pos, value in zip(kept, partial):
            values[pos] = value
    raw_by_index = dict(zip(core_indices, values))

    components = []
    for index, element in enumerate(elements):
        if index in raw_by_index:
            raw = raw_by_index[index]
        elif index == tail_index:
            raw = modifier
        elif element.kind == ElementKind.METADATA:
            raw = metadata
        else:
            raw = None
        components.append(VersionComponent(element, raw))

    if modifier is None:
        for component in components:
            if component.element.kind.is_modifier:
                modifier = component.text
                break

    return ParsedVersion(components, modifier=modifier, metadata=metadata,
                         is_snapshot=is_snapshot)
