"""Bump engine: compute the next version from schema, pin and old version."""

import enum
import logging
import re

from verbump.elements import (
    BASE_MODIFIER,
    DATE_KINDS,
    DAY_KINDS,
    ElementKind,
    MONTH_KINDS,
    NUMERIC_KINDS,
    YEAR_KINDS,
    get_element,
)
from verbump.errors import VersionMismatchError
from verbump.matching import is_pin_matching_schema, is_version_matching_schema_and_pin
from verbump.schema import parse_schema, resolve_alias
from verbump.segmenter import parse_version, reads_back_modifier
from verbump.version import Version, utc_today

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[0-9]+")

# Numeric elements from most to least significant
_NUMERIC_ORDER = (ElementKind.MAJOR, ElementKind.MINOR, ElementKind.PATCH, ElementKind.NANO)


class Action(enum.Enum):
    BUMP = "bump"
    BUMP_PATCH = "bumppatch"
    BUMP_MINOR = "bumpminor"
    BUMP_MAJOR = "bumpmajor"
    BUMP_DATE = "bumpdate"

    @classmethod
    def from_name(cls, name):
        """Return the action for 'bumpminor' or 'BUMP_MINOR' style names, or None."""
        if isinstance(name, cls):
            return name
        if not name:
            return None
        key = name.strip().lower()
        for member in cls:
            if key in (member.value, member.name.lower()):
                return member
        return None


def _is_integer(text):
    return bool(text) and _INTEGER_RE.fullmatch(text) is not None


def normalize_action(kinds, action, has_old_version=False):
    """Downgrade an action the schema cannot carry out.

    BUMP_MAJOR -> BUMP_MINOR without a major element, BUMP_MINOR -> BUMP
    without a minor, BUMP_PATCH -> BUMP without a patch, BUMP_DATE -> BUMP
    without any calendar element. No action with an old version means BUMP.
    """
    kinds = set(kinds)
    if action == Action.BUMP_MAJOR and ElementKind.MAJOR not in kinds:
        action = Action.BUMP_MINOR
    if action == Action.BUMP_MINOR and ElementKind.MINOR not in kinds:
        action = Action.BUMP
    if action == Action.BUMP_PATCH and ElementKind.PATCH not in kinds:
        action = Action.BUMP
    if action == Action.BUMP_DATE and not kinds & DATE_KINDS:
        action = Action.BUMP
    if action is None and has_old_version:
        action = Action.BUMP
    return action


def _validate(schema, pin, old_version):
    if not is_pin_matching_schema(schema, pin):
        raise VersionMismatchError(
            f"Pin {pin!r} does not match schema {schema!r}", schema=schema, value=pin)
    if old_version and not is_version_matching_schema_and_pin(schema, pin, old_version):
        raise VersionMismatchError(
            f"Old version {old_version!r} does not match schema {schema!r} and pin {pin!r}",
            schema=schema, value=old_version)


def _initialize(schema, kinds, old):
    """Start the new version from the old one, or from zeros and today."""
    version = Version(schema)
    for kind in _NUMERIC_ORDER:
        if kind in kinds:
            value = getattr(old, kind.name.lower()) if old is not None else None
            setattr(version, kind.name.lower(), value if value is not None else 0)
    if old is None:
        version.set_current_date()
    else:
        version.year = old.year
        version.month = old.month
        version.day = old.day
        version.modifier = old.modifier
        version.metadata = old.metadata
        version.is_snapshot = old.is_snapshot
        version.branch = old.branch
        version.buildid = old.buildid
        version.buildenv = old.buildenv
    return version


def _refresh_date(version, kind, today):
    if kind in YEAR_KINDS:
        version.year = today.year
    if kind in MONTH_KINDS:
        version.month = today.month
    if kind in DAY_KINDS:
        version.day = today.day


def _overlay_pin(version, schema, pin, action):
    """Install pin literals and refresh free calendar slots.

    Returns the set of element kinds protected by the pin.
    """
    protected = set()
    parsed = parse_version(pin, schema)
    today = utc_today()
    for component in parsed.components:
        kind = component.element.kind
        text = component.text
        if text is None:
            continue
        if get_element(text) == kind:
            # free slot
            if kind == ElementKind.CALVER_MODIFIER:
                version.modifier = BASE_MODIFIER
            elif kind in DATE_KINDS and action != Action.BUMP_PATCH:
                _refresh_date(version, kind, today)
            continue
        if kind.is_numeric or kind in DATE_KINDS:
            version.set_element(kind, text)
            protected.add(kind)
        elif kind in (ElementKind.SEMVER_MODIFIER, ElementKind.METADATA):
            # a pinned counter only seeds an empty field
            current = version.modifier if kind.is_modifier else version.metadata
            if not current:
                version.set_element(kind, text)
        else:
            version.set_element(kind, text)
            if kind == ElementKind.CALVER_MODIFIER:
                protected.add(kind)
    if protected:
        logger.debug(f"Elements protected by pin {pin!r}: "
                     f"{', '.join(sorted(k.name for k in protected))}")
    return protected


def _date_key(version, normalize_year):
    year = version.year
    if year is not None and normalize_year:
        year = year % 100
    return tuple(-1 if value is None else value for value in (year, version.month, version.day))


def is_calendar_advanced(version, old):
    """Return True if version's date is later than old's.

    Two-digit and four-digit years compare on their last two digits.
    """
    if old is None:
        return False
    normalize = any(
        year is not None and year < 100 for year in (version.year, old.year)
    )
    return _date_key(version, normalize) > _date_key(old, normalize)


def _bump_numeric(version, kind, protected):
    """Increment kind and zero every less significant unprotected element."""
    field = kind.name.lower()
    setattr(version, field, getattr(version, field) + 1)
    below = _NUMERIC_ORDER[_NUMERIC_ORDER.index(kind) + 1:]
    for lower in below:
        name = lower.name.lower()
        if lower not in protected and getattr(version, name) is not None:
            setattr(version, name, 0)


def _bump_namespaced_modifier(version, namespace):
    current = version.modifier or ""
    suffix = current[len(namespace):] if current.startswith(namespace) else None
    if _is_integer(current):
        version.modifier = f"{namespace}{int(current) + 1}"
    elif _is_integer(suffix):
        version.modifier = f"{namespace}{int(suffix) + 1}"
    else:
        version.modifier = f"{namespace}1"


def _guarded_simple_bump(version, kinds, protected):
    if ElementKind.PATCH in kinds and ElementKind.PATCH not in protected:
        _bump_numeric(version, ElementKind.PATCH, protected)
    elif ElementKind.MINOR in kinds and ElementKind.MINOR not in protected:
        _bump_numeric(version, ElementKind.MINOR, protected)
    else:
        today = utc_today()
        for kind in kinds:
            if kind in DATE_KINDS and kind not in protected:
                _refresh_date(version, kind, today)


def _modifier_writable(schema, protected):
    """A pinned calver modifier stays put, and so does one the schema cannot read back."""
    return ElementKind.CALVER_MODIFIER not in protected and reads_back_modifier(schema)


def _bump_modifier_or_metadata(version, old, kinds, protected, namespace):
    """Advance the modifier counter, or metadata, when no number may move."""
    writable = _modifier_writable(version.schema, protected)
    if namespace:
        _bump_namespaced_modifier(version, namespace)
    elif writable and not version.modifier:
        version.modifier = "1"
    elif writable and _is_integer(version.modifier):
        version.modifier = str(int(version.modifier) + 1)
    elif old is not None and _is_integer(old.metadata):
        if _is_integer(version.metadata):
            version.metadata = str(int(version.metadata) + 1)
        else:
            version.metadata = "1"
    else:
        _guarded_simple_bump(version, kinds, protected)
    logger.debug(f"No free numeric element, modifier={version.modifier!r} "
                 f"metadata={version.metadata!r}")


def _bump_target(kinds, action):
    if action == Action.BUMP_MAJOR:
        return ElementKind.MAJOR
    if action == Action.BUMP_MINOR:
        return ElementKind.MINOR
    for kind in (ElementKind.PATCH, ElementKind.MINOR, ElementKind.MAJOR):
        if kind in kinds:
            return kind
    return None


def _apply_action(version, old, kinds, protected, action, namespace):
    if action == Action.BUMP_DATE:
        return
    target = _bump_target(kinds, action)
    bumped = None
    if target is not None and target in kinds and target not in protected:
        bumped = target
    elif ElementKind.PATCH in kinds and ElementKind.PATCH not in protected:
        bumped = ElementKind.PATCH
    elif ElementKind.NANO in kinds and ElementKind.NANO not in protected and all(
            kind in protected for kind in _NUMERIC_ORDER[:3] if kind in kinds):
        bumped = ElementKind.NANO

    if bumped is None:
        # without history there is no counter to advance unless namespaced
        if old is not None or namespace:
            _bump_modifier_or_metadata(version, old, kinds, protected, namespace)
        return
    logger.debug(f"Bumping {bumped.name} for {action.name}")
    _bump_numeric(version, bumped, protected)
    if namespace:
        version.modifier = namespace


def get_version_from_pin_and_old_version(schema, pin, old_version=None, action=None,
                                         namespace=None):
    """Compute the next version.

    schema:      schema text or preset alias
    pin:         schema-shaped template; literal positions are frozen, positions
                 holding the element's own name are free to advance
    old_version: previous version string, optional
    action:      Action (or its name); defaults to BUMP when old_version is given
    namespace:   modifier namespace, e.g. 'rc' for rc1, rc2, ...

    Raises VersionMismatchError if the pin does not match the schema or the old
    version does not match schema and pin. Nothing is built before validation.
    """
    _validate(schema, pin, old_version)
    schema = resolve_alias(schema)
    pin = resolve_alias(pin)
    namespace = namespace or None
    action = Action.from_name(action) if isinstance(action, str) else action

    kinds = [element.kind for element in parse_schema(schema)]
    old = Version.from_string(old_version, schema) if old_version else None
    action = normalize_action(kinds, action, has_old_version=old is not None)
    logger.debug(f"Bumping schema={schema!r} pin={pin!r} old={old_version!r} "
                 f"action={action.name if action else None} namespace={namespace!r}")

    version = _initialize(schema, kinds, old)
    protected = _overlay_pin(version, schema, pin, action)
    if namespace and not _modifier_writable(schema, protected):
        logger.warning(f"Schema {schema!r} with pin {pin!r} has no modifier to carry "
                       f"namespace {namespace!r}, ignoring it")
        namespace = None

    if is_calendar_advanced(version, old):
        logger.debug("Calendar advanced, resetting unprotected numeric elements")
        for kind in _NUMERIC_ORDER:
            if kind in kinds and kind not in protected:
                setattr(version, kind.name.lower(), 0)
        if namespace:
            version.modifier = namespace
    elif action is None:
        present = [kind for kind in kinds if kind in NUMERIC_KINDS]
        if namespace and all(kind in protected for kind in present):
            _bump_namespaced_modifier(version, namespace)
    else:
        _apply_action(version, old, kinds, protected, action, namespace)
    return version


def get_version_from_pin(schema, pin, namespace=None):
    """Compute a first version from schema and pin alone."""
    return get_version_from_pin_and_old_version(schema, pin, namespace=namespace)
