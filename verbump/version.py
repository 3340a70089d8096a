"""The Version value: structured fields, rendering, bump helpers and ordering."""

import functools
from datetime import datetime, timezone

from verbump.elements import (
    BASE_MODIFIER,
    DAY_KINDS,
    ElementKind,
    MAVEN_SNAPSHOT,
    MONTH_KINDS,
    YEAR_KINDS,
)
from verbump.errors import SchemaError, VersionMismatchError
from verbump.matching import is_version_matching_schema
from verbump.schema import parse_schema, schema_kinds
from verbump.segmenter import parse_version


def utc_today():
    return datetime.now(timezone.utc).date()


def _year_digits(year, width):
    """Render a year as two digits (width=2) or four (width=4).

    Years parsed from two-digit text stay two digits under either width.
    """
    if year < 100:
        return "%02d" % year if width == 4 else str(year)
    if width == 2:
        return str(year % 100)
    return "%04d" % year


class Version:
    """One concrete version.

    A field is only ever populated when the owning schema has the matching
    element; everything else stays None.
    """

    def __init__(self, schema):
        self.schema = schema
        self.major = None
        self.minor = None
        self.patch = None
        self.nano = None
        self.year = None
        self.month = None
        self.day = None
        self.modifier = None     # semver identifier or calver modifier, e.g. 'alpha', 'rc2', 'Snapshot'
        self.metadata = None     # text after '+', e.g. '20130313144700'
        self.buildid = None      # e.g. '24' or 'build24'
        self.buildenv = None     # e.g. 'circleci'
        self.branch = None       # e.g. '234-ticket_I_work_on'
        self.is_snapshot = False

    # -- factories ---------------------------------------------------------

    @classmethod
    def from_schema(cls, schema):
        """Return the baseline version for a schema.

        Numeric elements start at 0, except that minor starts at 1 when
        present (else major). Dates are today (UTC). A calver modifier
        starts as 'Snapshot'.
        """
        version = cls(schema)
        kinds = set(schema_kinds(schema))
        for kind in (ElementKind.MAJOR, ElementKind.MINOR, ElementKind.PATCH, ElementKind.NANO):
            if kind in kinds:
                version._set_numeric(kind, 0)
        if ElementKind.MINOR in kinds:
            version.minor = 1
        elif ElementKind.MAJOR in kinds:
            version.major = 1
        version.set_current_date()
        if ElementKind.CALVER_MODIFIER in kinds:
            version.modifier = BASE_MODIFIER
        return version

    @classmethod
    def from_string(cls, text, schema):
        """Parse text against schema. Raises VersionMismatchError on mismatch."""
        if not is_version_matching_schema(schema, text):
            raise VersionMismatchError(
                f"Version {text!r} does not match schema {schema!r}",
                schema=schema, value=text,
            )
        parsed = parse_version(text, schema)
        version = cls(schema)
        for component in parsed.components:
            if component.text is not None:
                version.set_element(component.element.kind, component.text)
        if parsed.modifier is not None:
            version.modifier = parsed.modifier
        if parsed.metadata is not None:
            version.metadata = parsed.metadata
        version.is_snapshot = parsed.is_snapshot
        return version

    # -- field access by element kind ---------------------------------------

    def _set_numeric(self, kind, value):
        setattr(self, kind.name.lower(), value)

    def set_element(self, kind, text):
        """Install the raw text of one schema position into its field."""
        if kind.is_numeric:
            self._set_numeric(kind, int(text))
        elif kind.is_modifier:
            self.modifier = text
        elif kind == ElementKind.METADATA:
            self.metadata = text
        elif kind == ElementKind.YYOM:
            self.year = int(text[:-2])
            self.month = int(text[-2:])
        elif kind == ElementKind.YYYYOM:
            self.year = int(text[:4])
            self.month = int(text[4:])
        elif kind in YEAR_KINDS:
            self.year = int(text)
        elif kind in MONTH_KINDS:
            self.month = int(text)
        elif kind in DAY_KINDS:
            self.day = int(text)
        elif kind == ElementKind.BUILDID:
            self.buildid = text
        elif kind == ElementKind.BUILDENV:
            self.buildenv = text
        elif kind == ElementKind.BRANCH:
            self.branch = text

    def _format(self, kind):
        """Return the rendered text for kind, or None if the field is unset."""
        if kind.is_numeric:
            value = getattr(self, kind.name.lower())
            return None if value is None else str(value)
        if kind.is_modifier:
            return self.modifier
        if kind == ElementKind.METADATA:
            return self.metadata
        if kind == ElementKind.BUILDID:
            return self.buildid
        if kind == ElementKind.BUILDENV:
            return self.buildenv
        if kind == ElementKind.BRANCH:
            return self.branch
        if kind in YEAR_KINDS and self.year is None:
            return None
        if kind in MONTH_KINDS and self.month is None:
            return None
        if kind in DAY_KINDS and self.day is None:
            return None
        if kind == ElementKind.YYYY:
            return _year_digits(self.year, 4)
        if kind == ElementKind.YY:
            return _year_digits(self.year, 2)
        if kind == ElementKind.OY:
            return "%02d" % (self.year % 100)
        if kind == ElementKind.YYOM:
            return _year_digits(self.year, 2) + "%02d" % self.month
        if kind == ElementKind.YYYYOM:
            return _year_digits(self.year, 4) + "%02d" % self.month
        if kind == ElementKind.MM:
            return str(self.month)
        if kind == ElementKind.OM:
            return "%02d" % self.month
        if kind == ElementKind.DD:
            return str(self.day)
        if kind == ElementKind.OD:
            return "%02d" % self.day
        raise SchemaError(f"No renderer for element {kind.name}")

    # -- rendering -----------------------------------------------------------

    def construct_version_string(self, use_schema=None, set_snapshot=None):
        """Render this version with its own schema, or with use_schema.

        Empty modifier and metadata are dropped along with their separator.
        A modifier or metadata the schema does not declare is still rendered
        as '-modifier' / '+metadata'. set_snapshot overrides the snapshot flag.
        """
        schema = use_schema or self.schema
        elements = parse_schema(schema)
        kinds = {element.kind for element in elements}
        extra_modifier = self.modifier if not any(k.is_modifier for k in kinds) else None
        extra_metadata = self.metadata if ElementKind.METADATA not in kinds else None

        out = ""
        for element in elements:
            kind = element.kind
            if kind == ElementKind.METADATA and extra_modifier:
                out += "-" + extra_modifier
                extra_modifier = None
            value = self._format(kind)
            if kind.is_modifier or kind == ElementKind.METADATA:
                if not value:
                    continue
                separator = element.separator or ("+" if kind == ElementKind.METADATA else "-")
            elif value is None:
                if element.element_optional:
                    continue
                raise SchemaError(
                    f"Version has no {kind.name} value required by schema {schema!r}"
                )
            else:
                separator = element.separator
            out += (separator if out else "") + value

        if extra_modifier:
            out += "-" + extra_modifier
        if extra_metadata:
            out += "+" + extra_metadata
        snapshot = self.is_snapshot if set_snapshot is None else set_snapshot
        if snapshot:
            out += MAVEN_SNAPSHOT
        return out

    def __str__(self):
        return self.construct_version_string()

    def __repr__(self):
        return (f"Version(major={self.major}, minor={self.minor}, patch={self.patch}, "
                f"nano={self.nano}, year={self.year}, month={self.month}, day={self.day}, "
                f"modifier={self.modifier!r}, metadata={self.metadata!r}, "
                f"schema={self.schema!r})")

    # -- mutation ------------------------------------------------------------

    def set_date(self, date=None):
        """Set the calendar fields the schema has to date (default: today, UTC)."""
        if date is None:
            date = utc_today()
        kinds = set(schema_kinds(self.schema))
        if kinds & YEAR_KINDS:
            self.year = date.year
        if kinds & MONTH_KINDS:
            self.month = date.month
        if kinds & DAY_KINDS:
            self.day = date.day

    def set_current_date(self):
        self.set_date(None)

    def _reset_below(self, *fields):
        for field in fields:
            if getattr(self, field) is not None:
                setattr(self, field, 0)

    def _require(self, field):
        if getattr(self, field) is None:
            raise SchemaError(f"Schema {self.schema!r} has no {field} element")

    def bump_nano(self, step=1):
        self._require("nano")
        self.nano += step

    def bump_patch(self, step=1):
        self._require("patch")
        self.patch += step
        self._reset_below("nano")

    def bump_minor(self, step=1):
        self._require("minor")
        self.minor += step
        self._reset_below("patch", "nano")

    def bump_major(self, step=1):
        self._require("major")
        self.major += step
        self._reset_below("minor", "patch", "nano")

    def simple_bump(self):
        """Bump patch if present, otherwise minor, otherwise move the date to today."""
        kinds = set(schema_kinds(self.schema))
        if ElementKind.PATCH in kinds:
            self.bump_patch()
        elif ElementKind.MINOR in kinds:
            self.bump_minor()
        elif kinds & YEAR_KINDS:
            self.set_current_date()

    # -- equality and ordering -----------------------------------------------

    def _fields(self):
        return (self.major, self.minor, self.patch, self.nano,
                self.year, self.month, self.day,
                self.modifier, self.metadata, self.buildid, self.buildenv,
                self.branch, self.is_snapshot, self.schema)

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self._fields() == other._fields()

    # fields change in place
    __hash__ = None

    def compare_to(self, other):
        """Compare two versions, newest first.

        Returns a negative number when self is NEWER than other, so an
        ascending sort puts the latest version at the front. Fields are
        compared year, month, major, day, minor, patch, nano, then build id
        when both build ids are integers. A present field beats an absent one.
        """
        comparison = 0
        for field in ("year", "month", "major", "day", "minor", "patch", "nano"):
            comparison = _compare_values(getattr(self, field), getattr(other, field))
            if comparison:
                break
        if not comparison and self.buildid and other.buildid \
                and self.buildid.isdigit() and other.buildid.isdigit():
            comparison = _compare_values(int(self.buildid), int(other.buildid))
        return -comparison

    def __lt__(self, other):
        return self.compare_to(other) < 0

    def __gt__(self, other):
        return self.compare_to(other) > 0

    def __le__(self, other):
        return self.compare_to(other) <= 0

    def __ge__(self, other):
        return self.compare_to(other) >= 0


def _compare_values(left, right):
    if left is not None and right is None:
        return 1
    if left is None and right is not None:
        return -1
    if left is None or left == right:
        return 0
    return 1 if left > right else -1


class VersionStringComparator:
    """Order raw version strings newest first; non-matching strings go last.

    Usable with functools.cmp_to_key.
    """

    def __init__(self, schema):
        self.schema = schema

    def __call__(self, left, right):
        left_ok = is_version_matching_schema(self.schema, left)
        right_ok = is_version_matching_schema(self.schema, right)
        if left_ok and not right_ok:
            return -1
        if right_ok and not left_ok:
            return 1
        if not left_ok:
            return 0
        return Version.from_string(left, self.schema).compare_to(
            Version.from_string(right, self.schema))


def sort_version_strings(versions, schema):
    """Return versions sorted newest first, non-matching strings last."""
    return sorted(versions, key=functools.cmp_to_key(VersionStringComparator(schema)))
