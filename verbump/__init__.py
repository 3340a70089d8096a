"""verbump: schema-driven version parsing, rendering and bumping."""

from verbump._version import __version__, __app_name__, DISPLAY_VERSION
from verbump.bump import Action, get_version_from_pin, get_version_from_pin_and_old_version
from verbump.elements import ElementKind, VersionType, get_element
from verbump.errors import CommitFormatError, SchemaError, VersionMismatchError, VersioningError
from verbump.matching import (
    is_pin_matching_schema,
    is_version_matching_schema,
    is_version_matching_schema_and_pin,
)
from verbump.schema import parse_schema
from verbump.segmenter import parse_version
from verbump.version import Version, VersionStringComparator, sort_version_strings
