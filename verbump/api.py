"""High-level helpers: initialize versions, apply actions, map commits to actions."""

import logging
from datetime import date

from verbump.bump import Action, normalize_action
from verbump.commits import CommitType, parse_raw_commit
from verbump.elements import BASE_MODIFIER, VersionType
from verbump.schema import schema_kinds
from verbump.version import Version

logger = logging.getLogger(__name__)


class VersionRequest:
    """Inputs for initializing a version: schema plus optional overrides."""

    def __init__(self, schema, version=None, modifier=None, metadata=None):
        self.schema = schema
        self.version = version
        self.modifier = modifier
        self.metadata = metadata

    def __repr__(self):
        return (f"VersionRequest(schema={self.schema!r}, version={self.version!r}, "
                f"modifier={self.modifier!r}, metadata={self.metadata!r})")


def initialize_version_with_mod_meta(schema, modifier=None, metadata=None):
    version = Version.from_schema(schema)
    version.modifier = modifier
    version.metadata = metadata
    return version


def initialize_version(request):
    """Build a Version from a request.

    Without a version string the schema baseline is used. With one, it is
    parsed; a non-empty modifier replaces the parsed one and metadata is
    always replaced.
    """
    if not request.version:
        return initialize_version_with_mod_meta(
            request.schema, request.modifier, request.metadata)
    version = Version.from_string(request.version, request.schema)
    if request.modifier:
        version.modifier = request.modifier
    version.metadata = request.metadata
    return version


def initialize_semver_version(text):
    return initialize_version(VersionRequest(VersionType.SEMVER.schema, version=text))


def apply_action_on_version(version, action):
    """Apply an action (Action or its name) to version in place.

    Unknown names leave the version untouched. Actions the schema cannot
    carry out are downgraded the way the bump engine does it.
    """
    resolved = Action.from_name(action)
    if resolved is None:
        logger.warning(f"Unknown action {action!r}, version will not be changed")
        return
    resolved = normalize_action(schema_kinds(version.schema), resolved)
    logger.debug(f"Applying {resolved.name} to {version.construct_version_string()}")
    if resolved == Action.BUMP:
        version.simple_bump()
    elif resolved == Action.BUMP_PATCH:
        version.bump_patch()
    elif resolved == Action.BUMP_MINOR:
        version.bump_minor()
    elif resolved == Action.BUMP_MAJOR:
        version.bump_major()
    elif resolved == Action.BUMP_DATE:
        version.set_current_date()


def set_semver_elements_on_version(version, semver):
    """Copy major, minor and patch from a Major.Minor.Patch string onto version."""
    source = initialize_semver_version(semver)
    version.major = source.major
    version.minor = source.minor
    version.patch = source.patch


def get_action_from_conventional_commit(commit):
    """Map a parsed commit to an action: breaking -> major, feat -> minor, fix -> patch."""
    if commit is None:
        return None
    if commit.is_breaking_change():
        return Action.BUMP_MAJOR
    if commit.type == CommitType.FEAT:
        return Action.BUMP_MINOR
    if commit.type == CommitType.BUG_FIX:
        return Action.BUMP_PATCH
    return None


def get_action_from_raw_commit(raw_commit):
    return get_action_from_conventional_commit(parse_raw_commit(raw_commit))


def apply_action_on_version_from_commit(version, commit):
    """Apply the action implied by a commit (parsed or raw text) to version."""
    if isinstance(commit, str):
        commit = parse_raw_commit(commit)
    action = get_action_from_conventional_commit(commit)
    if action is None:
        logger.info(f"Commit type {commit.type.prefix!r} does not change the version")
        return
    apply_action_on_version(version, action)


def set_maven_snapshot_status(version, status):
    version.is_snapshot = bool(status)


def set_version_date_from_string(version, date_str):
    """Set the version's calendar fields from an ISO 'YYYY-MM-DD' string.

    Raises ValueError on a malformed date.
    """
    if not date_str:
        logger.warning("Date string is empty, version will not be changed")
        return
    version.set_date(date.fromisoformat(date_str))


def get_base_version_with_mod_meta(schema, modifier=None, metadata=None):
    return initialize_version_with_mod_meta(schema, modifier, metadata).construct_version_string()


def get_calver_type(version_type, modifier=None, metadata=None):
    return get_base_version_with_mod_meta(version_type.schema, modifier, metadata)


def get_ubuntu_calver():
    """Today's Ubuntu-style version, e.g. '24.10.0'."""
    return get_calver_type(VersionType.CALVER_UBUNTU)


def get_reliza_calver(modifier=None, metadata=None):
    return get_calver_type(VersionType.CALVER_RELIZA, modifier or BASE_MODIFIER, metadata)


def get_reliza_calver_2020(modifier=None, metadata=None):
    return get_calver_type(VersionType.CALVER_RELIZA_2020, modifier or BASE_MODIFIER, metadata)
