"""Command-line interface for verbump."""

import argparse
import logging
import sys

from verbump import __version__, __app_name__, DISPLAY_VERSION
from verbump.api import (
    VersionRequest,
    apply_action_on_version,
    get_action_from_conventional_commit,
    initialize_version,
    set_maven_snapshot_status,
    set_semver_elements_on_version,
    set_version_date_from_string,
)
from verbump.bump import Action, get_version_from_pin_and_old_version
from verbump.commits import parse_raw_commit
from verbump.errors import SchemaError, VersioningError

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="Compute version strings from a schema, a pin and the previous version.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  %(prog)s -s semver                                  Baseline version (0.1.0)
  %(prog)s -s semver -v 1.2.3 -a bumpminor            Next minor (1.3.0)
  %(prog)s -s semver -v 1.2.3 -p 1.2.Patch            Bump within 1.2.x
  %(prog)s -s semver -v 1.2.4-rc1 -p 1.2.4 --namespace rc
                                                      Next release candidate (1.2.4-rc2)
  %(prog)s -s YYYY.0M.Micro -v 2024.01.3              Next CalVer release
  %(prog)s -s semver -v 1.2.3 -c "feat: add export"   Bump from a conventional commit
  %(prog)s -s semver -v 1.2.3 -t true                 Maven snapshot (1.2.4-SNAPSHOT)

schema elements:
  Major Minor Patch|Micro Nano Modifier Metadata CalverModifier
  YYYY YY 0Y MM 0M DD 0D YYYY0M YY0M Branch BuildId BuildEnv
  Separators: . - _ +   Optional elements end with ?
  Presets: semver, four_part, CALVER_UBUNTU, CALVER_RELIZA, FEATURE_BRANCH, ...

exit codes:
  0  success
  1  version, pin, date or commit does not fit
  2  bad schema or arguments""",
    )
    parser.add_argument(
        '--version-info', action='version',
        version=f'{__app_name__} {DISPLAY_VERSION} ({__version__})'
    )
    parser.add_argument(
        '--schema', '-s', required=True,
        help='Schema or preset name, e.g. semver or YYYY.0M.Micro'
    )
    parser.add_argument(
        '--version', '-v', dest='current_version', metavar='VERSION',
        help='Current version; a baseline is generated when omitted'
    )
    parser.add_argument(
        '--pin', '-p',
        help='Pin: schema-shaped template with frozen literal positions (default: the schema)'
    )
    parser.add_argument(
        '--modifier', '-i',
        help='Version modifier (identifier), must be supported by the schema'
    )
    parser.add_argument(
        '--metadata', '-m',
        help='Version metadata, must be supported by the schema'
    )
    parser.add_argument(
        '--action', '-a',
        help='Bump action: bump, bumppatch, bumpminor, bumpmajor, bumpdate (default: bump)'
    )
    parser.add_argument(
        '--namespace',
        help='Modifier namespace, e.g. rc to count rc1, rc2, ...'
    )
    parser.add_argument(
        '--snapshot', '-t', choices=['true', 'false'], type=str.lower,
        help='Mark (true) or unmark (false) as Maven snapshot; unset keeps as is'
    )
    parser.add_argument(
        '--date', '-d',
        help='Set the calendar date, UTC, in YYYY-MM-DD format'
    )
    parser.add_argument(
        '--semver', '-r',
        help='Set major, minor and patch from a Major.Minor.Patch version'
    )
    parser.add_argument(
        '--cienv', '-e',
        help='Value of the CI environment (BuildEnv) element'
    )
    parser.add_argument(
        '--cibuild', '-b',
        help='Value of the CI build (BuildId) element'
    )
    parser.add_argument(
        '--branch', '-n',
        help='Value of the Branch element'
    )
    parser.add_argument(
        '--commit', '-c',
        help='Conventional commit message; picks the action when --action is not given'
    )
    parser.add_argument(
        '--verbose', action='store_true',
        help='Verbose logging output'
    )
    return parser


def _resolve_action(parser, args):
    """Return the action to apply, or None when the commit asks for none."""
    if args.action:
        action = Action.from_name(args.action)
        if action is None:
            parser.error(f"unknown action {args.action!r}")
        return action
    if args.commit:
        commit = parse_raw_commit(args.commit)
        action = get_action_from_conventional_commit(commit)
        if action is None:
            logger.info("No need to change version based on commit message contents.")
        return action
    return Action.BUMP


def compute_version(parser, args):
    """Build the Version the command line asks for."""
    action = _resolve_action(parser, args)
    request = VersionRequest(args.schema, version=args.current_version,
                             modifier=args.modifier, metadata=args.metadata)

    if args.current_version and action is not None:
        version = get_version_from_pin_and_old_version(
            args.schema, args.pin or args.schema, args.current_version,
            action, args.namespace)
        if args.modifier:
            version.modifier = args.modifier
        if args.metadata:
            version.metadata = args.metadata
    elif not args.current_version and (args.pin or args.namespace):
        version = get_version_from_pin_and_old_version(
            args.schema, args.pin or args.schema, None, None, args.namespace)
        if args.modifier:
            version.modifier = args.modifier
        if args.metadata:
            version.metadata = args.metadata
    else:
        version = initialize_version(request)
        if action is not None and (args.action or args.commit):
            apply_action_on_version(version, action)

    if args.cienv:
        version.buildenv = args.cienv
    if args.cibuild:
        version.buildid = args.cibuild
    if args.branch:
        version.branch = args.branch
    if args.semver:
        set_semver_elements_on_version(version, args.semver)
    if args.snapshot is not None:
        set_maven_snapshot_status(version, args.snapshot == 'true')
    if args.date:
        set_version_date_from_string(version, args.date)
    return version


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging (stderr, so stdout carries only the version)
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(message)s',
    )

    try:
        version = compute_version(parser, args)
        print(version.construct_version_string())
    except SchemaError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    except (VersioningError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
