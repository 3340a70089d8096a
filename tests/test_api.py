"""Tests for the high-level helpers in verbump.api."""

import logging
from datetime import datetime, timezone

import pytest
from verbump import api
from verbump.bump import Action
from verbump.commits import parse_raw_commit
from verbump.version import Version


def today():
    return datetime.now(timezone.utc).date()


class TestInitializeVersion:
    """Verify version initialization from requests."""

    def test_baseline(self):
        version = api.initialize_version(api.VersionRequest("semver"))
        assert version.construct_version_string() == "0.1.0"

    def test_baseline_with_mod_meta(self):
        request = api.VersionRequest("semver", modifier="rc1", metadata="b5")
        assert api.initialize_version(request).construct_version_string() == "0.1.0-rc1+b5"

    def test_parsed_with_overrides(self):
        request = api.VersionRequest("semver", version="1.2.3-beta+old", modifier="rc1")
        version = api.initialize_version(request)
        assert version.modifier == "rc1"
        assert version.metadata is None
        assert version.construct_version_string() == "1.2.3-rc1"

    def test_empty_modifier_keeps_parsed(self):
        request = api.VersionRequest("semver", version="1.2.3-beta", modifier="")
        assert api.initialize_version(request).modifier == "beta"

    def test_semver(self):
        version = api.initialize_semver_version("4.5.6")
        assert (version.major, version.minor, version.patch) == (4, 5, 6)


class TestApplyAction:
    """Verify in-place actions."""

    def test_bump_major(self):
        version = api.initialize_semver_version("1.2.3")
        api.apply_action_on_version(version, "bumpmajor")
        assert version.construct_version_string() == "2.0.0"

    def test_action_member(self):
        version = api.initialize_semver_version("1.2.3")
        api.apply_action_on_version(version, Action.BUMP_MINOR)
        assert version.construct_version_string() == "1.3.0"

    def test_bump(self):
        version = api.initialize_semver_version("1.2.3")
        api.apply_action_on_version(version, "bump")
        assert version.construct_version_string() == "1.2.4"

    def test_unknown_action_logs(self, caplog):
        version = api.initialize_semver_version("1.2.3")
        with caplog.at_level(logging.WARNING, logger="verbump.api"):
            api.apply_action_on_version(version, "sideways")
        assert version.construct_version_string() == "1.2.3"
        assert "Unknown action" in caplog.text

    def test_major_downgrades_to_minor(self):
        version = Version.from_string("2024.1.5", "YYYY.Minor.Micro")
        api.apply_action_on_version(version, Action.BUMP_MAJOR)
        assert version.construct_version_string() == "2024.2.0"

    def test_bump_date(self):
        version = Version.from_string("2020.01.3", "YYYY.0M.Micro")
        api.apply_action_on_version(version, "bumpdate")
        t = today()
        assert (version.year, version.month, version.patch) == (t.year, t.month, 3)


class TestSetters:
    """Verify field setters."""

    def test_semver_elements(self):
        version = Version.from_string("1.2.3.4", "four_part")
        api.set_semver_elements_on_version(version, "5.6.7")
        assert version.construct_version_string() == "5.6.7.4"

    def test_snapshot(self):
        version = api.initialize_semver_version("1.2.3")
        api.set_maven_snapshot_status(version, True)
        assert version.construct_version_string() == "1.2.3-SNAPSHOT"
        api.set_maven_snapshot_status(version, False)
        assert version.construct_version_string() == "1.2.3"

    def test_date_from_string(self):
        version = Version.from_string("2020.01.01.3", "YYYY.0M.0D.Micro")
        api.set_version_date_from_string(version, "2023-11-05")
        assert version.construct_version_string() == "2023.11.05.3"

    def test_empty_date_is_ignored(self, caplog):
        version = Version.from_string("2020.01.01.3", "YYYY.0M.0D.Micro")
        with caplog.at_level(logging.WARNING, logger="verbump.api"):
            api.set_version_date_from_string(version, "")
        assert version.construct_version_string() == "2020.01.01.3"
        assert "empty" in caplog.text

    def test_bad_date(self):
        version = Version.from_string("2020.01.01.3", "YYYY.0M.0D.Micro")
        with pytest.raises(ValueError):
            api.set_version_date_from_string(version, "2023-13-01")


class TestCommits:
    """Verify commit to action mapping."""

    @pytest.mark.parametrize("message, action", [
        ("feat: add export", Action.BUMP_MINOR),
        ("fix: off by one", Action.BUMP_PATCH),
        ("feat!: new api", Action.BUMP_MAJOR),
        ("chore: tidy\n\nBREAKING CHANGE: drops py2", Action.BUMP_MAJOR),
        ("docs: readme", None),
    ])
    def test_raw_commit(self, message, action):
        assert api.get_action_from_raw_commit(message) is action

    def test_no_commit(self):
        assert api.get_action_from_conventional_commit(None) is None

    def test_apply_from_raw_commit(self):
        version = api.initialize_semver_version("1.2.3")
        api.apply_action_on_version_from_commit(version, "fix: typo")
        assert version.construct_version_string() == "1.2.4"

    def test_apply_from_parsed_commit(self):
        version = api.initialize_semver_version("1.2.3")
        api.apply_action_on_version_from_commit(version, parse_raw_commit("feat: thing"))
        assert version.construct_version_string() == "1.3.0"

    def test_non_bumping_commit(self):
        version = api.initialize_semver_version("1.2.3")
        api.apply_action_on_version_from_commit(version, "style: whitespace")
        assert version.construct_version_string() == "1.2.3"


class TestPresets:
    """Verify preset baseline helpers."""

    def test_base_version_with_mod_meta(self):
        assert api.get_base_version_with_mod_meta("semver", "rc", "7") == "0.1.0-rc+7"

    def test_ubuntu(self):
        t = today()
        assert api.get_ubuntu_calver() == f"{t.year % 100}.{t.month:02d}.0"

    def test_reliza(self):
        t = today()
        assert api.get_reliza_calver() == f"{t.year}.{t.month:02d}.Snapshot.0"
        assert api.get_reliza_calver("Stable", "m1") == f"{t.year}.{t.month:02d}.Stable.0+m1"

    def test_reliza_2020(self):
        t = today()
        assert api.get_reliza_calver_2020() == f"{t.year}.{t.month:02d}.Snapshot.1.0"
