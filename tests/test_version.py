"""Tests for the Version value: baselines, parsing, rendering and ordering."""

from datetime import date, datetime, timezone

import pytest
from verbump.errors import SchemaError, VersionMismatchError
from verbump.version import Version, VersionStringComparator, sort_version_strings


def today():
    return datetime.now(timezone.utc).date()


class TestFromSchema:
    """Verify baseline versions."""

    def test_semver_baseline(self):
        v = Version.from_schema("semver")
        assert v.construct_version_string() == "0.1.0"
        assert v.modifier is None
        assert v.metadata is None

    def test_major_only_baseline(self):
        assert Version.from_schema("Major.Patch").construct_version_string() == "1.0"

    def test_four_part_baseline(self):
        assert Version.from_schema("four_part").construct_version_string() == "0.1.0.0"

    def test_fields_outside_schema_stay_unset(self):
        v = Version.from_schema("semver")
        assert v.nano is None
        assert v.year is None
        assert v.branch is None

    def test_ubuntu_baseline(self):
        t = today()
        expected = f"{t.year % 100}.{t.month:02d}.0"
        assert Version.from_schema("CALVER_UBUNTU").construct_version_string() == expected

    def test_reliza_2020_baseline(self):
        t = today()
        expected = f"{t.year}.{t.month:02d}.Snapshot.1.0"
        assert Version.from_schema("CALVER_RELIZA_2020").construct_version_string() == expected


class TestFromString:
    """Verify parsing versions into fields."""

    def test_semver_fields(self):
        v = Version.from_string("3.4.5-beta.2+build7", "semver")
        assert (v.major, v.minor, v.patch) == (3, 4, 5)
        assert v.modifier == "beta.2"
        assert v.metadata == "build7"

    def test_calver_fields(self):
        v = Version.from_string("2024.03.07.2", "YYYY.0M.0D.Micro")
        assert (v.year, v.month, v.day, v.patch) == (2024, 3, 7, 2)

    def test_concatenated_year_month(self):
        v = Version.from_string("202101.1.0", "YYYY0M.Minor.Micro")
        assert (v.year, v.month, v.minor, v.patch) == (2021, 1, 1, 0)
        v = Version.from_string("2101.11.0", "YY0M.Minor.Micro")
        assert (v.year, v.month, v.minor) == (21, 1, 11)

    def test_branch_fields(self):
        v = Version.from_string("feature-x_JIRA-1.12", "Branch.Micro")
        assert v.branch == "feature-x_JIRA-1"
        assert v.patch == 12

    def test_snapshot(self):
        v = Version.from_string("1.0.0-SNAPSHOT", "semver")
        assert v.is_snapshot

    def test_mismatch_raises(self):
        with pytest.raises(VersionMismatchError) as exc:
            Version.from_string("1.0", "semver")
        assert exc.value.value == "1.0"
        assert isinstance(exc.value, ValueError)


class TestRender:
    """Verify construct_version_string formatting."""

    @pytest.mark.parametrize("schema, text", [
        ("semver", "1.2.3"),
        ("semver", "1.2.3-rc.1+5"),
        ("four_part", "1.2.3.4-dev"),
        ("YY.0M.Micro", "24.04.1"),
        ("YYYY.0M.Micro", "2024.04.1"),
        ("YYYY.MM.DD", "2024.4.9"),
        ("0Y.0M.0D.Micro-Modifier", "22.03.28.2-dev"),
        ("CALVER_RELIZA", "2020.01.Snapshot.5+meta"),
        ("YYYY0M.Minor.Micro", "202101.1.0"),
        ("YY0M.Minor.Micro", "2101.11.0"),
        ("YYYY.0M.Micro-Branch", "23.06.0-newbr"),
        ("FEATURE_BRANCH", "dependabot/npm/cli-4.5.13.0"),
        ("Major.Minor.Micro.Nano", "0.0.5.7-1"),
        ("semver", "1.2.3-SNAPSHOT"),
    ])
    def test_parse_render_round_trip(self, schema, text):
        assert Version.from_string(text, schema).construct_version_string() == text

    def test_empty_modifier_drops_separator(self):
        v = Version.from_schema("SEMVER_FULL_NOTATION")
        assert v.construct_version_string() == "0.1.0"
        v.metadata = "abc"
        assert v.construct_version_string() == "0.1.0+abc"
        v.modifier = "rc1"
        assert v.construct_version_string() == "0.1.0-rc1+abc"

    def test_undeclared_modifier_and_metadata(self):
        v = Version.from_string("1.2.3", "Major.Minor.Patch")
        v.modifier = "2"
        v.metadata = "meta"
        assert v.construct_version_string() == "1.2.3-2+meta"

    def test_snapshot_override(self):
        v = Version.from_string("1.2.3", "semver")
        assert v.construct_version_string(set_snapshot=True) == "1.2.3-SNAPSHOT"
        v.is_snapshot = True
        assert v.construct_version_string(set_snapshot=False) == "1.2.3"

    def test_render_with_other_schema(self):
        v = Version.from_string("1.2.3-rc1", "semver")
        assert v.construct_version_string(use_schema="Major.Minor") == "1.2-rc1"

    def test_render_needs_missing_field(self):
        v = Version.from_string("1.2.3", "semver")
        with pytest.raises(SchemaError):
            v.construct_version_string(use_schema="Major.Minor.Patch.Nano")

    def test_str(self):
        assert str(Version.from_string("4.5.6", "semver")) == "4.5.6"


class TestMutation:
    """Verify bump helpers and date setters."""

    def test_bump_major_resets_lower(self):
        v = Version.from_string("1.2.3.4", "four_part")
        v.bump_major()
        assert v.construct_version_string() == "2.0.0.0"

    def test_bump_minor(self):
        v = Version.from_string("1.2.3", "semver")
        v.bump_minor()
        assert v.construct_version_string() == "1.3.0"

    def test_bump_patch_with_step(self):
        v = Version.from_string("1.2.3.4", "four_part")
        v.bump_patch(step=5)
        assert v.construct_version_string() == "1.2.8.0"

    def test_bump_nano(self):
        v = Version.from_string("1.2.3.4", "four_part")
        v.bump_nano()
        assert v.nano == 5

    def test_bump_missing_element(self):
        v = Version.from_string("1.2.3", "semver")
        with pytest.raises(SchemaError):
            v.bump_nano()

    def test_simple_bump_prefers_patch(self):
        v = Version.from_string("1.2.3", "semver")
        v.simple_bump()
        assert v.construct_version_string() == "1.2.4"

    def test_simple_bump_minor(self):
        v = Version.from_string("2024.3", "YYYY.Minor")
        v.simple_bump()
        assert v.construct_version_string() == "2024.4"

    def test_simple_bump_date_only(self):
        v = Version.from_string("2020.01", "YYYY.0M")
        v.simple_bump()
        t = today()
        assert (v.year, v.month) == (t.year, t.month)

    def test_set_date(self):
        v = Version.from_string("2020.01.01.3", "YYYY.0M.0D.Micro")
        v.set_date(date(2023, 11, 5))
        assert v.construct_version_string() == "2023.11.05.3"

    def test_set_date_respects_schema(self):
        v = Version.from_string("2020.01.3", "YYYY.0M.Micro")
        v.set_date(date(2023, 11, 5))
        assert v.day is None


class TestEquality:
    """Verify field-wise equality."""

    def test_equal(self):
        assert Version.from_string("1.2.3", "semver") == Version.from_string("1.2.3", "semver")

    def test_schema_matters(self):
        assert Version.from_string("1.2.3", "semver") != \
            Version.from_string("1.2.3", "Major.Minor.Patch")

    def test_unhashable(self):
        """Versions change in place, so they cannot be dict keys."""
        with pytest.raises(TypeError):
            hash(Version.from_string("1.2.3", "semver"))


class TestOrdering:
    """Verify the newest-first comparison contract."""

    def test_compare_to_is_descending(self):
        a = Version.from_string("2.0.0", "Major.Minor.Patch")
        b = Version.from_string("1.0.0", "Major.Minor.Patch")
        assert a.compare_to(b) < 0
        assert b.compare_to(a) > 0
        assert a < b

    def test_equal_compare(self):
        a = Version.from_string("1.0.0", "semver")
        assert a.compare_to(Version.from_string("1.0.0-rc1", "semver")) == 0

    def test_calendar_before_numbers(self):
        a = Version.from_string("2024.01.9", "YYYY.0M.Micro")
        b = Version.from_string("2024.02.1", "YYYY.0M.Micro")
        assert b.compare_to(a) < 0

    def test_buildid_tiebreak(self):
        a = Version.from_string("1.0.7", "Major.Minor.BuildId")
        b = Version.from_string("1.0.12", "Major.Minor.BuildId")
        assert b.compare_to(a) < 0

    def test_sorted_list_is_newest_first(self):
        versions = [Version.from_string(t, "semver") for t in ("1.0.0", "3.0.0", "2.0.0")]
        assert [str(v) for v in sorted(versions)] == ["3.0.0", "2.0.0", "1.0.0"]


class TestVersionStringComparator:
    """Verify raw string ordering."""

    def test_numeric_not_lexical(self):
        assert sort_version_strings(["2.3.25", "2.3.7"], "semver") == ["2.3.25", "2.3.7"]
        assert sort_version_strings(["2.3.7", "2.3.25"], "semver") == ["2.3.25", "2.3.7"]

    def test_non_matching_last(self):
        result = sort_version_strings(["not-a-version", "1.0.0", "1.1.0"], "semver")
        assert result == ["1.1.0", "1.0.0", "not-a-version"]

    def test_comparator_callable(self):
        compare = VersionStringComparator("semver")
        assert compare("1.0.0", "0.9.0") < 0
        assert compare("junk", "1.0.0") > 0
        assert compare("junk", "other junk") == 0
