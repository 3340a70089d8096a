"""Element registry: the closed set of schema element kinds and named schemas."""

import enum
import re

# Modifier installed for a free CalVer modifier slot
BASE_MODIFIER = "Snapshot"

# Maven-style snapshot suffix, detected and stripped before segmentation
MAVEN_SNAPSHOT = "-SNAPSHOT"

# Separators recognized between schema elements
SEPARATORS = ".+-_:"


class ElementKind(enum.Enum):
    """One positional element of a version schema.

    Each member carries its case-insensitive synonyms, the pattern its
    literal text must fully match, and whether its text may itself contain
    separator characters (only branch and modifier kinds may).
    """

    #          synonyms                                             pattern                                        separators
    MAJOR = (("major",),                                            r"\d+",                                        False)
    MINOR = (("minor",),                                            r"\d+",                                        False)
    PATCH = (("micro", "patch", "bugfix", "build"),                 r"\d+",                                        False)
    NANO = (("nano", "revision", "hotfix"),                         r"\d+",                                        False)
    SEMVER_MODIFIER = (("modifier", "identifier", "mod", "ident", "id"),
                       r"[0-9A-Za-z]+(?:[.\-_][0-9A-Za-z]+)*",                                                        True)
    CALVER_MODIFIER = (("calvermodifier", "calvermod", "calverid", "stable"),
                       r"[0-9A-Za-z]+(?:[\-_][0-9A-Za-z]+)*",                                                         True)
    METADATA = (("meta", "metadata"),                               r"[0-9A-Za-z\-]+(?:\.[0-9A-Za-z\-]+)*",        False)
    YYYY = (("year", "yyyy"),                                       r"[12][0-9]{3}|[0-9]{2}",                      False)
    YYYYOM = (("yyyy0m", "yyyyom"),                                 r"[12][0-9]{3}(?:1[0-2]|0[1-9])",              False)
    YYOM = (("yy0m", "yyom"),                                       r"(?:[1-9][0-9]|[1-9])?[0-9](?:1[0-2]|0[1-9])", False)
    YY = (("yy",),                                                  r"(?:[1-9][0-9]|[1-9])?[0-9]",                 False)
    OY = (("oy", "0y"),                                             r"[0-9]?[0-9]{2}",                             False)
    MM = (("mm", "month"),                                          r"1[0-2]|[1-9]",                               False)
    OM = (("om", "0m"),                                             r"1[0-2]|0[1-9]",                              False)
    DD = (("dd", "day"),                                            r"3[01]|[12][0-9]|[1-9]",                      False)
    OD = (("od", "0d"),                                             r"3[01]|[12][0-9]|0[1-9]",                     False)
    BUILDID = (("buildid", "cibuildid", "cibuild"),                 r"[0-9A-Za-z]+",                               False)
    BUILDENV = (("cienv", "buildenv", "cibuildenv"),                r"[0-9A-Za-z]+",                               False)
    BRANCH = (("branch", "branchname"),                             r"[-./_0-9A-Za-z:]+",                          True)

    def __init__(self, synonyms, pattern, may_contain_separators):
        self.synonyms = frozenset(synonyms)
        self.regex = re.compile(pattern)
        self.may_contain_separators = may_contain_separators

    def matches(self, text):
        """Return True if text is a valid literal for this element."""
        return text is not None and self.regex.fullmatch(text) is not None

    @property
    def is_numeric(self):
        return self in NUMERIC_KINDS

    @property
    def is_date(self):
        return self in DATE_KINDS

    @property
    def is_modifier(self):
        return self in MODIFIER_KINDS


NUMERIC_KINDS = frozenset({
    ElementKind.MAJOR, ElementKind.MINOR, ElementKind.PATCH, ElementKind.NANO,
})

MODIFIER_KINDS = frozenset({
    ElementKind.SEMVER_MODIFIER, ElementKind.CALVER_MODIFIER,
})

YEAR_KINDS = frozenset({
    ElementKind.YYYY, ElementKind.YY, ElementKind.OY,
    ElementKind.YYOM, ElementKind.YYYYOM,
})

MONTH_KINDS = frozenset({
    ElementKind.MM, ElementKind.OM, ElementKind.YYOM, ElementKind.YYYYOM,
})

DAY_KINDS = frozenset({ElementKind.DD, ElementKind.OD})

DATE_KINDS = YEAR_KINDS | MONTH_KINDS | DAY_KINDS

# name -> kind, built once at import
_ELEMENTS_BY_NAME = {
    synonym: kind
    for kind in ElementKind
    for synonym in kind.synonyms
}


def get_element(text):
    """Look up an element kind by any of its names.

    Case-insensitive; a trailing '?' (optional marker) is ignored.
    Returns None when text names no known element.
    """
    if not text:
        return None
    name = text[:-1] if text.endswith("?") else text
    return _ELEMENTS_BY_NAME.get(name.lower())


class VersionType(enum.Enum):
    """Named schema presets."""

    SEMVER = "Major.Minor.Patch-Modifier?+Metadata?"
    FOUR_PART_VERSIONING = "Major.Minor.Patch.Nano-Modifier?+Metadata?"
    CALVER_UBUNTU = "YY.0M.Micro"
    CALVER_RELIZA = "YYYY.0M.Calvermodifier.Micro+Metadata"
    CALVER_RELIZA_2020 = "YYYY.0M.Calvermodifier.Minor.Micro+Metadata"
    SEMVER_FULL_NOTATION = "Major.Minor.Patch-Modifier+Metadata"
    SEMVER_SHORT_NOTATION = "Major.Minor.Patch"
    FEATURE_BRANCH = "Branch.Micro"
    FEATURE_BRANCH_CALVER = "YYYY.0M.Branch.Micro"

    @property
    def schema(self):
        return self.value

    @classmethod
    def from_alias(cls, name):
        """Return the preset for an alias or member name, or None."""
        if not name:
            return None
        return _TYPES_BY_ALIAS.get(name.strip().lower())


_TYPES_BY_ALIAS = {member.name.lower(): member for member in VersionType}
_TYPES_BY_ALIAS.update({
    "semver": VersionType.SEMVER,
    "four_part": VersionType.FOUR_PART_VERSIONING,
    "fourpart": VersionType.FOUR_PART_VERSIONING,
    "ubuntu": VersionType.CALVER_UBUNTU,
    "reliza": VersionType.CALVER_RELIZA,
    "reliza2020": VersionType.CALVER_RELIZA_2020,
    "feature_branch": VersionType.FEATURE_BRANCH,
    "feature_branch_calver": VersionType.FEATURE_BRANCH_CALVER,
})
