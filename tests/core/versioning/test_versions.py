"""Tests for package versions and version ranges."""

from __future__ import annotations

import pytest

from restorespec.core.versioning import PackageVersion, VersionRange
from restorespec.exceptions import ParseError


def v(text: str) -> PackageVersion:
    return PackageVersion.parse(text)


class TestPackageVersionParse:
    """Parsing and normalization of version strings."""

    def test_short_version_is_padded(self) -> None:
        assert v("1.0").release == (1, 0, 0, 0)

    def test_str_drops_zero_revision(self) -> None:
        assert str(v("1.0")) == "1.0.0"
        assert str(v("1.2.3.4")) == "1.2.3.4"

    def test_prerelease_and_metadata(self) -> None:
        version = v("2.0.0-beta.2+sha.abc")
        assert version.prerelease == "beta.2"
        assert version.metadata == "sha.abc"
        assert version.is_prerelease
        assert str(version) == "2.0.0-beta.2"

    @pytest.mark.parametrize("text", ["", "abc", "1.0.0.0.0", "1..0", "v1.0", "1.0-"])
    def test_invalid_versions_raise(self, text: str) -> None:
        with pytest.raises(ParseError):
            v(text)


class TestPackageVersionOrdering:
    """Precedence rules."""

    def test_numeric_parts_compare_numerically(self) -> None:
        assert v("1.10.0") > v("1.9.0")

    def test_prerelease_sorts_below_release(self) -> None:
        assert v("1.0.0-rc.1") < v("1.0.0")

    def test_prerelease_labels(self) -> None:
        assert v("1.0.0-alpha") < v("1.0.0-beta")
        assert v("1.0.0-beta.2") < v("1.0.0-beta.10")
        assert v("1.0.0-1") < v("1.0.0-alpha")

    def test_label_case_is_ignored(self) -> None:
        assert v("1.0.0-Beta") == v("1.0.0-beta")

    def test_metadata_does_not_affect_equality(self) -> None:
        assert v("1.0.0+build.1") == v("1.0.0")
        assert hash(v("1.0.0+build.1")) == hash(v("1.0.0"))

    def test_trailing_zeros_are_equal(self) -> None:
        assert v("1.0") == v("1.0.0.0")


class TestVersionRangeParse:
    """Interval, floating and bare-version range notation."""

    @pytest.mark.parametrize("text", ["", "*", None, "   "])
    def test_empty_means_all(self, text: str | None) -> None:
        assert VersionRange.parse(text) is VersionRange.ALL
        assert VersionRange.ALL.is_all

    def test_bare_version_is_inclusive_minimum(self) -> None:
        r = VersionRange.parse("1.0")
        assert r.min_version == v("1.0.0")
        assert r.include_min
        assert r.max_version is None
        assert str(r) == "[1.0.0, )"

    def test_exact(self) -> None:
        r = VersionRange.parse("[1.2]")
        assert str(r) == "[1.2.0]"
        assert r.satisfies(v("1.2.0"))
        assert not r.satisfies(v("1.2.1"))

    def test_half_open(self) -> None:
        r = VersionRange.parse("[1.0, 2.0)")
        assert str(r) == "[1.0.0, 2.0.0)"
        assert r.satisfies(v("1.5.0"))
        assert not r.satisfies(v("2.0.0"))
        assert not r.satisfies(v("0.9.0"))

    def test_maximum_only(self) -> None:
        r = VersionRange.parse("(,2.0]")
        assert r.min_version is None
        assert str(r) == "(, 2.0.0]"
        assert r.satisfies(v("0.0.1"))
        assert r.satisfies(v("2.0.0"))
        assert not r.satisfies(v("2.0.1"))

    def test_exclusive_minimum(self) -> None:
        r = VersionRange.parse("(1.0,)")
        assert not r.satisfies(v("1.0.0"))
        assert r.satisfies(v("1.0.1"))

    def test_floating_minor(self) -> None:
        r = VersionRange.parse("1.*")
        assert r.is_floating
        assert r.min_version == v("1.0.0")
        assert str(r) == "1.*"

    def test_floating_prerelease(self) -> None:
        r = VersionRange.parse("2.1-*")
        assert r.is_floating
        assert r.satisfies(v("2.1.0-beta"))
        assert r.satisfies(v("2.1.0"))
        assert not r.satisfies(v("2.0.9"))

    def test_equal_ranges_compare_equal(self) -> None:
        assert VersionRange.parse("1.0") == VersionRange.parse("1.0.0")

    @pytest.mark.parametrize(
        "text",
        ["[1.0", "(1.0)", "[2.0,1.0]", "[1.0,1.0)", "[,]", "[1,2,3]", "1.x*", "[]"],
    )
    def test_invalid_ranges_raise(self, text: str) -> None:
        with pytest.raises(ParseError):
            VersionRange.parse(text)

    def test_all_satisfies_everything(self) -> None:
        assert VersionRange.ALL.satisfies(v("0.0.0-alpha"))
        assert VersionRange.ALL.satisfies(v("99.0"))
        assert str(VersionRange.ALL) == "(, )"
