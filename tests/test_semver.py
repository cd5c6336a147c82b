"""Tests for NuGet semantic versions."""

import pytest

from common.errors import VersionParseError
from versioning.semver import SemVer


class TestSemVerParse:
    """Test parsing of version text."""

    def test_parses_three_part_version(self):
        """Test a plain semver version."""
        v = SemVer.parse("1.2.3")
        assert (v.major, v.minor, v.patch, v.revision) == (1, 2, 3, 0)
        assert v.prerelease is None

    def test_parses_short_and_four_part_versions(self):
        """Test NuGet one, two and four part versions."""
        assert (SemVer.parse("2").major, SemVer.parse("2").minor) == (2, 0)
        assert SemVer.parse("1.5").minor == 5
        assert SemVer.parse("4.0.0.1").revision == 1

    def test_parses_prerelease_and_build(self):
        """Test pre-release and build metadata."""
        v = SemVer.parse("1.0.0-beta.2+sha.5114f85")
        assert v.prerelease == "beta.2"
        assert v.build == "sha.5114f85"
        assert v.is_prerelease

    def test_keeps_original_text(self):
        """Test that str() returns the declared text."""
        assert str(SemVer.parse("0")) == "0"
        assert str(SemVer.parse(" 1.0 ")) == "1.0"
        assert SemVer.parse("1.0").normalize() == "1.0.0"

    @pytest.mark.parametrize("text", ["", "abc", "1.", "1.2.3.4.5", "1.0-", "1.0.0-beta..1", "1.0.0-01"])
    def test_rejects_invalid_text(self, text):
        """Test that invalid versions raise VersionParseError naming the text."""
        with pytest.raises(VersionParseError) as excinfo:
            SemVer.parse(text)
        assert excinfo.value.text == text.strip()


class TestSemVerOrdering:
    """Test comparison semantics."""

    def test_release_ordering(self):
        """Test numeric ordering including the revision."""
        assert SemVer.parse("1.0.0") < SemVer.parse("1.0.0.1") < SemVer.parse("1.0.1")
        assert SemVer.parse("1.10") > SemVer.parse("1.9")

    def test_prerelease_sorts_before_release(self):
        """Test semver pre-release precedence."""
        assert SemVer.parse("1.0.0-alpha") < SemVer.parse("1.0.0-beta") < SemVer.parse("1.0.0")
        assert SemVer.parse("1.0.0-beta.2") < SemVer.parse("1.0.0-beta.11")

    def test_short_forms_are_equal(self):
        """Test that missing parts default to zero."""
        assert SemVer.parse("1.0") == SemVer.parse("1.0.0")
        assert hash(SemVer.parse("1")) == hash(SemVer.parse("1.0.0.0"))

    def test_build_metadata_ignored(self):
        """Test that build metadata does not affect equality."""
        assert SemVer.parse("1.0.0+a") == SemVer.parse("1.0.0+b")

    def test_prerelease_name(self):
        """Test the alphabetic pre-release name."""
        assert SemVer.parse("2.0.0-Beta2").prerelease_name == "beta"
        assert SemVer.parse("2.0.0").prerelease_name is None

    def test_is_immutable(self):
        """Test that attributes cannot be reassigned."""
        v = SemVer.parse("1.0")
        with pytest.raises(AttributeError):
            v.major = 2
