"""Tests for target framework detection."""

import pytest

from constants import Constants
from manifest.frameworks import (
    FrameworkIdentifier,
    FrameworkKind,
    extract_framework,
    extract_frameworks,
)


class TestExtractFramework:
    """Test moniker detection."""

    @pytest.mark.parametrize("token, kind, version", [
        ("net45", FrameworkKind.DOTNET, "4.5"),
        ("net451", FrameworkKind.DOTNET, "4.5.1"),
        ("net4", FrameworkKind.DOTNET, "4.0"),
        ("net4.5", FrameworkKind.DOTNET, "4.5"),
        ("NET20", FrameworkKind.DOTNET, "2.0"),
        (".NETFramework4.5", FrameworkKind.DOTNET, "4.5"),
        (".NETFramework,Version=v4.0", FrameworkKind.DOTNET, "4.0"),
        ("netstandard1.3", FrameworkKind.NETSTANDARD, "1.3"),
        (".NETStandard2.0", FrameworkKind.NETSTANDARD, "2.0"),
        ("netcoreapp1.0", FrameworkKind.NETCOREAPP, "1.0"),
        ("netcore45", FrameworkKind.WINDOWS, "8.0"),
        ("win81", FrameworkKind.WINDOWS, "8.1"),
        ("wp8", FrameworkKind.WINDOWS_PHONE, "8.0"),
        ("sl4-wp71", FrameworkKind.WINDOWS_PHONE, "7.1"),
        ("wpa81", FrameworkKind.WINDOWS_PHONE_APP, "8.1"),
        ("sl5", FrameworkKind.SILVERLIGHT, "5.0"),
        ("MonoAndroid", FrameworkKind.MONO_ANDROID, ""),
        ("xamarinios", FrameworkKind.MONO_TOUCH, ""),
        ("dnx451", FrameworkKind.DNX, "4.5.1"),
        ("dnxcore50", FrameworkKind.DNX_CORE, "5.0"),
    ])
    def test_known_monikers(self, token, kind, version):
        """Test detection of short and long monikers."""
        framework = extract_framework(token)
        assert framework == FrameworkIdentifier(kind, version)

    def test_client_profile(self):
        """Test the .NET 4.0 client profile."""
        framework = extract_framework("net40-client")
        assert framework.profile == "client"
        assert framework.moniker == "net40-client"
        assert extract_framework("net40-full") == FrameworkIdentifier(FrameworkKind.DOTNET, "4.0")

    @pytest.mark.parametrize("token", [None, "", "portable-net45+win8", "net403", "net45-client", "foo", "net"])
    def test_unknown_monikers_yield_none(self, token):
        """Test that unrecognized monikers are not errors."""
        assert extract_framework(token) is None

    def test_aliases_from_config(self):
        """Test user-supplied aliases."""
        Constants.FRAMEWORK_ALIASES = {"framework45": "net45"}
        assert extract_framework("framework45") == FrameworkIdentifier(FrameworkKind.DOTNET, "4.5")


class TestFrameworkIdentifier:
    """Test identifier behavior."""

    @pytest.mark.parametrize("moniker", ["net45", "net451", "net20", "netstandard1.3", "win8", "win81",
                                         "wp7", "wp8", "wpa81", "sl5", "dnx451", "dnxcore50", "monoandroid"])
    def test_moniker_round_trip(self, moniker):
        """Test that detected frameworks print their short moniker."""
        assert extract_framework(moniker).moniker == moniker

    def test_ordering(self):
        """Test ordering within the .NET family."""
        frameworks = [extract_framework(m) for m in ["net45", "net20", "net40", "net40-client", "net451"]]
        assert [str(fw) for fw in sorted(frameworks)] == ["net20", "net40-client", "net40", "net45", "net451"]


class TestExtractFrameworks:
    """Test list detection."""

    def test_splits_on_commas_and_spaces(self):
        """Test that unknown tokens are dropped."""
        frameworks = extract_frameworks("net40, net45 bogus,sl5")
        assert [str(fw) for fw in frameworks] == ["net40", "net45", "sl5"]

    def test_empty_text(self):
        """Test empty input."""
        assert extract_frameworks("") == []
        assert extract_frameworks(None) == []
