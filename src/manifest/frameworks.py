"""Target framework identifiers and moniker detection.

Turns NuGet target framework monikers (``net45``, ``net40-client``,
``.NETFramework4.5``, ``netstandard1.3``, ``wp8`` ...) into comparable
``FrameworkIdentifier`` values. Unknown monikers are not an error: detection
returns None and callers drop the token.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants

logger = logging.getLogger(__name__)


class FrameworkKind(Enum):
    """Framework families, in a fixed order used for sorting."""
    DOTNET = "net"
    NETSTANDARD = "netstandard"
    NETCOREAPP = "netcoreapp"
    WINDOWS = "win"
    WINDOWS_PHONE = "wp"
    WINDOWS_PHONE_APP = "wpa"
    SILVERLIGHT = "sl"
    MONO_ANDROID = "monoandroid"
    MONO_TOUCH = "monotouch"
    XAMARIN_MAC = "xamarinmac"
    DNX = "dnx"
    DNX_CORE = "dnxcore"


_KIND_ORDER = {kind: index for index, kind in enumerate(FrameworkKind)}

# .NET Framework releases NuGet packages target; anything else is unrecognized.
DOTNET_VERSIONS = (
    "1.0", "1.1", "2.0", "3.0", "3.5", "4.0", "4.5", "4.5.1", "4.5.2", "4.5.3",
    "4.6", "4.6.1", "4.6.2", "4.7", "4.7.1", "4.7.2", "4.8",
)
_CLIENT_PROFILE_VERSIONS = ("3.5", "4.0")
# Kinds whose short moniker drops a trailing ".0" (win8, wp7, sl5).
_SHORT_ZERO_KINDS = (FrameworkKind.WINDOWS, FrameworkKind.WINDOWS_PHONE,
                     FrameworkKind.WINDOWS_PHONE_APP, FrameworkKind.SILVERLIGHT)
_DOTTED_KINDS = (FrameworkKind.NETSTANDARD, FrameworkKind.NETCOREAPP)


@dataclass(frozen=True)
class FrameworkIdentifier:
    """A target framework: family, version and optional profile."""

    kind: FrameworkKind
    version: str = ""
    profile: str = ""

    @property
    def is_dotnet(self) -> bool:
        return self.kind == FrameworkKind.DOTNET

    @property
    def moniker(self) -> str:
        if self.kind in _DOTTED_KINDS:
            return f"{self.kind.value}{self.version}"
        parts = self.version.split(".") if self.version else []
        if self.kind in _SHORT_ZERO_KINDS and len(parts) == 2 and parts[1] == "0":
            parts = parts[:1]
        moniker = self.kind.value + "".join(parts)
        if self.profile:
            moniker += f"-{self.profile}"
        return moniker

    def sort_key(self) -> Tuple[int, Tuple[int, ...], int]:
        numbers = tuple(int(part) for part in self.version.split(".")) if self.version else ()
        return (_KIND_ORDER[self.kind], numbers, 0 if self.profile == "client" else 1)

    def __lt__(self, other: "FrameworkIdentifier") -> bool:
        if not isinstance(other, FrameworkIdentifier):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return self.moniker


def _expand_version(digits: str) -> str:
    """``45`` -> ``4.5``, ``451`` -> ``4.5.1``, ``4`` -> ``4.0``; dotted text is kept."""
    if not digits:
        return ""
    parts = digits.split(".") if "." in digits else list(digits)
    if len(parts) == 1:
        parts.append("0")
    return ".".join(str(int(part)) for part in parts)


def _dotnet(match) -> Optional[FrameworkIdentifier]:
    version = _expand_version(match.group("v"))
    if version not in DOTNET_VERSIONS:
        return None
    profile = match.group("profile") or ""
    if profile == "full":
        profile = ""
    if profile and version not in _CLIENT_PROFILE_VERSIONS:
        return None
    return FrameworkIdentifier(FrameworkKind.DOTNET, version, profile)


def _simple(kind: FrameworkKind, default: str = "") -> Callable:
    def build(match) -> FrameworkIdentifier:
        return FrameworkIdentifier(kind, _expand_version(match.group("v") or "") or default)
    return build


def _windows(match) -> Optional[FrameworkIdentifier]:
    versions = {"": "8.0", "8": "8.0", "80": "8.0", "81": "8.1", "10": "10.0"}
    version = versions.get(match.group("v") or "")
    return FrameworkIdentifier(FrameworkKind.WINDOWS, version) if version else None


def _netcore(match) -> Optional[FrameworkIdentifier]:
    versions = {"45": "8.0", "451": "8.1", "50": "10.0"}
    version = versions.get(match.group("v"))
    return FrameworkIdentifier(FrameworkKind.WINDOWS, version) if version else None


_PATTERNS = [
    (re.compile(r"^\.?netstandard(?:,version=)?v?(?P<v>\d+(?:\.\d+)*)$"), _simple(FrameworkKind.NETSTANDARD)),
    (re.compile(r"^\.?netcoreapp(?:,version=)?v?(?P<v>\d+(?:\.\d+)*)$"), _simple(FrameworkKind.NETCOREAPP)),
    (re.compile(r"^\.?netcore(?P<v>\d+)$"), _netcore),
    (re.compile(r"^uap(?P<v>10(?:\.0)*)$"), lambda m: FrameworkIdentifier(FrameworkKind.WINDOWS, "10.0")),
    (re.compile(r"^(?:win|windows)(?P<v>\d+)?$"), _windows),
    (re.compile(r"^wpa(?P<v>\d+)$"), _simple(FrameworkKind.WINDOWS_PHONE_APP)),
    (re.compile(r"^sl\d*-(?:wp|windowsphone)(?P<v>\d+)?$"), _simple(FrameworkKind.WINDOWS_PHONE, "7.0")),
    (re.compile(r"^(?:wp|windowsphone)(?P<v>\d+)?$"), _simple(FrameworkKind.WINDOWS_PHONE, "7.0")),
    (re.compile(r"^(?:sl|silverlight)(?P<v>\d+)$"), _simple(FrameworkKind.SILVERLIGHT)),
    (re.compile(r"^monoandroid(?P<v>\d+(?:\.\d+)*)?$"), _simple(FrameworkKind.MONO_ANDROID)),
    (re.compile(r"^(?:monotouch|xamarin\.?ios)(?P<v>\d+(?:\.\d+)*)?$"), _simple(FrameworkKind.MONO_TOUCH)),
    (re.compile(r"^xamarin\.?mac(?P<v>\d+(?:\.\d+)*)?$"), _simple(FrameworkKind.XAMARIN_MAC)),
    (re.compile(r"^dnxcore(?P<v>\d+)$"), _simple(FrameworkKind.DNX_CORE)),
    (re.compile(r"^dnx(?P<v>\d+)$"), _simple(FrameworkKind.DNX)),
    (re.compile(r"^(?:\.?netframework|net)(?:,version=)?v?(?P<v>\d+(?:\.\d+)*)(?:-(?P<profile>client|full))?$"),
     _dotnet),
]


def extract_framework(token: Optional[str]) -> Optional[FrameworkIdentifier]:
    """Detect the framework named by a moniker, or None if it is not known."""
    if token is None:
        return None
    key = token.strip().lower().replace(" ", "")
    if not key:
        return None
    key = Constants.FRAMEWORK_ALIASES.get(key, key)

    for pattern, build in _PATTERNS:
        match = pattern.match(key)
        if match:
            framework = build(match)
            if framework is not None:
                return framework
            break

    if is_debug_enabled(logger):
        logger.debug("Unrecognized framework moniker", extra=extra_context(
            event="decision", component="frameworks", action="extract_framework",
            target=token, outcome="unrecognized"
        ))
    return None


def extract_frameworks(text: Optional[str]) -> List[FrameworkIdentifier]:
    """Detect every known framework in a comma or space separated list."""
    if not text:
        return []
    tokens = [token for token in re.split(r"[, ]", text) if token]
    return [framework for framework in map(extract_framework, tokens) if framework is not None]
