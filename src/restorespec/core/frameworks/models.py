"""Target framework monikers.

Parses both short folder names (``net472``, ``net6.0-windows10.0.19041``,
``netstandard2.0``, ``portable-net45+win8``) and full framework names
(``.NETFramework,Version=v4.7.2,Profile=Client``) into a single immutable
``Framework`` value. Unknown identifiers are a ``ParseError``: a fallback
chain that silently drops a framework would change restore results.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from restorespec.exceptions import ParseError

# ---------------------------------------------------------------------------
# Framework identifiers
# ---------------------------------------------------------------------------

NET_FRAMEWORK = ".NETFramework"
NET_CORE_APP = ".NETCoreApp"
NET_STANDARD = ".NETStandard"
NET_CORE = ".NETCore"
NET_PLATFORM = ".NETPlatform"
NET_PORTABLE = ".NETPortable"
UAP = "UAP"
WINDOWS = "Windows"
WINDOWS_PHONE = "WindowsPhone"
WINDOWS_PHONE_APP = "WindowsPhoneApp"
DNX_CORE = "DNXCore"
SILVERLIGHT = "Silverlight"
MONO_ANDROID = "MonoAndroid"
XAMARIN_IOS = "Xamarin.iOS"
NATIVE = "native"

_SHORT_IDENTIFIERS: dict[str, str] = {
    "net": NET_FRAMEWORK,
    "netcoreapp": NET_CORE_APP,
    "netstandard": NET_STANDARD,
    "netcore": NET_CORE,
    "dotnet": NET_PLATFORM,
    "portable": NET_PORTABLE,
    "uap": UAP,
    "win": WINDOWS,
    "wp": WINDOWS_PHONE,
    "wpa": WINDOWS_PHONE_APP,
    "dnxcore": DNX_CORE,
    "sl": SILVERLIGHT,
    "monoandroid": MONO_ANDROID,
    "xamarinios": XAMARIN_IOS,
    "native": NATIVE,
}

_SHORT_NAMES: dict[str, str] = {v: k for k, v in _SHORT_IDENTIFIERS.items()}

_CANONICAL: dict[str, str] = {v.lower(): v for v in _SHORT_IDENTIFIERS.values()}

# Identifiers that always print a dotted version in their short name.
_DOTTED_SHORT_VERSION = {NET_CORE_APP, NET_STANDARD, UAP}

_SHORT_RE = re.compile(
    r"^(?P<id>[a-z]+)(?P<ver>\d[\d.]*)?(?:-(?P<rest>.+))?$"
)
_PLATFORM_RE = re.compile(r"^(?P<name>[a-z]+)(?P<ver>\d[\d.]*)?$")

Version4 = tuple[int, int, int, int]

_ZERO: Version4 = (0, 0, 0, 0)


def _to_version4(text: str, moniker: str) -> Version4:
    """Parse ``4.7.2`` or the compact ``472`` form into four parts."""
    if not text:
        return _ZERO
    if "." in text:
        pieces = text.split(".")
    else:
        pieces = list(text)
    if len(pieces) > 4 or any(not p.isdigit() for p in pieces):
        raise ParseError(f"Invalid framework version in {moniker!r}")
    parts = [int(p) for p in pieces] + [0] * (4 - len(pieces))
    return (parts[0], parts[1], parts[2], parts[3])


def _trim(version: Version4, keep: int) -> list[int]:
    parts = list(version)
    while len(parts) > keep and parts[-1] == 0:
        parts.pop()
    return parts


@dataclass(frozen=True)
class Framework:
    """A target framework.

    Attributes:
        identifier: Canonical framework identifier (e.g. ``.NETFramework``).
        version: Framework version as four integer parts.
        profile: Lower-cased profile (``client``) or portable profile
            (``net45+win8``); empty when absent.
        platform: Lower-cased OS platform (``windows``); empty when absent.
        platform_version: OS platform version as four integer parts.
    """

    identifier: str
    version: Version4 = _ZERO
    profile: str = ""
    platform: str = ""
    platform_version: Version4 = _ZERO

    @classmethod
    def parse(cls, moniker: str) -> Framework:
        """Parse a short folder name or a full framework name.

        Raises:
            ParseError: If the moniker is empty or not recognised.
        """
        text = (moniker or "").strip()
        if not text:
            raise ParseError("Framework moniker is empty")
        if "," in text:
            return cls._parse_full_name(text)
        return cls._parse_short_name(text)

    @classmethod
    def _parse_full_name(cls, text: str) -> Framework:
        pieces = [p.strip() for p in text.split(",")]
        identifier = _CANONICAL.get(pieces[0].lower())
        if identifier is None:
            raise ParseError(f"Unknown framework identifier in {text!r}")

        version = _ZERO
        profile = ""
        for piece in pieces[1:]:
            key, sep, value = piece.partition("=")
            if not sep:
                raise ParseError(f"Malformed framework name {text!r}")
            key = key.strip().lower()
            value = value.strip()
            if key == "version":
                version = _to_version4(value.lstrip("vV"), text)
            elif key == "profile":
                profile = value.lower()
            else:
                raise ParseError(f"Unknown framework attribute {key!r} in {text!r}")
        return cls(identifier, version, profile)

    @classmethod
    def _parse_short_name(cls, text: str) -> Framework:
        lowered = text.lower()
        m = _SHORT_RE.match(lowered)
        if not m:
            raise ParseError(f"Invalid framework moniker: {text!r}")

        identifier = _SHORT_IDENTIFIERS.get(m.group("id"))
        if identifier is None:
            raise ParseError(f"Unknown framework identifier in {text!r}")

        raw_version = m.group("ver") or ""
        rest = m.group("rest") or ""

        if identifier == NET_PORTABLE:
            if raw_version or not rest:
                raise ParseError(f"Invalid portable moniker: {text!r}")
            for member in rest.split("+"):
                if not member.startswith("profile"):
                    cls._parse_short_name(member)
            return cls(identifier, _ZERO, rest)

        version = _to_version4(raw_version, text)

        # net5.0 and later are .NETCoreApp and may carry an OS platform.
        if identifier == NET_FRAMEWORK and "." in raw_version and version[0] >= 5:
            platform = ""
            platform_version = _ZERO
            if rest:
                pm = _PLATFORM_RE.match(rest)
                if not pm:
                    raise ParseError(f"Invalid platform in {text!r}")
                platform = pm.group("name")
                platform_version = _to_version4(pm.group("ver") or "", text)
            return cls(NET_CORE_APP, version, "", platform, platform_version)

        return cls(identifier, version, rest)

    @property
    def is_net5_era(self) -> bool:
        return self.identifier == NET_CORE_APP and self.version[0] >= 5

    @property
    def short_folder_name(self) -> str:
        """Return the short folder name, e.g. ``net472`` or ``net6.0-windows``."""
        if self.identifier == NET_PORTABLE:
            return f"portable-{self.profile}"

        if self.is_net5_era:
            name = "net" + ".".join(str(p) for p in _trim(self.version, 2))
            if self.platform:
                name += f"-{self.platform}"
                if self.platform_version != _ZERO:
                    name += ".".join(str(p) for p in _trim(self.platform_version, 2))
            return name

        short = _SHORT_NAMES[self.identifier]
        if self.version == _ZERO and self.identifier in (NATIVE, NET_PLATFORM):
            name = short
        elif self.identifier in _DOTTED_SHORT_VERSION or any(p > 9 for p in self.version):
            name = short + ".".join(str(p) for p in _trim(self.version, 2))
        else:
            name = short + "".join(str(p) for p in _trim(self.version, 2))
        if self.profile:
            name += f"-{self.profile}"
        return name

    @property
    def full_name(self) -> str:
        """Return the full name, e.g. ``.NETFramework,Version=v4.7.2``."""
        version = ".".join(str(p) for p in _trim(self.version, 2))
        name = f"{self.identifier},Version=v{version}"
        if self.profile:
            name += f",Profile={self.profile}"
        return name

    def __str__(self) -> str:
        return self.short_folder_name
