"""Selectable profile catalog derived from a config document."""

from __future__ import annotations

from dataclasses import dataclass, field

from profile_switcher.store import ConfigDocument

PROFILE_PREFIX = "profile "
SSO_SESSION_PREFIX = "sso-session "
DEFAULT_SECTION = "default"

CONFIG_DOCS_URL = (
    "https://docs.aws.amazon.com/cli/latest/userguide/cli-configure-files.html"
)


@dataclass(frozen=True)
class Profile:
    """A selectable ``[profile <name>]`` section, prefix stripped."""

    name: str

    @property
    def section_name(self) -> str:
        return f"{PROFILE_PREFIX}{self.name}"


@dataclass(frozen=True)
class Catalog:
    """Profiles in document order plus non-fatal validation warnings."""

    profiles: list[Profile] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def derive_catalog(doc: ConfigDocument) -> Catalog:
    """Split the document's sections into profiles and warnings.

    ``default`` (any case) and ``sso-session <x>`` sections are skipped
    silently. Every other section without the ``profile `` prefix, and a
    ``profile`` section with an empty name, produces one warning.
    """
    profiles: list[Profile] = []
    warnings: list[str] = []
    for section in doc.sections():
        if section.lower() == DEFAULT_SECTION:
            continue
        if section.startswith(PROFILE_PREFIX):
            name = section[len(PROFILE_PREFIX):]
            if name:
                profiles.append(Profile(name=name))
            else:
                warnings.append(
                    f"Section [{section}] has an empty profile name and was skipped"
                )
            continue
        if section.startswith(SSO_SESSION_PREFIX):
            continue
        warnings.append(
            f"Section [{section}] is missing the 'profile' or 'sso-session' "
            f"prefix. Read more: {CONFIG_DOCS_URL}"
        )
    return Catalog(profiles=profiles, warnings=warnings)
