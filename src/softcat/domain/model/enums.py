"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class SourceKind(StrEnum):
    """Provider families with a fetch-by-external-id capability."""

    WIKIDATA = "wikidata"
    HAL = "HAL"
    GITHUB = "GitHub"
    GITLAB = "GitLab"


class DeveloperKind(StrEnum):
    PERSON = "Person"
    ORGANIZATION = "Organization"


class SoftwareKind(StrEnum):
    DESKTOP_MOBILE = "desktop/mobile"
    CLOUD = "cloud"
    STACK = "stack"


class OperatingSystem(StrEnum):
    WINDOWS = "windows"
    LINUX = "linux"
    MAC = "mac"
    ANDROID = "android"
    IOS = "ios"
