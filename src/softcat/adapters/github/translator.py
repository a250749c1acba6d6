"""Translate GitHub payloads into external record data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from softcat.config.github import GITHUB_SOURCE_URL
from softcat.domain.model import Developer, DeveloperKind, ExternalRecordData, Identifier

if TYPE_CHECKING:
    from .schema import GitHubLicense, GitHubOwner, GitHubRepositorySnapshot


def repository_identifier(full_name: str, html_url: str | None = None) -> Identifier:
    return Identifier(
        value=full_name,
        subject_url=GITHUB_SOURCE_URL,
        name=f"GitHub repository {full_name}",
        url=html_url or f"{GITHUB_SOURCE_URL}{full_name}",
    )


def _owner(owner: GitHubOwner) -> Developer:
    kind = DeveloperKind.ORGANIZATION if owner.type == "Organization" else DeveloperKind.PERSON
    return Developer(
        name=owner.login,
        kind=kind,
        url=owner.html_url,
        identifiers=(
            Identifier(
                value=str(owner.id),
                subject_url=GITHUB_SOURCE_URL,
                name=f"GitHub user {owner.login}",
                url=owner.html_url,
            ),
        ),
    )


def _license(license_: GitHubLicense | None) -> str | None:
    if license_ is None:
        return None
    if license_.spdx_id and license_.spdx_id != "NOASSERTION":
        return license_.spdx_id
    return license_.name


def translate_repository(snapshot: GitHubRepositorySnapshot) -> ExternalRecordData:
    repository = snapshot.repository
    release = snapshot.latest_release
    license_ = _license(repository.license)
    languages = sorted(snapshot.languages, key=lambda name: -snapshot.languages[name])
    return ExternalRecordData(
        label=repository.full_name,
        description=repository.description,
        is_libre_software=True if license_ else None,
        developers=(_owner(repository.owner),),
        website_url=repository.homepage or None,
        source_url=repository.html_url,
        license=license_,
        software_version=release.tag_name if release else None,
        publication_time=release.published_at if release else None,
        keywords=tuple(repository.topics),
        programming_languages=tuple(languages),
        identifiers=(repository_identifier(repository.full_name, repository.html_url),),
    )
