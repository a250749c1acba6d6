"""Translate GitLab payloads into external record data."""

from __future__ import annotations

from typing import TYPE_CHECKING

from softcat.domain.model import Developer, DeveloperKind, ExternalRecordData, Identifier

if TYPE_CHECKING:
    from .schema import GitLabNamespace, GitLabProjectSnapshot


def _namespace(namespace: GitLabNamespace, instance_url: str) -> Developer:
    kind = DeveloperKind.ORGANIZATION if namespace.kind == "group" else DeveloperKind.PERSON
    return Developer(
        name=namespace.name,
        kind=kind,
        url=namespace.web_url,
        identifiers=(
            Identifier(
                value=namespace.path or namespace.name,
                subject_url=instance_url,
                name=f"GitLab namespace {namespace.path or namespace.name}",
                url=namespace.web_url,
            ),
        ),
    )


def translate_project(snapshot: GitLabProjectSnapshot, *, instance_url: str) -> ExternalRecordData:
    project = snapshot.project
    release = snapshot.latest_release
    license_name = project.license.name if project.license else None
    languages = sorted(snapshot.languages, key=lambda name: -snapshot.languages[name])
    return ExternalRecordData(
        label=project.name,
        description=project.description or None,
        is_libre_software=True if license_name else None,
        developers=(_namespace(project.namespace, instance_url),) if project.namespace else (),
        logo_url=project.avatar_url,
        source_url=project.web_url,
        documentation_url=project.readme_url,
        license=license_name,
        software_version=release.tag_name if release else None,
        publication_time=release.released_at if release else None,
        keywords=tuple(project.topics or project.tag_list),
        programming_languages=tuple(languages),
        identifiers=(
            Identifier(
                value=project.path_with_namespace,
                subject_url=instance_url,
                name=f"GitLab project {project.path_with_namespace}",
                url=project.web_url,
            ),
        ),
    )
