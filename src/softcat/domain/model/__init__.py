"""Domain model for the software catalog."""

from __future__ import annotations

from .descriptors import SimilarityLink, SimilarSoftwareDescriptor, SoftwareDescriptor
from .enums import DeveloperKind, OperatingSystem, SoftwareKind, SourceKind
from .external_record import (
    DATA_FIELDS,
    Developer,
    ExternalRecord,
    ExternalRecordData,
    Identifier,
    RecordKey,
)
from .software import (
    Dereferencing,
    Software,
    SoftwareFields,
    SoftwareType,
    classify_software_type,
    new_id,
)
from .source import Source, normalize_source_url, same_source_url

__all__ = [
    "DATA_FIELDS",
    "Dereferencing",
    "Developer",
    "DeveloperKind",
    "ExternalRecord",
    "ExternalRecordData",
    "Identifier",
    "OperatingSystem",
    "RecordKey",
    "SimilarSoftwareDescriptor",
    "SimilarityLink",
    "Software",
    "SoftwareDescriptor",
    "SoftwareFields",
    "SoftwareKind",
    "SoftwareType",
    "Source",
    "SourceKind",
    "classify_software_type",
    "new_id",
    "normalize_source_url",
    "same_source_url",
]
