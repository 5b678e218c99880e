"""Core SNPHub genotype ingestion primitives.

This package normalizes raw consumer-genomics exports into canonical variant
records and reconciles them against the global and per-user SNP catalogs.
"""

__version__ = "1.0.0"

from .aliases import VariantAliasTable
from .errors import (
    ConfigError,
    MalformedLine,
    NotFoundError,
    SNPHubError,
    StorageError,
    UnknownFormat,
)
from .formats import FormatAdapter, GenotypeFormat
from .models import (
    CanonicalVariantRecord,
    CatalogSnapshot,
    GenotypeUploadDescriptor,
    InsertGlobalVariant,
    InsertUserObservation,
    NoOp,
    WriteOp,
)
from .pipeline import IngestionPipeline, IngestionRunReport
from .reconcile import CatalogReconciler
from .registry import FormatRegistry, build_default_format_registry, normalize

__all__ = [
    "__version__",
    "CanonicalVariantRecord",
    "CatalogReconciler",
    "CatalogSnapshot",
    "ConfigError",
    "FormatAdapter",
    "FormatRegistry",
    "GenotypeFormat",
    "GenotypeUploadDescriptor",
    "IngestionPipeline",
    "IngestionRunReport",
    "InsertGlobalVariant",
    "InsertUserObservation",
    "MalformedLine",
    "NoOp",
    "NotFoundError",
    "SNPHubError",
    "StorageError",
    "UnknownFormat",
    "VariantAliasTable",
    "WriteOp",
    "build_default_format_registry",
    "normalize",
]
