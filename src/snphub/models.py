"""Canonical in-memory data models used by SNPHub."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

ALLELE_FREQUENCY_PLACEHOLDER = "---\nA: 0\nT: 0\nG: 0\nC: 0\n"
GENOTYPE_FREQUENCY_PLACEHOLDER = "--- {}\n"
DEFAULT_RANKING = "0"


@dataclass(frozen=True)
class CanonicalVariantRecord:
    """Single normalized genotype call taken from one line of a raw export."""

    variant_name: str
    chromosome: str
    position: str
    allele: str

    @classmethod
    def from_fields(cls, fields: list[str]) -> "CanonicalVariantRecord":
        """Assemble a record from ``[name, chromosome, position, allele]``."""

        name, chromosome, position, allele = fields[:4]
        return cls(
            variant_name=name,
            chromosome=chromosome.upper(),
            position=position,
            allele=allele.upper(),
        )


@dataclass(frozen=True)
class GenotypeUploadDescriptor:
    """The ``genotypes`` row that owns the file being parsed."""

    id: str
    user_id: str
    filetype: str


@dataclass(frozen=True)
class InsertGlobalVariant:
    """Create a new ``snps`` row for a variant the catalog has never seen."""

    name: str
    chromosome: str
    position: str
    created_at: str
    updated_at: str
    ranking: str = DEFAULT_RANKING
    allele_frequency: str = ALLELE_FREQUENCY_PLACEHOLDER
    genotype_frequency: str = GENOTYPE_FREQUENCY_PLACEHOLDER
    user_snps_count: int = 1

    def to_row(self) -> dict[str, object]:
        return {
            "name": self.name,
            "chromosome": self.chromosome,
            "position": self.position,
            "ranking": self.ranking,
            "allele_frequency": self.allele_frequency,
            "genotype_frequency": self.genotype_frequency,
            "user_snps_count": self.user_snps_count,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class InsertUserObservation:
    """Create a ``user_snps`` row linking a user to an observed variant."""

    user_id: str
    genotype_id: str
    snp_name: str
    local_genotype: str
    created_at: str
    updated_at: str

    def to_row(self) -> dict[str, object]:
        return {
            "local_genotype": self.local_genotype,
            "genotype_id": self.genotype_id,
            "user_id": self.user_id,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            "snp_name": self.snp_name,
        }


@dataclass(frozen=True)
class NoOp:
    """The user already has this variant; the first observation is kept."""

    user_id: str
    snp_name: str
    allele: str


WriteOp = Union[InsertGlobalVariant, InsertUserObservation, NoOp]


@dataclass
class CatalogSnapshot:
    """Membership sets loaded once before a run starts.

    The reconciler adds to these sets as it emits inserts, so a variant that
    appears twice in one file is only inserted once.
    """

    known_variants: set[str] = field(default_factory=set)
    known_user_variants: set[tuple[str, str]] = field(default_factory=set)

    @classmethod
    def from_catalogs(
        cls,
        *,
        variant_names: set[str],
        user_id: str,
        user_variant_names: set[str],
    ) -> "CatalogSnapshot":
        return cls(
            known_variants=set(variant_names),
            known_user_variants={(user_id, name) for name in user_variant_names},
        )
