"""Legacy variant identifier aliases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

# IYG exports name some mitochondrial variants by mutation instead of rsid.
MITOCHONDRIAL_RSID_ALIASES: dict[str, str] = {
    "MT-T3027C": "rs199838004",
    "MT-T4336C": "rs41456348",
    "MT-G4580A": "rs28357975",
    "MT-T5004C": "rs41419549",
    "MT-C5178A": "rs28357984",
    "MT-A5390G": "rs41333444",
    "MT-C6371T": "rs41366755",
    "MT-G8697A": "rs28358886",
    "MT-G9477A": "rs2853825",
    "MT-G10310A": "rs41467651",
    "MT-A10550G": "rs28358280",
    "MT-C10873T": "rs2857284",
    "MT-C11332T": "rs55714831",
    "MT-A11947G": "rs28359168",
    "MT-A12308G": "rs2853498",
    "MT-A12612G": "rs28359172",
    "MT-T14318C": "rs28357675",
    "MT-T14766C": "rs3135031",
    "MT-T14783C": "rs28357680",
}


@dataclass(frozen=True)
class VariantAliasTable:
    """Resolve alternate variant identifiers to their canonical rsid."""

    mapping: Mapping[str, str]

    @staticmethod
    def normalize(value: str) -> str:
        """Normalize an identifier to the key form used by the table."""

        return value.strip().upper()

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "mapping",
            {self.normalize(key): value for key, value in self.mapping.items()},
        )

    def resolve(self, name: str) -> str:
        """Return the canonical id for ``name``, or ``name`` itself if unknown."""

        return self.mapping.get(self.normalize(name), name)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.normalize(name) in self.mapping

    @classmethod
    def default(cls) -> "VariantAliasTable":
        return cls(mapping=MITOCHONDRIAL_RSID_ALIASES)
