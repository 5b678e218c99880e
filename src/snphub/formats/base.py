"""Base interface for all vendor genotype format adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from snphub.errors import MalformedLine
from snphub.models import CanonicalVariantRecord


class GenotypeFormat(str, Enum):
    """Vendor export formats accepted in ``genotypes.filetype``."""

    TWENTY_THREE_AND_ME = "23andme"
    FTDNA_ILLUMINA = "ftdna-illumina"
    ANCESTRY = "ancestry"
    DECODEME = "decodeme"
    TWENTY_THREE_AND_ME_EXOME_VCF = "23andme-exome-vcf"
    IYG = "IYG"


def prepare_line(raw_line: str) -> str:
    """Drop the line terminator and lower-case the line."""

    return raw_line.rstrip("\r\n").lower()


def is_comment(raw_line: str) -> bool:
    return raw_line.startswith("#")


class FormatAdapter(ABC):
    """Decode one prepared line of a vendor export into a canonical record.

    Subclasses set the column ``delimiter``, the exact first-column value of
    their header row (if any) and the number of columns they read, then map
    the split columns onto ``[name, chromosome, position, allele]``.
    """

    format: GenotypeFormat
    delimiter: str = "\t"
    header_marker: str | None = None
    min_columns: int = 4

    def decode(self, line: str) -> CanonicalVariantRecord | None:
        """Return a record for ``line``, or ``None`` for a header row."""

        columns = self.split(line)
        if self.header_marker is not None and columns[0] == self.header_marker:
            return None

        if len(columns) < self.min_columns:
            raise MalformedLine(
                f"{self.format.value} expects at least {self.min_columns} columns, "
                f"got {len(columns)}"
            )

        fields = self.derive(columns)
        if not fields[0]:
            raise MalformedLine(f"{self.format.value} line has an empty variant name")
        return CanonicalVariantRecord.from_fields(fields)

    def split(self, line: str) -> list[str]:
        return line.split(self.delimiter)

    @abstractmethod
    def derive(self, columns: list[str]) -> list[str]:
        """Map split columns onto ``[name, chromosome, position, allele]``."""
