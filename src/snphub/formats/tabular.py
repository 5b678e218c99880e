"""Adapters for the plain delimited consumer-genomics exports."""

from __future__ import annotations

from snphub.formats.base import FormatAdapter, GenotypeFormat


class TwentyThreeAndMeAdapter(FormatAdapter):
    """23andMe raw data: ``rsid, chromosome, position, genotype``."""

    format = GenotypeFormat.TWENTY_THREE_AND_ME

    def derive(self, columns: list[str]) -> list[str]:
        return columns[:4]


class FtdnaIlluminaAdapter(FormatAdapter):
    """FamilyTreeDNA Illumina CSV, quoted, otherwise laid out like 23andMe."""

    format = GenotypeFormat.FTDNA_ILLUMINA
    delimiter = ","
    header_marker = "rsid"

    def split(self, line: str) -> list[str]:
        return line.replace('"', "").split(self.delimiter)

    def derive(self, columns: list[str]) -> list[str]:
        return columns[:4]


class AncestryAdapter(FormatAdapter):
    """AncestryDNA export with the two alleles in separate columns."""

    format = GenotypeFormat.ANCESTRY
    header_marker = "rsid"
    min_columns = 6

    def derive(self, columns: list[str]) -> list[str]:
        return [columns[0], columns[1], columns[3], columns[4] + columns[5]]


class DecodeMeAdapter(FormatAdapter):
    """deCODEme CSV: ``name, variation, chromosome, position, strand, yourcode``."""

    format = GenotypeFormat.DECODEME
    delimiter = ","
    header_marker = "name"
    min_columns = 6

    def derive(self, columns: list[str]) -> list[str]:
        return [columns[0], columns[2], columns[3], columns[5]]
