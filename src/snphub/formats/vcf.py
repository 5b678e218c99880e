"""Adapter for 23andMe exome VCF exports."""

from __future__ import annotations

from snphub.errors import MalformedLine
from snphub.formats.base import FormatAdapter, GenotypeFormat

GENOTYPE_KEY = "gt"
ALLELE_SEPARATOR = "/"


class ExomeVcfAdapter(FormatAdapter):
    """Single-sample VCF; the genotype is decoded from the sample's GT field.

    Columns follow the standard VCF layout: ``CHROM POS ID REF ALT QUAL FILTER INFO
    FORMAT SAMPLE``. Allele index ``0`` is REF and ``1`` is ALT; any other
    index (missing calls, multi-allelic sites) contributes nothing.
    """

    format = GenotypeFormat.TWENTY_THREE_AND_ME_EXOME_VCF
    min_columns = 10

    def derive(self, columns: list[str]) -> list[str]:
        chromosome, position, variant_id, ref, alt = columns[:5]
        genotype = self._genotype_field(columns[8], columns[9])

        alleles = ""
        for index in genotype.split(ALLELE_SEPARATOR):
            if index == "0":
                alleles += ref
            elif index == "1":
                alleles += alt

        return [variant_id.lower(), chromosome, position, alleles]

    @staticmethod
    def _genotype_field(format_spec: str, sample: str) -> str:
        keys = [key.lower() for key in format_spec.split(":")]
        try:
            genotype_index = keys.index(GENOTYPE_KEY)
        except ValueError:
            raise MalformedLine(f"VCF FORMAT column has no GT field: {format_spec!r}") from None

        values = sample.split(":")
        if genotype_index >= len(values):
            raise MalformedLine(
                f"VCF sample column {sample!r} has no value for GT at index {genotype_index}"
            )
        return values[genotype_index]
