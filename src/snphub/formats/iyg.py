"""Adapter for Inside-Your-Genome (IYG) exports."""

from __future__ import annotations

import re

from snphub.aliases import VariantAliasTable
from snphub.formats.base import FormatAdapter, GenotypeFormat

_LETTERS_RE = re.compile(r"[A-Za-z]")


class IYGAdapter(FormatAdapter):
    """IYG files carry only ``name, genotype``.

    Mitochondrial variants encode their position in the name (``MT-T3027C``)
    and some of them have a known rsid. Everything else is filed under
    chromosome 1, position 1.
    """

    format = GenotypeFormat.IYG
    min_columns = 2

    def __init__(self, aliases: VariantAliasTable | None = None) -> None:
        self.aliases = aliases or VariantAliasTable.default()

    def derive(self, columns: list[str]) -> list[str]:
        name, genotype = columns[0], columns[1]
        if not name.lower().startswith("mt"):
            return [name, "1", "1", genotype]

        position = _LETTERS_RE.sub("", name)
        return [self.aliases.resolve(name), "MT", position, genotype]
