"""Vendor genotype format adapters."""

from .base import FormatAdapter, GenotypeFormat, is_comment, prepare_line
from .iyg import IYGAdapter
from .tabular import (
    AncestryAdapter,
    DecodeMeAdapter,
    FtdnaIlluminaAdapter,
    TwentyThreeAndMeAdapter,
)
from .vcf import ExomeVcfAdapter

__all__ = [
    "FormatAdapter",
    "GenotypeFormat",
    "AncestryAdapter",
    "DecodeMeAdapter",
    "ExomeVcfAdapter",
    "FtdnaIlluminaAdapter",
    "IYGAdapter",
    "TwentyThreeAndMeAdapter",
    "is_comment",
    "prepare_line",
]
