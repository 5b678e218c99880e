"""Format registry mapping vendor format names to adapters."""

from __future__ import annotations

from collections.abc import Callable

from snphub.errors import UnknownFormat
from snphub.formats import (
    AncestryAdapter,
    DecodeMeAdapter,
    ExomeVcfAdapter,
    FormatAdapter,
    FtdnaIlluminaAdapter,
    GenotypeFormat,
    IYGAdapter,
    TwentyThreeAndMeAdapter,
    prepare_line,
)
from snphub.models import CanonicalVariantRecord

AdapterFactory = Callable[[], FormatAdapter]


class FormatRegistry:
    """Registry that maps each ``GenotypeFormat`` to one adapter constructor."""

    def __init__(self) -> None:
        self._factories: dict[GenotypeFormat, AdapterFactory] = {}

    def register(self, genotype_format: GenotypeFormat, factory: AdapterFactory) -> None:
        """Register an adapter factory for a format."""

        if genotype_format in self._factories:
            raise ValueError(f"Format already registered: {genotype_format.value}")
        self._factories[genotype_format] = factory

    def create(self, filetype: str | GenotypeFormat) -> FormatAdapter:
        """Instantiate the adapter for a ``genotypes.filetype`` value."""

        try:
            genotype_format = GenotypeFormat(filetype)
        except ValueError:
            raise UnknownFormat(
                f"Unknown filetype '{filetype}'. Available: {', '.join(self.available())}"
            ) from None

        if genotype_format not in self._factories:
            raise UnknownFormat(
                f"No adapter registered for '{genotype_format.value}'. "
                f"Available: {', '.join(self.available())}"
            )
        return self._factories[genotype_format]()

    def available(self) -> list[str]:
        """Return sorted list of registered format names."""

        return sorted(item.value for item in self._factories)

    def missing(self) -> list[GenotypeFormat]:
        return [item for item in GenotypeFormat if item not in self._factories]


def build_default_format_registry() -> FormatRegistry:
    """Create a registry with one built-in adapter for every known format."""

    registry = FormatRegistry()
    registry.register(GenotypeFormat.TWENTY_THREE_AND_ME, TwentyThreeAndMeAdapter)
    registry.register(GenotypeFormat.FTDNA_ILLUMINA, FtdnaIlluminaAdapter)
    registry.register(GenotypeFormat.ANCESTRY, AncestryAdapter)
    registry.register(GenotypeFormat.DECODEME, DecodeMeAdapter)
    registry.register(GenotypeFormat.TWENTY_THREE_AND_ME_EXOME_VCF, ExomeVcfAdapter)
    registry.register(GenotypeFormat.IYG, IYGAdapter)

    missing = registry.missing()
    if missing:
        raise RuntimeError(
            f"Formats without an adapter: {', '.join(item.value for item in missing)}"
        )
    return registry


def normalize(
    filetype: str | GenotypeFormat,
    raw_line: str,
    *,
    registry: FormatRegistry | None = None,
) -> CanonicalVariantRecord | None:
    """Normalize one non-comment line of a ``filetype`` export.

    Returns ``None`` when the line is the format's header row.
    """

    adapter = (registry or build_default_format_registry()).create(filetype)
    return adapter.decode(prepare_line(raw_line))
