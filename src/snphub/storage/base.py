"""Base class for variant catalog storage backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from types import TracebackType

from snphub.models import GenotypeUploadDescriptor, WriteOp


class CatalogStorage(ABC):
    """Access to uploads, the global ``snps`` catalog and per-user ``user_snps``.

    Backends raise ``StorageError`` for driver failures and ``NotFoundError``
    when an upload id does not exist.
    """

    @abstractmethod
    def load_upload(self, genotype_id: str) -> GenotypeUploadDescriptor:
        """Return the upload descriptor for ``genotype_id``."""

    @abstractmethod
    def known_variant_names(self) -> set[str]:
        """Return every variant name in the global catalog."""

    @abstractmethod
    def known_user_variant_names(self, user_id: str) -> set[str]:
        """Return every variant name already observed for ``user_id``."""

    @abstractmethod
    def apply(self, ops: Sequence[WriteOp]) -> None:
        """Apply write operations in order as one all-or-nothing transaction."""

    @abstractmethod
    def maintain(self) -> None:
        """Refresh statistics and compact both catalogs after a commit."""

    def close(self) -> None:
        """Release the underlying connection."""

    def __enter__(self) -> "CatalogStorage":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()
