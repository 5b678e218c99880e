"""Reconcile normalized records against the variant catalogs."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from snphub.models import (
    CanonicalVariantRecord,
    CatalogSnapshot,
    GenotypeUploadDescriptor,
    InsertGlobalVariant,
    InsertUserObservation,
    NoOp,
    WriteOp,
)

logger = logging.getLogger(__name__)

RFC3339_UTC = "%Y-%m-%dT%H:%M:%SZ"


def utc_timestamp() -> str:
    """Current UTC time formatted as RFC3339 with second precision."""

    return datetime.now(tz=timezone.utc).strftime(RFC3339_UTC)


class CatalogReconciler:
    """Decide which catalog rows a record needs.

    Membership is checked against the run's ``CatalogSnapshot`` only. Each
    emitted insert is recorded in the snapshot straight away, so repeated
    variants within one file never produce a second insert for the same key.
    """

    def __init__(self, clock: Callable[[], str] | None = None) -> None:
        self.clock = clock or utc_timestamp

    def reconcile(
        self,
        record: CanonicalVariantRecord,
        snapshot: CatalogSnapshot,
        upload: GenotypeUploadDescriptor,
    ) -> list[WriteOp]:
        ops: list[WriteOp] = []
        now = self.clock()

        if record.variant_name not in snapshot.known_variants:
            ops.append(
                InsertGlobalVariant(
                    name=record.variant_name,
                    chromosome=record.chromosome,
                    position=record.position,
                    created_at=now,
                    updated_at=now,
                )
            )
            snapshot.known_variants.add(record.variant_name)

        user_key = (upload.user_id, record.variant_name)
        if user_key not in snapshot.known_user_variants:
            ops.append(
                InsertUserObservation(
                    user_id=upload.user_id,
                    genotype_id=upload.id,
                    snp_name=record.variant_name,
                    local_genotype=record.allele,
                    created_at=now,
                    updated_at=now,
                )
            )
            snapshot.known_user_variants.add(user_key)
        else:
            logger.info(
                "User-SNP %s with allele %s already exists",
                record.variant_name,
                record.allele,
            )
            ops.append(
                NoOp(user_id=upload.user_id, snp_name=record.variant_name, allele=record.allele)
            )

        return ops
