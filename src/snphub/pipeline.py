"""Genotype upload ingestion orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from snphub.errors import ConfigError, MalformedLine
from snphub.formats import FormatAdapter, is_comment, prepare_line
from snphub.models import (
    CatalogSnapshot,
    GenotypeUploadDescriptor,
    InsertGlobalVariant,
    InsertUserObservation,
    NoOp,
    WriteOp,
)
from snphub.reconcile import CatalogReconciler
from snphub.registry import FormatRegistry, build_default_format_registry
from snphub.storage.base import CatalogStorage

logger = logging.getLogger(__name__)


@dataclass
class IngestionRunReport:
    """Execution summary for one genotype upload."""

    genotype_id: str
    user_id: str
    filetype: str
    lines_read: int = 0
    skipped_lines: int = 0
    header_rows: int = 0
    records: int = 0
    new_snps: int = 0
    new_user_snps: int = 0
    existing_user_snps: int = 0
    committed: bool = False

    def count(self, ops: list[WriteOp]) -> None:
        for op in ops:
            if isinstance(op, InsertGlobalVariant):
                self.new_snps += 1
            elif isinstance(op, InsertUserObservation):
                self.new_user_snps += 1
            elif isinstance(op, NoOp):
                self.existing_user_snps += 1


class IngestionPipeline:
    """Parse one genotype file into the catalogs in a single transaction.

    The upload descriptor and both catalog snapshots are loaded up front. Lines
    are normalized and reconciled in file order, and the resulting writes are
    committed together at the end of the file. Any error aborts the run before
    the commit, so a failed run leaves the catalogs untouched.
    """

    def __init__(
        self,
        *,
        storage: CatalogStorage,
        genotype_id: str,
        input_path: str | Path,
        registry: FormatRegistry | None = None,
        reconciler: CatalogReconciler | None = None,
        maintain: bool = True,
    ) -> None:
        self.storage = storage
        self.genotype_id = str(genotype_id)
        self.input_path = Path(input_path)
        self.registry = registry or build_default_format_registry()
        self.reconciler = reconciler or CatalogReconciler()
        self.maintain = maintain

    def run(self) -> IngestionRunReport:
        logger.info("Checking for genotype with id %s", self.genotype_id)
        upload = self.storage.load_upload(self.genotype_id)
        logger.info("Got filetype '%s' and user-id '%s'.", upload.filetype, upload.user_id)
        adapter = self.registry.create(upload.filetype)

        snapshot = CatalogSnapshot.from_catalogs(
            variant_names=self.storage.known_variant_names(),
            user_id=upload.user_id,
            user_variant_names=self.storage.known_user_variant_names(upload.user_id),
        )
        logger.info(
            "Loaded %d SNPs and %d user SNPs.",
            len(snapshot.known_variants),
            len(snapshot.known_user_variants),
        )

        report = IngestionRunReport(
            genotype_id=upload.id,
            user_id=upload.user_id,
            filetype=upload.filetype,
        )
        ops = self._collect(adapter, upload, snapshot, report)

        self.storage.apply(ops)
        report.committed = True

        if self.maintain:
            self.storage.maintain()

        logger.info(
            "Done: lines=%d records=%d new_snps=%d new_user_snps=%d existing_user_snps=%d",
            report.lines_read,
            report.records,
            report.new_snps,
            report.new_user_snps,
            report.existing_user_snps,
        )
        return report

    def _collect(
        self,
        adapter: FormatAdapter,
        upload: GenotypeUploadDescriptor,
        snapshot: CatalogSnapshot,
        report: IngestionRunReport,
    ) -> list[WriteOp]:
        logger.info("Started work on %s", self.input_path)
        ops: list[WriteOp] = []
        line_number = 0

        try:
            stream = self.input_path.open("r", encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Could not open genotype file {self.input_path}: {exc}") from exc

        with stream:
            try:
                for line_number, raw_line in enumerate(stream, start=1):
                    report.lines_read += 1
                    line = prepare_line(raw_line)
                    if is_comment(raw_line) or not line.strip():
                        report.skipped_lines += 1
                        continue

                    try:
                        record = adapter.decode(line)
                    except MalformedLine as exc:
                        raise MalformedLine(str(exc), line_number=line_number) from exc

                    if record is None:
                        report.header_rows += 1
                        continue

                    report.records += 1
                    line_ops = self.reconciler.reconcile(record, snapshot, upload)
                    report.count(line_ops)
                    ops.extend(line_ops)
            except UnicodeDecodeError as exc:
                raise MalformedLine(
                    f"not valid UTF-8 text: {exc}", line_number=line_number + 1
                ) from exc

        return ops
