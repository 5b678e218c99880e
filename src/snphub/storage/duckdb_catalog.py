"""DuckDB storage backend for the variant catalogs."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import duckdb
import pandas as pd

from snphub.errors import NotFoundError, StorageError
from snphub.models import (
    GenotypeUploadDescriptor,
    InsertGlobalVariant,
    InsertUserObservation,
    WriteOp,
)
from snphub.storage.base import CatalogStorage

logger = logging.getLogger(__name__)

SNP_COLUMNS: tuple[str, ...] = (
    "name",
    "chromosome",
    "position",
    "ranking",
    "allele_frequency",
    "genotype_frequency",
    "user_snps_count",
    "created_at",
    "updated_at",
)

USER_SNP_COLUMNS: tuple[str, ...] = (
    "local_genotype",
    "genotype_id",
    "user_id",
    "created_at",
    "updated_at",
    "snp_name",
)

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
CREATE TABLE IF NOT EXISTS genotypes (
    id VARCHAR PRIMARY KEY,
    user_id VARCHAR NOT NULL,
    filetype VARCHAR NOT NULL
)
""",
    """
CREATE TABLE IF NOT EXISTS snps (
    name VARCHAR PRIMARY KEY,
    chromosome VARCHAR,
    position VARCHAR,
    ranking VARCHAR,
    allele_frequency VARCHAR,
    genotype_frequency VARCHAR,
    user_snps_count INTEGER,
    created_at VARCHAR,
    updated_at VARCHAR
)
""",
    """
CREATE TABLE IF NOT EXISTS user_snps (
    local_genotype VARCHAR,
    genotype_id VARCHAR NOT NULL,
    user_id VARCHAR NOT NULL,
    created_at VARCHAR,
    updated_at VARCHAR,
    snp_name VARCHAR NOT NULL,
    PRIMARY KEY (user_id, snp_name)
)
""",
)

MAINTAINED_TABLES: tuple[str, ...] = ("snps", "user_snps")


class DuckDBCatalogStorage(CatalogStorage):
    """Keep uploads and variant catalogs in a DuckDB database file.

    Writes never interpolate values into SQL: batches are registered as
    pandas frames and copied with ``INSERT ... SELECT``, lookups use bound
    parameters.
    """

    def __init__(self, *, db_path: str | Path) -> None:
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            self.connection = duckdb.connect(self.db_path)
        except duckdb.Error as exc:
            raise StorageError(f"Could not open catalog database {self.db_path}: {exc}") from exc

    def ensure_schema(self) -> None:
        """Create the ``genotypes``, ``snps`` and ``user_snps`` tables if absent."""

        try:
            for statement in SCHEMA_STATEMENTS:
                self.connection.execute(statement)
        except duckdb.Error as exc:
            raise StorageError(f"Could not create catalog schema: {exc}") from exc

    def register_upload(self, upload: GenotypeUploadDescriptor) -> None:
        """Insert a ``genotypes`` row, as the web application does on upload."""

        try:
            self.connection.execute(
                "INSERT INTO genotypes (id, user_id, filetype) VALUES (?, ?, ?)",
                [upload.id, upload.user_id, upload.filetype],
            )
        except duckdb.Error as exc:
            raise StorageError(f"Could not register upload {upload.id}: {exc}") from exc

    def load_upload(self, genotype_id: str) -> GenotypeUploadDescriptor:
        try:
            row = self.connection.execute(
                "SELECT CAST(id AS VARCHAR), CAST(user_id AS VARCHAR), filetype "
                "FROM genotypes WHERE CAST(id AS VARCHAR) = ?",
                [str(genotype_id)],
            ).fetchone()
        except duckdb.Error as exc:
            raise StorageError(f"Could not load genotype {genotype_id}: {exc}") from exc

        if row is None:
            raise NotFoundError(f"No genotype with id {genotype_id}")

        upload = GenotypeUploadDescriptor(id=row[0], user_id=row[1], filetype=row[2])
        logger.debug("Got genotype with id %s and user id %s", upload.id, upload.user_id)
        return upload

    def known_variant_names(self) -> set[str]:
        logger.info("Loading all SNPs...")
        return self._fetch_names("SELECT name FROM snps", [])

    def known_user_variant_names(self, user_id: str) -> set[str]:
        return self._fetch_names(
            "SELECT snp_name FROM user_snps WHERE CAST(user_id AS VARCHAR) = ?",
            [str(user_id)],
        )

    def apply(self, ops: Sequence[WriteOp]) -> None:
        snp_rows = [op.to_row() for op in ops if isinstance(op, InsertGlobalVariant)]
        user_snp_rows = [op.to_row() for op in ops if isinstance(op, InsertUserObservation)]

        try:
            self.connection.execute("BEGIN TRANSACTION")
        except duckdb.Error as exc:
            raise StorageError(f"Could not start transaction: {exc}") from exc

        try:
            self._insert_frame("snps", SNP_COLUMNS, snp_rows)
            self._insert_frame("user_snps", USER_SNP_COLUMNS, user_snp_rows)
            logger.info("Running COMMIT")
            self.connection.execute("COMMIT")
        except duckdb.Error as exc:
            self.connection.execute("ROLLBACK")
            raise StorageError(f"Catalog write failed, transaction rolled back: {exc}") from exc
        except Exception:
            self.connection.execute("ROLLBACK")
            raise

        logger.info(
            "Committed %d new SNPs and %d new user SNPs",
            len(snp_rows),
            len(user_snp_rows),
        )

    def maintain(self) -> None:
        logger.info("VACUUMing...")
        try:
            for table in MAINTAINED_TABLES:
                self.connection.execute(f"VACUUM ANALYZE {table}")
            self.connection.execute("CHECKPOINT")
        except duckdb.Error as exc:
            raise StorageError(f"Catalog maintenance failed: {exc}") from exc

    def close(self) -> None:
        self.connection.close()

    def _fetch_names(self, query: str, params: list[str]) -> set[str]:
        try:
            rows = self.connection.execute(query, params).fetchall()
        except duckdb.Error as exc:
            raise StorageError(f"Could not load variant names: {exc}") from exc
        return {row[0] for row in rows}

    def _insert_frame(
        self,
        table: str,
        columns: tuple[str, ...],
        rows: list[dict[str, object]],
    ) -> None:
        if not rows:
            return

        frame = pd.DataFrame(rows, columns=list(columns))
        view = f"__{table}_batch"
        column_list = ", ".join(columns)
        self.connection.register(view, frame)
        try:
            self.connection.execute(
                f"INSERT INTO {table} ({column_list}) SELECT {column_list} FROM {view}"
            )
        finally:
            self.connection.unregister(view)
