import json
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from snphub import GenotypeUploadDescriptor, __version__  # noqa: E402
from snphub.storage import DuckDBCatalogStorage  # noqa: E402


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "scripts/parse_genotype.py", *args],
        cwd=ROOT,
        text=True,
        capture_output=True,
    )


def _seed_catalog(db_path: Path) -> None:
    with DuckDBCatalogStorage(db_path=db_path) as storage:
        storage.ensure_schema()
        storage.register_upload(GenotypeUploadDescriptor(id="42", user_id="7", filetype="23andme"))


def test_cli_parses_upload_into_catalog(tmp_path: Path) -> None:
    db_path = tmp_path / "catalog.duckdb"
    genome = tmp_path / "genome.txt"
    genome.write_text("# header comment\nrs1\t1\t100\tAG\nrs2\tMT\t73\tA\n")
    _seed_catalog(db_path)

    result = _run(
        "--database",
        str(db_path),
        "--genotype-id",
        "42",
        "--temp-file",
        str(genome),
        "--root-path",
        str(tmp_path),
    )

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["committed"] is True
    assert payload["new_snps"] == 2
    assert payload["new_user_snps"] == 2
    assert (tmp_path / "log" / "genotype_parser.log").read_text()

    with DuckDBCatalogStorage(db_path=db_path) as storage:
        assert storage.known_user_variant_names("7") == {"rs1", "rs2"}


def test_cli_unknown_upload_exits_non_zero_without_writes(tmp_path: Path) -> None:
    db_path = tmp_path / "catalog.duckdb"
    genome = tmp_path / "genome.txt"
    genome.write_text("rs1\t1\t100\tAG\n")
    _seed_catalog(db_path)

    result = _run("--database", str(db_path), "--genotype-id", "404", "--temp-file", str(genome))

    assert result.returncode == 1
    assert "NotFoundError" in result.stderr
    with DuckDBCatalogStorage(db_path=db_path) as storage:
        assert storage.known_variant_names() == set()


def test_cli_reports_missing_file_before_running(tmp_path: Path) -> None:
    result = _run(
        "--database",
        str(tmp_path / "catalog.duckdb"),
        "--genotype-id",
        "42",
        "--temp-file",
        str(tmp_path / "absent.txt"),
    )

    assert result.returncode == 2
    assert "ERROR" in result.stderr
    assert not (tmp_path / "catalog.duckdb").exists()


def test_cli_prints_version() -> None:
    result = _run("-v")

    assert result.returncode == 0
    assert __version__ in result.stdout
