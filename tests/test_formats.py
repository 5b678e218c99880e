import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from snphub import MalformedLine, VariantAliasTable, normalize  # noqa: E402
from snphub.formats import ExomeVcfAdapter, IYGAdapter, is_comment, prepare_line  # noqa: E402


@pytest.mark.parametrize(
    ("filetype", "line"),
    [
        ("23andme", "rs4477212\t1\t82154\tAA\n"),
        ("ftdna-illumina", '"rs4477212","1","82154","AA"\n'),
        ("ancestry", "rs4477212\t1\tx\t82154\tA\tA\n"),
        ("decodeme", "rs4477212,C/T,1,82154,+,AA\n"),
        ("23andme-exome-vcf", "1\t82154\trs4477212\tA\tG\t.\tPASS\t.\tGT\t0/0\n"),
        ("IYG", "rs4477212\tAA\n"),
    ],
)
def test_every_format_yields_canonical_record(filetype: str, line: str) -> None:
    record = normalize(filetype, line)

    assert record is not None
    assert record.variant_name == "rs4477212"
    assert record.chromosome == record.chromosome.upper()
    assert record.allele == "AA"


def test_23andme_keeps_columns_and_uppercases_chromosome() -> None:
    record = normalize("23andme", "i3000001\tmt\t3027\tt\r\n")

    assert record is not None
    assert record.variant_name == "i3000001"
    assert record.chromosome == "MT"
    assert record.position == "3027"
    assert record.allele == "T"


def test_variant_name_is_lowercased() -> None:
    record = normalize("23andme", "RS123\tX\t100\tag")

    assert record is not None
    assert record.variant_name == "rs123"
    assert record.chromosome == "X"
    assert record.allele == "AG"


@pytest.mark.parametrize(
    ("filetype", "header"),
    [
        ("ftdna-illumina", '"RSID","CHROMOSOME","POSITION","RESULT"'),
        ("ancestry", "rsid\tchromosome\tposition\tposition2\tallele1\tallele2"),
        ("decodeme", "Name,Variation,Chromosome,Position,Strand,YourCode"),
    ],
)
def test_header_rows_are_skipped(filetype: str, header: str) -> None:
    assert normalize(filetype, header) is None


def test_header_detection_is_exact_match() -> None:
    record = normalize("ancestry", "rsid2\t1\tx\t5\ta\tc")

    assert record is not None
    assert record.variant_name == "rsid2"


def test_ftdna_strips_quotes() -> None:
    record = normalize("ftdna-illumina", '"rs3094315","1","752566","AG"')

    assert record is not None
    assert (record.variant_name, record.chromosome, record.position, record.allele) == (
        "rs3094315",
        "1",
        "752566",
        "AG",
    )


def test_ancestry_concatenates_allele_columns() -> None:
    record = normalize("ancestry", "rs3131972\t1\tskip\t752721\tA\tG")

    assert record is not None
    assert record.position == "752721"
    assert record.allele == "AG"


def test_decodeme_remaps_columns() -> None:
    record = normalize("decodeme", "rs4345758,C/T,12,4916,+,TT")

    assert record is not None
    assert record.chromosome == "12"
    assert record.position == "4916"
    assert record.allele == "TT"


def test_vcf_maps_genotype_indices_to_ref_and_alt() -> None:
    record = normalize("23andme-exome-vcf", "1\t12345\tRS99\tA\tG\t50\tPASS\t.\tGT:DP\t0/1:20")

    assert record is not None
    assert record.variant_name == "rs99"
    assert record.chromosome == "1"
    assert record.position == "12345"
    assert record.allele == "AG"


def test_vcf_finds_gt_anywhere_in_format() -> None:
    record = normalize("23andme-exome-vcf", "x\t99\trs7\tc\tt\t.\t.\t.\tDP:GT\t31:1/1")

    assert record is not None
    assert record.chromosome == "X"
    assert record.allele == "TT"


def test_vcf_ignores_missing_and_other_allele_indices() -> None:
    record = normalize("23andme-exome-vcf", "2\t5\trs8\tA\tC,T\t.\t.\t.\tGT\t0/2")

    assert record is not None
    assert record.allele == "A"


def test_vcf_without_gt_field_is_malformed() -> None:
    with pytest.raises(MalformedLine, match="GT"):
        normalize("23andme-exome-vcf", "1\t12345\trs99\tA\tG\t50\tPASS\t.\tDP\t20")


def test_vcf_sample_without_gt_value_is_malformed() -> None:
    adapter = ExomeVcfAdapter()

    with pytest.raises(MalformedLine):
        adapter.decode(prepare_line("1\t12345\trs99\tA\tG\t50\tPASS\t.\tDP:GT\t20"))


def test_iyg_mitochondrial_name_resolves_alias() -> None:
    record = normalize("IYG", "MT-T3027C\tAG")

    assert record is not None
    assert record.variant_name == "rs199838004"
    assert record.chromosome == "MT"
    assert record.position == "-3027"
    assert record.allele == "AG"


def test_iyg_unaliased_mitochondrial_name_is_kept() -> None:
    record = normalize("IYG", "MT-A1234G\tA")

    assert record is not None
    assert record.variant_name == "mt-a1234g"
    assert record.chromosome == "MT"
    assert record.position == "-1234"


def test_iyg_nuclear_variant_is_filed_under_chromosome_one() -> None:
    record = normalize("IYG", "rs1234\tCT")

    assert record is not None
    assert record.variant_name == "rs1234"
    assert record.chromosome == "1"
    assert record.position == "1"
    assert record.allele == "CT"


def test_iyg_adapter_accepts_custom_alias_table() -> None:
    adapter = IYGAdapter(aliases=VariantAliasTable(mapping={"mt-x1": "rs1"}))
    record = adapter.decode("mt-x1\ta")

    assert record is not None
    assert record.variant_name == "rs1"


@pytest.mark.parametrize(
    ("filetype", "line"),
    [
        ("23andme", "rs1\t1\t100"),
        ("ancestry", "rs1\t1\t5\ta\tc"),
        ("decodeme", "rs1,c/t,1,100"),
        ("23andme-exome-vcf", "1\t100\trs1\ta\tg"),
        ("IYG", "rs1"),
    ],
)
def test_short_lines_are_malformed(filetype: str, line: str) -> None:
    with pytest.raises(MalformedLine):
        normalize(filetype, line)


def test_empty_variant_name_is_malformed() -> None:
    with pytest.raises(MalformedLine, match="empty variant name"):
        normalize("23andme", "\t1\t100\tAA")


def test_comment_detection_and_line_preparation() -> None:
    assert is_comment("# rsid\tchromosome")
    assert not is_comment("rs1\t1\t1\tAA")
    assert prepare_line("RS1\t1\t1\tAA\r\n") == "rs1\t1\t1\taa"


def test_alias_table_lookup_is_case_insensitive() -> None:
    aliases = VariantAliasTable.default()

    assert aliases.resolve("MT-T3027C") == "rs199838004"
    assert aliases.resolve("mt-c5178a") == "rs28357984"
    assert aliases.resolve("rs42") == "rs42"
    assert "mt-t14783c" in aliases
