import pytest

from rebound.schemas.symptoms import SymptomCategory, SymptomDefinition
from rebound.services import taxonomy as tx


def test_taxonomy_loads_full_catalog(taxonomy):
    assert taxonomy.version >= 1
    assert len(taxonomy.symptoms) == 63
    ids = [s.id for s in taxonomy.symptoms]
    assert len(ids) == len(set(ids))


def test_get_taxonomy_is_cached():
    assert tx.get_taxonomy() is tx.get_taxonomy()


def test_list_by_category_partitions_taxonomy(taxonomy):
    seen = []
    for category in SymptomCategory:
        seen.extend(tx.list_by_category(category, taxonomy))
    assert sorted(s.id for s in seen) == sorted(s.id for s in taxonomy.symptoms)
    assert len(seen) == len(taxonomy.symptoms)


def test_list_by_category_keeps_declaration_order(taxonomy):
    physical = tx.list_by_category(SymptomCategory.PHYSICAL, taxonomy)
    assert [s.id for s in physical[:3]] == ["headache", "dizziness", "balance-problems"]
    assert len(physical) == 17
    assert len(tx.list_by_category("Behavioral", taxonomy)) == 3


def test_list_by_category_unknown_is_empty(taxonomy):
    assert tx.list_by_category("Nonsense", taxonomy) == []


def test_list_red_flags(taxonomy):
    flags = [s.id for s in tx.list_red_flags(taxonomy)]
    assert flags == [
        "neck-pain",
        "consciousness-loss",
        "convulsions",
        "worsening-headaches",
        "repeated-vomiting",
    ]


def test_format_display_name(taxonomy):
    assert tx.format_display_name(taxonomy.get("repeated-vomiting")) == "Repeated vomiting ⚠️"
    assert tx.format_display_name(taxonomy.get("headache")) == "Headache"


def test_get_missing_id_returns_none(taxonomy):
    assert taxonomy.get("does-not-exist") is None


def test_keywords_include_aliases():
    d = SymptomDefinition(id="x", name="Dizziness or light headedness", category="Physical", aliases=["Dizzy"])
    assert d.keywords() == ["dizziness", "or", "light", "headedness", "dizzy"]


def test_duplicate_ids_rejected(tmp_path):
    path = tmp_path / "dupes.yaml"
    path.write_text(
        "version: 2\n"
        "symptoms:\n"
        "  - {id: a, name: Headache, category: Physical}\n"
        "  - {id: a, name: Nausea, category: Physical}\n",
        encoding="utf-8",
    )
    with pytest.raises(tx.TaxonomyError, match="duplicate"):
        tx.load_taxonomy(path)


def test_unknown_category_rejected(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("symptoms:\n  - {id: a, name: Headache, category: Vision}\n", encoding="utf-8")
    with pytest.raises(tx.TaxonomyError):
        tx.load_taxonomy(path)


def test_missing_file_rejected(tmp_path):
    with pytest.raises(tx.TaxonomyError):
        tx.load_taxonomy(tmp_path / "nope.yaml")


def test_taxonomy_is_immutable(taxonomy):
    with pytest.raises(Exception):
        taxonomy.symptoms[0].name = "Changed"
