"""Tests for decoding OBO term stanzas into `Term` records.

Covers each line rule (id, name, namespace, def, synonym, relationships,
xref, PMID citations), malformed lines that leave a field empty, and the
determinism of decoding.
"""

from goschema.term import SynonymType
from gograph.obo.decoder import (
    TermDecoder,
    decode_term,
    resolve_first_word,
    resolve_publication_ids,
    resolve_quoted_string,
    resolve_synonym,
    resolve_xref,
)

from tests.conftest import MITOCHONDRION_BLOCK


class TestLineHelpers:
    def test_first_word_strips_colon(self) -> None:
        assert resolve_first_word("is_a: GO:0006355 ! x") == "is_a"
        assert resolve_first_word("") == ""

    def test_quoted_string(self) -> None:
        line = 'def: "Catalysis of the reaction: A = B." [MetaCyc:RXN-9230]'
        assert resolve_quoted_string(line) == "Catalysis of the reaction: A = B."

    def test_quoted_string_without_pair(self) -> None:
        assert resolve_quoted_string('def: "unterminated') == ""
        assert resolve_quoted_string("def: none") == ""


class TestFieldExtraction:
    def test_end_to_end_mitochondrion_block(self) -> None:
        term = decode_term(MITOCHONDRION_BLOCK)

        assert term.term_id == "GO:0000001"
        assert term.name == "mitochondrion inheritance"
        assert term.namespace == "biological_process"
        assert term.definition == "The distribution of mitochondria..."
        assert term.synonyms == ()
        assert term.relationships == ()
        assert term.publication_ids == frozenset()
        assert term.is_valid()

    def test_unknown_tags_are_ignored(self) -> None:
        term = decode_term(MITOCHONDRION_BLOCK + ["subset: goslim_yeast", "created_by: jl", "alt_id: GO:0019952"])
        assert term == decode_term(MITOCHONDRION_BLOCK)

    def test_missing_fields_stay_empty(self) -> None:
        term = decode_term(["id: GO:0000001"])
        assert term.name == ""
        assert term.namespace == ""
        assert term.definition == ""
        assert not term.is_valid()

    def test_id_without_prefix_is_empty(self) -> None:
        assert decode_term(["id: CL:0000001"]).term_id == ""
        assert TermDecoder(id_prefix="CL:").decode(["id: CL:0000001"]).term_id == "CL:0000001"


class TestSynonyms:
    def test_exact_synonym(self) -> None:
        synonym = resolve_synonym('synonym: "mitochondrial inheritance" EXACT []')
        assert synonym.text == "mitochondrial inheritance"
        assert synonym.synonym_type == SynonymType.EXACT

    def test_all_scopes(self) -> None:
        lines = [
            'synonym: "activation of receptor internalization" NARROW []',
            'synonym: "up regulation of receptor internalization" EXACT []',
            'synonym: "receptor internalization activation" BROAD [GOC:TermGenie]',
            'synonym: "receptor uptake" RELATED []',
        ]
        term = decode_term(lines)
        assert [s.synonym_type for s in term.synonyms] == [
            SynonymType.NARROW,
            SynonymType.EXACT,
            SynonymType.BROAD,
            SynonymType.RELATED,
        ]

    def test_scope_at_end_of_line(self) -> None:
        assert resolve_synonym('synonym: "x" BROAD').synonym_type == SynonymType.BROAD

    def test_missing_scope_defaults_to_related(self) -> None:
        assert resolve_synonym('synonym: "x"').synonym_type == SynonymType.RELATED
        assert resolve_synonym("synonym: unquoted").text == ""

    def test_synonym_order_is_preserved(self) -> None:
        term = decode_term(['synonym: "b" EXACT []', 'synonym: "a" EXACT []'])
        assert [s.text for s in term.synonyms] == ["b", "a"]


class TestRelationships:
    def test_is_a(self) -> None:
        rel = TermDecoder().resolve_relationship("is_a: GO:0006355 ! regulation of transcription, DNA-templated")
        assert rel.relation_type == "is_a"
        assert rel.qualifier == ""
        assert rel.target_id == "GO:0006355"
        assert rel.description == "regulation of transcription, DNA-templated"

    def test_relationship_with_qualifier(self) -> None:
        rel = TermDecoder().resolve_relationship("relationship: part_of GO:0000082 ! G1/S transition of mitotic cell cycle")
        assert rel.relation_type == "relationship"
        assert rel.qualifier == "part_of"
        assert rel.target_id == "GO:0000082"
        assert rel.description == "G1/S transition of mitotic cell cycle"

    def test_intersection_of_with_and_without_qualifier(self) -> None:
        term = decode_term(
            [
                "intersection_of: GO:0006355 ! regulation of transcription, DNA-templated",
                "intersection_of: part_of GO:0000082 ! G1/S transition of mitotic cell cycle",
            ]
        )
        assert [(r.qualifier, r.target_id) for r in term.relationships] == [
            ("", "GO:0006355"),
            ("part_of", "GO:0000082"),
        ]

    def test_relationship_without_target_is_left_empty(self) -> None:
        term = decode_term(MITOCHONDRION_BLOCK + ["relationship: part_of CL:0000000"])
        rel = term.relationships[0]
        assert rel.relation_type == "relationship"
        assert rel.target_id == ""
        assert not rel.has_target
        assert term.is_valid()

    def test_relationship_without_comment(self) -> None:
        rel = TermDecoder().resolve_relationship("is_a: GO:0006355")
        assert rel.target_id == "GO:0006355"
        assert rel.description == ""


class TestXrefs:
    def test_xref_without_description(self) -> None:
        xref = resolve_xref("xref: EC:3.2.1.108")
        assert (xref.source, xref.external_id, xref.description) == ("EC", "3.2.1.108", "")

    def test_xref_with_description(self) -> None:
        xref = resolve_xref('xref: Reactome:R-HSA-189062 "lactose + H2O => D-glucose + D-galactose"')
        assert xref.source == "Reactome"
        assert xref.external_id == "R-HSA-189062"
        assert xref.description == "lactose + H2O => D-glucose + D-galactose"

    def test_malformed_xref_is_empty(self) -> None:
        xref = resolve_xref("xref:")
        assert (xref.source, xref.external_id) == ("", "")

    def test_xrefs_collected_in_order(self) -> None:
        term = decode_term(["xref: MetaCyc:LACTASE-RXN", "xref: RHEA:10076"])
        assert [(x.source, x.external_id) for x in term.xrefs] == [("MetaCyc", "LACTASE-RXN"), ("RHEA", "10076")]


class TestPublicationIds:
    def test_extracts_every_pmid_on_a_line(self) -> None:
        lines = [
            'def: "The fusion of the plasma membrane." [GOC:dph, PMID:3886029, PMID:1234567]',
            "intersection_of: GO:0061025 ! membrane fusion",
            'def: "The acrosomal membrane region." [GOC:dph, PMID:3899643, PMID:8936405]',
        ]
        assert resolve_publication_ids(lines) == frozenset({3886029, 1234567, 3899643, 8936405})

    def test_duplicate_pmid_is_counted_once(self) -> None:
        term = decode_term(
            MITOCHONDRION_BLOCK
            + [
                'synonym: "x" EXACT [PMID:10873824]',
                'comment: See PMID:10873824 for details.',
            ]
        )
        assert term.publication_ids == frozenset({10873824})

    def test_pmid_without_digits_is_ignored(self) -> None:
        assert resolve_publication_ids(["comment: PMID:unknown and PMID"]) == frozenset()

    def test_digit_run_stops_at_non_digit(self) -> None:
        assert resolve_publication_ids(["def: \"x\" [PMID:123456]"]) == frozenset({123456})


class TestDeterminism:
    def test_same_lines_same_term(self, sample_obo) -> None:
        lines = sample_obo.read_text(encoding="utf-8").split("\n\n")[1].splitlines()[1:]
        assert decode_term(lines) == decode_term(list(lines))
        assert decode_term(lines).term_id == "GO:0000001"
