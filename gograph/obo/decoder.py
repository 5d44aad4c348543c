"""Decode the lines of one OBO term stanza into a `Term`.

Each line is dispatched on its first whitespace-delimited token with the
colon removed (`id`, `name`, `namespace`, `def`, `synonym`, `is_a`,
`intersection_of`, `relationship`, `xref`). Unknown tags are ignored, so
newer OBO stanza tags do not break decoding. PubMed citations are collected
from every line regardless of its tag.

A malformed line never aborts the term: the affected field is left empty and
validity is judged later on id, name and namespace only.

Example stanza:

    [Term]
    id: GO:0000001
    name: mitochondrion inheritance
    namespace: biological_process
    def: "The distribution of mitochondria..." [GOC:mcc, PMID:10873824]
    synonym: "mitochondrial inheritance" EXACT []
    is_a: GO:0048308 ! organelle inheritance
    relationship: part_of GO:0007005 ! mitochondrion organization
"""

import logging
from typing import Sequence

from goschema.term import Synonym, SynonymType, Term, TermRelationship, Xref

logger = logging.getLogger(__name__)

DEFAULT_ID_PREFIX = "GO:"
PMID_LABEL = "PMID"
# Digits start after "PMID:"
PMID_OFFSET = 5
# Identifiers such as GO:0006355 are ten characters long
TARGET_ID_LENGTH = 10
# " ! " separates a target id from its comment
DESCRIPTION_DELIMITER_WIDTH = 3
RELATIONSHIP_TAGS = frozenset({"is_a", "intersection_of", "relationship"})


def resolve_first_word(line: str) -> str:
    """Return the line's first space-delimited token with colons removed."""
    parts = line.strip().split(" ")
    return parts[0].replace(":", "") if parts else ""


def resolve_quoted_string(line: str) -> str:
    """Return the text between the first and last double quote, or '' without a pair."""
    first = line.find('"')
    last = line.rfind('"')
    if last > first >= 0:
        return line[first + 1 : last]
    return ""


def parse_leading_digits(text: str) -> int | None:
    """Parse the run of ASCII digits at the start of `text`."""
    end = 0
    while end < len(text) and "0" <= text[end] <= "9":
        end += 1
    if end == 0:
        return None
    return int(text[:end])


def resolve_publication_ids(lines: Sequence[str]) -> frozenset[int]:
    """Collect every PubMed id cited in the lines, deduplicated.

    PubMed ids vary between 6 and 8 digits, so the digit run after each
    `PMID:` is read until the first non-digit character.
    """
    pmids: set[int] = set()
    for line in lines:
        index = line.find(PMID_LABEL)
        while index != -1:
            pmid = parse_leading_digits(line[index + PMID_OFFSET :])
            if pmid is not None:
                pmids.add(pmid)
            index = line.find(PMID_LABEL, index + 1)
    return frozenset(pmids)


def resolve_synonym(line: str) -> Synonym:
    """Parse `synonym: "text" TYPE [refs]`."""
    text = resolve_quoted_string(line)
    start = line.rfind('"') + 2
    rest = line[start:] if start >= 2 else ""
    scope = rest.split(" ", 1)[0].strip()
    try:
        synonym_type = SynonymType(scope.upper())
    except ValueError:
        synonym_type = SynonymType.RELATED
    return Synonym(text=text, synonym_type=synonym_type)


def resolve_xref(line: str) -> Xref:
    """Parse `xref: SOURCE:ID "optional description"`."""
    tokens = line.split()
    if len(tokens) < 2:
        logger.debug("xref line without a reference token: %r", line)
        return Xref()
    source, _, external_id = tokens[1].partition(":")
    return Xref(source=source, external_id=external_id, description=resolve_quoted_string(line))


class TermDecoder:
    """Turn the lines of a term stanza into a `Term`.

    Decoding is a pure function of the input lines; the decoder holds only
    the namespace prefix used to locate identifiers (`GO:` by default).
    """

    def __init__(self, id_prefix: str = DEFAULT_ID_PREFIX) -> None:
        self.id_prefix = id_prefix

    def decode(self, lines: Sequence[str]) -> Term:
        term_id = ""
        name = ""
        namespace = ""
        definition = ""
        synonyms: list[Synonym] = []
        relationships: list[TermRelationship] = []
        xrefs: list[Xref] = []

        for line in lines:
            tag = resolve_first_word(line)
            if tag == "id":
                term_id = self._resolve_id(line)
            elif tag == "name":
                name = line[len("name: ") :].strip()
            elif tag == "namespace":
                namespace = line[len("namespace: ") :].strip()
            elif tag == "def":
                definition = resolve_quoted_string(line)
            elif tag == "synonym":
                synonyms.append(resolve_synonym(line))
            elif tag in RELATIONSHIP_TAGS:
                relationships.append(self.resolve_relationship(line))
            elif tag == "xref":
                xrefs.append(resolve_xref(line))

        return Term(
            term_id=term_id,
            namespace=namespace,
            name=name,
            definition=definition,
            synonyms=tuple(synonyms),
            relationships=tuple(relationships),
            xrefs=tuple(xrefs),
            publication_ids=resolve_publication_ids(lines),
        )

    def _resolve_id(self, line: str) -> str:
        start = line.find(self.id_prefix)
        if start == -1:
            return ""
        return line[start:].strip()

    def resolve_relationship(self, line: str) -> TermRelationship:
        """Parse `is_a: GO:0006355 ! comment` or `relationship: part_of GO:0000082 ! comment`."""
        relation_type = resolve_first_word(line)
        target_start = line.find(self.id_prefix)
        if target_start == -1:
            logger.debug("%s line without a target id: %r", relation_type, line)
            return TermRelationship(relation_type=relation_type)
        target_end = target_start + TARGET_ID_LENGTH
        target_id = line[target_start:target_end].strip()
        qualifier_start = line.find(":") + 2
        qualifier = line[qualifier_start:target_start].strip() if qualifier_start < target_start else ""
        description = line[target_end + DESCRIPTION_DELIMITER_WIDTH :].strip()
        return TermRelationship(
            relation_type=relation_type,
            qualifier=qualifier,
            target_id=target_id,
            description=description,
        )


def decode_term(lines: Sequence[str], id_prefix: str = DEFAULT_ID_PREFIX) -> Term:
    """Decode a term stanza with a default `TermDecoder`."""
    return TermDecoder(id_prefix).decode(lines)
