"""Term records decoded from an OBO ontology file.

A `Term` is one `[Term]` stanza of an OBO file (for example a Gene Ontology
term) reduced to the fields the graph importer persists:

- **Identity**: `term_id`, `namespace` and `name`
- **Text**: the quoted `definition`
- **Alternate names**: `synonyms`, each with an OBO scope
- **Edges**: `relationships` to other terms (`is_a`, `intersection_of`,
  `relationship`), whose targets may not have been loaded yet
- **Cross references**: `xrefs` to external authorities
- **Citations**: the deduplicated set of PubMed ids cited anywhere in the stanza

Terms are immutable (frozen Pydantic models). The decoder builds each one
exactly once from a finished block of lines, and the persistence pipeline
consumes it without modification.
"""

from enum import Enum

from pydantic import BaseModel, Field

OBSOLETE_MARKER = "obsolete"


class SynonymType(str, Enum):
    """OBO synonym scope."""

    EXACT = "EXACT"
    NARROW = "NARROW"
    BROAD = "BROAD"
    RELATED = "RELATED"
    """Default scope when a synonym line does not name one."""


class Synonym(BaseModel, frozen=True):
    """An alternate name for a term."""

    text: str
    synonym_type: SynonymType = SynonymType.RELATED


class TermRelationship(BaseModel, frozen=True):
    """A typed, directed reference from one term to another.

    Attributes:
        relation_type: The OBO tag that introduced the line (`is_a`,
            `intersection_of`, `relationship`).
        qualifier: Text between the tag and the target id, e.g. `part_of`.
        target_id: Identifier of the referenced term. Empty when the line
            carried no identifier.
        description: The comment following the target id (the target's name).
    """

    relation_type: str
    qualifier: str = ""
    target_id: str = ""
    description: str = ""

    @property
    def has_target(self) -> bool:
        return bool(self.target_id.strip())


class Xref(BaseModel, frozen=True):
    """A cross reference to an external authority, e.g. `Reactome:R-HSA-189062`."""

    source: str = ""
    external_id: str = ""
    description: str = ""


class Term(BaseModel, frozen=True):
    """One ontology term.

    Example:
        ```python
        term = Term(
            term_id="GO:0000001",
            namespace="biological_process",
            name="mitochondrion inheritance",
            definition="The distribution of mitochondria...",
        )
        assert term.is_valid()
        ```
    """

    term_id: str = Field(default="", description="Stable identifier such as GO:0006355.")
    namespace: str = Field(default="", description="Sub-ontology the term belongs to.")
    name: str = Field(default="", description="Short human readable label.")
    definition: str = Field(default="", description="Quoted definition text.")
    synonyms: tuple[Synonym, ...] = ()
    relationships: tuple[TermRelationship, ...] = ()
    xrefs: tuple[Xref, ...] = ()
    publication_ids: frozenset[int] = Field(
        default_factory=frozenset,
        description="PubMed ids cited anywhere in the term's stanza.",
    )

    def is_valid(self) -> bool:
        """A term can be persisted only if its id, name and namespace are all non-blank."""
        return bool(self.term_id.strip() and self.name.strip() and self.namespace.strip())

    def is_obsolete(self, marker: str = OBSOLETE_MARKER) -> bool:
        """True if the definition carries the obsolescence marker in any letter case."""
        return marker.casefold() in self.definition.casefold()
