"""Graph vocabulary shared by the DAO layer and the storage backends.

The importer writes four kinds of nodes, each addressed by a natural key:

    GoTerm -[HAS_SYNONYM_COLLECTION]-> GoSynonymCollection -[HAS_SYNONYM]-> GoSynonym
    GoTerm -[HAS_PUBLICATION]-> Publication
    GoTerm -[IS_A | INTERSECTION_OF | RELATIONSHIP | ...]-> GoTerm

A node is either a *placeholder* (created to satisfy a forward reference, it
carries only its key) or *complete* (attributes populated). Upserts by key
promote a placeholder in place; they never create a second node.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

TERM_LABEL = "GoTerm"
SYNONYM_COLLECTION_LABEL = "GoSynonymCollection"
SYNONYM_LABEL = "GoSynonym"
PUBLICATION_LABEL = "Publication"
PUBMED_LABEL = "PubMed"

KEY_PROPERTIES: dict[str, str] = {
    TERM_LABEL: "go_id",
    SYNONYM_COLLECTION_LABEL: "go_id",
    SYNONYM_LABEL: "synonym_id",
    PUBLICATION_LABEL: "pub_id",
}

HAS_SYNONYM_COLLECTION = "HAS_SYNONYM_COLLECTION"
HAS_SYNONYM = "HAS_SYNONYM"
HAS_PUBLICATION = "HAS_PUBLICATION"


def key_property(label: str) -> str:
    """Return the property that holds the natural key for nodes with this label."""
    try:
        return KEY_PROPERTIES[label]
    except KeyError:
        raise ValueError(f"No natural key is defined for label {label!r}") from None


def relationship_edge_type(relation_type: str) -> str:
    """Map an OBO relation tag (`is_a`) to the edge type stored in the graph (`IS_A`)."""
    edge_type = relation_type.strip().upper()
    if not edge_type:
        raise ValueError("Relation type must not be blank")
    return edge_type


class NodeState(str, Enum):
    """Whether a node holds only its key or its full attribute set."""

    PLACEHOLDER = "placeholder"
    COMPLETE = "complete"


class NodeRef(BaseModel, frozen=True):
    """Address of a node: its primary label and natural key value."""

    label: str
    key: str

    @property
    def key_property(self) -> str:
        return key_property(self.label)

    @classmethod
    def term(cls, term_id: str) -> "NodeRef":
        return cls(label=TERM_LABEL, key=term_id)

    @classmethod
    def synonym_collection(cls, term_id: str) -> "NodeRef":
        return cls(label=SYNONYM_COLLECTION_LABEL, key=term_id)

    @classmethod
    def synonym(cls, term_id: str, ordinal: int) -> "NodeRef":
        """Synonym ids are the owning term id followed by the 1-based ordinal."""
        return cls(label=SYNONYM_LABEL, key=f"{term_id}{ordinal}")

    @classmethod
    def publication(cls, pub_id: int | str) -> "NodeRef":
        return cls(label=PUBLICATION_LABEL, key=str(pub_id))


class GraphNode(BaseModel, frozen=True):
    """Stored view of a node."""

    label: str
    key: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    labels: frozenset[str] = Field(default_factory=frozenset, description="Secondary labels.")

    @property
    def ref(self) -> NodeRef:
        return NodeRef(label=self.label, key=self.key)

    @property
    def state(self) -> NodeState:
        return NodeState.COMPLETE if self.attributes else NodeState.PLACEHOLDER


class GraphEdge(BaseModel, frozen=True):
    """Stored view of a directed, typed edge. Identity is (source, edge_type, target)."""

    edge_type: str
    source: NodeRef
    target: NodeRef
    attributes: dict[str, Any] = Field(default_factory=dict)
