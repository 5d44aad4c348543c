"""The four persistence stages for a GO term."""

from goschema.storage import GraphStoreInterface
from goschema.term import Term
from gograph.dao import GoPublicationDao, GoRelationshipDao, GoSynonymDao, GoTermDao
from gograph.pipeline.interfaces import TermStage


class TermNodeStage(TermStage):
    def __init__(self, dao: GoTermDao) -> None:
        self.dao = dao

    @property
    def name(self) -> str:
        return "node"

    async def process(self, term: Term) -> int:
        await self.dao.load_term_node(term)
        return 1


class SynonymStage(TermStage):
    def __init__(self, dao: GoSynonymDao) -> None:
        self.dao = dao

    @property
    def name(self) -> str:
        return "synonyms"

    async def process(self, term: Term) -> int:
        if not term.synonyms:
            return 0
        return await self.dao.persist_synonyms(term)


class PublicationStage(TermStage):
    def __init__(self, dao: GoPublicationDao) -> None:
        self.dao = dao

    @property
    def name(self) -> str:
        return "publications"

    async def process(self, term: Term) -> int:
        return await self.dao.load_publications(term)


class RelationshipStage(TermStage):
    def __init__(self, dao: GoRelationshipDao) -> None:
        self.dao = dao

    @property
    def name(self) -> str:
        return "relationships"

    async def process(self, term: Term) -> int:
        if not term.relationships:
            return 0
        return await self.dao.load_relationships(term)


def default_stages(store: GraphStoreInterface) -> list[TermStage]:
    """Build the stages in the order they must run for each term."""
    term_dao = GoTermDao(store)
    return [
        TermNodeStage(term_dao),
        SynonymStage(GoSynonymDao(store)),
        PublicationStage(GoPublicationDao(store)),
        RelationshipStage(GoRelationshipDao(store, term_dao)),
    ]
