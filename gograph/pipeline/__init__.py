"""Persistence pipeline: stages, channels and the term loader."""

from gograph.pipeline.channels import Channel, ChannelClosedError
from gograph.pipeline.interfaces import TermStage
from gograph.pipeline.loader import ImportResult, TermFailure, TermLoader, TermLoadResult
from gograph.pipeline.stages import (
    PublicationStage,
    RelationshipStage,
    SynonymStage,
    TermNodeStage,
    default_stages,
)

__all__ = [
    "Channel",
    "ChannelClosedError",
    "ImportResult",
    "PublicationStage",
    "RelationshipStage",
    "SynonymStage",
    "TermFailure",
    "TermLoadResult",
    "TermLoader",
    "TermNodeStage",
    "TermStage",
    "default_stages",
]
