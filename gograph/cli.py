"""Command line entry point for importing a GO OBO file into Neo4j.

Usage:
    # Load the sample file into the Neo4j instance from gograph.toml / NEO4J_* env
    gograph ./data/sample_go.obo

    # Define uniqueness constraints, clear the previous import, then load
    gograph go-basic.obo --define-constraints --delete

    # Parse only; print one summary line per term that would be loaded
    gograph go-basic.obo --dry-run
"""

import argparse
import asyncio
import logging
import sys

from neo4j.exceptions import DriverError, Neo4jError

from goschema.storage import GraphStoreInterface
from gograph.config import GoGraphConfig, load_config
from gograph.errors import GraphStoreUnavailableError
from gograph.logging import PprintLogger, setup_logging
from gograph.obo.filters import ObsolescenceFilter
from gograph.obo.reader import iter_terms
from gograph.obo.source import OboLineSource
from gograph.pipeline.loader import TermLoader
from gograph.storage.constraints import define_constraints

DEFAULT_OBO_FILE = "./data/sample_go.obo"


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gograph",
        description="Load Gene Ontology terms from an OBO file into a graph database. Obsolete terms are not loaded.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("obo_file", nargs="?", default=DEFAULT_OBO_FILE, help="OBO-formatted input file")
    parser.add_argument(
        "--delete",
        action="store_true",
        help="Delete previously loaded GO term, synonym collection and synonym nodes first",
    )
    parser.add_argument(
        "--define-constraints",
        action="store_true",
        help="Create the uniqueness constraints before loading",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and filter the file without connecting to the database",
    )
    parser.add_argument("--config", default=None, help="Path to a gograph.toml config file")
    parser.add_argument("--channel-capacity", type=int, default=None, help="Bound of each pipeline queue")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def describe_terms(config: GoGraphConfig, obo_file: str, logger: PprintLogger) -> int:
    """Print a one-line summary of every term that would be loaded; return the count."""
    settings = config.loader
    obsolescence = ObsolescenceFilter(settings.obsolete_marker)
    count = 0
    with OboLineSource(obo_file) as source:
        for term in iter_terms(source, settings.block_marker, settings.id_prefix):
            if not term.is_valid() or not obsolescence.passes(term):
                continue
            count += 1
            print(f"{count}:  GOTerm  id: {term.term_id}  name: {term.name}   PMIDs: {sorted(term.publication_ids)}")
            logger.debug(term)
    return count


async def run(args: argparse.Namespace, store: GraphStoreInterface | None = None) -> int:
    """Run one import; returns the process exit code."""
    logger = setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    config = load_config(args.config)
    if args.channel_capacity is not None:
        config = config.model_copy(update={"loader": config.loader.model_copy(update={"channel_capacity": args.channel_capacity})})

    if args.dry_run:
        try:
            count = describe_terms(config, args.obo_file, logger)
        except OSError as e:
            logger.error(f"Cannot read {args.obo_file}: {e}")
            return 1
        logger.info(f"Dry run: {count} GO terms would be loaded from {args.obo_file}")
        return 0

    if store is None:
        from gograph.storage.neo4j_store import Neo4jGraphStore

        store = Neo4jGraphStore(config.neo4j)
        try:
            await store.connect()
        except Exception as e:
            logger.error(f"Cannot connect to Neo4j at {config.neo4j.uri}: {e}")
            await store.close()
            return 1
    try:
        if args.define_constraints:
            await define_constraints(store)
        if args.delete:
            deleted = await store.delete_term_graph()
            logger.info(f"Deleted {deleted} nodes from a previous GO import")
        result = await TermLoader(store=store, settings=config.loader).run_import(args.obo_file)
    except GraphStoreUnavailableError as e:
        logger.error(f"Graph store unavailable: {e}")
        return 1
    except (Neo4jError, DriverError) as e:
        logger.error(f"Neo4j request failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Cannot read {args.obo_file}: {e}")
        return 1
    finally:
        await store.close()
    logger.info(result)
    return 0


def main(argv: list[str] | None = None) -> None:
    sys.exit(asyncio.run(run(parse_arguments(argv))))


if __name__ == "__main__":
    main()
