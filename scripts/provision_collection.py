#!/usr/bin/env python
"""Create the knowledge base collection in Qdrant.

Usage:
    python -m scripts.provision_collection --dimensions 1536

The tool server never creates the collection itself; run this once per
deployment before starting it.
"""

import argparse
import asyncio
import sys

from knowledge_mcp.config import get_settings
from knowledge_mcp.embeddings.service import DeterministicEmbeddingService
from knowledge_mcp.logging_config import get_logger, setup_logging
from knowledge_mcp.results import Failure
from knowledge_mcp.vectorstore.service import QdrantVectorStore

logger = get_logger(__name__)


async def provision(collection: str | None, dimensions: int | None) -> bool:
    """Create the collection if it does not exist.

    Args:
        collection: Collection name override.
        dimensions: Vector size override.

    Returns:
        True unless provisioning failed.
    """
    settings = get_settings()
    qdrant_settings = settings.qdrant
    if collection:
        qdrant_settings = qdrant_settings.model_copy(update={"collection_name": collection})

    store = QdrantVectorStore(
        embedding_service=DeterministicEmbeddingService(settings.embedding),
        settings=qdrant_settings,
    )
    try:
        outcome = await store.create_collection(dimensions)
    finally:
        await store.close()

    if isinstance(outcome, Failure):
        logger.error(
            f"Provisioning failed: {outcome.error.message}",
            extra={"kind": outcome.kind.value},
        )
        return False

    if outcome.value:
        logger.info(f"Collection {qdrant_settings.collection_name} created")
    else:
        logger.info(f"Collection {qdrant_settings.collection_name} already present")
    return True


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Provision the knowledge base collection")
    parser.add_argument(
        "--collection",
        help="Collection name (default: QDRANT_COLLECTION_NAME)",
    )
    parser.add_argument(
        "--dimensions",
        type=int,
        help="Vector size (default: EMBEDDING_DIMENSIONS)",
    )
    args = parser.parse_args()

    setup_logging()
    ok = asyncio.run(provision(args.collection, args.dimensions))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
