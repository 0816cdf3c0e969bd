"""Knowledge base tool server.

Semantic retrieval over a Qdrant collection, document insertion, and
on-demand web search, exposed as callable tools.
"""

__version__ = "0.1.0"
