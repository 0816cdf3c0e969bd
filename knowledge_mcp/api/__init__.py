"""HTTP transport for the knowledge base tools."""
