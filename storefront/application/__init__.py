"""Application layer: actions (mutations), cached queries, ports and DTOs."""
