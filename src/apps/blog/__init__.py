"""
blog/ - Content Repository & Query Composition
================================================
Posts, tags and authors: typed records, repository contracts with ORM and
in-memory adapters, the tag lifecycle, route resolvers and the per-view
query orchestrator.
"""
