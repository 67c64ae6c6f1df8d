"""Search adapter layer — Connectors for the search backend.

Built-in adapters:
  - opensearch: OpenSearch v2+ / Elasticsearch-compatible backends

Implement ``SearchAdapter`` to connect another backend.
"""
