"""template-ingest -- layered-document template ingestion into a live composition engine."""

__version__ = '0.1.0'
