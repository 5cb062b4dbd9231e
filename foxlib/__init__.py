"""Shared building blocks for FOXDEN data services: query language, records, payloads and web plumbing."""

__version__ = "0.1.0"