# src/semquiz/embedder/__init__.py
"""Embedding functionality for semquiz."""

from semquiz.embedder.base import Embedder
from semquiz.embedder.client import ClientEmbedder

__all__ = ["Embedder", "ClientEmbedder"]
