"""Backend abstractions for PDF Outline."""

from .base import BackendDocument, OutlineBackend
from .pypdf_backend import PypdfBackend, PypdfDocument

__all__ = [
    "BackendDocument",
    "OutlineBackend",
    "PypdfBackend",
    "PypdfDocument",
]
