"""EPUB Pager - moteur de pagination de conteneurs EPUB."""

__version__ = "0.1.0"
