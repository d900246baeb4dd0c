"""vocaworks: aggregate a VocaDB producer's works into a display-ready collection."""

__version__ = "0.1.0"
