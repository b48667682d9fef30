"""
Taxonomie des erreurs du moteur EPUB.

Les erreurs d'ouverture d'archive interrompent l'opération en cours ;
les erreurs de parsing sont absorbées et remplacées par des valeurs par défaut.
"""


class EpubError(Exception):
    """Erreur de base du moteur EPUB."""


class NotFoundError(EpubError):
    """Archive introuvable sur le disque."""


class EntryNotFoundError(NotFoundError):
    """Entrée absente de l'archive."""

    def __init__(self, entry_path: str):
        super().__init__(f"Entry not found in archive: {entry_path}")
        self.entry_path = entry_path


class CorruptArchiveError(EpubError):
    """Conteneur illisible ou invalide."""


class MalformedPackageError(EpubError):
    """container.xml ou document OPF inexploitable."""


class ExtractionIOError(EpubError):
    """Échec d'écriture lors de l'extraction."""


class OversizedResourceError(EpubError):
    """Ressource dépassant le seuil de taille autorisé."""

    def __init__(self, entry_path: str, size: int, limit: int):
        super().__init__(f"{entry_path} is {size} bytes (limit {limit})")
        self.entry_path = entry_path
        self.size = size
        self.limit = limit
