"""Conectores embutidos do Atlas Laundry e o catálogo padrão."""

from atlas_laundry.core.connectors.catalog import ConnectorCatalog

from .files import File, FileCsv, FileJson


def default_catalog() -> ConnectorCatalog:
    """Catálogo com os conectores embutidos (bases antes das especializações)."""
    return ConnectorCatalog.of([File(), FileJson(), FileCsv()])


__all__ = ["File", "FileCsv", "FileJson", "default_catalog"]
