"""
Product catalog and CSV catalog import.

The catalog is replaced wholesale on every upload. Columns are located by
header name through the configured ColumnMapping; rows that do not yield both
an id and a name are dropped.
"""

import csv
import io
import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from admin.schemas import ColumnMapping
from errors import CatalogImportError, UnknownProductError
from .schemas import ProductCatalogEntry

logger = logging.getLogger(__name__)


class ProductCatalog:
    def __init__(self, entries: Iterable[ProductCatalogEntry] = ()):
        self._entries: Dict[str, ProductCatalogEntry] = {}
        self.replace(entries)

    def __iter__(self) -> Iterator[ProductCatalogEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, tag: str) -> bool:
        return tag in self._entries

    def replace(self, entries: Iterable[ProductCatalogEntry]) -> None:
        # later rows with the same tag win
        self._entries = {}
        for entry in entries:
            self._entries[entry.tag] = entry

    def find(self, tag: str) -> Optional[ProductCatalogEntry]:
        return self._entries.get(tag.strip())

    def lookup(self, tag: str) -> ProductCatalogEntry:
        entry = self.find(tag)
        if entry is None:
            raise UnknownProductError(tag.strip())
        return entry

    def clear(self) -> None:
        self._entries = {}


def _parse_price(raw: str) -> float:
    try:
        return float(raw.replace(",", "").strip())
    except (AttributeError, ValueError):
        return 0.0


def _column_index(header: List[str], name: str, required: bool) -> Optional[int]:
    if not name:
        if required:
            raise CatalogImportError("a required column is not mapped")
        return None
    wanted = name.strip().lower()
    for index, column in enumerate(header):
        if column.strip().lower() == wanted:
            return index
    if required:
        raise CatalogImportError(f"column '{name}' not found in header")
    return None


def parse_catalog_csv(text: str, mapping: ColumnMapping) -> Tuple[List[ProductCatalogEntry], int]:
    """Return the catalog entries and the number of rows dropped."""
    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    header = next(reader, None)
    if not header:
        raise CatalogImportError("the file has no header row")

    id_index = _column_index(header, mapping.id_column, required=True)
    name_index = _column_index(header, mapping.name_column, required=True)
    price_index = _column_index(header, mapping.price_column, required=True)
    opt1_index = _column_index(header, mapping.optional_column1, required=False)
    opt2_index = _column_index(header, mapping.optional_column2, required=False)

    def cell(row: List[str], index: Optional[int]) -> str:
        if index is None or index >= len(row):
            return ""
        return row[index].strip()

    entries: List[ProductCatalogEntry] = []
    dropped = 0
    for row in reader:
        if not any(value.strip() for value in row):
            continue
        tag, name = cell(row, id_index), cell(row, name_index)
        if not tag or not name:
            dropped += 1
            continue
        entries.append(
            ProductCatalogEntry(
                tag=tag,
                name=name,
                unit_price=_parse_price(cell(row, price_index)),
                optional1=cell(row, opt1_index) or None,
                optional2=cell(row, opt2_index) or None,
            )
        )

    logger.info("Catalog import: %d rows kept, %d dropped", len(entries), dropped)
    return entries, dropped
