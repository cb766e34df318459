import csv
import io
from collections import OrderedDict
from typing import Iterable, Iterator, List

from .schemas import ProductCatalogEntry, StockEvent


def new_stock_event(product: ProductCatalogEntry) -> StockEvent:
    return StockEvent(tag=product.tag, name=product.name, unit_price=product.unit_price)


class StockLog:
    """Append-only log of received units, one event per scanned unit."""

    def __init__(self, events: Iterable[StockEvent] = ()):
        self._events: List[StockEvent] = list(events)

    def __iter__(self) -> Iterator[StockEvent]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def append(self, event: StockEvent) -> StockEvent:
        self._events.append(event)
        return event

    def receive(self, product: ProductCatalogEntry) -> StockEvent:
        return self.append(new_stock_event(product))

    def clear(self) -> None:
        self._events = []


def stock_export_csv(events: Iterable[StockEvent]) -> str:
    totals = OrderedDict()
    for event in events:
        if event.tag not in totals:
            totals[event.tag] = [event.name, 0, event.unit_price]
        totals[event.tag][1] += 1

    out = io.StringIO()
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(["Item Name", "Quantity", "Price", "RFID"])
    for tag, (name, quantity, price) in totals.items():
        writer.writerow([name, quantity, price, tag])
    return out.getvalue()
