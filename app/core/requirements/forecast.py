from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.core.requirements.domain import Attachment, RequirementLine, RequirementResult


# (category, item name, line position within the item)
ScopeKey = Tuple[str, str, int]


class EmptySelectionError(ValueError):
    """Raised when a forecast is submitted with no line selected."""


@dataclass(frozen=True)
class ForecastEntry:
    category: str
    item_name: str
    line_no: int
    line: RequirementLine

    @property
    def key(self) -> ScopeKey:
        return (self.category, self.item_name, self.line_no)

    @property
    def description(self) -> str:
        return f"{self.item_name} ({self.line.scope_label})"


@dataclass(frozen=True)
class MaterialRequestDraft:
    order_id: int
    description: str
    quantity: float
    unit: str
    attachments: Tuple[Attachment, ...] = ()


class ForecastSelection:
    """User-toggleable subset of derived requirement lines.

    Every line starts selected. Lines are keyed by category, item and
    position, so items sharing a field name across categories and lines
    sharing a scope label keep separate flags. A selection belongs to a
    single interaction; it is never shared between requests.
    """

    def __init__(self, results: Sequence[RequirementResult], selected: bool = True) -> None:
        self._entries: List[ForecastEntry] = [
            ForecastEntry(category=result.category, item_name=result.item_name, line_no=line_no, line=line)
            for result in results
            for line_no, line in enumerate(result.lines)
        ]
        self._selected: Dict[ScopeKey, bool] = {entry.key: selected for entry in self._entries}

    @property
    def entries(self) -> List[ForecastEntry]:
        return list(self._entries)

    def is_selected(self, key: ScopeKey) -> bool:
        return self._selected.get(key, False)

    def toggle(self, key: ScopeKey) -> bool:
        if key not in self._selected:
            raise KeyError(key)
        self._selected[key] = not self._selected[key]
        return self._selected[key]

    def set_item(self, item_name: str, selected: bool, category: Optional[str] = None) -> None:
        for entry in self._entries:
            if entry.item_name == item_name and category in (None, entry.category):
                self._selected[entry.key] = selected

    def select_all(self) -> None:
        for key in self._selected:
            self._selected[key] = True

    def clear_all(self) -> None:
        for key in self._selected:
            self._selected[key] = False

    def select_only(self, keys: Iterable[ScopeKey]) -> None:
        wanted = set(keys)
        unknown = wanted - set(self._selected)
        if unknown:
            raise KeyError(sorted(unknown)[0])
        for key in self._selected:
            self._selected[key] = key in wanted

    def selected_entries(self) -> List[ForecastEntry]:
        return [entry for entry in self._entries if self._selected[entry.key]]

    def to_drafts(self, order_id: int, unit: str, units: Optional[Dict[str, str]] = None) -> List[MaterialRequestDraft]:
        """One material-request draft per selected line.

        ``units`` optionally overrides ``unit`` per item name.
        """
        chosen = self.selected_entries()
        if not chosen:
            raise EmptySelectionError("Select at least one requirement to request")

        units = units or {}
        return [
            MaterialRequestDraft(
                order_id=order_id,
                description=entry.description,
                quantity=entry.line.calculated_quantity,
                unit=units.get(entry.item_name, unit),
                attachments=entry.line.attachments,
            )
            for entry in chosen
        ]
