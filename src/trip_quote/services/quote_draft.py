"""
Quote Draft - the quote being edited before it is priced and exported.

Every change produces a new QuoteInput; earlier values are never mutated,
so a calculated quote always matches the input it was built from.
"""
import json
from dataclasses import fields, replace
from pathlib import Path
from typing import Optional

from ..engine.models import QuoteInput, SelectedExtra
from .quote_numbers import next_quote_number

QUOTE_FIELDS = {f.name for f in fields(QuoteInput)}


def load_default_quote(path: Path) -> QuoteInput:
    """Load the bundled default quote input."""
    with open(path, 'r', encoding='utf-8') as f:
        return QuoteInput.from_dict(json.load(f))


class QuoteDraft:
    """Editable quote input with ordered selected extras."""

    def __init__(self, quote: QuoteInput):
        self.quote = quote

    def set_field(self, name: str, value) -> QuoteInput:
        if name not in QUOTE_FIELDS:
            raise ValueError(f"Unknown quote field '{name}'")
        self.quote = replace(self.quote, **{name: value})
        return self.quote

    def _set_extras(self, extras: list[SelectedExtra]) -> QuoteInput:
        self.quote = replace(self.quote, selected_extras=extras)
        return self.quote

    def add_selected_extra(self, extra_id: str, days: int) -> QuoteInput:
        """Select an extra once; selecting it again changes nothing."""
        if any(s.id == extra_id for s in self.quote.selected_extras):
            return self.quote
        return self._set_extras([
            *self.quote.selected_extras,
            SelectedExtra(id=extra_id, days=days, quantity=1),
        ])

    def update_selected_extra(self, extra_id: str, **patch) -> QuoteInput:
        unknown = set(patch) - {'days', 'quantity'}
        if unknown:
            raise ValueError(f"Unknown selected extra fields: {sorted(unknown)}")
        return self._set_extras([
            replace(s, **patch) if s.id == extra_id else s
            for s in self.quote.selected_extras
        ])

    def remove_selected_extra(self, extra_id: str) -> QuoteInput:
        return self._set_extras([s for s in self.quote.selected_extras if s.id != extra_id])

    def reorder_selected_extras(self, source_id: str, target_id: str) -> QuoteInput:
        """Move source_id to the position currently held by target_id."""
        extras = list(self.quote.selected_extras)
        ids = [s.id for s in extras]
        if source_id not in ids or target_id not in ids or source_id == target_id:
            return self.quote
        from_index = ids.index(source_id)
        to_index = ids.index(target_id)
        moved = extras.pop(from_index)
        extras.insert(to_index, moved)
        return self._set_extras(extras)

    def start_next(self, default: QuoteInput, date: Optional[str] = None) -> 'QuoteDraft':
        """Start a fresh draft from `default`, numbered after the current quote."""
        quote = replace(
            default,
            quote_number=next_quote_number(self.quote.quote_number),
            selected_extras=list(default.selected_extras),
        )
        if date is not None:
            quote = replace(quote, date=date)
        return QuoteDraft(quote)
