"""
Pricing Store - reads/writes the pricing configuration and backs the editor.

The store is the only place that touches pricingConfig.json. Payloads
are schema-checked before they are written. The editor keeps a working
copy, applies edits and debounces saves through an AutoSaveScheduler it
owns, so a pending save can be cancelled or flushed by whoever holds it.
"""
import json
import logging
import threading
import time
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from ..config.schema import ConfigSchemaError, check_pricing_config
from ..engine.models import ExtraService, PricingConfig, Tier
from ..validation.tiers import validate_pricing_tiers

logger = logging.getLogger(__name__)

TIER_FIELDS = {'min_people', 'max_people', 'price'}
SECTION_FIELDS = {'pricing_model', 'multiplier', 'tiers'}
EXTRA_FIELDS = {'title_en', 'title_de', 'price', 'pricing_model', 'multiplier'}


class PricingConfigStore:
    """JSON file store for the pricing configuration."""

    def __init__(self, path: Path, default_path: Path):
        self.path = Path(path)
        self.default_path = Path(default_path)

    def load_default(self) -> PricingConfig:
        """Load the bundled default configuration."""
        with open(self.default_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return PricingConfig.from_dict(data)

    def load(self) -> PricingConfig:
        """
        Load the stored configuration.

        Falls back to the default when the file does not exist yet or does
        not pass the schema check. Unreadable or non-JSON files raise.
        """
        if not self.path.exists():
            return self.load_default()

        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f)

        report = check_pricing_config(data)
        if not report.ok:
            logger.error(
                "Invalid pricing config structure in %s, falling back to default: %s",
                self.path, [d.to_dict() for d in report.defects],
            )
            return self.load_default()
        return report.value

    def save(self, config: PricingConfig) -> PricingConfig:
        """Write the configuration as pretty JSON."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info("Saved pricing config to %s", self.path)
        return config

    def save_payload(self, payload: Any) -> PricingConfig:
        """Schema-check a raw JSON payload and save it. Raises ConfigSchemaError."""
        report = check_pricing_config(payload)
        if not report.ok:
            raise ConfigSchemaError(report)
        return self.save(report.value)


class AutoSaveHandle:
    """Cancellation handle for one scheduled save."""

    def __init__(self, action: Callable[[], None], delay: float):
        self._action = action
        self._lock = threading.Lock()
        self._state = 'pending'  # pending | done | cancelled
        self._timer = threading.Timer(delay, self._fire)
        self._timer.daemon = True

    def start(self):
        self._timer.start()

    def _claim(self) -> bool:
        with self._lock:
            if self._state != 'pending':
                return False
            self._state = 'done'
            return True

    def _fire(self):
        if self._claim():
            self._action()

    def run_now(self) -> bool:
        """Run the save immediately if it is still pending."""
        if not self._claim():
            return False
        self._timer.cancel()
        self._action()
        return True

    def cancel(self) -> bool:
        """Cancel the save. Returns False if it already ran or was cancelled."""
        with self._lock:
            if self._state != 'pending':
                return False
            self._state = 'cancelled'
        self._timer.cancel()
        return True

    @property
    def pending(self) -> bool:
        return self._state == 'pending'

    @property
    def cancelled(self) -> bool:
        return self._state == 'cancelled'


class AutoSaveScheduler:
    """
    Debounced save owned by one editor.

    Scheduling again replaces (cancels) the previous pending save.
    """

    def __init__(self, action: Callable[[], Any], delay: float = 1.0):
        self.action = action
        self.delay = delay
        self._lock = threading.Lock()
        self._handle: Optional[AutoSaveHandle] = None

    def schedule(self) -> AutoSaveHandle:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            handle = AutoSaveHandle(self._run, self.delay)
            self._handle = handle
        handle.start()
        return handle

    def cancel(self) -> bool:
        with self._lock:
            handle = self._handle
        return handle.cancel() if handle is not None else False

    def flush(self) -> bool:
        """Run a pending save now. Returns True if one was pending."""
        with self._lock:
            handle = self._handle
        return handle.run_now() if handle is not None else False

    @property
    def pending(self) -> bool:
        return self._handle is not None and self._handle.pending

    def _run(self):
        try:
            self.action()
        except Exception:
            logger.exception("Failed to auto-save pricing config")


class PricingEditor:
    """
    Editing session over the stored pricing configuration.

    Every edit replaces `pricing` with a new object and schedules an
    auto-save. Tier defects are reported but never block a save.
    """

    def __init__(self, store: PricingConfigStore, autosave_delay: float = 1.0):
        self.store = store
        self._lock = threading.RLock()
        self.pricing = store.load()
        self.last_saved: Optional[PricingConfig] = self.pricing
        self.last_saved_at: Optional[datetime] = None
        self.autosave = AutoSaveScheduler(self.save, autosave_delay)

    def _apply(self, pricing: PricingConfig) -> PricingConfig:
        with self._lock:
            self.pricing = pricing
        self.autosave.schedule()
        return pricing

    # Persistence

    def save(self) -> PricingConfig:
        """
        Persist the whole working configuration.

        Raises ConfigSchemaError and leaves the stored file untouched when
        the working copy would not load back (e.g. a section without tiers).
        """
        with self._lock:
            saved = self.store.save_payload(self.pricing.to_dict())
            self.last_saved = saved
            self.last_saved_at = datetime.now()
        return saved

    def save_section(self, target: str) -> PricingConfig:
        """Persist only one priced section on top of the last saved configuration."""
        with self._lock:
            base = self.last_saved or self.pricing
            merged = base.with_section(target, self.pricing.section(target))
            saved = self.store.save_payload(merged.to_dict())
            self.last_saved = saved
            self.last_saved_at = datetime.now()
        return saved

    def reset(self) -> PricingConfig:
        """Replace the working copy with the bundled default (not saved)."""
        with self._lock:
            self.pricing = self.store.load_default()
        return self.pricing

    def tier_defects(self, locale: str = "en") -> dict[str, list[str]]:
        return validate_pricing_tiers(self.pricing, locale)

    # Priced sections

    def update_section(self, target: str, **patch) -> PricingConfig:
        unknown = set(patch) - SECTION_FIELDS
        if unknown:
            raise ValueError(f"Unknown section fields: {sorted(unknown)}")
        with self._lock:
            section = replace(self.pricing.section(target), **patch)
            return self._apply(self.pricing.with_section(target, section))

    def update_tier(self, target: str, index: int, **patch) -> PricingConfig:
        unknown = set(patch) - TIER_FIELDS
        if unknown:
            raise ValueError(f"Unknown tier fields: {sorted(unknown)}")
        with self._lock:
            section = self.pricing.section(target)
            if not 0 <= index < len(section.tiers):
                raise IndexError(f"No tier {index} in {target}")
            tiers = [
                replace(tier, **patch) if i == index else tier
                for i, tier in enumerate(section.tiers)
            ]
            return self._apply(self.pricing.with_section(target, replace(section, tiers=tiers)))

    def add_tier(self, target: str) -> PricingConfig:
        """Append an open-ended tier starting right after the last one."""
        with self._lock:
            section = self.pricing.section(target)
            last = section.tiers[-1] if section.tiers else None
            if last is None:
                next_min = 1
            else:
                next_min = (last.max_people if last.max_people is not None else last.min_people) + 1
            tier = Tier(min_people=next_min, max_people=None, price=last.price if last else 0.0)
            tiers = [*section.tiers, tier]
            return self._apply(self.pricing.with_section(target, replace(section, tiers=tiers)))

    def remove_tier(self, target: str, index: int) -> PricingConfig:
        with self._lock:
            section = self.pricing.section(target)
            tiers = [tier for i, tier in enumerate(section.tiers) if i != index]
            return self._apply(self.pricing.with_section(target, replace(section, tiers=tiers)))

    # Extras

    def add_extra(self) -> ExtraService:
        """Append a placeholder extra with a timestamp id."""
        with self._lock:
            existing = {e.id for e in self.pricing.extras}
            stamp = int(time.time() * 1000)
            while f"extra-{stamp}" in existing:
                stamp += 1
            extra = ExtraService(
                id=f"extra-{stamp}",
                title_en="New service",
                title_de="Neue Leistung",
                price=0.0,
                pricing_model="per_group",
                multiplier="per_trip",
            )
            self._apply(replace(self.pricing, extras=[*self.pricing.extras, extra]))
        return extra

    def update_extra(self, extra_id: str, **patch) -> PricingConfig:
        unknown = set(patch) - EXTRA_FIELDS
        if unknown:
            raise ValueError(f"Unknown extra fields: {sorted(unknown)}")
        with self._lock:
            if self.pricing.find_extra(extra_id) is None:
                raise ValueError(f"Extra with ID '{extra_id}' not found")
            extras = [
                replace(extra, **patch) if extra.id == extra_id else extra
                for extra in self.pricing.extras
            ]
            return self._apply(replace(self.pricing, extras=extras))

    def remove_extra(self, extra_id: str) -> PricingConfig:
        with self._lock:
            extras = [e for e in self.pricing.extras if e.id != extra_id]
            if len(extras) == len(self.pricing.extras):
                raise ValueError(f"Extra with ID '{extra_id}' not found")
            return self._apply(replace(self.pricing, extras=extras))
