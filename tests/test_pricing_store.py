import json
import logging
import time
from dataclasses import replace

import pytest

from trip_quote.config.schema import ConfigSchemaError
from trip_quote.engine import Tier
from trip_quote.services.pricing_store import AutoSaveScheduler, PricingConfigStore, PricingEditor


def wait_for(condition, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return condition()


@pytest.fixture
def editor(store):
    # Long delay: saves only happen when a test flushes
    editor = PricingEditor(store, autosave_delay=60)
    yield editor
    editor.autosave.cancel()


# Store

def test_missing_file_loads_default(store):
    pricing = store.load()
    assert not store.path.exists()
    assert pricing.coverage_max_people == 30
    assert [e.id for e in pricing.extras] == ["airport-transfer", "museum-pass", "private-driver"]


def test_save_then_load(store, pricing):
    store.save(pricing)
    assert store.load() == pricing


def test_save_writes_pretty_unescaped_json(store, pricing):
    pricing.extras[0] = replace(pricing.extras[0], title_de="Führung")
    store.save(pricing)

    text = store.path.read_text(encoding='utf-8')
    assert '"titleDe": "Führung"' in text
    assert text.startswith('{\n  "hotel"')


def test_save_creates_data_dir(tmp_path, pricing):
    nested = PricingConfigStore(tmp_path / "a" / "b" / "pricingConfig.json", tmp_path / "unused.json")
    nested.save(pricing)
    assert nested.path.exists()


def test_invalid_structure_falls_back_to_default(store, caplog):
    store.path.write_text(json.dumps({"hotel": {}}), encoding='utf-8')

    with caplog.at_level(logging.ERROR):
        pricing = store.load()

    assert pricing == store.load_default()
    assert "Invalid pricing config structure" in caplog.text


def test_malformed_json_raises(store):
    store.path.write_text("{not json", encoding='utf-8')
    with pytest.raises(json.JSONDecodeError):
        store.load()


def test_save_payload_rejects_invalid_documents(store):
    with pytest.raises(ConfigSchemaError) as exc_info:
        store.save_payload({"coverageMaxPeople": 10})

    assert not exc_info.value.report.ok
    assert "hotel" in [d.path for d in exc_info.value.report.defects]
    assert not store.path.exists()


def test_save_payload_accepts_ladder_defects(store, pricing):
    """Tier defects are advisory and never block a save."""
    payload = pricing.to_dict()
    payload["dinner"]["tiers"] = [{"minPeople": 4, "maxPeople": 2, "price": 10}]

    saved = store.save_payload(payload)
    assert saved.dinner.tiers == [Tier(4, 2, 10.0)]
    assert store.load().dinner.tiers == [Tier(4, 2, 10.0)]


# Auto-save scheduling

def test_rapid_schedules_collapse_into_one_save():
    calls = []
    scheduler = AutoSaveScheduler(lambda: calls.append(1), delay=0.05)

    for _ in range(3):
        scheduler.schedule()

    assert wait_for(lambda: calls)
    time.sleep(0.15)
    assert calls == [1]
    assert not scheduler.pending


def test_rescheduling_cancels_previous_handle():
    scheduler = AutoSaveScheduler(lambda: None, delay=60)
    first = scheduler.schedule()
    second = scheduler.schedule()

    assert first.cancelled
    assert second.pending
    assert scheduler.cancel()
    assert second.cancelled


def test_cancelled_save_never_runs():
    calls = []
    scheduler = AutoSaveScheduler(lambda: calls.append(1), delay=0.05)
    scheduler.schedule()

    assert scheduler.cancel()
    time.sleep(0.2)
    assert calls == []
    assert not scheduler.cancel()


def test_flush_runs_pending_save_once():
    calls = []
    scheduler = AutoSaveScheduler(lambda: calls.append(1), delay=60)
    scheduler.schedule()

    assert scheduler.flush()
    assert not scheduler.flush()
    assert calls == [1]


def test_nothing_to_flush_or_cancel():
    scheduler = AutoSaveScheduler(lambda: None)
    assert not scheduler.flush()
    assert not scheduler.cancel()
    assert not scheduler.pending


def test_failed_auto_save_is_logged(caplog):
    def broken():
        raise OSError("disk full")

    scheduler = AutoSaveScheduler(broken, delay=60)
    scheduler.schedule()

    with caplog.at_level(logging.ERROR):
        assert scheduler.flush()

    assert "Failed to auto-save pricing config" in caplog.text


# Editor

def test_editor_starts_from_stored_config(editor, store):
    assert editor.pricing == store.load_default()
    assert editor.last_saved is editor.pricing
    assert editor.last_saved_at is None
    assert not editor.autosave.pending


def test_edit_replaces_working_copy_and_schedules_save(editor, store):
    before = editor.pricing
    editor.update_tier("hotel.budget", 0, price=65)

    assert editor.pricing.hotel["budget"].tiers[0].price == 65
    assert before.hotel["budget"].tiers[0].price == 60
    assert editor.last_saved.hotel["budget"].tiers[0].price == 60
    assert editor.autosave.pending
    assert not store.path.exists()

    assert editor.autosave.flush()
    assert store.load() == editor.pricing
    assert editor.last_saved_at is not None


def test_auto_save_fires_after_delay(store):
    editor = PricingEditor(store, autosave_delay=0.05)
    editor.update_section("flight", pricing_model="per_group")

    assert wait_for(lambda: store.path.exists())
    assert wait_for(lambda: editor.last_saved_at is not None)
    assert store.load().flight.pricing_model == "per_group"


def test_update_tier_checks_index_and_fields(editor):
    with pytest.raises(IndexError):
        editor.update_tier("dinner", 5, price=1)
    with pytest.raises(ValueError):
        editor.update_tier("dinner", 0, colour="red")
    with pytest.raises(KeyError):
        editor.update_tier("breakfast", 0, price=1)


def test_add_tier_continues_after_last_tier(editor):
    editor.add_tier("hotel.budget")
    assert editor.pricing.hotel["budget"].tiers[-1] == Tier(17, None, 45.0)

    editor.update_tier("dinner", 1, max_people=20)
    editor.add_tier("dinner")
    assert editor.pricing.dinner.tiers[-1] == Tier(21, None, 30.0)


def test_add_tier_to_empty_ladder(editor):
    editor.update_section("guide", tiers=[])
    editor.add_tier("guide")
    assert editor.pricing.guide.tiers == [Tier(1, None, 0.0)]


def test_remove_tier_surfaces_defects(editor):
    editor.remove_tier("dinner", 0)

    assert editor.pricing.dinner.tiers == [Tier(11, None, 30.0)]
    assert editor.tier_defects() == {"dinner": ["Ranges must start from 1"]}
    assert editor.tier_defects("de") == {"dinner": ["Bereiche müssen bei 1 beginnen"]}


def test_update_section_rejects_unknown_fields(editor):
    with pytest.raises(ValueError):
        editor.update_section("guide", price=10)


def test_save_section_keeps_other_sections_as_last_saved(editor, store):
    editor.update_tier("dinner", 0, price=99)
    editor.update_tier("guide", 0, price=199)
    editor.autosave.cancel()

    editor.save_section("guide")
    stored = store.load()

    assert stored.guide.tiers[0].price == 199
    assert stored.dinner.tiers[0].price == 35
    assert editor.pricing.dinner.tiers[0].price == 99


def test_reset_restores_default_without_saving(editor, store):
    editor.update_tier("flight", 0, price=1)
    editor.autosave.cancel()

    editor.reset()
    assert editor.pricing == store.load_default()
    assert not store.path.exists()
    assert not editor.autosave.pending


def test_add_extra_uses_unique_placeholder_ids(editor):
    first = editor.add_extra()
    second = editor.add_extra()

    assert first.id.startswith("extra-")
    assert first.id != second.id
    assert first.title_en == "New service"
    assert first.title_de == "Neue Leistung"
    assert (first.pricing_model, first.multiplier, first.price) == ("per_group", "per_trip", 0.0)
    assert [e.id for e in editor.pricing.extras][-2:] == [first.id, second.id]


def test_update_and_remove_extra(editor):
    editor.update_extra("museum-pass", price=30, title_en="City museum pass")
    museum = editor.pricing.find_extra("museum-pass")
    assert (museum.price, museum.title_en) == (30, "City museum pass")

    editor.remove_extra("museum-pass")
    assert editor.pricing.find_extra("museum-pass") is None


def test_unknown_extra_edits_raise(editor):
    with pytest.raises(ValueError):
        editor.update_extra("nope", price=1)
    with pytest.raises(ValueError):
        editor.update_extra("museum-pass", id="other")
    with pytest.raises(ValueError):
        editor.remove_extra("nope")


def test_auto_save_of_unloadable_config_keeps_stored_file(editor, store, caplog):
    """A section emptied of tiers would fail the load check, so it is never written."""
    editor.update_tier("hotel.budget", 0, price=999.0)
    assert editor.autosave.flush()

    editor.remove_tier("dinner", 0)
    editor.remove_tier("dinner", 0)
    with caplog.at_level(logging.ERROR):
        assert editor.autosave.flush()

    assert "Failed to auto-save pricing config" in caplog.text
    stored = store.load()
    assert stored.hotel["budget"].tiers[0].price == 999.0
    assert len(stored.dinner.tiers) == 2
    assert editor.last_saved.dinner.tiers == stored.dinner.tiers


@pytest.mark.parametrize("patch", [{"min_people": 0}, {"price": -5.0}])
def test_save_rejects_invalid_tier_values(editor, store, patch):
    editor.update_tier("guide", 0, **patch)
    editor.autosave.cancel()

    with pytest.raises(ConfigSchemaError):
        editor.save()
    with pytest.raises(ConfigSchemaError):
        editor.save_section("guide")
    assert not store.path.exists()
    assert editor.last_saved_at is None
