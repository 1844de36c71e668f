import random

import pytest

from balatro_rules.engine.upgrades import (
    UPGRADE_CATALOG,
    OwnedUpgrades,
    Upgrade,
    UpgradePool,
    UpgradeTarget,
    get_upgrade,
)


def test_upgrade_target_categories():
    assert get_upgrade("joker").target == UpgradeTarget.GLOBAL
    assert get_upgrade("greedy").target == UpgradeTarget.SUIT
    assert get_upgrade("scholar").target == UpgradeTarget.RANK
    assert get_upgrade("jolly").target == UpgradeTarget.HAND_TYPE


def test_upgrade_rejects_more_than_one_target():
    with pytest.raises(ValueError, match="at most one"):
        Upgrade("both", "Both", "", 1, target_suit="Hearts", target_rank="A")


def test_catalog_ids_are_unique():
    ids = [u.id for u in UPGRADE_CATALOG]
    assert len(ids) == len(set(ids))
    assert get_upgrade("missing") is None


def test_owned_upgrades_notify_listeners_in_order():
    owned = OwnedUpgrades()
    seen = []
    owned.subscribe(seen.append)
    owned.append(get_upgrade("joker"))
    owned.append(get_upgrade("sly"))
    assert seen == [get_upgrade("joker"), get_upgrade("sly")]
    assert owned.names() == ["Joker", "Sly Joker"]
    assert len(owned.by_target(UpgradeTarget.HAND_TYPE)) == 1


def test_unsubscribed_listener_is_not_called():
    owned = OwnedUpgrades()
    seen = []
    owned.subscribe(seen.append)
    owned.unsubscribe(seen.append)
    owned.append(get_upgrade("joker"))
    assert seen == []


def test_sample_returns_distinct_catalog_entries():
    pool = UpgradePool(rng=random.Random(5))
    for _ in range(20):
        choices = pool.sample(3)
        assert len(choices) == 3
        assert len({u.id for u in choices}) == 3
        assert all(u in UPGRADE_CATALOG for u in choices)


def test_sample_caps_at_catalog_size():
    catalog = UPGRADE_CATALOG[:2]
    pool = UpgradePool(catalog, rng=random.Random(1))
    assert sorted(u.id for u in pool.sample(5)) == sorted(u.id for u in catalog)
    assert pool.sample(0) == []
    assert UpgradePool([], rng=random.Random(1)).sample(3) == []


def test_effect_summary():
    assert get_upgrade("scholar").effect_summary == "+20 Chips +4 Mult"
    assert str(get_upgrade("joker")) == "Joker ($4)"
