from __future__ import annotations

from app.application.use_cases.recommendations import recommend_addons, resolve_sqft
from app.domain.entities.booking_form import AddonSelection
from app.domain.entities.catalog import SqftTier


def test_essentials_recommends_video_and_rush():
    result = recommend_addons("essentials", SqftTier.lt2000, None, ())

    assert result == ("social-reel", "rush-delivery")


def test_signature_recommends_aerial_and_staging():
    result = recommend_addons("signature", SqftTier.lt2000, None, ())

    assert result == ("aerial-video", "premium-staging", "rush-delivery")


def test_large_property_adds_size_rules_and_truncates():
    result = recommend_addons("signature", SqftTier.lt2000, 4200, ())

    assert result == ("aerial-video", "premium-staging", "extra-staging")


def test_tier_default_sqft_used_without_explicit_size():
    assert resolve_sqft(SqftTier.lt2000) == 1800
    assert resolve_sqft(SqftTier.t2001_3500) == 3000
    assert resolve_sqft(SqftTier.t3501_5000) == 3000
    assert resolve_sqft(SqftTier.over6500) == 3000
    assert resolve_sqft(SqftTier.lt2000, 3100) == 3100


def test_tier_alone_never_triggers_large_property_rules():
    # Every tier default is at or below the 3,000 sq ft threshold
    for tier in SqftTier:
        assert recommend_addons("premier", tier, None, ()) == ("rush-delivery",)

    assert recommend_addons("premier", SqftTier.over6500, 7200, ()) == (
        "extra-staging",
        "exterior-drone",
        "rush-delivery",
    )


def test_selected_addons_are_excluded():
    selected = (AddonSelection("rush-delivery", 1), AddonSelection("aerial-video", 1))
    result = recommend_addons("signature", SqftTier.lt2000, None, selected)

    assert result == ("premium-staging",)
    assert not set(result) & {a.addon_id for a in selected}


def test_deduplicates_rush_delivery_for_essentials():
    result = recommend_addons("essentials", SqftTier.over6500, 5000, ())

    assert result.count("rush-delivery") == 1
    assert result == ("social-reel", "rush-delivery", "extra-staging")
    assert recommend_addons("essentials", SqftTier.over6500, None, ()) == ("social-reel", "rush-delivery")


def test_no_package_still_recommends_rush():
    assert recommend_addons("", SqftTier.lt2000, None, ()) == ("rush-delivery",)
