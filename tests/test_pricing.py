# =============================================================================
# tests/test_pricing.py - Pricing Plan Tests
# =============================================================================
# Tests for:
# - PricingPlan validation (contact plans, prices, stored keys)
# - Lenient parsing of the stored pricingPlans value
# - SettingsService pricing reads/writes (mocked SupabaseClient)
# - Public and admin pricing endpoints
# - The seed script
# =============================================================================

from __future__ import annotations

import importlib.util
from pathlib import Path
from unittest.mock import patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from pydantic import ValidationError

from app.auth import AuthUser, get_current_user
from app.exceptions import SettingsUpdateError
from app.main import app
from core.models.pricing import PricingPlan, PricingPlans, default_pricing_plans
from core.services.settings_service import PRICING_PLANS_KEY, SettingsService
from lib.supabase_client import SupabaseClientError

ADMIN = AuthUser(id=uuid4(), role="admin")
MEMBER = AuthUser(id=uuid4())

STORED_PLANS = {
    "monthly": [
        {
            "id": "starter_monthly",
            "name": "Starter",
            "price": 99000,
            "currency": "idr",
            "features": ["1 user account"],
            "usersIncluded": 1,
        },
    ],
    "annual": [
        {
            "id": "enterprise_annual",
            "name": "Enterprise",
            "contact": True,
            "contactUrl": "https://example.com/contact",
        },
    ],
}


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _load_seed_script():
    path = Path(__file__).resolve().parent.parent / "scripts" / "seed_plans.py"
    spec = importlib.util.spec_from_file_location("seed_plans", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


# =============================================================================
# Models
# =============================================================================

class TestPricingPlan:
    """Test PricingPlan validation."""

    def test_stored_keys(self):
        plan = PricingPlan.model_validate(STORED_PLANS["monthly"][0])

        assert plan.users_included == 1
        assert plan.currency == "IDR"
        assert plan.popular is False

    def test_defaults(self):
        plan = PricingPlan(id="free", name="Free")

        assert plan.price == 0
        assert plan.currency == "IDR"
        assert plan.features == []

    def test_contact_requires_url(self):
        with pytest.raises(ValidationError, match="contactUrl is required"):
            PricingPlan(id="ent", name="Enterprise", contact=True, contact_url="  ")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            PricingPlan(id="core", name="Core", price=-1)

    def test_blank_id_rejected(self):
        with pytest.raises(ValidationError):
            PricingPlan(id="   ", name="Core")

    def test_serializes_with_stored_keys(self):
        plan = PricingPlan(id="ent", name="Enterprise", contact=True, contact_url="https://x")

        dumped = plan.model_dump(by_alias=True, exclude_none=True)

        assert dumped["contactUrl"] == "https://x"
        assert "usersIncluded" not in dumped


class TestPricingPlansFromStored:
    """Test lenient parsing of the stored value."""

    def test_nothing_stored_gives_defaults(self):
        assert PricingPlans.from_stored(None) == default_pricing_plans()

    def test_stored_lists_used(self):
        plans = PricingPlans.from_stored(STORED_PLANS)

        assert [p.id for p in plans.monthly] == ["starter_monthly"]
        assert plans.annual[0].contact_url == "https://example.com/contact"

    def test_missing_period_gets_defaults(self):
        plans = PricingPlans.from_stored({"monthly": STORED_PLANS["monthly"]})

        assert [p.id for p in plans.monthly] == ["starter_monthly"]
        assert plans.annual == default_pricing_plans().annual

    def test_empty_list_is_kept(self):
        plans = PricingPlans.from_stored({"monthly": [], "annual": []})

        assert plans.monthly == []
        assert plans.annual == []

    def test_invalid_plans_skipped(self):
        plans = PricingPlans.from_stored({
            "monthly": [{"id": "", "name": "Broken"}, "junk", STORED_PLANS["monthly"][0]],
            "annual": [],
        })

        assert [p.id for p in plans.monthly] == ["starter_monthly"]

    def test_default_plans(self):
        plans = default_pricing_plans()

        assert [p.id for p in plans.monthly] == [
            "core_monthly", "growth_monthly", "enterprise_monthly",
        ]
        assert [p.price for p in plans.annual] == [2870400, 19190400, 0]
        assert all(p.contact_url for p in plans.monthly + plans.annual if p.contact)


# =============================================================================
# Service
# =============================================================================

class TestPricingService:
    """Test SettingsService pricing methods with mocked Supabase."""

    @patch("core.services.settings_service.SupabaseClient")
    def test_get_pricing_plans(self, mock_client):
        mock_client.fetch_settings.return_value = {PRICING_PLANS_KEY: STORED_PLANS}

        plans = SettingsService.get_pricing_plans()

        mock_client.fetch_settings.assert_called_once_with(["pricingPlans"])
        assert plans.monthly[0].name == "Starter"

    @patch("core.services.settings_service.SupabaseClient")
    def test_get_raises_on_read_failure(self, mock_client):
        mock_client.fetch_settings.side_effect = SupabaseClientError("connection refused")

        with pytest.raises(SupabaseClientError):
            SettingsService.get_pricing_plans()

    @patch("core.services.settings_service.SupabaseClient")
    def test_load_uses_defaults_on_read_failure(self, mock_client):
        mock_client.fetch_settings.side_effect = SupabaseClientError("connection refused")

        assert SettingsService.load_pricing_plans() == default_pricing_plans()

    @patch("core.services.settings_service.SupabaseClient")
    def test_update_writes_stored_keys(self, mock_client):
        mock_client.fetch_settings.return_value = {PRICING_PLANS_KEY: STORED_PLANS}
        plans = PricingPlans.model_validate(STORED_PLANS)

        SettingsService.update_pricing_plans(plans)

        [written] = mock_client.upsert_settings.call_args.args
        value = written["pricingPlans"]
        assert value["monthly"][0]["usersIncluded"] == 1
        assert value["annual"][0]["contactUrl"] == "https://example.com/contact"
        assert "description" not in value["annual"][0]

    @patch("core.services.settings_service.SupabaseClient")
    def test_update_failure_raises(self, mock_client):
        mock_client.upsert_settings.side_effect = SupabaseClientError("permission denied")

        with pytest.raises(SettingsUpdateError) as exc_info:
            SettingsService.update_pricing_plans(default_pricing_plans())

        assert exc_info.value.message.startswith("Failed to update pricing plans")


# =============================================================================
# API
# =============================================================================

class TestPricingEndpoints:
    """Test public and admin pricing endpoints."""

    @patch("core.services.settings_service.SupabaseClient")
    def test_public_plans(self, mock_client, client):
        mock_client.fetch_settings.return_value = {PRICING_PLANS_KEY: STORED_PLANS}

        response = client.get("/api/v1/pricing/plans")

        assert response.status_code == 200
        assert response.json()["monthly"][0]["usersIncluded"] == 1

    @patch("core.services.settings_service.SupabaseClient")
    def test_public_plans_when_store_down(self, mock_client, client):
        mock_client.fetch_settings.side_effect = SupabaseClientError("connection refused")

        body = client.get("/api/v1/pricing/plans").json()

        assert [p["id"] for p in body["monthly"]] == [
            "core_monthly", "growth_monthly", "enterprise_monthly",
        ]

    @patch("core.services.settings_service.SupabaseClient")
    def test_admin_get(self, mock_client, client):
        app.dependency_overrides[get_current_user] = lambda: ADMIN
        mock_client.fetch_settings.return_value = {}

        response = client.get("/api/v1/admin/settings/pricing-plans")

        assert response.status_code == 200
        assert len(response.json()["annual"]) == 3

    @patch("core.services.settings_service.SupabaseClient")
    def test_admin_put(self, mock_client, client):
        app.dependency_overrides[get_current_user] = lambda: ADMIN
        mock_client.fetch_settings.return_value = {PRICING_PLANS_KEY: STORED_PLANS}

        response = client.put("/api/v1/admin/settings/pricing-plans", json=STORED_PLANS)

        assert response.status_code == 200
        mock_client.upsert_settings.assert_called_once()
        assert response.json()["annual"][0]["contact"] is True

    @patch("core.services.settings_service.SupabaseClient")
    def test_admin_put_rejects_contact_without_url(self, mock_client, client):
        app.dependency_overrides[get_current_user] = lambda: ADMIN

        response = client.put("/api/v1/admin/settings/pricing-plans", json={
            "monthly": [{"id": "ent", "name": "Enterprise", "contact": True}],
            "annual": [],
        })

        assert response.status_code == 422
        mock_client.upsert_settings.assert_not_called()

    def test_member_cannot_update(self, client):
        app.dependency_overrides[get_current_user] = lambda: MEMBER

        response = client.put("/api/v1/admin/settings/pricing-plans", json=STORED_PLANS)

        assert response.status_code == 403


# =============================================================================
# Seed Script
# =============================================================================

class TestSeedScript:
    """Test scripts/seed_plans.py."""

    def test_seeds_default_plans(self, capsys):
        seed = _load_seed_script()

        with patch.object(seed.SettingsService, "update_pricing_plans") as update:
            update.return_value = default_pricing_plans()
            exit_code = seed.main()

        assert exit_code == 0
        update.assert_called_once_with(default_pricing_plans())
        assert "3 monthly, 3 annual" in capsys.readouterr().out

    def test_reports_write_failure(self, capsys):
        seed = _load_seed_script()

        with patch.object(
            seed.SettingsService,
            "update_pricing_plans",
            side_effect=SettingsUpdateError("permission denied", setting="pricing plans"),
        ):
            exit_code = seed.main()

        assert exit_code == 1
        assert "permission denied" in capsys.readouterr().out
