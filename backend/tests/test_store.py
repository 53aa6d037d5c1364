"""Tests for the SQL configuration store and database config."""

import pytest

from tenantscope.errors import BaselineError, ConfigurationError
from tenantscope.store import ConfigurationStore
from tenantscope.store.config import DatabaseConfig, create_store
from tenantscope.store.sql import SqlConfigurationStore


class TestHierarchy:
    def test_valid_chain(self, store):
        hierarchy = store.get_hierarchy("t1", "c1", "b1")
        assert hierarchy.valid
        assert (hierarchy.tenant_name, hierarchy.company_name, hierarchy.branch_name) == (
            "Acme Health",
            "Acme Dubai",
            "Jumeirah",
        )
        assert hierarchy.company_type == "CLINIC"
        assert hierarchy.clinic_type is None

    def test_business_types_come_from_company(self, store):
        hierarchy = store.get_hierarchy("t2", "c3", "b3")
        assert (hierarchy.company_type, hierarchy.clinic_type) == ("CLINIC", "AUDIOLOGY")

    @pytest.mark.parametrize("tenant_id, company_id, branch_id, reason", [
        ("nope", "c1", "b1", "Tenant 'nope' not found"),
        ("t1", "c3", "b3", "Company 'c3' not found for tenant 't1'"),
        ("t1", "c1", "b2", "Branch 'b2' not found for company 'c1'"),
        ("t1", "c1", "nope", "Branch 'nope' not found for company 'c1'"),
    ])
    def test_broken_chain(self, store, tenant_id, company_id, branch_id, reason):
        hierarchy = store.get_hierarchy(tenant_id, company_id, branch_id)
        assert not hierarchy.valid
        assert hierarchy.reason == reason

    def test_inactive_company(self, store):
        store.upsert_company("c2", "t1", "Acme Abu Dhabi", is_active=False)
        assert not store.get_hierarchy("t1", "c2", "b2").valid

    def test_upsert_replaces(self, store):
        store.upsert_tenant("t1", "Acme Medical")
        store.upsert_company("c1", "t1", "Acme Trading", company_type="TRADING")
        hierarchy = store.get_hierarchy("t1", "c1", "b1")
        assert (hierarchy.tenant_name, hierarchy.company_name) == ("Acme Medical", "Acme Trading")
        assert hierarchy.company_type == "TRADING"
        assert store.get_hierarchy("t1", "c2", "b2").company_type == "CLINIC"


class TestOverrides:
    def test_silent_level_is_none(self, store):
        assert store.get_tenant_overrides("t1") is None
        assert store.get_company_overrides("c1") is None

    def test_put_and_read(self, store):
        store.put_override("tenant", "t1", "settings", {"currency": "USD"})
        store.put_override("tenant", "t1", "features", '{"LabModule": false}')
        overrides = store.get_tenant_overrides("t1")
        assert overrides.label == "tenant t1"
        assert overrides.section("settings") == {"currency": "USD"}
        assert overrides.section("features") == {"LabModule": False}
        assert overrides.section("navigation") is None

    def test_levels_are_separate(self, store):
        store.put_override("company", "c1", "settings", {"currency": "USD"})
        assert store.get_tenant_overrides("t1") is None
        assert store.get_company_overrides("c2") is None
        assert store.get_company_overrides("c1").section("settings") == {"currency": "USD"}

    def test_put_replaces_section(self, store):
        store.put_override("company", "c1", "settings", {"currency": "USD"})
        store.put_override("company", "c1", "settings", {"currency": "EUR"})
        assert store.get_company_overrides("c1").section("settings") == {"currency": "EUR"}

    def test_malformed_body_raises_on_access_only(self, store):
        store.put_override("tenant", "t1", "settings", "{not json")
        store.put_override("tenant", "t1", "branding", {"primaryColor": "#000000"})
        overrides = store.get_tenant_overrides("t1")
        assert overrides.section("branding") == {"primaryColor": "#000000"}
        with pytest.raises(ConfigurationError, match="tenant t1.settings: invalid JSON"):
            overrides.section("settings")

    def test_unknown_owner_or_section(self, store):
        with pytest.raises(ValueError, match="Unknown owner type"):
            store.put_override("branch", "b1", "settings", {})
        with pytest.raises(ValueError, match="Unknown section"):
            store.put_override("tenant", "t1", "colours", {})

    def test_delete(self, store):
        store.put_override("tenant", "t1", "settings", {"currency": "USD"})
        assert store.delete_override("tenant", "t1", "settings") is True
        assert store.delete_override("tenant", "t1", "settings") is False
        assert store.get_tenant_overrides("t1") is None


class TestPlatformDefaults:
    def test_returns_baseline(self, store, platform):
        assert store.get_platform_defaults() is platform

    def test_without_baseline(self, tmp_path):
        db = SqlConfigurationStore(f"sqlite:///{tmp_path / 'bare.db'}")
        try:
            with pytest.raises(BaselineError):
                db.get_platform_defaults()
        finally:
            db.dispose()

    def test_satisfies_protocol(self, store):
        assert isinstance(store, ConfigurationStore)


class TestDatabaseConfig:
    def test_default_sqlite_path(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("TENANTSCOPE_DB_PATH", raising=False)
        config = DatabaseConfig.from_env(tmp_path)
        assert config.is_sqlite
        assert config.sqlite_path == tmp_path / "data" / "tenantscope.db"

    def test_db_path_env(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("TENANTSCOPE_DB_PATH", str(tmp_path / "custom.db"))
        config = DatabaseConfig.from_env(tmp_path)
        assert config.sqlite_path == tmp_path / "custom.db"

    def test_postgres_url(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://user:pw@db/tenants")
        config = DatabaseConfig.from_env(tmp_path)
        assert config.is_postgresql
        assert config.sqlalchemy_url == "postgresql+psycopg://user:pw@db/tenants"

    def test_create_store_makes_directory(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("TENANTSCOPE_DB_PATH", str(tmp_path / "nested" / "dir" / "t.db"))
        db = create_store(DatabaseConfig.from_env(tmp_path))
        try:
            assert (tmp_path / "nested" / "dir").is_dir()
        finally:
            db.dispose()

    def test_unsupported_scheme(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "mysql://localhost/db")
        with pytest.raises(ValueError):
            create_store(DatabaseConfig.from_env(tmp_path))
