"""Tests for the precedence merges."""

import pytest

from tenantscope.context.merge import (
    merge_by_key,
    merge_features,
    merge_form_layout,
    merge_keyed,
    merge_list_layout,
    merge_navigation,
    merge_role_permissions,
    merge_settings,
    merge_ui_schema,
)
from tenantscope.errors import ConfigurationError


class TestMergeSettings:
    def test_per_key_not_whole_object(self):
        base = {"maxRows": 100, "autoRelease": False}
        assert merge_settings(base, {"maxRows": 50}) == {"maxRows": 50, "autoRelease": False}

    def test_none_keeps_base_value(self):
        assert merge_settings({"currency": "AED"}, {"currency": None}) == {"currency": "AED"}

    def test_inputs_not_mutated(self):
        base = {"nested": {"a": 1}}
        result = merge_settings(base, {"other": 2})
        result["nested"]["a"] = 99
        assert base == {"nested": {"a": 1}}

    def test_missing_sides(self):
        assert merge_settings(None, None) == {}
        assert merge_settings(None, {"a": 1}) == {"a": 1}


class TestMergeFeatures:
    def test_enabled_replaced_settings_merged(self):
        base = {"LabModule": {"enabled": True, "settings": {"maxRows": 100, "autoRelease": False}}}
        override = {"LabModule": {"settings": {"maxRows": 50}}}
        assert merge_features(base, override) == {
            "LabModule": {"enabled": True, "settings": {"maxRows": 50, "autoRelease": False}},
        }

    def test_bool_override_disables(self):
        base = {"LabModule": {"enabled": True, "settings": {"maxRows": 100}}}
        result = merge_features(base, {"LabModule": False})
        assert result["LabModule"] == {"enabled": False, "settings": {"maxRows": 100}}

    def test_unknown_feature_starts_disabled(self):
        result = merge_features({}, {"NewModule": {"settings": {"x": 1}}})
        assert result["NewModule"] == {"enabled": False, "settings": {"x": 1}}

    def test_list_form_override(self):
        result = merge_features({"LabModule": False}, ["LabModule"])
        assert result["LabModule"]["enabled"] is True

    def test_untouched_features_survive(self):
        result = merge_features({"A": True, "B": True}, {"A": False})
        assert result["B"] == {"enabled": True}


class TestMergeKeyed:
    def test_terminology_last_writer_wins(self):
        result = merge_keyed({"app.title": "Clinic", "nav.lab": "Lab"}, {"app.title": "Hearing"})
        assert result == {"app.title": "Hearing", "nav.lab": "Lab"}

    def test_rejects_non_mapping_override(self):
        with pytest.raises(ConfigurationError):
            merge_keyed({}, ["not", "a", "map"])

    def test_role_permissions_replace_per_role(self):
        base = {"Doctor": ["patients.view", "lab.order"], "Nurse": ["patients.view"]}
        result = merge_role_permissions(base, {"Nurse": ["patients.view", "vitals.record"]})
        assert result["Nurse"] == ["patients.view", "vitals.record"]
        assert result["Doctor"] == ["patients.view", "lab.order"]


class TestMergeByKey:
    def test_order_preserved_and_new_entries_appended(self):
        base = [{"id": "a", "label": "A"}, {"id": "b", "label": "B"}]
        result = merge_by_key(base, [{"id": "c"}, {"id": "a", "label": "Alpha"}], "id", "items")
        assert [item["id"] for item in result] == ["a", "b", "c"]
        assert result[0]["label"] == "Alpha"

    def test_missing_key_rejected(self):
        with pytest.raises(ConfigurationError, match="'id' is required"):
            merge_by_key([], [{"label": "x"}], "id", "items")


class TestMergeNavigation:
    BASE = [
        {"id": "dashboard", "route": "/"},
        {"id": "clinical", "children": [{"id": "lab", "route": "/lab"}]},
    ]

    def test_match_by_id_and_recurse(self):
        override = [{"id": "clinical", "children": [{"id": "lab", "label": "Laboratory"}]}]
        result = merge_navigation(self.BASE, override)
        lab = result[1]["children"][0]
        assert lab == {"id": "lab", "route": "/lab", "label": "Laboratory"}

    def test_parent_inserts_nested_node(self):
        override = [{"id": "audiology", "parent": "clinical", "route": "/audiology"}]
        result = merge_navigation(self.BASE, override)
        assert [c["id"] for c in result[1]["children"]] == ["lab", "audiology"]
        assert "parent" not in result[1]["children"][1]

    def test_parent_added_in_same_override(self):
        override = [
            {"id": "reports", "parent": "billing", "route": "/billing/reports"},
            {"id": "billing", "label": "Billing"},
        ]
        result = merge_navigation(self.BASE, override)
        assert [item["id"] for item in result][-1] == "billing"
        assert [c["id"] for c in result[-1]["children"]] == ["reports"]
        assert "parent" not in result[-1]["children"][0]

    def test_unknown_parent_rejected(self):
        with pytest.raises(ConfigurationError, match="unknown parent 'billing'"):
            merge_navigation(self.BASE, [{"id": "x", "parent": "billing"}])

    def test_hidden_flag_carried(self):
        result = merge_navigation(self.BASE, [{"id": "dashboard", "hidden": True}])
        assert result[0]["hidden"] is True

    def test_base_not_mutated(self):
        merge_navigation(self.BASE, [{"id": "audiology", "parent": "clinical"}])
        assert len(self.BASE[1]["children"]) == 1


class TestMergeEntities:
    def test_ui_schema_fields_by_name(self):
        base = {
            "fields": [
                {"name": "name", "validation": {"required": True, "maxLength": 100}},
                {"name": "gender", "type": "select", "options": [{"value": "M", "label": "Male"}]},
            ]
        }
        override = {
            "fields": [
                {"name": "name", "validation": {"maxLength": 60}},
                {"name": "nationalId"},
            ]
        }
        result = merge_ui_schema(base, override, "patient")
        assert result["fields"][0]["validation"] == {"required": True, "maxLength": 60}
        assert [f["name"] for f in result["fields"]] == ["name", "gender", "nationalId"]

    def test_explicit_none_clears_inherited_attribute(self):
        base = {"fields": [{"name": "provider", "type": "select", "options": [{"value": "a", "label": "A"}]}]}
        override = {"fields": [{"name": "provider", "options": None, "lookupEndpoint": "/api/providers"}]}
        field_def = merge_ui_schema(base, override, "patient")["fields"][0]
        assert "options" not in field_def
        assert field_def["lookupEndpoint"] == "/api/providers"

    def test_form_sections_by_id(self):
        base = {"sections": [{"id": "main", "fields": ["name"]}], "submitLabel": "Save"}
        override = {"sections": [{"id": "main", "fields": ["name", "gender"]}, {"id": "notes"}]}
        result = merge_form_layout(base, override, "patient")
        assert result["sections"][0]["fields"] == ["name", "gender"]
        assert result["sections"][1] == {"id": "notes"}
        assert result["submitLabel"] == "Save"

    def test_list_actions_by_group(self):
        base = {
            "columns": [{"field": "name"}],
            "actions": {"row": [{"id": "edit"}], "header": [{"id": "add"}]},
        }
        override = {"actions": {"row": [{"id": "archive"}]}, "defaultPageSize": 50}
        result = merge_list_layout(base, override, "patient")
        assert [a["id"] for a in result["actions"]["row"]] == ["edit", "archive"]
        assert result["actions"]["header"] == [{"id": "add"}]
        assert result["columns"] == [{"field": "name"}]
        assert result["defaultPageSize"] == 50

    def test_entity_merge_from_nothing(self):
        result = merge_ui_schema(None, {"fields": [{"name": "name"}]}, "visit")
        assert result == {"fields": [{"name": "name"}]}
