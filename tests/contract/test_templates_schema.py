"""Contract test: template catalogs against templates.schema.json."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import jsonschema
import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class TestTemplatesSchemaCompliance:
    """Validate catalog documents against the template contract."""

    def test_valid_catalog_passes(self, templates_schema: dict, sample_catalog: dict) -> None:
        jsonschema.validate(instance=sample_catalog, schema=templates_schema)

    def test_shipped_sample_catalog_passes(self, templates_schema: dict) -> None:
        path = PROJECT_ROOT / "data" / "templates" / "sample_templates.json"
        jsonschema.validate(instance=json.loads(path.read_text()), schema=templates_schema)

    def test_missing_required_template_field_fails(
        self, templates_schema: dict, sample_catalog: dict,
    ) -> None:
        required = templates_schema["$defs"]["template"]["required"]
        for field in required:
            invalid = copy.deepcopy(sample_catalog)
            del invalid["templates"][0][field]
            with pytest.raises(jsonschema.ValidationError):
                jsonschema.validate(instance=invalid, schema=templates_schema)

    def test_negative_amount_fails(self, templates_schema: dict, sample_catalog: dict) -> None:
        invalid = copy.deepcopy(sample_catalog)
        invalid["templates"][0]["orders"][0]["amount"] = -5
        with pytest.raises(jsonschema.ValidationError):
            jsonschema.validate(instance=invalid, schema=templates_schema)

    def test_fractional_frequency_fails(
        self, templates_schema: dict, sample_catalog: dict,
    ) -> None:
        invalid = copy.deepcopy(sample_catalog)
        invalid["templates"][0]["orders"][0]["frequency"] = 1.5
        with pytest.raises(jsonschema.ValidationError):
            jsonschema.validate(instance=invalid, schema=templates_schema)

    def test_invalid_payment_hint_fails(
        self, templates_schema: dict, sample_catalog: dict,
    ) -> None:
        invalid = copy.deepcopy(sample_catalog)
        invalid["templates"][0]["orders"][0]["paymentMethod"] = "cheque"
        with pytest.raises(jsonschema.ValidationError):
            jsonschema.validate(instance=invalid, schema=templates_schema)

    def test_invalid_date_format_fails(
        self, templates_schema: dict, sample_catalog: dict,
    ) -> None:
        invalid = copy.deepcopy(sample_catalog)
        invalid["templates"][0]["date"] = "10/03/2026"
        with pytest.raises(jsonschema.ValidationError):
            jsonschema.validate(instance=invalid, schema=templates_schema)

    def test_both_policy_alias_passes(self, templates_schema: dict, sample_catalog: dict) -> None:
        assert sample_catalog["templates"][1]["paymentMethod"] == "both"
        jsonschema.validate(instance=sample_catalog, schema=templates_schema)
