"""Tests for the OpenAPI schema generator."""

import json

from scripts.generate_openapi import generate_openapi, main


class TestGenerateOpenapi:
    def test_contains_tax_paths(self):
        spec = generate_openapi()
        assert "/v1/tax/calculate" in spec["paths"]
        assert "/v1/tax/snapshots/lock" in spec["paths"]
        assert "/v1/tax/snapshots/{source_type}/{source_id}" in spec["paths"]

    def test_tax_tag_listed(self):
        spec = generate_openapi()
        assert spec["tags"][0]["name"] == "Tax"

    def test_lock_returns_201(self):
        spec = generate_openapi()
        assert "201" in spec["paths"]["/v1/tax/snapshots/lock"]["post"]["responses"]

    def test_writes_file(self, tmp_path):
        output = tmp_path / "openapi.json"
        main(["generate_openapi.py", str(output)])
        assert "/v1/tax/profile" in json.loads(output.read_text())["paths"]
