from pathlib import Path

import pytest

from api_doc_pipeline.config import Configuration, ConfigurationMissing, load_configuration

FIXTURES = Path(__file__).parent / "fixtures"


def _config() -> Configuration:
    return Configuration({
        "OpenApi": {"Document": {"Title": "Catalog", "Description": ""}},
        "Identity": {"Url": "http://identity", "Scopes": {"catalog": "Catalog API", "orders": "Orders API"}},
        "Empty": None,
        "Features": {"Enabled": True, "Retries": 3, "List": [1, 2]},
    })


class TestRequiredValue:
    def test_returns_value(self):
        assert _config().required_value("OpenApi:Document", "Title") == "Catalog"

    def test_empty_string_is_a_value(self):
        assert _config().required_value("OpenApi:Document", "Description") == ""

    def test_missing_value_names_full_path(self):
        with pytest.raises(ConfigurationMissing) as exc_info:
            _config().required_value("OpenApi:Document", "Version")
        assert exc_info.value.path == "OpenApi:Document:Version"
        assert "OpenApi:Document:Version" in str(exc_info.value)

    def test_missing_section_names_full_path(self):
        with pytest.raises(ConfigurationMissing) as exc_info:
            Configuration({}).required_value("OpenApi:Document", "Title")
        assert exc_info.value.path == "OpenApi:Document:Title"

    def test_scalars_are_rendered(self):
        config = _config()
        assert config.required_value("Features", "Enabled") == "true"
        assert config.required_value("Features", "Retries") == "3"

    def test_non_scalar_is_missing(self):
        with pytest.raises(ConfigurationMissing):
            _config().required_value("Features", "List")

    def test_lookup_is_case_insensitive(self):
        config = Configuration({"openapi": {"document": {"title": "Catalog"}}})
        assert config.required_value("OpenApi:Document", "Title") == "Catalog"


class TestSections:
    def test_section_exists(self):
        config = _config()
        assert config.section_exists("Identity") is True
        assert config.section_exists("Identity:Scopes") is True
        assert config.section_exists("Missing") is False

    def test_present_but_empty_section_exists(self):
        assert _config().section_exists("Empty") is True

    def test_section_paths_are_prefixed(self):
        identity = _config().section("Identity")
        assert identity.path == "Identity"
        with pytest.raises(ConfigurationMissing) as exc_info:
            identity.required_value("", "Authority")
        assert exc_info.value.path == "Identity:Authority"

    def test_absent_section_is_none(self):
        assert _config().section("Missing") is None

    def test_empty_section_is_empty_configuration(self):
        section = _config().section("Empty")
        assert section is not None
        assert section.section_exists("Url") is False

    def test_scalar_is_not_a_section(self):
        with pytest.raises(ConfigurationMissing):
            _config().section("Identity:Url")


class TestChildren:
    def test_children_preserve_order(self):
        scopes = _config().children("Identity:Scopes")
        assert list(scopes) == ["catalog", "orders"]
        assert scopes["orders"] == "Orders API"

    def test_missing_children(self):
        with pytest.raises(ConfigurationMissing) as exc_info:
            _config().children("Identity:Claims")
        assert exc_info.value.path == "Identity:Claims"

    def test_scalar_children_are_missing(self):
        with pytest.raises(ConfigurationMissing):
            _config().children("Identity:Url")

    def test_empty_children_are_missing(self):
        with pytest.raises(ConfigurationMissing):
            Configuration({"Scopes": {}}).children("Scopes")


class TestLoadConfiguration:
    def test_load_fixture(self):
        config = load_configuration(FIXTURES / "appsettings.yaml")
        assert config.required_value("Identity", "Url") == "http://localhost:5223"

    def test_load_empty_file(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("")
        assert load_configuration(f).section_exists("OpenApi") is False

    def test_load_json(self, tmp_path):
        f = tmp_path / "appsettings.json"
        f.write_text('{"OpenApi": {"Document": {"Title": "T"}}}')
        assert load_configuration(f).required_value("OpenApi:Document", "Title") == "T"

    def test_load_non_mapping(self, tmp_path):
        f = tmp_path / "list.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationMissing):
            load_configuration(f)
