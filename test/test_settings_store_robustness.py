from storage.settings_store import SettingsStore
from tasknotes_nlp.models import ExtractionConfig, StatusConfig


def test_settings_roundtrip(tmp_path):
    store = SettingsStore(path=str(tmp_path / "nested" / "settings.json"))
    config = ExtractionConfig(
        status_configs=[StatusConfig(value="backlog", label="Backlog")],
        default_to_scheduled=False,
    )
    store.save(config)
    loaded = store.load()
    assert loaded.status_configs[0].value == "backlog"
    assert loaded.default_to_scheduled is False
    assert '"statusConfigs"' in (tmp_path / "nested" / "settings.json").read_text()


def test_missing_file_gives_defaults(tmp_path):
    config = SettingsStore(path=str(tmp_path / "absent.json")).load()
    assert config == ExtractionConfig()


def test_settings_corrupted_file(tmp_path):
    p = tmp_path / "settings.json"
    p.write_text("{not valid json")
    config = SettingsStore(path=str(p)).load()
    assert isinstance(config, ExtractionConfig)
    assert config.status_configs == []


def test_settings_invalid_values(tmp_path):
    p = tmp_path / "settings.json"
    p.write_text('{"maxInputLength": -1}')
    assert SettingsStore(path=str(p)).load().max_input_length == 5000
