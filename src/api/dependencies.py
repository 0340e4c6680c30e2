import os

from extraction.natural_language_parser import NaturalLanguageParser
from storage.settings_store import SettingsStore
from tasknotes_nlp.models import ExtractionConfig

# Configuration
NLP_SETTINGS_PATH = os.getenv("NLP_SETTINGS_PATH", "data/nlp_settings.json")
NLP_DEFAULT_TO_SCHEDULED = os.getenv("NLP_DEFAULT_TO_SCHEDULED", "").strip().lower()
NLP_MAX_INPUT_LENGTH = os.getenv("NLP_MAX_INPUT_LENGTH", "").strip()

settings_store = SettingsStore(path=NLP_SETTINGS_PATH)


def apply_env_overrides(config: ExtractionConfig) -> ExtractionConfig:
    """Environment wins over the stored flag and cap when set."""
    update = {}
    if NLP_DEFAULT_TO_SCHEDULED:
        update["default_to_scheduled"] = NLP_DEFAULT_TO_SCHEDULED in {"1", "true", "yes"}
    if NLP_MAX_INPUT_LENGTH:
        update["max_input_length"] = int(NLP_MAX_INPUT_LENGTH)
    return config.model_copy(update=update)


parser = NaturalLanguageParser(apply_env_overrides(settings_store.load()))


def get_settings_store() -> SettingsStore:
    return settings_store


def get_parser() -> NaturalLanguageParser:
    return parser


def rebuild_parser(config: ExtractionConfig) -> NaturalLanguageParser:
    """Swap in a parser built from new settings, keeping the current date engine."""
    global parser
    parser = NaturalLanguageParser(apply_env_overrides(config), date_engine=parser.date_engine)
    return parser
