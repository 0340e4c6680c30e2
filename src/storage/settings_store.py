from __future__ import annotations

import json
import logging
from pathlib import Path

from tasknotes_nlp.models import ExtractionConfig

logger = logging.getLogger(__name__)


class SettingsStore:
    """JSON file holding the status/priority vocabularies and date defaults."""

    def __init__(self, path: str = "data/nlp_settings.json"):
        self.path = Path(path)

    def load(self) -> ExtractionConfig:
        try:
            if not self.path.exists():
                return ExtractionConfig()

            data = json.loads(self.path.read_text(encoding="utf-8"))
            return ExtractionConfig.model_validate(data)
        except Exception as e:
            logger.warning("Unreadable settings at %s, using defaults: %s", self.path, e)
            return ExtractionConfig()

    def save(self, config: ExtractionConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        data = config.model_dump(by_alias=True)

        self.path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
