from typing import Any, Optional
import json
import os
from pydantic import BaseModel, Field, PositiveFloat
from loguru import logger
from .events import ObserverEvent

# --- Settings Models ---
class LayoutSettings(BaseModel):
    column_spacing: PositiveFloat = 450.0  # Horizontal distance between rank columns
    node_height: PositiveFloat = 150.0
    node_gap: float = Field(default=50.0, ge=0)

class GeneralSettings(BaseModel):
    debug_mode: bool = False
    log_dir: Optional[str] = None

class AppConfig(BaseModel):
    general: GeneralSettings = Field(default_factory=GeneralSettings)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)

# --- Manager ---
class ConfigManager:
    """
    Manages layout and logging configuration with persistence and reactivity.
    """
    def __init__(self, filepath: str = "blueprint_graph.json"):
        self.filepath = filepath
        self._data = AppConfig()
        self.on_changed = ObserverEvent("ConfigChanged")
        self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if section not in AppConfig.model_fields:
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if key not in type(section_obj).model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        data = section_obj.model_dump()
        data[key] = value
        validated = type(section_obj).model_validate(data)
        setattr(self._data, section, validated)
        self._save()
        self.on_changed.emit(section, key, getattr(validated, key))

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = AppConfig.model_validate(raw)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if self.filepath.endswith('.toml'):
            # TOML files are hand-edited, never rewritten
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except OSError as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
