from .json_io import load_template_events, save_template_events, load_text, save_json
from .config_loader import load_config, build_from_config

__all__ = ["load_template_events", "save_template_events", "load_text", "save_json", "load_config", "build_from_config"]
