from pydantic import BaseModel, Field
from typing import Optional
import yaml, pathlib

DEFAULT_TEMPLATE = "{file}-{browser}-{version}.xml"

class PluginConfig(BaseModel):
    output_dir: str = Field("build/test-results", description="Directory the XUnit documents are written to")
    filename_template: str = Field(DEFAULT_TEMPLATE, description="Fields: file, browser, version")
    strict: bool = Field(False, description="Raise on internal invariant violations instead of logging them")
    log_level: str = Field("INFO")

def load_config(path: Optional[str] = None) -> PluginConfig:
    if not path:
        return PluginConfig()
    data = yaml.safe_load(pathlib.Path(path).read_text()) or {}
    return PluginConfig.model_validate(data)
