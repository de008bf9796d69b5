from typing import List, Optional

from pydantic import BaseModel, Field

from .engineering_model import EngineeringModel
from .site_directory import SiteDirectory


class ModelSnapshot(BaseModel):
    """Serialized content of a data store: the site directory and its engineering models."""
    site_directory: SiteDirectory = Field(default_factory=SiteDirectory)
    engineering_models: List[EngineeringModel] = Field(default_factory=list)

    def model_by_short_name(self, short_name: Optional[str]) -> Optional[EngineeringModel]:
        if not short_name:
            return self.engineering_models[0] if self.engineering_models else None
        return next((m for m in self.engineering_models if m.short_name == short_name), None)
