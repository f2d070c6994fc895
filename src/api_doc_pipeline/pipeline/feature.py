"""All-or-nothing switch for documentation generation."""

from enum import Enum

from api_doc_pipeline.config import Configuration

OPENAPI_SECTION = "OpenApi"


class DocumentationFeature(Enum):
    ENABLED = "enabled"
    DISABLED = "disabled"

    @classmethod
    def resolve(cls, configuration: Configuration) -> "DocumentationFeature":
        """Enabled iff the OpenApi section exists, whatever it contains."""
        if configuration.section_exists(OPENAPI_SECTION):
            return cls.ENABLED
        return cls.DISABLED
