"""OAuth2 security scheme advertised from identity configuration."""

import logging

from api_doc_pipeline.config import Configuration
from api_doc_pipeline.document.base import Document, SecurityScheme

logger = logging.getLogger(__name__)

IDENTITY_SECTION = "Identity"
SCHEME_ID = "oauth2"


def synthesize_security_scheme(identity: Configuration | None) -> SecurityScheme | None:
    """Build the implicit-flow scheme, or None when identity is not configured.

    Raises ConfigurationMissing if the section exists without ``Url`` or
    without a non-empty ``Scopes`` map.
    """
    if identity is None:
        return None

    url = identity.required_value("", "Url").rstrip("/")
    scopes = identity.children("Scopes")
    logger.debug("Synthesized %s scheme for %s with %d scopes", SCHEME_ID, url, len(scopes))
    return SecurityScheme(
        authorization_url=f"{url}/connect/authorize",
        token_url=f"{url}/connect/token",
        scopes=scopes,
    )


def register_security_scheme(document: Document, scheme: SecurityScheme | None) -> Document:
    """Store ``scheme`` under ``oauth2``, replacing any earlier entry."""
    if scheme is None:
        return document
    schemes = {**document.components.security_schemes, SCHEME_ID: scheme}
    components = document.components.model_copy(update={"security_schemes": schemes})
    return document.model_copy(update={"components": components})
