"""Security requirements for operations whose handlers require authorization."""

from api_doc_pipeline.document.base import Operation, Response, SecurityScheme
from api_doc_pipeline.transforms.security import SCHEME_ID

AUTHORIZATION_RESPONSES = (
    ("401", "Unauthorized"),
    ("403", "Forbidden"),
)


def annotate_authorization(
    operation: Operation, requires_authorization: bool, scheme: SecurityScheme | None
) -> Operation:
    """Add 401/403 responses and an oauth2 requirement with every configured scope.

    Existing 401/403 descriptions are kept. Without a scheme nothing is added.
    """
    if not requires_authorization or scheme is None:
        return operation

    responses = dict(operation.responses)
    for code, description in AUTHORIZATION_RESPONSES:
        responses.setdefault(code, Response(description=description))

    security = [{SCHEME_ID: list(scheme.scopes)}]
    return operation.model_copy(update={"responses": responses, "security": security})
