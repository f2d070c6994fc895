from api_doc_pipeline.document.base import Operation, Response, SecurityScheme
from api_doc_pipeline.transforms.authorization import annotate_authorization

SCHEME = SecurityScheme(
    authorization_url="http://identity/connect/authorize",
    token_url="http://identity/connect/token",
    scopes={"catalog": "Catalog API", "orders": "Orders API"},
)


def _operation(**kwargs) -> Operation:
    defaults = {"method": "POST", "path": "/items", "responses": {"201": Response(description="Created")}}
    defaults.update(kwargs)
    return Operation(**defaults)


class TestAnnotateAuthorization:
    def test_no_requirement_leaves_operation(self):
        op = _operation()
        assert annotate_authorization(op, False, SCHEME) is op

    def test_no_scheme_leaves_operation(self):
        op = _operation(security=[{"apiKey": []}])
        result = annotate_authorization(op, True, None)
        assert result is op
        assert "401" not in result.responses
        assert "403" not in result.responses

    def test_adds_responses_and_requirement(self):
        result = annotate_authorization(_operation(), True, SCHEME)
        assert result.responses["401"].description == "Unauthorized"
        assert result.responses["403"].description == "Forbidden"
        assert result.responses["201"].description == "Created"
        assert result.security == [{"oauth2": ["catalog", "orders"]}]

    def test_existing_descriptions_kept(self):
        op = _operation(responses={"401": Response(description="Sign in first")})
        result = annotate_authorization(op, True, SCHEME)
        assert result.responses["401"].description == "Sign in first"
        assert result.responses["403"].description == "Forbidden"

    def test_prior_requirement_replaced(self):
        op = _operation(security=[{"apiKey": []}, {"basic": []}])
        result = annotate_authorization(op, True, SCHEME)
        assert result.security == [{"oauth2": ["catalog", "orders"]}]

    def test_idempotent(self):
        once = annotate_authorization(_operation(), True, SCHEME)
        assert annotate_authorization(once, True, SCHEME) == once

    def test_input_not_mutated(self):
        op = _operation()
        annotate_authorization(op, True, SCHEME)
        assert set(op.responses) == {"201"}
        assert op.security == []
