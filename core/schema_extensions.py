"""
drf-spectacular extension describing the session-bound JWT authentication.
"""

from drf_spectacular.extensions import OpenApiAuthenticationExtension
from drf_spectacular.plumbing import build_bearer_security_scheme_object


class SessionJWTAuthenticationExtension(OpenApiAuthenticationExtension):
    """Document SessionJWTAuthentication as a bearer JWT scheme."""

    target_class = "accounts.infrastructure.authentication.SessionJWTAuthentication"
    name = "BearerAuth"

    def get_security_definition(self, auto_schema):
        return build_bearer_security_scheme_object(
            header_name="AUTHORIZATION",
            token_prefix="Bearer",
            bearer_format="JWT",
        )
