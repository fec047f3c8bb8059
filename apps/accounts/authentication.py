from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from .services import AuthenticationError, get_identity_gate


class IdentityGateAuthentication(BaseAuthentication):
    """
    Bearer authentication backed by the configured identity gate.

    Clients send ``Authorization: Bearer <provider token>``. On first
    contact the account is provisioned with a fresh anti-forgery token.
    """

    keyword = 'Bearer'

    def authenticate(self, request):
        auth = get_authorization_header(request).split()

        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None

        if len(auth) != 2:
            raise exceptions.AuthenticationFailed('Invalid Authorization header.')

        try:
            credential = auth[1].decode()
        except UnicodeError:
            raise exceptions.AuthenticationFailed('Invalid Authorization header.')

        try:
            user = get_identity_gate().resolve_user(credential)
        except AuthenticationError as e:
            raise exceptions.AuthenticationFailed(str(e))

        return (user, credential)

    def authenticate_header(self, request):
        return self.keyword
