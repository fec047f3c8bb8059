from rest_framework_simplejwt.tokens import AccessToken


def issue_identity_token(subject, email=''):
    """Mint a bearer token the way the identity provider would."""
    token = AccessToken()
    token['sub'] = subject
    if email:
        token['email'] = email
    return str(token)
