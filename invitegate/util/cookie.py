"""Signed invite-code cookie codec.

The staged invite code travels between the redeem call and the signup call
in a client-held cookie. The value is signed so a client cannot swap in a
code it never redeemed; expiry is carried by the cookie attributes and the
invite itself is re-validated when consumed.
"""

from itsdangerous import BadSignature, URLSafeSerializer

_SALT = "invite-code"


class InviteCookieCodec:
    """Sign and verify invite-code cookie values."""

    def __init__(self, secret: str) -> None:
        self._serializer = URLSafeSerializer(secret, salt=_SALT)

    def dumps(self, code: str) -> str:
        """Return the signed cookie value for ``code``."""
        return self._serializer.dumps(code)

    def loads(self, value: str | None) -> str | None:
        """Return the code inside a signed value, or None if absent or tampered."""
        if not value:
            return None
        try:
            code = self._serializer.loads(value)
        except BadSignature:
            return None
        return code if isinstance(code, str) and code else None
