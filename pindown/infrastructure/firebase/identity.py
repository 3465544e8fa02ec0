"""Firebase ID token verification (google-auth, no firebase-admin).

verify_firebase_token fetches Google's public certs and checks signature,
audience (project id), issuer and expiry. It is blocking, so it runs in a
worker thread.
"""

from __future__ import annotations

import asyncio

from google.auth import exceptions as google_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from pindown.application.interfaces.services import IdentityVerificationError


class FirebaseIdentityVerifier:
    """Verifies Firebase Auth ID tokens (implements IIdentityVerifier)."""

    def __init__(self, project_id: str) -> None:
        self._project_id = project_id
        self._request = google_requests.Request()

    def _verify_sync(self, token: str) -> str:
        try:
            claims = id_token.verify_firebase_token(
                token, self._request, audience=self._project_id
            )
        except (ValueError, google_exceptions.GoogleAuthError) as e:
            raise IdentityVerificationError(str(e)) from e
        if not claims:
            raise IdentityVerificationError("Token has no claims")
        uid = claims.get("user_id") or claims.get("sub")
        if not uid:
            raise IdentityVerificationError("Token has no subject")
        return uid

    async def verify(self, token: str) -> str:
        """Return the uid of a valid token.

        Raises:
            IdentityVerificationError: If the token is malformed, expired, or
                not issued for this project.
        """
        return await asyncio.to_thread(self._verify_sync, token)
