"""
Player Service

Issues and verifies anonymous player tokens. Each token carries a random
player id that namespaces that player's saved sessions.
"""

import datetime
import uuid
from typing import Any, Dict, Optional

import jwt


class PlayerService:
    """
    Anonymous player identity backed by signed JWTs.
    """

    def __init__(self, token_secret: str, expiration_days: int = 365):
        """
        Args:
            token_secret: Secret key for token signing
            expiration_days: Token lifetime
        """
        self.token_secret = token_secret
        self.expiration_days = expiration_days

    def issue_token(self) -> Dict[str, Any]:
        """
        Creates a new anonymous player and a token for it.

        Returns:
            Dictionary with success status, token and player info
        """
        player_id = str(uuid.uuid4())
        now = datetime.datetime.now(datetime.timezone.utc)
        token_payload = {
            "player_id": player_id,
            "iat": now,
            "exp": now + datetime.timedelta(days=self.expiration_days)
        }

        token = jwt.encode(token_payload, self.token_secret, algorithm="HS256")

        return {
            "success": True,
            "token": token,
            "player": {"id": player_id}
        }

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a player token.

        Args:
            token: JWT token string

        Returns:
            Dictionary with success status and player data or error
        """
        if not token:
            return {"success": False, "error": "Token is required"}

        try:
            payload = jwt.decode(token, self.token_secret, algorithms=["HS256"])
        except jwt.ExpiredSignatureError:
            return {"success": False, "error": "Token has expired"}
        except jwt.InvalidTokenError:
            return {"success": False, "error": "Invalid token"}

        player_id = payload.get("player_id")
        if not player_id:
            return {"success": False, "error": "Invalid token payload"}

        return {
            "success": True,
            "player": {"id": player_id}
        }


# Global service instance
_player_service = None


def get_player_service() -> Optional[PlayerService]:
    """Get the global player service instance."""
    return _player_service


def initialize_player_service(token_secret: str, expiration_days: int = 365) -> PlayerService:
    """Initialize the global player service instance."""
    global _player_service
    _player_service = PlayerService(token_secret, expiration_days)
    return _player_service
