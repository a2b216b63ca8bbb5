"""Repository for offer letter delivery."""

from typing import Any, Dict, Optional, Tuple

from recruiter_pipeline.constants import SEND_OFFER_LETTER_PATH
from recruiter_pipeline.remote.client import ApiClient, parse_body
from recruiter_pipeline.repositories.base_repository import BaseRepository


class OfferRepository(BaseRepository):
    """Repository for sending offer letters.

    Offer letters go out as multipart uploads, so the bearer token is
    attached here rather than by the client's JSON refresh-and-retry path.
    """

    def __init__(self, api_client: ApiClient):
        super().__init__(api_client, "offers")

    def send_offer_letter(
        self,
        fields: Dict[str, str],
        offer_letter: Tuple[str, bytes, Optional[str]],
        access_token: Optional[str]
    ) -> Dict[str, Any]:
        """Upload an offer letter with the given token, without retrying.

        Args:
            fields: Form fields (applicant, org and job identifiers).
            offer_letter: (filename, content, content_type) of the attachment.
            access_token: Bearer token to send, if any.

        Returns:
            Response body from the backend.

        Raises:
            UnauthorizedError: If the token was rejected.
            ApiError: For any other non-success status.
            TransportError: If no response was received.
        """
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else {}
        filename, content, content_type = offer_letter
        response = self.api_client.send(
            "POST",
            SEND_OFFER_LETTER_PATH,
            headers=headers,
            data=fields,
            files={"offer_letter": (filename, content, content_type or "application/octet-stream")}
        )
        self.api_client.raise_for_status(response)
        return self.unwrap_record(parse_body(response))
