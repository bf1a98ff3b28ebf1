"""
Request normalisation for the iPaymu callback.

iPaymu may deliver the callback as query parameters, a form post or a
JSON body. CallbackRequestSerializer merges those sources into one
CallbackRequest before any business logic runs. Body values win over
query values; blank values never override a non-blank one.

Usage:
    serializer = CallbackRequestSerializer.from_request(request)
    callback = serializer.to_callback_request()
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rest_framework import serializers

from payments.exceptions import MissingParameterError

if TYPE_CHECKING:
    from rest_framework.request import Request


CALLBACK_FIELDS = ("merchantOrderId", "sid", "trx_id")


@dataclass(frozen=True)
class CallbackRequest:
    """
    A normalised iPaymu callback.

    Attributes:
        merchant_order_id: Encoded order reference (merchantOrderId)
        transaction_id: iPaymu transaction id (trx_id)
        reference: iPaymu session id (sid), None when absent
    """

    merchant_order_id: str
    transaction_id: str
    reference: str | None = None


def merge_callback_params(
    query_params: Mapping[str, Any],
    body: Any,
) -> dict[str, Any]:
    """
    Merge the recognised callback fields from query and body.

    Non-mapping bodies (e.g. a JSON list) are ignored.
    """
    merged: dict[str, Any] = {}
    sources = [query_params]
    if isinstance(body, Mapping):
        sources.append(body)

    for source in sources:
        for name in CALLBACK_FIELDS:
            value = source.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                continue
            merged[name] = value
    return merged


class CallbackRequestSerializer(serializers.Serializer):
    """
    Validates the merged callback parameters.

    Fields:
        merchantOrderId: Required, the encoded order reference
        trx_id: Required, the iPaymu transaction id
        sid: Optional session id used to find the payment record
    """

    merchantOrderId = serializers.CharField(
        required=False,
        allow_blank=True,
        trim_whitespace=True,
        help_text="Order reference: prefix-userId-courseId-instanceId",
    )
    trx_id = serializers.CharField(
        required=False,
        allow_blank=True,
        trim_whitespace=True,
        help_text="iPaymu transaction id",
    )
    sid = serializers.CharField(
        required=False,
        allow_blank=True,
        trim_whitespace=True,
        help_text="iPaymu session id of the checkout",
    )

    @classmethod
    def from_request(cls, request: Request) -> CallbackRequestSerializer:
        """Build a serializer over the merged query and body parameters."""
        return cls(data=merge_callback_params(request.query_params, request.data))

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        # Missing parameters are application errors, not field errors
        if not attrs.get("merchantOrderId"):
            raise MissingParameterError(
                "Missing merchantOrderId parameter",
                parameter="merchantOrderId",
            )
        if not attrs.get("trx_id"):
            raise MissingParameterError(
                "Missing transaction ID",
                parameter="trx_id",
            )
        return attrs

    def to_callback_request(self) -> CallbackRequest:
        """
        Validate and return the typed request.

        Raises:
            MissingParameterError: merchantOrderId or trx_id missing
            rest_framework.exceptions.ValidationError: A field has an
                unusable type (e.g. an object instead of a string)
        """
        self.is_valid(raise_exception=True)
        data = self.validated_data
        return CallbackRequest(
            merchant_order_id=data["merchantOrderId"],
            transaction_id=data["trx_id"],
            reference=data.get("sid") or None,
        )
