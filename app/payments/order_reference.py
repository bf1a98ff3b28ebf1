"""
Merchant order reference value type.

The checkout flow encodes the order it sends to iPaymu as
"<prefix>-<user id>-<course id>-<instance id>" and iPaymu echoes it back
as merchantOrderId on the callback.

Usage:
    from payments.order_reference import OrderReference

    order = OrderReference.parse("abc-7-3-2")
    order.user_id      # 7
    order.course_id    # 3
    order.instance_id  # 2
"""

from __future__ import annotations

from dataclasses import dataclass

from payments.exceptions import MalformedReferenceError

SEPARATOR = "-"
FIELD_COUNT = 4


@dataclass(frozen=True)
class OrderReference:
    """A decoded merchant order id."""

    prefix: str
    user_id: int
    course_id: int
    instance_id: int

    @classmethod
    def parse(cls, raw: str) -> OrderReference:
        """
        Decode a merchant order id.

        Raises:
            MalformedReferenceError: Wrong number of fields, or an id that
                is not a positive integer
        """
        fields = raw.strip().split(SEPARATOR)
        if len(fields) != FIELD_COUNT:
            raise MalformedReferenceError(
                f"Expected {FIELD_COUNT} '{SEPARATOR}'-separated fields, got {len(fields)}",
                details={"merchant_order_id": raw},
            )

        # The prefix is opaque to the callback and may be empty
        prefix, *ids = fields
        user_id, course_id, instance_id = (
            _parse_id(value, name, raw)
            for value, name in zip(ids, ("user_id", "course_id", "instance_id"))
        )
        return cls(
            prefix=prefix,
            user_id=user_id,
            course_id=course_id,
            instance_id=instance_id,
        )

    def __str__(self) -> str:
        return SEPARATOR.join(
            [self.prefix, str(self.user_id), str(self.course_id), str(self.instance_id)]
        )


def _parse_id(value: str, name: str, raw: str) -> int:
    # isdigit() rejects signs, spaces and decimals that int() would accept
    if not value.isascii() or not value.isdigit() or int(value) <= 0:
        raise MalformedReferenceError(
            f"Order reference field {name} is not a positive integer",
            details={"merchant_order_id": raw, "field": name, "value": value},
        )
    return int(value)
