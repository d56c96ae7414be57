"""ID and value generators (CUID, order numbers)."""

import secrets
import string

from cuid2 import cuid_wrapper

from storefront.shared.utils.datetime import utc_now

cuid_generator = cuid_wrapper()

_ORDER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_order_number() -> str:
    """Generate a human-readable order number, e.g. ORD-20240131-7KQ2ZD.

    Returns:
        Order number with the UTC date and a random 6-char suffix.
    """
    suffix = "".join(secrets.choice(_ORDER_SUFFIX_ALPHABET) for _ in range(6))
    return f"ORD-{utc_now():%Y%m%d}-{suffix}"
