"""Actions: every mutation of the storefront, each returning an ActionResult."""

from storefront.application.actions.categories import CategoryActions
from storefront.application.actions.errors import UNKNOWN_ERROR_MESSAGE, get_error_message
from storefront.application.actions.orders import OrderActions
from storefront.application.actions.products import ProductActions
from storefront.application.actions.resource import (
    ActionResult,
    action,
    delete_multiple,
    delete_single,
    take_first,
)
from storefront.application.actions.settings import SettingActions
from storefront.application.actions.shipping import ShippingActions
from storefront.application.actions.uploads import UploadActions
from storefront.application.actions.users import UserActions

__all__ = [
    "UNKNOWN_ERROR_MESSAGE",
    "ActionResult",
    "CategoryActions",
    "OrderActions",
    "ProductActions",
    "SettingActions",
    "ShippingActions",
    "UploadActions",
    "UserActions",
    "action",
    "delete_multiple",
    "delete_single",
    "take_first",
]
