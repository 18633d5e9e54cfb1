from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from ..auth import CurrentUser
from ..data.interface import DataAccess
from ..data.models import ProductCreate, ProductRecord
from ..errors import MutationFailure, ProductValidationError
from ..logging import get_logger

FORM_FIELDS = ("name", "price", "quantity", "sku", "low_stock_at")


def parse_product_form(form: Mapping[str, Any]) -> ProductCreate:
    """Validate raw form values into a `ProductCreate`.

    Raises:
        ProductValidationError: With one message per offending field.
    """
    data = {field: form.get(field) for field in FORM_FIELDS if form.get(field) is not None}
    try:
        return ProductCreate(**data)
    except ValidationError as e:
        field_errors = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "form"
            field_errors.setdefault(field, err["msg"])
        raise ProductValidationError(field_errors) from e


def create_product(da: DataAccess, user: CurrentUser, form: Mapping[str, Any]) -> ProductRecord:
    """Validate the form and store the product for `user`.

    Raises:
        ProductValidationError: If the form is invalid; nothing is written.
        MutationFailure: If the store rejected the write.
    """
    logger = get_logger(__name__)
    payload = parse_product_form(form)
    try:
        record = da.create_product(user.id, payload)
    except Exception as e:
        logger.error(f"Failed to create product for {user.id}: {e}")
        raise MutationFailure("Failed to create product") from e
    logger.info(f"Created product {record.id} ({record.name}) for {user.id}")
    return record


def delete_product(da: DataAccess, user: CurrentUser, form: Mapping[str, Any]) -> int:
    """Delete the product named by the form's `id`, if `user` owns it.

    Unknown or foreign ids delete nothing and are not an error.

    Raises:
        MutationFailure: If the store rejected the write.
    """
    logger = get_logger(__name__)
    product_id = str(form.get("id") or "")
    if not product_id:
        return 0
    try:
        deleted = da.delete_product(user.id, product_id)
    except Exception as e:
        logger.error(f"Failed to delete product {product_id} for {user.id}: {e}")
        raise MutationFailure("Failed to delete product", product_id=product_id) from e
    logger.info(f"Delete product {product_id} for {user.id}: {deleted} row(s) affected")
    return deleted
