from app.pricing.money import floor_money
from app.pricing.types import DiscountType, OfferTerms, Promotion


def _amount(value) -> str:
    number = float(value)
    return str(floor_money(number)) if number.is_integer() else f"{number:g}"


def describe_terms(terms: OfferTerms) -> str:
    """Shopper-facing instruction for what to add to the cart."""
    if terms.discount_type == DiscountType.FREE_ITEM:
        if terms.cond_required_category and terms.action_target_size and not terms.action_buy_x:
            text = (
                f'Add any item from the "{terms.cond_required_category}" category '
                f"and a {terms.action_target_size}ml perfume"
            )
            if terms.action_target_max_price:
                text += f" (up to ₹{terms.action_target_max_price})"
            return text + " to your cart to get the perfume for free!"

        if terms.action_buy_x and terms.action_get_y:
            count_size = terms.cond_required_size or terms.action_target_size
            target_size = terms.action_target_size or count_size
            if count_size is not None and count_size != target_size:
                text = (
                    f"Buy {terms.action_buy_x} perfume(s) of {count_size}ml, and get "
                    f"{terms.action_get_y} perfume(s) of {target_size}ml for free"
                )
                if terms.action_target_max_price:
                    text += f" (up to ₹{terms.action_target_max_price} value)"
                return text + ". Add all items to your cart to apply."
            if count_size is not None:
                total = terms.action_buy_x + terms.action_get_y
                return (
                    f"Buy {terms.action_buy_x} {count_size}ml perfume(s), get "
                    f"{terms.action_get_y} free! Add all {total} items to your cart to apply."
                )

    if terms.discount_type == DiscountType.PERCENT:
        text = f"Get {_amount(terms.discount_value)}% off your order"
    elif terms.discount_type == DiscountType.FLAT:
        text = f"Get ₹{_amount(terms.discount_value)} off your order"
    else:
        return ""

    if terms.min_order_value > 0:
        text += f" when you spend ₹{terms.min_order_value} or more"
    return text + ". Applied automatically at checkout."


def describe_promotion(promotion: Promotion) -> str:
    return describe_terms(promotion.terms) or promotion.description or "Special offer available."
