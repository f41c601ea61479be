"""Tests for field validators and rounding."""

import pytest

from bisbis.errors import MalformedIdentifier, MissingRequiredField, TypeOrConstraintViolation, UnrecognizedField
from bisbis.payload import Payload
from bisbis.services.normalizer import OrderItem
from bisbis.services.validators import (
    DISH_CLEANERS,
    RESTAURANT_CLEANERS,
    validate_dish_fields,
    validate_order_items,
    validate_rating,
    validate_restaurant_fields,
    validate_restaurant_id_field,
)
from bisbis.utils.rounding import round_to_dp


class TestRestaurantFields:
    def test_valid_payload_passes(self):
        validate_restaurant_fields(
            Payload({"name": "Taizu", "isKosher": False, "cuisines": ["Asian"]})
        )

    def test_only_present_fields_checked(self):
        validate_restaurant_fields(Payload({"isKosher": True}))

    @pytest.mark.parametrize("name", ["", "   ", 5, None, ["Taizu"]])
    def test_name_must_be_non_empty_string(self, name):
        with pytest.raises(TypeOrConstraintViolation, match="name must be a non-empty string"):
            validate_restaurant_fields(Payload({"name": name}))

    @pytest.mark.parametrize("value", [0, 1, "true", None])
    def test_is_kosher_must_be_boolean(self, value):
        with pytest.raises(TypeOrConstraintViolation, match="isKosher must be a boolean"):
            validate_restaurant_fields(Payload({"isKosher": value}))

    @pytest.mark.parametrize("cuisines", ["Asian", ["Asian", ""], ["  "], [1], None])
    def test_cuisines_must_be_array_of_non_empty_strings(self, cuisines):
        with pytest.raises(TypeOrConstraintViolation, match="array of non-empty strings"):
            validate_restaurant_fields(Payload({"cuisines": cuisines}))

    def test_cuisines_must_not_be_empty(self):
        with pytest.raises(TypeOrConstraintViolation, match="at least one value"):
            validate_restaurant_fields(Payload({"cuisines": []}))

    def test_first_violation_wins(self):
        with pytest.raises(TypeOrConstraintViolation, match="name"):
            validate_restaurant_fields(Payload({"cuisines": [], "isKosher": 1, "name": ""}))

    def test_cuisines_cleaner_drops_duplicates_in_order(self):
        dedupe = RESTAURANT_CLEANERS["cuisines"]
        assert dedupe(["Asian", "Indian", "Asian"]) == ["Asian", "Indian"]


class TestDishFields:
    def test_empty_description_allowed(self):
        validate_dish_fields(Payload({"name": "Noodles", "description": "", "price": 0}))

    def test_description_must_be_string(self):
        with pytest.raises(TypeOrConstraintViolation, match="description must be a string"):
            validate_dish_fields(Payload({"description": 3}))

    @pytest.mark.parametrize("price", [-0.01, "5", True, None, float("inf"), 10**400])
    def test_price_must_be_non_negative_number(self, price):
        with pytest.raises(TypeOrConstraintViolation, match="price must be a number"):
            validate_dish_fields(Payload({"price": price}))

    def test_order_is_name_description_price(self):
        with pytest.raises(TypeOrConstraintViolation, match="description"):
            validate_dish_fields(Payload({"price": -1, "description": 1}))

    def test_price_cleaner_rounds_to_two_places(self):
        assert DISH_CLEANERS["price"](12.346) == 12.35


class TestRating:
    @pytest.mark.parametrize("rating", [0, 0.0, 2.5, 5, 5.0])
    def test_bounds_inclusive(self, rating):
        assert validate_rating(Payload({"rating": rating})) == float(rating)

    @pytest.mark.parametrize("rating", [-0.01, 5.01, "4", True, None, 10**400, float("inf")])
    def test_rejected(self, rating):
        with pytest.raises(TypeOrConstraintViolation, match="between 0 and 5"):
            validate_rating(Payload({"rating": rating}))

    def test_missing(self):
        with pytest.raises(MissingRequiredField, match="rating"):
            validate_rating(Payload({}))


class TestRestaurantIdField:
    def test_integer_valued_float_accepted(self):
        assert validate_restaurant_id_field(Payload({"restaurantId": 2.0})) == 2

    @pytest.mark.parametrize("value", [0, -1, 1.5])
    def test_not_positive_integer(self, value):
        with pytest.raises(MalformedIdentifier, match="positive integer"):
            validate_restaurant_id_field(Payload({"restaurantId": value}))

    @pytest.mark.parametrize("value", ["1", True, None, 10**400])
    def test_not_a_number(self, value):
        with pytest.raises(MalformedIdentifier, match="must be a number"):
            validate_restaurant_id_field(Payload({"restaurantId": value}))

    def test_missing(self):
        with pytest.raises(MissingRequiredField):
            validate_restaurant_id_field(Payload({}))


class TestOrderItems:
    def test_valid_items(self):
        items = validate_order_items(
            Payload({"orderItems": [{"dishId": 1, "amount": 2}, {"dishId": 2.0, "amount": 1}]})
        )
        assert items == [OrderItem(1, 2), OrderItem(2, 1)]

    @pytest.mark.parametrize("value", [[], {}, "1", None])
    def test_must_be_non_empty_array(self, value):
        with pytest.raises(TypeOrConstraintViolation, match="non-empty array"):
            validate_order_items(Payload({"orderItems": value}))

    def test_item_must_be_object(self):
        with pytest.raises(TypeOrConstraintViolation, match="index 1 of orderItems array must be an object"):
            validate_order_items(Payload({"orderItems": [{"dishId": 1, "amount": 1}, [1, 2]]}))

    def test_item_missing_property(self):
        with pytest.raises(MissingRequiredField, match="index 0 of orderItems array: amount"):
            validate_order_items(Payload({"orderItems": [{"dishId": 1}]}))

    def test_item_unrecognized_property(self):
        with pytest.raises(UnrecognizedField, match="index 0 of orderItems array: note"):
            validate_order_items(Payload({"orderItems": [{"dishId": 1, "amount": 1, "note": "x"}]}))

    @pytest.mark.parametrize(
        "item, message",
        [
            ({"dishId": "1", "amount": 1}, "dishId property at index 0 of orderItems array must be a number"),
            ({"dishId": 0, "amount": 1}, "dishId property at index 0 of orderItems array must be a positive integer"),
            ({"dishId": 1, "amount": 1.5}, "amount property at index 0 of orderItems array must be a positive integer"),
            ({"dishId": 1, "amount": False}, "amount property at index 0 of orderItems array must be a number"),
        ],
    )
    def test_item_value_constraints(self, item, message):
        with pytest.raises(TypeOrConstraintViolation) as exc_info:
            validate_order_items(Payload({"orderItems": [item]}))
        assert message in exc_info.value.detail


class TestRoundToDp:
    def test_binary_representation_not_decimal_intuition(self):
        # 59.005 * 100 == 5900.499999999999
        assert round_to_dp(59.005, 2) == 59.0
        assert round_to_dp(1.005, 2) == 1.0

    def test_exact_half_rounds_away_from_zero(self):
        assert round_to_dp(0.125, 2) == 0.13
        assert round_to_dp(-0.125, 2) == -0.13
        assert round_to_dp(2.5, 0) == 3.0

    def test_already_rounded_value_unchanged(self):
        assert round_to_dp(59, 2) == 59.0
        assert round_to_dp(4.83, 2) == 4.83

    @pytest.mark.parametrize("num", [1.7e307, 1e30, float(2**53), 10**300])
    def test_values_without_fractional_digits_pass_through(self, num):
        assert round_to_dp(num, 2) == float(num)

    def test_large_price_through_cleaner(self):
        assert DISH_CLEANERS["price"](1.7e307) == 1.7e307


class TestLargeNumbers:
    def test_huge_amount_is_not_a_number(self):
        with pytest.raises(TypeOrConstraintViolation, match="amount property at index 0 of orderItems array must be a number"):
            validate_order_items(Payload({"orderItems": [{"dishId": 1, "amount": 10**400}]}))

    def test_large_finite_price_accepted(self):
        validate_dish_fields(Payload({"price": 1.7e307}))
