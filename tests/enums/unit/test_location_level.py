from enums.cart_outcome import CartOutcome
from enums.location_level import LocationLevel


class TestLocationLevel:

    def test_children(self):
        assert LocationLevel.PROVINCE.child == LocationLevel.DISTRICT
        assert LocationLevel.DISTRICT.child == LocationLevel.WARD
        assert LocationLevel.WARD.child is None

    def test_descendants(self):
        assert LocationLevel.PROVINCE.descendants == [LocationLevel.DISTRICT, LocationLevel.WARD]
        assert LocationLevel.WARD.descendants == []


class TestCartOutcome:

    def test_noop_outcomes_do_not_change_cart(self):
        unchanged = {outcome for outcome in CartOutcome if not outcome.changed}
        assert unchanged == {CartOutcome.ALREADY_IN_CART, CartOutcome.NOT_IN_CART, CartOutcome.MIN_QUANTITY_REACHED}
