import dataclasses

import pytest

from price_watch.models import Item, RowParseError, parse_code, parse_price


class TestItem:
    def test_clone_is_equal_but_distinct(self, car):
        copy = car.clone()
        assert copy == car
        assert copy is not car

    def test_is_immutable(self, car):
        with pytest.raises(dataclasses.FrozenInstanceError):
            car.price = 1.0

    def test_with_price_keeps_code_and_name(self, car):
        cheaper = car.with_price(89.99)
        assert cheaper == Item(42, 89.99, "Car")
        assert car.price == 99.99

    def test_construct_accepts_any_values(self):
        item = Item(-1, -5.0, "")
        assert item.code == -1
        assert item.price == -5.0

    def test_str(self, car):
        assert str(car) == "42 - 99.99 PLN Car"


class TestRows:
    def test_to_row(self, car):
        assert car.to_row() == "42;99.99;Car\n"

    def test_round_trip(self):
        item = Item(76910, 129.9, "Aston Martin Valkyrie AMR Pro")
        assert Item.from_row(item.to_row()) == item

    def test_from_row_keeps_spaces_in_name(self):
        assert Item.from_row("7;10.0;Ford GT Heritage Edition") == Item(7, 10.0, "Ford GT Heritage Edition")

    def test_from_row_accepts_crlf(self):
        assert Item.from_row("7;10;X\r\n") == Item(7, 10.0, "X")

    def test_to_row_rejects_delimiter_in_name(self):
        with pytest.raises(ValueError):
            Item(1, 1.0, "a;b").to_row()

    @pytest.mark.parametrize(
        "row",
        [
            "42;99.99",
            "42;99.99;Car;extra",
            "abc;99.99;Car",
            "42;cheap;Car",
            "42;;Car",
            "42;nan;Car",
            "42;-1;Car",
        ],
    )
    def test_from_row_rejects_malformed(self, row):
        with pytest.raises(RowParseError):
            Item.from_row(row)


class TestParsing:
    def test_parse_code(self):
        assert parse_code(" 76910 ") == 76910
        assert parse_code("7691O") is None
        assert parse_code("-3") is None
        assert parse_code("") is None

    def test_parse_price_decimal_comma(self):
        assert parse_price("89,99") == 89.99

    def test_parse_price_rejects_garbage(self):
        assert parse_price("") is None
        assert parse_price("inf") is None
        assert parse_price("12zł") is None
