from configurator_tool.engine.formatting import format_decimal, format_price, format_price_range, number_to_text


def test_format_price_whole_euros():
    assert format_price(123400) == "€\u00a01.234"
    assert format_price(0) == "€\u00a00"
    assert format_price(99) == "€\u00a01"
    assert format_price(150000000) == "€\u00a01.500.000"


def test_format_price_rounds_half_up():
    assert format_price(12350) == "€\u00a0124"
    assert format_price(12349) == "€\u00a0123"
    assert format_price(1600.5) == "€\u00a016"


def test_format_price_negative():
    assert format_price(-123400) == "€\u00a0-1.234"


def test_format_price_range_shows_starting_price_only():
    assert format_price_range(123400) == "Vanaf €\u00a01.234"
    assert format_price_range(123400, 999900) == "Vanaf €\u00a01.234"


def test_number_to_text():
    assert number_to_text(4.0) == "4"
    assert number_to_text(2.5) == "2.5"
    assert number_to_text(7) == "7"
    assert number_to_text(True) == "true"


def test_format_decimal_rounds_half_up():
    assert format_decimal(6.25) == "6.3"
    assert format_decimal(8) == "8.0"
    assert format_decimal(0.05) == "0.1"
    assert format_decimal(3.14159, places=2) == "3.14"
