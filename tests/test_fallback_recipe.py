import re

import pytest

from precision_baker.services.unit_conversion import (
    HUMIDITY_NOTE,
    PRO_MODE_NOTE,
    InvalidScaleFactor,
    build_fallback_recipe,
    format_amount,
    generate_fallback_ingredient_lines,
    parse_scale_factor,
)


def _amounts(lines):
    return [float(re.match(r"- \*\*([\d.]+)", line).group(1)) for line in lines]


def test_cup_to_gram_lines():
    lines = generate_fallback_ingredient_lines("cup-to-gram", "1", False)
    assert lines == [
        "- **240g** all-purpose flour (2 cups)",
        "- **200g** granulated sugar (1 cup)",
        "- **220g** brown sugar, packed (1 cup)",
        "- **113g** unsalted butter (1/2 cup)",
        "- **5g** vanilla extract (1 tsp)",
        "- **6g** salt (1 tsp)",
        "- **170g** chocolate chips (1 cup)",
    ]


def test_gram_to_cup_lines():
    lines = generate_fallback_ingredient_lines("gram-to-cup", "1", False)
    assert lines[0] == "- **2 cups** all-purpose flour (240g)"
    assert lines[3] == "- **0.5 cup** unsalted butter (113g)"
    assert lines[4] == "- **1 tsp** vanilla extract (5g)"
    assert len(lines) == 7


def test_scale_two_doubles_every_entry():
    base = generate_fallback_ingredient_lines("cup-to-gram", "2", False)
    single = generate_fallback_ingredient_lines("cup-to-gram", "1", False)
    assert _amounts(base) == [a * 2 for a in _amounts(single)]
    # Same order, same names
    assert [l.split("** ", 1)[1] for l in base] == [l.split("** ", 1)[1] for l in single]


def test_custom_scale():
    lines = generate_fallback_ingredient_lines("cup-to-gram", "2.5", False)
    assert lines[0] == "- **600g** all-purpose flour (2 cups)"
    assert lines[3] == "- **282.5g** unsalted butter (1/2 cup)"

    volume = generate_fallback_ingredient_lines("gram-to-cup", "2.5", False)
    assert volume[0] == "- **5 cups** all-purpose flour (240g)"
    assert volume[3] == "- **1.25 cup** unsalted butter (113g)"


@pytest.mark.parametrize("bad", ["not-a-number", "", "0", "-3", "nan", "inf"])
def test_invalid_scale_defaults_to_one(bad):
    expected = generate_fallback_ingredient_lines("cup-to-gram", "1", False)
    assert generate_fallback_ingredient_lines("cup-to-gram", bad, False) == expected


def test_strict_scale_raises():
    with pytest.raises(InvalidScaleFactor):
        generate_fallback_ingredient_lines("cup-to-gram", "not-a-number", False, strict=True)
    assert parse_scale_factor("1.5", strict=True) == 1.5


def test_humidity_does_not_change_lines():
    assert generate_fallback_ingredient_lines("cup-to-gram", "1", True) == \
        generate_fallback_ingredient_lines("cup-to-gram", "1", False)


def test_format_amount():
    assert format_amount(480.0) == "480"
    assert format_amount(2.5) == "2.5"
    assert format_amount(124.30000000000001) == "124.3"
    assert format_amount(1 / 3) == "0.33"


def test_fallback_recipe_template():
    text = build_fallback_recipe(
        "Grandma's Cookies\n2 cups flour", "cup-to-gram", "1",
        humidity_adjust=True, pro_mode=True,
    )
    lines = text.split("\n")
    assert lines[0] == "## Grandma's Cookies"
    assert lines[1] == ""
    assert lines[2] == "- **240g** all-purpose flour (2 cups)"
    assert lines[-2] == PRO_MODE_NOTE
    assert lines[-1] == HUMIDITY_NOTE
    assert "Reduced flour by 5g" in text


def test_fallback_recipe_without_flags():
    text = build_fallback_recipe("", "cup-to-gram", "1")
    assert text.startswith("## Converted Recipe\n\n- **240g**")
    assert text.endswith("- **170g** chocolate chips (1 cup)")
    assert "Professional Baker Notes" not in text
    assert "Humidity" not in text


def test_huge_scale_factor_still_formats():
    lines = generate_fallback_ingredient_lines("cup-to-gram", "1e30", False)
    amount = re.match(r"- \*\*(\d+)g\*\* all-purpose flour \(2 cups\)$", lines[0]).group(1)
    assert amount.startswith("2")
    assert len(amount) == 33


@pytest.mark.parametrize("bad", ["1e307", "1e400"])
def test_overflowing_scale_factor(bad):
    expected = generate_fallback_ingredient_lines("cup-to-gram", "1", False)
    assert generate_fallback_ingredient_lines("cup-to-gram", bad, False) == expected
    with pytest.raises(InvalidScaleFactor):
        parse_scale_factor(bad, strict=True)
