import string

import pytest

from cubcaster.charclass import (
    is_alnum,
    is_alpha,
    is_ascii,
    is_digit,
    is_print,
    itoa,
    to_lower,
    to_upper,
)

ASCII_CHARS = [chr(code) for code in range(128)]


@pytest.mark.parametrize("ch", ASCII_CHARS)
def test_is_alpha_matches_ascii_letters(ch):
    assert is_alpha(ch) == (ch in string.ascii_letters)
    assert is_alpha(ord(ch)) == (ch in string.ascii_letters)


@pytest.mark.parametrize("ch", ASCII_CHARS)
def test_is_digit_matches_decimal_digits(ch):
    assert is_digit(ch) == (ch in string.digits)


@pytest.mark.parametrize("ch", ASCII_CHARS)
def test_is_alnum_is_union_of_alpha_and_digit(ch):
    assert is_alnum(ch) == (is_alpha(ch) or is_digit(ch))


@pytest.mark.parametrize("ch", ASCII_CHARS)
def test_is_print_matches_printable_without_whitespace_controls(ch):
    expected = ch in string.printable and (ch == " " or ch not in string.whitespace)
    assert is_print(ch) == expected


def test_is_ascii_bounds():
    assert is_ascii(0)
    assert is_ascii(127)
    assert not is_ascii(128)
    assert not is_ascii(-1)
    assert not is_ascii("é")


@pytest.mark.parametrize("ch", list(string.ascii_lowercase))
def test_case_round_trip(ch):
    upper = to_upper(ch)
    assert upper == ch.upper()
    assert to_lower(upper) == ch


@pytest.mark.parametrize("ch", list(string.digits + string.punctuation + " "))
def test_case_conversion_leaves_non_letters(ch):
    assert to_upper(ch) == ch
    assert to_lower(ch) == ch


def test_case_conversion_keeps_int_kind():
    assert to_upper(ord("q")) == ord("Q")
    assert to_lower(ord("Q")) == ord("q")
    assert to_upper(300) == 300


def test_classifiers_reject_multi_char_strings():
    with pytest.raises(ValueError):
        is_alpha("ab")
    with pytest.raises(ValueError):
        is_digit("")


def test_classifiers_reject_other_types():
    with pytest.raises(TypeError):
        is_print(1.5)


@pytest.mark.parametrize("n", [0, 7, -7, 42, -2147483648, 2147483647, 10**30, -(10**30)])
def test_itoa_round_trip(n):
    text = itoa(n)
    assert int(text) == n
    assert text == str(n)


def test_itoa_zero_has_single_digit():
    assert itoa(0) == "0"


def test_itoa_rejects_non_int():
    with pytest.raises(TypeError):
        itoa("12")