# app/utils/luhn.py
import re

_NON_DIGITS = re.compile(r"\D")


def validate_luhn(card_number: str) -> bool:
    """
    Walidacja numeru karty algorytmem Luhna.

    Znaki inne niz cyfry sa usuwane, od prawej co druga cyfra jest podwajana
    (minus 9 gdy wynik > 9), numer jest poprawny gdy suma dzieli sie przez 10.
    """
    sanitized = _NON_DIGITS.sub("", card_number or "")
    if not sanitized:
        return False

    total = 0
    should_double = False
    for ch in reversed(sanitized):
        digit = int(ch)
        if should_double:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
        should_double = not should_double

    return total % 10 == 0
