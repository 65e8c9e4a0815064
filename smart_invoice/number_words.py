# smart_invoice/number_words.py
# Amounts in words, Indian numbering (crore / lakh / thousand / hundred).

import math

UNITS = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
TEENS = ["Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen",
         "Sixteen", "Seventeen", "Eighteen", "Nineteen"]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def convert_chunk(n):
    """Words for 0 <= n < 1000."""
    words = []
    if n >= 100:
        words += [UNITS[n // 100], "Hundred"]
        n %= 100
    if n >= 20:
        words.append(TENS[n // 10])
        n %= 10
    if n >= 10:
        words.append(TEENS[n - 10])
        n = 0
    if n > 0:
        words.append(UNITS[n])
    return " ".join(words)


def convert_integer(n):
    """Words for a non-negative integer; the crore multiplier recurses for very large values."""
    if n == 0:
        return "Zero"
    words = []
    if n >= CRORE:
        words += [convert_integer(n // CRORE), "Crore"]
        n %= CRORE
    if n >= LAKH:
        words += [convert_chunk(n // LAKH), "Lakh"]
        n %= LAKH
    if n >= THOUSAND:
        words += [convert_chunk(n // THOUSAND), "Thousand"]
        n %= THOUSAND
    if n > 0:
        words.append(convert_chunk(n))
    return " ".join(w for w in words if w)


def convert_number_to_indian_words(amount):
    """
    150000    -> 'One Lakh Fifty Thousand Rupees Only.'
    150000.50 -> 'One Lakh Fifty Thousand Rupees and Fifty Paisa Only.'
    -1180     -> 'Minus One Thousand One Hundred Eighty Rupees Only.'
    NaN / inf -> ''
    """
    if not math.isfinite(amount):
        return ""
    rupees_str, paise_str = f"{abs(amount):.2f}".split(".")
    rupees, paise = int(rupees_str), int(paise_str)

    words = convert_integer(rupees) + " Rupees"
    if paise > 0:
        words += " and " + convert_chunk(paise) + " Paisa"
    if amount < 0 and (rupees or paise):
        words = "Minus " + words
    return words + " Only."
