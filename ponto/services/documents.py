"""
Brazilian document helpers: CPF and CNPJ check digits, display formatting.
"""
import re


def only_digits(value: str) -> str:
    return re.sub(r"\D", "", value or "")


def _all_same(digits: str) -> bool:
    return len(set(digits)) == 1


def validate_cpf(cpf: str) -> bool:
    """
    Validate a CPF using the official check-digit algorithm.

    Formatting characters are ignored; repeated-digit numbers are rejected.
    """
    digits = only_digits(cpf)
    if len(digits) != 11 or _all_same(digits):
        return False

    for position in (9, 10):
        total = sum(int(digits[i]) * (position + 1 - i) for i in range(position))
        check = (total * 10) % 11
        if check == 10:
            check = 0
        if check != int(digits[position]):
            return False
    return True


def _cnpj_check_digit(numbers: str) -> int:
    weight = len(numbers) - 7
    total = 0
    for char in numbers:
        total += int(char) * weight
        weight -= 1
        if weight < 2:
            weight = 9
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def validate_cnpj(cnpj: str) -> bool:
    """Validate a CNPJ using the official check-digit algorithm."""
    digits = only_digits(cnpj)
    if len(digits) != 14 or _all_same(digits):
        return False
    if _cnpj_check_digit(digits[:12]) != int(digits[12]):
        return False
    return _cnpj_check_digit(digits[:13]) == int(digits[13])


def format_cpf(cpf: str) -> str:
    """XXX.XXX.XXX-XX, applied progressively to partial input."""
    d = only_digits(cpf)
    if len(d) <= 3:
        return d
    if len(d) <= 6:
        return f"{d[:3]}.{d[3:]}"
    if len(d) <= 9:
        return f"{d[:3]}.{d[3:6]}.{d[6:]}"
    return f"{d[:3]}.{d[3:6]}.{d[6:9]}-{d[9:11]}"


def format_cnpj(cnpj: str) -> str:
    """XX.XXX.XXX/XXXX-XX, applied progressively to partial input."""
    d = only_digits(cnpj)
    if len(d) <= 2:
        return d
    if len(d) <= 5:
        return f"{d[:2]}.{d[2:]}"
    if len(d) <= 8:
        return f"{d[:2]}.{d[2:5]}.{d[5:]}"
    if len(d) <= 12:
        return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:]}"
    return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:12]}-{d[12:14]}"


def format_phone(phone: str) -> str:
    """(XX) XXXX-XXXX for landlines, (XX) XXXXX-XXXX for mobiles."""
    d = only_digits(phone)
    if len(d) <= 2:
        return d
    if len(d) <= 6:
        return f"({d[:2]}) {d[2:]}"
    if len(d) <= 10:
        return f"({d[:2]}) {d[2:6]}-{d[6:]}"
    return f"({d[:2]}) {d[2:7]}-{d[7:11]}"
