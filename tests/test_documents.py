import pytest

from ponto.services.documents import (
    format_cnpj,
    format_cpf,
    format_phone,
    only_digits,
    validate_cnpj,
    validate_cpf,
)


def test_only_digits():
    assert only_digits("529.982.247-25") == "52998224725"
    assert only_digits(None) == ""


@pytest.mark.parametrize("cpf", ["529.982.247-25", "52998224725"])
def test_valid_cpf(cpf):
    assert validate_cpf(cpf) is True


@pytest.mark.parametrize("cpf", ["529.982.247-26", "111.111.111-11", "1234567890", ""])
def test_invalid_cpf(cpf):
    assert validate_cpf(cpf) is False


def test_cnpj():
    assert validate_cnpj("11.222.333/0001-81") is True
    assert validate_cnpj("11222333000181") is True
    assert validate_cnpj("11.222.333/0001-80") is False
    assert validate_cnpj("00000000000000") is False
    assert validate_cnpj("1122233300018") is False


def test_progressive_formatting():
    assert format_cpf("529") == "529"
    assert format_cpf("5299822") == "529.982.2"
    assert format_cpf("52998224725") == "529.982.247-25"
    assert format_cnpj("11222") == "11.222"
    assert format_cnpj("11222333000181") == "11.222.333/0001-81"


def test_phone_formatting():
    assert format_phone("1133334444") == "(11) 3333-4444"
    assert format_phone("11987654321") == "(11) 98765-4321"
    assert format_phone("119") == "(11) 9"
