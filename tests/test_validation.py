# tests/test_validation.py

"""
Unit tests for the request rules and the field validators built from them.
"""

import pytest

from product_service.validation import (
    AVAILABILITY_RULES,
    ID_RULES,
    MISSING,
    PRODUCT_RULES,
    body,
    is_boolean,
    is_int,
    is_numeric,
    is_positive,
    is_positive_price,
    not_empty,
    param,
    run_validators,
)


@pytest.mark.parametrize("value", ["1", "0", "01", "007", "-3", "+12", "2000", 7])
def test_is_int_accepts(value):
    assert is_int(value)


@pytest.mark.parametrize("value", ["not-valid-url", "1.5", "", MISSING, None, True])
def test_is_int_rejects(value):
    assert not is_int(value)


@pytest.mark.parametrize("value", [200, 0, 10.5, "49.90", ".5", "-3", 200.0])
def test_is_numeric_accepts(value):
    assert is_numeric(value)


@pytest.mark.parametrize("value", ["Hola", "", " 5", MISSING, None, True, "1e5"])
def test_is_numeric_rejects(value):
    assert not is_numeric(value)


def test_is_positive():
    assert is_positive(200)
    assert is_positive("0.5")
    assert not is_positive(0)
    assert not is_positive(-1)
    assert not is_positive("Hola")
    assert not is_positive(MISSING)
    assert not is_positive(None)
    assert not is_positive("")


def test_not_empty():
    assert not_empty("Mouse")
    assert not_empty(0)
    assert not_empty(False)
    assert not not_empty("")
    assert not not_empty(None)
    assert not not_empty(MISSING)


@pytest.mark.parametrize("value", [True, False, "true", "false", 1, 0, "1", "0"])
def test_is_boolean_accepts(value):
    assert is_boolean(value)


@pytest.mark.parametrize("value", ["yes", "True", 2, MISSING, None, ""])
def test_is_boolean_rejects(value):
    assert not is_boolean(value)


def test_chain_runs_every_rule():
    validator = body("x", (is_numeric, "numeric"), (is_positive, "positive"), (not_empty, "empty"))
    errors = validator({"body": {}})
    assert [e.msg for e in errors] == ["numeric", "positive", "empty"]
    assert all(e.path == "x" and e.location == "body" for e in errors)


def test_param_reads_path_parameters():
    validator = param("id", (is_int, "bad id"))
    assert validator({"params": {"id": "5"}, "body": {}}) == []
    errors = validator({"params": {"id": "x"}, "body": {"id": "5"}})
    assert len(errors) == 1
    assert errors[0].value == "x"


def test_error_dict_leaves_out_absent_value():
    [error] = body("name", (not_empty, "vacio"))({"body": {}})
    assert error.to_dict() == {"type": "field", "msg": "vacio", "path": "name", "location": "body"}

    [error] = body("name", (not_empty, "vacio"))({"body": {"name": None}})
    assert error.to_dict()["value"] is None


def test_update_rules_on_empty_body_yield_five_errors():
    sources = {"params": {"id": "1"}, "body": {}}
    errors = run_validators(ID_RULES + PRODUCT_RULES + AVAILABILITY_RULES, sources)
    assert len(errors) == 5


def test_update_rules_price_zero_yields_one_error():
    sources = {
        "params": {"id": "1"},
        "body": {"name": "Monitor", "price": 0, "availability": True},
    }
    errors = run_validators(ID_RULES + PRODUCT_RULES + AVAILABILITY_RULES, sources)
    assert [e.msg for e in errors] == ["Precio no valido"]


def test_is_positive_price_rounds_to_cents():
    assert is_positive_price(0.01)
    assert is_positive_price("0.006")
    assert is_positive_price(200)
    assert not is_positive_price(0.001)
    assert not is_positive_price("0.004")
    assert not is_positive_price(0)
    assert not is_positive_price("Hola")
    assert not is_positive_price(MISSING)


def test_price_below_one_cent_is_rejected():
    errors = run_validators(PRODUCT_RULES, {"body": {"name": "Tornillo", "price": 0.001}})
    assert [e.msg for e in errors] == ["Precio no valido"]


def test_create_rules_missing_name_only():
    errors = run_validators(PRODUCT_RULES, {"body": {"price": 10}})
    assert [e.msg for e in errors] == ["El nombre del producto no puede ir vacio"]


def test_create_rules_missing_price_only():
    errors = run_validators(PRODUCT_RULES, {"body": {"name": "Mouse"}})
    assert [e.msg for e in errors] == [
        "Valor no valido",
        "Precio no valido",
        "El precio del producto no puede ir vacio",
    ]
