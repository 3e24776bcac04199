from __future__ import annotations

import unittest
from datetime import date

from tests._bootstrap import bootstrap_backend_imports, reset_caches


bootstrap_backend_imports()
reset_caches()

from kennel.puppy.validation import validate_business_rules, validate_fields  # noqa: E402

TODAY = date(2026, 3, 15)


def _valid(**overrides) -> dict:
    values = {
        "name": "Haggis",
        "breed": "scottish_terrier",
        "birth_date": date(2026, 1, 10),
        "gender": "male",
        "color": "black",
        "status": "available",
    }
    values.update(overrides)
    return values


def _messages(errors: list[dict]) -> dict[str, str]:
    return {err["field"]: err["message"] for err in errors}


class ValidateFieldsTests(unittest.TestCase):
    def test_valid_puppy_passes(self) -> None:
        self.assertEqual(validate_fields(_valid(price=45000), partial=False, today=TODAY), [])

    def test_required_fields_on_create(self) -> None:
        errors = _messages(validate_fields({"name": "  "}, partial=False, today=TODAY))
        self.assertEqual(errors["name"], "請輸入幼犬名稱")
        self.assertEqual(errors["breed"], "請選擇幼犬品種")
        self.assertEqual(errors["birth_date"], "請選擇出生日期")
        self.assertEqual(errors["gender"], "請選擇幼犬性別")
        self.assertEqual(errors["color"], "請選擇幼犬毛色")

    def test_partial_only_checks_present_fields(self) -> None:
        self.assertEqual(validate_fields({"color": "wheaten"}, partial=True, today=TODAY), [])

    def test_name_rules(self) -> None:
        cases = {
            "A": "幼犬名稱至少需要 2 個字元",
            "x" * 51: "幼犬名稱不能超過 50 個字元",
            "Rex_99": "幼犬名稱只能包含中文、英文、空格、連字號和點號",
        }
        for name, message in cases.items():
            errors = _messages(validate_fields({"name": name}, partial=True, today=TODAY))
            self.assertEqual(errors["name"], message, name)
        self.assertEqual(validate_fields({"name": "小黑 Jr."}, partial=True, today=TODAY), [])

    def test_choices(self) -> None:
        errors = _messages(
            validate_fields(
                {"breed": "poodle", "gender": "other", "color": "blue", "status": "lost"},
                partial=True,
                today=TODAY,
            )
        )
        self.assertEqual(
            errors,
            {
                "breed": "請選擇有效的幼犬品種",
                "gender": "請選擇有效的幼犬性別",
                "color": "請選擇有效的幼犬毛色",
                "status": "請選擇有效的幼犬狀態",
            },
        )

    def test_birth_date_window(self) -> None:
        future = _messages(validate_fields({"birth_date": date(2026, 3, 16)}, partial=True, today=TODAY))
        self.assertEqual(future["birth_date"], "出生日期不能是未來的日期")

        too_old = _messages(validate_fields({"birth_date": date(2025, 3, 14)}, partial=True, today=TODAY))
        self.assertEqual(too_old["birth_date"], "出生日期不能超過一年前（幼犬年齡限制）")

        self.assertEqual(validate_fields({"birth_date": date(2025, 3, 15)}, partial=True, today=TODAY), [])

    def test_birth_date_window_on_leap_day(self) -> None:
        self.assertEqual(
            validate_fields({"birth_date": date(2023, 2, 28)}, partial=True, today=date(2024, 2, 29)),
            [],
        )

    def test_price_rules(self) -> None:
        cases = {
            -1: "價格不能是負數",
            1_000_001: "價格不能超過 1,000,000 元",
            99.5: "價格必須是整數",
        }
        for price, message in cases.items():
            errors = _messages(validate_fields({"price": price}, partial=True, today=TODAY))
            self.assertEqual(errors["price"], message, price)

    def test_weights(self) -> None:
        errors = _messages(
            validate_fields(
                {"birth_weight": -1, "current_weight": 10001, "expected_adult_weight": 51},
                partial=True,
                today=TODAY,
            )
        )
        self.assertEqual(errors["birth_weight"], "出生體重不能是負數")
        self.assertEqual(errors["current_weight"], "當前體重不能超過 10000 公克")
        self.assertEqual(errors["expected_adult_weight"], "預期成犬體重不能超過 50 公斤")

    def test_microchip_and_text_lengths(self) -> None:
        errors = _messages(
            validate_fields(
                {"microchip_id": "12345", "description": "d" * 1001, "personality_traits": "p" * 501},
                partial=True,
                today=TODAY,
            )
        )
        self.assertEqual(errors["microchip_id"], "晶片號碼必須是 15 位數字")
        self.assertEqual(errors["description"], "描述不能超過 1000 個字元")
        self.assertEqual(errors["personality_traits"], "性格特徵不能超過 500 個字元")

        self.assertEqual(validate_fields({"microchip_id": ""}, partial=True, today=TODAY), [])
        self.assertEqual(validate_fields({"microchip_id": "900123456789012"}, partial=True, today=TODAY), [])


class BusinessRuleTests(unittest.TestCase):
    def test_sold_requires_price(self) -> None:
        for price in (None, 0):
            errors = validate_business_rules({"status": "sold", "price": price})
            self.assertEqual(errors, [{"field": "price", "message": "已售出的幼犬必須設定有效價格"}])

    def test_sold_with_price_or_unsold(self) -> None:
        self.assertEqual(validate_business_rules({"status": "sold", "price": 30000}), [])
        self.assertEqual(validate_business_rules({"status": "available"}), [])
