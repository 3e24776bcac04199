"""Field and business rules for puppy records.

Rules run over a plain mapping so the same checks serve creates and partial
updates; each violation is reported as ``{"field", "message"}``.
"""
from __future__ import annotations

import re
from datetime import date
from typing import Any, Mapping

from kennel.puppy.models import PuppyBreed, PuppyColor, PuppyGender, PuppyStatus

NAME_PATTERN = re.compile(r"^[a-zA-Z\u4e00-\u9fa5\s\-.]+$")
MICROCHIP_PATTERN = re.compile(r"^\d{15}$")

MAX_PRICE = 1_000_000
MAX_BIRTH_WEIGHT_G = 1000
MAX_CURRENT_WEIGHT_G = 10000
MAX_ADULT_WEIGHT_KG = 50
MAX_DESCRIPTION = 1000
MAX_PERSONALITY = 500

REQUIRED_ON_CREATE = {
    "name": "請輸入幼犬名稱",
    "breed": "請選擇幼犬品種",
    "birth_date": "請選擇出生日期",
    "gender": "請選擇幼犬性別",
    "color": "請選擇幼犬毛色",
}

_CHOICES = {
    "breed": ({item.value for item in PuppyBreed}, "請選擇有效的幼犬品種"),
    "gender": ({item.value for item in PuppyGender}, "請選擇有效的幼犬性別"),
    "color": ({item.value for item in PuppyColor}, "請選擇有效的幼犬毛色"),
    "status": ({item.value for item in PuppyStatus}, "請選擇有效的幼犬狀態"),
}

_WEIGHTS = {
    "birth_weight": (MAX_BIRTH_WEIGHT_G, "出生體重不能是負數", "出生體重不能超過 1000 公克"),
    "current_weight": (MAX_CURRENT_WEIGHT_G, "當前體重不能是負數", "當前體重不能超過 10000 公克"),
    "expected_adult_weight": (MAX_ADULT_WEIGHT_KG, "預期成犬體重不能是負數", "預期成犬體重不能超過 50 公斤"),
}


def _one_year_before(today: date) -> date:
    try:
        return today.replace(year=today.year - 1)
    except ValueError:
        # Feb 29
        return today.replace(year=today.year - 1, day=28)


def _check_name(name: str) -> str | None:
    value = name.strip()
    if not value:
        return "請輸入幼犬名稱"
    if len(value) < 2:
        return "幼犬名稱至少需要 2 個字元"
    if len(value) > 50:
        return "幼犬名稱不能超過 50 個字元"
    if not NAME_PATTERN.match(value):
        return "幼犬名稱只能包含中文、英文、空格、連字號和點號"
    return None


def _check_birth_date(value: date, today: date) -> str | None:
    if value > today:
        return "出生日期不能是未來的日期"
    if value < _one_year_before(today):
        return "出生日期不能超過一年前（幼犬年齡限制）"
    return None


def _check_price(value: float) -> str | None:
    if value < 0:
        return "價格不能是負數"
    if value > MAX_PRICE:
        return "價格不能超過 1,000,000 元"
    if float(value) != int(value):
        return "價格必須是整數"
    return None


def validate_fields(data: Mapping[str, Any], *, partial: bool, today: date) -> list[dict[str, str]]:
    """Check the fields present in `data`; on create, required fields must be present too."""
    errors: list[dict[str, str]] = []

    def add(field: str, message: str | None) -> None:
        if message:
            errors.append({"field": field, "message": message})

    if not partial:
        for field, message in REQUIRED_ON_CREATE.items():
            value = data.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                add(field, message)

    if data.get("name") is not None:
        add("name", _check_name(data["name"]))

    for field, (choices, message) in _CHOICES.items():
        value = data.get(field)
        if value is not None and value not in choices:
            add(field, message)

    if data.get("birth_date") is not None:
        add("birth_date", _check_birth_date(data["birth_date"], today))

    if data.get("price") is not None:
        add("price", _check_price(data["price"]))

    for field, (limit, negative, too_large) in _WEIGHTS.items():
        value = data.get(field)
        if value is None:
            continue
        if value < 0:
            add(field, negative)
        elif value > limit:
            add(field, too_large)

    microchip = (data.get("microchip_id") or "").strip()
    if microchip and not MICROCHIP_PATTERN.match(microchip):
        add("microchip_id", "晶片號碼必須是 15 位數字")

    description = data.get("description")
    if description is not None and len(description) > MAX_DESCRIPTION:
        add("description", "描述不能超過 1000 個字元")

    personality = data.get("personality_traits")
    if personality is not None and len(personality) > MAX_PERSONALITY:
        add("personality_traits", "性格特徵不能超過 500 個字元")

    return errors


def validate_business_rules(data: Mapping[str, Any]) -> list[dict[str, str]]:
    if data.get("status") == PuppyStatus.SOLD.value:
        price = data.get("price")
        if not price or price <= 0:
            return [{"field": "price", "message": "已售出的幼犬必須設定有效價格"}]
    return []
