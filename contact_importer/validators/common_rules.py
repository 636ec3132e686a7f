"""Predefined validation rules for the common destination tables."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ..domain.entities.validation import ValidationRule

COMMON_RULES: Mapping[str, tuple[ValidationRule, ...]] = MappingProxyType(
    {
        "пользователи": (
            ValidationRule(
                field="электронная_почта", required=True, type="email", unique=True
            ),
            ValidationRule(field="имя", type="string"),
            ValidationRule(field="фамилия", type="string"),
            ValidationRule(field="телефон", type="phone"),
            ValidationRule(field="компания", type="string"),
            ValidationRule(field="должность", type="string"),
            ValidationRule(field="телеграмма", type="string", max_length=100),
            ValidationRule(
                field="реферальный_код", type="string", unique=True, max_length=50
            ),
        ),
        "контакты": (
            ValidationRule(field="имя", type="string"),
            ValidationRule(field="фамилия", type="string"),
            ValidationRule(field="компания", type="string"),
            ValidationRule(field="должность", type="string"),
            ValidationRule(field="linkedin_url", type="url"),
            ValidationRule(field="google_id", type="string", max_length=100),
            ValidationRule(field="день_рождения", type="date"),
        ),
        "контактные_электронные_почты": (
            ValidationRule(field="электронная_почта", required=True, type="email"),
            ValidationRule(field="этикетка", type="string", max_length=100),
        ),
        "контактные_телефоны": (
            ValidationRule(field="телефон", required=True, type="phone"),
            ValidationRule(field="этикетка", type="string", max_length=100),
        ),
        "контактные_адреса": (
            ValidationRule(field="улица", type="string"),
            ValidationRule(field="город", type="string"),
            ValidationRule(field="состояние", type="string"),
            ValidationRule(field="почтовый_индекс", type="string", max_length=20),
            ValidationRule(field="страна", type="string", max_length=100),
            ValidationRule(field="этикетка", type="string", max_length=100),
        ),
    }
)
