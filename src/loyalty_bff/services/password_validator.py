"""
loyalty_bff.services.password_validator

Password policy checker.

Responsibilities:
- Decide whether a candidate password satisfies the configured rules.
- Describe the rules in one human-readable message for client-side hinting.
"""

from __future__ import annotations

import string

from loyalty_bff.settings import PasswordValidationRules

ALLOWED_CHARACTERS = string.ascii_letters + string.digits + " "


class PasswordValidator:
    def __init__(self, rules: PasswordValidationRules) -> None:
        self._rules = rules

    @property
    def rules(self) -> PasswordValidationRules:
        return self._rules

    def is_valid_password(self, password: str | None) -> bool:
        if password is None or not password.strip():
            return False

        if not self._rules.min_length <= len(password) <= self._rules.max_length:
            return False

        return (
            self._has_only_accepted_symbols(password)
            and self._has_enough_special_symbols(password)
            and self._has_enough_numbers(password)
            and self._has_enough_upper_case(password)
            and self._has_enough_lower_case(password)
            and self._has_no_white_space_unless_allowed(password)
        )

    def build_validation_message(self) -> str:
        r = self._rules
        white_spaces = "allowed" if r.allow_white_spaces else "not allowed"
        return (
            f"Password length should be between {r.min_length} and {r.max_length} characters. "
            f"Password should contain {r.min_lower_case} lowercase, {r.min_upper_case} uppercase, "
            f"{r.min_numbers} digits and {r.min_special_symbols} special symbols. "
            f"Allowed symbols are: {ALLOWED_CHARACTERS}. "
            f"Allowed special symbols are: {r.allowed_special_symbols}. "
            f"Whitespaces are {white_spaces}."
        )

    def _has_only_accepted_symbols(self, password: str) -> bool:
        specials = self._rules.allowed_special_symbols
        return all(c in ALLOWED_CHARACTERS or c in specials for c in password)

    def _has_enough_special_symbols(self, password: str) -> bool:
        specials = self._rules.allowed_special_symbols
        return sum(1 for c in password if c in specials) >= self._rules.min_special_symbols

    def _has_enough_numbers(self, password: str) -> bool:
        return sum(1 for c in password if c.isdigit()) >= self._rules.min_numbers

    def _has_enough_upper_case(self, password: str) -> bool:
        return sum(1 for c in password if c.isupper()) >= self._rules.min_upper_case

    def _has_enough_lower_case(self, password: str) -> bool:
        return sum(1 for c in password if c.islower()) >= self._rules.min_lower_case

    def _has_no_white_space_unless_allowed(self, password: str) -> bool:
        return self._rules.allow_white_spaces or not any(c.isspace() for c in password)


# --- Module Notes -----------------------------------------------------------
# Whitespace inside the base alphabet (a plain space) still counts as whitespace for
# the last check, so "allow_white_spaces=False" rejects it.
